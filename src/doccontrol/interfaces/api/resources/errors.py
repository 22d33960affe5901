"""Mapping of domain errors to HTTP responses."""

import logging

import falcon
import falcon.asgi

from doccontrol.domain.exceptions import (
    AlreadyLocked,
    DocControlError,
    Locked,
    NotFound,
    NotLockedByCaller,
    PermissionDenied,
    PreconditionFailed,
    StorageUnavailable,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Checked in order; subclasses before their bases.
_STATUS_BY_ERROR: list[tuple[type[DocControlError], str]] = [
    (NotFound, falcon.HTTP_404),
    (Locked, falcon.HTTP_423),
    (AlreadyLocked, falcon.HTTP_423),
    (NotLockedByCaller, falcon.HTTP_409),
    (PreconditionFailed, falcon.HTTP_409),
    (PermissionDenied, falcon.HTTP_403),
    (ValidationError, falcon.HTTP_400),
    (StorageUnavailable, falcon.HTTP_503),
]


def status_for(error: DocControlError) -> str:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return falcon.HTTP_400


async def handle_doccontrol_error(
    req: falcon.asgi.Request,
    resp: falcon.asgi.Response,
    ex: DocControlError,
    params: dict,
) -> None:
    """Render the failed guard with the document's observed status and lock holder."""
    resp.status = status_for(ex)
    resp.media = ex.to_dict()
    logger.debug("%s %s failed on %s guard: %s", req.method, req.path, ex.guard, ex.message)


async def handle_unexpected_error(
    req: falcon.asgi.Request,
    resp: falcon.asgi.Response,
    ex: Exception,
    params: dict,
) -> None:
    logger.error("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"error": "Internal server error", "guard": "internal"}


def require_user_id(req: falcon.asgi.Request) -> str:
    """Caller id set by AuthMiddleware; 401 when the request is unauthenticated."""
    user = getattr(req.context, "user", None)
    if not user:
        raise falcon.HTTPUnauthorized(title="Unauthorized")
    return user.user_id


async def json_body(req: falcon.asgi.Request) -> dict:
    body = await req.get_media(default_when_empty={})
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body
