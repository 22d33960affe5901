"""Access grant endpoints."""

from uuid import UUID

import falcon
import falcon.asgi

from doccontrol.application.use_cases.access.grant_access import GrantAccessUseCase
from doccontrol.application.use_cases.access.list_access import ListAccessUseCase
from doccontrol.application.use_cases.access.revoke_access import RevokeAccessUseCase
from doccontrol.domain.exceptions import ValidationError
from doccontrol.interfaces.api.resources.errors import json_body, require_user_id
from doccontrol.interfaces.api.resources.serializers import access_to_dict


class AccessResource:
    """GET/POST /v1/documents/{document_id}/access - list and grant."""

    def __init__(self, list_access: ListAccessUseCase, grant_access: GrantAccessUseCase) -> None:
        self._list = list_access
        self._grant = grant_access

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: UUID
    ) -> None:
        grants = await self._list.execute(require_user_id(req), document_id)
        resp.media = {"items": [access_to_dict(a) for a in grants]}

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: UUID
    ) -> None:
        user_id = require_user_id(req)
        body = await json_body(req)
        try:
            grantee = body["user_id"]
            level = body["permission_level"]
        except KeyError as e:
            raise ValidationError(f"Missing required field: {e}") from None
        access = await self._grant.execute(user_id, document_id, str(grantee), str(level))
        resp.media = access_to_dict(access)
        resp.status = falcon.HTTP_201


class AccessGrantResource:
    """DELETE /v1/documents/{document_id}/access/{user_id} - revoke."""

    def __init__(self, revoke_access: RevokeAccessUseCase) -> None:
        self._revoke = revoke_access

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        document_id: UUID,
        user_id: str,
    ) -> None:
        await self._revoke.execute(require_user_id(req), document_id, user_id)
        resp.status = falcon.HTTP_204
