"""Falcon ASGI application."""

from dataclasses import dataclass

import falcon.asgi
from falcon.asgi import App

from doccontrol.domain.exceptions import DocControlError
from doccontrol.interfaces.api.resources.access import AccessGrantResource, AccessResource
from doccontrol.interfaces.api.resources.activities import ActivitiesResource
from doccontrol.interfaces.api.resources.comments import CommentsResource
from doccontrol.interfaces.api.resources.documents import DocumentResource, DocumentsResource
from doccontrol.interfaces.api.resources.errors import (
    handle_doccontrol_error,
    handle_unexpected_error,
)
from doccontrol.interfaces.api.resources.expiry import ExpiryResource
from doccontrol.interfaces.api.resources.health import HealthResource
from doccontrol.interfaces.api.resources.lifecycle import TransitionResource
from doccontrol.interfaces.api.resources.locking import LockResource
from doccontrol.interfaces.api.resources.versions import VersionResource, VersionsResource


@dataclass
class ApiResources:
    """Every resource the API routes to. transitions maps action name to its resource."""

    health: HealthResource
    documents: DocumentsResource
    document: DocumentResource
    transitions: dict[str, TransitionResource]
    lock: LockResource
    versions: VersionsResource
    version: VersionResource
    expiry: ExpiryResource
    access: AccessResource
    access_grant: AccessGrantResource
    activities: ActivitiesResource
    comments: CommentsResource


def create_app(resources: ApiResources, middleware: list | None = None) -> App:
    """Create Falcon ASGI app with routes and error handlers."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_error_handler(DocControlError, handle_doccontrol_error)

    doc = "/v1/documents/{document_id:uuid}"
    app.add_route("/v1/health", resources.health)
    app.add_route("/v1/health/ready", resources.health, suffix="ready")
    app.add_route("/v1/documents", resources.documents)
    app.add_route(doc, resources.document)
    for action, resource in resources.transitions.items():
        app.add_route(f"{doc}/{action}", resource)
    app.add_route(f"{doc}/checkout", resources.lock, suffix="checkout")
    app.add_route(f"{doc}/checkin", resources.lock, suffix="checkin")
    app.add_route(f"{doc}/lock", resources.lock, suffix="lock")
    app.add_route(f"{doc}/versions", resources.versions)
    app.add_route(
        f"{doc}/versions/{{version_number:int(min=1)}}/revert", resources.version, suffix="revert"
    )
    app.add_route(
        f"{doc}/versions/{{version_number:int(min=1)}}/download",
        resources.version,
        suffix="download",
    )
    app.add_route(f"{doc}/expiry", resources.expiry)
    app.add_route(f"{doc}/access", resources.access)
    app.add_route(f"{doc}/access/{{user_id}}", resources.access_grant)
    app.add_route(f"{doc}/activities", resources.activities)
    app.add_route(f"{doc}/comments", resources.comments)
    return app
