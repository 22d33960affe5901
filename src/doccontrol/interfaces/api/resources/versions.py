"""Version ledger endpoints."""

from uuid import UUID

import falcon.asgi

from doccontrol.application.use_cases.version.get_download_url import GetDownloadUrlUseCase
from doccontrol.application.use_cases.version.list_versions import ListVersionsUseCase
from doccontrol.application.use_cases.version.revert_to_version import RevertToVersionUseCase
from doccontrol.interfaces.api.resources.errors import json_body, require_user_id
from doccontrol.interfaces.api.resources.serializers import document_to_dict, version_to_dict


class VersionsResource:
    """GET /v1/documents/{document_id}/versions."""

    def __init__(self, list_versions: ListVersionsUseCase) -> None:
        self._list = list_versions

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: UUID
    ) -> None:
        versions = await self._list.execute(require_user_id(req), document_id)
        resp.media = {"items": [version_to_dict(v) for v in versions]}


class VersionResource:
    """POST .../versions/{n}/revert and GET .../versions/{n}/download."""

    def __init__(
        self,
        revert_to_version: RevertToVersionUseCase,
        get_download_url: GetDownloadUrlUseCase,
    ) -> None:
        self._revert = revert_to_version
        self._download = get_download_url

    async def on_post_revert(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        document_id: UUID,
        version_number: int,
    ) -> None:
        user_id = require_user_id(req)
        body = await json_body(req)
        result = await self._revert.execute(
            user_id, document_id, version_number, body.get("change_notes")
        )
        resp.media = document_to_dict(result)

    async def on_get_download(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        document_id: UUID,
        version_number: int,
    ) -> None:
        url = await self._download.execute(require_user_id(req), document_id, version_number)
        resp.media = {"url": url, "version_number": version_number}
