"""Lifecycle transition endpoints: POST /v1/documents/{document_id}/<action>."""

from uuid import UUID

import falcon.asgi

from doccontrol.application.use_cases.lifecycle.transition import TransitionDocumentUseCase
from doccontrol.interfaces.api.resources.errors import json_body, require_user_id
from doccontrol.interfaces.api.resources.serializers import document_to_dict


class TransitionResource:
    """One route per action. The optional JSON body carries comment (reason for reject)."""

    def __init__(self, transition: TransitionDocumentUseCase, comment_field: str = "comment") -> None:
        self._transition = transition
        self._comment_field = comment_field

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: UUID
    ) -> None:
        user_id = require_user_id(req)
        body = await json_body(req)
        comment = body.get(self._comment_field)
        result = await self._transition.execute(
            user_id, document_id, str(comment) if comment is not None else None
        )
        resp.media = document_to_dict(result)
