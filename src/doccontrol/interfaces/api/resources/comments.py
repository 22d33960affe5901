"""Document comment endpoints."""

from uuid import UUID

import falcon
import falcon.asgi

from doccontrol.application.use_cases.comment.add_comment import AddCommentUseCase
from doccontrol.application.use_cases.comment.list_comments import ListCommentsUseCase
from doccontrol.interfaces.api.resources.errors import json_body, require_user_id
from doccontrol.interfaces.api.resources.serializers import comment_to_dict


class CommentsResource:
    """GET/POST /v1/documents/{document_id}/comments."""

    def __init__(self, list_comments: ListCommentsUseCase, add_comment: AddCommentUseCase) -> None:
        self._list = list_comments
        self._add = add_comment

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: UUID
    ) -> None:
        comments = await self._list.execute(require_user_id(req), document_id)
        resp.media = {"items": [comment_to_dict(c) for c in comments]}

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: UUID
    ) -> None:
        user_id = require_user_id(req)
        body = await json_body(req)
        comment = await self._add.execute(
            user_id,
            document_id,
            str(body.get("content") or ""),
            author_name=req.context.user.display_name,
        )
        resp.media = comment_to_dict(comment)
        resp.status = falcon.HTTP_201
