"""Document API resources."""

from uuid import UUID

import falcon
import falcon.asgi

from doccontrol.application.dto.document_dto import DocumentMetadataPatch, DocumentUploadInput
from doccontrol.application.ports.repositories import DocumentFilters
from doccontrol.application.use_cases.document.delete_document import DeleteDocumentUseCase
from doccontrol.application.use_cases.document.edit_metadata import EditMetadataUseCase
from doccontrol.application.use_cases.document.get_document import GetDocumentUseCase
from doccontrol.application.use_cases.document.list_documents import ListDocumentsUseCase
from doccontrol.application.use_cases.document.upload_document import UploadDocumentUseCase
from doccontrol.domain.exceptions import ValidationError
from doccontrol.domain.value_objects import DocumentStatus
from doccontrol.interfaces.api.resources.errors import json_body, require_user_id
from doccontrol.interfaces.api.resources.multipart import read_form
from doccontrol.interfaces.api.resources.serializers import document_to_dict


def _split_tags(values: list[str]) -> list[str]:
    """Tags may be sent repeated, comma separated, or both."""
    return [t for v in values for t in v.split(",")]


class DocumentsResource:
    """GET /v1/documents - list; POST /v1/documents - upload (multipart)."""

    def __init__(
        self,
        list_documents: ListDocumentsUseCase,
        upload_document: UploadDocumentUseCase,
    ) -> None:
        self._list = list_documents
        self._upload = upload_document

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Filters: category, status, tag, created_by (repeatable), q, expiring_within_days."""
        user_id = require_user_id(req)
        filters = DocumentFilters(
            categories=req.get_param_as_list("category") or [],
            statuses=[DocumentStatus.parse(s) for s in req.get_param_as_list("status") or []],
            tags=_split_tags(req.get_param_as_list("tag") or []),
            created_by=req.get_param_as_list("created_by") or [],
            search_term=req.get_param("q") or None,
        )
        documents, next_cursor = await self._list.execute(
            user_id,
            filters,
            expiring_within_days=req.get_param_as_int("expiring_within_days", min_value=0),
            cursor=req.get_param("cursor"),
            limit=req.get_param_as_int("limit", min_value=1, default=20),
        )
        resp.media = {
            "items": [document_to_dict(d) for d in documents],
            "next_cursor": next_cursor,
        }

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Multipart fields: title, category, description, tags; file part: file."""
        user_id = require_user_id(req)
        form = await read_form(req)
        if form.file is None:
            raise ValidationError("A file is required")
        result = await self._upload.execute(
            user_id,
            DocumentUploadInput(
                title=form.get("title", ""),
                category=form.get("category", ""),
                description=form.get("description") or None,
                tags=_split_tags(form.get_list("tags")),
                file_name=form.file.file_name,
                file_type=form.file.content_type,
                content=form.file.data,
            ),
        )
        resp.media = document_to_dict(result)
        resp.status = falcon.HTTP_201


class DocumentResource:
    """GET / PATCH / DELETE /v1/documents/{document_id}."""

    def __init__(
        self,
        get_document: GetDocumentUseCase,
        edit_metadata: EditMetadataUseCase,
        delete_document: DeleteDocumentUseCase,
    ) -> None:
        self._get = get_document
        self._edit = edit_metadata
        self._delete = delete_document

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: UUID
    ) -> None:
        result = await self._get.execute(require_user_id(req), document_id)
        resp.media = document_to_dict(result)

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: UUID
    ) -> None:
        user_id = require_user_id(req)
        body = await json_body(req)
        tags = body.get("tags")
        if tags is not None and not isinstance(tags, list):
            raise ValidationError("tags must be a list of strings")
        result = await self._edit.execute(
            user_id,
            document_id,
            DocumentMetadataPatch(
                title=body.get("title"),
                description=body.get("description"),
                category=body.get("category"),
                tags=tags,
            ),
        )
        resp.media = document_to_dict(result)

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: UUID
    ) -> None:
        await self._delete.execute(require_user_id(req), document_id)
        resp.status = falcon.HTTP_204
