"""Checkout lock endpoints."""

from uuid import UUID

import falcon.asgi

from doccontrol.application.dto.version_dto import CheckinInput, VersionDetails
from doccontrol.application.use_cases.locking.checkin_document import CheckinDocumentUseCase
from doccontrol.application.use_cases.locking.checkout_document import CheckoutDocumentUseCase
from doccontrol.application.use_cases.locking.force_unlock import ForceUnlockUseCase
from doccontrol.domain.exceptions import ValidationError
from doccontrol.interfaces.api.resources.errors import json_body, require_user_id
from doccontrol.interfaces.api.resources.multipart import read_form
from doccontrol.interfaces.api.resources.serializers import document_to_dict

_TRUE = {"1", "true", "yes", "on"}


class LockResource:
    """POST .../checkout, POST .../checkin, DELETE .../lock."""

    def __init__(
        self,
        checkout: CheckoutDocumentUseCase,
        checkin: CheckinDocumentUseCase,
        force_unlock: ForceUnlockUseCase,
    ) -> None:
        self._checkout = checkout
        self._checkin = checkin
        self._force_unlock = force_unlock

    async def on_post_checkout(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: UUID
    ) -> None:
        result = await self._checkout.execute(require_user_id(req), document_id)
        resp.media = document_to_dict(result)

    async def on_post_checkin(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: UUID
    ) -> None:
        """Multipart with a file part stores a new version; JSON or no body only releases the lock."""
        user_id = require_user_id(req)
        if "multipart/form-data" in (req.content_type or ""):
            input_data = await self._checkin_from_form(req)
        else:
            body = await json_body(req)
            if body.get("create_new_version"):
                raise ValidationError("New versions must be uploaded as multipart/form-data")
            input_data = CheckinInput()
        result = await self._checkin.execute(user_id, document_id, input_data)
        resp.media = document_to_dict(result)

    async def _checkin_from_form(self, req: falcon.asgi.Request) -> CheckinInput:
        form = await read_form(req)
        create = (form.get("create_new_version", "true") or "").lower() in _TRUE
        if not create:
            return CheckinInput()
        if form.file is None:
            raise ValidationError("A file is required to create a new version")
        return CheckinInput(
            create_new_version=True,
            version_details=VersionDetails(
                content=form.file.data,
                file_name=form.file.file_name,
                file_type=form.file.content_type,
                change_notes=form.get("change_notes") or None,
            ),
        )

    async def on_delete_lock(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: UUID
    ) -> None:
        result = await self._force_unlock.execute(require_user_id(req), document_id)
        resp.media = document_to_dict(result)
