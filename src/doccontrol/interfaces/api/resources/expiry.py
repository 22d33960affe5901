"""Expiry settings endpoint."""

from datetime import datetime
from uuid import UUID

import falcon.asgi

from doccontrol.application.dto.expiry_dto import ExpirySettingsInput
from doccontrol.application.use_cases.expiry.set_expiry_settings import SetExpirySettingsUseCase
from doccontrol.domain.exceptions import ValidationError
from doccontrol.interfaces.api.resources.errors import json_body, require_user_id
from doccontrol.interfaces.api.resources.serializers import document_to_dict


def _parse_expiry_date(value: object) -> datetime | None:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError("expiry_date must be an ISO 8601 date or datetime")
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"Invalid expiry_date: {value!r}") from None


class ExpiryResource:
    """PUT /v1/documents/{document_id}/expiry."""

    def __init__(self, set_expiry_settings: SetExpirySettingsUseCase) -> None:
        self._set = set_expiry_settings

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: UUID
    ) -> None:
        """Body: expiry_date, notification_days (null for the default schedule), notifications_enabled."""
        user_id = require_user_id(req)
        body = await json_body(req)
        days = body.get("notification_days")
        if days is not None and not isinstance(days, list):
            raise ValidationError("notification_days must be a list of integers")
        result = await self._set.execute(
            user_id,
            document_id,
            ExpirySettingsInput(
                expiry_date=_parse_expiry_date(body.get("expiry_date")),
                notification_days=days,
                notifications_enabled=bool(body.get("notifications_enabled", True)),
            ),
        )
        resp.media = document_to_dict(result)
