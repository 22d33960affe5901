"""Activity log endpoint."""

from uuid import UUID

import falcon.asgi

from doccontrol.application.use_cases.activity.list_activities import ListActivitiesUseCase
from doccontrol.interfaces.api.resources.errors import require_user_id
from doccontrol.interfaces.api.resources.serializers import activity_to_dict


class ActivitiesResource:
    """GET /v1/documents/{document_id}/activities."""

    def __init__(self, list_activities: ListActivitiesUseCase) -> None:
        self._list = list_activities

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: UUID
    ) -> None:
        activities = await self._list.execute(require_user_id(req), document_id)
        resp.media = {"items": [activity_to_dict(a) for a in activities]}
