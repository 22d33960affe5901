"""Reject document use case."""

from doccontrol.application.use_cases.lifecycle.transition import TransitionDocumentUseCase
from doccontrol.domain.exceptions import ValidationError
from doccontrol.domain.lifecycle import LifecycleAction


class RejectDocumentUseCase(TransitionDocumentUseCase):
    """Reject a document pending approval. A reason is mandatory."""

    action = LifecycleAction.REJECT

    def _validate_comment(self, comment: str | None) -> str | None:
        reason = (comment or "").strip()
        if not reason:
            raise ValidationError("A rejection reason is required")
        return reason
