"""Approve document use case."""

from doccontrol.application.use_cases.lifecycle.transition import TransitionDocumentUseCase
from doccontrol.domain.lifecycle import LifecycleAction


class ApproveDocumentUseCase(TransitionDocumentUseCase):
    """Approve a document pending approval. Stale approvals fail, they are never retried."""

    action = LifecycleAction.APPROVE
