"""Reopen document use case."""

from doccontrol.application.use_cases.lifecycle.transition import TransitionDocumentUseCase
from doccontrol.domain.lifecycle import LifecycleAction


class ReopenDocumentUseCase(TransitionDocumentUseCase):
    """Return a rejected document to draft so it can be resubmitted."""

    action = LifecycleAction.REOPEN
