"""Publish document use case."""

from doccontrol.application.use_cases.lifecycle.transition import TransitionDocumentUseCase
from doccontrol.domain.lifecycle import LifecycleAction


class PublishDocumentUseCase(TransitionDocumentUseCase):
    """Publish an approved document."""

    action = LifecycleAction.PUBLISH
