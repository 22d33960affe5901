"""Archive document use case."""

from doccontrol.application.use_cases.lifecycle.transition import TransitionDocumentUseCase
from doccontrol.domain.lifecycle import LifecycleAction


class ArchiveDocumentUseCase(TransitionDocumentUseCase):
    """Archive a draft, approved or published document."""

    action = LifecycleAction.ARCHIVE
