"""Submit for approval use case."""

from doccontrol.application.use_cases.lifecycle.transition import TransitionDocumentUseCase
from doccontrol.domain.lifecycle import LifecycleAction


class SubmitForApprovalUseCase(TransitionDocumentUseCase):
    """Submit a draft for approval."""

    action = LifecycleAction.SUBMIT
