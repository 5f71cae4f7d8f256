"""Get activation state use case."""

from pydantic import BaseModel

from gouache.application.usecase.activation.view import (
    ActivationStateView,
    state_view,
)
from gouache.application.usecase.base import BaseUseCase
from gouache.domain.service import ActivationReconciler
from gouache.domain.value import IdentityId


class GetActivationStateRequest(BaseModel):
    """Get activation state request."""

    identity_id: str


class GetActivationStateUseCase(BaseUseCase):
    """Use case for reading the local activation state.

    Does not call the processor; use reconcile for a fresh read.
    """

    def __init__(self, activation_reconciler: ActivationReconciler) -> None:
        self.activation_reconciler = activation_reconciler

    async def execute(self, request: GetActivationStateRequest) -> ActivationStateView:
        state = await self.activation_reconciler.get_state(
            IdentityId(request.identity_id)
        )
        return state_view(state)
