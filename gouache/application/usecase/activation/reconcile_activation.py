"""Reconcile activation use case."""

from pydantic import BaseModel

from gouache.application.usecase.activation.view import (
    ActivationStateView,
    account_view,
)
from gouache.application.usecase.base import BaseUseCase
from gouache.domain.error import NotFoundError
from gouache.domain.service import ActivationReconciler
from gouache.domain.value import IdentityId


class ReconcileActivationRequest(BaseModel):
    """Reconcile activation request."""

    identity_id: str


class ReconcileActivationUseCase(BaseUseCase):
    """Use case for one reconcile pass against the processor."""

    def __init__(self, activation_reconciler: ActivationReconciler) -> None:
        """Initialize reconcile activation use case.

        Args:
            activation_reconciler: Activation reconciler domain service
        """
        self.activation_reconciler = activation_reconciler

    async def execute(
        self, request: ReconcileActivationRequest
    ) -> ActivationStateView:
        """Reconcile the identity's account once.

        Raises:
            NotFoundError: If the identity has no account
            OracleUnavailableError: If the processor could not be reached
        """
        identity_id = IdentityId(request.identity_id)
        state = await self.activation_reconciler.get_state(identity_id)
        if state.account_id is None:
            raise NotFoundError("ActivationAccount", identity_id)

        account = await self.activation_reconciler.reconcile(state.account_id)
        return account_view(account)
