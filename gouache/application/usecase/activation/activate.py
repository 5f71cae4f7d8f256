"""Activate payments use case."""

from pydantic import BaseModel

from gouache.application.usecase.activation.view import (
    ActivationStateView,
    account_view,
)
from gouache.application.usecase.base import BaseUseCase
from gouache.domain.service import ActivationReconciler
from gouache.domain.value import Identity


class ActivateRequest(BaseModel):
    """Activate payments request."""

    identity: Identity


class ActivateUseCase(BaseUseCase):
    """Use case for connecting a payment processor account."""

    def __init__(self, activation_reconciler: ActivationReconciler) -> None:
        """Initialize activate use case.

        Args:
            activation_reconciler: Activation reconciler domain service
        """
        self.activation_reconciler = activation_reconciler

    async def execute(self, request: ActivateRequest) -> ActivationStateView:
        """Create the account, or return the existing one.

        Raises:
            OracleUnavailableError: If the processor could not create the account
        """
        account = await self.activation_reconciler.activate(request.identity)
        return account_view(account)
