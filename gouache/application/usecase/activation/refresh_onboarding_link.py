"""Refresh onboarding link use case."""

from pydantic import BaseModel

from gouache.application.usecase.activation.view import (
    ActivationStateView,
    account_view,
)
from gouache.application.usecase.base import BaseUseCase
from gouache.domain.service import ActivationReconciler
from gouache.domain.value import IdentityId


class RefreshOnboardingLinkRequest(BaseModel):
    """Refresh onboarding link request."""

    identity_id: str


class RefreshOnboardingLinkUseCase(BaseUseCase):
    """Use case for getting a fresh processor onboarding link.

    Processor links expire quickly; the refresh URL sends the seller back
    here to get a new one.
    """

    def __init__(self, activation_reconciler: ActivationReconciler) -> None:
        self.activation_reconciler = activation_reconciler

    async def execute(
        self, request: RefreshOnboardingLinkRequest
    ) -> ActivationStateView:
        account = await self.activation_reconciler.refresh_onboarding_link(
            IdentityId(request.identity_id)
        )
        return account_view(account)
