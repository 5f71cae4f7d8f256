"""Activation read model shared by the activation use cases."""

from datetime import datetime

from pydantic import BaseModel

from gouache.domain.model import ActivationAccount
from gouache.domain.service import ActivationState
from gouache.domain.value import ActivationStatus


class ActivationStateView(BaseModel):
    """Payment activation as rendered on the payments settings tab."""

    status: ActivationStatus
    account_id: str | None = None
    charges_enabled: bool = False
    payouts_enabled: bool = False
    details_submitted: bool = False
    onboarding_url: str | None = None
    can_transact: bool = False
    updated_at: datetime | None = None


def state_view(state: ActivationState) -> ActivationStateView:
    """Build the view of an activation read model."""
    return ActivationStateView(
        status=state.status,
        account_id=state.account_id,
        charges_enabled=state.charges_enabled,
        payouts_enabled=state.payouts_enabled,
        details_submitted=state.details_submitted,
        onboarding_url=state.onboarding_url,
        can_transact=state.status == ActivationStatus.ACTIVE,
        updated_at=state.updated_at,
    )


def account_view(account: ActivationAccount) -> ActivationStateView:
    """Build the view of a stored account."""
    return ActivationStateView(
        status=account.status,
        account_id=account.account_id,
        charges_enabled=account.charges_enabled,
        payouts_enabled=account.payouts_enabled,
        details_submitted=account.details_submitted,
        onboarding_url=account.onboarding_url,
        can_transact=account.status == ActivationStatus.ACTIVE,
        updated_at=account.updated_at,
    )
