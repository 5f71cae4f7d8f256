"""Payment account activation entity.

The local record shadows the payment processor's view of a connected
account. It only moves forward, and only on a status the processor has
confirmed.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, model_validator

from gouache.domain.model.common import DomainModel
from gouache.domain.value import AccountId, ActivationStatus, IdentityId

# Raw processor statuses that explicitly end an activation
FAILED_RAW_STATUSES = frozenset({"failed", "rejected"})

ALLOWED_TRANSITIONS: dict[ActivationStatus, set[ActivationStatus]] = {
    ActivationStatus.UNCONNECTED: {ActivationStatus.CREATED},
    ActivationStatus.CREATED: {
        ActivationStatus.CREATED,
        ActivationStatus.INCOMPLETE,
        ActivationStatus.PENDING,
        ActivationStatus.ACTIVE,
        ActivationStatus.FAILED,
    },
    ActivationStatus.INCOMPLETE: {
        ActivationStatus.INCOMPLETE,
        ActivationStatus.PENDING,
        ActivationStatus.ACTIVE,
        ActivationStatus.FAILED,
    },
    ActivationStatus.PENDING: {
        ActivationStatus.PENDING,
        ActivationStatus.ACTIVE,
        ActivationStatus.FAILED,
    },
    ActivationStatus.ACTIVE: set(),
    ActivationStatus.FAILED: set(),
}


def can_transition(old: ActivationStatus, new: ActivationStatus) -> bool:
    return new in ALLOWED_TRANSITIONS.get(old, set())


def map_observed_status(
    charges_enabled: bool,
    payouts_enabled: bool,
    details_submitted: bool,
    raw_status: str,
) -> ActivationStatus:
    """Map what the processor reports onto the local status enum.

    ACTIVE needs both capability flags; a processor-side "complete" alone
    is not enough. Both flags confirmed wins over a failure signal.
    """
    if charges_enabled and payouts_enabled:
        return ActivationStatus.ACTIVE
    if raw_status.lower() in FAILED_RAW_STATUSES:
        return ActivationStatus.FAILED
    if details_submitted or raw_status.lower() == "pending":
        return ActivationStatus.PENDING
    return ActivationStatus.INCOMPLETE


class ActivationAccount(DomainModel):
    """An identity's binding to a payment processor account.

    Business rules:
    - One account per identity; account_id never changes once assigned
    - status is ACTIVE exactly when charges and payouts are both enabled
    - ACTIVE and FAILED are terminal
    """

    identity_id: IdentityId
    account_id: AccountId
    status: ActivationStatus = ActivationStatus.CREATED
    charges_enabled: bool = False
    payouts_enabled: bool = False
    details_submitted: bool = False
    onboarding_url: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @model_validator(mode="after")
    def check_active_flags(self) -> "ActivationAccount":
        """ACTIVE and both capability flags go together."""
        both_enabled = self.charges_enabled and self.payouts_enabled
        if (self.status == ActivationStatus.ACTIVE) != both_enabled:
            raise ValueError(
                "status must be active exactly when charges and payouts are enabled"
            )
        return self

    def observe(
        self,
        charges_enabled: bool,
        payouts_enabled: bool,
        details_submitted: bool,
        raw_status: str,
    ) -> "ActivationAccount":
        """Apply a processor observation and return the resulting record.

        Terminal records are returned unchanged. A backward move (for example
        pending to incomplete) keeps the current status but records the
        latest flags.
        """
        if self.status.is_terminal:
            return self

        observed = map_observed_status(
            charges_enabled, payouts_enabled, details_submitted, raw_status
        )
        status = observed if can_transition(self.status, observed) else self.status

        return self.model_copy(
            update={
                "status": status,
                "charges_enabled": charges_enabled,
                "payouts_enabled": payouts_enabled,
                "details_submitted": details_submitted,
            }
        )

    def same_state_as(self, other: "ActivationAccount") -> bool:
        """Compare everything the processor can change."""
        return (
            self.status == other.status
            and self.charges_enabled == other.charges_enabled
            and self.payouts_enabled == other.payouts_enabled
            and self.details_submitted == other.details_submitted
            and self.onboarding_url == other.onboarding_url
        )
