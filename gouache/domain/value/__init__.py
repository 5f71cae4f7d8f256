"""Domain value objects for Gouache."""

from gouache.domain.value.identifiers import AccountId, IdentityId, SessionId
from gouache.domain.value.results import (
    FinalizeOutcome,
    RedeemResult,
    RevokeResult,
    ValidationResult,
    WatchOutcome,
)
from gouache.domain.value.types import (
    ActivationStatus,
    Email,
    Handle,
    Identity,
    InviteStatus,
    InviteToken,
    OnboardingStep,
    SessionState,
)

__all__ = [
    # Identifiers
    "AccountId",
    "IdentityId",
    "SessionId",
    # Types
    "ActivationStatus",
    "Email",
    "Handle",
    "Identity",
    "InviteStatus",
    "InviteToken",
    "OnboardingStep",
    "SessionState",
    # Results
    "FinalizeOutcome",
    "RedeemResult",
    "RevokeResult",
    "ValidationResult",
    "WatchOutcome",
]
