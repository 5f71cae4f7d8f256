"""Result variants for the activation state machines.

Expected terminal outcomes are returned as values so callers must handle
each case explicitly. Exceptions are reserved for unexpected failures.
"""

from enum import Enum


class ValidationResult(str, Enum):
    """Classification of an invite at a point in time."""

    READY = "ready"
    REVOKED = "revoked"
    EXPIRED = "expired"
    ALREADY_REDEEMED = "already_redeemed"


class RedeemResult(str, Enum):
    """Outcome of the conditional redemption write."""

    OK = "ok"
    CONFLICT = "conflict"


class RevokeResult(str, Enum):
    """Outcome of the conditional revocation write."""

    OK = "ok"
    CONFLICT = "conflict"


class FinalizeOutcome(str, Enum):
    """Outcome of finalizing an onboarding session.

    ALREADY_COMPLETED covers both a completed session being re-entered and
    a redemption conflict where the invite was redeemed by the same identity.
    INVALID means the invite became revoked or expired mid-session.
    """

    ACTIVATED = "activated"
    ALREADY_COMPLETED = "already_completed"
    CONFLICT = "conflict"
    INVALID = "invalid"
    FAILED = "failed"


class WatchOutcome(str, Enum):
    """How a watch loop over an activation account ended."""

    ACTIVE = "active"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
