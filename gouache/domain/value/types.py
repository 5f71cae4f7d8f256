"""Domain value objects for Gouache.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from gouache.domain.value.common import RootValueObject, ValueObject
from gouache.domain.value.identifiers import IdentityId


class InviteStatus(str, Enum):
    """Stored status of an artist invite.

    PENDING is the only non-terminal status.
    """

    PENDING = "pending"
    REDEEMED = "redeemed"
    REVOKED = "revoked"
    EXPIRED = "expired"


class ActivationStatus(str, Enum):
    """Local status of a payment account activation.

    UNCONNECTED is only ever reported by the read model; stored
    accounts start at CREATED.
    """

    UNCONNECTED = "unconnected"
    CREATED = "created"
    INCOMPLETE = "incomplete"
    PENDING = "pending"
    ACTIVE = "active"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ActivationStatus.ACTIVE, ActivationStatus.FAILED)


class OnboardingStep(str, Enum):
    """Ordered steps of artist onboarding."""

    IDENTITY_BASICS = "identity-basics"
    PRACTICE_DETAILS = "practice-details"
    REVIEW = "review"

    @classmethod
    def ordered(cls) -> list["OnboardingStep"]:
        return list(cls)

    @property
    def index(self) -> int:
        return OnboardingStep.ordered().index(self)


class SessionState(str, Enum):
    """Lifecycle of an onboarding session.

    A session that does not exist yet is "not started"; it is never stored.
    """

    READY = "ready"
    MISMATCHED = "mismatched"
    COMPLETED = "completed"


class InviteToken(RootValueObject[str]):
    """URL-safe invite token. Doubles as the invite's id."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is not empty."""
        v = v.strip()
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Token must be 1-255 characters")
        return v

    @property
    def masked(self) -> str:
        """Token prefix safe to put in logs."""
        return self.root[:8] + "..."


class Handle(RootValueObject[str]):
    """Public artist handle.

    2-30 characters of letters, digits, underscore, dot or hyphen.
    A leading "@" is dropped.
    """

    @field_validator("root")
    @classmethod
    def validate_handle_format(cls, v: str) -> str:
        """Validate handle format."""
        v = v.strip().lstrip("@")
        if not re.match(r"^[A-Za-z0-9_.-]{2,30}$", v):
            raise ValueError(
                "Handle must be 2-30 characters of letters, digits, '_', '.' or '-'"
            )
        return v


class Email(RootValueObject[str]):
    """Email address, compared case-insensitively."""

    @field_validator("root")
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        """Validate basic email shape."""
        v = v.strip()
        if not re.match(r"^[^\s@]+@[^\s@]+\.[^\s@]+$", v):
            raise ValueError("Invalid email format")
        return v

    def matches(self, other: "Email | str") -> bool:
        """Case-insensitive comparison."""
        other_value = other.root if isinstance(other, Email) else other
        return self.root.casefold() == other_value.strip().casefold()


class Identity(ValueObject):
    """Signed-in identity as reported by the identity provider."""

    id: IdentityId
    email: Email
    display_name: str | None = None
