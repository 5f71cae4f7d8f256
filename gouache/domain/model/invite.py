"""Artist invite entity.

Invites grant one email address the right to complete artist onboarding.
They are issued by the Gouache team and redeemed exactly once.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, model_validator

from gouache.domain.model.common import DomainModel
from gouache.domain.value import Email, IdentityId, InviteStatus, InviteToken


class Invite(DomainModel):
    """Artist invite entity.

    Business rules:
    - The token is the invite's id and lookup key
    - Status only moves out of PENDING, never back
    - A redeemed invite always records when and by whom
    """

    token: InviteToken
    email: Email  # Binding identity, stored lowercased
    name: Optional[str] = None  # Optional display name hint for the invitee
    message: Optional[str] = None
    status: InviteStatus = InviteStatus.PENDING
    issued_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    issued_by: Optional[IdentityId] = None
    expires_at: Optional[datetime] = None
    last_accessed_at: Optional[datetime] = None
    redeemed_at: Optional[datetime] = None
    redeemed_by: Optional[IdentityId] = None
    revoked_at: Optional[datetime] = None

    @model_validator(mode="after")
    def check_redemption_fields(self) -> "Invite":
        """Redeemed status and redemption fields go together."""
        redeemed_fields_set = (
            self.redeemed_at is not None and self.redeemed_by is not None
        )
        if (self.status == InviteStatus.REDEEMED) != redeemed_fields_set:
            raise ValueError(
                "redeemed_at and redeemed_by must be set exactly when status "
                "is redeemed"
            )
        return self

    @property
    def is_pending(self) -> bool:
        return self.status == InviteStatus.PENDING
