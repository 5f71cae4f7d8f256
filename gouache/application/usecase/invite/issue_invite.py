"""Issue invite use case."""

from datetime import datetime, timedelta

import logfire
from pydantic import BaseModel, Field

from gouache.application.usecase.base import BaseUseCase
from gouache.config import Settings
from gouache.domain.error import NotAuthorizedError
from gouache.domain.service import InviteRegistry
from gouache.domain.value import Email, Identity, InviteStatus


class IssueInviteRequest(BaseModel):
    """Request to issue an artist invite."""

    issuer: Identity
    email: str
    name: str | None = Field(default=None, max_length=255)
    message: str | None = Field(default=None, max_length=2000)


class IssueInviteResponse(BaseModel):
    """Issued invite."""

    token: str
    invite_url: str  # Full onboarding URL with token
    email: str
    status: InviteStatus
    issued_at: datetime
    expires_at: datetime | None


class IssueInviteUseCase(BaseUseCase):
    """Use case for issuing an artist invite from the admin console."""

    def __init__(self, invite_registry: InviteRegistry, settings: Settings) -> None:
        """Initialize use case.

        Args:
            invite_registry: Invite registry domain service
            settings: Application settings
        """
        self.invite_registry = invite_registry
        self.settings = settings

    async def execute(self, request: IssueInviteRequest) -> IssueInviteResponse:
        """Issue an invite.

        Raises:
            NotAuthorizedError: If the issuer is not an admin
            ValueError: If the email is malformed
        """
        ensure_admin(request.issuer, self.settings, "issue artist invites")

        expiry_days = self.settings.invitations.expiry_days
        invite = await self.invite_registry.issue(
            email=Email(root=request.email),
            issued_by=request.issuer.id,
            name=request.name,
            message=request.message,
            expires_in=timedelta(days=expiry_days) if expiry_days else None,
        )

        return IssueInviteResponse(
            token=invite.token.root,
            invite_url=invite_url(self.settings, invite.token.root),
            email=invite.email.root,
            status=invite.status,
            issued_at=invite.issued_at,
            expires_at=invite.expires_at,
        )


def invite_url(settings: Settings, token: str) -> str:
    """Frontend onboarding URL for an invite token."""
    return f"{settings.api.frontend_url}/onboarding/artist/{token}"


def ensure_admin(identity: Identity, settings: Settings, action: str) -> None:
    """Raise NotAuthorizedError unless the identity's email is an admin email."""
    if not any(identity.email.matches(e) for e in settings.invitations.admin_emails):
        logfire.warn("Non-admin invite action", identity_id=identity.id, action=action)
        raise NotAuthorizedError(action, identity.id)
