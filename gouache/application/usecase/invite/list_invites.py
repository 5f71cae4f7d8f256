"""List invites use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from gouache.application.usecase.base import BaseUseCase
from gouache.application.usecase.invite.issue_invite import ensure_admin, invite_url
from gouache.config import Settings
from gouache.domain.service import InviteRegistry
from gouache.domain.value import Identity, InviteStatus, ValidationResult


class InviteItem(BaseModel):
    """Invite row in the admin console."""

    token: str
    invite_url: str
    email: str
    name: str | None = None
    status: InviteStatus
    validation: ValidationResult  # EXPIRED for pending invites past expiry
    issued_at: datetime
    expires_at: datetime | None = None
    last_accessed_at: datetime | None = None
    redeemed_at: datetime | None = None
    redeemed_by: str | None = None


class ListInvitesRequest(BaseModel):
    """List invites request."""

    requester: Identity
    status: InviteStatus | None = None
    limit: int = Field(default=50, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class ListInvitesResponse(BaseModel):
    """One page of invites."""

    invites: list[InviteItem]
    total: int  # Matching invites across all pages


class ListInvitesUseCase(BaseUseCase):
    """Use case for tracking issued invites from the admin console."""

    def __init__(self, invite_registry: InviteRegistry, settings: Settings) -> None:
        """Initialize list invites use case.

        Args:
            invite_registry: Invite registry domain service
            settings: Application settings
        """
        self.invite_registry = invite_registry
        self.settings = settings

    async def execute(self, request: ListInvitesRequest) -> ListInvitesResponse:
        """List invites, newest first.

        Raises:
            NotAuthorizedError: If the requester is not an admin
        """
        ensure_admin(request.requester, self.settings, "list artist invites")

        states, total = await self.invite_registry.list_invites(
            status=request.status, limit=request.limit, offset=request.offset
        )

        return ListInvitesResponse(
            invites=[
                InviteItem(
                    token=state.token.root,
                    invite_url=invite_url(self.settings, state.token.root),
                    email=state.email.root,
                    name=state.name,
                    status=state.status,
                    validation=state.validation,
                    issued_at=state.issued_at,
                    expires_at=state.expires_at,
                    last_accessed_at=state.last_accessed_at,
                    redeemed_at=state.redeemed_at,
                    redeemed_by=state.redeemed_by,
                )
                for state in states
            ],
            total=total,
        )
