"""Revoke invite use case."""

from pydantic import BaseModel

from gouache.application.usecase.base import BaseUseCase
from gouache.application.usecase.invite.issue_invite import ensure_admin
from gouache.config import Settings
from gouache.domain.error import NotFoundError
from gouache.domain.service import InviteRegistry
from gouache.domain.value import Identity, InviteStatus, InviteToken, RevokeResult


class RevokeInviteRequest(BaseModel):
    """Request to revoke an artist invite."""

    revoker: Identity
    token: str


class RevokeInviteResponse(BaseModel):
    """Revocation outcome and the invite's resulting status."""

    result: RevokeResult
    status: InviteStatus


class RevokeInviteUseCase(BaseUseCase):
    """Use case for revoking a pending invite from the admin console."""

    def __init__(self, invite_registry: InviteRegistry, settings: Settings) -> None:
        """Initialize use case.

        Args:
            invite_registry: Invite registry domain service
            settings: Application settings
        """
        self.invite_registry = invite_registry
        self.settings = settings

    async def execute(self, request: RevokeInviteRequest) -> RevokeInviteResponse:
        """Revoke an invite.

        A non-pending invite is not an error; the result says CONFLICT and
        carries the status it already has.

        Raises:
            NotAuthorizedError: If the revoker is not an admin
            NotFoundError: If the invite does not exist
        """
        ensure_admin(request.revoker, self.settings, "revoke artist invites")

        token = InviteToken(root=request.token)
        result = await self.invite_registry.revoke(token)

        invite = await self.invite_registry.find(token)
        if not invite:
            raise NotFoundError("Invite", token.masked)

        return RevokeInviteResponse(result=result, status=invite.status)
