"""Get invite state use case."""

from datetime import datetime

from pydantic import BaseModel

from gouache.application.usecase.base import BaseUseCase
from gouache.domain.error import NotFoundError
from gouache.domain.service import InviteRegistry
from gouache.domain.value import InviteStatus, InviteToken, ValidationResult

VALIDATION_MESSAGES = {
    ValidationResult.READY: "Valid invite",
    ValidationResult.REVOKED: "This invite has been revoked",
    ValidationResult.EXPIRED: "This invite has expired",
    ValidationResult.ALREADY_REDEEMED: "This invite has already been used",
}


class GetInviteStateRequest(BaseModel):
    """Get invite state request."""

    token: str


class GetInviteStateResponse(BaseModel):
    """Invite read model for rendering the invite page."""

    email: str
    name: str | None
    status: InviteStatus
    validation: ValidationResult
    valid: bool
    message: str
    expires_at: datetime | None
    redeemed_at: datetime | None


class GetInviteStateUseCase(BaseUseCase):
    """Use case for reading an invite's state.

    Lets the frontend render the right page for an invite link before
    the artist starts onboarding.
    """

    def __init__(self, invite_registry: InviteRegistry) -> None:
        """Initialize get invite state use case.

        Args:
            invite_registry: Invite registry domain service
        """
        self.invite_registry = invite_registry

    async def execute(self, request: GetInviteStateRequest) -> GetInviteStateResponse:
        """Read invite state.

        Raises:
            NotFoundError: If the invite does not exist
        """
        token = InviteToken(root=request.token)
        state = await self.invite_registry.get_state(token)
        if not state:
            raise NotFoundError("Invite", token.masked)

        return GetInviteStateResponse(
            email=state.email.root,
            name=state.name,
            status=state.status,
            validation=state.validation,
            valid=state.validation == ValidationResult.READY,
            message=VALIDATION_MESSAGES[state.validation],
            expires_at=state.expires_at,
            redeemed_at=state.redeemed_at,
        )
