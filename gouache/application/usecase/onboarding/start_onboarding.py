"""Start onboarding use case."""

from pydantic import BaseModel

from gouache.application.usecase.base import BaseUseCase
from gouache.application.usecase.onboarding.view import (
    OnboardingSessionView,
    session_view,
)
from gouache.domain.service import OnboardingService
from gouache.domain.value import Identity, InviteToken


class StartOnboardingRequest(BaseModel):
    """Start onboarding request."""

    token: str
    identity: Identity


class StartOnboardingUseCase(BaseUseCase):
    """Use case for starting or resuming onboarding on an invite."""

    def __init__(self, onboarding_service: OnboardingService) -> None:
        """Initialize start onboarding use case.

        Args:
            onboarding_service: Onboarding domain service
        """
        self.onboarding_service = onboarding_service

    async def execute(self, request: StartOnboardingRequest) -> OnboardingSessionView:
        """Start onboarding.

        Raises:
            NotFoundError: If the invite does not exist
            InviteUnavailableError: If the invite cannot be used
        """
        session = await self.onboarding_service.start(
            InviteToken(root=request.token), request.identity
        )
        return session_view(session)
