"""Retreat onboarding use case."""

from uuid import UUID

from pydantic import BaseModel

from gouache.application.usecase.base import BaseUseCase
from gouache.application.usecase.onboarding.view import (
    OnboardingSessionView,
    session_view,
)
from gouache.domain.service import OnboardingService
from gouache.domain.value import IdentityId, SessionId


class RetreatOnboardingRequest(BaseModel):
    """Retreat onboarding request."""

    session_id: UUID
    identity_id: str


class RetreatOnboardingUseCase(BaseUseCase):
    """Use case for moving onboarding back one step."""

    def __init__(self, onboarding_service: OnboardingService) -> None:
        self.onboarding_service = onboarding_service

    async def execute(self, request: RetreatOnboardingRequest) -> OnboardingSessionView:
        session = await self.onboarding_service.retreat(
            SessionId(request.session_id), IdentityId(request.identity_id)
        )
        return session_view(session)
