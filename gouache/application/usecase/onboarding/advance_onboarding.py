"""Advance onboarding use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from gouache.application.usecase.base import BaseUseCase
from gouache.application.usecase.onboarding.view import (
    OnboardingSessionView,
    session_view,
)
from gouache.domain.service import OnboardingService
from gouache.domain.value import IdentityId, SessionId


class StepInput(BaseModel):
    """Fields edited on the current step. Omitted fields are left as is."""

    display_name: str | None = Field(default=None, max_length=255)
    handle: str | None = Field(default=None, max_length=31)
    bio: str | None = Field(default=None, max_length=2000)
    statement: str | None = Field(default=None, max_length=5000)
    location: str | None = Field(default=None, max_length=255)
    links: dict[str, str] | None = None


class AdvanceOnboardingRequest(BaseModel):
    """Advance onboarding request."""

    session_id: UUID
    identity_id: str
    input: StepInput = StepInput()


class AdvanceOnboardingUseCase(BaseUseCase):
    """Use case for moving onboarding to the next step."""

    def __init__(self, onboarding_service: OnboardingService) -> None:
        """Initialize advance onboarding use case.

        Args:
            onboarding_service: Onboarding domain service
        """
        self.onboarding_service = onboarding_service

    async def execute(self, request: AdvanceOnboardingRequest) -> OnboardingSessionView:
        """Apply the step input and advance."""
        session = await self.onboarding_service.advance(
            SessionId(request.session_id),
            IdentityId(request.identity_id),
            request.input.model_dump(exclude_none=True),
        )
        return session_view(session)
