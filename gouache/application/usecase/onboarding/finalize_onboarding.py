"""Finalize onboarding use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from gouache.application.usecase.base import BaseUseCase
from gouache.application.usecase.onboarding.view import (
    OnboardingSessionView,
    session_view,
)
from gouache.domain.service import OnboardingService
from gouache.domain.value import FinalizeOutcome, IdentityId, SessionId


class FinalizeOnboardingRequest(BaseModel):
    """Finalize onboarding request."""

    session_id: UUID
    identity_id: str


class FinalizeOnboardingResponse(BaseModel):
    """Finalize outcome.

    ACTIVATED and ALREADY_COMPLETED are both success for the artist.
    """

    outcome: FinalizeOutcome
    success: bool
    message: str
    session: OnboardingSessionView


class FinalizeOnboardingUseCase(BaseUseCase):
    """Use case for finalizing onboarding."""

    def __init__(self, onboarding_service: OnboardingService) -> None:
        """Initialize finalize onboarding use case.

        Args:
            onboarding_service: Onboarding domain service
        """
        self.onboarding_service = onboarding_service

    async def execute(
        self, request: FinalizeOnboardingRequest
    ) -> FinalizeOnboardingResponse:
        """Finalize onboarding.

        Expected outcomes, including conflicts and a failed profile write,
        are reported in the response rather than raised.
        """
        with logfire.span(
            "finalize_onboarding.execute", session_id=str(request.session_id)
        ):
            result = await self.onboarding_service.finalize(
                SessionId(request.session_id), IdentityId(request.identity_id)
            )
            return FinalizeOnboardingResponse(
                outcome=result.outcome,
                success=result.outcome
                in (FinalizeOutcome.ACTIVATED, FinalizeOutcome.ALREADY_COMPLETED),
                message=result.message,
                session=session_view(result.session),
            )
