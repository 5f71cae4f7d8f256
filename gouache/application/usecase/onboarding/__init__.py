"""Onboarding use cases."""

from gouache.application.usecase.onboarding.advance_onboarding import (
    AdvanceOnboardingRequest,
    AdvanceOnboardingUseCase,
    StepInput,
)
from gouache.application.usecase.onboarding.finalize_onboarding import (
    FinalizeOnboardingRequest,
    FinalizeOnboardingResponse,
    FinalizeOnboardingUseCase,
)
from gouache.application.usecase.onboarding.get_onboarding_session import (
    GetOnboardingSessionRequest,
    GetOnboardingSessionUseCase,
)
from gouache.application.usecase.onboarding.retreat_onboarding import (
    RetreatOnboardingRequest,
    RetreatOnboardingUseCase,
)
from gouache.application.usecase.onboarding.start_onboarding import (
    StartOnboardingRequest,
    StartOnboardingUseCase,
)
from gouache.application.usecase.onboarding.view import (
    OnboardingDraftView,
    OnboardingSessionView,
)

__all__ = [
    "AdvanceOnboardingRequest",
    "AdvanceOnboardingUseCase",
    "FinalizeOnboardingRequest",
    "FinalizeOnboardingResponse",
    "FinalizeOnboardingUseCase",
    "GetOnboardingSessionRequest",
    "GetOnboardingSessionUseCase",
    "OnboardingDraftView",
    "OnboardingSessionView",
    "RetreatOnboardingRequest",
    "RetreatOnboardingUseCase",
    "StartOnboardingRequest",
    "StartOnboardingUseCase",
    "StepInput",
]
