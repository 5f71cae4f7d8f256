"""Payment activation use cases."""

from gouache.application.usecase.activation.activate import (
    ActivateRequest,
    ActivateUseCase,
)
from gouache.application.usecase.activation.get_activation_state import (
    GetActivationStateRequest,
    GetActivationStateUseCase,
)
from gouache.application.usecase.activation.reconcile_activation import (
    ReconcileActivationRequest,
    ReconcileActivationUseCase,
)
from gouache.application.usecase.activation.refresh_onboarding_link import (
    RefreshOnboardingLinkRequest,
    RefreshOnboardingLinkUseCase,
)
from gouache.application.usecase.activation.view import ActivationStateView
from gouache.application.usecase.activation.watch_activation import (
    WatchActivationRequest,
    WatchActivationResponse,
    WatchActivationUseCase,
)

__all__ = [
    "ActivateRequest",
    "ActivateUseCase",
    "ActivationStateView",
    "GetActivationStateRequest",
    "GetActivationStateUseCase",
    "ReconcileActivationRequest",
    "ReconcileActivationUseCase",
    "RefreshOnboardingLinkRequest",
    "RefreshOnboardingLinkUseCase",
    "WatchActivationRequest",
    "WatchActivationResponse",
    "WatchActivationUseCase",
]
