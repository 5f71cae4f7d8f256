"""Domain services."""

from .activation_oracle import ActivationOracle, CreatedAccount, OracleAccountStatus
from .activation_reconciler import ActivationReconciler, ActivationState, WatchResult
from .base import Service
from .identity_service import IdentityProvider, IdentityService, TokenIdentityProvider
from .invite_registry import InviteRegistry, InviteState
from .jwt_service import JWTService
from .onboarding_service import FinalizeResult, OnboardingService

__all__ = [
    "ActivationOracle",
    "ActivationReconciler",
    "ActivationState",
    "CreatedAccount",
    "FinalizeResult",
    "IdentityProvider",
    "IdentityService",
    "InviteRegistry",
    "InviteState",
    "JWTService",
    "OnboardingService",
    "OracleAccountStatus",
    "Service",
    "TokenIdentityProvider",
    "WatchResult",
]
