"""Repository interfaces for Gouache domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from gouache.domain.repository.activation import ActivationAccountRepository
from gouache.domain.repository.invite import InviteRepository
from gouache.domain.repository.onboarding import OnboardingSessionRepository
from gouache.domain.repository.profile import ProfileRepository

__all__ = [
    "ActivationAccountRepository",
    "InviteRepository",
    "OnboardingSessionRepository",
    "ProfileRepository",
]
