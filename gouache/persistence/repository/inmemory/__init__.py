"""In-memory repository implementations for testing."""

from .activation import InMemoryActivationAccountRepository
from .invite import InMemoryInviteRepository
from .onboarding import InMemoryOnboardingSessionRepository
from .profile import InMemoryProfileRepository

__all__ = [
    "InMemoryActivationAccountRepository",
    "InMemoryInviteRepository",
    "InMemoryOnboardingSessionRepository",
    "InMemoryProfileRepository",
]
