"""Onboarding session store interface."""

from abc import ABC, abstractmethod

from gouache.domain.model.onboarding import OnboardingSession
from gouache.domain.value import IdentityId, InviteToken, SessionId


class OnboardingSessionRepository(ABC):
    """Store for in-flight onboarding sessions.

    Sessions are working state only; the profile store is the record.
    """

    @abstractmethod
    async def find_by_id(self, session_id: SessionId) -> OnboardingSession | None:
        """Find a session by id."""
        pass

    @abstractmethod
    async def find_for(
        self, invite_token: InviteToken, identity_id: IdentityId
    ) -> OnboardingSession | None:
        """Find the session of an identity on an invite."""
        pass

    @abstractmethod
    async def save(self, session: OnboardingSession) -> OnboardingSession:
        """Save a session (create or update)."""
        pass

    @abstractmethod
    async def create_if_absent(
        self, session: OnboardingSession
    ) -> OnboardingSession:
        """Store a new session unless the identity already has one on the invite.

        Returns:
            The stored session; the existing one if there was one
        """
        pass
