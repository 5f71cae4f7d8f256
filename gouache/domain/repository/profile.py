"""Profile store interface."""

from abc import ABC, abstractmethod
from typing import Any

from gouache.domain.model.profile import Profile
from gouache.domain.value import IdentityId


class ProfileRepository(ABC):
    """Profile store.

    Holds the persisted profile of each identity. Writes are upserts that
    merge the given fields into whatever is already stored.
    """

    @abstractmethod
    async def load_profile(self, identity_id: IdentityId) -> Profile | None:
        """Load an identity's profile.

        Args:
            identity_id: The identity

        Returns:
            The profile if one exists, None otherwise
        """
        pass

    @abstractmethod
    async def merge_profile(
        self, identity_id: IdentityId, fields: dict[str, Any]
    ) -> Profile:
        """Upsert profile fields.

        Calling twice with identical data leaves the same result.

        Args:
            identity_id: The identity
            fields: Profile fields to set

        Returns:
            The merged profile
        """
        pass
