"""In-memory profile store for testing."""

from datetime import datetime, timezone
from typing import Any, Optional

from gouache.domain.model.profile import Profile
from gouache.domain.repository.profile import ProfileRepository
from gouache.domain.value import IdentityId


class InMemoryProfileRepository(ProfileRepository):
    """In-memory implementation of ProfileRepository for testing."""

    def __init__(self) -> None:
        self._profiles: dict[str, Profile] = {}
        self.merge_calls = 0

    async def load_profile(self, identity_id: IdentityId) -> Optional[Profile]:
        """Load an identity's profile."""
        return self._profiles.get(identity_id)

    async def merge_profile(
        self, identity_id: IdentityId, fields: dict[str, Any]
    ) -> Profile:
        """Upsert profile fields."""
        self.merge_calls += 1
        current = self._profiles.get(identity_id) or Profile(identity_id=identity_id)
        data = current.model_dump()
        data.update(fields)
        data["updated_at"] = datetime.now(timezone.utc)
        merged = Profile.model_validate(data)
        self._profiles[identity_id] = merged
        return merged
