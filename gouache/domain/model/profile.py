"""Artist profile record as held by the profile store."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from gouache.domain.model.common import DomainModel
from gouache.domain.value import IdentityId


class Profile(DomainModel):
    """Public profile of an identity.

    Only the fields onboarding reads or writes are modeled; the store may
    hold more.
    """

    identity_id: IdentityId
    display_name: Optional[str] = None
    handle: Optional[str] = None
    bio: Optional[str] = None
    statement: Optional[str] = None
    location: Optional[str] = None
    links: dict[str, str] = Field(default_factory=dict)
    account_role: Optional[str] = None
    artist_invite_token: Optional[str] = None
    onboarding_completed_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
