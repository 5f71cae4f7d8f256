"""Shared base for invites, profiles, sessions and activation accounts."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable domain entity.

    State changes produce a new instance (model_copy) that the owning
    service hands to its repository; nothing mutates an entity in place.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
