"""Onboarding session and draft.

A session pairs one invite with one identity and carries the local draft
the artist edits before finalizing. Nothing here is written to the
profile store until finalize.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import Field, field_validator

from gouache.domain.model.common import DomainModel
from gouache.domain.model.profile import Profile
from gouache.domain.value import (
    Email,
    IdentityId,
    InviteToken,
    OnboardingStep,
    SessionId,
    SessionState,
)

LINK_KINDS = ("website", "instagram", "x", "tiktok")

DRAFT_TEXT_FIELDS = ("display_name", "handle", "bio", "statement", "location")


class OnboardingDraft(DomainModel):
    """Editable profile fields collected across onboarding steps."""

    display_name: str = ""
    handle: str = ""
    bio: str = ""
    statement: str = ""
    location: str = ""
    links: dict[str, str] = Field(default_factory=dict)

    @field_validator("links")
    @classmethod
    def validate_links(cls, v: dict[str, str]) -> dict[str, str]:
        """Keep known link kinds with non-blank values."""
        unknown = set(v) - set(LINK_KINDS)
        if unknown:
            raise ValueError(f"Unknown link kinds: {sorted(unknown)}")
        return {kind: url.strip() for kind, url in v.items() if url and url.strip()}

    @classmethod
    def from_profile(cls, profile: Optional[Profile]) -> "OnboardingDraft":
        """Seed a draft from an existing profile, if any."""
        if profile is None:
            return cls()
        return cls(
            display_name=profile.display_name or "",
            handle=profile.handle or "",
            bio=profile.bio or "",
            statement=profile.statement or "",
            location=profile.location or "",
            links={k: v for k, v in profile.links.items() if k in LINK_KINDS},
        )

    def with_updates(self, fields: dict[str, Any]) -> "OnboardingDraft":
        """Return a new draft with the given fields replaced.

        Links are merged by kind; an empty value removes that link.

        Raises:
            ValueError: On unknown field names or link kinds
        """
        unknown = set(fields) - set(DRAFT_TEXT_FIELDS) - {"links"}
        if unknown:
            raise ValueError(f"Unknown draft fields: {sorted(unknown)}")

        data = self.model_dump()
        for name in DRAFT_TEXT_FIELDS:
            if name in fields and fields[name] is not None:
                data[name] = str(fields[name])
        if fields.get("links") is not None:
            links = dict(self.links)
            links.update(fields["links"])
            data["links"] = links
        return OnboardingDraft.model_validate(data)

    def missing_identity_basics(self) -> list[str]:
        """Names of required identity fields that are still blank."""
        return [
            name
            for name in ("display_name", "handle")
            if not getattr(self, name).strip()
        ]

    def to_profile_fields(self) -> dict[str, Any]:
        """Profile fields written on finalize. Blank optional fields become None."""
        return {
            "display_name": self.display_name.strip(),
            "handle": self.handle.strip().lstrip("@"),
            "bio": self.bio.strip() or None,
            "statement": self.statement.strip() or None,
            "location": self.location.strip() or None,
            "links": dict(self.links),
        }


class OnboardingSession(DomainModel):
    """One identity's onboarding against one invite."""

    id: SessionId
    invite_token: InviteToken
    identity_id: IdentityId
    identity_email: Email
    invite_email: Email
    state: SessionState = SessionState.READY
    step: OnboardingStep = OnboardingStep.IDENTITY_BASICS
    draft: OnboardingDraft = Field(default_factory=OnboardingDraft)
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.state == SessionState.READY

    @property
    def is_first_step(self) -> bool:
        return self.step.index == 0

    @property
    def is_last_step(self) -> bool:
        return self.step.index == len(OnboardingStep.ordered()) - 1
