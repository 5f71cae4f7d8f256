"""Onboarding session read model shared by the onboarding use cases."""

from datetime import datetime

from pydantic import BaseModel

from gouache.domain.model import OnboardingSession
from gouache.domain.value import OnboardingStep, SessionState


class OnboardingDraftView(BaseModel):
    """Draft fields as the wizard shows them."""

    display_name: str
    handle: str
    bio: str
    statement: str
    location: str
    links: dict[str, str]


class OnboardingSessionView(BaseModel):
    """Onboarding session as rendered by the wizard."""

    session_id: str
    state: SessionState
    step: OnboardingStep
    steps: list[OnboardingStep]
    can_retreat: bool
    can_advance: bool
    invite_email: str
    draft: OnboardingDraftView
    message: str | None = None
    started_at: datetime
    completed_at: datetime | None


def session_view(session: OnboardingSession) -> OnboardingSessionView:
    """Build the view of a session."""
    message = None
    if session.state == SessionState.MISMATCHED:
        message = (
            f"This invite is reserved for {session.invite_email.root}. "
            "Sign in with the invited address to continue."
        )
    elif session.state == SessionState.COMPLETED:
        message = "You're already onboarded"

    return OnboardingSessionView(
        session_id=str(session.id),
        state=session.state,
        step=session.step,
        steps=OnboardingStep.ordered(),
        can_retreat=session.is_open and not session.is_first_step,
        can_advance=session.is_open and not session.is_last_step,
        invite_email=session.invite_email.root,
        draft=OnboardingDraftView(**session.draft.model_dump()),
        message=message,
        started_at=session.started_at,
        completed_at=session.completed_at,
    )
