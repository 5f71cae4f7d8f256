"""Onboarding domain service.

Drives an identity through the ordered onboarding steps against one invite
and performs the single finalize transaction. Invite writes always go
through the InviteRegistry.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

import logfire

from gouache.domain.error import (
    EmailMismatchError,
    InvalidStepError,
    InviteUnavailableError,
    MissingFieldsError,
    NotAuthorizedError,
    NotFoundError,
    SessionCompletedError,
    ValidationError,
)
from gouache.domain.model.onboarding import OnboardingDraft, OnboardingSession
from gouache.domain.repository import OnboardingSessionRepository, ProfileRepository
from gouache.domain.value import (
    FinalizeOutcome,
    Handle,
    Identity,
    IdentityId,
    InviteToken,
    OnboardingStep,
    RedeemResult,
    SessionId,
    SessionState,
    ValidationResult,
)

from .base import Service
from .invite_registry import InviteRegistry

ARTIST_ROLE = "artist"


@dataclass
class FinalizeResult:
    """Outcome of a finalize call."""

    outcome: FinalizeOutcome
    session: OnboardingSession
    message: str


class OnboardingService(Service):
    """Domain service for artist onboarding sessions."""

    def __init__(
        self,
        invite_registry: InviteRegistry,
        profile_repository: ProfileRepository,
        session_repository: OnboardingSessionRepository,
    ) -> None:
        """Initialize onboarding service.

        Args:
            invite_registry: Invite registry
            profile_repository: Profile store
            session_repository: Onboarding session store
        """
        self.invite_registry = invite_registry
        self.profile_repository = profile_repository
        self.session_repository = session_repository

    async def start(self, token: InviteToken, identity: Identity) -> OnboardingSession:
        """Start (or resume) onboarding on an invite.

        A second start by the same identity on the same invite returns the
        first session unchanged, draft included.

        Args:
            token: Invite token
            identity: Signed-in identity

        Returns:
            The session. MISMATCHED if the identity's email is not the
            invited one; COMPLETED if this identity already redeemed it.

        Raises:
            NotFoundError: If the invite does not exist
            InviteUnavailableError: If the invite is revoked, expired or
                redeemed by someone else
        """
        with logfire.span(
            "onboarding_service.start", token=token.masked, identity_id=identity.id
        ):
            invite = await self.invite_registry.load(token)
            if not invite:
                raise NotFoundError("Invite", token.masked)

            existing = await self.session_repository.find_for(token, identity.id)
            if existing:
                logfire.info(
                    "Onboarding session resumed",
                    session_id=str(existing.id),
                    state=existing.state.value,
                )
                return existing

            now = datetime.now(timezone.utc)
            validation = self.invite_registry.validate(invite, now)
            if validation == ValidationResult.ALREADY_REDEEMED and (
                invite.redeemed_by == identity.id
            ):
                state = SessionState.COMPLETED
            elif validation != ValidationResult.READY:
                logfire.warn(
                    "Onboarding start on unavailable invite",
                    token=token.masked,
                    validation=validation.value,
                )
                raise InviteUnavailableError(token.masked, validation.value)
            elif invite.email.matches(identity.email):
                state = SessionState.READY
            else:
                state = SessionState.MISMATCHED

            draft = OnboardingDraft()
            if state == SessionState.READY:
                profile = await self.profile_repository.load_profile(identity.id)
                draft = OnboardingDraft.from_profile(profile)

            session = OnboardingSession(
                id=SessionId(uuid4()),
                invite_token=token,
                identity_id=identity.id,
                identity_email=identity.email,
                invite_email=invite.email,
                state=state,
                draft=draft,
                started_at=now,
                completed_at=(
                    invite.redeemed_at if state == SessionState.COMPLETED else None
                ),
            )
            stored = await self.session_repository.create_if_absent(session)

            logfire.info(
                "Onboarding session started",
                session_id=str(stored.id),
                state=stored.state.value,
            )
            return stored

    async def get_session(
        self, session_id: SessionId, identity_id: IdentityId
    ) -> OnboardingSession:
        """Get a session owned by the identity.

        Raises:
            NotFoundError: If the session does not exist
            NotAuthorizedError: If another identity owns it
        """
        session = await self.session_repository.find_by_id(session_id)
        if not session:
            raise NotFoundError("OnboardingSession", str(session_id))
        if session.identity_id != identity_id:
            raise NotAuthorizedError("access this onboarding session", identity_id)
        return session

    async def advance(
        self,
        session_id: SessionId,
        identity_id: IdentityId,
        fields: dict[str, Any],
    ) -> OnboardingSession:
        """Apply the current step's input and move to the next step.

        Purely local; nothing is written to the profile store.

        Args:
            session_id: Session id
            identity_id: Signed-in identity
            fields: Draft fields edited on the current step

        Returns:
            Updated session

        Raises:
            EmailMismatchError: If the session is mismatched
            SessionCompletedError: If the session is completed
            InvalidStepError: If already at the last step
            MissingFieldsError: If identity basics are blank
            ValidationError: On unknown fields or a malformed handle
        """
        with logfire.span("onboarding_service.advance", session_id=str(session_id)):
            session = await self.get_session(session_id, identity_id)
            self._ensure_editable(session)

            if session.is_last_step:
                raise InvalidStepError(f"Cannot advance past {session.step.value}")

            try:
                draft = session.draft.with_updates(fields)
            except ValueError as e:
                raise ValidationError(str(e)) from e

            if session.step == OnboardingStep.IDENTITY_BASICS:
                self._check_identity_basics(draft)

            next_step = OnboardingStep.ordered()[session.step.index + 1]
            updated = session.model_copy(update={"draft": draft, "step": next_step})
            saved = await self.session_repository.save(updated)

            logfire.info(
                "Onboarding step advanced",
                session_id=str(session_id),
                step=next_step.value,
            )
            return saved

    async def retreat(
        self, session_id: SessionId, identity_id: IdentityId
    ) -> OnboardingSession:
        """Move back one step, keeping the draft.

        Raises:
            InvalidStepError: If already at the first step
        """
        session = await self.get_session(session_id, identity_id)
        self._ensure_editable(session)

        if session.is_first_step:
            raise InvalidStepError(f"Cannot retreat from {session.step.value}")

        previous_step = OnboardingStep.ordered()[session.step.index - 1]
        saved = await self.session_repository.save(
            session.model_copy(update={"step": previous_step})
        )
        logfire.info(
            "Onboarding step retreated",
            session_id=str(session_id),
            step=previous_step.value,
        )
        return saved

    async def finalize(
        self, session_id: SessionId, identity_id: IdentityId
    ) -> FinalizeResult:
        """Persist the draft and redeem the invite.

        Strictly ordered: re-validate the invite, merge the draft into the
        profile, redeem, then grant the artist role. If the profile write
        fails the invite is left pending. An identity that loses the redeem
        keeps its draft fields but never the role.

        Args:
            session_id: Session id
            identity_id: Signed-in identity

        Returns:
            Finalize result

        Raises:
            EmailMismatchError: If the session is mismatched
            MissingFieldsError: If identity basics are blank
        """
        with logfire.span(
            "onboarding_service.finalize",
            session_id=str(session_id),
            identity_id=identity_id,
        ):
            session = await self.get_session(session_id, identity_id)

            if session.state == SessionState.COMPLETED:
                logfire.info(
                    "Finalize on completed session", session_id=str(session_id)
                )
                return FinalizeResult(
                    FinalizeOutcome.ALREADY_COMPLETED, session, "Already onboarded"
                )
            if session.state == SessionState.MISMATCHED:
                raise EmailMismatchError(session.invite_email.root)

            self._check_identity_basics(session.draft)

            # 1. Re-validate
            now = datetime.now(timezone.utc)
            invite = await self.invite_registry.find(session.invite_token)
            if not invite:
                return FinalizeResult(
                    FinalizeOutcome.INVALID, session, "This invite no longer exists"
                )

            validation = self.invite_registry.validate(invite, now)
            if validation == ValidationResult.ALREADY_REDEEMED:
                return await self._already_redeemed(session, invite.redeemed_by)
            if validation != ValidationResult.READY:
                logfire.warn(
                    "Finalize on unavailable invite",
                    session_id=str(session_id),
                    validation=validation.value,
                )
                return FinalizeResult(
                    FinalizeOutcome.INVALID,
                    session,
                    f"This invite is {validation.value.replace('_', ' ')}",
                )

            # 2. Persist profile; the role is granted only after redeeming
            try:
                await self.profile_repository.merge_profile(
                    identity_id, session.draft.to_profile_fields()
                )
            except Exception as e:
                logfire.error(
                    "Profile write failed; invite left pending",
                    session_id=str(session_id),
                    error=str(e),
                )
                return FinalizeResult(
                    FinalizeOutcome.FAILED,
                    session,
                    "Could not save your profile. Please try again.",
                )

            # 3. Redeem
            result = await self.invite_registry.redeem(
                session.invite_token, identity_id, now
            )
            if result == RedeemResult.CONFLICT:
                current = await self.invite_registry.find(session.invite_token)
                return await self._already_redeemed(
                    session, current.redeemed_by if current else None
                )

            completed = await self._promote(session, now)
            logfire.info(
                "Onboarding finalized",
                session_id=str(session_id),
                identity_id=identity_id,
            )
            return FinalizeResult(
                FinalizeOutcome.ACTIVATED, completed, "Welcome to Gouache"
            )

    async def _already_redeemed(
        self, session: OnboardingSession, redeemed_by: IdentityId | None
    ) -> FinalizeResult:
        if redeemed_by == session.identity_id:
            completed = await self._promote(session, datetime.now(timezone.utc))
            return FinalizeResult(
                FinalizeOutcome.ALREADY_COMPLETED, completed, "Already onboarded"
            )

        logfire.warn(
            "Invite already redeemed by another identity",
            session_id=str(session.id),
        )
        return FinalizeResult(
            FinalizeOutcome.CONFLICT, session, "This invite was already used"
        )

    async def _promote(
        self, session: OnboardingSession, now: datetime
    ) -> OnboardingSession:
        """Grant the artist role and complete the session.

        Only reached once the invite is redeemed by this session's identity.
        Safe to repeat.
        """
        await self.profile_repository.merge_profile(
            session.identity_id,
            {
                "account_role": ARTIST_ROLE,
                "artist_invite_token": session.invite_token.root,
                "onboarding_completed_at": now,
            },
        )
        return await self._complete(session, now)

    async def _complete(
        self, session: OnboardingSession, now: datetime
    ) -> OnboardingSession:
        return await self.session_repository.save(
            session.model_copy(
                update={"state": SessionState.COMPLETED, "completed_at": now}
            )
        )

    @staticmethod
    def _ensure_editable(session: OnboardingSession) -> None:
        if session.state == SessionState.MISMATCHED:
            raise EmailMismatchError(session.invite_email.root)
        if session.state == SessionState.COMPLETED:
            raise SessionCompletedError(str(session.id))

    @staticmethod
    def _check_identity_basics(draft: OnboardingDraft) -> None:
        missing = draft.missing_identity_basics()
        if missing:
            raise MissingFieldsError(missing)
        try:
            Handle(root=draft.handle)
        except ValueError as e:
            raise ValidationError(f"Invalid handle: {draft.handle}") from e
