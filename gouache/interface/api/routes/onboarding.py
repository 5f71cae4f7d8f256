"""Artist onboarding wizard routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel

from gouache.application.usecase.identity import GetCurrentIdentityUseCase
from gouache.application.usecase.onboarding import (
    AdvanceOnboardingRequest,
    AdvanceOnboardingUseCase,
    FinalizeOnboardingRequest,
    FinalizeOnboardingResponse,
    FinalizeOnboardingUseCase,
    GetOnboardingSessionRequest,
    GetOnboardingSessionUseCase,
    OnboardingSessionView,
    RetreatOnboardingRequest,
    RetreatOnboardingUseCase,
    StartOnboardingRequest,
    StartOnboardingUseCase,
    StepInput,
)
from gouache.interface.api.auth import require_identity
from gouache.interface.error import MAPPED_ERRORS, invalid_input, to_http_exception

router = APIRouter(prefix="/onboarding", tags=["onboarding"], route_class=DishkaRoute)


class StartOnboardingAPIRequest(BaseModel):
    """API request for opening the wizard on an invite."""

    token: str


@router.post(
    "/sessions",
    response_model=OnboardingSessionView,
    status_code=status.HTTP_201_CREATED,
)
async def start_onboarding(
    request: StartOnboardingAPIRequest,
    start_onboarding_use_case: FromDishka[StartOnboardingUseCase],
    identity_use_case: FromDishka[GetCurrentIdentityUseCase],
    auth_token: str | None = Cookie(default=None),
) -> OnboardingSessionView:
    """Start (or resume) the onboarding wizard for an invite.

    Opening the same invite again as the same identity returns the existing
    session with its draft intact. A signed-in email that differs from the
    invited one yields a session in the mismatched state, which the UI
    renders as "sign in with the invited address".

    Args:
        request: Invite token from the invite URL
        start_onboarding_use_case: Start onboarding use case from DI
        identity_use_case: Current identity use case from DI
        auth_token: JWT token from cookie

    Returns:
        The onboarding session

    Raises:
        HTTPException: 401 if not signed in, 404 if the invite is unknown,
            409 if the invite is revoked, expired or used by someone else
    """
    identity = await require_identity(auth_token, identity_use_case)

    try:
        return await start_onboarding_use_case.execute(
            StartOnboardingRequest(token=request.token, identity=identity)
        )
    except MAPPED_ERRORS as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise invalid_input(e)


@router.get("/sessions/{session_id}", response_model=OnboardingSessionView)
async def get_onboarding_session(
    session_id: UUID,
    get_session_use_case: FromDishka[GetOnboardingSessionUseCase],
    identity_use_case: FromDishka[GetCurrentIdentityUseCase],
    auth_token: str | None = Cookie(default=None),
) -> OnboardingSessionView:
    """Get an onboarding session owned by the signed-in identity."""
    identity = await require_identity(auth_token, identity_use_case)

    try:
        return await get_session_use_case.execute(
            GetOnboardingSessionRequest(session_id=session_id, identity_id=identity.id)
        )
    except MAPPED_ERRORS as e:
        raise to_http_exception(e)


@router.post("/sessions/{session_id}/advance", response_model=OnboardingSessionView)
async def advance_onboarding(
    session_id: UUID,
    step_input: StepInput,
    advance_use_case: FromDishka[AdvanceOnboardingUseCase],
    identity_use_case: FromDishka[GetCurrentIdentityUseCase],
    auth_token: str | None = Cookie(default=None),
) -> OnboardingSessionView:
    """Save the current step's fields and move to the next step.

    Raises:
        HTTPException: 409 on a mismatched or completed session,
            422 if required fields are missing or invalid
    """
    identity = await require_identity(auth_token, identity_use_case)

    try:
        return await advance_use_case.execute(
            AdvanceOnboardingRequest(
                session_id=session_id, identity_id=identity.id, input=step_input
            )
        )
    except MAPPED_ERRORS as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise invalid_input(e)


@router.post("/sessions/{session_id}/retreat", response_model=OnboardingSessionView)
async def retreat_onboarding(
    session_id: UUID,
    retreat_use_case: FromDishka[RetreatOnboardingUseCase],
    identity_use_case: FromDishka[GetCurrentIdentityUseCase],
    auth_token: str | None = Cookie(default=None),
) -> OnboardingSessionView:
    """Move back one step, keeping the draft."""
    identity = await require_identity(auth_token, identity_use_case)

    try:
        return await retreat_use_case.execute(
            RetreatOnboardingRequest(session_id=session_id, identity_id=identity.id)
        )
    except MAPPED_ERRORS as e:
        raise to_http_exception(e)


@router.post(
    "/sessions/{session_id}/finalize", response_model=FinalizeOnboardingResponse
)
async def finalize_onboarding(
    session_id: UUID,
    finalize_use_case: FromDishka[FinalizeOnboardingUseCase],
    identity_use_case: FromDishka[GetCurrentIdentityUseCase],
    auth_token: str | None = Cookie(default=None),
) -> FinalizeOnboardingResponse:
    """Write the profile and redeem the invite.

    Conflicts, invalid invites and profile write failures are reported in
    the response outcome rather than as HTTP errors, so the wizard can show
    the right screen.

    Raises:
        HTTPException: 409 on a mismatched session,
            422 if required fields are missing
    """
    identity = await require_identity(auth_token, identity_use_case)

    try:
        return await finalize_use_case.execute(
            FinalizeOnboardingRequest(session_id=session_id, identity_id=identity.id)
        )
    except MAPPED_ERRORS as e:
        raise to_http_exception(e)
