"""Payment activation routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie
from pydantic import BaseModel, Field

from gouache.application.usecase.activation import (
    ActivateRequest,
    ActivateUseCase,
    ActivationStateView,
    GetActivationStateRequest,
    GetActivationStateUseCase,
    ReconcileActivationRequest,
    ReconcileActivationUseCase,
    RefreshOnboardingLinkRequest,
    RefreshOnboardingLinkUseCase,
    WatchActivationRequest,
    WatchActivationResponse,
    WatchActivationUseCase,
)
from gouache.application.usecase.identity import GetCurrentIdentityUseCase
from gouache.interface.api.auth import require_identity
from gouache.interface.error import MAPPED_ERRORS, to_http_exception

router = APIRouter(prefix="/activation", tags=["activation"], route_class=DishkaRoute)


class WatchActivationAPIRequest(BaseModel):
    """API request for watching activation until it settles."""

    poll_interval_seconds: float | None = Field(default=None, gt=0)
    deadline_seconds: float | None = Field(default=None, ge=0)


@router.get("", response_model=ActivationStateView)
async def get_activation_state(
    get_state_use_case: FromDishka[GetActivationStateUseCase],
    identity_use_case: FromDishka[GetCurrentIdentityUseCase],
    auth_token: str | None = Cookie(default=None),
) -> ActivationStateView:
    """Get the stored activation state without contacting the processor.

    An identity that never started activation reports "unconnected".
    """
    identity = await require_identity(auth_token, identity_use_case)

    try:
        return await get_state_use_case.execute(
            GetActivationStateRequest(identity_id=identity.id)
        )
    except MAPPED_ERRORS as e:
        raise to_http_exception(e)


@router.post("", response_model=ActivationStateView)
async def activate(
    activate_use_case: FromDishka[ActivateUseCase],
    identity_use_case: FromDishka[GetCurrentIdentityUseCase],
    auth_token: str | None = Cookie(default=None),
) -> ActivationStateView:
    """Create the payment account for the signed-in identity.

    Calling this again returns the existing account instead of creating a
    second one.

    Args:
        activate_use_case: Activate use case from DI
        identity_use_case: Current identity use case from DI
        auth_token: JWT token from cookie

    Returns:
        Activation state including the processor onboarding URL

    Raises:
        HTTPException: 401 if not signed in, 502 if the processor failed
    """
    identity = await require_identity(auth_token, identity_use_case)

    try:
        return await activate_use_case.execute(ActivateRequest(identity=identity))
    except MAPPED_ERRORS as e:
        raise to_http_exception(e)


@router.post("/reconcile", response_model=ActivationStateView)
async def reconcile_activation(
    reconcile_use_case: FromDishka[ReconcileActivationUseCase],
    identity_use_case: FromDishka[GetCurrentIdentityUseCase],
    auth_token: str | None = Cookie(default=None),
) -> ActivationStateView:
    """Poll the processor once and store what it reports.

    Raises:
        HTTPException: 404 if activation never started,
            502 if the processor is unreachable
    """
    identity = await require_identity(auth_token, identity_use_case)

    try:
        return await reconcile_use_case.execute(
            ReconcileActivationRequest(identity_id=identity.id)
        )
    except MAPPED_ERRORS as e:
        raise to_http_exception(e)


@router.post("/watch", response_model=WatchActivationResponse)
async def watch_activation(
    request: WatchActivationAPIRequest,
    watch_use_case: FromDishka[WatchActivationUseCase],
    identity_use_case: FromDishka[GetCurrentIdentityUseCase],
    auth_token: str | None = Cookie(default=None),
) -> WatchActivationResponse:
    """Poll until activation settles or the deadline passes.

    Used by the page the processor redirects back to. A timeout is a normal
    outcome; the stored state is still returned.

    Raises:
        HTTPException: 404 if activation never started
    """
    identity = await require_identity(auth_token, identity_use_case)

    try:
        return await watch_use_case.execute(
            WatchActivationRequest(
                identity_id=identity.id,
                poll_interval_seconds=request.poll_interval_seconds,
                deadline_seconds=request.deadline_seconds,
            )
        )
    except MAPPED_ERRORS as e:
        raise to_http_exception(e)


@router.post("/onboarding-link", response_model=ActivationStateView)
async def refresh_onboarding_link(
    refresh_use_case: FromDishka[RefreshOnboardingLinkUseCase],
    identity_use_case: FromDishka[GetCurrentIdentityUseCase],
    auth_token: str | None = Cookie(default=None),
) -> ActivationStateView:
    """Issue a fresh processor onboarding link after the old one expired.

    Raises:
        HTTPException: 404 if activation never started,
            409 if activation already settled
    """
    identity = await require_identity(auth_token, identity_use_case)

    try:
        return await refresh_use_case.execute(
            RefreshOnboardingLinkRequest(identity_id=identity.id)
        )
    except MAPPED_ERRORS as e:
        raise to_http_exception(e)
