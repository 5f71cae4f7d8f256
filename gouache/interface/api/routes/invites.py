"""Artist invite routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from gouache.application.usecase.identity import GetCurrentIdentityUseCase
from gouache.application.usecase.invite import (
    GetInviteStateRequest,
    GetInviteStateResponse,
    GetInviteStateUseCase,
    IssueInviteRequest,
    IssueInviteResponse,
    IssueInviteUseCase,
    ListInvitesRequest,
    ListInvitesResponse,
    ListInvitesUseCase,
    RevokeInviteRequest,
    RevokeInviteResponse,
    RevokeInviteUseCase,
)
from gouache.domain.value import InviteStatus
from gouache.interface.api.auth import require_identity
from gouache.interface.error import MAPPED_ERRORS, invalid_input, to_http_exception

router = APIRouter(prefix="/invites", tags=["invites"], route_class=DishkaRoute)


class IssueInviteAPIRequest(BaseModel):
    """API request for issuing an artist invite."""

    email: str
    name: str | None = Field(default=None, max_length=255)
    message: str | None = Field(default=None, max_length=2000)


@router.post(
    "/", response_model=IssueInviteResponse, status_code=status.HTTP_201_CREATED
)
async def issue_invite(
    request: IssueInviteAPIRequest,
    issue_invite_use_case: FromDishka[IssueInviteUseCase],
    identity_use_case: FromDishka[GetCurrentIdentityUseCase],
    auth_token: str | None = Cookie(default=None),
) -> IssueInviteResponse:
    """Issue an invite to an artist's email address.

    Args:
        request: Invitee email, optional name and personal message
        issue_invite_use_case: Issue invite use case from DI
        identity_use_case: Current identity use case from DI
        auth_token: JWT token from cookie

    Returns:
        The new invite with its onboarding URL

    Raises:
        HTTPException: 401 if not signed in, 403 if not an admin,
            422 if the email is malformed
    """
    identity = await require_identity(auth_token, identity_use_case)

    try:
        return await issue_invite_use_case.execute(
            IssueInviteRequest(
                issuer=identity,
                email=request.email,
                name=request.name,
                message=request.message,
            )
        )
    except MAPPED_ERRORS as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise invalid_input(e)


@router.get("/", response_model=ListInvitesResponse)
async def list_invites(
    list_invites_use_case: FromDishka[ListInvitesUseCase],
    identity_use_case: FromDishka[GetCurrentIdentityUseCase],
    status: InviteStatus | None = Query(default=None),
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    auth_token: str | None = Cookie(default=None),
) -> ListInvitesResponse:
    """List issued invites, newest first.

    Args:
        list_invites_use_case: List invites use case from DI
        identity_use_case: Current identity use case from DI
        status: Optional filter by stored status
        limit: Page size (max 100)
        offset: Number of invites to skip
        auth_token: JWT token from cookie

    Returns:
        One page of invites and the total matching

    Raises:
        HTTPException: 401 if not signed in, 403 if not an admin
    """
    identity = await require_identity(auth_token, identity_use_case)

    try:
        return await list_invites_use_case.execute(
            ListInvitesRequest(
                requester=identity, status=status, limit=limit, offset=offset
            )
        )
    except MAPPED_ERRORS as e:
        raise to_http_exception(e)


@router.get("/{token}", response_model=GetInviteStateResponse)
async def get_invite_state(
    token: str,
    get_invite_state_use_case: FromDishka[GetInviteStateUseCase],
) -> GetInviteStateResponse:
    """Show what the invite page should render for a token.

    Does not require sign-in; the token itself is the credential.

    Raises:
        HTTPException: 404 if the token is unknown
    """
    try:
        return await get_invite_state_use_case.execute(
            GetInviteStateRequest(token=token)
        )
    except MAPPED_ERRORS as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise invalid_input(e)


@router.post("/{token}/revoke", response_model=RevokeInviteResponse)
async def revoke_invite(
    token: str,
    revoke_invite_use_case: FromDishka[RevokeInviteUseCase],
    identity_use_case: FromDishka[GetCurrentIdentityUseCase],
    auth_token: str | None = Cookie(default=None),
) -> RevokeInviteResponse:
    """Revoke a pending invite.

    Revoking an invite that is already revoked, redeemed or expired is not
    an error; the result says what happened.

    Raises:
        HTTPException: 401 if not signed in, 403 if not an admin,
            404 if the token is unknown
    """
    identity = await require_identity(auth_token, identity_use_case)

    try:
        return await revoke_invite_use_case.execute(
            RevokeInviteRequest(revoker=identity, token=token)
        )
    except MAPPED_ERRORS as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise invalid_input(e)
