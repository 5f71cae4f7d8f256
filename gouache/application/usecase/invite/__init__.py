"""Invite use cases."""

from gouache.application.usecase.invite.get_invite_state import (
    GetInviteStateRequest,
    GetInviteStateResponse,
    GetInviteStateUseCase,
)
from gouache.application.usecase.invite.issue_invite import (
    IssueInviteRequest,
    IssueInviteResponse,
    IssueInviteUseCase,
)
from gouache.application.usecase.invite.list_invites import (
    InviteItem,
    ListInvitesRequest,
    ListInvitesResponse,
    ListInvitesUseCase,
)
from gouache.application.usecase.invite.revoke_invite import (
    RevokeInviteRequest,
    RevokeInviteResponse,
    RevokeInviteUseCase,
)

__all__ = [
    "GetInviteStateRequest",
    "GetInviteStateResponse",
    "GetInviteStateUseCase",
    "InviteItem",
    "IssueInviteRequest",
    "IssueInviteResponse",
    "IssueInviteUseCase",
    "ListInvitesRequest",
    "ListInvitesResponse",
    "ListInvitesUseCase",
    "RevokeInviteRequest",
    "RevokeInviteResponse",
    "RevokeInviteUseCase",
]
