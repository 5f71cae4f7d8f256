"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict

from gouache.domain.model import ActivationAccount, Invite, Profile
from gouache.domain.value import (
    AccountId,
    ActivationStatus,
    Email,
    IdentityId,
    InviteStatus,
    InviteToken,
)


def row_to_invite(row: Dict[str, Any]) -> Invite:
    """Convert database row to Invite domain model.

    Args:
        row: Database row as dict

    Returns:
        Invite domain model
    """
    return Invite(
        token=InviteToken(root=row["token"]),
        email=Email(root=row["email"]),
        name=row.get("name"),
        message=row.get("message"),
        status=InviteStatus(row["status"]),
        issued_at=row["issued_at"],
        issued_by=IdentityId(row["issued_by"]) if row.get("issued_by") else None,
        expires_at=row.get("expires_at"),
        last_accessed_at=row.get("last_accessed_at"),
        redeemed_at=row.get("redeemed_at"),
        redeemed_by=IdentityId(row["redeemed_by"]) if row.get("redeemed_by") else None,
        revoked_at=row.get("revoked_at"),
    )


def invite_to_dict(invite: Invite) -> Dict[str, Any]:
    """Convert Invite domain model to database dict.

    Args:
        invite: Invite domain model

    Returns:
        Dict suitable for database insertion
    """
    return {
        "token": invite.token.root,
        "email": invite.email.root,
        "name": invite.name,
        "message": invite.message,
        "status": invite.status.value,
        "issued_at": invite.issued_at,
        "issued_by": invite.issued_by,
        "expires_at": invite.expires_at,
        "last_accessed_at": invite.last_accessed_at,
        "redeemed_at": invite.redeemed_at,
        "redeemed_by": invite.redeemed_by,
        "revoked_at": invite.revoked_at,
    }


def row_to_profile(row: Dict[str, Any]) -> Profile:
    """Convert database row to Profile domain model."""
    return Profile(
        identity_id=IdentityId(row["identity_id"]),
        display_name=row.get("display_name"),
        handle=row.get("handle"),
        bio=row.get("bio"),
        statement=row.get("statement"),
        location=row.get("location"),
        links=dict(row.get("links") or {}),
        account_role=row.get("account_role"),
        artist_invite_token=row.get("artist_invite_token"),
        onboarding_completed_at=row.get("onboarding_completed_at"),
        updated_at=row.get("updated_at"),
    )


def row_to_activation_account(row: Dict[str, Any]) -> ActivationAccount:
    """Convert database row to ActivationAccount domain model."""
    return ActivationAccount(
        identity_id=IdentityId(row["identity_id"]),
        account_id=AccountId(row["account_id"]),
        status=ActivationStatus(row["status"]),
        charges_enabled=row["charges_enabled"],
        payouts_enabled=row["payouts_enabled"],
        details_submitted=row["details_submitted"],
        onboarding_url=row.get("onboarding_url"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def activation_account_to_dict(account: ActivationAccount) -> Dict[str, Any]:
    """Convert ActivationAccount domain model to database dict."""
    data = account.model_dump()
    data["status"] = account.status.value
    return data
