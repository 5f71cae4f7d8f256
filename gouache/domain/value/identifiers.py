"""Strongly typed identifiers for Gouache domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Opaque identity id issued by the external auth system
IdentityId = NewType("IdentityId", str)

# Connected account id assigned by the payment processor
AccountId = NewType("AccountId", str)

# Local onboarding session identifier
SessionId = NewType("SessionId", UUID)
