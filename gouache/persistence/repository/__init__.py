"""PostgreSQL repository implementations."""

from gouache.persistence.repository.activation import (
    PostgresActivationAccountRepository,
)
from gouache.persistence.repository.invite import PostgresInviteRepository
from gouache.persistence.repository.profile import PostgresProfileRepository

__all__ = [
    "PostgresActivationAccountRepository",
    "PostgresInviteRepository",
    "PostgresProfileRepository",
]
