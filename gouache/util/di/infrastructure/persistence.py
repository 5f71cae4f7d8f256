"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from gouache.config import Settings
from gouache.domain.repository import (
    ActivationAccountRepository,
    InviteRepository,
    OnboardingSessionRepository,
    ProfileRepository,
)
from gouache.persistence.database import create_engine, create_session_factory
from gouache.persistence.repository import (
    PostgresActivationAccountRepository,
    PostgresInviteRepository,
    PostgresProfileRepository,
)
from gouache.persistence.repository.inmemory import (
    InMemoryOnboardingSessionRepository,
)
from gouache.util.di.base import ProviderBase
from gouache.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is committed at the end of the request if no exception
        occurred, or rolled back if one was raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_invite_repository(self, session: AsyncSession) -> InviteRepository:
        """Provide Invite repository."""
        return PostgresInviteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_profile_repository(self, session: AsyncSession) -> ProfileRepository:
        """Provide profile store."""
        return PostgresProfileRepository(session)

    @provide(scope=Scope.APP)
    def get_activation_account_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> ActivationAccountRepository:
        """Provide ActivationAccount repository.

        Commits per operation rather than at request end, so a long watch
        request persists each observed status as it goes.
        """
        return PostgresActivationAccountRepository(session_factory)

    @provide(scope=Scope.APP)
    def get_onboarding_session_repository(
        self, settings: Settings
    ) -> OnboardingSessionRepository:
        """Provide the process-wide onboarding session store."""
        return InMemoryOnboardingSessionRepository(
            idle_ttl=settings.onboarding.session_idle_ttl,
            completed_ttl=settings.onboarding.completed_session_ttl,
        )
