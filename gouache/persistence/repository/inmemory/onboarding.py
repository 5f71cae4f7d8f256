"""In-memory onboarding session store.

Sessions are short-lived working state, so this store backs production as
well as tests. Sessions do not survive a restart; starting again re-seeds
from the profile store.

Idle sessions expire, and completed ones are kept only briefly so a
repeated finalize still answers ALREADY_COMPLETED. After that a new start
on the redeemed invite comes back COMPLETED from the invite itself.
"""

import asyncio
import heapq
import time
from collections.abc import Callable
from datetime import timedelta
from typing import Optional

import logfire

from gouache.domain.model.onboarding import OnboardingSession
from gouache.domain.repository.onboarding import OnboardingSessionRepository
from gouache.domain.value import IdentityId, InviteToken, SessionId, SessionState

DEFAULT_IDLE_TTL = timedelta(hours=24)
DEFAULT_COMPLETED_TTL = timedelta(minutes=10)


class InMemoryOnboardingSessionRepository(OnboardingSessionRepository):
    """In-memory implementation of OnboardingSessionRepository.

    Sessions are indexed by id and by (invite token, identity). Expired
    entries are swept on every write using a heap of deadlines; stale heap
    entries left behind by later writes are skipped when popped.
    """

    def __init__(
        self,
        idle_ttl: timedelta = DEFAULT_IDLE_TTL,
        completed_ttl: timedelta = DEFAULT_COMPLETED_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._idle_ttl = idle_ttl.total_seconds()
        self._completed_ttl = completed_ttl.total_seconds()
        self._clock = clock

        self._sessions: dict[SessionId, OnboardingSession] = {}
        self._expires: dict[SessionId, float] = {}
        self._by_pair: dict[tuple[str, str], SessionId] = {}
        self._deadlines: list[tuple[float, SessionId]] = []
        self._lock = asyncio.Lock()

    def count(self) -> int:
        """Number of sessions currently held, expired ones included until swept."""
        return len(self._sessions)

    async def find_by_id(self, session_id: SessionId) -> Optional[OnboardingSession]:
        """Find a session by id."""
        if not self._is_live(session_id):
            return None
        return self._sessions.get(session_id)

    async def find_for(
        self, invite_token: InviteToken, identity_id: IdentityId
    ) -> Optional[OnboardingSession]:
        """Find the session of an identity on an invite."""
        session_id = self._by_pair.get(_pair(invite_token, identity_id))
        if session_id is None:
            return None
        return await self.find_by_id(session_id)

    async def save(self, session: OnboardingSession) -> OnboardingSession:
        """Save a session (create or update) and push back its expiry."""
        async with self._lock:
            self._sweep()
            self._store(session)
            return session

    async def create_if_absent(self, session: OnboardingSession) -> OnboardingSession:
        """Store a new session unless one exists for the same pair."""
        async with self._lock:
            self._sweep()
            existing = await self.find_for(session.invite_token, session.identity_id)
            if existing:
                return existing
            self._store(session)
            return session

    def _store(self, session: OnboardingSession) -> None:
        ttl = (
            self._completed_ttl
            if session.state == SessionState.COMPLETED
            else self._idle_ttl
        )
        expires = self._clock() + ttl
        self._sessions[session.id] = session
        self._expires[session.id] = expires
        self._by_pair[_pair(session.invite_token, session.identity_id)] = session.id
        heapq.heappush(self._deadlines, (expires, session.id))

    def _is_live(self, session_id: SessionId) -> bool:
        expires = self._expires.get(session_id)
        return expires is not None and expires > self._clock()

    def _sweep(self) -> None:
        now = self._clock()
        evicted = 0
        while self._deadlines and self._deadlines[0][0] <= now:
            deadline, session_id = heapq.heappop(self._deadlines)
            if self._expires.get(session_id) != deadline:
                continue
            session = self._sessions.pop(session_id)
            del self._expires[session_id]
            pair = _pair(session.invite_token, session.identity_id)
            if self._by_pair.get(pair) == session_id:
                del self._by_pair[pair]
            evicted += 1
        if evicted:
            logfire.debug(
                "Expired onboarding sessions evicted",
                evicted=evicted,
                remaining=len(self._sessions),
            )


def _pair(invite_token: InviteToken, identity_id: IdentityId) -> tuple[str, str]:
    return (invite_token.root, str(identity_id))
