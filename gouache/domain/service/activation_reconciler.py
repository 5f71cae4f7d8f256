"""Activation reconciler domain service.

Creates payment processor accounts and keeps the local activation record in
step with the processor by bounded polling. The local record only moves on
a status the processor has confirmed, and never backward.
"""

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime, timezone

import logfire

from gouache.domain.error import (
    BusinessRuleViolationError,
    NotFoundError,
    OracleUnavailableError,
)
from gouache.domain.model.activation import ActivationAccount
from gouache.domain.repository import ActivationAccountRepository
from gouache.domain.value import (
    AccountId,
    ActivationStatus,
    Identity,
    IdentityId,
    WatchOutcome,
)

from .activation_oracle import ActivationOracle
from .base import Service


@dataclass
class WatchResult:
    """Where a watch loop stopped and the last known record."""

    outcome: WatchOutcome
    account: ActivationAccount
    polls: int


@dataclass
class ActivationState:
    """Read model of an identity's payment activation."""

    identity_id: IdentityId
    status: ActivationStatus
    account_id: AccountId | None = None
    charges_enabled: bool = False
    payouts_enabled: bool = False
    details_submitted: bool = False
    onboarding_url: str | None = None
    updated_at: datetime | None = None


class ActivationReconciler(Service):
    """Domain service for payment account activation."""

    def __init__(
        self,
        account_repository: ActivationAccountRepository,
        oracle: ActivationOracle,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize activation reconciler.

        Args:
            account_repository: Activation account repository
            oracle: Payment processor
            clock: Monotonic clock in seconds, replaceable in tests
            sleep: Awaitable sleep, replaceable in tests
        """
        self.account_repository = account_repository
        self.oracle = oracle
        self._clock = clock
        self._sleep = sleep

    async def activate(self, identity: Identity) -> ActivationAccount:
        """Create the identity's processor account, or return the existing one.

        A failed account is returned as-is; no second account is created.

        Args:
            identity: Identity requesting activation

        Returns:
            The identity's activation account

        Raises:
            OracleUnavailableError: If the processor could not create the account
        """
        with logfire.span("activation_reconciler.activate", identity_id=identity.id):
            existing = await self.account_repository.find_by_identity(identity.id)
            if existing:
                logfire.info(
                    "Activation account exists",
                    identity_id=identity.id,
                    account_id=existing.account_id,
                    status=existing.status.value,
                )
                return existing

            try:
                created = await self.oracle.create_account(
                    identity.id, identity.email.root, identity.display_name
                )
            except OracleUnavailableError as e:
                logfire.error(
                    "Processor account creation failed",
                    identity_id=identity.id,
                    error=str(e),
                )
                raise

            account = ActivationAccount(
                identity_id=identity.id,
                account_id=created.account_id,
                status=ActivationStatus.CREATED,
                onboarding_url=created.onboarding_url,
            )
            stored, was_created = await self.account_repository.create_if_absent(
                account
            )
            if not was_created:
                logfire.warn(
                    "Concurrent activation; keeping stored account",
                    identity_id=identity.id,
                    account_id=stored.account_id,
                    discarded_account_id=created.account_id,
                )
                return stored

            logfire.info(
                "Activation account created",
                identity_id=identity.id,
                account_id=stored.account_id,
            )
            return stored

    async def reconcile(self, account_id: AccountId) -> ActivationAccount:
        """Refresh the local record from the processor.

        Writes only when something changed. Terminal records are not polled.

        Args:
            account_id: Processor account id

        Returns:
            The current record

        Raises:
            NotFoundError: If no local record exists for the account
            OracleUnavailableError: If the processor could not be reached
        """
        with logfire.span(
            "activation_reconciler.reconcile", account_id=account_id
        ):
            account = await self.account_repository.find_by_account_id(account_id)
            if not account:
                raise NotFoundError("ActivationAccount", account_id)
            if account.status.is_terminal:
                return account

            observed = await self.oracle.get_status(account_id)
            updated = account.observe(
                charges_enabled=observed.charges_enabled,
                payouts_enabled=observed.payouts_enabled,
                details_submitted=observed.details_submitted,
                raw_status=observed.raw_status,
            )
            if updated.same_state_as(account):
                return account

            saved = await self.account_repository.update_if_status(
                updated.model_copy(
                    update={"updated_at": datetime.now(timezone.utc)}
                ),
                expected_status=account.status,
            )
            if saved is None:
                # Another reconcile moved the status first; its write stands
                current = await self.account_repository.find_by_account_id(account_id)
                logfire.info(
                    "Reconcile lost race; keeping newer record",
                    account_id=account_id,
                    status=current.status.value if current else None,
                )
                return current or account

            if saved.status != account.status:
                logfire.info(
                    "Activation status changed",
                    account_id=account_id,
                    old_status=account.status.value,
                    new_status=saved.status.value,
                )
            return saved

    async def watch_until_terminal(
        self,
        account_id: AccountId,
        poll_interval: float,
        deadline: float,
    ) -> WatchResult:
        """Reconcile on a fixed interval until terminal or out of time.

        Processor outages during a poll are retried on the next tick.
        Cancelling the awaiting task stops the loop; nothing is held while
        sleeping.

        Args:
            account_id: Processor account id
            poll_interval: Seconds between polls
            deadline: Seconds after which polling stops

        Returns:
            ACTIVE or FAILED on a terminal status, TIMED_OUT otherwise.
            TIMED_OUT is not a failure; the account is still in progress.

        Raises:
            NotFoundError: If no local record exists for the account
        """
        with logfire.span(
            "activation_reconciler.watch",
            account_id=account_id,
            poll_interval=poll_interval,
            deadline=deadline,
        ):
            started = self._clock()
            account: ActivationAccount | None = None
            polls = 0

            try:
                while True:
                    polls += 1
                    try:
                        account = await self.reconcile(account_id)
                    except OracleUnavailableError as e:
                        logfire.warn(
                            "Processor unavailable during poll; retrying",
                            account_id=account_id,
                            poll=polls,
                            error=str(e),
                        )

                    if account and account.status == ActivationStatus.ACTIVE:
                        return WatchResult(WatchOutcome.ACTIVE, account, polls)
                    if account and account.status == ActivationStatus.FAILED:
                        return WatchResult(WatchOutcome.FAILED, account, polls)

                    elapsed = self._clock() - started
                    if elapsed >= deadline:
                        break
                    await self._sleep(min(poll_interval, deadline - elapsed))
            except asyncio.CancelledError:
                logfire.info("Activation watch cancelled", account_id=account_id)
                raise

            if account is None:
                account = await self.account_repository.find_by_account_id(
                    account_id
                )
                if account is None:
                    raise NotFoundError("ActivationAccount", account_id)

            logfire.info(
                "Activation watch timed out",
                account_id=account_id,
                status=account.status.value,
                polls=polls,
            )
            return WatchResult(WatchOutcome.TIMED_OUT, account, polls)

    async def refresh_onboarding_link(
        self, identity_id: IdentityId
    ) -> ActivationAccount:
        """Get a fresh processor onboarding URL for an unfinished account.

        Raises:
            NotFoundError: If the identity has no account
            BusinessRuleViolationError: If the account is already terminal
            OracleUnavailableError: If the processor could not be reached
        """
        with logfire.span(
            "activation_reconciler.refresh_onboarding_link", identity_id=identity_id
        ):
            account = await self.account_repository.find_by_identity(identity_id)
            if not account:
                raise NotFoundError("ActivationAccount", identity_id)
            if account.status.is_terminal:
                raise BusinessRuleViolationError(
                    f"Account is {account.status.value}; onboarding is closed"
                )

            url = await self.oracle.create_onboarding_link(account.account_id)
            saved = await self.account_repository.update_if_status(
                account.model_copy(
                    update={
                        "onboarding_url": url,
                        "updated_at": datetime.now(timezone.utc),
                    }
                ),
                expected_status=account.status,
            )
            if saved is None:
                current = await self.account_repository.find_by_identity(identity_id)
                return (current or account).model_copy(update={"onboarding_url": url})

            logfire.info(
                "Onboarding link refreshed",
                identity_id=identity_id,
                account_id=account.account_id,
            )
            return saved

    async def get_state(self, identity_id: IdentityId) -> ActivationState:
        """Build the activation read model. Does not call the processor."""
        account = await self.account_repository.find_by_identity(identity_id)
        if not account:
            return ActivationState(
                identity_id=identity_id, status=ActivationStatus.UNCONNECTED
            )

        return ActivationState(
            identity_id=identity_id,
            status=account.status,
            account_id=account.account_id,
            charges_enabled=account.charges_enabled,
            payouts_enabled=account.payouts_enabled,
            details_submitted=account.details_submitted,
            onboarding_url=account.onboarding_url,
            updated_at=account.updated_at,
        )
