"""Watch activation use case."""

from pydantic import BaseModel, Field

from gouache.application.usecase.activation.view import (
    ActivationStateView,
    account_view,
)
from gouache.application.usecase.base import BaseUseCase
from gouache.config import Settings
from gouache.domain.error import NotFoundError
from gouache.domain.service import ActivationReconciler
from gouache.domain.value import IdentityId, WatchOutcome

WATCH_MESSAGES = {
    WatchOutcome.ACTIVE: "Payments are active",
    WatchOutcome.FAILED: "The payment processor declined this account",
    WatchOutcome.TIMED_OUT: "Still pending. Check back later.",
}


class WatchActivationRequest(BaseModel):
    """Watch activation request.

    Interval and deadline default to the configured values. The deadline
    may only be shortened; the interval may not drop below the configured
    floor, so each watch costs at most deadline / floor processor calls.
    """

    identity_id: str
    poll_interval_seconds: float | None = Field(default=None, gt=0)
    deadline_seconds: float | None = Field(default=None, ge=0)


class WatchActivationResponse(BaseModel):
    """Where the watch stopped."""

    outcome: WatchOutcome
    message: str
    polls: int
    activation: ActivationStateView


class WatchActivationUseCase(BaseUseCase):
    """Use case for polling the processor until the account settles."""

    def __init__(
        self, activation_reconciler: ActivationReconciler, settings: Settings
    ) -> None:
        """Initialize watch activation use case.

        Args:
            activation_reconciler: Activation reconciler domain service
            settings: Application settings
        """
        self.activation_reconciler = activation_reconciler
        self.settings = settings

    async def execute(self, request: WatchActivationRequest) -> WatchActivationResponse:
        """Watch until terminal or the deadline.

        Raises:
            NotFoundError: If the identity has no account
        """
        identity_id = IdentityId(request.identity_id)
        state = await self.activation_reconciler.get_state(identity_id)
        if state.account_id is None:
            raise NotFoundError("ActivationAccount", identity_id)

        configured = self.settings.activation
        deadline = configured.deadline_seconds
        if request.deadline_seconds is not None:
            deadline = min(request.deadline_seconds, deadline)
        poll_interval = configured.poll_interval_seconds
        if request.poll_interval_seconds is not None:
            poll_interval = max(
                request.poll_interval_seconds, configured.min_poll_interval_seconds
            )

        result = await self.activation_reconciler.watch_until_terminal(
            state.account_id, poll_interval=poll_interval, deadline=deadline
        )
        return WatchActivationResponse(
            outcome=result.outcome,
            message=WATCH_MESSAGES[result.outcome],
            polls=result.polls,
            activation=account_view(result.account),
        )
