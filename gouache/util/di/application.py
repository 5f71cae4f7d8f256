"""Application layer DI providers."""

from dishka import Scope, provide

from gouache.application.usecase.activation import (
    ActivateUseCase,
    GetActivationStateUseCase,
    ReconcileActivationUseCase,
    RefreshOnboardingLinkUseCase,
    WatchActivationUseCase,
)
from gouache.application.usecase.identity import GetCurrentIdentityUseCase
from gouache.application.usecase.invite import (
    GetInviteStateUseCase,
    IssueInviteUseCase,
    ListInvitesUseCase,
    RevokeInviteUseCase,
)
from gouache.application.usecase.onboarding import (
    AdvanceOnboardingUseCase,
    FinalizeOnboardingUseCase,
    GetOnboardingSessionUseCase,
    RetreatOnboardingUseCase,
    StartOnboardingUseCase,
)
from gouache.config import Settings
from gouache.domain.service import (
    ActivationReconciler,
    IdentityService,
    InviteRegistry,
    JWTService,
    OnboardingService,
)
from gouache.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Identity use cases
    @provide
    def get_current_identity_use_case(
        self, jwt_service: JWTService, identity_service: IdentityService
    ) -> GetCurrentIdentityUseCase:
        """Provide get current identity use case."""
        return GetCurrentIdentityUseCase(
            jwt_service=jwt_service, identity_service=identity_service
        )

    # Invite use cases
    @provide
    def get_invite_state_use_case(
        self, invite_registry: InviteRegistry
    ) -> GetInviteStateUseCase:
        """Provide get invite state use case."""
        return GetInviteStateUseCase(invite_registry=invite_registry)

    @provide
    def get_issue_invite_use_case(
        self, invite_registry: InviteRegistry, settings: Settings
    ) -> IssueInviteUseCase:
        """Provide issue invite use case."""
        return IssueInviteUseCase(invite_registry=invite_registry, settings=settings)

    @provide
    def get_list_invites_use_case(
        self, invite_registry: InviteRegistry, settings: Settings
    ) -> ListInvitesUseCase:
        """Provide list invites use case."""
        return ListInvitesUseCase(invite_registry=invite_registry, settings=settings)

    @provide
    def get_revoke_invite_use_case(
        self, invite_registry: InviteRegistry, settings: Settings
    ) -> RevokeInviteUseCase:
        """Provide revoke invite use case."""
        return RevokeInviteUseCase(invite_registry=invite_registry, settings=settings)

    # Onboarding use cases
    @provide
    def get_start_onboarding_use_case(
        self, onboarding_service: OnboardingService
    ) -> StartOnboardingUseCase:
        """Provide start onboarding use case."""
        return StartOnboardingUseCase(onboarding_service=onboarding_service)

    @provide
    def get_advance_onboarding_use_case(
        self, onboarding_service: OnboardingService
    ) -> AdvanceOnboardingUseCase:
        """Provide advance onboarding use case."""
        return AdvanceOnboardingUseCase(onboarding_service=onboarding_service)

    @provide
    def get_retreat_onboarding_use_case(
        self, onboarding_service: OnboardingService
    ) -> RetreatOnboardingUseCase:
        """Provide retreat onboarding use case."""
        return RetreatOnboardingUseCase(onboarding_service=onboarding_service)

    @provide
    def get_finalize_onboarding_use_case(
        self, onboarding_service: OnboardingService
    ) -> FinalizeOnboardingUseCase:
        """Provide finalize onboarding use case."""
        return FinalizeOnboardingUseCase(onboarding_service=onboarding_service)

    @provide
    def get_onboarding_session_use_case(
        self, onboarding_service: OnboardingService
    ) -> GetOnboardingSessionUseCase:
        """Provide get onboarding session use case."""
        return GetOnboardingSessionUseCase(onboarding_service=onboarding_service)

    # Activation use cases
    @provide
    def get_activate_use_case(
        self, activation_reconciler: ActivationReconciler
    ) -> ActivateUseCase:
        """Provide activate use case."""
        return ActivateUseCase(activation_reconciler=activation_reconciler)

    @provide
    def get_activation_state_use_case(
        self, activation_reconciler: ActivationReconciler
    ) -> GetActivationStateUseCase:
        """Provide get activation state use case."""
        return GetActivationStateUseCase(activation_reconciler=activation_reconciler)

    @provide
    def get_reconcile_activation_use_case(
        self, activation_reconciler: ActivationReconciler
    ) -> ReconcileActivationUseCase:
        """Provide reconcile activation use case."""
        return ReconcileActivationUseCase(activation_reconciler=activation_reconciler)

    @provide
    def get_watch_activation_use_case(
        self, activation_reconciler: ActivationReconciler, settings: Settings
    ) -> WatchActivationUseCase:
        """Provide watch activation use case."""
        return WatchActivationUseCase(
            activation_reconciler=activation_reconciler, settings=settings
        )

    @provide
    def get_refresh_onboarding_link_use_case(
        self, activation_reconciler: ActivationReconciler
    ) -> RefreshOnboardingLinkUseCase:
        """Provide refresh onboarding link use case."""
        return RefreshOnboardingLinkUseCase(
            activation_reconciler=activation_reconciler
        )
