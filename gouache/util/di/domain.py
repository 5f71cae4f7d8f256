"""Domain layer DI providers."""

from dishka import Scope, provide

from gouache.adapter.stripe import StripeActivationOracle
from gouache.config import AuthSettings, IdentitySettings
from gouache.domain.repository import (
    ActivationAccountRepository,
    InviteRepository,
    OnboardingSessionRepository,
    ProfileRepository,
)
from gouache.domain.service import (
    ActivationReconciler,
    IdentityService,
    InviteRegistry,
    JWTService,
    OnboardingService,
)
from gouache.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_identity_service(
        self, identity_settings: IdentitySettings
    ) -> IdentityService:
        """Provide identity resolution domain service."""
        return IdentityService(
            retry_after_seconds=identity_settings.retry_after_seconds
        )

    @provide
    def get_invite_registry(
        self, invite_repository: InviteRepository
    ) -> InviteRegistry:
        """Provide invite registry domain service."""
        return InviteRegistry(invite_repository=invite_repository)

    @provide
    def get_onboarding_service(
        self,
        invite_registry: InviteRegistry,
        profile_repository: ProfileRepository,
        session_repository: OnboardingSessionRepository,
    ) -> OnboardingService:
        """Provide onboarding domain service."""
        return OnboardingService(
            invite_registry=invite_registry,
            profile_repository=profile_repository,
            session_repository=session_repository,
        )

    @provide
    def get_activation_reconciler(
        self,
        account_repository: ActivationAccountRepository,
        oracle: StripeActivationOracle,
    ) -> ActivationReconciler:
        """Provide activation reconciler domain service.

        Args:
            account_repository: Activation account repository
            oracle: Stripe oracle (real or mock, per the payments component)

        Returns:
            ActivationReconciler with the real clock and sleep
        """
        return ActivationReconciler(
            account_repository=account_repository, oracle=oracle
        )
