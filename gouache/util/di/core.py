"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from gouache.config import (
    ActivationSettings,
    AuthSettings,
    IdentitySettings,
    InvitationSettings,
    Settings,
)
from gouache.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide
    def provide_identity_settings(self, settings: Settings) -> IdentitySettings:
        """Provide identity resolution settings."""
        return settings.identity

    @provide
    def provide_invitation_settings(self, settings: Settings) -> InvitationSettings:
        """Provide invitation settings."""
        return settings.invitations

    @provide
    def provide_activation_settings(self, settings: Settings) -> ActivationSettings:
        """Provide payment activation settings."""
        return settings.activation
