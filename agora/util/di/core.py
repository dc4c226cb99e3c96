"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from agora.config import AuthSettings, Settings, ThreadingSettings
from agora.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_threading_settings(self, settings: Settings) -> ThreadingSettings:
        """Provide comment threading settings."""
        return settings.threading
