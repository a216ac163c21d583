"""Provider registry -- maps method names to credential provider factories.

The :class:`ProviderRegistry` is where a host application turns an
:class:`~azcred.models.AuthConfig` into a
:class:`~azcred.auth.base.CredentialProvider`.  After that the caller only
ever talks to the capability interface.

For most use cases, call :func:`create_provider`, which uses a registry
pre-loaded with every built-in provider.

See Also:
    :class:`~azcred.auth.base.CredentialProvider` -- the provider interface.
"""

from __future__ import annotations

from typing import Callable

from azcred.auth.base import CredentialProvider
from azcred.exceptions import ConfigError
from azcred.models import AuthConfig

ProviderFactory = Callable[[AuthConfig], CredentialProvider]


class ProviderRegistry:
    """Registry of provider factories keyed by method name.

    Example::

        registry = ProviderRegistry()
        registry.register("manual_token", _manual_token_factory)
        provider = registry.create(AuthConfig(method="manual_token", token_source="env:TOKEN"))
    """

    def __init__(self) -> None:
        self._factories: dict[str, ProviderFactory] = {}

    def register(self, method: str, factory: ProviderFactory) -> None:
        """Register *factory* for *method*, replacing any existing entry."""
        self._factories[method] = factory

    def create(self, config: AuthConfig) -> CredentialProvider:
        """Build the provider selected by ``config.method``.

        Raises:
            ConfigError: If the method is unknown or the factory rejects
                the configuration.
        """
        factory = self._factories.get(config.method)
        if factory is None:
            available = ", ".join(self.list_methods()) or "(none)"
            raise ConfigError(
                f"No credential provider registered for method '{config.method}'. "
                f"Available methods: {available}"
            )
        return factory(config)

    def list_methods(self) -> list[str]:
        """Return the registered method names, sorted."""
        return sorted(self._factories)


def _device_code_factory(config: AuthConfig) -> CredentialProvider:
    from azcred.plugins.device_code import DeviceCodeProvider

    if not config.tenant_id:
        raise ConfigError("device_code requires 'tenant_id'")
    return DeviceCodeProvider(
        config.tenant_id,
        config.client_id,
        config.cloud,
        timeout=config.timeout_seconds,
    )


def _manual_token_factory(config: AuthConfig) -> CredentialProvider:
    from azcred.plugins.manual_token import ManualTokenProvider

    if not config.token_source:
        raise ConfigError("manual_token requires 'token_source'")
    return ManualTokenProvider.from_source(config.token_source)


def create_default_registry() -> ProviderRegistry:
    """Create a :class:`ProviderRegistry` with the built-in providers.

    - ``device_code`` -- OAuth2 device code flow.
    - ``manual_token`` -- pre-obtained bearer token.
    """
    registry = ProviderRegistry()
    registry.register("device_code", _device_code_factory)
    registry.register("manual_token", _manual_token_factory)
    return registry


def create_provider(config: AuthConfig) -> CredentialProvider:
    """Build the provider *config* selects, using the default registry."""
    return create_default_registry().create(config)
