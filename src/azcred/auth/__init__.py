"""Credential provider interface and selection.

- :class:`CredentialProvider` -- abstract base class every strategy implements.
- :class:`ProviderRegistry` -- maps method names to provider factories.
- :func:`create_provider` -- builds the provider an
  :class:`~azcred.models.AuthConfig` selects.

Typical usage::

    from azcred.auth import create_provider
    from azcred.config import load_config_from_env

    provider = create_provider(load_config_from_env())
    credentials = await provider.acquire()
"""

from azcred.auth.base import CredentialProvider
from azcred.auth.manager import ProviderRegistry, create_default_registry, create_provider

__all__ = [
    "CredentialProvider",
    "ProviderRegistry",
    "create_default_registry",
    "create_provider",
]
