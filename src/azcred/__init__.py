"""azcred -- acquire bearer credentials for Azure Cognitive Services APIs.

Two interchangeable strategies sit behind one
:class:`~azcred.auth.base.CredentialProvider` interface:

- :class:`~azcred.plugins.device_code.DeviceCodeProvider` -- interactive
  OAuth2 device code flow the user completes in a browser.
- :class:`~azcred.plugins.manual_token.ManualTokenProvider` -- a token the
  caller already holds.

Typical usage::

    from azcred import Cloud, DeviceCodeProvider

    provider = DeviceCodeProvider("contoso.onmicrosoft.com", cloud=Cloud.GLOBAL)
    credentials = await provider.acquire()
    headers = credentials.as_headers()

Modules:
    models: Pydantic models shared across the package.
    config: Credential sources and ``AZCRED_*`` environment configuration.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stderr output for sign-in instructions, with Rich support.
    clock: Injectable time source and cancellation for polling.
"""

__version__ = "0.1.0"

from azcred.auth import CredentialProvider, ProviderRegistry, create_provider  # noqa: E402
from azcred.exceptions import (  # noqa: E402
    AuthCancelledError,
    AuthError,
    AuthFailedError,
    AuthFailureReason,
    AzcredError,
    ConfigError,
    InvalidTokenError,
)
from azcred.models import AuthConfig, BearerToken, Cloud, Credentials  # noqa: E402
from azcred.plugins.device_code import DeviceCodeProvider  # noqa: E402
from azcred.plugins.manual_token import ManualTokenProvider  # noqa: E402

__all__ = [
    "AuthCancelledError",
    "AuthConfig",
    "AuthError",
    "AuthFailedError",
    "AuthFailureReason",
    "AzcredError",
    "BearerToken",
    "Cloud",
    "ConfigError",
    "CredentialProvider",
    "Credentials",
    "DeviceCodeProvider",
    "InvalidTokenError",
    "ManualTokenProvider",
    "ProviderRegistry",
    "create_provider",
    "__version__",
]
