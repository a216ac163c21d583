"""OAuth2 Device Authorization Grant (:rfc:`8628`) credential provider.

Implements the ``device_code`` method, designed for headless or
browserless terminals (SSH sessions, Docker containers, CI runners).
The user is shown a URL and a short code to enter on another device,
then the provider polls for authorization.

See Also:
    :class:`~azcred.plugins.device_code.plugin.DeviceCodeProvider`
    :mod:`azcred.plugins.device_code.polling` for response classification.
"""

from azcred.plugins.device_code.plugin import (
    AZURE_CLI_CLIENT_ID,
    DEFAULT_TIMEOUT,
    DeviceCodeProvider,
)
from azcred.plugins.device_code.polling import PollOutcome, classify_token_response

__all__ = [
    "AZURE_CLI_CLIENT_ID",
    "DEFAULT_TIMEOUT",
    "DeviceCodeProvider",
    "PollOutcome",
    "classify_token_response",
]
