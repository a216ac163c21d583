"""Manual token credential provider.

Implements the ``manual_token`` method, which wraps a bearer token the
caller already holds (pasted, read from an environment variable, or
read from a file) after a basic sanity check.

See Also:
    :class:`~azcred.plugins.manual_token.plugin.ManualTokenProvider`
    :mod:`azcred.auth.base` for the provider interface contract.
"""

from azcred.plugins.manual_token.plugin import MIN_TOKEN_LENGTH, ManualTokenProvider

__all__ = ["MIN_TOKEN_LENGTH", "ManualTokenProvider"]
