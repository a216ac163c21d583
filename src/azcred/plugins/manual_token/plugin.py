"""Manual token provider -- accept a pre-obtained bearer token.

This module provides :class:`ManualTokenProvider`, which implements the
``manual_token`` method.  The token is validated once, at construction,
and handed back unchanged on every :meth:`~ManualTokenProvider.acquire`.

Validation is a heuristic guard against truncated or placeholder input,
not a security boundary: the token is not parsed as a JWT.

See Also:
    :class:`azcred.auth.base.CredentialProvider` for the base interface.
    :mod:`azcred.plugins.device_code` for the interactive alternative.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from azcred.auth.base import CredentialProvider
from azcred.config import resolve_credential
from azcred.exceptions import InvalidTokenError
from azcred.models import BearerToken

logger = logging.getLogger(__name__)

MIN_TOKEN_LENGTH = 20


class ManualTokenProvider(CredentialProvider):
    """Return a caller-supplied bearer token.

    Args:
        token: The bearer token.  Stored verbatim; surrounding whitespace
            is only ignored for the emptiness check.

    Raises:
        InvalidTokenError: If the token is empty, whitespace-only, or
            shorter than :data:`MIN_TOKEN_LENGTH` characters.
    """

    def __init__(self, token: str) -> None:
        if not token.strip():
            raise InvalidTokenError("Token cannot be empty")
        # JWTs are typically well over 50 characters
        if len(token) < MIN_TOKEN_LENGTH:
            raise InvalidTokenError(
                f"Token appears to be too short ({len(token)} characters, "
                f"expected at least {MIN_TOKEN_LENGTH})"
            )
        self._token = token

    @classmethod
    def from_source(cls, source: str) -> ManualTokenProvider:
        """Resolve a token from a source descriptor and validate it.

        Args:
            source: ``env:VAR``, ``file:/path``, or ``prompt``.

        Raises:
            ConfigError: If the source cannot be resolved.
            InvalidTokenError: If the resolved token fails validation.
        """
        return cls(resolve_credential(source))

    @property
    def method_name(self) -> str:
        return "Manual Token"

    async def acquire(self, cancel: Optional[asyncio.Event] = None) -> BearerToken:
        """Return the stored token as bearer credentials.  Never fails."""
        logger.debug("Using manually supplied bearer token")
        return BearerToken(token=self._token)
