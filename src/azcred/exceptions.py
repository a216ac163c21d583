"""Exception hierarchy for azcred.

All exceptions inherit from :class:`AzcredError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`azcred.exit_codes`.
Every failure of :meth:`~azcred.auth.base.CredentialProvider.acquire`
surfaces as an :class:`AuthError` subclass; nothing is swallowed.

Subclass hierarchy::

    AzcredError (exit 1)
    +-- ConfigError             (exit 1)
    +-- AuthError               (exit 3)
        +-- InvalidTokenError   (exit 3)
        +-- AuthFailedError     (exit 3)
        +-- AuthCancelledError  (exit 130)
"""

from __future__ import annotations

import enum

from azcred.exit_codes import EXIT_AUTH_FAILURE, EXIT_CANCELLED, EXIT_GENERIC_FAILURE


class AzcredError(Exception):
    """Base exception for all azcred errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`azcred.exit_codes`.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(AzcredError):
    """Raised for configuration problems (unknown method, bad cloud, unresolvable credential source)."""

    exit_code = EXIT_GENERIC_FAILURE


class AuthError(AzcredError):
    """Raised when credentials cannot be acquired."""

    exit_code = EXIT_AUTH_FAILURE


class InvalidTokenError(AuthError):
    """Raised when a caller-supplied token fails local validation (empty or too short)."""


class AuthFailureReason(str, enum.Enum):
    """Why a device code flow ended without a token.

    Each reason implies a different corrective action for the user, so
    callers can branch on it instead of parsing the message.
    """

    INVALID_URL = "invalid_url"
    HANDSHAKE = "handshake"
    NETWORK = "network"
    EXPIRED = "expired"
    DECLINED = "declined"
    SERVER_ERROR = "server_error"
    MALFORMED_RESPONSE = "malformed_response"
    TIMEOUT = "timeout"


class AuthFailedError(AuthError):
    """Raised when the device code flow terminates without issuing a token.

    Args:
        message: Human-readable cause.
        reason: Machine-readable classification of the failure.
    """

    def __init__(self, message: str, reason: AuthFailureReason):
        super().__init__(message)
        self.reason = reason


class AuthCancelledError(AuthError):
    """Raised when the caller's cancellation event fires mid-flow."""

    exit_code = EXIT_CANCELLED
