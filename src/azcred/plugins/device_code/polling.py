"""Token-endpoint response classification and the polling schedule.

:func:`classify_token_response` turns one HTTP response from the token
endpoint into a :class:`PollResult`, following :rfc:`8628` section 3.5
plus the Microsoft identity platform's spellings.  Only
:attr:`PollOutcome.PENDING` and :attr:`PollOutcome.SLOW_DOWN` keep the
loop alive; every other outcome is terminal.

:class:`PollSchedule` owns the loop's two timers: the fixed per-poll
interval and the overall deadline measured from loop start.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Optional

import httpx

from azcred.clock import Clock


class PollOutcome(enum.Enum):
    """Classification of a single token-endpoint response."""

    SUCCESS = "success"
    PENDING = "authorization_pending"
    SLOW_DOWN = "slow_down"
    EXPIRED = "expired_token"
    DECLINED = "access_denied"
    SERVER_ERROR = "server_error"
    MALFORMED = "malformed"

    @property
    def is_terminal(self) -> bool:
        return self not in (PollOutcome.PENDING, PollOutcome.SLOW_DOWN)


_ERROR_OUTCOMES: dict[str, PollOutcome] = {
    "authorization_pending": PollOutcome.PENDING,
    "slow_down": PollOutcome.SLOW_DOWN,
    "expired_token": PollOutcome.EXPIRED,
    "code_expired": PollOutcome.EXPIRED,
    "access_denied": PollOutcome.DECLINED,
    "authorization_declined": PollOutcome.DECLINED,
}


@dataclass(frozen=True)
class PollResult:
    """Outcome of one poll, with the token on success or a detail otherwise."""

    outcome: PollOutcome
    access_token: Optional[str] = field(default=None, repr=False)
    detail: str = ""


def classify_token_response(response: httpx.Response) -> PollResult:
    """Classify a token-endpoint response.

    Args:
        response: The raw response to a device code token request.

    Returns:
        A :class:`PollResult`.  Success requires a 2xx status *and* a
        non-empty ``access_token``; anything unparseable is
        :attr:`PollOutcome.MALFORMED`.
    """
    try:
        payload: Any = response.json()
    except ValueError:
        return PollResult(
            PollOutcome.MALFORMED,
            detail=f"HTTP {response.status_code} with a non-JSON body",
        )
    if not isinstance(payload, dict):
        return PollResult(
            PollOutcome.MALFORMED,
            detail=f"HTTP {response.status_code} with a non-object JSON body",
        )

    if response.is_success:
        token = payload.get("access_token")
        if isinstance(token, str) and token:
            return PollResult(PollOutcome.SUCCESS, access_token=token)
        return PollResult(
            PollOutcome.MALFORMED,
            detail="token response is missing 'access_token'",
        )

    error = payload.get("error")
    if not isinstance(error, str) or not error:
        return PollResult(
            PollOutcome.SERVER_ERROR,
            detail=f"HTTP {response.status_code} without an OAuth error code",
        )

    outcome = _ERROR_OUTCOMES.get(error, PollOutcome.SERVER_ERROR)
    description = payload.get("error_description")
    detail = f"{error}: {description}" if description else error
    return PollResult(outcome, detail=detail)


@dataclass
class PollSchedule:
    """Per-iteration interval and overall deadline for one polling loop.

    The interval never grows: a ``slow_down`` response costs one extra
    interval of waiting for that iteration only.  The deadline is
    independent of the server-advertised device code lifetime.

    Args:
        interval: Seconds to wait before each poll.
        timeout: Seconds after :attr:`started_at` at which the loop gives up.
        clock: Time source for both timers.
    """

    interval: float
    timeout: float
    clock: Clock
    started_at: float = field(init=False)
    attempts: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.started_at = self.clock.monotonic()

    def elapsed(self) -> float:
        return self.clock.monotonic() - self.started_at

    def expired(self) -> bool:
        """Whether the overall deadline has passed."""
        return self.elapsed() > self.timeout
