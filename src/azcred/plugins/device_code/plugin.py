"""OAuth2 Device Authorization Grant (:rfc:`8628`) provider for Azure.

For headless terminals (SSH, Docker, CI) where a browser cannot be opened
locally.  Works like ``az login --use-device-code``.

Flow:
    1. Derive the ``devicecode``, ``token`` and ``authorize`` endpoints from
       the cloud's login endpoint and the tenant.
    2. POST to the ``devicecode`` endpoint to obtain ``device_code`` +
       ``user_code``.
    3. Print instructions: "Please visit {verification_uri} and enter code
       {user_code}".
    4. Poll the ``token`` endpoint until the user authorizes, declines, the
       code expires, or the 15 minute ceiling passes.

Only the access token is kept.  Refresh tokens, ID tokens and expiry
metadata in the token response are discarded, and nothing is persisted:
every :meth:`~DeviceCodeProvider.acquire` runs the full handshake again.

See Also:
    :class:`azcred.auth.base.CredentialProvider` for the base interface.
    :mod:`azcred.plugins.manual_token` for the non-interactive alternative.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Callable, Optional, Union

import httpx
from pydantic import ValidationError

from azcred import output
from azcred.auth.base import CredentialProvider
from azcred.clock import Clock, SystemClock, run_cancellable
from azcred.exceptions import AuthFailedError, AuthFailureReason
from azcred.models import (
    BearerToken,
    Cloud,
    DeviceAuthorizationDetails,
    DeviceCodeEndpoints,
)
from azcred.plugins.device_code.polling import (
    PollOutcome,
    PollSchedule,
    classify_token_response,
)

logger = logging.getLogger(__name__)

AZURE_CLI_CLIENT_ID = "04b07795-8ddb-461a-bbee-02f9e1bf7b46"
"""Azure CLI's well-known public client ID."""

DEVICE_CODE_GRANT_TYPE = "urn:ietf:params:oauth:grant-type:device_code"

DEFAULT_TIMEOUT = 15 * 60
"""Overall polling ceiling in seconds, independent of the code's lifetime."""

REQUEST_TIMEOUT = 30.0

# RFC 3986 pchar: unreserved / pct-encoded / sub-delims / ":" / "@"
_PATH_SEGMENT = re.compile(r"(?:[A-Za-z0-9\-._~!$&'()*+,;=:@]|%[0-9A-Fa-f]{2})+")

_ACCEPT_JSON = {"Accept": "application/json"}

InstructionsCallback = Callable[[DeviceAuthorizationDetails], None]


class DeviceCodeProvider(CredentialProvider):
    """Authenticate via the OAuth2 Device Authorization Grant against Azure AD.

    The user is shown a short code to enter at a verification URI on any
    device while this provider polls the token endpoint.

    Args:
        tenant_id: Directory (tenant) ID or domain, e.g.
            ``"contoso.onmicrosoft.com"``.  Validated lazily, on each
            :meth:`acquire`.
        client_id: OAuth client ID.  Defaults to
            :data:`AZURE_CLI_CLIENT_ID`.
        cloud: Which cloud to sign in to; fixes the login endpoint and the
            requested scope.
        timeout: Overall polling ceiling in seconds.
        http_client: Optional :class:`httpx.AsyncClient` to send requests
            through.  It is used as-is and never closed by the provider.
            When omitted, a client is opened and closed per acquisition.
        clock: Time source for the polling timers.  Defaults to
            :class:`~azcred.clock.SystemClock`.
        on_instructions: Optional callback that receives the
            :class:`~azcred.models.DeviceAuthorizationDetails` instead of
            the default stderr banner.

    Example::

        provider = DeviceCodeProvider("contoso.onmicrosoft.com", cloud=Cloud.CHINA)
        creds = await provider.acquire()
        headers = creds.as_headers()
    """

    def __init__(
        self,
        tenant_id: str,
        client_id: Optional[str] = None,
        cloud: Union[Cloud, str] = Cloud.GLOBAL,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
        clock: Optional[Clock] = None,
        on_instructions: Optional[InstructionsCallback] = None,
    ) -> None:
        self._tenant_id = tenant_id
        self._client_id = client_id if client_id is not None else AZURE_CLI_CLIENT_ID
        self._cloud = Cloud(cloud)
        self._scope = self._cloud.scope
        self._timeout = timeout
        self._http_client = http_client
        self._clock = clock or SystemClock()
        self._on_instructions = on_instructions

    @property
    def method_name(self) -> str:
        return "Device Code Flow"

    @property
    def tenant_id(self) -> str:
        return self._tenant_id

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def cloud(self) -> Cloud:
        return self._cloud

    @property
    def scope(self) -> str:
        return self._scope

    @property
    def timeout(self) -> float:
        return self._timeout

    def endpoints(self) -> DeviceCodeEndpoints:
        """Derive the identity endpoints for this provider's cloud and tenant.

        Returns:
            The ``devicecode``, ``token`` and ``authorize`` URLs under
            ``{login_endpoint}/{tenant_id}/oauth2/v2.0/``.

        Raises:
            AuthFailedError: With reason ``INVALID_URL`` if the tenant is not
                a single valid URL path segment or the URL does not parse.
        """
        base = self._cloud.login_endpoint
        return DeviceCodeEndpoints(
            device_authorization_url=_build_endpoint(
                base, self._tenant_id, "devicecode", "device auth"
            ),
            token_url=_build_endpoint(base, self._tenant_id, "token", "token"),
            authorization_url=_build_endpoint(base, self._tenant_id, "authorize", "auth"),
        )

    async def acquire(self, cancel: Optional[asyncio.Event] = None) -> BearerToken:
        """Run the device code flow and return the access token.

        Args:
            cancel: Optional event that abandons the flow at its next (or
                current) sleep or network call.

        Returns:
            :class:`~azcred.models.BearerToken` holding only the access token.

        Raises:
            AuthFailedError: If the endpoints are invalid, the handshake
                fails, the network fails while polling, the user declines,
                the code expires, the server rejects the request, or the
                polling ceiling passes.
            AuthCancelledError: If *cancel* is set mid-flow.
        """
        endpoints = self.endpoints()
        logger.info(
            "Starting device code flow (cloud=%s, tenant=%s)",
            self._cloud.value,
            self._tenant_id,
        )

        if self._http_client is not None:
            token = await self._run_flow(self._http_client, endpoints, cancel)
        else:
            async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT) as client:
                token = await self._run_flow(client, endpoints, cancel)

        logger.info("Device code flow completed")
        return BearerToken(token=token)

    async def _run_flow(
        self,
        client: httpx.AsyncClient,
        endpoints: DeviceCodeEndpoints,
        cancel: Optional[asyncio.Event],
    ) -> str:
        details = await self._request_device_code(
            client, endpoints.device_authorization_url, cancel
        )
        self._display_instructions(details)
        token = await self._poll_for_token(client, endpoints.token_url, details, cancel)
        if self._on_instructions is None:
            output.success("✓ Authentication successful!")
        return token

    async def _request_device_code(
        self,
        client: httpx.AsyncClient,
        device_auth_url: str,
        cancel: Optional[asyncio.Event],
    ) -> DeviceAuthorizationDetails:
        """POST to the device authorization endpoint.

        Not retried: any failure ends the acquisition.

        Returns:
            The parsed :class:`~azcred.models.DeviceAuthorizationDetails`.

        Raises:
            AuthFailedError: With reason ``HANDSHAKE`` on network errors,
                non-2xx responses, or a response missing required fields.
        """
        data = {"client_id": self._client_id, "scope": self._scope}
        try:
            response = await run_cancellable(
                client.post(device_auth_url, data=data, headers=_ACCEPT_JSON),
                cancel,
            )
        except httpx.HTTPError as exc:
            raise AuthFailedError(
                f"Failed to initiate device code flow: {exc}",
                AuthFailureReason.HANDSHAKE,
            ) from exc

        if not response.is_success:
            raise AuthFailedError(
                f"Device code request failed with status {response.status_code}: "
                f"{_describe_error(response)}",
                AuthFailureReason.HANDSHAKE,
            )

        try:
            return DeviceAuthorizationDetails.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise AuthFailedError(
                f"Device code response was malformed: {exc}",
                AuthFailureReason.HANDSHAKE,
            ) from exc

    def _display_instructions(self, details: DeviceAuthorizationDetails) -> None:
        """Show the verification URI and user code, once, before polling."""
        if self._on_instructions is not None:
            self._on_instructions(details)
            return
        output.device_instructions(details.verification_uri, details.user_code)
        if details.message:
            output.debug(details.message)

    async def _poll_for_token(
        self,
        client: httpx.AsyncClient,
        token_url: str,
        details: DeviceAuthorizationDetails,
        cancel: Optional[asyncio.Event],
    ) -> str:
        """Poll the token endpoint until a terminal outcome or the deadline.

        Each iteration checks the deadline, sleeps one interval, then sends
        one token request.  ``authorization_pending`` continues immediately;
        ``slow_down`` waits one extra interval first, without growing the
        interval for later iterations.

        Returns:
            The access token.

        Raises:
            AuthFailedError: On any terminal outcome other than success.
        """
        schedule = PollSchedule(
            interval=max(details.interval, 1),
            timeout=self._timeout,
            clock=self._clock,
        )
        data = {
            "grant_type": DEVICE_CODE_GRANT_TYPE,
            "client_id": self._client_id,
            "device_code": details.device_code,
        }

        while True:
            if schedule.expired():
                raise AuthFailedError(
                    f"Authentication timeout: sign-in was not completed within "
                    f"{_format_duration(self._timeout)}. Please try again.",
                    AuthFailureReason.TIMEOUT,
                )

            await run_cancellable(self._clock.sleep(schedule.interval), cancel)

            schedule.attempts += 1
            try:
                response = await run_cancellable(
                    client.post(token_url, data=data, headers=_ACCEPT_JSON),
                    cancel,
                )
            except httpx.HTTPError as exc:
                raise AuthFailedError(
                    f"Network error during token request: {exc}",
                    AuthFailureReason.NETWORK,
                ) from exc

            result = classify_token_response(response)
            logger.debug(
                "Token poll %d after %.0fs: %s",
                schedule.attempts,
                schedule.elapsed(),
                result.outcome.value,
            )

            if result.outcome is PollOutcome.SUCCESS:
                assert result.access_token is not None
                return result.access_token

            if not result.outcome.is_terminal:
                if result.outcome is PollOutcome.SLOW_DOWN:
                    await run_cancellable(self._clock.sleep(schedule.interval), cancel)
                continue

            raise _failure_for_outcome(result.outcome, result.detail)


def _failure_for_outcome(outcome: PollOutcome, detail: str) -> AuthFailedError:
    if outcome is PollOutcome.EXPIRED:
        return AuthFailedError(
            "Device code expired before sign-in was completed. Please try again.",
            AuthFailureReason.EXPIRED,
        )
    if outcome is PollOutcome.DECLINED:
        return AuthFailedError(
            "User declined authorization. Sign in again and accept the "
            "requested permissions.",
            AuthFailureReason.DECLINED,
        )
    if outcome is PollOutcome.MALFORMED:
        return AuthFailedError(
            f"Token request failed: {detail}",
            AuthFailureReason.MALFORMED_RESPONSE,
        )
    return AuthFailedError(
        f"Server rejected the token request ({detail}). Contact your "
        "administrator if this persists.",
        AuthFailureReason.SERVER_ERROR,
    )


def _build_endpoint(base: str, tenant_id: str, leaf: str, label: str) -> str:
    url = f"{base}/{tenant_id}/oauth2/v2.0/{leaf}"
    if not _PATH_SEGMENT.fullmatch(tenant_id) or tenant_id in (".", ".."):
        raise AuthFailedError(
            f"Invalid {label} URL {url!r}: tenant ID must be a single URL path segment",
            AuthFailureReason.INVALID_URL,
        )
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise AuthFailedError(
            f"Invalid {label} URL: {exc}", AuthFailureReason.INVALID_URL
        ) from exc
    if parsed.scheme not in ("https", "http") or not parsed.host:
        raise AuthFailedError(
            f"Invalid {label} URL {url!r}: not an absolute HTTP(S) URL",
            AuthFailureReason.INVALID_URL,
        )
    return url


def _describe_error(response: httpx.Response) -> str:
    """Summarise an OAuth error body, falling back to the raw text."""
    try:
        payload = response.json()
    except ValueError:
        return response.text[:200] or "(empty body)"
    if isinstance(payload, dict) and payload.get("error"):
        description = payload.get("error_description")
        return f"{payload['error']}: {description}" if description else str(payload["error"])
    return response.text[:200]


def _format_duration(seconds: float) -> str:
    if seconds >= 60 and seconds % 60 == 0:
        minutes = int(seconds // 60)
        return f"{minutes} minute{'s' if minutes != 1 else ''}"
    return f"{seconds:g} seconds"
