"""Canonical Pydantic models shared across all azcred modules.

This is the single source of truth for data shapes in the project. The
models fall into three groups:

**Deployment selection** -- :class:`Cloud`, which fixes the login endpoint
and API scope a device code flow talks to.

**Flow artifacts** -- :class:`DeviceCodeEndpoints` (derived per acquisition),
:class:`DeviceAuthorizationDetails` (issued by the server per acquisition,
never persisted) and the :class:`Credentials` result, currently only
:class:`BearerToken`.

**Configuration** -- :class:`AuthConfig`, consumed by
:func:`~azcred.auth.manager.create_provider` to pick a provider.

All models use Pydantic v2. Every model here is frozen: a provider's
identity and a flow's server-issued data never change after creation.
"""

from __future__ import annotations

import enum
from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# --- Cloud ---


class Cloud(str, enum.Enum):
    """Cloud deployment a token is requested for.

    Each variant maps deterministically to a login endpoint and to the
    scope of the Cognitive Services API in that cloud.  Values are matched
    case-insensitively, so ``Cloud("China")`` is :attr:`CHINA`.
    """

    GLOBAL = "global"
    CHINA = "china"

    @classmethod
    def _missing_(cls, value: object) -> Optional[Cloud]:
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None

    @property
    def login_endpoint(self) -> str:
        """Base URL of the identity platform, without a trailing slash."""
        return _LOGIN_ENDPOINTS[self]

    @property
    def scope(self) -> str:
        """``.default`` scope of the Cognitive Services API for this cloud."""
        return _SCOPES[self]


_LOGIN_ENDPOINTS: dict[Cloud, str] = {
    Cloud.GLOBAL: "https://login.microsoftonline.com",
    Cloud.CHINA: "https://login.chinacloudapi.cn",
}

_SCOPES: dict[Cloud, str] = {
    Cloud.GLOBAL: "https://cognitiveservices.azure.com/.default",
    Cloud.CHINA: "https://cognitiveservices.azure.cn/.default",
}


# --- Credentials ---


class Credentials(BaseModel):
    """Result of a successful acquisition.

    Tagged by ``kind`` so new credential types (e.g. API keys) can be added
    without changing the :class:`~azcred.auth.base.CredentialProvider`
    contract.  Subclasses render themselves into HTTP headers via
    :meth:`as_headers`.
    """

    model_config = ConfigDict(frozen=True)

    kind: str

    def as_headers(self) -> dict[str, str]:
        """Return the HTTP headers that present this credential."""
        raise NotImplementedError


class BearerToken(Credentials):
    """An opaque bearer token.

    The token is excluded from ``repr()`` so credentials can be logged
    or printed in tracebacks without leaking the secret.

    Example::

        creds = BearerToken(token="eyJ0eXAi...")
        headers = creds.as_headers()
        # {"Authorization": "Bearer eyJ0eXAi..."}
    """

    kind: Literal["bearer_token"] = "bearer_token"
    token: str = Field(repr=False)

    def as_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


# --- Device code flow ---


class DeviceCodeEndpoints(BaseModel):
    """The three identity endpoints derived from a cloud and tenant."""

    model_config = ConfigDict(frozen=True)

    device_authorization_url: str
    token_url: str
    authorization_url: str


class DeviceAuthorizationDetails(BaseModel):
    """Server response to a device authorization request (:rfc:`8628` section 3.2).

    Lives for exactly one polling loop.  Unknown fields are ignored;
    ``verification_url`` (the pre-RFC spelling some servers still emit)
    is accepted for ``verification_uri``.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    device_code: str = Field(repr=False)
    user_code: str
    verification_uri: str = Field(
        validation_alias=AliasChoices("verification_uri", "verification_url")
    )
    interval: int = Field(default=5, description="Minimum seconds between polls")
    expires_in: int = Field(default=900, description="Device code lifetime in seconds")
    message: Optional[str] = Field(
        default=None, description="Server-composed instructions, if any"
    )


# --- Configuration ---


class AuthConfig(BaseModel):
    """Selects and parameterises a credential provider.

    Example::

        AuthConfig(method="device_code", tenant_id="contoso.onmicrosoft.com")
        AuthConfig(method="manual_token", token_source="env:API_TOKEN")
    """

    model_config = ConfigDict(frozen=True)

    method: str = Field(
        default="device_code",
        description="Provider to use: device_code or manual_token",
    )
    tenant_id: Optional[str] = Field(
        default=None, description="Directory (tenant) ID or domain for device_code"
    )
    client_id: Optional[str] = Field(
        default=None,
        description="OAuth client ID; defaults to the Azure CLI public client",
    )
    cloud: Cloud = Cloud.GLOBAL
    token_source: Optional[str] = Field(
        default=None,
        description="Token source for manual_token: env:VAR, file:/path, prompt",
    )
    timeout_seconds: float = Field(
        default=900.0, gt=0, description="Overall device code polling ceiling"
    )
