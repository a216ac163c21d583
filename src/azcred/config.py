"""Configuration helpers: credential sources and environment-driven settings.

azcred keeps no files of its own.  Configuration reaches it in one of two
ways:

1. Directly, as an :class:`~azcred.models.AuthConfig` built by the host
   application.
2. From the process environment via :func:`load_config_from_env`, which
   reads the ``AZCRED_*`` variables listed below.

Environment variables:

- ``AZCRED_METHOD`` -- ``device_code`` (default) or ``manual_token``.
- ``AZCRED_TENANT_ID`` -- tenant for the device code flow.
- ``AZCRED_CLIENT_ID`` -- optional OAuth client ID override.
- ``AZCRED_CLOUD`` -- ``global`` (default) or ``china``.
- ``AZCRED_TOKEN_SOURCE`` -- credential source for ``manual_token``.
- ``AZCRED_TIMEOUT`` -- polling ceiling in seconds (default 900).

Secrets are never placed in configuration directly; they are referenced
through a *source* descriptor and resolved by :func:`resolve_credential`.
"""

from __future__ import annotations

import getpass
import os
import sys
from pathlib import Path
from typing import Mapping, Optional

from pydantic import ValidationError

from azcred.exceptions import ConfigError
from azcred.models import AuthConfig, Cloud

ENV_PREFIX = "AZCRED_"


def resolve_credential(source: str) -> str:
    """Resolve a credential from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace
        - ``"prompt"`` -- prompts user interactively (requires a TTY)

    Args:
        source: The source descriptor string.

    Returns:
        The resolved credential string.

    Raises:
        ConfigError: If the source can't be resolved.
    """
    if source.startswith("env:"):
        var_name = source[4:]
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        file_path = source[5:]
        path = Path(file_path).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    if source == "prompt":
        if not sys.stdin.isatty():
            raise ConfigError(
                "Cannot prompt for credentials: stdin is not a TTY (source: prompt)"
            )
        return getpass.getpass("Paste token: ")

    raise ConfigError(f"Unknown credential source format: {source}")


def load_config_from_env(environ: Optional[Mapping[str, str]] = None) -> AuthConfig:
    """Build an :class:`~azcred.models.AuthConfig` from ``AZCRED_*`` variables.

    Args:
        environ: Mapping to read instead of :data:`os.environ` (for tests
            and embedding).

    Returns:
        The parsed configuration.  Unset variables take the model defaults.

    Raises:
        ConfigError: If ``AZCRED_CLOUD`` names an unknown cloud or any value
            fails validation.
    """
    env = os.environ if environ is None else environ

    def get(name: str) -> Optional[str]:
        value = env.get(ENV_PREFIX + name)
        if value is None or not value.strip():
            return None
        return value.strip()

    values: dict[str, object] = {}
    method = get("METHOD")
    if method is not None:
        values["method"] = method.lower()
    for env_name, field_name in (
        ("TENANT_ID", "tenant_id"),
        ("CLIENT_ID", "client_id"),
        ("TOKEN_SOURCE", "token_source"),
        ("TIMEOUT", "timeout_seconds"),
    ):
        value = get(env_name)
        if value is not None:
            values[field_name] = value

    cloud = get("CLOUD")
    if cloud is not None:
        try:
            values["cloud"] = Cloud(cloud)
        except ValueError:
            choices = ", ".join(c.value for c in Cloud)
            raise ConfigError(
                f"Unknown cloud '{cloud}' in {ENV_PREFIX}CLOUD (expected one of: {choices})"
            ) from None

    try:
        return AuthConfig(**values)  # type: ignore[arg-type]
    except ValidationError as exc:
        raise ConfigError(f"Invalid {ENV_PREFIX}* configuration: {exc}") from exc
