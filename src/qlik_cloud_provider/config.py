# Qlik Cloud Provider
# File: config.py
# Version: v1

"""Configuration loading for the Qlik Cloud provider.

Provider settings come from an explicit configuration mapping merged over an
environment mapping. The environment is passed in rather than read from
``os.environ`` inside the resolver, so tests can supply fixed values.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Any, Mapping, Optional, Tuple

from .diagnostics import Diagnostics
from .errors import ConfigurationError

# attribute -> (environment variable, human label)
REQUIRED_SETTINGS = {
    "tenant_id": ("QLIK_TENANT_ID", "Tenant ID"),
    "region": ("QLIK_REGION", "Region"),
    "client_id": ("QLIK_CLIENT_ID", "Client ID"),
    "client_secret": ("QLIK_CLIENT_SECRET", "Client Secret"),
}


def _parse_bool_env(environ: Mapping[str, str], name: str, default: bool = False) -> bool:
    """Parse a boolean-like environment variable.

    Accepts 1/0, true/false, yes/no, on/off (case-insensitive).
    """
    val = environ.get(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "on"}


def _parse_int_env(
    environ: Mapping[str, str],
    name: str,
    default: int,
    min_value: int | None = None,
    max_value: int | None = None,
) -> int:
    """Parse an int environment variable with clamping and safe fallback."""
    raw = environ.get(name)
    if raw is None or not str(raw).strip():
        value = int(default)
    else:
        try:
            value = int(str(raw).strip())
        except ValueError:
            value = int(default)

    if min_value is not None and value < min_value:
        value = min_value
    if max_value is not None and value > max_value:
        value = max_value

    return value


@dataclass
class QlikConfig:
    """Configuration values required to talk to Qlik Cloud."""

    tenant_id: str
    region: str
    client_id: str
    client_secret: str

    mock_mode: bool = False
    verify_tls: bool = True
    timeout_seconds: int = 30

    @property
    def base_url(self) -> str:
        return f"https://{self.tenant_id}.{self.region}.qlikcloud.com"

    @property
    def oauth_token_url(self) -> str:
        return f"{self.base_url}/oauth/token"

    def redacted(self) -> dict:
        """Snapshot of the configuration that is safe to log or display."""
        return {
            "tenant_id": self.tenant_id,
            "region": self.region,
            "base_url": self.base_url,
            "client_id_configured": bool(self.client_id),
            "client_secret_configured": bool(self.client_secret),
            "mock_mode": self.mock_mode,
            "verify_tls": self.verify_tls,
            "timeout_seconds": self.timeout_seconds,
        }

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "QlikConfig":
        """Create configuration from environment variables only.

        Raises ConfigurationError when a required setting is missing.
        """
        cfg, diags = resolve_config({}, environ)
        if cfg is None:
            missing = [d.attribute for d in diags.errors() if d.attribute]
            raise ConfigurationError(
                "Qlik Cloud provider configuration is incomplete: "
                + ", ".join(missing),
                missing=missing,
            )
        return cfg


def resolve_config(
    config: Mapping[str, Any],
    environ: Optional[Mapping[str, str]] = None,
) -> Tuple[Optional[QlikConfig], Diagnostics]:
    """Merge provider configuration over environment defaults.

    Configuration values win when they are not None. Every required setting
    is checked before giving up, so all missing fields are reported together.
    """
    if environ is None:
        environ = os.environ

    diags = Diagnostics()
    values: dict = {}

    for attribute, (env_name, label) in REQUIRED_SETTINGS.items():
        value = config.get(attribute)
        if value is None:
            value = environ.get(env_name, "")
        value = str(value)
        values[attribute] = value

        if value == "":
            diags.add_attribute_error(
                attribute,
                f"Missing Qlik Cloud {label}",
                f"The provider cannot create the Qlik Cloud API client as there is a "
                f"missing or empty value for the Qlik Cloud {label}. "
                f"Set the {attribute} value in the configuration or use the "
                f"{env_name} environment variable. "
                "If either is already set, ensure the value is not empty.",
            )

    if diags.has_error():
        return None, diags

    cfg = QlikConfig(
        tenant_id=values["tenant_id"],
        region=values["region"],
        client_id=values["client_id"],
        client_secret=values["client_secret"],
        mock_mode=_parse_bool_env(environ, "QLIK_MOCK_MODE", default=False),
        verify_tls=_parse_bool_env(environ, "QLIK_VERIFY_TLS", default=True),
        timeout_seconds=_parse_int_env(
            environ, "QLIK_HTTP_TIMEOUT_SECONDS", default=30, min_value=1, max_value=600
        ),
    )
    return cfg, diags
