# Qlik Cloud Provider
# File: errors.py
# Version: v1

"""Exception hierarchy for the Qlik Cloud provider.

All exceptions inherit from QlikProviderError so mappers can turn any
provider-level failure into a diagnostic with a single except clause.
"""

from __future__ import annotations

from typing import List, Optional


class QlikProviderError(Exception):
    """Base exception for all provider errors."""


class ConfigurationError(QlikProviderError):
    """Raised when the provider is used without a complete configuration."""

    def __init__(self, message: str = "", *, missing: Optional[List[str]] = None) -> None:
        self.missing = list(missing or [])
        super().__init__(message)


class RemoteError(QlikProviderError):
    """Any failure reported by (or while talking to) the Qlik Cloud API.

    The message carries the upstream error text verbatim.
    """

    def __init__(
        self,
        message: str = "",
        *,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class NotFoundError(RemoteError):
    """Raised when the API answers HTTP 404 for an entity lookup."""


class UnsupportedConnectorError(QlikProviderError):
    """Raised when a connector type has no connection property mapping."""

    def __init__(self, source_type: str) -> None:
        self.source_type = source_type
        super().__init__(
            f"Connector type '{source_type}' has no connection property mapping."
        )
