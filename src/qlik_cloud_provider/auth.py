# Qlik Cloud Provider
# File: auth.py
# Version: v1

"""OAuth2 client for obtaining access tokens for Qlik Cloud."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Optional

import httpx

from .config import QlikConfig
from .errors import RemoteError

logger = logging.getLogger(__name__)


@dataclass
class OAuthClient:
    """Simple OAuth2 client using the client-credentials flow.

    Qlik Cloud machine-to-machine OAuth clients post their credentials in the
    JSON body of the token request.
    """

    config: QlikConfig
    transport: Optional[httpx.AsyncBaseTransport] = None
    _cached_token: Optional[str] = None

    async def get_access_token(self) -> str:
        """Return a valid access token.

        The token is cached in-memory until the process restarts.
        """
        if self._cached_token:
            return self._cached_token

        url = self.config.oauth_token_url
        body = {
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
            "grant_type": "client_credentials",
        }

        logger.debug("Requesting access token from %s", url)
        async with httpx.AsyncClient(
            timeout=float(self.config.timeout_seconds),
            verify=self.config.verify_tls,
            transport=self.transport,
        ) as client:
            try:
                response = await client.post(
                    url,
                    json=body,
                    headers={"Accept": "application/json"},
                )
            except httpx.RequestError as exc:
                raise RemoteError(
                    f"Error calling Qlik Cloud token endpoint at '{url}': {exc}"
                ) from exc

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            body_preview = exc.response.text[:500]
            raise RemoteError(
                f"Failed to obtain access token from '{url}' "
                f"(HTTP {status}). Check tenant_id, region, client_id "
                "and client_secret. "
                f"Response snippet: {body_preview}",
                status_code=status,
                body=exc.response.text,
            ) from exc

        try:
            data: Any = response.json()
        except ValueError as exc:
            raise RemoteError(
                f"Invalid JSON in token response from '{url}': {exc}",
                status_code=response.status_code,
                body=response.text,
            ) from exc
        if not isinstance(data, dict):
            raise RemoteError(
                f"Unexpected token response from '{url}': "
                f"expected JSON object, got {type(data).__name__}.",
                status_code=response.status_code,
                body=response.text,
            )

        token = data.get("access_token")
        if not token:
            raise RemoteError("OAuth token response did not contain 'access_token'")

        self._cached_token = token
        return token
