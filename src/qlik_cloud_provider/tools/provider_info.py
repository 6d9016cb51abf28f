# Qlik Cloud Provider
# File: tools/provider_info.py
# Version: v1

"""Provider-level MCP tools (schemas and redacted configuration)."""

from __future__ import annotations

from typing import Any, Dict

from ..provider import QlikProvider


def provider_info(provider: QlikProvider) -> Dict[str, Any]:
    """Redacted snapshot of the provider configuration (no secrets)."""
    config = provider.config.redacted() if provider.config else None
    types: Dict[str, Any] = {"resources": [], "data_sources": []}
    if provider.configured:
        types = {
            "resources": sorted(provider.resources()),
            "data_sources": sorted(provider.data_sources()),
        }

    status = "configured" if provider.configured else "not_configured"
    return {
        "summary": f"Qlik Cloud provider {provider.version}: {status}",
        "data": {
            "version": provider.version,
            "configured": provider.configured,
            "config": config,
            **types,
        },
        "meta": {},
    }


def register_tools(server: Any, provider: QlikProvider) -> None:
    """Register provider-level tools on the given MCP server."""

    @server.tool(
        name="qlik_provider_schema",
        description="Return the attribute schemas of the provider, its resources and data sources.",
    )
    async def mcp_provider_schema() -> Dict[str, Any]:
        return {
            "summary": "Qlik Cloud provider schemas.",
            "data": QlikProvider.describe(),
            "meta": {},
        }

    @server.tool(
        name="qlik_provider_info",
        description="Return high-level, redacted provider configuration info (no secrets).",
    )
    async def mcp_provider_info() -> Dict[str, Any]:
        return provider_info(provider)
