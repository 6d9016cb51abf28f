# Qlik Cloud Provider
# File: tools/__init__.py
# Version: v1

"""Helpers for registering MCP tools."""

from __future__ import annotations

from typing import Any

from ..provider import QlikProvider
from . import lifecycle, provider_info


def register_all_tools(server: Any, provider: QlikProvider) -> None:
    """Register all MCP tools exposed by this server."""
    provider_info.register_tools(server, provider)
    lifecycle.register_tools(server, provider)
