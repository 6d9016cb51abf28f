# Qlik Cloud Provider
# File: tools/lifecycle.py
# Version: v1

"""Lifecycle MCP tools: one tool per resource operation and per data source.

Resource tools are named ``<type name>_<operation>``, e.g. ``qlik_space_create``.
Data source tools are named ``<type name>_data_read``, e.g.
``qlik_spaces_data_read``; a resource and a data source may share a type
name (``qlik_space``). Every tool returns the resulting state (sensitive
values masked) together with the diagnostics of the operation.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Optional, Union

from ..datasources import DataSource
from ..diagnostics import LifecycleResponse
from ..provider import QlikProvider
from ..resources import Resource

RESOURCE_OPERATIONS = ("create", "read", "update", "delete")
DATA_SOURCE_OPERATION = "data_read"

_DESCRIPTIONS = {
    "create": "Create a {label} from the planned attributes and return the new state.",
    "read": "Refresh the state of an existing {label}.",
    "update": "Replace an existing {label} with the planned attributes.",
    "delete": "Delete an existing {label}.",
}


def to_tool_result(
    target: Union[Resource, DataSource],
    operation: str,
    response: LifecycleResponse,
) -> Dict[str, Any]:
    outcome = "succeeded" if response.ok else "failed"
    return {
        "summary": f"{target.type_name} {operation} {outcome}.",
        "data": target.schema.redact(response.state),
        "diagnostics": response.diagnostics.to_list(),
    }


def _bind(
    target: Union[Resource, DataSource],
    operation: str,
) -> Callable[..., Awaitable[Dict[str, Any]]]:
    method = getattr(target, operation)

    async def run(model: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        response = await method(dict(model or {}))
        return to_tool_result(target, operation, response)

    return run


def register_tools(server: Any, provider: QlikProvider) -> None:
    """Register lifecycle tools for every resource and data source."""
    if server is None or not hasattr(server, "tool"):
        raise ValueError(
            "register_tools(server) expects an MCP Server-like object that exposes a .tool() decorator."
        )

    registered: set = set()

    def add(name: str, description: str, fn: Callable[..., Awaitable[Dict[str, Any]]]) -> None:
        if name in registered:
            raise ValueError(f"Duplicate MCP tool name: {name}")
        registered.add(name)
        server.tool(name=name, description=description)(fn)

    for type_name, resource in sorted(provider.resources().items()):
        label = resource.descriptor.label
        for operation in RESOURCE_OPERATIONS:
            add(
                f"{type_name}_{operation}",
                _DESCRIPTIONS[operation].format(label=label),
                _bind(resource, operation),
            )

    for type_name, data_source in sorted(provider.data_sources().items()):
        add(
            f"{type_name}_{DATA_SOURCE_OPERATION}",
            f"Read the {data_source.descriptor.label} data source. "
            + data_source.schema.description,
            _bind(data_source, "read"),
        )
