# Qlik Cloud Provider
# File: tests/test_provider_and_tools.py
# Version: v1

"""Provider configuration and MCP tool registration."""

from __future__ import annotations

from typing import Any, Callable, Dict

import pytest
from mcp.server.fastmcp import FastMCP

from qlik_cloud_provider.client import QlikCloudClient
from qlik_cloud_provider.errors import ConfigurationError
from qlik_cloud_provider.mock import MockQlikClient
from qlik_cloud_provider.provider import QlikProvider
from qlik_cloud_provider.schema import REDACTED
from qlik_cloud_provider.tools import register_all_tools
from qlik_cloud_provider.tools import lifecycle
from qlik_cloud_provider.tools.lifecycle import register_tools
from qlik_cloud_provider.tools.provider_info import provider_info

MOCK_ENV = {
    "QLIK_TENANT_ID": "acme",
    "QLIK_REGION": "eu",
    "QLIK_CLIENT_ID": "client-id",
    "QLIK_CLIENT_SECRET": "super-secret",
    "QLIK_MOCK_MODE": "true",
}

RESOURCE_TYPES = [
    "qlik_data_app",
    "qlik_data_app_source_selection",
    "qlik_data_connection",
    "qlik_data_project",
    "qlik_space",
]

DATA_SOURCE_TYPES = [
    "qlik_data_connections",
    "qlik_data_gateway",
    "qlik_source_entities",
    "qlik_space",
    "qlik_spaces",
]


class DummyServer:
    """Collects tools registered through the FastMCP decorator interface."""

    def __init__(self) -> None:
        self.tools: Dict[str, Callable[..., Any]] = {}
        self.descriptions: Dict[str, str] = {}

    def tool(self, name: str, description: str = "") -> Callable:
        def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
            self.tools[name] = fn
            self.descriptions[name] = description
            return fn

        return decorator


@pytest.fixture
def provider() -> QlikProvider:
    p = QlikProvider()
    diags = p.configure({}, MOCK_ENV)
    assert not diags.has_error()
    return p


def test_configure_in_mock_mode(provider: QlikProvider) -> None:
    assert provider.configured
    assert isinstance(provider.client, MockQlikClient)
    assert sorted(provider.resources()) == RESOURCE_TYPES
    assert sorted(provider.data_sources()) == DATA_SOURCE_TYPES


def test_resources_share_one_client(provider: QlikProvider) -> None:
    clients = {id(r.client) for r in provider.resources().values()}
    clients |= {id(d.client) for d in provider.data_sources().values()}
    assert clients == {id(provider.client)}


def test_missing_settings_produce_one_diagnostic_each() -> None:
    p = QlikProvider()

    diags = p.configure({}, {})

    assert [d.attribute for d in diags.errors()] == [
        "tenant_id",
        "region",
        "client_id",
        "client_secret",
    ]
    assert not p.configured
    with pytest.raises(ConfigurationError):
        p.resources()
    with pytest.raises(ConfigurationError):
        p.data_sources()


def test_explicit_configuration_overrides_environment() -> None:
    p = QlikProvider()

    diags = p.configure({"tenant_id": "other", "region": "us"}, MOCK_ENV)

    assert not diags.has_error()
    assert p.config.tenant_id == "other"
    assert p.config.base_url == "https://other.us.qlikcloud.com"
    assert p.config.client_secret == "super-secret"


def test_unknown_provider_argument_is_rejected() -> None:
    p = QlikProvider()

    diags = p.configure({"tenant": "acme"}, MOCK_ENV)

    assert diags.errors()[0].summary == "Unsupported argument"
    assert not p.configured


def test_injected_client_is_used(mock_client: MockQlikClient) -> None:
    p = QlikProvider()
    env = dict(MOCK_ENV)
    del env["QLIK_MOCK_MODE"]

    p.configure({}, env, client=mock_client)

    assert p.client is mock_client
    assert p.resource("qlik_space").client is mock_client


def test_real_client_when_not_mocked() -> None:
    p = QlikProvider()
    env = dict(MOCK_ENV)
    del env["QLIK_MOCK_MODE"]

    p.configure({}, env)

    assert isinstance(p.client, QlikCloudClient)


def test_describe_lists_every_schema() -> None:
    described = QlikProvider.describe()

    assert sorted(described["resources"]) == RESOURCE_TYPES
    assert sorted(described["data_sources"]) == DATA_SOURCE_TYPES
    assert described["provider"]["attributes"]["client_secret"]["sensitive"] is True
    connection = described["resources"]["qlik_data_connection"]["attributes"]
    password = connection["connection_parameters"]["attributes"]["password"]
    assert password["sensitive"] is True


def test_register_all_tools(provider: QlikProvider) -> None:
    server = DummyServer()

    register_all_tools(server, provider)

    assert len(server.tools) == 27
    assert "qlik_provider_info" in server.tools
    assert "qlik_provider_schema" in server.tools
    for type_name in RESOURCE_TYPES:
        for operation in ("create", "read", "update", "delete"):
            assert f"{type_name}_{operation}" in server.tools
    for type_name in DATA_SOURCE_TYPES:
        assert f"{type_name}_data_read" in server.tools


def test_register_tools_rejects_non_server(provider: QlikProvider) -> None:
    with pytest.raises(ValueError):
        register_tools(object(), provider)


@pytest.mark.asyncio
async def test_fastmcp_lists_every_tool_once(provider: QlikProvider) -> None:
    server = FastMCP("qlik-cloud-provider-test")

    register_all_tools(server, provider)
    names = [t.name for t in await server.list_tools()]

    assert len(names) == 27
    assert len(set(names)) == len(names)
    assert "qlik_space_read" in names
    assert "qlik_space_data_read" in names


def test_colliding_tool_names_are_rejected(
    provider: QlikProvider,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(lifecycle, "DATA_SOURCE_OPERATION", "read")

    with pytest.raises(ValueError, match="qlik_space_read"):
        register_tools(DummyServer(), provider)


@pytest.mark.asyncio
async def test_space_resource_and_data_source_tools_are_separate(provider: QlikProvider) -> None:
    server = DummyServer()
    register_all_tools(server, provider)

    resource_read = await server.tools["qlik_space_read"]({"id": "missing"})
    lookup = await server.tools["qlik_space_data_read"]({"id": "missing"})

    assert resource_read["diagnostics"][0]["summary"] == "Space Not Found"
    assert lookup["diagnostics"][0]["summary"] == "Unable to Read Qlik Cloud Space"


@pytest.mark.asyncio
async def test_data_connection_tool_masks_password(
    provider: QlikProvider,
    snowflake_plan: dict,
) -> None:
    server = DummyServer()
    register_all_tools(server, provider)

    result = await server.tools["qlik_data_connection_create"](snowflake_plan)

    assert result["diagnostics"] == []
    assert result["summary"] == "qlik_data_connection create succeeded."
    assert result["data"]["connection_parameters"]["password"] == REDACTED
    assert result["data"]["connection_parameters"]["server"] == "host1"
    assert result["data"]["id"]


@pytest.mark.asyncio
async def test_masked_password_from_tool_output_is_not_written_back(
    provider: QlikProvider,
    snowflake_plan: dict,
) -> None:
    server = DummyServer()
    register_all_tools(server, provider)
    created = await server.tools["qlik_data_connection_create"](snowflake_plan)
    connection_id = created["data"]["id"]
    statement = provider.client.connections[connection_id].connect_statement

    plan = dict(created["data"], name="Renamed DWH")
    result = await server.tools["qlik_data_connection_update"](plan)

    assert result["data"] is None
    errors = [d for d in result["diagnostics"] if d["severity"] == "error"]
    assert [d["attribute"] for d in errors] == ["connection_parameters.password"]
    assert errors[0]["summary"] == "Masked sensitive value"
    stored = provider.client.connections[connection_id]
    assert stored.name == "Snowflake DWH"
    assert stored.connect_statement == statement

    plan["connection_parameters"] = dict(plan["connection_parameters"], password="p2")
    retried = await server.tools["qlik_data_connection_update"](plan)
    assert retried["diagnostics"] == []
    assert provider.client.connections[connection_id].name == "Renamed DWH"


@pytest.mark.asyncio
async def test_failed_tool_reports_diagnostics(provider: QlikProvider) -> None:
    server = DummyServer()
    register_all_tools(server, provider)

    result = await server.tools["qlik_space_read"]({"id": "missing"})

    assert result["data"] is None
    assert result["summary"] == "qlik_space read failed."
    assert result["diagnostics"][0]["summary"] == "Space Not Found"


@pytest.mark.asyncio
async def test_data_source_tool(provider: QlikProvider) -> None:
    server = DummyServer()
    register_all_tools(server, provider)

    result = await server.tools["qlik_data_gateway_data_read"]({"id": "MOCK_GATEWAY"})

    assert result["diagnostics"] == []
    assert result["data"]["type"] == "REPLICATE"


@pytest.mark.asyncio
async def test_provider_info_tool_has_no_secret(provider: QlikProvider) -> None:
    server = DummyServer()
    register_all_tools(server, provider)

    info = await server.tools["qlik_provider_info"]()

    assert info["data"]["configured"] is True
    assert info["data"]["resources"] == RESOURCE_TYPES
    assert "super-secret" not in repr(info)


def test_provider_info_before_configure() -> None:
    info = provider_info(QlikProvider())

    assert info["data"]["configured"] is False
    assert info["data"]["config"] is None
    assert info["summary"].endswith("not_configured")
