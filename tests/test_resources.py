# Qlik Cloud Provider
# File: tests/test_resources.py
# Version: v1

"""Lifecycle behaviour of the managed resources.

Most tests run against the in-memory MockQlikClient; failure paths use tiny
fake clients so nothing talks to a real tenant.
"""

from __future__ import annotations

from typing import Any, Dict, List

import pytest

from qlik_cloud_provider.errors import RemoteError
from qlik_cloud_provider.mock import MOCK_OWNER_ID, MockQlikClient
from qlik_cloud_provider.resources import Resource
from qlik_cloud_provider.resources import (
    data_app,
    data_app_source_selection,
    data_connection,
    data_project,
    space,
)
from qlik_cloud_provider.schema import REDACTED


def _entity(name: str, app_id: str, project_id: str) -> Dict[str, str]:
    return {
        "id": f"SALES.{name}",
        "name": name,
        "data_app_id": app_id,
        "schema": "SALES",
        "database": "ERP",
        "type": "TABLE",
        "project_id": project_id,
    }


async def _project_and_app(client: MockQlikClient) -> tuple[str, str]:
    projects = Resource(data_project.DESCRIPTOR, client)
    apps = Resource(data_app.DESCRIPTOR, client)

    project = await projects.create(
        {
            "name": "Lakehouse",
            "space_id": "space-data",
            "lakehouse_type": "SNOWFLAKE",
            "type": "DATA_PIPELINE",
            "storage_connection": "connection-1",
        }
    )
    app = await apps.create(
        {"name": "Landing", "type": "LANDING", "project_id": project.state["id"]}
    )
    return project.state["id"], app.state["id"]


# ---------------------------------------------------------------------------
# qlik_space
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_space_create_then_read_round_trip(mock_client: MockQlikClient) -> None:
    spaces = Resource(space.DESCRIPTOR, mock_client)
    assert spaces.type_name == "qlik_space"

    created = await spaces.create({"name": "Sales", "type": "shared", "description": "Team"})
    assert created.ok
    assert created.state["id"]
    assert created.state["owner_id"] == MOCK_OWNER_ID

    read = await spaces.read(created.state)
    assert read.ok
    for field in ("id", "name", "type", "description", "owner_id"):
        assert read.state[field] == created.state[field]


@pytest.mark.asyncio
async def test_space_without_description_stays_unset(mock_client: MockQlikClient) -> None:
    spaces = Resource(space.DESCRIPTOR, mock_client)

    created = await spaces.create({"name": "Sales", "type": "shared"})
    read = await spaces.read(created.state)

    assert read.state.get("description") is None


@pytest.mark.asyncio
async def test_space_update_without_changes_is_idempotent(mock_client: MockQlikClient) -> None:
    spaces = Resource(space.DESCRIPTOR, mock_client)
    created = await spaces.create({"name": "Sales", "type": "shared", "description": "Team"})

    updated = await spaces.update(created.state)
    assert updated.ok
    assert updated.state == created.state

    read = await spaces.read(updated.state)
    assert read.state == created.state


@pytest.mark.asyncio
async def test_space_update_changes_fields(mock_client: MockQlikClient) -> None:
    spaces = Resource(space.DESCRIPTOR, mock_client)
    created = await spaces.create({"name": "Sales", "type": "shared"})

    plan = dict(created.state, name="Sales EMEA", description="Renamed")
    updated = await spaces.update(plan)
    read = await spaces.read(updated.state)

    assert read.state["name"] == "Sales EMEA"
    assert read.state["description"] == "Renamed"


@pytest.mark.asyncio
async def test_space_delete_then_read_is_a_remote_error(mock_client: MockQlikClient) -> None:
    spaces = Resource(space.DESCRIPTOR, mock_client)
    created = await spaces.create({"name": "Sales", "type": "shared"})

    deleted = await spaces.delete(created.state)
    assert deleted.ok
    assert deleted.state is None

    read = await spaces.read(created.state)
    assert not read.ok
    assert read.state is None
    assert read.diagnostics.errors()[0].summary == "Space Not Found"

    again = await spaces.delete(created.state)
    assert not again.ok


@pytest.mark.asyncio
async def test_create_rejects_missing_required_attributes(mock_client: MockQlikClient) -> None:
    spaces = Resource(space.DESCRIPTOR, mock_client)

    result = await spaces.create({"type": "shared", "colour": "blue"})

    assert not result.ok
    attributes = {d.attribute for d in result.diagnostics.errors()}
    assert attributes == {"name", "colour"}
    assert mock_client.spaces == {}


@pytest.mark.asyncio
async def test_read_requires_identifier(mock_client: MockQlikClient) -> None:
    spaces = Resource(space.DESCRIPTOR, mock_client)

    result = await spaces.read({"name": "Sales"})

    assert not result.ok
    assert result.diagnostics.errors()[0].attribute == "id"


class _FailingSpaceClient:
    def __init__(self, message: str) -> None:
        self.message = message
        self.calls: List[Dict[str, Any]] = []

    async def create_space(self, request):
        self.calls.append({"name": request.name})
        raise RemoteError(self.message, status_code=403)


@pytest.mark.asyncio
async def test_remote_error_text_is_kept_verbatim() -> None:
    client = _FailingSpaceClient("Forbidden: insufficient entitlements for space type 'managed'")
    spaces = Resource(space.DESCRIPTOR, client)  # type: ignore[arg-type]
    plan = {"name": "Ops", "type": "managed"}

    result = await spaces.create(plan)

    assert not result.ok
    assert result.state is None
    diag = result.diagnostics.errors()[0]
    assert diag.summary == "Error creating Space"
    assert client.message in diag.detail
    assert len(client.calls) == 1
    # the caller's plan is untouched
    assert plan == {"name": "Ops", "type": "managed"}


# ---------------------------------------------------------------------------
# qlik_data_connection
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_data_connection_create_fills_computed_fields(
    mock_client: MockQlikClient,
    snowflake_plan: dict,
) -> None:
    connections = Resource(data_connection.DESCRIPTOR, mock_client)

    created = await connections.create(snowflake_plan)

    assert created.ok, created.diagnostics.to_list()
    state = created.state
    assert state["id"]
    assert state["engine_id"]
    assert state["credentials_id"]
    assert state["credentials_name"]
    assert state["driver"] == "QlikConnectorsCommonService.exe"
    assert "server=host1" in state["connect_statement"]

    stored = mock_client.connections[state["id"]]
    assert stored.data_source_id == "reptgt_qdisnowflake"


@pytest.mark.asyncio
async def test_data_connection_read_never_returns_password(
    mock_client: MockQlikClient,
    snowflake_plan: dict,
) -> None:
    connections = Resource(data_connection.DESCRIPTOR, mock_client)
    created = await connections.create(snowflake_plan)

    state = dict(created.state)
    params = dict(state["connection_parameters"])
    params.pop("password")
    state["connection_parameters"] = params

    read = await connections.read(state)

    assert read.ok
    assert read.state["name"] == snowflake_plan["name"]
    assert "password" not in read.state["connection_parameters"]


@pytest.mark.asyncio
async def test_data_connection_update_regenerates_connect_statement(
    mock_client: MockQlikClient,
    snowflake_plan: dict,
) -> None:
    connections = Resource(data_connection.DESCRIPTOR, mock_client)
    created = await connections.create(snowflake_plan)

    plan = dict(created.state)
    plan["connection_parameters"] = dict(plan["connection_parameters"], server="host2")
    updated = await connections.update(plan)

    assert updated.ok
    assert "server=host2" in updated.state["connect_statement"]
    assert mock_client.connections[plan["id"]].connect_statement == updated.state["connect_statement"]


@pytest.mark.asyncio
async def test_sap_connector_is_reported_not_sent(
    mock_client: MockQlikClient,
    snowflake_plan: dict,
) -> None:
    connections = Resource(data_connection.DESCRIPTOR, mock_client)
    plan = dict(snowflake_plan, type="SAP_APPLICATION")

    result = await connections.create(plan)

    assert not result.ok
    assert "SAP_APPLICATION" in result.diagnostics.errors()[0].detail
    assert mock_client.connections == {}


@pytest.mark.asyncio
async def test_masked_password_is_rejected_before_any_call(
    mock_client: MockQlikClient,
    snowflake_plan: dict,
) -> None:
    connections = Resource(data_connection.DESCRIPTOR, mock_client)
    plan = dict(snowflake_plan)
    plan["connection_parameters"] = dict(plan["connection_parameters"], password=REDACTED)

    result = await connections.create(plan)

    assert not result.ok
    diag = result.diagnostics.errors()[0]
    assert diag.attribute == "connection_parameters.password"
    assert "real value" in diag.detail
    assert mock_client.connections == {}


@pytest.mark.asyncio
async def test_data_connection_requires_connection_parameters(
    mock_client: MockQlikClient,
    snowflake_plan: dict,
) -> None:
    connections = Resource(data_connection.DESCRIPTOR, mock_client)
    plan = dict(snowflake_plan)
    del plan["connection_parameters"]

    result = await connections.create(plan)

    assert [d.attribute for d in result.diagnostics.errors()] == ["connection_parameters"]


# ---------------------------------------------------------------------------
# qlik_data_project / qlik_data_app
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_data_project_defaults_batch_mode(mock_client: MockQlikClient) -> None:
    projects = Resource(data_project.DESCRIPTOR, mock_client)

    created = await projects.create(
        {
            "name": "Lakehouse",
            "space_id": "space-data",
            "lakehouse_type": "SNOWFLAKE",
            "type": "DATA_PIPELINE",
            "storage_connection": "connection-1",
        }
    )

    assert created.ok
    assert created.state["batch_mode"] is True
    assert mock_client.projects[created.state["id"]].batch_mode is True

    read = await projects.read(created.state)
    assert read.state["name"] == "Lakehouse"
    assert read.state.get("description") is None


@pytest.mark.asyncio
async def test_data_project_update_sends_full_configuration(mock_client: MockQlikClient) -> None:
    projects = Resource(data_project.DESCRIPTOR, mock_client)
    created = await projects.create(
        {
            "name": "Lakehouse",
            "space_id": "space-data",
            "lakehouse_type": "SNOWFLAKE",
            "type": "DATA_PIPELINE",
            "storage_connection": "connection-1",
            "batch_mode": False,
        }
    )

    plan = dict(created.state, description="Nightly loads")
    updated = await projects.update(plan)

    assert updated.ok
    stored = mock_client.projects[plan["id"]]
    assert stored.description == "Nightly loads"
    assert stored.batch_mode is False
    assert stored.storage_connection == "connection-1"


@pytest.mark.asyncio
async def test_data_app_lifecycle(mock_client: MockQlikClient) -> None:
    project_id, _ = await _project_and_app(mock_client)
    apps = Resource(data_app.DESCRIPTOR, mock_client)

    created = await apps.create(
        {"name": "Storage", "type": "STORAGE", "description": "Raw", "project_id": project_id}
    )
    assert created.ok

    updated = await apps.update(dict(created.state, description="Curated"))
    assert updated.state["description"] == "Curated"

    read = await apps.read(updated.state)
    assert read.state["name"] == "Storage"
    assert read.state["description"] == "Curated"

    deleted = await apps.delete(read.state)
    assert deleted.ok
    gone = await apps.read(read.state)
    assert gone.diagnostics.errors()[0].summary == "Data App Not Found"


@pytest.mark.asyncio
async def test_data_app_needs_project_id_to_read(mock_client: MockQlikClient) -> None:
    apps = Resource(data_app.DESCRIPTOR, mock_client)

    result = await apps.read({"id": "app-1"})

    assert [d.attribute for d in result.diagnostics.errors()] == ["project_id"]


# ---------------------------------------------------------------------------
# qlik_data_app_source_selection
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_source_selection_is_replaced_on_every_write(mock_client: MockQlikClient) -> None:
    project_id, app_id = await _project_and_app(mock_client)
    selections = Resource(data_app_source_selection.DESCRIPTOR, mock_client)

    plan = {
        "project_id": project_id,
        "app_id": app_id,
        "source_connection_id": "MOCK_SOURCE",
        "source_selection": [
            _entity("ORDERS", app_id, project_id),
            _entity("CUSTOMERS", app_id, project_id),
        ],
    }
    created = await selections.create(plan)
    assert created.ok
    first_key = created.state["id"]

    read = await selections.read(created.state)
    assert read.state["id"] == first_key
    assert [e["name"] for e in read.state["source_selection"]] == ["ORDERS", "CUSTOMERS"]

    narrowed = dict(read.state, source_selection=[_entity("CUSTOMERS", app_id, project_id)])
    updated = await selections.update(narrowed)
    assert updated.ok
    assert updated.state["id"] != first_key

    read = await selections.read(updated.state)
    assert [e["name"] for e in read.state["source_selection"]] == ["CUSTOMERS"]


@pytest.mark.asyncio
async def test_source_selection_delete_clears_selection(mock_client: MockQlikClient) -> None:
    project_id, app_id = await _project_and_app(mock_client)
    selections = Resource(data_app_source_selection.DESCRIPTOR, mock_client)
    created = await selections.create(
        {
            "project_id": project_id,
            "app_id": app_id,
            "source_connection_id": "MOCK_SOURCE",
            "source_selection": [_entity("ORDERS", app_id, project_id)],
        }
    )

    deleted = await selections.delete(created.state)
    assert deleted.ok

    stored = mock_client.selections[(project_id, app_id)]
    assert stored.entities == []


@pytest.mark.asyncio
async def test_source_selection_validates_each_entity(mock_client: MockQlikClient) -> None:
    selections = Resource(data_app_source_selection.DESCRIPTOR, mock_client)
    entity = _entity("ORDERS", "app-1", "project-1")
    del entity["schema"]

    result = await selections.create(
        {
            "project_id": "project-1",
            "app_id": "app-1",
            "source_connection_id": "MOCK_SOURCE",
            "source_selection": [entity],
        }
    )

    assert [d.attribute for d in result.diagnostics.errors()] == ["source_selection[0].schema"]
