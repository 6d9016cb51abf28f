# Qlik Cloud Provider
# File: mock.py
# Version: v1

"""In-memory stand-in for QlikCloudClient.

Activated when QLIK_MOCK_MODE is truthy. Implements the same coroutine
methods as the real client so every resource and data source works without
a Qlik Cloud tenant. Identifiers are assigned here, as the platform would,
and unknown identifiers raise NotFoundError.
"""

from __future__ import annotations

from dataclasses import replace
import fnmatch
import itertools
from typing import Dict, List, Optional, Tuple

from .config import QlikConfig
from .errors import NotFoundError, RemoteError
from .models import (
    ConnectionStringRequest,
    ConnectionStringResponse,
    DataApp,
    DataAppWrite,
    DataConnection,
    DataConnectionCreate,
    DataConnectionUpdate,
    DataGateway,
    DataProject,
    DataProjectWrite,
    ListFilter,
    SourceEntitiesQuery,
    SourceEntity,
    SourceSelection,
    SourceSelectionPut,
    Space,
    SpaceCreate,
    SpaceUpdate,
)

MOCK_OWNER_ID = "MOCK_TECHNICAL_USER"


class MockQlikClient:
    """Small in-memory stand-in for QlikCloudClient."""

    def __init__(self, config: Optional[QlikConfig] = None) -> None:
        self.config = config
        self._ids = itertools.count(1)

        self.spaces: Dict[str, Space] = {}
        self.connections: Dict[str, DataConnection] = {}
        self.projects: Dict[str, DataProject] = {}
        self.apps: Dict[Tuple[str, str], DataApp] = {}
        self.selections: Dict[Tuple[str, str], SourceSelection] = {}

        self.gateways: Dict[str, DataGateway] = {
            "MOCK_GATEWAY": DataGateway(
                id="MOCK_GATEWAY",
                name="Mock Data Movement Gateway",
                type="REPLICATE",
                description="Static gateway for mock mode.",
                space_id="",
            ),
        }

        # What a source connection exposes, keyed by source connection id.
        self.catalog: Dict[str, List[SourceEntity]] = {
            "MOCK_SOURCE": [
                SourceEntity(id="SALES.ORDERS", name="ORDERS", schema="SALES", database="ERP", type="TABLE"),
                SourceEntity(id="SALES.CUSTOMERS", name="CUSTOMERS", schema="SALES", database="ERP", type="TABLE"),
                SourceEntity(id="FIN.GL_BALANCES", name="GL_BALANCES", schema="FIN", database="ERP", type="TABLE"),
            ],
        }

    def _new_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._ids):06d}"

    @staticmethod
    def _missing(what: str, key: str) -> NotFoundError:
        return NotFoundError(f"{what} '{key}' not found", status_code=404)

    # Spaces -------------------------------------------------------------

    async def create_space(self, space: SpaceCreate) -> Space:
        if any(s.name == space.name for s in self.spaces.values()):
            raise RemoteError(f"Space name '{space.name}' is already in use", status_code=409)
        created = Space(
            id=self._new_id("space"),
            name=space.name,
            type=space.type,
            description=space.description,
            owner_id=MOCK_OWNER_ID,
        )
        self.spaces[created.id] = created
        return replace(created)

    async def get_space(self, space_id: str) -> Space:
        if space_id not in self.spaces:
            raise self._missing("Space", space_id)
        return replace(self.spaces[space_id])

    async def update_space(self, space_id: str, space: SpaceUpdate) -> Space:
        current = await self.get_space(space_id)
        updated = replace(
            current,
            name=space.name,
            description=space.description,
            owner_id=space.owner_id or current.owner_id,
        )
        self.spaces[space_id] = updated
        return replace(updated)

    async def delete_space(self, space_id: str) -> None:
        if self.spaces.pop(space_id, None) is None:
            raise self._missing("Space", space_id)

    async def list_spaces(self, list_filter: ListFilter) -> List[Space]:
        items = [
            replace(s)
            for s in self.spaces.values()
            if not list_filter.name or list_filter.name.lower() in s.name.lower()
        ]
        return items[: list_filter.limit]

    # Data connections ---------------------------------------------------

    async def get_connection_string(
        self,
        source_type: str,
        request: ConnectionStringRequest,
    ) -> ConnectionStringResponse:
        props = {p.name: p.value for p in request.properties}
        statement = ";".join(f"{p.name}={p.value}" for p in request.properties)
        return ConnectionStringResponse(
            connection_string=f"CUSTOM CONNECT TO \"provider={source_type};{statement}\"",
            user_id=props.get("username", ""),
            credentials_connection_string="mock-credentials-token",
        )

    async def create_data_connection(self, connection: DataConnectionCreate) -> DataConnection:
        created = DataConnection(
            id=self._new_id("connection"),
            name=connection.name,
            space_id=connection.space_id,
            type=connection.type,
            data_source_id=connection.data_source_id,
            engine_id=self._new_id("engine"),
            connect_statement=connection.connect_statement,
            credentials_id=self._new_id("credentials"),
            credentials_name=f"{connection.name} credentials",
        )
        self.connections[created.id] = created
        return replace(created)

    async def get_data_connection(self, connection_id: str) -> DataConnection:
        if connection_id not in self.connections:
            raise self._missing("Data connection", connection_id)
        return replace(self.connections[connection_id])

    async def update_data_connection(
        self,
        connection_id: str,
        connection: DataConnectionUpdate,
    ) -> None:
        current = await self.get_data_connection(connection_id)
        self.connections[connection_id] = replace(
            current,
            name=connection.name,
            space_id=connection.space_id,
            type=connection.type,
            data_source_id=connection.data_source_id,
            connect_statement=connection.connect_statement,
        )

    async def delete_data_connection(self, connection_id: str) -> None:
        if self.connections.pop(connection_id, None) is None:
            raise self._missing("Data connection", connection_id)

    async def list_data_connections(self, list_filter: ListFilter) -> List[DataConnection]:
        return [replace(c) for c in self.connections.values()][: list_filter.limit]

    # Data projects ------------------------------------------------------

    async def create_data_project(self, project: DataProjectWrite) -> DataProject:
        data = project.data
        created = DataProject(
            id=self._new_id("project"),
            name=data.name,
            description=data.description,
            space_id=project.space_id,
            lakehouse_type=data.lakehouse_type,
            type=data.type,
            storage_connection=data.storage_connection,
            batch_mode=data.batch_mode,
        )
        self.projects[created.id] = created
        return replace(created)

    async def get_data_project(self, project_id: str) -> DataProject:
        if project_id not in self.projects:
            raise self._missing("Data project", project_id)
        return replace(self.projects[project_id])

    async def update_data_project(self, project_id: str, project: DataProjectWrite) -> None:
        current = await self.get_data_project(project_id)
        data = project.data
        self.projects[project_id] = replace(
            current,
            name=data.name,
            description=data.description,
            space_id=project.space_id,
            lakehouse_type=data.lakehouse_type,
            type=data.type,
            storage_connection=data.storage_connection,
            batch_mode=data.batch_mode,
        )

    async def delete_data_project(self, project_id: str) -> None:
        if self.projects.pop(project_id, None) is None:
            raise self._missing("Data project", project_id)

    # Data apps ----------------------------------------------------------

    async def create_data_app(self, project_id: str, app: DataAppWrite) -> DataApp:
        await self.get_data_project(project_id)
        created = DataApp(
            id=self._new_id("app"),
            name=app.name,
            type=app.type,
            description=app.description,
            project_id=project_id,
        )
        self.apps[(project_id, created.id)] = created
        return replace(created)

    async def get_data_app(self, project_id: str, app_id: str) -> DataApp:
        if (project_id, app_id) not in self.apps:
            raise self._missing("Data app", app_id)
        return replace(self.apps[(project_id, app_id)])

    async def update_data_app(self, project_id: str, app_id: str, app: DataAppWrite) -> DataApp:
        current = await self.get_data_app(project_id, app_id)
        updated = replace(current, name=app.name, type=app.type, description=app.description)
        self.apps[(project_id, app_id)] = updated
        return replace(updated)

    async def delete_data_app(self, project_id: str, app_id: str) -> None:
        if self.apps.pop((project_id, app_id), None) is None:
            raise self._missing("Data app", app_id)
        self.selections.pop((project_id, app_id), None)

    # Source selection ---------------------------------------------------

    async def put_source_selection(
        self,
        project_id: str,
        app_id: str,
        selection: SourceSelectionPut,
    ) -> SourceSelection:
        await self.get_data_app(project_id, app_id)
        stored = SourceSelection(
            key=self._new_id("selection"),
            source_connection_id=selection.source_connection_id,
            entities=[replace(e) for e in selection.entities],
        )
        self.selections[(project_id, app_id)] = stored
        return replace(stored, entities=[replace(e) for e in stored.entities])

    async def get_source_selection(self, project_id: str, app_id: str) -> SourceSelection:
        stored = self.selections.get((project_id, app_id))
        if stored is None:
            raise self._missing("Source selection of data app", app_id)
        return replace(stored, entities=[replace(e) for e in stored.entities])

    async def get_source_entities(
        self,
        project_id: str,
        app_id: str,
        query: SourceEntitiesQuery,
    ) -> List[SourceEntity]:
        await self.get_data_app(project_id, app_id)
        found: List[SourceEntity] = []
        for entity in self.catalog.get(query.source_connection_id, []):
            for pattern in query.include_patterns:
                if (
                    entity.database == pattern.database
                    and entity.type == pattern.entity_type
                    and fnmatch.fnmatchcase(entity.schema, pattern.schema_pattern)
                    and fnmatch.fnmatchcase(entity.name, pattern.table_pattern)
                ):
                    found.append(replace(entity, data_app_id=app_id, project_id=project_id))
                    break
        return found

    # Gateways -----------------------------------------------------------

    async def get_data_gateway(self, gateway_id: str) -> DataGateway:
        if gateway_id not in self.gateways:
            raise self._missing("Data gateway", gateway_id)
        return replace(self.gateways[gateway_id])
