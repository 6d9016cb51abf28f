# Qlik Cloud Provider
# File: models.py
# Version: v1

"""Request and response structs exchanged with the Qlik Cloud REST API.

Each response struct knows how to build itself from the JSON payload
(``from_payload``) and each request struct how to render its JSON body
(``to_payload``). Field names on the wire are the API's; attribute names
here are snake_case.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

PAGE_SIZE = 10


def _s(item: Dict[str, Any], *keys: str) -> str:
    """First non-null value among ``keys`` as a string ("" when absent)."""
    for key in keys:
        value = item.get(key)
        if value is not None:
            return str(value)
    return ""


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------


@dataclass
class ListFilter:
    """Server-side narrowing for list calls. Results are never paginated."""

    name: Optional[str] = None
    limit: int = PAGE_SIZE

    def to_params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {"limit": int(self.limit)}
        if self.name:
            params["name"] = self.name
        return params


# ---------------------------------------------------------------------------
# Spaces
# ---------------------------------------------------------------------------


@dataclass
class Space:
    """Represents a Qlik Cloud space as returned by the Spaces API."""

    id: str
    name: str
    type: str = ""
    description: str = ""
    owner_id: str = ""

    # Raw JSON payload from the API, for debugging / advanced use.
    raw: Optional[Dict[str, Any]] = None

    @classmethod
    def from_payload(cls, item: Dict[str, Any]) -> "Space":
        return cls(
            id=_s(item, "id"),
            name=_s(item, "name"),
            type=_s(item, "type"),
            description=_s(item, "description"),
            owner_id=_s(item, "ownerId"),
            raw=item,
        )


@dataclass
class SpaceCreate:
    name: str
    type: str
    description: str = ""

    def to_payload(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type, "description": self.description}


@dataclass
class SpaceUpdate:
    name: str
    owner_id: str = ""
    description: str = ""

    def to_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "ownerId": self.owner_id,
            "description": self.description,
        }


# ---------------------------------------------------------------------------
# Data connections
# ---------------------------------------------------------------------------


@dataclass
class DataConnection:
    """A data connection; ``q``-prefixed wire names are the engine's."""

    id: str
    name: str
    space_id: str = ""
    type: str = ""
    data_source_id: str = ""
    engine_id: str = ""
    connect_statement: str = ""
    credentials_id: str = ""
    credentials_name: str = ""

    raw: Optional[Dict[str, Any]] = None

    @classmethod
    def from_payload(cls, item: Dict[str, Any]) -> "DataConnection":
        return cls(
            id=_s(item, "id"),
            name=_s(item, "qName", "name"),
            space_id=_s(item, "space"),
            type=_s(item, "qType"),
            data_source_id=_s(item, "datasourceID"),
            engine_id=_s(item, "qEngineObjectID"),
            connect_statement=_s(item, "qConnectStatement"),
            credentials_id=_s(item, "qCredentialsID"),
            credentials_name=_s(item, "qCredentialsName"),
            raw=item,
        )


@dataclass
class DataConnectionCreate:
    name: str
    space_id: str
    connect_statement: str
    data_source_id: str
    type: str
    username: str = ""
    password: str = ""
    log_on: int = 1

    def to_payload(self) -> Dict[str, Any]:
        return {
            "qName": self.name,
            "space": self.space_id,
            "qLogOn": self.log_on,
            "qConnectStatement": self.connect_statement,
            "datasourceID": self.data_source_id,
            "qType": self.type,
            "qUsername": self.username,
            "qPassword": self.password,
        }


@dataclass
class DataConnectionUpdate:
    id: str
    name: str
    space_id: str
    engine_id: str
    connect_statement: str
    data_source_id: str
    type: str
    username: str = ""
    password: str = ""

    def to_payload(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "qName": self.name,
            "space": self.space_id,
            "qEngineObjectID": self.engine_id,
            "qConnectStatement": self.connect_statement,
            "datasourceID": self.data_source_id,
            "qType": self.type,
            "qUsername": self.username,
            "qPassword": self.password,
        }


@dataclass
class ConnectionProperty:
    name: str
    value: str

    def to_payload(self) -> Dict[str, str]:
        return {"name": self.name, "value": self.value}


@dataclass
class ConnectionStringRequest:
    """Non-secret connection properties plus the separate credential list.

    Order matters: the platform consumes both lists positionally.
    """

    properties: List[ConnectionProperty] = field(default_factory=list)
    credentials: List[ConnectionProperty] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "connectionProperties": {
                "propertiesList": [p.to_payload() for p in self.properties],
            },
            "credentialsProperties": {
                "propertiesList": [p.to_payload() for p in self.credentials],
            },
        }


@dataclass
class ConnectionStringResponse:
    connection_string: str
    user_id: str = ""
    credentials_connection_string: str = ""

    @classmethod
    def from_payload(cls, item: Dict[str, Any]) -> "ConnectionStringResponse":
        return cls(
            connection_string=_s(item, "connectionString"),
            user_id=_s(item, "userId"),
            credentials_connection_string=_s(item, "credentialsConnectionString"),
        )


# ---------------------------------------------------------------------------
# Data projects and apps
# ---------------------------------------------------------------------------


@dataclass
class DataProject:
    id: str
    name: str
    description: str = ""
    space_id: str = ""
    lakehouse_type: str = ""
    type: str = ""
    storage_connection: str = ""
    batch_mode: bool = True

    raw: Optional[Dict[str, Any]] = None

    @classmethod
    def from_payload(cls, item: Dict[str, Any]) -> "DataProject":
        batch_mode = item.get("batchMode")
        return cls(
            id=_s(item, "id"),
            name=_s(item, "name"),
            description=_s(item, "description"),
            space_id=_s(item, "spaceId"),
            lakehouse_type=_s(item, "lakehouseType"),
            type=_s(item, "type"),
            storage_connection=_s(item, "storageConnection"),
            batch_mode=True if batch_mode is None else bool(batch_mode),
            raw=item,
        )


@dataclass
class DataProjectConfiguration:
    name: str
    lakehouse_type: str
    type: str
    storage_connection: str
    description: str = ""
    batch_mode: bool = True
    id: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "lakehouseType": self.lakehouse_type,
            "type": self.type,
            "storageConnection": self.storage_connection,
            "batchMode": self.batch_mode,
        }
        if self.id:
            body["id"] = self.id
        return body


@dataclass
class DataProjectWrite:
    """Body of both the create and the full-replace update call."""

    space_id: str
    data: DataProjectConfiguration

    def to_payload(self) -> Dict[str, Any]:
        return {"spaceId": self.space_id, "data": self.data.to_payload()}


@dataclass
class DataApp:
    id: str
    name: str
    type: str = ""
    description: str = ""
    project_id: str = ""

    raw: Optional[Dict[str, Any]] = None

    @classmethod
    def from_payload(cls, item: Dict[str, Any], project_id: str = "") -> "DataApp":
        return cls(
            id=_s(item, "id"),
            name=_s(item, "name"),
            type=_s(item, "type"),
            description=_s(item, "description"),
            project_id=_s(item, "projectId") or project_id,
            raw=item,
        )


@dataclass
class DataAppWrite:
    name: str
    type: str
    description: str = ""

    def to_payload(self) -> Dict[str, Any]:
        return {
            "data": {
                "name": self.name,
                "type": self.type,
                "description": self.description,
            }
        }


# ---------------------------------------------------------------------------
# Source entities and selections
# ---------------------------------------------------------------------------


@dataclass
class SourceEntity:
    id: str
    name: str
    data_app_id: str = ""
    schema: str = ""
    database: str = ""
    type: str = ""
    project_id: str = ""

    @classmethod
    def from_payload(cls, item: Dict[str, Any]) -> "SourceEntity":
        return cls(
            id=_s(item, "id"),
            name=_s(item, "name"),
            data_app_id=_s(item, "dataAppId"),
            schema=_s(item, "schema"),
            database=_s(item, "database"),
            type=_s(item, "type"),
            project_id=_s(item, "projectId"),
        )

    def to_payload(self) -> Dict[str, str]:
        return {
            "id": self.id,
            "name": self.name,
            "dataAppId": self.data_app_id,
            "schema": self.schema,
            "database": self.database,
            "type": self.type,
            "projectId": self.project_id,
        }


@dataclass
class SourceSelection:
    """The selection bound to a data app; ``key`` is the server identifier."""

    key: str
    source_connection_id: str
    entities: List[SourceEntity] = field(default_factory=list)

    @classmethod
    def from_payload(cls, item: Dict[str, Any]) -> "SourceSelection":
        selection = item.get("sourceSelection") or {}
        entities_selection = selection.get("dataEntitiesSelection") or {}
        raw_entities = entities_selection.get("selectedEntities") or []
        return cls(
            key=_s(item, "key"),
            source_connection_id=_s(entities_selection, "sourceConnectionId"),
            entities=[
                SourceEntity.from_payload(e) for e in raw_entities if isinstance(e, dict)
            ],
        )


@dataclass
class SourceSelectionPut:
    """Full replacement of a data app's selection (PUT semantics)."""

    source_connection_id: str
    entities: List[SourceEntity] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "data": {
                "dataEntitiesSelection": {
                    "sourceConnectionId": self.source_connection_id,
                    "selectedEntities": [e.to_payload() for e in self.entities],
                }
            }
        }


@dataclass
class SourceEntityPattern:
    project_id: str
    database: str
    table_pattern: str
    schema_pattern: str
    entity_type: str

    def to_payload(self) -> Dict[str, str]:
        return {
            "projectId": self.project_id,
            "database": self.database,
            "tablePattern": self.table_pattern,
            "schemaPattern": self.schema_pattern,
            "entityType": self.entity_type,
        }


@dataclass
class SourceEntitiesQuery:
    """Include patterns are evaluated by the platform, never locally."""

    source_connection_id: str
    include_patterns: List[SourceEntityPattern] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "sourceSelection": {
                "dataEntitiesSelection": {
                    "sourceConnectionId": self.source_connection_id,
                    "includePatterns": [p.to_payload() for p in self.include_patterns],
                }
            }
        }


# ---------------------------------------------------------------------------
# Gateways
# ---------------------------------------------------------------------------


@dataclass
class DataGateway:
    id: str
    name: str = ""
    type: str = ""
    description: str = ""
    space_id: str = ""

    raw: Optional[Dict[str, Any]] = None

    @classmethod
    def from_payload(cls, item: Dict[str, Any]) -> "DataGateway":
        return cls(
            id=_s(item, "id"),
            name=_s(item, "name"),
            type=_s(item, "type"),
            description=_s(item, "description"),
            space_id=_s(item, "spaceId"),
            raw=item,
        )
