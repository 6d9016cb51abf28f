# Qlik Cloud Provider
# File: resources/data_app_source_selection.py
# Version: v1

"""qlik_data_app_source_selection: the source entities bound to a data app.

Every write replaces the whole selection; the platform answers with a new
opaque key which becomes the resource id.
"""

from __future__ import annotations

from typing import Any, Dict, List

from ..client import QlikCloudClient
from ..models import SourceEntity, SourceSelectionPut
from ..schema import LIST, Attribute, Schema
from .base import Model, ResourceDescriptor

ENTITY_ATTRIBUTES = (
    Attribute("id", required=True),
    Attribute("name", required=True),
    Attribute("data_app_id", required=True),
    Attribute("schema", required=True),
    Attribute("database", required=True),
    Attribute("type", required=True),
    Attribute("project_id", required=True),
)

SCHEMA = Schema(
    description="Manages the source selection of a data app.",
    attributes=(
        Attribute("id", computed=True),
        Attribute("project_id", required=True),
        Attribute("app_id", required=True),
        Attribute("source_connection_id", required=True),
        Attribute("source_selection", kind=LIST, required=True, attributes=ENTITY_ATTRIBUTES),
    ),
)


def entity_from_model(item: Dict[str, Any]) -> SourceEntity:
    return SourceEntity(
        id=item["id"],
        name=item["name"],
        data_app_id=item["data_app_id"],
        schema=item["schema"],
        database=item["database"],
        type=item["type"],
        project_id=item["project_id"],
    )


def entity_to_model(entity: SourceEntity) -> Dict[str, str]:
    return {
        "id": entity.id,
        "name": entity.name,
        "data_app_id": entity.data_app_id,
        "schema": entity.schema,
        "database": entity.database,
        "type": entity.type,
        "project_id": entity.project_id,
    }


async def _put(client: QlikCloudClient, model: Model, entities: List[SourceEntity]) -> Model:
    selection = await client.put_source_selection(
        model["project_id"],
        model["app_id"],
        SourceSelectionPut(
            source_connection_id=model["source_connection_id"],
            entities=entities,
        ),
    )
    return {"id": selection.key}


async def create(client: QlikCloudClient, model: Model) -> Model:
    return await _put(client, model, [entity_from_model(e) for e in model["source_selection"]])


async def read(client: QlikCloudClient, model: Model) -> Model:
    selection = await client.get_source_selection(model["project_id"], model["app_id"])
    return {
        "id": selection.key,
        "source_connection_id": selection.source_connection_id,
        "source_selection": [entity_to_model(e) for e in selection.entities],
    }


async def update(client: QlikCloudClient, model: Model) -> Model:
    return await _put(client, model, [entity_from_model(e) for e in model["source_selection"]])


async def delete(client: QlikCloudClient, model: Model) -> None:
    """Clear the selection on the platform.

    There is no delete endpoint for a selection, so this PUTs an empty one.
    The remote selection is emptied, not merely dropped from state.
    """
    await _put(client, model, [])


DESCRIPTOR = ResourceDescriptor(
    name="data_app_source_selection",
    label="Data App Source Selection",
    schema=SCHEMA,
    create=create,
    read=read,
    update=update,
    delete=delete,
    identity=("project_id", "app_id"),
)
