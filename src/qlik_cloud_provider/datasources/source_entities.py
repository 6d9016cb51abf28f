# Qlik Cloud Provider
# File: datasources/source_entities.py
# Version: v1

"""qlik_source_entities data source.

The filter becomes a single include pattern; table and schema globs are
matched by the platform.
"""

from __future__ import annotations

from ..client import QlikCloudClient
from ..models import SourceEntitiesQuery, SourceEntityPattern
from ..resources.data_app_source_selection import entity_to_model
from ..schema import LIST, Attribute, Schema
from .base import DataSourceDescriptor, Model

SCHEMA = Schema(
    description="Searches the entities a source connection exposes to a data app.",
    attributes=(
        Attribute("project_id", required=True),
        Attribute("app_id", required=True),
        Attribute("source_connection_id", required=True),
        Attribute("database", required=True),
        Attribute("table_pattern", required=True),
        Attribute("schema_pattern", required=True),
        Attribute("entity_type", required=True),
        Attribute(
            "entities",
            kind=LIST,
            computed=True,
            attributes=(
                Attribute("id", computed=True),
                Attribute("name", computed=True),
                Attribute("data_app_id", computed=True),
                Attribute("schema", computed=True),
                Attribute("database", computed=True),
                Attribute("type", computed=True),
                Attribute("project_id", computed=True),
            ),
        ),
    ),
)


async def read(client: QlikCloudClient, model: Model) -> Model:
    query = SourceEntitiesQuery(
        source_connection_id=model["source_connection_id"],
        include_patterns=[
            SourceEntityPattern(
                project_id=model["project_id"],
                database=model["database"],
                table_pattern=model["table_pattern"],
                schema_pattern=model["schema_pattern"],
                entity_type=model["entity_type"],
            )
        ],
    )
    entities = await client.get_source_entities(model["project_id"], model["app_id"], query)
    return {"entities": [entity_to_model(e) for e in entities]}


DESCRIPTOR = DataSourceDescriptor(
    name="source_entities",
    label="Source Entities",
    schema=SCHEMA,
    read=read,
)
