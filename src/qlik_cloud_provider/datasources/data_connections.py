# Qlik Cloud Provider
# File: datasources/data_connections.py
# Version: v1

"""qlik_data_connections data source: first page of data connections."""

from __future__ import annotations

from ..client import QlikCloudClient
from ..models import PAGE_SIZE, ListFilter
from ..schema import LIST, Attribute, Schema
from .base import DataSourceDescriptor, Model

SCHEMA = Schema(
    description=f"Lists up to {PAGE_SIZE} Qlik Cloud data connections.",
    attributes=(
        Attribute(
            "data_connections",
            kind=LIST,
            computed=True,
            attributes=(
                Attribute("id", computed=True),
                Attribute("name", computed=True),
                Attribute("type", computed=True),
                Attribute("data_source_id", computed=True),
            ),
        ),
    ),
)


async def read(client: QlikCloudClient, model: Model) -> Model:
    connections = await client.list_data_connections(ListFilter(limit=PAGE_SIZE))
    return {
        "data_connections": [
            {
                "id": c.id,
                "name": c.name,
                "type": c.type,
                "data_source_id": c.data_source_id,
            }
            for c in connections
        ]
    }


DESCRIPTOR = DataSourceDescriptor(
    name="data_connections",
    label="Data Connections",
    schema=SCHEMA,
    read=read,
)
