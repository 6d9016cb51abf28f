# Qlik Cloud Provider
# File: datasources/spaces.py
# Version: v1

"""qlik_spaces data source: first page of spaces, optionally filtered by name."""

from __future__ import annotations

from ..client import QlikCloudClient
from ..models import PAGE_SIZE, ListFilter
from ..schema import LIST, Attribute, Schema
from .base import DataSourceDescriptor, Model

SCHEMA = Schema(
    description=f"Lists up to {PAGE_SIZE} Qlik Cloud spaces.",
    attributes=(
        Attribute("name", optional=True, description="Server-side name filter."),
        Attribute(
            "spaces",
            kind=LIST,
            computed=True,
            attributes=(
                Attribute("id", computed=True),
                Attribute("name", computed=True),
                Attribute("type", computed=True),
                Attribute("description", computed=True),
            ),
        ),
    ),
)


async def read(client: QlikCloudClient, model: Model) -> Model:
    spaces = await client.list_spaces(ListFilter(name=model.get("name") or None, limit=PAGE_SIZE))
    return {
        "spaces": [
            {
                "id": s.id,
                "name": s.name,
                "type": s.type,
                "description": s.description,
            }
            for s in spaces
        ]
    }


DESCRIPTOR = DataSourceDescriptor(name="spaces", label="Spaces", schema=SCHEMA, read=read)
