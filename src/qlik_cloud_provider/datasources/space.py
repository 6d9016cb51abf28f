# Qlik Cloud Provider
# File: datasources/space.py
# Version: v1

"""qlik_space data source: look up one space by id."""

from __future__ import annotations

from ..client import QlikCloudClient
from ..schema import Attribute, Schema
from .base import DataSourceDescriptor, Model

SCHEMA = Schema(
    description="Fetches a single Qlik Cloud space.",
    attributes=(
        Attribute("id", required=True),
        Attribute("name", computed=True),
        Attribute("type", computed=True),
        Attribute("description", computed=True),
    ),
)


async def read(client: QlikCloudClient, model: Model) -> Model:
    space = await client.get_space(model["id"])
    return {
        "id": space.id,
        "name": space.name,
        "type": space.type,
        "description": space.description,
    }


DESCRIPTOR = DataSourceDescriptor(name="space", label="Space", schema=SCHEMA, read=read)
