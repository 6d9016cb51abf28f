# Qlik Cloud Provider
# File: datasources/data_gateway.py
# Version: v1

"""qlik_data_gateway data source: look up a registered gateway by id."""

from __future__ import annotations

from ..client import QlikCloudClient
from ..schema import Attribute, Schema
from .base import DataSourceDescriptor, Model

SCHEMA = Schema(
    description="Fetches a Qlik Cloud data gateway.",
    attributes=(
        Attribute("id", required=True),
        Attribute("type", computed=True),
        Attribute("description", computed=True),
        Attribute("space_id", computed=True),
    ),
)


async def read(client: QlikCloudClient, model: Model) -> Model:
    gateway = await client.get_data_gateway(model["id"])
    return {
        "id": gateway.id,
        "type": gateway.type,
        "description": gateway.description,
        "space_id": gateway.space_id,
    }


DESCRIPTOR = DataSourceDescriptor(
    name="data_gateway",
    label="DataGateway",
    schema=SCHEMA,
    read=read,
)
