# Qlik Cloud Provider
# File: resources/data_app.py
# Version: v1

"""qlik_data_app: an app grouping source entities inside a data project."""

from __future__ import annotations

from ..client import QlikCloudClient
from ..models import DataAppWrite
from ..schema import Attribute, Schema
from .base import Model, ResourceDescriptor, optional_value

SCHEMA = Schema(
    description="Manages a data app inside a Qlik Cloud data integration project.",
    attributes=(
        Attribute("id", computed=True),
        Attribute("name", required=True),
        Attribute("type", required=True),
        Attribute("description", optional=True),
        Attribute("project_id", required=True),
    ),
)


def _write(model: Model) -> DataAppWrite:
    return DataAppWrite(
        name=model["name"],
        type=model["type"],
        description=model.get("description") or "",
    )


async def create(client: QlikCloudClient, model: Model) -> Model:
    app = await client.create_data_app(model["project_id"], _write(model))
    return {"id": app.id}


async def read(client: QlikCloudClient, model: Model) -> Model:
    app = await client.get_data_app(model["project_id"], model["id"])
    return {
        "name": app.name,
        "description": optional_value(model.get("description"), app.description),
    }


async def update(client: QlikCloudClient, model: Model) -> Model:
    app = await client.update_data_app(model["project_id"], model["id"], _write(model))
    return {
        "name": app.name,
        "description": optional_value(model.get("description"), app.description),
    }


async def delete(client: QlikCloudClient, model: Model) -> None:
    await client.delete_data_app(model["project_id"], model["id"])


DESCRIPTOR = ResourceDescriptor(
    name="data_app",
    label="Data App",
    schema=SCHEMA,
    create=create,
    read=read,
    update=update,
    delete=delete,
    identity=("id", "project_id"),
)
