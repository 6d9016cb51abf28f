# Qlik Cloud Provider
# File: resources/data_project.py
# Version: v1

"""qlik_data_project: a data integration (lakehouse) project in a space."""

from __future__ import annotations

from ..client import QlikCloudClient
from ..models import DataProjectConfiguration, DataProjectWrite
from ..schema import BOOL, Attribute, Schema
from .base import Model, ResourceDescriptor, optional_value

SCHEMA = Schema(
    description="Manages a Qlik Cloud data integration project.",
    attributes=(
        Attribute("id", computed=True),
        Attribute("name", required=True),
        Attribute("description", optional=True),
        Attribute("space_id", required=True),
        Attribute("lakehouse_type", required=True),
        Attribute("type", required=True),
        Attribute("storage_connection", required=True),
        Attribute("batch_mode", kind=BOOL, optional=True, computed=True, default=True),
    ),
)


def _write(model: Model, with_id: bool = False) -> DataProjectWrite:
    return DataProjectWrite(
        space_id=model["space_id"],
        data=DataProjectConfiguration(
            id=model["id"] if with_id else None,
            name=model["name"],
            lakehouse_type=model["lakehouse_type"],
            type=model["type"],
            storage_connection=model["storage_connection"],
            description=model.get("description") or "",
            batch_mode=bool(model.get("batch_mode", True)),
        ),
    )


async def create(client: QlikCloudClient, model: Model) -> Model:
    project = await client.create_data_project(_write(model))
    return {"id": project.id}


async def read(client: QlikCloudClient, model: Model) -> Model:
    project = await client.get_data_project(model["id"])
    return {
        "name": project.name,
        "description": optional_value(model.get("description"), project.description),
    }


async def update(client: QlikCloudClient, model: Model) -> None:
    await client.update_data_project(model["id"], _write(model, with_id=True))


async def delete(client: QlikCloudClient, model: Model) -> None:
    await client.delete_data_project(model["id"])


DESCRIPTOR = ResourceDescriptor(
    name="data_project",
    label="Data Project",
    schema=SCHEMA,
    create=create,
    read=read,
    update=update,
    delete=delete,
)
