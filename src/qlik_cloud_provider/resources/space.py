# Qlik Cloud Provider
# File: resources/space.py
# Version: v1

"""qlik_space: a top-level container for apps, connections and projects."""

from __future__ import annotations

from ..client import QlikCloudClient
from ..models import SpaceCreate, SpaceUpdate
from ..schema import Attribute, Schema
from .base import Model, ResourceDescriptor, optional_value

SCHEMA = Schema(
    description="Manages a Qlik Cloud space.",
    attributes=(
        Attribute("id", computed=True, description="Identifier assigned by Qlik Cloud."),
        Attribute("name", required=True),
        Attribute("type", required=True, description="shared, managed or data."),
        Attribute("description", optional=True),
        Attribute("owner_id", computed=True),
    ),
)


async def create(client: QlikCloudClient, model: Model) -> Model:
    space = await client.create_space(
        SpaceCreate(
            name=model["name"],
            type=model["type"],
            description=model.get("description") or "",
        )
    )
    return {"id": space.id, "owner_id": space.owner_id}


async def read(client: QlikCloudClient, model: Model) -> Model:
    space = await client.get_space(model["id"])
    return {
        "id": space.id,
        "name": space.name,
        "type": space.type,
        "description": optional_value(model.get("description"), space.description),
        "owner_id": space.owner_id,
    }


async def update(client: QlikCloudClient, model: Model) -> Model:
    space = await client.update_space(
        model["id"],
        SpaceUpdate(
            name=model["name"],
            owner_id=model.get("owner_id") or "",
            description=model.get("description") or "",
        ),
    )
    return {"owner_id": space.owner_id}


async def delete(client: QlikCloudClient, model: Model) -> None:
    await client.delete_space(model["id"])


DESCRIPTOR = ResourceDescriptor(
    name="space",
    label="Space",
    schema=SCHEMA,
    create=create,
    read=read,
    update=update,
    delete=delete,
)
