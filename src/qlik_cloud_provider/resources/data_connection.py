# Qlik Cloud Provider
# File: resources/data_connection.py
# Version: v1

"""qlik_data_connection: a link to an external data source.

The connect statement is not written by hand: the connection parameters are
turned into a property list, the platform assembles the statement and a
credentials token from it, and both go into the create/update request.
"""

from __future__ import annotations

from ..client import QlikCloudClient
from ..connection_string import DRIVERS, build_connection_string_request
from ..errors import UnsupportedConnectorError
from ..models import ConnectionStringResponse, DataConnectionCreate, DataConnectionUpdate
from ..schema import OBJECT, Attribute, Schema
from .base import Model, ResourceDescriptor

CONNECTION_PARAMETERS = (
    Attribute("server", optional=True),
    Attribute("username", optional=True),
    Attribute("warehouse", optional=True),
    Attribute("database", optional=True),
    Attribute("metadata_schema", optional=True),
    Attribute("sap_client", optional=True),
    Attribute("password", optional=True, sensitive=True),
)

SCHEMA = Schema(
    description="Manages a Qlik Cloud data connection.",
    attributes=(
        Attribute("id", computed=True),
        Attribute("name", required=True),
        Attribute("space_id", required=True),
        Attribute("gateway_id", required=True),
        Attribute("type", required=True, description="Connector type, e.g. reptgt_qdisnowflake."),
        Attribute(
            "connection_parameters",
            kind=OBJECT,
            required=True,
            attributes=CONNECTION_PARAMETERS,
        ),
        Attribute("driver", computed=True),
        Attribute("engine_id", computed=True),
        Attribute("connect_statement", computed=True),
        Attribute("credentials_id", computed=True),
        Attribute("credentials_name", computed=True),
    ),
)


async def _connection_string(client: QlikCloudClient, model: Model) -> ConnectionStringResponse:
    source_type = model["type"]
    request = build_connection_string_request(
        source_type,
        model.get("gateway_id") or "",
        model.get("connection_parameters"),
    )
    if request is None:
        raise UnsupportedConnectorError(source_type)
    return await client.get_connection_string(source_type, request)


async def create(client: QlikCloudClient, model: Model) -> Model:
    source_type = model["type"]
    c = await _connection_string(client, model)
    connection = await client.create_data_connection(
        DataConnectionCreate(
            name=model["name"],
            space_id=model["space_id"],
            connect_statement=c.connection_string,
            data_source_id=source_type,
            type=DRIVERS.get(source_type, ""),
            username=c.user_id,
            password=c.credentials_connection_string,
        )
    )
    return {
        "id": connection.id,
        "engine_id": connection.engine_id,
        "connect_statement": connection.connect_statement,
        "driver": connection.type,
        "credentials_id": connection.credentials_id,
        "credentials_name": connection.credentials_name,
    }


async def read(client: QlikCloudClient, model: Model) -> Model:
    # connection_parameters (and its password) are write-only.
    connection = await client.get_data_connection(model["id"])
    refreshed: Model = {"name": connection.name}
    if connection.space_id:
        refreshed["space_id"] = connection.space_id
    return refreshed


async def update(client: QlikCloudClient, model: Model) -> Model:
    source_type = model["type"]
    c = await _connection_string(client, model)
    request = DataConnectionUpdate(
        id=model["id"],
        name=model["name"],
        space_id=model["space_id"],
        engine_id=model.get("engine_id") or "",
        connect_statement=c.connection_string,
        data_source_id=source_type,
        type=DRIVERS.get(source_type, ""),
        username=c.user_id,
        password=c.credentials_connection_string,
    )
    await client.update_data_connection(model["id"], request)
    return {"connect_statement": request.connect_statement, "driver": request.type}


async def delete(client: QlikCloudClient, model: Model) -> None:
    await client.delete_data_connection(model["id"])


DESCRIPTOR = ResourceDescriptor(
    name="data_connection",
    label="Data Connection",
    schema=SCHEMA,
    create=create,
    read=read,
    update=update,
    delete=delete,
)
