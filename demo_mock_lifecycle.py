# demo_mock_lifecycle.py
# Version: v1
#
# Demo: drive a space and a data connection through create/read/delete with
# the provider configured from QLIK_* environment variables, and print the
# state and diagnostics of each step.
#
# Usage (bash, mock mode):
#
#   QLIK_MOCK_MODE=1 QLIK_TENANT_ID=demo QLIK_REGION=eu \
#   QLIK_CLIENT_ID=x QLIK_CLIENT_SECRET=y python demo_mock_lifecycle.py

import asyncio
from typing import Any, Dict

from qlik_cloud_provider.diagnostics import LifecycleResponse
from qlik_cloud_provider.provider import QlikProvider


def show(step: str, response: LifecycleResponse, schema: Any) -> None:
    status = "ok" if response.ok else "FAILED"
    print(f"[{status}] {step}")
    state = schema.redact(response.state)
    if state:
        for key, value in state.items():
            print(f"    {key} = {value!r}")
    for diag in response.diagnostics:
        print(f"    {diag.severity}: {diag.summary} - {diag.detail}")


async def main() -> None:
    provider = QlikProvider()
    diags = provider.configure()
    if diags.has_error():
        for diag in diags.errors():
            print(f"Configuration error: {diag.summary}")
        return

    print(f"Provider configured for {provider.config.base_url}")

    spaces = provider.resource("qlik_space")
    connections = provider.resource("qlik_data_connection")

    space = await spaces.create({"name": "Demo Space", "type": "shared"})
    show("create qlik_space", space, spaces.schema)
    if not space.ok:
        return

    plan: Dict[str, Any] = {
        "name": "Demo Snowflake",
        "space_id": space.state["id"],
        "gateway_id": "MOCK_GATEWAY",
        "type": "reptgt_qdisnowflake",
        "connection_parameters": {
            "server": "demo.snowflakecomputing.com",
            "username": "loader",
            "warehouse": "COMPUTE_WH",
            "database": "RAW",
            "metadata_schema": "PUBLIC",
            "password": "not-a-real-password",
        },
    }
    connection = await connections.create(plan)
    show("create qlik_data_connection", connection, connections.schema)

    if connection.ok:
        refreshed = await connections.read(connection.state)
        show("read qlik_data_connection", refreshed, connections.schema)
        show("delete qlik_data_connection", await connections.delete(connection.state), connections.schema)

    show("delete qlik_space", await spaces.delete(space.state), spaces.schema)


if __name__ == "__main__":
    asyncio.run(main())
