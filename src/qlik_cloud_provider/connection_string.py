# Qlik Cloud Provider
# File: connection_string.py
# Version: v1

"""Connection property lists for the connection-string endpoint.

Given a connector type tag, assemble the ordered non-secret property list and
the separate credential list the platform turns into a connect statement.
Key names and order are consumed verbatim by Qlik Cloud.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .errors import UnsupportedConnectorError
from .models import ConnectionProperty, ConnectionStringRequest

SNOWFLAKE = "reptgt_qdisnowflake"
SAP_APPLICATION = "SAP_APPLICATION"

# Connector type -> engine driver reported back as the connection's qType.
DRIVERS = {
    SNOWFLAKE: "QlikConnectorsCommonService.exe",
    SAP_APPLICATION: "QlikConnectorsCommonService.exe",
}


def _text(parameters: Dict[str, Any], name: str) -> str:
    value = parameters.get(name)
    return "" if value is None else str(value)


def _snowflake(gateway_id: str, parameters: Dict[str, Any]) -> ConnectionStringRequest:
    properties = [
        ("sourceType", SNOWFLAKE),
        ("agentId", gateway_id),
        ("endpointTypePrefix", "reptgt_"),
        ("useDbCommandForTest", "true"),
        ("replicateEndpointType", "snowflake"),
        ("server", _text(parameters, "server")),
        ("port", "443"),
        ("username", _text(parameters, "username")),
        ("warehouse", _text(parameters, "warehouse")),
        ("database", _text(parameters, "database")),
        ("metadataschema", _text(parameters, "metadata_schema")),
        ("stagingtype", "SNOWFLAKE_STAGE"),
        ("proxySettingsOrigin", "ENDPOINT"),
        ("useProxyServer", "false"),
    ]
    return ConnectionStringRequest(
        properties=[ConnectionProperty(name, value) for name, value in properties],
        credentials=[ConnectionProperty("password", _text(parameters, "password"))],
    )


def build_connection_string_request(
    source_type: str,
    gateway_id: str,
    parameters: Optional[Dict[str, Any]],
) -> Optional[ConnectionStringRequest]:
    """Build the property lists for ``source_type``.

    Returns None for SAP_APPLICATION: the tag is recognized but has no
    property mapping yet. Raises UnsupportedConnectorError for any other tag
    without a mapping.
    """
    parameters = parameters or {}

    if source_type == SNOWFLAKE:
        return _snowflake(gateway_id or "", parameters)
    if source_type == SAP_APPLICATION:
        return None

    raise UnsupportedConnectorError(source_type)
