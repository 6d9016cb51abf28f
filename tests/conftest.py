# Qlik Cloud Provider
# File: tests/conftest.py
# Version: v1

from __future__ import annotations

import pytest

from qlik_cloud_provider.config import QlikConfig
from qlik_cloud_provider.mock import MockQlikClient


@pytest.fixture
def config() -> QlikConfig:
    return QlikConfig(
        tenant_id="acme",
        region="eu",
        client_id="client-id",
        client_secret="super-secret",
    )


@pytest.fixture
def mock_client(config: QlikConfig) -> MockQlikClient:
    return MockQlikClient(config=config)


@pytest.fixture
def snowflake_plan() -> dict:
    return {
        "name": "Snowflake DWH",
        "space_id": "space-sales",
        "gateway_id": "MOCK_GATEWAY",
        "type": "reptgt_qdisnowflake",
        "connection_parameters": {
            "server": "host1",
            "username": "u",
            "warehouse": "w",
            "database": "d",
            "metadata_schema": "s",
            "password": "p",
        },
    }
