# Qlik Cloud Provider
# File: datasources/__init__.py
# Version: v1

"""Read-only data sources exposed by the provider."""

from __future__ import annotations

from . import data_connections, data_gateway, source_entities, space, spaces
from .base import DataSource, DataSourceDescriptor

DESCRIPTORS = (
    spaces.DESCRIPTOR,
    space.DESCRIPTOR,
    data_gateway.DESCRIPTOR,
    data_connections.DESCRIPTOR,
    source_entities.DESCRIPTOR,
)

__all__ = ["DESCRIPTORS", "DataSource", "DataSourceDescriptor"]
