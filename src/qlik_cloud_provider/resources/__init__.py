# Qlik Cloud Provider
# File: resources/__init__.py
# Version: v1

"""Managed resources exposed by the provider."""

from __future__ import annotations

from . import data_app, data_app_source_selection, data_connection, data_project, space
from .base import Resource, ResourceDescriptor

DESCRIPTORS = (
    space.DESCRIPTOR,
    data_connection.DESCRIPTOR,
    data_project.DESCRIPTOR,
    data_app.DESCRIPTOR,
    data_app_source_selection.DESCRIPTOR,
)

__all__ = ["DESCRIPTORS", "Resource", "ResourceDescriptor"]
