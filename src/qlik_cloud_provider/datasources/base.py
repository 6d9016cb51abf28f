# Qlik Cloud Provider
# File: datasources/base.py
# Version: v1

"""Read-only counterpart of the resource mapper."""

from __future__ import annotations

import copy
from dataclasses import dataclass
import logging
from typing import Any, Awaitable, Callable, Dict

from ..client import QlikCloudClient
from ..diagnostics import Diagnostics, LifecycleResponse
from ..errors import QlikProviderError
from ..resources.base import PROVIDER_TYPE_NAME
from ..schema import Schema

logger = logging.getLogger(__name__)

Model = Dict[str, Any]
Query = Callable[[QlikCloudClient, Model], Awaitable[Model]]


@dataclass(frozen=True)
class DataSourceDescriptor:
    name: str
    label: str
    schema: Schema
    read: Query


class DataSource:
    """A lookup bound to a configured client."""

    def __init__(
        self,
        descriptor: DataSourceDescriptor,
        client: QlikCloudClient,
        provider_type_name: str = PROVIDER_TYPE_NAME,
    ) -> None:
        self.descriptor = descriptor
        self.client = client
        self.type_name = f"{provider_type_name}_{descriptor.name}"

    @property
    def schema(self) -> Schema:
        return self.descriptor.schema

    async def read(self, config: Model) -> LifecycleResponse:
        diags = Diagnostics()
        diags.extend(self.schema.validate(config))
        if diags.has_error():
            return LifecycleResponse(None, diags)

        state = copy.deepcopy(config)
        logger.debug("Reading data source %s", self.type_name)
        try:
            result = await self.descriptor.read(self.client, state)
        except QlikProviderError as exc:
            logger.warning("Failed reading data source %s: %s", self.type_name, exc)
            diags.add_error(f"Unable to Read Qlik Cloud {self.descriptor.label}", str(exc))
            return LifecycleResponse(None, diags)

        state.update(result)
        return LifecycleResponse(state, diags)
