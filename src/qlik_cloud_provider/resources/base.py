# Qlik Cloud Provider
# File: resources/base.py
# Version: v1

"""Generic CRUD mapper shared by every managed resource.

Each resource type is described by a ResourceDescriptor: its schema plus four
coroutines that translate the model into client calls and return the fields
to overlay onto the model. The Resource class owns everything else:
validation, defaults, error-to-diagnostic translation and logging.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

from ..client import QlikCloudClient
from ..diagnostics import Diagnostics, LifecycleResponse
from ..errors import NotFoundError, QlikProviderError
from ..schema import Schema

logger = logging.getLogger(__name__)

PROVIDER_TYPE_NAME = "qlik"

Model = Dict[str, Any]
Call = Callable[[QlikCloudClient, Model], Awaitable[Optional[Model]]]

_VERBS = {
    "create": ("create", "creating"),
    "read": ("read", "reading"),
    "update": ("update", "updating"),
    "delete": ("delete", "deleting"),
}


def optional_value(current: Any, remote: str) -> Any:
    """Keep an unset optional attribute unset when the platform reports ""."""
    if current is None and remote == "":
        return None
    return remote


@dataclass(frozen=True)
class ResourceDescriptor:
    """Everything that differs between two resource types."""

    name: str
    label: str
    schema: Schema
    create: Call
    read: Call
    update: Call
    delete: Call
    # Attributes that must be known before read/update/delete can run.
    identity: Tuple[str, ...] = ("id",)


class Resource:
    """A managed resource bound to a configured client."""

    def __init__(
        self,
        descriptor: ResourceDescriptor,
        client: QlikCloudClient,
        provider_type_name: str = PROVIDER_TYPE_NAME,
    ) -> None:
        self.descriptor = descriptor
        self.client = client
        self.type_name = f"{provider_type_name}_{descriptor.name}"

    @property
    def schema(self) -> Schema:
        return self.descriptor.schema

    async def create(self, plan: Model) -> LifecycleResponse:
        return await self._run("create", plan, self.descriptor.create, validate=True)

    async def read(self, state: Model) -> LifecycleResponse:
        return await self._run("read", state, self.descriptor.read)

    async def update(self, plan: Model) -> LifecycleResponse:
        return await self._run("update", plan, self.descriptor.update, validate=True)

    async def delete(self, state: Model) -> LifecycleResponse:
        return await self._run("delete", state, self.descriptor.delete)

    async def _run(
        self,
        operation: str,
        model: Model,
        call: Call,
        validate: bool = False,
    ) -> LifecycleResponse:
        label = self.descriptor.label
        verb, gerund = _VERBS[operation]
        diags = Diagnostics()

        if validate:
            diags.extend(self.schema.validate(model))
        if operation != "create":
            for attribute in self.descriptor.identity:
                if not model.get(attribute):
                    diags.add_attribute_error(
                        attribute,
                        f"Missing {label} identifier",
                        f'Cannot {verb} {label} without "{attribute}".',
                    )
        if diags.has_error():
            return LifecycleResponse(None, diags)

        # Overlay onto a copy so a failed call leaves the caller's model as is.
        working = self.schema.apply_defaults(copy.deepcopy(model))
        entity_id = working.get("id") or ""

        logger.debug("%s %s %s", gerund.capitalize(), self.type_name, entity_id)
        try:
            overlay = await call(self.client, working)
        except NotFoundError as exc:
            logger.warning("%s %s not found: %s", self.type_name, entity_id, exc)
            diags.add_error(
                f"{label} Not Found",
                f"Could not {verb} {label} ID {entity_id}: {exc}",
            )
            return LifecycleResponse(None, diags)
        except QlikProviderError as exc:
            logger.warning("Failed %s %s %s: %s", gerund, self.type_name, entity_id, exc)
            if operation == "read":
                detail = f"Could not read {label} ID {entity_id}: {exc}"
            else:
                detail = f"Could not {verb} {label}, unexpected error: {exc}"
            diags.add_error(f"Error {gerund} {label}", detail)
            return LifecycleResponse(None, diags)

        if operation == "delete":
            return LifecycleResponse(None, diags)

        if overlay:
            working.update(overlay)
        return LifecycleResponse(working, diags)
