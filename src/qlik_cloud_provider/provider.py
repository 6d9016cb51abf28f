# Qlik Cloud Provider
# File: provider.py
# Version: v1

"""Provider registry: configuration, client construction and type lookup.

The provider is configured once. Configure builds a single API client and
hands it to every resource and data source it constructs, so mappers never
see an untyped handle.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from . import __version__
from .client import QlikCloudClient, make_client
from .config import QlikConfig, resolve_config
from .datasources import DESCRIPTORS as DATA_SOURCE_DESCRIPTORS
from .datasources import DataSource
from .diagnostics import Diagnostics
from .errors import ConfigurationError
from .resources import DESCRIPTORS as RESOURCE_DESCRIPTORS
from .resources import Resource
from .resources.base import PROVIDER_TYPE_NAME
from .schema import Attribute, Schema

logger = logging.getLogger(__name__)

SCHEMA = Schema(
    description="Qlik Cloud provider settings. Unset values fall back to QLIK_* environment variables.",
    attributes=(
        Attribute("tenant_id", optional=True),
        Attribute("region", optional=True),
        Attribute("client_id", optional=True),
        Attribute("client_secret", optional=True, sensitive=True),
    ),
)


class QlikProvider:
    """Holds the shared configuration and the resources built from it."""

    type_name = PROVIDER_TYPE_NAME
    schema = SCHEMA

    def __init__(self, version: str = __version__) -> None:
        self.version = version
        self.config: Optional[QlikConfig] = None
        self.client: Optional[QlikCloudClient] = None
        self._resources: Dict[str, Resource] = {}
        self._data_sources: Dict[str, DataSource] = {}

    @property
    def configured(self) -> bool:
        return self.client is not None

    def configure(
        self,
        config: Optional[Mapping[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
        client: Optional[QlikCloudClient] = None,
    ) -> Diagnostics:
        """Resolve settings and build the client.

        ``environ`` defaults to the process environment. ``client`` replaces
        the client that would otherwise be built from the resolved settings.
        """
        config = dict(config or {})
        diags = SCHEMA.validate(config)
        if diags.has_error():
            return diags

        cfg, resolved = resolve_config(config, environ)
        diags.extend(resolved)
        if cfg is None:
            logger.warning(
                "Provider configuration incomplete: %s",
                ", ".join(d.attribute or d.summary for d in diags.errors()),
            )
            return diags

        if client is None:
            client = make_client(cfg)

        self.config = cfg
        self.client = client
        self._resources = {}
        self._data_sources = {}
        for descriptor in RESOURCE_DESCRIPTORS:
            resource = Resource(descriptor, client, self.type_name)
            self._resources[resource.type_name] = resource
        for descriptor in DATA_SOURCE_DESCRIPTORS:
            data_source = DataSource(descriptor, client, self.type_name)
            self._data_sources[data_source.type_name] = data_source

        logger.info(
            "Configured Qlik Cloud provider for %s (mock_mode=%s)",
            cfg.base_url,
            cfg.mock_mode,
        )
        return diags

    def _require_configured(self) -> None:
        if not self.configured:
            raise ConfigurationError("The Qlik Cloud provider has not been configured.")

    def resources(self) -> Dict[str, Resource]:
        self._require_configured()
        return dict(self._resources)

    def data_sources(self) -> Dict[str, DataSource]:
        self._require_configured()
        return dict(self._data_sources)

    def resource(self, type_name: str) -> Resource:
        return self.resources()[type_name]

    def data_source(self, type_name: str) -> DataSource:
        return self.data_sources()[type_name]

    @classmethod
    def describe(cls) -> Dict[str, Any]:
        """Schemas of the provider, every resource and every data source."""
        prefix = cls.type_name
        return {
            "provider": cls.schema.to_dict(),
            "resources": {
                f"{prefix}_{d.name}": d.schema.to_dict() for d in RESOURCE_DESCRIPTORS
            },
            "data_sources": {
                f"{prefix}_{d.name}": d.schema.to_dict() for d in DATA_SOURCE_DESCRIPTORS
            },
        }
