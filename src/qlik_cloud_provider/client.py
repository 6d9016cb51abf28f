# Qlik Cloud Provider
# File: client.py
# Version: v1
"""High-level client for the Qlik Cloud REST APIs.

Implements the calls the resource and data source mappers need:

- spaces: create / get / update / delete / list
- data connections: create / get / update / delete / list, connection strings
- data integration projects and apps: create / get / update / delete
- data app source selections and source entity search
- data gateways: get

Every failure is raised as RemoteError carrying the upstream text; HTTP 404
is raised as NotFoundError. Nothing is retried.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
from httpx import HTTPStatusError, RequestError

from .auth import OAuthClient
from .config import QlikConfig
from .errors import NotFoundError, RemoteError
from .mock import MockQlikClient
from .models import (
    ConnectionStringRequest,
    ConnectionStringResponse,
    DataApp,
    DataAppWrite,
    DataConnection,
    DataConnectionCreate,
    DataConnectionUpdate,
    DataGateway,
    DataProject,
    DataProjectWrite,
    ListFilter,
    SourceEntitiesQuery,
    SourceEntity,
    SourceSelection,
    SourceSelectionPut,
    Space,
    SpaceCreate,
    SpaceUpdate,
)

logger = logging.getLogger(__name__)


def _key(value: str) -> str:
    """Quote an identifier for use as a path segment."""
    return quote(str(value), safe="")


def _expect_object(data: Any, what: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise RemoteError(
            f"Unexpected response when {what}: "
            f"expected JSON object, got {type(data).__name__}."
        )
    return data


@dataclass
class QlikCloudClient:
    """Wrapper around the Qlik Cloud spaces, data and integration APIs."""

    config: QlikConfig
    oauth: OAuthClient
    transport: Optional[httpx.AsyncBaseTransport] = None

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        what: str,
        *,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send one authenticated request and return the decoded JSON body.

        Returns None for empty bodies (204 No Content).
        """
        token = await self.oauth.get_access_token()
        url = f"{self.config.base_url}{path}"

        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }

        logger.debug("%s %s (%s)", method, url, what)
        async with httpx.AsyncClient(
            timeout=float(self.config.timeout_seconds),
            verify=self.config.verify_tls,
            transport=self.transport,
        ) as http_client:
            try:
                response = await http_client.request(
                    method, url, headers=headers, json=json, params=params
                )
            except RequestError as exc:
                raise RemoteError(
                    f"Error calling Qlik Cloud API at '{url}' while {what}: {exc}"
                ) from exc

            try:
                response.raise_for_status()
            except HTTPStatusError as exc:
                status = response.status_code
                error_cls = NotFoundError if status == 404 else RemoteError
                raise error_cls(
                    f"Failed {what} at '{url}' (HTTP {status}): {response.text}",
                    status_code=status,
                    body=response.text,
                ) from exc

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as exc:
            raise RemoteError(
                f"Invalid JSON in response from '{url}' while {what}: {exc}"
            ) from exc

    # ------------------------------------------------------------------
    # Spaces
    # ------------------------------------------------------------------

    async def create_space(self, space: SpaceCreate) -> Space:
        data = await self._request(
            "POST", "/api/v1/spaces", "creating space", json=space.to_payload()
        )
        return Space.from_payload(_expect_object(data, "creating space"))

    async def get_space(self, space_id: str) -> Space:
        what = f"reading space '{space_id}'"
        data = await self._request("GET", f"/api/v1/spaces/{_key(space_id)}", what)
        return Space.from_payload(_expect_object(data, what))

    async def update_space(self, space_id: str, space: SpaceUpdate) -> Space:
        what = f"updating space '{space_id}'"
        data = await self._request(
            "PUT", f"/api/v1/spaces/{_key(space_id)}", what, json=space.to_payload()
        )
        return Space.from_payload(_expect_object(data, what))

    async def delete_space(self, space_id: str) -> None:
        await self._request(
            "DELETE", f"/api/v1/spaces/{_key(space_id)}", f"deleting space '{space_id}'"
        )

    async def list_spaces(self, list_filter: ListFilter) -> List[Space]:
        """List spaces matching ``list_filter``.

        Only the first page is requested; anything beyond ``list_filter.limit``
        is not fetched.
        """
        data = await self._request(
            "GET", "/api/v1/spaces", "listing spaces", params=list_filter.to_params()
        )
        raw = data.get("data") if isinstance(data, dict) else data
        if not isinstance(raw, list):
            return []
        return [Space.from_payload(item) for item in raw if isinstance(item, dict)]

    # ------------------------------------------------------------------
    # Data connections
    # ------------------------------------------------------------------

    async def get_connection_string(
        self,
        source_type: str,
        request: ConnectionStringRequest,
    ) -> ConnectionStringResponse:
        """Ask the platform to assemble a connect statement and credentials.

        Property names and order in ``request`` are consumed verbatim.
        """
        what = f"building connection string for '{source_type}'"
        data = await self._request(
            "POST",
            f"/api/v1/data-sources/{_key(source_type)}/connection-string",
            what,
            json=request.to_payload(),
        )
        return ConnectionStringResponse.from_payload(_expect_object(data, what))

    async def create_data_connection(self, connection: DataConnectionCreate) -> DataConnection:
        what = "creating data connection"
        data = await self._request(
            "POST", "/api/v1/data-connections", what, json=connection.to_payload()
        )
        return DataConnection.from_payload(_expect_object(data, what))

    async def get_data_connection(self, connection_id: str) -> DataConnection:
        what = f"reading data connection '{connection_id}'"
        data = await self._request(
            "GET", f"/api/v1/data-connections/{_key(connection_id)}", what
        )
        return DataConnection.from_payload(_expect_object(data, what))

    async def update_data_connection(
        self,
        connection_id: str,
        connection: DataConnectionUpdate,
    ) -> None:
        await self._request(
            "PUT",
            f"/api/v1/data-connections/{_key(connection_id)}",
            f"updating data connection '{connection_id}'",
            json=connection.to_payload(),
        )

    async def delete_data_connection(self, connection_id: str) -> None:
        await self._request(
            "DELETE",
            f"/api/v1/data-connections/{_key(connection_id)}",
            f"deleting data connection '{connection_id}'",
        )

    async def list_data_connections(self, list_filter: ListFilter) -> List[DataConnection]:
        data = await self._request(
            "GET",
            "/api/v1/data-connections",
            "listing data connections",
            params=list_filter.to_params(),
        )
        raw = data.get("data") if isinstance(data, dict) else data
        if not isinstance(raw, list):
            return []
        return [DataConnection.from_payload(item) for item in raw if isinstance(item, dict)]

    # ------------------------------------------------------------------
    # Data integration projects
    # ------------------------------------------------------------------

    async def create_data_project(self, project: DataProjectWrite) -> DataProject:
        what = "creating data project"
        data = await self._request(
            "POST", "/api/v1/di-projects", what, json=project.to_payload()
        )
        data = _expect_object(data, what)
        return DataProject.from_payload(_expect_object(data.get("dataProject"), what))

    async def get_data_project(self, project_id: str) -> DataProject:
        what = f"reading data project '{project_id}'"
        data = await self._request("GET", f"/api/v1/di-projects/{_key(project_id)}", what)
        data = _expect_object(data, what)
        return DataProject.from_payload(_expect_object(data.get("dataProject"), what))

    async def update_data_project(self, project_id: str, project: DataProjectWrite) -> None:
        await self._request(
            "PUT",
            f"/api/v1/di-projects/{_key(project_id)}",
            f"updating data project '{project_id}'",
            json=project.to_payload(),
        )

    async def delete_data_project(self, project_id: str) -> None:
        await self._request(
            "DELETE",
            f"/api/v1/di-projects/{_key(project_id)}",
            f"deleting data project '{project_id}'",
        )

    # ------------------------------------------------------------------
    # Data apps
    # ------------------------------------------------------------------

    def _app_path(self, project_id: str, app_id: Optional[str] = None) -> str:
        path = f"/api/v1/di-projects/{_key(project_id)}/di-apps"
        if app_id is not None:
            path = f"{path}/{_key(app_id)}"
        return path

    async def create_data_app(self, project_id: str, app: DataAppWrite) -> DataApp:
        what = f"creating data app in project '{project_id}'"
        data = await self._request(
            "POST", self._app_path(project_id), what, json=app.to_payload()
        )
        data = _expect_object(data, what)
        return DataApp.from_payload(_expect_object(data.get("dataApp"), what), project_id)

    async def get_data_app(self, project_id: str, app_id: str) -> DataApp:
        what = f"reading data app '{app_id}'"
        data = await self._request("GET", self._app_path(project_id, app_id), what)
        data = _expect_object(data, what)
        return DataApp.from_payload(_expect_object(data.get("dataApp"), what), project_id)

    async def update_data_app(self, project_id: str, app_id: str, app: DataAppWrite) -> DataApp:
        what = f"updating data app '{app_id}'"
        data = await self._request(
            "PUT", self._app_path(project_id, app_id), what, json=app.to_payload()
        )
        data = _expect_object(data, what)
        return DataApp.from_payload(_expect_object(data.get("dataApp"), what), project_id)

    async def delete_data_app(self, project_id: str, app_id: str) -> None:
        await self._request(
            "DELETE", self._app_path(project_id, app_id), f"deleting data app '{app_id}'"
        )

    # ------------------------------------------------------------------
    # Source selection and source entities
    # ------------------------------------------------------------------

    async def put_source_selection(
        self,
        project_id: str,
        app_id: str,
        selection: SourceSelectionPut,
    ) -> SourceSelection:
        """Replace the whole source selection of a data app."""
        what = f"writing source selection of data app '{app_id}'"
        data = await self._request(
            "PUT",
            f"{self._app_path(project_id, app_id)}/source-selection",
            what,
            json=selection.to_payload(),
        )
        return SourceSelection.from_payload(_expect_object(data, what))

    async def get_source_selection(self, project_id: str, app_id: str) -> SourceSelection:
        what = f"reading source selection of data app '{app_id}'"
        data = await self._request(
            "GET", f"{self._app_path(project_id, app_id)}/source-selection", what
        )
        return SourceSelection.from_payload(_expect_object(data, what))

    async def get_source_entities(
        self,
        project_id: str,
        app_id: str,
        query: SourceEntitiesQuery,
    ) -> List[SourceEntity]:
        what = f"searching source entities of data app '{app_id}'"
        data = await self._request(
            "POST",
            f"{self._app_path(project_id, app_id)}/source-entities",
            what,
            json=query.to_payload(),
        )
        raw = _expect_object(data, what).get("entities")
        if not isinstance(raw, list):
            return []
        return [SourceEntity.from_payload(item) for item in raw if isinstance(item, dict)]

    # ------------------------------------------------------------------
    # Data gateways
    # ------------------------------------------------------------------

    async def get_data_gateway(self, gateway_id: str) -> DataGateway:
        what = f"reading data gateway '{gateway_id}'"
        data = await self._request(
            "GET", f"/api/v1/data-gateways/{_key(gateway_id)}", what
        )
        return DataGateway.from_payload(_expect_object(data, what))


def make_client(
    config: QlikConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> QlikCloudClient:
    """Create the API client for ``config``.

    In mock mode a lightweight in-process mock client is returned instead of
    a real HTTP client.
    """
    if config.mock_mode:
        return MockQlikClient(config=config)  # type: ignore[return-value]

    oauth = OAuthClient(config=config, transport=transport)
    return QlikCloudClient(config=config, oauth=oauth, transport=transport)
