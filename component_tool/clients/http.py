# component_tool/clients/http.py
"""Shared HTTP implementation of the control plane client"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

import httpx

from .base import ControlPlaneClient
from ..api.exceptions import (
    RemoteConflictError,
    RemoteError,
    RemoteNotFoundError,
    RemoteRequestError,
)
from ..constants import API_PREFIX, DEFAULT_TIMEOUT, WORKER_LIST_PAGE_SIZE
from ..models.component import Component, ComponentType
from ..models.deploy import DynamicLinkingMap, IfsFileProperties
from ..models.worker import WorkerMetadata, WorkerUpdateMode

logger = logging.getLogger(__name__)


def _response_text(response: httpx.Response) -> str:
    """Return response text without raising secondary decode errors"""
    try:
        return response.text
    except Exception:
        return ""


def _status_error(response: httpx.Response) -> RemoteError:
    """Map a non-2xx response to a typed error"""
    request = response.request
    message = f"HTTP {response.status_code} for {request.method} {request.url}"
    body = _response_text(response)
    if body:
        message = f"{message}: {body}"

    if response.status_code == 404:
        return RemoteNotFoundError(message, body)
    if response.status_code == 409:
        return RemoteConflictError(message, body)
    return RemoteError(message, response.status_code, body)


class HttpControlPlaneClient(ControlPlaneClient):
    """Control plane client over the REST API

    Subclasses provide the backend specific parts: authentication headers,
    project scoping and component creation.
    """

    def __init__(self, config: Dict[str, Any] = None, transport: httpx.AsyncBaseTransport = None):
        """
        Initialize HTTP client

        Args:
            config: Configuration including:
                - url: Control plane base URL
                - timeout: Request timeout in seconds
            transport: Custom httpx transport (tests)
        """
        super().__init__(config)
        self.base_url = self.config.get("url", "").rstrip("/")
        self.timeout = float(self.config.get("timeout", DEFAULT_TIMEOUT))
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _headers(self) -> Dict[str, str]:
        return {"Accept": "application/json"}

    async def _do_initialize(self) -> None:
        """Open the connection pool"""
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self._headers(),
            transport=self._transport,
        )

    async def _do_close(self) -> None:
        """Close the connection pool"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Issue one request and map transport/status failures to typed errors"""
        await self.initialize()

        url = f"{API_PREFIX}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            raise RemoteRequestError(f"HTTP request failed for {method} {self.base_url}{url}: {e}") from e

        if response.is_error:
            raise _status_error(response)
        return response

    async def _request_json(self, method: str, path: str, **kwargs: Any) -> Any:
        """Issue one request and decode JSON from the response"""
        response = await self._request(method, path, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            raise RemoteError(
                f"Invalid JSON response for {method} {path}",
                response.status_code,
                _response_text(response),
            ) from e

    @staticmethod
    def _upload_payload(component_type: ComponentType,
                        component: bytes,
                        files: Optional[List[IfsFileProperties]],
                        files_archive: Optional[bytes],
                        dynamic_linking: Optional[DynamicLinkingMap]) -> Tuple[Dict[str, str], Dict[str, Any]]:
        """Build multipart form fields and files shared by create and update"""
        data = {"componentType": component_type.value}
        upload = {"component": ("component.wasm", component, "application/wasm")}

        if files_archive is not None:
            data["files"] = json.dumps({"values": [f.to_dict() for f in files or []]})
            upload["filesArchive"] = ("files.zip", files_archive, "application/zip")

        if dynamic_linking is not None:
            data["dynamicLinking"] = json.dumps(dynamic_linking.to_dict())

        return data, upload

    # Components

    async def get_component(self, component_id: UUID, version: int) -> Component:
        data = await self._request_json("GET", f"/components/{component_id}/versions/{version}")
        return Component.from_dict(data)

    async def get_latest_component(self, component_id: UUID) -> Component:
        data = await self._request_json("GET", f"/components/{component_id}/latest")
        return Component.from_dict(data)

    async def update_component(self,
                               component_id: UUID,
                               component_type: ComponentType,
                               component: bytes,
                               files: Optional[List[IfsFileProperties]] = None,
                               files_archive: Optional[bytes] = None,
                               dynamic_linking: Optional[DynamicLinkingMap] = None) -> Component:
        data, upload = self._upload_payload(
            component_type, component, files, files_archive, dynamic_linking
        )
        result = await self._request_json(
            "POST", f"/components/{component_id}/updates", data=data, files=upload
        )
        return Component.from_dict(result)

    # Workers

    async def get_worker_metadata(self, component_id: UUID, worker_name: str) -> WorkerMetadata:
        data = await self._request_json("GET", f"/components/{component_id}/workers/{worker_name}")
        return WorkerMetadata.from_dict(data)

    async def list_workers(self, component_id: UUID) -> List[WorkerMetadata]:
        workers = []
        cursor = None

        while True:
            params = {"count": WORKER_LIST_PAGE_SIZE, "precise": "true"}
            if cursor:
                params["cursor"] = cursor
            page = await self._request_json("GET", f"/components/{component_id}/workers", params=params)
            workers.extend(WorkerMetadata.from_dict(w) for w in page.get("workers", []))

            cursor = page.get("cursor")
            if not cursor:
                break

        return workers

    async def update_worker(self,
                            component_id: UUID,
                            worker_name: str,
                            mode: WorkerUpdateMode,
                            target_version: int) -> None:
        await self._request(
            "POST",
            f"/components/{component_id}/workers/{worker_name}/update",
            json={"mode": mode.api_value, "targetVersion": target_version},
        )

    async def delete_worker(self, component_id: UUID, worker_name: str) -> None:
        await self._request("DELETE", f"/components/{component_id}/workers/{worker_name}")

    async def launch_worker(self,
                            component_id: UUID,
                            worker_name: str,
                            args: List[str],
                            env: Dict[str, str]) -> None:
        await self._request(
            "POST",
            f"/components/{component_id}/workers",
            json={"name": worker_name, "args": args, "env": env},
        )
