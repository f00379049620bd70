# component_tool/clients/oss.py
"""Open source control plane client"""

from typing import List, Optional

from .http import HttpControlPlaneClient
from ..api.exceptions import UnsupportedByBackendError
from ..models.component import Component, ComponentType, ProjectRef
from ..models.deploy import DynamicLinkingMap, IfsFileProperties


class OssClient(HttpControlPlaneClient):
    """Client for a self-hosted control plane without accounts or projects"""

    async def list_components(self,
                              project_id: Optional[str] = None,
                              name: Optional[str] = None) -> List[Component]:
        params = {}
        if name:
            params["component-name"] = name
        data = await self._request_json("GET", "/components", params=params)
        return [Component.from_dict(c) for c in data]

    async def create_component(self,
                               name: str,
                               component_type: ComponentType,
                               component: bytes,
                               project_id: Optional[str] = None,
                               files: Optional[List[IfsFileProperties]] = None,
                               files_archive: Optional[bytes] = None,
                               dynamic_linking: Optional[DynamicLinkingMap] = None) -> Component:
        data, upload = self._upload_payload(
            component_type, component, files, files_archive, dynamic_linking
        )
        data["name"] = name
        result = await self._request_json("POST", "/components", data=data, files=upload)
        return Component.from_dict(result)

    async def resolve_project(self, account_id: Optional[str], project_name: str) -> ProjectRef:
        raise UnsupportedByBackendError(
            f"Projects are not supported by the OSS backend (requested: {project_name})"
        )
