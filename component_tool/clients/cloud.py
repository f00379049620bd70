# component_tool/clients/cloud.py
"""Hosted control plane client"""

import json
from typing import Any, Dict, List, Optional

from .http import HttpControlPlaneClient
from ..api.exceptions import ProjectNotFoundError
from ..models.component import Component, ComponentType, ProjectRef
from ..models.deploy import DynamicLinkingMap, IfsFileProperties


class CloudClient(HttpControlPlaneClient):
    """Client for the hosted control plane with accounts and projects"""

    def __init__(self, config: Dict[str, Any] = None, transport=None):
        """
        Initialize cloud client

        Args:
            config: Configuration including:
                - url: Control plane base URL
                - token: API token
                - account_id: Account used when a project has no explicit owner
            transport: Custom httpx transport (tests)
        """
        super().__init__(config, transport)
        self.token = self.config.get("token")
        self.account_id = self.config.get("account_id")

    def _headers(self) -> Dict[str, str]:
        headers = super()._headers()
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def list_components(self,
                              project_id: Optional[str] = None,
                              name: Optional[str] = None) -> List[Component]:
        params = {}
        if project_id:
            params["project-id"] = project_id
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
        data["query"] = json.dumps({"projectId": project_id, "componentName": name})
        result = await self._request_json("POST", "/components", data=data, files=upload)
        return Component.from_dict(result)

    async def resolve_project(self, account_id: Optional[str], project_name: str) -> ProjectRef:
        data = await self._request_json("GET", "/projects", params={"project-name": project_name})
        owner = account_id or self.account_id

        for project_data in data:
            project = ProjectRef.from_dict(project_data)
            if project.project_name != project_name:
                continue
            if owner is None or project.account_id == owner:
                return project

        raise ProjectNotFoundError(project_name, account_id)
