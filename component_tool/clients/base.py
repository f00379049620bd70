# component_tool/clients/base.py
"""Control plane client abstract base classes"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from uuid import UUID

from ..models.component import Component, ComponentType, ProjectRef
from ..models.deploy import DynamicLinkingMap, IfsFileProperties
from ..models.worker import WorkerMetadata, WorkerUpdateMode


class ComponentStore(ABC):
    """Remote CRUD and query surface for components"""

    @abstractmethod
    async def list_components(self,
                              project_id: Optional[str] = None,
                              name: Optional[str] = None) -> List[Component]:
        """
        List components, every version of every match

        Args:
            project_id: Project scope (cloud only)
            name: Filter by component name

        Returns:
            Components in the order returned by the control plane
        """
        pass

    @abstractmethod
    async def get_component(self, component_id: UUID, version: int) -> Component:
        """
        Get one version of a component

        Raises:
            RemoteNotFoundError: If the component or version does not exist
        """
        pass

    @abstractmethod
    async def get_latest_component(self, component_id: UUID) -> Component:
        """
        Get the latest version of a component

        Raises:
            RemoteNotFoundError: If the component does not exist
        """
        pass

    @abstractmethod
    async def create_component(self,
                               name: str,
                               component_type: ComponentType,
                               component: bytes,
                               project_id: Optional[str] = None,
                               files: Optional[List[IfsFileProperties]] = None,
                               files_archive: Optional[bytes] = None,
                               dynamic_linking: Optional[DynamicLinkingMap] = None) -> Component:
        """
        Create a new component, allocating an id at version 0

        Args:
            name: Component name
            component_type: Durable or ephemeral
            component: Linked WASM content
            project_id: Project scope (cloud only)
            files: Initial file properties, only with files_archive
            files_archive: Initial files archive content
            dynamic_linking: Dynamic linking map, omitted when None

        Returns:
            Created component
        """
        pass

    @abstractmethod
    async def update_component(self,
                               component_id: UUID,
                               component_type: ComponentType,
                               component: bytes,
                               files: Optional[List[IfsFileProperties]] = None,
                               files_archive: Optional[bytes] = None,
                               dynamic_linking: Optional[DynamicLinkingMap] = None) -> Component:
        """
        Upload a new version of an existing component

        Returns:
            Component at its new version
        """
        pass

    @abstractmethod
    async def resolve_project(self, account_id: Optional[str], project_name: str) -> ProjectRef:
        """
        Resolve a project name to a project reference

        Raises:
            ProjectNotFoundError: If no such project exists
            UnsupportedByBackendError: If the backend has no projects
        """
        pass


class WorkerStore(ABC):
    """Remote worker operations"""

    @abstractmethod
    async def get_worker_metadata(self, component_id: UUID, worker_name: str) -> WorkerMetadata:
        """Get metadata of one worker"""
        pass

    @abstractmethod
    async def list_workers(self, component_id: UUID) -> List[WorkerMetadata]:
        """List every worker of a component"""
        pass

    @abstractmethod
    async def update_worker(self,
                            component_id: UUID,
                            worker_name: str,
                            mode: WorkerUpdateMode,
                            target_version: int) -> None:
        """Trigger a worker update to the target component version"""
        pass

    @abstractmethod
    async def delete_worker(self, component_id: UUID, worker_name: str) -> None:
        """Delete a worker"""
        pass

    @abstractmethod
    async def launch_worker(self,
                            component_id: UUID,
                            worker_name: str,
                            args: List[str],
                            env: Dict[str, str]) -> None:
        """Create a worker with the latest component version"""
        pass


class ControlPlaneClient(ComponentStore, WorkerStore):
    """Base class for all control plane backends"""

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize control plane client

        Args:
            config: Backend-specific configuration
        """
        self.config = config or {}
        self._initialized = False

    async def initialize(self) -> None:
        """Initialize client (e.g., open connection pools)"""
        if not self._initialized:
            await self._do_initialize()
            self._initialized = True

    async def _do_initialize(self) -> None:
        """Actual initialization logic to be implemented by subclasses"""
        pass

    async def close(self) -> None:
        """Close client connections"""
        if self._initialized:
            await self._do_close()
            self._initialized = False

    async def _do_close(self) -> None:
        """Actual cleanup logic to be implemented by subclasses"""
        pass

    async def __aenter__(self):
        """Async context manager entry"""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()
