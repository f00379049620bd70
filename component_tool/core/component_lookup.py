"""Remote component lookup by name or id, optionally pinned to a version"""

import logging
from typing import Optional
from uuid import UUID

from ..api.exceptions import ComponentVersionNotFoundError, RemoteNotFoundError
from ..clients.base import ComponentStore, WorkerStore
from ..models.component import Component, ComponentSelection, ProjectRef, VersionSelection
from ..utils.async_utils import best_effort

logger = logging.getLogger(__name__)


class ComponentLookup:
    """Resolve component selectors against the remote stores

    Lookups are read-only. Finding nothing is a normal outcome and is
    reported as None, while an explicitly requested version that does not
    exist is an error.
    """

    def __init__(self, component_store: ComponentStore, worker_store: WorkerStore):
        """
        Initialize lookup

        Args:
            component_store: Remote component store
            worker_store: Remote worker store, used to pin versions by worker
        """
        self.component_store = component_store
        self.worker_store = worker_store

    async def resolve(self,
                      project: Optional[ProjectRef],
                      selector: ComponentSelection,
                      version: Optional[VersionSelection] = None) -> Optional[Component]:
        """
        Resolve a component selector

        Args:
            project: Project scope, None for the default project
            selector: Component name or id
            version: Optional version pin

        Returns:
            Component snapshot, None if the component does not exist

        Raises:
            ComponentVersionNotFoundError: If a pinned version does not exist
            RemoteError: On any other remote failure
        """
        if selector.is_by_name:
            component = await self._latest_by_name(project, selector.name)
        else:
            component = await self._latest_by_id(selector.component_id)

        if component is None or version is None:
            return component

        if version.is_by_worker_name:
            metadata = await best_effort(
                self.worker_store.get_worker_metadata(component.component_id, version.worker_name)
            )
            if metadata is None:
                logger.debug(
                    "Worker %s not available, using latest version of %s",
                    version.worker_name, component.name
                )
                return component
            target_version = metadata.component_version
        else:
            target_version = version.version

        return await self._at_version(component, target_version)

    async def component_id_by_name(self, project: Optional[ProjectRef], name: str) -> Optional[UUID]:
        """
        Get the id of a component by name

        Returns:
            Component id, None if no component has the name
        """
        component = await self._latest_by_name(project, name)
        return component.component_id if component else None

    async def _latest_by_name(self, project: Optional[ProjectRef], name: str) -> Optional[Component]:
        project_id = project.project_id if project else None
        components = await self.component_store.list_components(project_id=project_id, name=name)
        if not components:
            return None
        return max(components, key=lambda c: c.version)

    async def _latest_by_id(self, component_id: UUID) -> Optional[Component]:
        try:
            return await self.component_store.get_latest_component(component_id)
        except RemoteNotFoundError:
            return None

    async def _at_version(self, component: Component, version: int) -> Component:
        try:
            return await self.component_store.get_component(component.component_id, version)
        except RemoteNotFoundError as e:
            raise ComponentVersionNotFoundError(component.name, version) from e
