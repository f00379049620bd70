"""Component selection, queries and worker rollouts"""

import logging
from typing import Callable, List, Optional

from ..api.exceptions import (
    ComponentNotFoundError,
    ComponentToolError,
    ComponentVersionNotFoundError,
    NoComponentsSelectedError,
    NonSuccessfulExit,
    UserCancelledError,
)
from ..clients.base import ControlPlaneClient
from ..constants import ComponentNameMatchKind, ComponentSelectMode, PROMPT_CONFIRM_AUTO_DEPLOY
from ..core.application_context import ApplicationContextHolder
from ..core.component_lookup import ComponentLookup
from ..core.name_resolver import parse_component_identifier
from ..models.component import (
    Component,
    ComponentSelection,
    ProjectRef,
    SelectedComponents,
    VersionSelection,
)
from ..models.result import RedeployResult, TryUpdateAllWorkersResult
from ..models.worker import WorkerMetadata, WorkerUpdateMode
from ..utils.output import highlight, log_warn
from .deploy_service import DeployService
from .worker_service import WorkerService

logger = logging.getLogger(__name__)


class ComponentService:
    """Service behind the component commands that do not build"""

    def __init__(self,
                 client: ControlPlaneClient,
                 app_holder: ApplicationContextHolder,
                 deploy_service: DeployService,
                 worker_service: WorkerService,
                 default_project: Optional[str] = None,
                 confirm: Optional[Callable[[str], bool]] = None):
        """
        Initialize component service

        Args:
            client: Control plane client
            app_holder: Shared application context
            deploy_service: Used to deploy missing application components
            worker_service: Worker lifecycle operations
            default_project: Project used when a name has no project segment
            confirm: Asks the user a yes/no question, auto-deploy is refused without it
        """
        self.client = client
        self.app_holder = app_holder
        self.deploy_service = deploy_service
        self.worker_service = worker_service
        self.default_project = default_project
        self.confirm = confirm
        self.lookup = ComponentLookup(client, client)

    async def resolve_project(self, account: Optional[str], project: Optional[str]) -> Optional[ProjectRef]:
        """Resolve the project segments of a name, falling back to the default project"""
        project_name = project or self.default_project
        if project_name is None:
            return None
        return await self.client.resolve_project(account, project_name)

    async def select_components_by_app_or_name(self,
                                               name: Optional[str],
                                               allow_no_matches: bool = False) -> SelectedComponents:
        """
        Select components by an explicit name or by the current directory

        Args:
            name: Component identifier, None for directory selection
            allow_no_matches: Return an empty selection instead of raising

        Returns:
            Selected components with their project

        Raises:
            ParseError: If the name is malformed
            NoComponentsSelectedError: If nothing was selected and that is not allowed
        """
        identifier = parse_component_identifier(name) if name is not None else None
        requested = [identifier.name] if identifier else []

        component_names: List[str] = []
        if self.app_holder.is_loaded:
            async with self.app_holder.write() as app_ctx:
                if app_ctx.select_components(requested, ComponentSelectMode.CURRENT_DIR,
                                             allow_not_found=True):
                    component_names = app_ctx.selected_component_names()

        # Names outside of the application are used as they are
        if not component_names and identifier:
            component_names = requested

        if not component_names and not allow_no_matches:
            raise NoComponentsSelectedError()

        account = identifier.account if identifier else None
        project = await self.resolve_project(account, identifier.project if identifier else None)

        return SelectedComponents(
            account_id=project.account_id if project else account,
            project=project,
            component_names=component_names,
        )

    async def match_component_name(self, name: str) -> ComponentNameMatchKind:
        """Tell how a component name relates to the current application"""
        async with self.app_holder.read_optional() as app_ctx:
            if app_ctx is None or not app_ctx.has_component(name):
                return ComponentNameMatchKind.UNKNOWN
            if name in app_ctx.selected_component_names():
                return ComponentNameMatchKind.APP_CURRENT_DIR
            return ComponentNameMatchKind.APP

    async def list_components(self, name: Optional[str] = None) -> List[Component]:
        """
        List every version of the selected components

        Without a name and outside of any component directory every
        component of the project is listed.

        Raises:
            NonSuccessfulExit: If a name was given and nothing was found
        """
        selected = await self.select_components_by_app_or_name(name, allow_no_matches=True)
        project_id = selected.project.project_id if selected.project else None

        if not selected.component_names:
            return await self.client.list_components(project_id=project_id)

        components = []
        for component_name in selected.component_names:
            versions = await self.client.list_components(project_id=project_id, name=component_name)
            if not versions:
                log_warn(f"No versions found for component {highlight(component_name)}")
                continue
            components.extend(versions)

        if not components and name is not None:
            raise NonSuccessfulExit()
        return components

    async def get_components(self, name: Optional[str] = None, version: Optional[int] = None) -> List[Component]:
        """
        Get the latest or a specific version of the selected components

        Raises:
            ComponentToolError: If a version is requested for multiple components
            ComponentVersionNotFoundError: If the requested version does not exist
            NonSuccessfulExit: If no component was found
        """
        selected = await self.select_components_by_app_or_name(name)

        if version is not None and len(selected.component_names) > 1:
            raise ComponentToolError("Version cannot be specified when multiple components are selected!")

        version_selection = VersionSelection.by_explicit_version(version) if version is not None else None

        components = []
        for component_name in selected.component_names:
            try:
                component = await self.lookup.resolve(
                    selected.project, ComponentSelection.by_name(component_name), version_selection
                )
            except ComponentVersionNotFoundError as e:
                versions = await self.client.list_components(
                    project_id=selected.project.project_id if selected.project else None,
                    name=component_name,
                )
                raise ComponentVersionNotFoundError(
                    component_name, version, sorted(c.version for c in versions)
                ) from e

            if component is None:
                log_warn(f"Component {highlight(component_name)} not found")
                continue
            components.append(component)

        if not components:
            raise NonSuccessfulExit()
        return components

    async def components_for_update_or_redeploy(self, name: Optional[str] = None) -> List[Component]:
        """Resolve the selected components that are deployed, warning about the rest

        An empty selection resolves to no components.
        """
        selected = await self.select_components_by_app_or_name(name, allow_no_matches=True)

        components = []
        for component_name in selected.component_names:
            component = await self.lookup.resolve(selected.project, ComponentSelection.by_name(component_name))
            if component is None:
                log_warn(f"Component {highlight(component_name)} is not deployed!")
                continue
            components.append(component)
        return components

    async def update_workers(self, name: Optional[str], mode: WorkerUpdateMode) -> TryUpdateAllWorkersResult:
        components = await self.components_for_update_or_redeploy(name)
        return await self.worker_service.update_workers_by_components(components, mode)

    async def redeploy_workers(self, name: Optional[str]) -> List[RedeployResult]:
        components = await self.components_for_update_or_redeploy(name)
        return await self.worker_service.redeploy_workers_by_components(components)

    async def component_by_name_with_auto_deploy(self,
                                                 project: Optional[ProjectRef],
                                                 match_kind: ComponentNameMatchKind,
                                                 name: str,
                                                 version: Optional[VersionSelection] = None) -> Component:
        """
        Resolve a component, deploying it first if it is part of the application

        Args:
            project: Project scope
            match_kind: How the name matched the application
            name: Component name
            version: Optional version pin

        Returns:
            Resolved component

        Raises:
            ComponentNotFoundError: If the component is unknown or still missing after deploy
            UserCancelledError: If the user refused the deploy
        """
        component = await self.lookup.resolve(project, ComponentSelection.by_name(name), version)
        if component is not None:
            return component

        if match_kind == ComponentNameMatchKind.UNKNOWN:
            raise ComponentNotFoundError(name)

        if self.confirm is None or not self.confirm(PROMPT_CONFIRM_AUTO_DEPLOY.format(component=name)):
            raise UserCancelledError()

        await self.deploy_service.deploy(
            project,
            [name],
            select_mode=ComponentSelectMode.ALL,
        )

        component = await self.lookup.resolve(project, ComponentSelection.by_name(name), version)
        if component is None:
            raise ComponentNotFoundError(name)
        return component

    async def worker_metadata(self, name: str, worker_name: str) -> WorkerMetadata:
        """Get worker metadata, deploying the component first if needed"""
        selected = await self.select_components_by_app_or_name(name)
        component_name = selected.component_names[0]
        match_kind = await self.match_component_name(component_name)

        component = await self.component_by_name_with_auto_deploy(
            selected.project, match_kind, component_name, VersionSelection.by_worker_name(worker_name)
        )
        return await self.worker_service.worker_metadata(component, worker_name)
