"""Component deployment service"""

import logging
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from ..api.exceptions import ComponentToolError, NotDeployableError
from ..clients.base import ControlPlaneClient
from ..constants import ComponentSelectMode, ErrorCode
from ..core.application_context import ApplicationContext, ApplicationContextHolder
from ..core.build_system import BuildSystem
from ..core.component_lookup import ComponentLookup
from ..core.dynamic_linking import DynamicLinkGraphBuilder
from ..core.ifs_archive import IfsArchiveBuilder
from ..models.component import Component, ProjectRef
from ..models.deploy import DeployProperties
from ..models.result import DeployResult, OperationStatus
from ..models.worker import WorkerUpdateMode
from ..utils.file_utils import read_file_bytes
from ..utils.output import highlight, log_action, log_indent
from .app_service import AppService
from .worker_service import WorkerService

logger = logging.getLogger(__name__)


def component_deploy_properties(app_ctx: ApplicationContext,
                                component_name: str,
                                build_profile: Optional[str] = None) -> DeployProperties:
    """Compute everything needed to upload one component

    Args:
        app_ctx: Application context
        component_name: Component to deploy
        build_profile: Build profile, the context's profile by default

    Returns:
        Deploy properties, dynamic_linking is None without dynamic dependencies

    Raises:
        NotDeployableError: If the component is a library
        DependencyNotBuiltError: If a dynamic dependency is not built yet
    """
    properties = app_ctx.component_properties(component_name, build_profile)
    component_type = properties.component_type.as_deployable()
    if component_type is None:
        raise NotDeployableError(component_name)

    return DeployProperties(
        component_type=component_type,
        linked_wasm_path=app_ctx.component_linked_wasm(component_name, build_profile),
        files=list(properties.files),
        dynamic_linking=DynamicLinkGraphBuilder(app_ctx).build(component_name, build_profile),
    )


async def _read_artifact(path: Path) -> bytes:
    try:
        return await read_file_bytes(path)
    except OSError as e:
        raise ComponentToolError(f"Failed to open {path}: {e}", ErrorCode.ARTIFACT_OPEN_FAILED) from e


class DeployService:
    """Build, upload and roll out application components"""

    def __init__(self,
                 client: ControlPlaneClient,
                 app_holder: ApplicationContextHolder,
                 worker_service: WorkerService,
                 build_profile: Optional[str] = None,
                 build_system_factory: Callable[[ApplicationContext], BuildSystem] = BuildSystem,
                 archive_builder_factory: Callable[[Path], IfsArchiveBuilder] = IfsArchiveBuilder):
        """
        Initialize deploy service

        Args:
            client: Control plane client, used as component and worker store
            app_holder: Shared application context
            worker_service: Worker lifecycle operations
            build_profile: Active build profile
            build_system_factory: Creates the build system for a context
            archive_builder_factory: Creates the files archive builder for an app root
        """
        self.client = client
        self.app_holder = app_holder
        self.worker_service = worker_service
        self.build_profile = build_profile
        self.lookup = ComponentLookup(client, client)
        self.app_service = AppService(app_holder, build_profile, build_system_factory)
        self._archive_builder_factory = archive_builder_factory

    async def deploy(self,
                     project: Optional[ProjectRef],
                     component_names: List[str],
                     force_build: Optional[bool] = None,
                     select_mode: ComponentSelectMode = ComponentSelectMode.CURRENT_DIR,
                     update_mode: Optional[WorkerUpdateMode] = None,
                     redeploy: bool = False) -> DeployResult:
        """
        Deploy application components

        Selected components are built, then each deployable one is created
        or updated in the control plane. Afterwards the workers of all
        deployed components are updated (update_mode given) or redeployed.

        Args:
            project: Project scope, None for the default project
            component_names: Explicit component names, empty for directory selection
            force_build: Build even if artifacts are up to date
            select_mode: Selection mode used without explicit names
            update_mode: Update workers to the new versions with this mode
            redeploy: Redeploy workers when update_mode is not given

        Returns:
            Deploy result

        Raises:
            BuildError: If building fails
            ComponentToolError: If a component cannot be deployed
        """
        result = DeployResult(status=OperationStatus.IN_PROGRESS)

        selected = await self.app_service.build(component_names, force_build, select_mode)

        log_action("Deploying", "components")
        with log_indent():
            for component_name in selected:
                async with self.app_holder.read() as app_ctx:
                    deployable = app_ctx.component_properties(
                        component_name, self.build_profile
                    ).is_deployable
                if not deployable:
                    logger.info("Skipping non-deployable component %s", component_name)
                    result.skipped.append(component_name)
                    continue

                component, created = await self.deploy_component(project, component_name)
                result.add_component(component, created)

        if update_mode is not None:
            result.update_results = await self.worker_service.update_workers_by_components(
                result.components, update_mode
            )
        elif redeploy:
            result.redeploy_results = await self.worker_service.redeploy_workers_by_components(
                result.components
            )

        if result.update_results and result.update_results.has_failures:
            result.add_warning("Some worker updates failed")
            result.complete(OperationStatus.PARTIAL)
        else:
            result.complete(OperationStatus.SUCCESS)

        result.message = (
            f"Deployed {len(result.components)} component(s): "
            f"{len(result.created)} created, {len(result.updated)} updated"
        )
        return result

    async def deploy_component(self,
                               project: Optional[ProjectRef],
                               component_name: str) -> Tuple[Component, bool]:
        """
        Create or update one component

        Returns:
            Tuple of the deployed component and whether it was created
        """
        component_id = await self.lookup.component_id_by_name(project, component_name)

        async with self.app_holder.read() as app_ctx:
            properties = component_deploy_properties(app_ctx, component_name, self.build_profile)
            app_root = app_ctx.root

        files = None
        files_archive = None
        if properties.files:
            archive = await self._archive_builder_factory(app_root).build_files_archive(
                component_name, properties.files
            )
            files = archive.properties
            files_archive = await _read_artifact(archive.archive_path)

        component_bytes = await _read_artifact(properties.linked_wasm_path)

        if component_id is None:
            log_action("Creating", f"component {highlight(component_name)}")
            component = await self.client.create_component(
                component_name,
                properties.component_type,
                component_bytes,
                project_id=project.project_id if project else None,
                files=files,
                files_archive=files_archive,
                dynamic_linking=properties.dynamic_linking,
            )
            created = True
        else:
            log_action("Updating", f"component {highlight(component_name)}")
            component = await self.client.update_component(
                component_id,
                properties.component_type,
                component_bytes,
                files=files,
                files_archive=files_archive,
                dynamic_linking=properties.dynamic_linking,
            )
            created = False

        with log_indent():
            log_action(
                "Created" if created else "Updated",
                f"{highlight(component.name)} version {component.version} ({component.component_id})"
            )
        return component, created

