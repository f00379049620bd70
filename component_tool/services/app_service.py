"""Local application commands: build, clean, diagnose and new components"""

import logging
from pathlib import Path
from typing import Callable, List, Optional

from ..api.exceptions import ComponentExistsError, NoComponentsSelectedError
from ..constants import ComponentSelectMode
from ..core.application_context import ApplicationContext, ApplicationContextHolder
from ..core.build_system import BuildSystem
from ..core.diagnostics import DiagnosticResult, diagnose
from ..core.name_resolver import parse_package_name
from ..core.scaffold import add_component_by_template
from ..templates import get_template
from ..utils.output import highlight, log_action

logger = logging.getLogger(__name__)


class AppService:
    """Application operations that never talk to the control plane"""

    def __init__(self,
                 app_holder: ApplicationContextHolder,
                 build_profile: Optional[str] = None,
                 build_system_factory: Callable[[ApplicationContext], BuildSystem] = BuildSystem):
        """
        Initialize application service

        Args:
            app_holder: Shared application context
            build_profile: Active build profile
            build_system_factory: Creates the build system for a context
        """
        self.app_holder = app_holder
        self.build_profile = build_profile
        self._build_system_factory = build_system_factory

    async def select(self,
                     component_names: List[str],
                     select_mode: ComponentSelectMode = ComponentSelectMode.CURRENT_DIR) -> List[str]:
        """Select the application components a command works on

        Raises:
            ApplicationNotFoundError: Outside of an application
            ComponentNotFoundError: If a name is not part of the application
            NoComponentsSelectedError: If nothing was selected
        """
        async with self.app_holder.write() as app_ctx:
            if not app_ctx.select_components(component_names, select_mode):
                raise NoComponentsSelectedError()
            return app_ctx.selected_component_names()

    async def build(self,
                    component_names: List[str],
                    force_build: Optional[bool] = None,
                    select_mode: ComponentSelectMode = ComponentSelectMode.CURRENT_DIR) -> List[str]:
        """Select and build components

        Returns:
            Selected component names
        """
        selected = await self.select(component_names, select_mode)
        async with self.app_holder.read() as app_ctx:
            build_system = self._build_system_factory(app_ctx)
        await build_system.build(selected, force_build, self.build_profile)
        return selected

    async def clean(self,
                    component_names: List[str],
                    select_mode: ComponentSelectMode = ComponentSelectMode.CURRENT_DIR) -> List[str]:
        """Select components and remove their build outputs"""
        selected = await self.select(component_names, select_mode)
        async with self.app_holder.read() as app_ctx:
            build_system = self._build_system_factory(app_ctx)
        await build_system.clean(selected, self.build_profile)
        return selected

    async def diagnose(self,
                       component_names: List[str],
                       select_mode: ComponentSelectMode = ComponentSelectMode.CURRENT_DIR
                       ) -> List[DiagnosticResult]:
        """Check sources, build tools, dependencies and artifacts of components"""
        selected = await self.select(component_names, select_mode)
        async with self.app_holder.read() as app_ctx:
            return diagnose(app_ctx, selected, self.build_profile)

    async def new_component(self, template_name: str, package_name: str) -> Path:
        """
        Add a component to the application from a template

        The application context is reloaded afterwards.

        Args:
            template_name: Built-in template name
            package_name: `namespace:name` of the new component

        Returns:
            Source directory of the new component

        Raises:
            ApplicationNotFoundError: Outside of an application
            TemplateNotFoundError: If the template is unknown
            InvalidPackageNameError: If the package name is malformed
            ComponentExistsError: If the application already has the component
        """
        template = get_template(template_name)
        parse_package_name(package_name)

        async with self.app_holder.read() as app_ctx:
            if app_ctx.has_component(package_name):
                raise ComponentExistsError(package_name)
            current = app_ctx

        source_dir = add_component_by_template(current.root, template, package_name)
        log_action(
            "Added",
            f"new app component {highlight(package_name)}, loading application manifest..."
        )

        await self.app_holder.replace(current.reload())
        return source_dir
