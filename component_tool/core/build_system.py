"""Build and clean of application components"""

import asyncio
import logging
import os
import shutil
from pathlib import Path
from typing import List, Optional

from rich.markup import escape

from .application_context import ApplicationContext
from ..api.exceptions import BuildError
from ..models.manifest import BuildStep
from ..utils.file_utils import newest_mtime
from ..utils.output import highlight, log_action, log_indent, log_text

logger = logging.getLogger(__name__)


class BuildSystem:
    """Run the build and clean steps declared in the application manifest"""

    def __init__(self, app_ctx: ApplicationContext):
        self.app_ctx = app_ctx

    def build_order(self, component_names: List[str]) -> List[str]:
        """Order components so that selected dependencies are built first"""
        selected = set(component_names)
        ordered: List[str] = []
        visiting = set()

        def visit(name: str) -> None:
            if name in ordered or name in visiting:
                return
            visiting.add(name)
            for dependency in self.app_ctx.component_dependencies(name):
                if dependency.name in selected:
                    visit(dependency.name)
            visiting.discard(name)
            ordered.append(name)

        for name in component_names:
            visit(name)

        return ordered

    def is_up_to_date(self, component_name: str, build_profile: Optional[str] = None) -> bool:
        """Check if the linked artifact is newer than every source file"""
        linked_wasm = self.app_ctx.component_linked_wasm(component_name, build_profile)
        if not linked_wasm.exists():
            return False

        source_dir = self.app_ctx.component_source_dir(component_name)
        sources_mtime = newest_mtime([source_dir], exclude=[linked_wasm.parent])
        return linked_wasm.stat().st_mtime >= sources_mtime

    async def build(self,
                    component_names: List[str],
                    force_build: Optional[bool] = None,
                    build_profile: Optional[str] = None) -> List[str]:
        """
        Build components

        Args:
            component_names: Components to build
            force_build: Build even if the linked artifact is up to date
            build_profile: Build profile, the context's profile by default

        Returns:
            Names of the components that were actually built

        Raises:
            BuildError: If a build step fails
        """
        built = []

        for name in self.build_order(component_names):
            properties = self.app_ctx.component_properties(name, build_profile)
            if not properties.build:
                logger.debug("No build steps for %s", name)
                continue

            if not force_build and self.is_up_to_date(name, build_profile):
                log_action("Skipping", f"build of {highlight(name)}, UP-TO-DATE")
                continue

            log_action("Building", highlight(name))
            with log_indent():
                for step in properties.build:
                    await self._run_step(name, step)
            built.append(name)

        return built

    async def clean(self, component_names: List[str], build_profile: Optional[str] = None) -> None:
        """Remove the build outputs of components"""
        for name in component_names:
            properties = self.app_ctx.component_properties(name, build_profile)
            source_dir = self.app_ctx.component_source_dir(name)

            targets = [source_dir / path for path in properties.clean]
            targets.append(self.app_ctx.component_linked_wasm(name, build_profile))

            log_action("Cleaning", highlight(name))
            with log_indent():
                for target in targets:
                    _remove_path(target)

    async def _run_step(self, component_name: str, step: BuildStep) -> None:
        source_dir = self.app_ctx.component_source_dir(component_name)
        cwd = source_dir / step.dir if step.dir else source_dir

        log_action("Executing", escape(step.command))
        process = await asyncio.create_subprocess_shell(
            step.command,
            cwd=str(cwd),
            env=os.environ.copy(),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
        )
        stdout, _ = await process.communicate()

        output = stdout.decode(errors="replace").strip() if stdout else ""
        if output:
            logger.info("Build output of %s: %s", component_name, output)

        if process.returncode != 0:
            raise BuildError(
                f"Build step '{step.command}' of component {component_name} "
                f"failed with exit code {process.returncode}"
                + (f":\n{output}" if output else "")
            )


def _remove_path(path: Path) -> None:
    if path.is_dir():
        log_text(f"Deleting {path}")
        shutil.rmtree(path)
    elif path.exists():
        log_text(f"Deleting {path}")
        path.unlink()
