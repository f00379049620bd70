"""Health checks of application components"""

import shutil
from dataclasses import dataclass
from typing import List, Optional

from .application_context import ApplicationContext
from .build_system import BuildSystem
from ..constants import DependencyType


@dataclass
class DiagnosticResult:
    """Outcome of one check for one component"""

    component_name: str
    check: str
    passed: bool
    message: str


class DiagnosticCheck:
    """Base class for component checks"""

    name = ""

    def run(self, app_ctx: ApplicationContext, component_name: str,
            build_profile: Optional[str]) -> DiagnosticResult:
        raise NotImplementedError

    def result(self, component_name: str, passed: bool, message: str) -> DiagnosticResult:
        return DiagnosticResult(component_name, self.name, passed, message)


class SourceDirectoryCheck(DiagnosticCheck):
    name = "Source"

    def run(self, app_ctx, component_name, build_profile):
        source_dir = app_ctx.component_source_dir(component_name)
        if not source_dir.is_dir():
            return self.result(component_name, False, f"Missing source directory {source_dir}")
        return self.result(component_name, True, str(source_dir))


class BuildToolsCheck(DiagnosticCheck):
    """Every build command's executable must be on PATH"""

    name = "Build tools"

    def run(self, app_ctx, component_name, build_profile):
        properties = app_ctx.component_properties(component_name, build_profile)
        tools = []
        for step in properties.build:
            words = step.command.split()
            if words and words[0] not in tools:
                tools.append(words[0])

        if not tools:
            return self.result(component_name, True, "No build steps")

        missing = [tool for tool in tools if shutil.which(tool) is None]
        if missing:
            return self.result(component_name, False, f"Not found on PATH: {', '.join(missing)}")
        return self.result(component_name, True, f"Found {', '.join(tools)}")


class DependenciesCheck(DiagnosticCheck):
    name = "Dependencies"

    def run(self, app_ctx, component_name, build_profile):
        dependencies = app_ctx.component_dependencies(component_name)
        problems = []
        for dependency in dependencies:
            if not app_ctx.has_component(dependency.name):
                problems.append(f"{dependency.name} is not part of the application")
            elif (dependency.dep_type == DependencyType.DYNAMIC_WASM_RPC
                  and not app_ctx.component_linked_wasm(dependency.name, build_profile).exists()):
                problems.append(f"{dependency.name} is not built")

        if problems:
            return self.result(component_name, False, "; ".join(problems))
        return self.result(component_name, True, f"{len(dependencies)} dependencies")


class ArtifactCheck(DiagnosticCheck):
    name = "Artifact"

    def run(self, app_ctx, component_name, build_profile):
        linked_wasm = app_ctx.component_linked_wasm(component_name, build_profile)
        if not linked_wasm.exists():
            return self.result(component_name, False, f"Not built, missing {linked_wasm}")
        if not BuildSystem(app_ctx).is_up_to_date(component_name, build_profile):
            return self.result(component_name, False, "Sources changed since the last build")
        return self.result(component_name, True, "Up to date")


DEFAULT_CHECKS: List[DiagnosticCheck] = [
    SourceDirectoryCheck(),
    BuildToolsCheck(),
    DependenciesCheck(),
    ArtifactCheck(),
]


def diagnose(app_ctx: ApplicationContext,
             component_names: List[str],
             build_profile: Optional[str] = None,
             checks: Optional[List[DiagnosticCheck]] = None) -> List[DiagnosticResult]:
    """Run every check for every component"""
    results = []
    for component_name in component_names:
        for check in checks or DEFAULT_CHECKS:
            results.append(check.run(app_ctx, component_name, build_profile))
    return results
