"""Application manifest context and its shared holder"""

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, List, Optional

import yaml

from ..api.exceptions import (
    ApplicationNotFoundError,
    ComponentNotFoundError,
    DependencyNotBuiltError,
    ManifestError,
)
from ..constants import APP_MANIFEST_FILE, ComponentSelectMode, STUB_INTERFACE_PATTERN
from ..models.component import AppComponentType
from ..models.deploy import StubInterfaces
from ..models.manifest import (
    ApplicationManifest,
    ComponentDefinition,
    ComponentDependency,
    ComponentProperties,
)

logger = logging.getLogger(__name__)


def find_app_root(start_path: Optional[Path] = None) -> Optional[Path]:
    """Find the application root directory by looking for the manifest file

    Args:
        start_path: Starting directory (defaults to current directory)

    Returns:
        Application root path or None if not found
    """
    if start_path is None:
        start_path = Path.cwd()
    else:
        start_path = Path(start_path).resolve()

    current = start_path

    # Check each directory up to root
    while current != current.parent:
        if (current / APP_MANIFEST_FILE).exists():
            return current
        current = current.parent

    if (current / APP_MANIFEST_FILE).exists():
        return current

    return None


def load_manifest(app_root: Path) -> ApplicationManifest:
    """Load the application manifest from an application root

    Raises:
        ManifestError: If the manifest is not valid YAML or has invalid entries
    """
    manifest_path = app_root / APP_MANIFEST_FILE

    with open(manifest_path, 'r') as f:
        content = f.read()

    try:
        data = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        raise ManifestError(f"Invalid YAML in {manifest_path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"Invalid manifest format in {manifest_path}")

    try:
        return ApplicationManifest.from_dict(app_root, data)
    except (KeyError, ValueError, TypeError) as e:
        raise ManifestError(f"Invalid component definition in {manifest_path}: {e}") from e


class ApplicationContext:
    """Loaded application with the components selected for the current command"""

    def __init__(self, manifest: ApplicationManifest, build_profile: Optional[str] = None,
                 working_dir: Optional[Path] = None):
        """
        Initialize application context

        Args:
            manifest: Loaded application manifest
            build_profile: Active build profile, manifest default if None
            working_dir: Directory used for directory-scoped selection
        """
        self.manifest = manifest
        self.build_profile = build_profile or manifest.default_build_profile
        self.working_dir = Path(working_dir or Path.cwd()).resolve()
        self._selected: List[str] = []

    @property
    def root(self) -> Path:
        return self.manifest.root

    def component_names(self) -> List[str]:
        return self.manifest.component_names()

    def has_component(self, name: str) -> bool:
        return name in self.manifest.components

    def component(self, name: str) -> ComponentDefinition:
        """Get a component definition

        Raises:
            ComponentNotFoundError: If the application does not declare it
        """
        try:
            return self.manifest.components[name]
        except KeyError:
            raise ComponentNotFoundError(
                name, f"Component {name} is not part of the application"
            ) from None

    def component_source_dir(self, name: str) -> Path:
        return (self.root / self.component(name).source).resolve()

    def component_properties(self, name: str, build_profile: Optional[str] = None) -> ComponentProperties:
        return self.component(name).properties_for(build_profile or self.build_profile)

    def component_dependencies(self, name: str) -> List[ComponentDependency]:
        return list(self.component(name).dependencies)

    def component_linked_wasm(self, name: str, build_profile: Optional[str] = None) -> Path:
        """Get the path of the linked artifact of a component"""
        definition = self.component(name)
        linked_wasm = self.component_properties(name, build_profile).linked_wasm
        return self.root / (linked_wasm or definition.default_linked_wasm())

    def component_stub_interfaces(self,
                                  name: str,
                                  dependent: Optional[str] = None,
                                  build_profile: Optional[str] = None) -> StubInterfaces:
        """Get the stub interfaces a component exposes to its dependents

        Args:
            name: Dependency component name
            dependent: Component asking for the stubs, used in errors
            build_profile: Build profile, the context's profile by default

        Raises:
            DependencyNotBuiltError: If the component has no linked artifact yet
        """
        definition = self.component(name)
        properties = self.component_properties(name, build_profile)

        if not self.component_linked_wasm(name, build_profile).exists():
            raise DependencyNotBuiltError(dependent or name, name)

        namespace, _, short_name = name.rpartition(":")
        stub_interface_name = STUB_INTERFACE_PATTERN.format(
            namespace=namespace or short_name,
            name=short_name,
        )

        return StubInterfaces(
            component_name=name,
            stub_interface_name=stub_interface_name,
            exported_interfaces_per_stub_resource=dict(definition.exports),
            is_ephemeral=properties.component_type == AppComponentType.EPHEMERAL,
        )

    def select_components(self,
                          names: List[str],
                          mode: ComponentSelectMode = ComponentSelectMode.CURRENT_DIR,
                          allow_not_found: bool = False) -> bool:
        """Select the components the current command works on

        With explicit names those are selected; otherwise the mode decides
        between every component and the ones whose source directory
        contains the working directory.

        Args:
            names: Requested component names, may be empty
            mode: Selection mode used when no names are given
            allow_not_found: Return False instead of raising on unknown names

        Returns:
            True if the selection is not empty

        Raises:
            ComponentNotFoundError: If a name is unknown and not allowed
        """
        if names:
            unknown = [n for n in names if not self.has_component(n)]
            if unknown:
                if allow_not_found:
                    logger.debug("Components not part of the application: %s", unknown)
                    self._selected = []
                    return False
                raise ComponentNotFoundError(
                    unknown[0],
                    f"Components not part of the application: {', '.join(unknown)}"
                )
            self._selected = list(dict.fromkeys(names))
            return True

        if mode == ComponentSelectMode.ALL:
            self._selected = self.component_names()
        else:
            self._selected = [
                name for name in self.component_names()
                if self._contains_working_dir(self.component_source_dir(name))
            ]
            # At the application root everything is in scope
            if not self._selected and self.working_dir == self.root.resolve():
                self._selected = self.component_names()

        return bool(self._selected)

    def _contains_working_dir(self, source_dir: Path) -> bool:
        if source_dir == self.root.resolve():
            return False
        return self.working_dir == source_dir or source_dir in self.working_dir.parents

    def selected_component_names(self) -> List[str]:
        return list(self._selected)

    def reload(self) -> 'ApplicationContext':
        """Load the manifest again, keeping the build profile and working directory"""
        return ApplicationContext(load_manifest(self.root), self.build_profile, self.working_dir)


def load_application(start_path: Optional[Path] = None,
                     build_profile: Optional[str] = None) -> Optional[ApplicationContext]:
    """Load the application the start path belongs to

    Returns:
        Application context, None outside of an application
    """
    app_root = find_app_root(start_path)
    if app_root is None:
        return None

    logger.debug("Loading application from %s", app_root)
    manifest = load_manifest(app_root)
    return ApplicationContext(manifest, build_profile, working_dir=start_path)


class ApplicationContextHolder:
    """Shares one optional application context between concurrent tasks

    Callers take the lock through read() or write() only for the short
    in-memory part of an operation and never across a remote call.
    """

    def __init__(self, context: Optional[ApplicationContext] = None):
        self._context = context
        self._lock = asyncio.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._context is not None

    @asynccontextmanager
    async def read_optional(self) -> AsyncIterator[Optional[ApplicationContext]]:
        """Yield the context or None outside of an application"""
        async with self._lock:
            yield self._context

    @asynccontextmanager
    async def read(self) -> AsyncIterator[ApplicationContext]:
        """Yield the context

        Raises:
            ApplicationNotFoundError: Outside of an application
        """
        async with self._lock:
            if self._context is None:
                raise ApplicationNotFoundError()
            yield self._context

    @asynccontextmanager
    async def write(self) -> AsyncIterator[ApplicationContext]:
        """Yield the context for changes like selecting components

        Raises:
            ApplicationNotFoundError: Outside of an application
        """
        async with self._lock:
            if self._context is None:
                raise ApplicationNotFoundError()
            yield self._context

    async def replace(self, context: Optional[ApplicationContext]) -> None:
        """Swap in another context, e.g. after the manifest changed"""
        async with self._lock:
            self._context = context
