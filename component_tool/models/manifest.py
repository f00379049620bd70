"""Application manifest data models"""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from .component import AppComponentType
from .deploy import InitialComponentFile
from ..constants import DependencyType, DEFAULT_BUILD_DIR, LINKED_WASM_PATTERN


@dataclass
class BuildStep:
    """One build command of a component"""

    command: str
    dir: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> 'BuildStep':
        if isinstance(data, str):
            return cls(command=data)
        return cls(command=data["command"], dir=data.get("dir"))


@dataclass
class ComponentDependency:
    """Declared dependency of a component on another component"""

    name: str
    dep_type: DependencyType

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ComponentDependency':
        return cls(
            name=data["name"],
            dep_type=DependencyType(data.get("type", DependencyType.DYNAMIC_WASM_RPC.value)),
        )


@dataclass
class ComponentProperties:
    """Build-profile dependent properties of a component"""

    component_type: AppComponentType = AppComponentType.DURABLE
    linked_wasm: Optional[str] = None
    build: List[BuildStep] = field(default_factory=list)
    clean: List[str] = field(default_factory=list)
    files: List[InitialComponentFile] = field(default_factory=list)

    @property
    def is_deployable(self) -> bool:
        return self.component_type.is_deployable

    def merged(self, overrides: Dict[str, Any]) -> 'ComponentProperties':
        """Get a copy with the fields present in a profile override block replaced"""
        changes = {}
        if "type" in overrides:
            changes["component_type"] = AppComponentType(overrides["type"])
        if "linked_wasm" in overrides:
            changes["linked_wasm"] = overrides["linked_wasm"]
        if "build" in overrides:
            changes["build"] = [BuildStep.from_dict(s) for s in overrides["build"] or []]
        if "clean" in overrides:
            changes["clean"] = list(overrides["clean"] or [])
        if "files" in overrides:
            changes["files"] = [InitialComponentFile.from_dict(f) for f in overrides["files"] or []]
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ComponentProperties':
        return cls().merged(data)


@dataclass
class ComponentDefinition:
    """Component as declared in the application manifest"""

    name: str
    source: str = "."
    properties: ComponentProperties = field(default_factory=ComponentProperties)
    profiles: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    dependencies: List[ComponentDependency] = field(default_factory=list)
    exports: Dict[str, str] = field(default_factory=dict)

    def properties_for(self, build_profile: Optional[str] = None) -> ComponentProperties:
        """Get properties with the build profile overrides applied"""
        if build_profile and build_profile in self.profiles:
            return self.properties.merged(self.profiles[build_profile])
        return self.properties

    def default_linked_wasm(self) -> str:
        return LINKED_WASM_PATTERN.format(
            build_dir=DEFAULT_BUILD_DIR,
            component=self.name.replace(":", "_"),
        )

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> 'ComponentDefinition':
        """Create from manifest entry"""
        return cls(
            name=name,
            source=data.get("source", "."),
            properties=ComponentProperties.from_dict(data),
            profiles=dict(data.get("profiles") or {}),
            dependencies=[ComponentDependency.from_dict(d) for d in data.get("dependencies") or []],
            exports=dict(data.get("exports") or {}),
        )


@dataclass
class ApplicationManifest:
    """Loaded application manifest"""

    root: Path
    components: Dict[str, ComponentDefinition] = field(default_factory=dict)
    default_build_profile: Optional[str] = None

    def component_names(self) -> List[str]:
        return list(self.components.keys())

    @classmethod
    def from_dict(cls, root: Path, data: Dict[str, Any]) -> 'ApplicationManifest':
        """Create from parsed manifest file"""
        components = {
            name: ComponentDefinition.from_dict(name, component_data or {})
            for name, component_data in (data.get("components") or {}).items()
        }
        return cls(
            root=root,
            components=components,
            default_build_profile=data.get("default_build_profile"),
        )
