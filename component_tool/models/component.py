"""Component data models"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import UUID


class ComponentType(Enum):
    """Deployable component types known by the control plane"""
    DURABLE = "Durable"
    EPHEMERAL = "Ephemeral"

    @classmethod
    def from_string(cls, value: str) -> 'ComponentType':
        """Create ComponentType from a case-insensitive string"""
        for member in cls:
            if member.value.lower() == value.lower():
                return member
        raise ValueError(f"Unknown component type: {value}")


class AppComponentType(Enum):
    """Component types as declared in the application manifest"""
    DURABLE = "durable"
    EPHEMERAL = "ephemeral"
    LIBRARY = "library"

    def as_deployable(self) -> Optional[ComponentType]:
        """Get the remote component type, None for non-deployable kinds"""
        if self == AppComponentType.DURABLE:
            return ComponentType.DURABLE
        if self == AppComponentType.EPHEMERAL:
            return ComponentType.EPHEMERAL
        return None

    @property
    def is_deployable(self) -> bool:
        return self.as_deployable() is not None


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


@dataclass
class Component:
    """Read snapshot of one version of a deployed component"""

    component_id: UUID
    name: str
    version: int
    component_type: ComponentType
    metadata: Dict[str, Any] = field(default_factory=dict)
    component_size: Optional[int] = None
    created_at: Optional[datetime] = None
    project_id: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.component_id, str):
            self.component_id = UUID(self.component_id)
        if isinstance(self.component_type, str):
            self.component_type = ComponentType.from_string(self.component_type)

    @property
    def exports(self) -> List[str]:
        """Get exported interface names from the component metadata"""
        return list(self.metadata.get("exports", []))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            "component_id": str(self.component_id),
            "name": self.name,
            "version": self.version,
            "component_type": self.component_type.value,
            "metadata": self.metadata,
        }
        if self.component_size is not None:
            data["component_size"] = self.component_size
        if self.created_at:
            data["created_at"] = self.created_at.isoformat()
        if self.project_id:
            data["project_id"] = self.project_id
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Component':
        """Create from the control plane's component metadata payload"""
        versioned_id = data["versionedComponentId"]
        return cls(
            component_id=UUID(versioned_id["componentId"]),
            name=data["componentName"],
            version=int(versioned_id["version"]),
            component_type=ComponentType.from_string(data.get("componentType", "Durable")),
            metadata=data.get("metadata") or {},
            component_size=data.get("componentSize"),
            created_at=_parse_timestamp(data.get("createdAt")),
            project_id=data.get("projectId"),
        )


@dataclass(frozen=True)
class ComponentIdentifier:
    """Parsed `[[account/]project/]component` identifier"""

    name: str
    project: Optional[str] = None
    account: Optional[str] = None

    def segments(self) -> List[str]:
        """Get the present segments in order"""
        return [s for s in (self.account, self.project, self.name) if s is not None]

    def __str__(self) -> str:
        return "/".join(self.segments())


@dataclass(frozen=True)
class ComponentSelection:
    """Selects a component either by name or by id"""

    name: Optional[str] = None
    component_id: Optional[UUID] = None

    @classmethod
    def by_name(cls, name: str) -> 'ComponentSelection':
        return cls(name=name)

    @classmethod
    def by_id(cls, component_id: UUID) -> 'ComponentSelection':
        return cls(component_id=component_id)

    @property
    def is_by_name(self) -> bool:
        return self.name is not None

    def __str__(self) -> str:
        return self.name if self.name is not None else str(self.component_id)


@dataclass(frozen=True)
class VersionSelection:
    """Pins a component lookup to a version, by worker or explicitly"""

    worker_name: Optional[str] = None
    version: Optional[int] = None

    @classmethod
    def by_worker_name(cls, worker_name: str) -> 'VersionSelection':
        return cls(worker_name=worker_name)

    @classmethod
    def by_explicit_version(cls, version: int) -> 'VersionSelection':
        return cls(version=version)

    @property
    def is_by_worker_name(self) -> bool:
        return self.worker_name is not None


@dataclass(frozen=True)
class ProjectRef:
    """Resolved cloud project"""

    project_id: str
    project_name: str
    account_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProjectRef':
        return cls(
            project_id=data["projectId"],
            project_name=data["name"],
            account_id=data.get("ownerAccountId"),
        )


@dataclass
class SelectedComponents:
    """Result of selecting components for one command invocation"""

    account_id: Optional[str] = None
    project: Optional[ProjectRef] = None
    component_names: List[str] = field(default_factory=list)
