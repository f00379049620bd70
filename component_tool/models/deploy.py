"""Deployment data models"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from .component import ComponentType


class FilePermissions(Enum):
    """Permissions of an initial component file inside the worker"""
    READ_ONLY = "read-only"
    READ_WRITE = "read-write"


@dataclass
class InitialComponentFile:
    """File made available to the workers of a component at start"""

    source: str
    target: str
    permissions: FilePermissions = FilePermissions.READ_ONLY

    @property
    def is_remote(self) -> bool:
        """Check if the source has to be downloaded"""
        return self.source.startswith(("http://", "https://"))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'InitialComponentFile':
        """Create from manifest entry"""
        return cls(
            source=data["source"],
            target=data["target"],
            permissions=FilePermissions(data.get("permissions", FilePermissions.READ_ONLY.value)),
        )


@dataclass
class WasmRpcTarget:
    """Target of one stub resource"""

    interface_name: str
    component_name: str
    component_type: ComponentType

    def to_dict(self) -> Dict[str, Any]:
        return {
            "interfaceName": self.interface_name,
            "componentName": self.component_name,
            "componentType": self.component_type.value,
        }


@dataclass
class DynamicLinkedWasmRpc:
    """Resource name to target mapping of one stub interface"""

    targets: Dict[str, WasmRpcTarget] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "WasmRpc",
            "targets": {name: target.to_dict() for name, target in self.targets.items()},
        }


@dataclass
class DynamicLinkingMap:
    """Cross-component RPC call graph of one component"""

    links: Dict[str, DynamicLinkedWasmRpc] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dynamicLinking": {name: link.to_dict() for name, link in self.links.items()}
        }


@dataclass
class StubInterfaces:
    """Stub interfaces exported by a dynamically linked dependency"""

    component_name: str
    stub_interface_name: str
    exported_interfaces_per_stub_resource: Dict[str, str] = field(default_factory=dict)
    is_ephemeral: bool = False


@dataclass
class DeployProperties:
    """Everything needed to create or update one component"""

    component_type: ComponentType
    linked_wasm_path: Path
    files: List[InitialComponentFile] = field(default_factory=list)
    dynamic_linking: Optional[DynamicLinkingMap] = None


@dataclass
class IfsFileProperties:
    """Per-file properties sent alongside the initial files archive"""

    path: str
    permissions: FilePermissions

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "permissions": self.permissions.value}


@dataclass
class IfsArchive:
    """Built initial files archive"""

    archive_path: Path
    properties: List[IfsFileProperties] = field(default_factory=list)

    def properties_dict(self) -> Dict[str, Any]:
        return {"values": [p.to_dict() for p in self.properties]}
