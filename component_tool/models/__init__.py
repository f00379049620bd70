# component_tool/models/__init__.py
"""Data models for component-tool"""

from .component import (
    AppComponentType,
    Component,
    ComponentIdentifier,
    ComponentSelection,
    ComponentType,
    ProjectRef,
    SelectedComponents,
    VersionSelection,
)
from .deploy import (
    DeployProperties,
    DynamicLinkedWasmRpc,
    DynamicLinkingMap,
    FilePermissions,
    IfsArchive,
    IfsFileProperties,
    InitialComponentFile,
    StubInterfaces,
    WasmRpcTarget,
)
from .worker import WorkerMetadata, WorkerUpdateMode
from .result import (
    DeployResult,
    OperationStatus,
    RedeployResult,
    Result,
    TryUpdateAllWorkersResult,
    WorkerUpdateAttempt,
)
from .config import Config, Profile
from .manifest import (
    ApplicationManifest,
    BuildStep,
    ComponentDefinition,
    ComponentDependency,
    ComponentProperties,
)

__all__ = [
    # Component models
    "AppComponentType",
    "Component",
    "ComponentIdentifier",
    "ComponentSelection",
    "ComponentType",
    "ProjectRef",
    "SelectedComponents",
    "VersionSelection",

    # Deploy models
    "DeployProperties",
    "DynamicLinkedWasmRpc",
    "DynamicLinkingMap",
    "FilePermissions",
    "IfsArchive",
    "IfsFileProperties",
    "InitialComponentFile",
    "StubInterfaces",
    "WasmRpcTarget",

    # Worker models
    "WorkerMetadata",
    "WorkerUpdateMode",

    # Result models
    "DeployResult",
    "OperationStatus",
    "RedeployResult",
    "Result",
    "TryUpdateAllWorkersResult",
    "WorkerUpdateAttempt",

    # Config models
    "Config",
    "Profile",

    # Manifest models
    "ApplicationManifest",
    "BuildStep",
    "ComponentDefinition",
    "ComponentDependency",
    "ComponentProperties",
]
