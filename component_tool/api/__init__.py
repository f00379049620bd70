# component_tool/api/__init__.py
"""API layer for component-tool"""

from .exceptions import (
    ComponentToolError,
    NonSuccessfulExit,
    UserCancelledError,
    ConfigError,
    ManifestError,
    ParseError,
    MalformedIdentifierError,
    MissingSegmentError,
    InvalidPackageNameError,
    NotFoundError,
    ComponentNotFoundError,
    ComponentVersionNotFoundError,
    TemplateNotFoundError,
    WorkerNotFoundError,
    ProjectNotFoundError,
    ApplicationNotFoundError,
    NoComponentsSelectedError,
    ComponentExistsError,
    NotDeployableError,
    BuildError,
    DependencyNotBuiltError,
    RemoteError,
    RemoteNotFoundError,
    RemoteConflictError,
    RemoteRequestError,
    UnsupportedByBackendError,
)

__all__ = [
    "ComponentToolError",
    "NonSuccessfulExit",
    "UserCancelledError",
    "ConfigError",
    "ManifestError",
    "ParseError",
    "MalformedIdentifierError",
    "MissingSegmentError",
    "InvalidPackageNameError",
    "NotFoundError",
    "ComponentNotFoundError",
    "ComponentVersionNotFoundError",
    "TemplateNotFoundError",
    "WorkerNotFoundError",
    "ProjectNotFoundError",
    "ApplicationNotFoundError",
    "NoComponentsSelectedError",
    "ComponentExistsError",
    "NotDeployableError",
    "BuildError",
    "DependencyNotBuiltError",
    "RemoteError",
    "RemoteNotFoundError",
    "RemoteConflictError",
    "RemoteRequestError",
    "UnsupportedByBackendError",
]
