"""Component Tool - build and deploy WebAssembly components.

This tool builds the components of an application, creates or updates
them in the control plane and rolls out new versions to running workers.
"""

from .__version__ import __version__, __version_info__, __license__

# Core API
from .core import (
    ApplicationContext,
    ApplicationContextHolder,
    ComponentLookup,
    DynamicLinkGraphBuilder,
    load_application,
    parse_component_identifier,
)
from .services import ComponentService, DeployService, WorkerService
from .clients import ClientFactory

# Data models
from .models import Component, ComponentIdentifier, DeployResult, TryUpdateAllWorkersResult

# Exceptions
from .api.exceptions import (
    ComponentToolError,
    ParseError,
    ComponentNotFoundError,
    ComponentVersionNotFoundError,
    NotDeployableError,
    BuildError,
    RemoteError,
)

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__license__",

    # Core API
    "ApplicationContext",
    "ApplicationContextHolder",
    "ComponentLookup",
    "DynamicLinkGraphBuilder",
    "load_application",
    "parse_component_identifier",
    "ComponentService",
    "DeployService",
    "WorkerService",
    "ClientFactory",

    # Data models
    "Component",
    "ComponentIdentifier",
    "DeployResult",
    "TryUpdateAllWorkersResult",

    # Exceptions
    "ComponentToolError",
    "ParseError",
    "ComponentNotFoundError",
    "ComponentVersionNotFoundError",
    "NotDeployableError",
    "BuildError",
    "RemoteError",
]
