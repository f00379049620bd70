"""Service layer for component-tool"""

from .config_service import ConfigService
from .app_service import AppService
from .worker_service import WorkerService
from .deploy_service import DeployService, component_deploy_properties
from .component_service import ComponentService

__all__ = [
    'ConfigService',
    'AppService',
    'WorkerService',
    'DeployService',
    'component_deploy_properties',
    'ComponentService',
]
