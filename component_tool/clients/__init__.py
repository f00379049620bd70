# component_tool/clients/__init__.py
"""Control plane clients for component-tool"""

from .base import ComponentStore, WorkerStore, ControlPlaneClient
from .http import HttpControlPlaneClient
from .oss import OssClient
from .cloud import CloudClient
from .factory import ClientFactory

__all__ = [
    'ComponentStore',
    'WorkerStore',
    'ControlPlaneClient',
    'HttpControlPlaneClient',
    'OssClient',
    'CloudClient',
    'ClientFactory',
]
