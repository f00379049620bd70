# component_tool/clients/factory.py
"""Control plane client factory"""

from typing import Any, Dict, Type

from .base import ControlPlaneClient
from .cloud import CloudClient
from .oss import OssClient
from ..constants import BackendType
from ..models.config import Profile


class ClientFactory:
    """Factory for creating control plane client instances"""

    # Registry of client backends
    _backends: Dict[BackendType, Type[ControlPlaneClient]] = {
        BackendType.OSS: OssClient,
        BackendType.CLOUD: CloudClient,
    }

    @classmethod
    def create_from_profile(cls, profile: Profile, **kwargs: Any) -> ControlPlaneClient:
        """Create client from a connection profile

        Args:
            profile: Connection profile
            **kwargs: Extra constructor arguments (e.g. transport)

        Returns:
            Client instance

        Raises:
            ValueError: If backend type is not supported
        """
        backend_type = profile.backend_type

        if backend_type not in cls._backends:
            raise ValueError(f"Unsupported backend type: {backend_type.value}")

        config = {
            "url": profile.url,
            "timeout": profile.timeout,
            "name": profile.name,
        }

        if backend_type == BackendType.CLOUD:
            config["token"] = profile.token
            config["account_id"] = profile.account_id

        # Add any additional options
        if profile.options:
            config.update(profile.options)

        backend_class = cls._backends[backend_type]
        return backend_class(config, **kwargs)

