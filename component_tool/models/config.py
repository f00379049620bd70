"""Configuration data models"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..constants import (
    BackendType,
    DEFAULT_CLOUD_URL,
    DEFAULT_OSS_URL,
    DEFAULT_PROFILE_NAME,
    DEFAULT_TIMEOUT,
)


@dataclass
class Profile:
    """Connection profile for one control plane"""

    name: str
    type: str  # oss, cloud
    url: Optional[str] = None
    token: Optional[str] = None
    account_id: Optional[str] = None
    default_project: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate profile configuration"""
        backend_type = BackendType(self.type)

        if self.url is None:
            self.url = DEFAULT_CLOUD_URL if backend_type == BackendType.CLOUD else DEFAULT_OSS_URL

        if backend_type == BackendType.CLOUD and not self.token:
            raise ValueError(f"Cloud profile '{self.name}' requires 'token'")

    @property
    def backend_type(self) -> BackendType:
        """Get BackendType enum"""
        return BackendType(self.type)

    def get_display_info(self) -> str:
        """Get display information for the profile"""
        return f"{self.name} ({self.type}: {self.url})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            "type": self.type,
            "url": self.url,
            "timeout": self.timeout,
        }

        if self.token:
            data["token"] = self.token
        if self.account_id:
            data["account_id"] = self.account_id
        if self.default_project:
            data["default_project"] = self.default_project
        if self.options:
            data["options"] = self.options

        return data

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> 'Profile':
        """Create from dictionary"""
        return cls(
            name=name,
            type=data.get("type", BackendType.OSS.value),
            url=data.get("url"),
            token=data.get("token"),
            account_id=data.get("account_id"),
            default_project=data.get("default_project"),
            timeout=float(data.get("timeout", DEFAULT_TIMEOUT)),
            options=data.get("options", {}),
        )


@dataclass
class Config:
    """User configuration"""

    active_profile: str = DEFAULT_PROFILE_NAME
    profiles: Dict[str, Profile] = field(default_factory=dict)

    def __post_init__(self):
        if not self.profiles:
            self.profiles = {
                DEFAULT_PROFILE_NAME: Profile(name=DEFAULT_PROFILE_NAME, type=BackendType.OSS.value)
            }

    def get_profile(self, name: Optional[str] = None) -> Optional[Profile]:
        """Get profile by name, the active one by default"""
        return self.profiles.get(name or self.active_profile)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "active_profile": self.active_profile,
            "profiles": {name: p.to_dict() for name, p in self.profiles.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create from dictionary"""
        profiles = {
            name: Profile.from_dict(name, profile_data or {})
            for name, profile_data in (data.get("profiles") or {}).items()
        }
        return cls(
            active_profile=data.get("active_profile", DEFAULT_PROFILE_NAME),
            profiles=profiles,
        )
