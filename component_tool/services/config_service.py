"""User configuration service"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml

from ..api.exceptions import ConfigError
from ..constants import DEFAULT_CONFIG_DIR, DEFAULT_CONFIG_FILE, ENV_CONFIG_PATH, ENV_PROFILE
from ..models.config import Config, Profile

logger = logging.getLogger(__name__)


def default_config_path() -> Path:
    """Get the configuration file path, honoring the environment override"""
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path).expanduser()
    return Path(DEFAULT_CONFIG_DIR).expanduser() / DEFAULT_CONFIG_FILE


class ConfigService:
    """Service for loading connection profiles"""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize config service

        Args:
            config_path: Configuration file, the default location if None
        """
        self.config_path = Path(config_path) if config_path else default_config_path()
        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get current configuration (lazy load)"""
        if self._config is None:
            self.load_config()
        return self._config

    def load_config(self) -> Config:
        """Load configuration from file

        A missing file yields the built-in default configuration.

        Returns:
            Loaded configuration

        Raises:
            ConfigError: If the file is not valid
        """
        if not self.config_path.exists():
            logger.debug("No configuration at %s, using defaults", self.config_path)
            self._config = Config()
            return self._config

        with open(self.config_path, 'r') as f:
            content = f.read()

        # Simple environment variable expansion
        content = os.path.expandvars(content)

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Invalid configuration format in {self.config_path}")

        try:
            self._config = Config.from_dict(data)
        except (KeyError, ValueError, TypeError) as e:
            raise ConfigError(f"Invalid profile in {self.config_path}: {e}") from e

        return self._config

    def get_profile(self, name: Optional[str] = None) -> Profile:
        """Get the profile to connect with

        The explicit name wins over the environment, which wins over the
        active profile of the configuration file.

        Raises:
            ConfigError: If the profile does not exist
        """
        profile_name = name or os.environ.get(ENV_PROFILE) or self.config.active_profile
        profile = self.config.get_profile(profile_name)
        if profile is None:
            available = ", ".join(sorted(self.config.profiles)) or "none"
            raise ConfigError(f"Profile not found: {profile_name} (available: {available})")
        return profile
