"""
Minimal Configuration Reader for Quake Log Tools

A lightweight configuration system that provides:
- Profile-based configuration management
- JSON-based configuration storage with read-only access
- Secrets management for sensitive information (download tokens)
- Hierarchical configuration with dot-notation access

Usage:
    from config import Config
    config = Config(profile='my_server')
    value = config.get('parser.include_unterminated', False)

The configuration system loads settings in this order (later overrides earlier):
1. Default or specified profile (profiles/<profile>.json)
2. Profile-specific secrets (secrets/<profile>_secrets.json)
"""

import logging
from typing import Dict, Any, List, Optional
from pathlib import Path

from quake_log_tools.base import JSONTool

logger = logging.getLogger(__name__)


class Config(JSONTool):
    """
    A minimal JSON-based configuration reader for Quake log tools.

    Attributes:
        config_dir (str): Directory containing profile JSON files
        secrets_dir (str): Directory containing secrets JSON files
        profile (str): Currently active profile name
        data (dict): Loaded configuration data
    """

    DEFAULT_CONFIG_DIR = str(Path(__file__).parent / 'profiles')
    DEFAULT_SECRETS_DIR = str(Path(__file__).parent / 'secrets')
    DEFAULT_PROFILE = "default"

    def __init__(self, config_dir: str = None, secrets_dir: str = None, profile: str = None,
                 config: Optional[Dict[str, Any]] = None):
        """
        Initialize the Config instance.

        Args:
            config_dir (str, optional): Directory for config profiles.
                Defaults to 'profiles' subdirectory relative to this file.
            secrets_dir (str, optional): Directory for secrets files.
                Defaults to 'secrets' subdirectory relative to this file.
            profile (str, optional): Profile name to use. Defaults to 'default'.
            config (dict, optional): Base configuration dictionary for JSONTool compatibility.
        """
        super().__init__(config)

        self.config_dir = config_dir or self.DEFAULT_CONFIG_DIR
        self.secrets_dir = secrets_dir or self.DEFAULT_SECRETS_DIR
        self.profile = profile or self.DEFAULT_PROFILE
        self.data = {}

        self._load()

    def run(self) -> Dict[str, Any]:
        """
        Run the config tool.

        Returns:
            The full configuration dictionary.
        """
        return self.get()

    def _load(self):
        """
        Load configuration from profile JSON file and merge with secrets.

        A missing default profile yields an empty configuration (every tool
        has built-in defaults). A missing named profile is logged and also
        yields an empty configuration.
        """
        profile_path = Path(self.config_dir) / f"{self.profile}.json"

        if not profile_path.exists():
            if self.profile != self.DEFAULT_PROFILE:
                logger.warning(f"Profile '{self.profile}' not found. Using empty configuration.")
            self.data = {}
            return

        try:
            self.data = self.read_json(str(profile_path))
            logger.debug(f"Loaded configuration from '{self.profile}'")
            self._load_secrets()
        except (OSError, ValueError) as e:
            logger.error(f"Error loading configuration: {e}")
            self.data = {}

    def _load_secrets(self):
        """
        Load and deep-merge '<profile>_secrets.json' from the secrets directory.

        Secrets override any existing configuration values with the same keys.
        """
        profile_secrets_path = Path(self.secrets_dir) / f"{self.profile}_secrets.json"
        if not profile_secrets_path.exists():
            logger.debug(f"No secrets file found for profile '{self.profile}'")
            return

        try:
            profile_secrets = self.read_json(str(profile_secrets_path))
            if isinstance(profile_secrets, dict):
                self._deep_merge(self.data, profile_secrets)
                logger.debug(f"Loaded and merged secrets from '{profile_secrets_path}'")
        except (OSError, ValueError) as e:
            logger.error(f"Error loading profile-specific secrets: {e}")

    def _deep_merge(self, target: Dict[str, Any], source: Dict[str, Any]):
        """
        Deep merge two dictionaries.

        Args:
            target (dict): The target dictionary to merge into
            source (dict): The source dictionary to merge from
        """
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._deep_merge(target[key], value)
            else:
                target[key] = value

    def get(self, path: str = None, default: Any = None) -> Any:
        """
        Get a configuration value by path using dot notation.

        Args:
            path (str, optional): Dot notation path to the value
                (e.g., "general.output_path", "download.auth_token").
                If None, returns the entire configuration dictionary.
            default (Any, optional): Value to return if path not found.

        Returns:
            Any: The configuration value at the specified path, or default if not found.

        Examples:
            >>> config.get('parser.isolate_failures', False)
            False
            >>> config.get()
            {'general': {...}, 'parser': {...}}
        """
        if path is None:
            return self.data

        current = self.data
        for key in path.split('.'):
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default

        return current

    def list_profiles(self) -> List[str]:
        """
        List all available profile names.

        Returns:
            List[str]: Profile names (without .json extension) found in the config directory.
        """
        config_path = Path(self.config_dir)
        return sorted(f.stem for f in config_path.glob("*.json"))

    def switch_profile(self, profile: str) -> bool:
        """
        Switch to a different profile.

        Args:
            profile (str): Name of profile to switch to (without .json extension).

        Returns:
            bool: True if successful, False if profile not found.
        """
        profile_path = Path(self.config_dir) / f"{profile}.json"
        if profile_path.exists():
            self.profile = profile
            self._load()
            return True
        else:
            logger.warning(f"Profile '{profile}' not found.")
            return False

