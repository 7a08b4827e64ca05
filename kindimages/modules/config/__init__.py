"""
Config Module - Black Box Interface

Purpose: Application configuration management
Interface: get_config(), reset_config(), ConfigModule.get()
Hidden: Config sources, validation logic, environment parsing

Can be replaced with different config systems (files, Consul, etcd).
"""

import os
from typing import Any, Dict


# Configuration Contract: Required and Optional Keys
# This defines the black box interface - what the config module guarantees to provide

REQUIRED_CONFIG_KEYS = {
    "host": "API server bind address",
    "port": "API server port",
    "log_level": "Logging level (DEBUG, INFO, WARNING, ERROR)",
    "command_timeout": "Timeout in seconds for inventory reads and deletes",
    "load_timeout": "Timeout in seconds for loading an image into kind",
    "kind_cluster_name": "Name of the kind cluster to manage",
}

OPTIONAL_CONFIG_KEYS = {
    "kind_node_name": {
        "description": "Container name of the kind control plane node",
        "default": None,  # Computed as <kind_cluster_name>-control-plane
    },
    "config_file": {
        "description": "YAML file overriding tool settings",
        "default": None,
    },
    "docker_bin": {
        "description": "docker executable",
        "default": "docker",
    },
    "kind_bin": {
        "description": "kind executable",
        "default": "kind",
    },
    "crictl_bin": {
        "description": "crictl executable inside the kind node",
        "default": "crictl",
    },
    "debug": {
        "description": "Enable debug mode",
        "default": False,
    },
}


class ConfigModule:
    """Configuration management module."""

    def __init__(self):
        """Initialize with environment variables."""
        self._config = self._load_from_env()
        self._validate_required_keys()

    def _validate_required_keys(self) -> None:
        """
        Validate that all required configuration keys are present.

        Raises:
            ValueError: If required keys are missing
        """
        missing_keys = []
        for key in REQUIRED_CONFIG_KEYS:
            if key not in self._config or self._config[key] is None:
                missing_keys.append(key)

        if missing_keys:
            raise ValueError(
                f"Missing required configuration keys: {', '.join(missing_keys)}. "
                f"Check environment variables."
            )

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment."""
        return {
            # API settings
            "host": os.getenv("API_HOST", "0.0.0.0"),
            "port": int(os.getenv("API_PORT", "8080")),
            "log_level": os.getenv("LOG_LEVEL", "INFO"),
            "debug": os.getenv("DEBUG", "false").lower() == "true",
            # Command settings
            "command_timeout": float(os.getenv("COMMAND_TIMEOUT", "30")),
            "load_timeout": float(os.getenv("LOAD_TIMEOUT", "600")),
            # Cluster settings
            "kind_cluster_name": os.getenv("KIND_CLUSTER_NAME", "kind"),
            "kind_node_name": os.getenv("KIND_NODE_NAME") or None,
            "config_file": os.getenv("KIND_IMAGES_CONFIG"),
            # Tool settings
            "docker_bin": os.getenv("DOCKER_BIN", "docker"),
            "kind_bin": os.getenv("KIND_BIN", "kind"),
            "crictl_bin": os.getenv("CRICTL_BIN", "crictl"),
        }

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        value = self._config.get(key)
        return default if value is None else value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value."""
        self._config[key] = value

    def get_all(self) -> Dict[str, Any]:
        """Get all configuration values."""
        return self._config.copy()

    @staticmethod
    def get_config_schema() -> Dict[str, Any]:
        """
        Get the configuration schema (contract) for this module.

        Returns:
            Dictionary with 'required' and 'optional' key specifications

        Example:
            >>> schema = ConfigModule.get_config_schema()
            >>> print(schema['required']['kind_cluster_name'])
            'Name of the kind cluster to manage'
        """
        return {
            "required": REQUIRED_CONFIG_KEYS.copy(),
            "optional": OPTIONAL_CONFIG_KEYS.copy(),
        }


# Singleton instance
_instance = None


def get_config() -> ConfigModule:
    """Get the configuration module singleton."""
    global _instance
    if _instance is None:
        _instance = ConfigModule()
    return _instance


def reset_config() -> None:
    """Drop the singleton so the next get_config() re-reads the environment."""
    global _instance
    _instance = None


__all__ = ["get_config", "reset_config", "ConfigModule"]
