"""Configuration provider following Black Box Design principles."""
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

import yaml

from kindimages.modules.config import ConfigModule, get_config

logger = logging.getLogger("kindimages.config")


@dataclass(frozen=True)
class ToolsConfig:
    """External tool configuration."""
    docker_bin: str = "docker"
    kind_bin: str = "kind"
    crictl_bin: str = "crictl"
    cluster_name: str = "kind"
    node_name: Optional[str] = None
    command_timeout: float = 30
    load_timeout: float = 600

    @property
    def node(self) -> str:
        """Container name of the kind control plane node."""
        return self.node_name or f"{self.cluster_name}-control-plane"

    def node_exec(self, *args: str) -> List[str]:
        """Build a command that runs crictl inside the kind node."""
        return [self.docker_bin, "exec", self.node, self.crictl_bin, *args]


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_tools_config(self) -> ToolsConfig:
        """Get external tool configuration."""
        ...


class EnvConfigProvider:
    """
    Configuration provider backed by the environment-based config module.

    Tool settings come from ConfigModule; a YAML file named by the
    config_file key (or config_path) overrides them.
    """

    def __init__(self, config: Optional[ConfigModule] = None, config_path: Optional[str] = None):
        self.config = config or get_config()
        self.config_path = config_path or self.config.get("config_file")

    def get_tools_config(self) -> ToolsConfig:
        """Get tool configuration from the config module and config file."""
        config = ToolsConfig(
            docker_bin=self.config.get("docker_bin", "docker"),
            kind_bin=self.config.get("kind_bin", "kind"),
            crictl_bin=self.config.get("crictl_bin", "crictl"),
            cluster_name=self.config.get("kind_cluster_name", "kind"),
            node_name=self.config.get("kind_node_name"),
            command_timeout=self.config.get("command_timeout", 30),
            load_timeout=self.config.get("load_timeout", 600),
        )

        overrides = self._load_file()
        if overrides:
            config = replace(config, **overrides)
        return config

    def _load_file(self) -> Dict[str, Any]:
        """
        Load tool overrides from the YAML config file.

        Returns:
            Mapping of ToolsConfig field names to values, empty when no file is set

        Raises:
            ValueError: If the file is not a mapping or names unknown keys
        """
        if not self.config_path:
            return {}

        path = Path(self.config_path)
        if not path.exists():
            logger.warning(f"Config file not found: {path}, using environment defaults")
            return {}

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")

        known = {f.name for f in fields(ToolsConfig)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown keys in {path}: {', '.join(sorted(unknown))}")

        for key in ("command_timeout", "load_timeout"):
            if key in data:
                data[key] = float(data[key])

        logger.info(f"Configuration loaded from {path}")
        return data
