"""
Service Factory following Black Box Design principles.

This factory:
- Constructs the runner, inventory reader and action orchestrator
- Wires dependencies together
- Returns a single Services bundle for the host adapter
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .config.provider import ConfigProvider, ToolsConfig
from .modules.actions import ActionOrchestrator, LoadingState
from .modules.inventory import InventoryReader
from .modules.runner import CommandRunner, SubprocessRunner

logger = logging.getLogger("kindimages.factory")


@dataclass
class Services:
    """Everything the host adapter needs to serve requests."""
    tools: ToolsConfig
    inventory: InventoryReader
    actions: ActionOrchestrator


class ServiceFactory:
    """
    Composition root for the core modules.

    The loading state is created here once so every request served by
    the returned bundle shares it.
    """

    @staticmethod
    def build(
        config_provider: ConfigProvider,
        runner: Optional[CommandRunner] = None,
    ) -> Services:
        """
        Build the complete service stack.

        Args:
            config_provider: Configuration provider
            runner: Optional command runner, subprocess-backed by default

        Returns:
            Services bundle
        """
        tools = config_provider.get_tools_config()
        runner = runner or SubprocessRunner(default_timeout=tools.command_timeout)

        logger.info(
            f"Managing kind cluster '{tools.cluster_name}' (node {tools.node}) "
            f"with {tools.docker_bin}, {tools.kind_bin}, {tools.crictl_bin}"
        )

        return Services(
            tools=tools,
            inventory=InventoryReader(runner, tools),
            actions=ActionOrchestrator(runner, tools, LoadingState()),
        )

    @staticmethod
    def build_for_testing(
        runner: CommandRunner,
        tools: Optional[ToolsConfig] = None,
    ) -> Services:
        """
        Build the stack around a fake runner without reading the environment.

        Args:
            runner: Fake or mock command runner
            tools: Tool configuration, defaults if omitted
        """
        tools = tools or ToolsConfig()
        return Services(
            tools=tools,
            inventory=InventoryReader(runner, tools),
            actions=ActionOrchestrator(runner, tools, LoadingState()),
        )
