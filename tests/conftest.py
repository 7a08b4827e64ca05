"""
Shared pytest fixtures for kind-images tests.

This module provides common fixtures including:
- FakeRunner: CommandRunner with canned responses and call history
- CommandMocker: Patch subprocess.run for SubprocessRunner tests
- Service bundles wired to the fake runner
"""

import os
import sys
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Pattern, Union
from unittest.mock import MagicMock, patch

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from kindimages.config.provider import ToolsConfig
from kindimages.factory import ServiceFactory
from kindimages.modules.runner import CommandResult


# =============================================================================
# Fake Command Runner
# =============================================================================

@dataclass
class CannedResponse:
    """A canned command response, or an exception to raise instead."""
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0
    raises: Optional[Exception] = None


@dataclass
class RecordedCall:
    """Record of a command run during testing."""
    args: List[str]
    command_str: str
    timeout: Optional[float]
    matched_pattern: Optional[str] = None


class FakeRunner:
    """
    CommandRunner returning pattern-matched canned responses.

    Usage:
        def test_listing(fake_runner):
            fake_runner.register("image ls", CannedResponse(stdout="..."))
            InventoryReader(fake_runner, ToolsConfig()).list_docker_images()
            assert fake_runner.was_called_with("image ls")
    """

    def __init__(self):
        self._responses: List[tuple] = []
        self._calls: List[RecordedCall] = []
        self._lock = threading.Lock()
        self.default_response = CannedResponse(
            stderr="Error: fake runner not configured for this command", returncode=1
        )
        self.on_run: Optional[Callable[[List[str]], None]] = None

    def register(
        self,
        pattern: Union[str, Pattern],
        response: Union[CannedResponse, Dict],
    ) -> "FakeRunner":
        """Register a response for commands containing pattern. Later registrations win."""
        if isinstance(response, dict):
            response = CannedResponse(**response)
        self._responses.insert(0, (pattern, response))
        return self

    def register_scenario(self, scenario_name: str) -> "FakeRunner":
        """Register every response of a named scenario from fixtures.image_scenarios."""
        from fixtures.image_scenarios import SCENARIOS

        if scenario_name not in SCENARIOS:
            raise ValueError(
                f"Unknown scenario: {scenario_name}. Available: {list(SCENARIOS.keys())}"
            )
        for pattern, response in SCENARIOS[scenario_name].items():
            self.register(pattern, response)
        return self

    def run(self, args: List[str], timeout: Optional[float] = None) -> CommandResult:
        command_str = " ".join(args)
        matched = None
        response = self.default_response

        for pattern, resp in self._responses:
            if isinstance(pattern, str):
                hit = pattern in command_str
            else:
                hit = pattern.search(command_str) is not None
            if hit:
                matched = pattern if isinstance(pattern, str) else pattern.pattern
                response = resp
                break

        with self._lock:
            self._calls.append(
                RecordedCall(
                    args=list(args),
                    command_str=command_str,
                    timeout=timeout,
                    matched_pattern=matched,
                )
            )

        if self.on_run:
            self.on_run(list(args))

        if response.raises is not None:
            raise response.raises

        return CommandResult(
            args=list(args),
            returncode=response.returncode,
            stdout=response.stdout,
            stderr=response.stderr,
        )

    @property
    def calls(self) -> List[RecordedCall]:
        with self._lock:
            return list(self._calls)

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def was_called_with(self, pattern: str) -> bool:
        return any(pattern in call.command_str for call in self.calls)

    def get_calls_matching(self, pattern: str) -> List[RecordedCall]:
        return [c for c in self.calls if pattern in c.command_str]

    def reset(self):
        """Clear call history (but keep registered responses)."""
        with self._lock:
            self._calls = []


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def tools_config():
    return ToolsConfig(command_timeout=5, load_timeout=60)


@pytest.fixture
def services(fake_runner, tools_config):
    """Service bundle wired to the fake runner."""
    return ServiceFactory.build_for_testing(fake_runner, tools_config)


# =============================================================================
# subprocess.run Mocking
# =============================================================================

class CommandMocker:
    """Stand-in for subprocess.run recording every invocation."""

    def __init__(self):
        self.calls: List[dict] = []
        self.returncode = 0
        self.stdout = ""
        self.stderr = ""
        self.side_effect: Optional[Exception] = None

    def mock_run(self, cmd, capture_output=True, text=True, timeout=None, **kwargs):
        self.calls.append({"cmd": list(cmd), "timeout": timeout, **kwargs})
        if self.side_effect is not None:
            raise self.side_effect
        result = MagicMock()
        result.stdout = self.stdout
        result.stderr = self.stderr
        result.returncode = self.returncode
        return result


@pytest.fixture
def command_mocker():
    """Fixture that provides a CommandMocker with subprocess.run patched."""
    mocker = CommandMocker()
    with patch("subprocess.run", side_effect=mocker.mock_run):
        yield mocker


# =============================================================================
# Test Markers Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "command_mock: Tests using a fake command runner or patched subprocess"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests requiring docker and a kind cluster"
    )
