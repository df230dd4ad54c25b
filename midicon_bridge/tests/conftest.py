"""
Pytest configuration and fixtures for midicon_bridge tests.
"""

from typing import Any, Dict, List, Tuple

import pytest

from midicon_bridge.controller import BridgeController
from midicon_bridge.model import BridgeState, OscCommand, SendOscEffect


class RecordingSurface:
    """Feedback double recording every CC and note sent to the surface."""

    def __init__(self):
        self.sent: List[Tuple[str, int, int]] = []
        self.closed = False

    def send_cc(self, control: int, value: int) -> None:
        self.sent.append(("cc", control, value))

    def send_note(self, note: int, velocity: int) -> None:
        self.sent.append(("note", note, velocity))

    def close(self) -> None:
        self.closed = True


class RecordingConsole:
    """Console double recording OSC commands."""

    def __init__(self):
        self.sent: List[OscCommand] = []

    def send(self, command: OscCommand) -> None:
        self.sent.append(command)

    @property
    def commands(self) -> List[str]:
        """Text sent on the /cmd channel."""
        return [c.args[0] for c in self.sent if c.address == "/cmd"]


class RecordingRemote:
    """Remote session double recording requests."""

    def __init__(self):
        self.sent: List[Dict[str, Any]] = []

    def send(self, request: Dict[str, Any]) -> None:
        self.sent.append(request)

    @property
    def request_types(self) -> List[str]:
        return [r["requestType"] for r in self.sent]


def osc_commands(effects) -> List[OscCommand]:
    return [e.command for e in effects if isinstance(e, SendOscEffect)]


@pytest.fixture
def state():
    """Fresh bridge state."""
    return BridgeState()


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def console():
    return RecordingConsole()


@pytest.fixture
def remote():
    return RecordingRemote()


@pytest.fixture
def controller(surface, console, remote):
    """Controller wired to recording doubles."""
    return BridgeController(feedback=surface, console=console, remote=remote)
