"""
Domain Models for the Bridge

Immutable data structures for surface events, bridge state,
remote session events and FSM effects.
"""

from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Tuple, Union

from .layout import (
    MIN_PAGE, MAX_PAGE,
    PLAYBACK_ENCODER_COUNT, ENCODER_MIN, ENCODER_MAX, ENCODER_NEUTRAL,
)


# =============================================================================
# CONTROL SURFACE EVENTS
# =============================================================================

@dataclass(frozen=True)
class ContinuousChange:
    """Fader or knob position (MIDI control change)."""
    id: int
    value: int


@dataclass(frozen=True)
class NoteEvent:
    """
    Button press or release (MIDI note).

    The surface sends velocity 127 on press and 0 on release.
    """
    id: int
    velocity: int

    @property
    def pressed(self) -> bool:
        return self.velocity == 127


ControlEvent = Union[ContinuousChange, NoteEvent]


# =============================================================================
# REMOTE SESSION EVENTS
# =============================================================================

@dataclass(frozen=True)
class SessionOpened:
    """WebSocket connection established."""
    pass


@dataclass(frozen=True)
class SessionMessage:
    """Inbound frame. Text frames carry JSON, binary frames are video data."""
    data: Union[str, bytes]


@dataclass(frozen=True)
class SessionError:
    """Transport error reported by the WebSocket client."""
    error: str


@dataclass(frozen=True)
class SessionClosed:
    """Connection closed by either side."""
    code: Optional[int] = None
    reason: Optional[str] = None


SessionEvent = Union[SessionOpened, SessionMessage, SessionError, SessionClosed]


# =============================================================================
# OSC COMMAND
# =============================================================================

@dataclass(frozen=True)
class OscCommand:
    """
    OSC message for the lighting console.

    Attributes:
        address: OSC address (e.g., "/Page1/Key416" or "/cmd")
        args: List of arguments (ints for faders/keys, one string for /cmd)
    """
    address: str
    args: List[Any] = field(default_factory=list)

    def __str__(self) -> str:
        args_str = " ".join(str(a) for a in self.args) if self.args else ""
        return f"{self.address} {args_str}".strip()


# =============================================================================
# STATE
# =============================================================================

class RemoteSessionPhase(Enum):
    """
    Lifecycle of the remote video session.

    DISCONNECTED: No connection (initial, and after close)
    AWAITING_READY: Connected, remote state requested
    READY: Server reported ready, remote state re-requested
    STREAMING: Video requested, frames pumped on demand
    """
    DISCONNECTED = auto()
    AWAITING_READY = auto()
    READY = auto()
    STREAMING = auto()


@dataclass(frozen=True)
class PageState:
    """Currently selected console pages, each within MIN_PAGE..MAX_PAGE."""
    matrix_page: int = MIN_PAGE
    playback_page: int = MIN_PAGE


@dataclass(frozen=True)
class GrandmasterState:
    """
    Grandmaster fader and blackout.

    Attributes:
        level: Last scaled fader value (0-100), kept while blacked out
        fader_position: Last raw fader value (0-127)
        blackout: When True the live level is not sent to the console
    """
    level: int = 100
    fader_position: int = 127
    blackout: bool = False

    @property
    def led_velocity(self) -> int:
        """Feedback velocity for the grandmaster LED (inverted fader)."""
        return 127 - self.fader_position


def _neutral_encoders() -> Dict[Tuple[int, int], int]:
    return {
        (page, index): ENCODER_NEUTRAL
        for page in range(MIN_PAGE, MAX_PAGE + 1)
        for index in range(PLAYBACK_ENCODER_COUNT)
    }


@dataclass(frozen=True)
class EncoderBank:
    """
    Accumulated playback encoder values per (page, index).

    Every slot starts at ENCODER_NEUTRAL and stays within
    ENCODER_MIN..ENCODER_MAX.
    """
    values: Dict[Tuple[int, int], int] = field(default_factory=_neutral_encoders)

    def value(self, page: int, index: int) -> int:
        return self.values[(page, index)]

    def with_delta(self, page: int, index: int, delta: int) -> "EncoderBank":
        """Return a new bank with one slot moved by delta and clamped."""
        current = self.values[(page, index)]
        updated = max(ENCODER_MIN, min(ENCODER_MAX, current + delta))
        values = dict(self.values)
        values[(page, index)] = updated
        return replace(self, values=values)


@dataclass(frozen=True)
class BridgeState:
    """
    Complete bridge state (immutable).

    Updated by pure functions, never mutated.
    All transitions return a new BridgeState instance.
    """
    pages: PageState = field(default_factory=PageState)
    grandmaster: GrandmasterState = field(default_factory=GrandmasterState)
    encoders: EncoderBank = field(default_factory=EncoderBank)
    session: RemoteSessionPhase = RemoteSessionPhase.DISCONNECTED


# =============================================================================
# EFFECTS (Side effect descriptions for imperative shell)
# =============================================================================

@dataclass(frozen=True)
class Effect:
    """Base class for side effects."""
    pass


@dataclass(frozen=True)
class SendOscEffect(Effect):
    """Effect: Send an OSC message to the console."""
    command: OscCommand


@dataclass(frozen=True)
class SendCcEffect(Effect):
    """Effect: Send a control change back to the surface."""
    control: int
    value: int


@dataclass(frozen=True)
class SendNoteEffect(Effect):
    """Effect: Send a note_on back to the surface (LED state)."""
    note: int
    velocity: int


@dataclass(frozen=True)
class SendRemoteEffect(Effect):
    """Effect: Send a JSON request to the remote video session."""
    request: Dict[str, Any]


@dataclass(frozen=True)
class LogEffect(Effect):
    """Effect: Log a message."""
    message: str
    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR


@dataclass(frozen=True)
class ShutdownEffect(Effect):
    """Effect: Release the MIDI ports and end the process."""
    reason: str = ""
