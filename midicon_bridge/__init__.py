"""
MIDIcon Bridge

Bridges a MIDIcon 2 control surface to a lighting console over OSC and to
the console's remote video session over WebSocket.

Features:
- Matrix and playback keys translated to console key addresses per page
- Channel faders, grandmaster and blackout with LED feedback
- Playback encoders accumulated per playback page
- Remote video view scrubbing with the view encoders
- Pure FSM functions for state transitions, immutable state

Usage:
    from midicon_bridge import BridgeState, NoteEvent, handle_control_event

    state = BridgeState()
    state, effects = handle_control_event(state, NoteEvent(id=65, velocity=127))
    # effects: SendCcEffect(11, 2), SendOscEffect(OscCommand("/cmd", ["Page 2"]))
"""

from .model import (
    # Events
    ContinuousChange,
    NoteEvent,
    ControlEvent,
    SessionOpened,
    SessionMessage,
    SessionError,
    SessionClosed,
    SessionEvent,
    # State
    OscCommand,
    RemoteSessionPhase,
    PageState,
    GrandmasterState,
    EncoderBank,
    BridgeState,
    # Effects
    Effect,
    SendOscEffect,
    SendCcEffect,
    SendNoteEffect,
    SendRemoteEffect,
    LogEffect,
    ShutdownEffect,
)
from .scaling import scale, FADER_VALUES
from .coordinates import (
    matrix_cell,
    matrix_key,
    playback_key,
    encoder_delta,
    playback_encoder_index,
    view_encoder_number,
    view_encoder_position,
)
from .fsm import (
    startup_effects,
    change_matrix_page,
    change_playback_page,
    toggle_blackout,
)
from .routing import Route, RouteTable, CC_ROUTES, NOTE_ROUTES, resolve, handle_control_event
from .session import handle_session_event, encode_request
from .controller import BridgeController
from .config import BridgeConfig, ConfigError, load_config, save_config, DEFAULT_CONFIG_PATH

__all__ = [
    # Events
    "ContinuousChange",
    "NoteEvent",
    "ControlEvent",
    "SessionOpened",
    "SessionMessage",
    "SessionError",
    "SessionClosed",
    "SessionEvent",
    # State
    "OscCommand",
    "RemoteSessionPhase",
    "PageState",
    "GrandmasterState",
    "EncoderBank",
    "BridgeState",
    # Effects
    "Effect",
    "SendOscEffect",
    "SendCcEffect",
    "SendNoteEffect",
    "SendRemoteEffect",
    "LogEffect",
    "ShutdownEffect",
    # Scaling and coordinates
    "scale",
    "FADER_VALUES",
    "matrix_cell",
    "matrix_key",
    "playback_key",
    "encoder_delta",
    "playback_encoder_index",
    "view_encoder_number",
    "view_encoder_position",
    # FSM
    "startup_effects",
    "change_matrix_page",
    "change_playback_page",
    "toggle_blackout",
    "Route",
    "RouteTable",
    "CC_ROUTES",
    "NOTE_ROUTES",
    "resolve",
    "handle_control_event",
    "handle_session_event",
    "encode_request",
    # Controller and config
    "BridgeController",
    "BridgeConfig",
    "ConfigError",
    "load_config",
    "save_config",
    "DEFAULT_CONFIG_PATH",
]

__version__ = "1.0.0"
