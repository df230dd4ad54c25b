"""
Remote Session Handshake - Pure Functions

Drives the video session protocol:
open -> remoteState -> (server ready -> remoteState) -> remoteState reply
-> resizeVideo + requestVideo -> one nextFrame per frame marker.

All functions are pure: they return the new state and a list of effects.
"""

import json
from dataclasses import replace
from typing import Any, Dict, List, Tuple

from .layout import VIDEO_WIDTH, VIDEO_HEIGHT, FRAME_MARKER, SERVER_READY_STATUS
from .model import (
    BridgeState, RemoteSessionPhase,
    SessionEvent, SessionOpened, SessionMessage, SessionError, SessionClosed,
    Effect, SendRemoteEffect, LogEffect, ShutdownEffect,
)


# =============================================================================
# REQUESTS
# =============================================================================

def remote_state_request() -> Dict[str, Any]:
    return {"requestType": "remoteState"}


def resize_video_request(width: int = VIDEO_WIDTH, height: int = VIDEO_HEIGHT) -> Dict[str, Any]:
    return {"requestType": "resizeVideo", "width": width, "height": height}


def request_video_request() -> Dict[str, Any]:
    return {"requestType": "requestVideo"}


def next_frame_request() -> Dict[str, Any]:
    return {"requestType": "nextFrame"}


def wheel_request(pos_x: int, pos_y: int, delta: int) -> Dict[str, Any]:
    """
    Synthetic mouse wheel event at a screen position.

    Args:
        pos_x: Screen X in the remote view
        pos_y: Screen Y in the remote view
        delta: +1 or -1 wheel step
    """
    return {
        "requestType": "mouseEvent",
        "posX": pos_x,
        "posY": pos_y,
        "eventType": "wheel",
        "deltaX": 1,
        "deltaY": delta,
        "deltaZ": 0,
        "deltaMode": 0,
        "ctrlKey": False,
    }


def encode_request(request: Dict[str, Any]) -> str:
    """Serialize a request as compact JSON, keeping key order."""
    return json.dumps(request, separators=(",", ":"))


# =============================================================================
# EVENT HANDLERS
# =============================================================================

def handle_session_open(state: BridgeState) -> Tuple[BridgeState, List[Effect]]:
    """Connection established: ask for the remote state."""
    effects: List[Effect] = [
        LogEffect("Remote session connected"),
        SendRemoteEffect(remote_state_request()),
    ]
    return replace(state, session=RemoteSessionPhase.AWAITING_READY), effects


def handle_session_message(
    state: BridgeState,
    data: Any,
    video_size: Tuple[int, int] = (VIDEO_WIDTH, VIDEO_HEIGHT),
) -> Tuple[BridgeState, List[Effect]]:
    """
    Handle one inbound frame.

    Binary frames are ignored. Text that is not a JSON object is logged and
    dropped without touching state. A single message may carry several
    fields; they are handled in the order status, type, MA.

    Args:
        state: Current bridge state
        data: Raw frame payload
        video_size: (width, height) requested once the remote state arrives
    """
    if not isinstance(data, str):
        return state, []

    try:
        message = json.loads(data)
    except (ValueError, RecursionError) as e:
        return state, [LogEffect(f"Malformed session message dropped: {e}", "WARNING")]

    if not isinstance(message, dict):
        return state, [LogEffect(f"Unexpected session message dropped: {data[:80]}", "WARNING")]

    effects: List[Effect] = []

    if message.get("status") == SERVER_READY_STATUS:
        effects.append(LogEffect("Remote server ready"))
        effects.append(SendRemoteEffect(remote_state_request()))
        state = replace(state, session=RemoteSessionPhase.READY)

    if message.get("type") == "remoteState":
        width, height = video_size
        effects.append(LogEffect("Remote state received, requesting video"))
        effects.append(SendRemoteEffect(resize_video_request(width, height)))
        effects.append(SendRemoteEffect(request_video_request()))
        state = replace(state, session=RemoteSessionPhase.STREAMING)

    if message.get("MA") == FRAME_MARKER and state.session == RemoteSessionPhase.STREAMING:
        effects.append(LogEffect(f"Frame marker: {message}", "DEBUG"))
        effects.append(SendRemoteEffect(next_frame_request()))

    return state, effects


def handle_session_error(state: BridgeState, error: str) -> Tuple[BridgeState, List[Effect]]:
    """Transport error: log only, no retry, no phase change."""
    return state, [LogEffect(f"Remote session error: {error}", "ERROR")]


def handle_session_closed(
    state: BridgeState,
    code: Any = None,
    reason: Any = None,
) -> Tuple[BridgeState, List[Effect]]:
    """The remote session is the lifecycle of the whole bridge: closing it ends the process."""
    detail = f" ({code} {reason})" if code is not None else ""
    effects: List[Effect] = [
        LogEffect(f"Remote session closed{detail}"),
        ShutdownEffect("remote session closed"),
    ]
    return replace(state, session=RemoteSessionPhase.DISCONNECTED), effects


def handle_session_event(
    state: BridgeState,
    event: SessionEvent,
    video_size: Tuple[int, int] = (VIDEO_WIDTH, VIDEO_HEIGHT),
) -> Tuple[BridgeState, List[Effect]]:
    """Dispatch a session event to its handler."""
    if isinstance(event, SessionOpened):
        return handle_session_open(state)
    if isinstance(event, SessionMessage):
        return handle_session_message(state, event.data, video_size)
    if isinstance(event, SessionError):
        return handle_session_error(state, event.error)
    if isinstance(event, SessionClosed):
        return handle_session_closed(state, event.code, event.reason)
    return state, []
