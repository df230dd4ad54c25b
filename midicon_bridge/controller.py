"""
Bridge Controller

Owns the bridge state and executes effects:
- Surface events -> routing -> FSM
- Remote session events -> handshake
- Effects -> console OSC, surface feedback, remote session

Transports are injected through small Protocol interfaces, so the
controller runs without hardware in tests.
"""

from __future__ import annotations

import logging
import queue
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple, Union

from .layout import VIDEO_WIDTH, VIDEO_HEIGHT
from .model import (
    BridgeState, ContinuousChange, NoteEvent, ControlEvent, SessionEvent, OscCommand,
    Effect, SendOscEffect, SendCcEffect, SendNoteEffect, SendRemoteEffect,
    LogEffect, ShutdownEffect,
)
from .fsm import startup_effects
from .routing import handle_control_event
from .session import handle_session_event

logger = logging.getLogger(__name__)

Event = Union[ControlEvent, SessionEvent]


# =============================================================================
# PROTOCOLS FOR TRANSPORT ABSTRACTION
# =============================================================================

class FeedbackInterface(Protocol):
    """MIDI feedback to the control surface."""

    def send_cc(self, control: int, value: int) -> None:
        ...

    def send_note(self, note: int, velocity: int) -> None:
        ...

    def close(self) -> None:
        ...


class ConsoleInterface(Protocol):
    """OSC to the lighting console."""

    def send(self, command: OscCommand) -> None:
        ...


class RemoteInterface(Protocol):
    """Requests to the remote video session."""

    def send(self, request: Dict[str, Any]) -> None:
        ...


# =============================================================================
# CONTROLLER
# =============================================================================

class BridgeController:
    """
    Single owner of BridgeState.

    Events from any thread are queued with submit(); run() takes them off
    the queue one at a time on the calling thread, so each handler runs to
    completion before the next event is looked at.

    Usage:
        controller = BridgeController(midi, console, remote)
        midi.connect(on_event=controller.submit)
        remote.start(on_event=controller.submit)
        controller.start()
        controller.run()  # returns after the remote session closes
    """

    def __init__(
        self,
        feedback: Optional[FeedbackInterface] = None,
        console: Optional[ConsoleInterface] = None,
        remote: Optional[RemoteInterface] = None,
        video_size: Tuple[int, int] = (VIDEO_WIDTH, VIDEO_HEIGHT),
    ):
        self.state = BridgeState()
        self.video_size = video_size

        self._feedback = feedback
        self._console = console
        self._remote = remote

        self._events: "queue.SimpleQueue[Optional[Event]]" = queue.SimpleQueue()
        self._running = False
        self._on_state_change: Optional[Callable[[BridgeState], None]] = None

    # =========================================================================
    # EVENT INTAKE (any thread)
    # =========================================================================

    def submit(self, event: Event) -> None:
        """Queue an event for the run loop."""
        self._events.put(event)

    def stop(self) -> None:
        """Ask the run loop to finish after the events already queued."""
        self._events.put(None)

    # =========================================================================
    # RUN LOOP (owner thread)
    # =========================================================================

    def start(self) -> None:
        """Send the initial page indicators and console page."""
        self._running = True
        for effect in startup_effects(self.state):
            self._execute_effect(effect)

    def run(self) -> None:
        """Process queued events until shutdown."""
        self._running = True
        while self._running:
            event = self._events.get()
            if event is None:
                break
            self.handle_event(event)
        self._running = False

    def handle_event(self, event: Event) -> None:
        """Run one event through the FSM and apply the result."""
        if isinstance(event, (ContinuousChange, NoteEvent)):
            new_state, effects = handle_control_event(self.state, event)
        else:
            new_state, effects = handle_session_event(self.state, event, self.video_size)
        self._apply_state_and_effects(new_state, effects)

    @property
    def is_running(self) -> bool:
        return self._running

    # =========================================================================
    # STATE MANAGEMENT
    # =========================================================================

    def _apply_state_and_effects(self, new_state: BridgeState, effects: List[Effect]) -> None:
        self.state = new_state

        for effect in effects:
            self._execute_effect(effect)

        if self._on_state_change:
            self._on_state_change(self.state)

    def _execute_effect(self, effect: Effect) -> None:
        """Execute a single effect."""
        if isinstance(effect, SendOscEffect):
            if self._console:
                self._console.send(effect.command)

        elif isinstance(effect, SendCcEffect):
            if self._feedback:
                self._feedback.send_cc(effect.control, effect.value)

        elif isinstance(effect, SendNoteEffect):
            if self._feedback:
                self._feedback.send_note(effect.note, effect.velocity)

        elif isinstance(effect, SendRemoteEffect):
            if self._remote:
                self._remote.send(effect.request)

        elif isinstance(effect, LogEffect):
            level = getattr(logging, effect.level, logging.INFO)
            logger.log(level, effect.message)

        elif isinstance(effect, ShutdownEffect):
            self._shutdown(effect.reason)

    def _shutdown(self, reason: str) -> None:
        logger.info(f"Shutting down: {reason}")
        if self._feedback:
            self._feedback.close()
        self._running = False

    # =========================================================================
    # CALLBACKS
    # =========================================================================

    def set_state_change_callback(self, callback: Callable[[BridgeState], None]) -> None:
        """Set callback for state changes."""
        self._on_state_change = callback
