"""
Control Surface MIDI Driver

Opens the surface's MIDI ports with mido, turns incoming messages into
ControlEvents and sends page/LED feedback back to the surface.
"""

import logging
from typing import Callable, List, Optional, Tuple

import mido
from mido import Message

from .layout import FEEDBACK_CHANNEL
from .model import ContinuousChange, ControlEvent, NoteEvent

logger = logging.getLogger(__name__)


# =============================================================================
# DEVICE DETECTION
# =============================================================================

def find_port_by_pattern(port_names: List[str], pattern: str) -> Optional[str]:
    """
    Find a MIDI port by substring match (case-insensitive).

    Returns:
        Matching port name or None
    """
    pattern_lower = pattern.lower()
    for name in port_names:
        if pattern_lower in name.lower():
            return name
    return None


def list_available_ports() -> Tuple[List[str], List[str]]:
    """
    List all available MIDI ports.

    Returns:
        Tuple of (input_ports, output_ports)
    """
    try:
        return list(mido.get_input_names()), list(mido.get_output_names())
    except Exception as e:
        logger.warning(f"Could not query MIDI ports: {e}")
        return [], []


# =============================================================================
# MESSAGE CONVERSION
# =============================================================================

def message_to_event(message: Message) -> Optional[ControlEvent]:
    """
    Convert a mido message to a ControlEvent.

    note_off is reported as a release (velocity 0). Other message types
    are not used by the surface and return None.
    """
    if message.type == "control_change":
        return ContinuousChange(id=message.control, value=message.value)
    if message.type == "note_on":
        return NoteEvent(id=message.note, velocity=message.velocity)
    if message.type == "note_off":
        return NoteEvent(id=message.note, velocity=0)
    return None


# =============================================================================
# DEVICE
# =============================================================================

class MidiDevice:
    """
    MIDI surface driver.

    The input callback runs on the mido backend thread; consumers are
    expected to hand events over to their own loop.

    Example:
        device = MidiDevice("MIDIcon 2", "MIDIcon 2")
        if device.connect(on_event=queue.put):
            device.send_cc(11, 1)
    """

    def __init__(self, input_pattern: str, output_pattern: str):
        self.input_pattern = input_pattern
        self.output_pattern = output_pattern
        self._input_port: Optional[mido.ports.BaseInput] = None
        self._output_port: Optional[mido.ports.BaseOutput] = None
        self._callback: Optional[Callable[[ControlEvent], None]] = None

    def connect(self, on_event: Callable[[ControlEvent], None]) -> bool:
        """
        Open input and output ports.

        The output port is optional: without it feedback is dropped.

        Returns:
            True if the input port is open
        """
        input_ports, output_ports = list_available_ports()
        logger.debug(f"Available input ports: {input_ports}")
        logger.debug(f"Available output ports: {output_ports}")

        input_name = find_port_by_pattern(input_ports, self.input_pattern)
        output_name = find_port_by_pattern(output_ports, self.output_pattern)

        if not input_name:
            logger.error(f"MIDI input port not found: {self.input_pattern}")
            return False

        self._callback = on_event
        try:
            self._input_port = mido.open_input(input_name, callback=self._on_message)
            logger.info(f"Opened MIDI input: {input_name}")
        except Exception as e:
            logger.error(f"Failed to open MIDI input {input_name}: {e}")
            return False

        if not output_name:
            logger.error(f"MIDI output port not found: {self.output_pattern}")
            return True

        try:
            self._output_port = mido.open_output(output_name)
            logger.info(f"Opened MIDI output: {output_name}")
        except Exception as e:
            logger.error(f"Failed to open MIDI output {output_name}: {e}")

        return True

    def _on_message(self, message: Message):
        """Internal callback for mido."""
        event = message_to_event(message)
        if event is None or self._callback is None:
            return
        logger.debug(f"MIDI in: {event}")
        self._callback(event)

    def send_cc(self, control: int, value: int):
        """Send a control change (page indicators)."""
        self._send(Message("control_change", channel=FEEDBACK_CHANNEL, control=control, value=value))

    def send_note(self, note: int, velocity: int):
        """Send a note_on (LED state)."""
        self._send(Message("note_on", channel=FEEDBACK_CHANNEL, note=note, velocity=velocity))

    def _send(self, message: Message):
        if not self._output_port:
            logger.debug(f"MIDI output not open, cannot send: {message}")
            return

        try:
            self._output_port.send(message)
            logger.debug(f"MIDI out: {message}")
        except Exception as e:
            logger.error(f"MIDI send failed: {e}")

    def close(self):
        """Close both ports."""
        if self._input_port:
            try:
                self._input_port.close()
                logger.info("Closed MIDI input")
            except Exception as e:
                logger.error(f"Error closing MIDI input: {e}")
            self._input_port = None

        if self._output_port:
            try:
                self._output_port.close()
            except Exception as e:
                logger.error(f"Error closing MIDI output: {e}")
            self._output_port = None

    def is_connected(self) -> bool:
        return self._input_port is not None
