"""
Value Scaling

Maps raw 7-bit MIDI values (0-127) onto the console's 0-100 range.
"""

from typing import Tuple

MIDI_MAX = 127
SCALE_FACTOR = 0.8
SCALE_MAX = 100

# Precomputed so every raw value maps to exactly one integer, no rounding at runtime
FADER_VALUES: Tuple[int, ...] = tuple(
    min(SCALE_MAX, int(raw * SCALE_FACTOR)) for raw in range(MIDI_MAX + 1)
)


def scale(raw: int) -> int:
    """
    Scale a raw MIDI value to the console range.

    Args:
        raw: MIDI value 0-127

    Returns:
        Integer 0-100, saturating at 100 from raw 125 upwards

    Raises:
        ValueError: If raw is outside 0-127
    """
    if not 0 <= raw <= MIDI_MAX:
        raise ValueError(f"MIDI value out of range: {raw}")
    return FADER_VALUES[raw]
