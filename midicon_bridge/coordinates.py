"""
Coordinate Translation

Pure functions turning linear note numbers from the surface into console
key addresses, encoder slots and screen positions.
"""

import math
from typing import Tuple

from .layout import (
    MATRIX_FIRST_NOTE, MATRIX_LAST_NOTE, MATRIX_COLUMNS, MATRIX_KEY_ANCHOR,
    PLAYBACK_BANKS,
    PLAYBACK_ENCODER_FIRST_NOTE, PLAYBACK_ENCODER_LAST_NOTE,
    VIEW_ENCODER_FIRST_NOTE, VIEW_ENCODER_LAST_NOTE,
    VIEW_ENCODER_POS_X, VIEW_ENCODER_POS_Y,
)


# =============================================================================
# MATRIX GRID
# =============================================================================

def matrix_cell(note: int) -> Tuple[int, int]:
    """
    Row and column (both 1-based) of a matrix note.

    Example:
        matrix_cell(1) -> (1, 1)
        matrix_cell(8) -> (1, 8)
        matrix_cell(9) -> (2, 1)
    """
    if not MATRIX_FIRST_NOTE <= note <= MATRIX_LAST_NOTE:
        raise ValueError(f"Not a matrix note: {note}")
    row = math.ceil(note / MATRIX_COLUMNS)
    col = note % MATRIX_COLUMNS or MATRIX_COLUMNS
    return row, col


def matrix_key(note: int) -> int:
    """
    Console key for a matrix note.

    The console numbers keys as 100 * row block + column with row blocks
    counting down, so row 1 maps to 4xx and row 4 to 1xx.

    Example:
        matrix_key(1) -> 416
        matrix_key(9) -> 316
    """
    row, col = matrix_cell(note)
    return MATRIX_KEY_ANCHOR - row * 100 + col


# =============================================================================
# PLAYBACK SUB-BANKS
# =============================================================================

def playback_key(note: int) -> int:
    """
    Console key for a playback button: base key of its sub-bank plus offset.

    Example:
        playback_key(33) -> 191
        playback_key(75) -> 308
    """
    for first_note, last_note, base_key in PLAYBACK_BANKS:
        if first_note <= note <= last_note:
            return base_key + (note - first_note)
    raise ValueError(f"Not a playback note: {note}")


# =============================================================================
# ENCODERS
# =============================================================================

def encoder_delta(note: int) -> int:
    """Rotation direction of an encoder note: even = +1, odd = -1."""
    return 1 if note % 2 == 0 else -1


def playback_encoder_index(note: int) -> int:
    """
    Zero-based playback encoder slot for a note.

    Each encoder sends two adjacent notes, one per direction, so
    86/87 -> 0, 88/89 -> 1, ..., 100/101 -> 7.
    """
    if not PLAYBACK_ENCODER_FIRST_NOTE <= note <= PLAYBACK_ENCODER_LAST_NOTE:
        raise ValueError(f"Not a playback encoder note: {note}")
    return math.ceil((note - (PLAYBACK_ENCODER_FIRST_NOTE - 1)) / 2) - 1


def view_encoder_number(note: int) -> int:
    """One-based view encoder number: 78/79 -> 1, ..., 84/85 -> 4."""
    if not VIEW_ENCODER_FIRST_NOTE <= note <= VIEW_ENCODER_LAST_NOTE:
        raise ValueError(f"Not a view encoder note: {note}")
    return math.ceil((note - (VIEW_ENCODER_FIRST_NOTE - 1)) / 2)


def view_encoder_position(note: int) -> Tuple[int, int]:
    """Screen position in the remote video view scrubbed by a view encoder."""
    return VIEW_ENCODER_POS_X[view_encoder_number(note) - 1], VIEW_ENCODER_POS_Y
