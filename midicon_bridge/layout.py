"""
Control Surface Layout

Named constants for the MIDIcon 2 layout and the console show file it drives.
The numbers are tied to the existing console configuration: changing any of
them misaddresses physical controls.
"""

from typing import Tuple


# =============================================================================
# PAGES
# =============================================================================

MIN_PAGE = 1
MAX_PAGE = 5

# Feedback CCs that drive the page indicators on the surface
PLAYBACK_PAGE_CC = 10
MATRIX_PAGE_CC = 11


# =============================================================================
# FADERS (control change)
# =============================================================================

FIRST_CHANNEL_FADER_CC = 1
LAST_CHANNEL_FADER_CC = 8
CHANNEL_FADER_OFFSET = 200     # CC 1 -> Fader201

GRANDMASTER_CC = 9
GRANDMASTER_LED_NOTE = 114     # note_on velocity 127 - fader = LED level
GRANDMASTER_COMMAND = "Master 2.1 At {level}"

FEEDBACK_CHANNEL = 0


# =============================================================================
# BUTTONS (note on / note off)
# =============================================================================

# 8 wide, 4 rows, notes 1-32
MATRIX_FIRST_NOTE = 1
MATRIX_LAST_NOTE = 32
MATRIX_COLUMNS = 8
MATRIX_KEY_ANCHOR = 515        # row 1 lands on the 4xx key block

# (first_note, last_note, base_key) for each 8 button playback sub-bank
PLAYBACK_BANKS: Tuple[Tuple[int, int, int], ...] = (
    (33, 40, 191),
    (41, 48, 201),
    (49, 56, 101),
    (68, 75, 301),
)

PLAYBACK_PAGE_UP_NOTE = 57
PLAYBACK_PAGE_DOWN_NOTE = 58

ENCODER_BANK_FIRST_NOTE = 59
ENCODER_BANK_LAST_NOTE = 64
ENCODER_BANK_COMMAND = "Select EncoderBank {bank}"

MATRIX_PAGE_UP_NOTE = 65
MATRIX_PAGE_DOWN_NOTE = 66

BLACKOUT_NOTE = 67


# =============================================================================
# ENCODERS (note pairs, even = clockwise, odd = counter-clockwise)
# =============================================================================

# Remote video view scrubbing, 4 encoders
VIEW_ENCODER_FIRST_NOTE = 78
VIEW_ENCODER_LAST_NOTE = 85
VIEW_ENCODER_POS_X: Tuple[int, ...] = (204, 577, 946, 1315)
VIEW_ENCODER_POS_Y = 995

# Playback encoders, 8 encoders accumulated per playback page
PLAYBACK_ENCODER_FIRST_NOTE = 86
PLAYBACK_ENCODER_LAST_NOTE = 101
PLAYBACK_ENCODER_COUNT = 8
PLAYBACK_ENCODER_BASE_KEY = 301
ENCODER_MIN = 0
ENCODER_MAX = 100
ENCODER_NEUTRAL = 100


# =============================================================================
# CONSOLE OSC ADDRESSES
# =============================================================================

COMMAND_ADDRESS = "/cmd"
PAGE_COMMAND = "Page {page}"


def fader_address(page: int, fader: int) -> str:
    """OSC address of a fader on a console page."""
    return f"/Page{page}/Fader{fader}"


def key_address(page: int, key: int) -> str:
    """OSC address of an executor key on a console page."""
    return f"/Page{page}/Key{key}"


# =============================================================================
# REMOTE VIDEO SESSION
# =============================================================================

VIDEO_WIDTH = 2048
VIDEO_HEIGHT = 1056
FRAME_MARKER = "00"
SERVER_READY_STATUS = "server ready"
