"""
Finite State Machine Logic - Pure Functions

All functions are pure: same input = same output, no side effects.
Returns new state and list of effects to be executed by imperative shell.

Covers:
- Matrix and playback page selection (clamped, press edge only)
- Grandmaster fader and blackout
- Channel faders, matrix keys and playback keys
- Playback encoder accumulation per playback page
- Remote view scrubbing with the view encoders
"""

from dataclasses import replace
from typing import List, Tuple

from .coordinates import (
    matrix_key, playback_key, encoder_delta,
    playback_encoder_index, view_encoder_position,
)
from .layout import (
    MIN_PAGE, MAX_PAGE, MATRIX_PAGE_CC, PLAYBACK_PAGE_CC,
    CHANNEL_FADER_OFFSET, GRANDMASTER_LED_NOTE, GRANDMASTER_COMMAND,
    ENCODER_BANK_FIRST_NOTE, ENCODER_BANK_COMMAND,
    PLAYBACK_ENCODER_BASE_KEY,
    COMMAND_ADDRESS, PAGE_COMMAND, fader_address, key_address,
)
from .model import (
    BridgeState, ContinuousChange, NoteEvent, OscCommand,
    Effect, SendOscEffect, SendCcEffect, SendNoteEffect, SendRemoteEffect, LogEffect,
)
from .scaling import scale
from .session import next_frame_request, wheel_request

Transition = Tuple[BridgeState, List[Effect]]


def console_command(text: str) -> SendOscEffect:
    """Free-text command on the console command line."""
    return SendOscEffect(OscCommand(COMMAND_ADDRESS, [text]))


def _clamp_page(page: int) -> int:
    return max(MIN_PAGE, min(MAX_PAGE, page))


# =============================================================================
# STARTUP
# =============================================================================

def startup_effects(state: BridgeState) -> List[Effect]:
    """Bring surface indicators and console page in line with the initial state."""
    return [
        SendCcEffect(MATRIX_PAGE_CC, state.pages.matrix_page),
        SendCcEffect(PLAYBACK_PAGE_CC, state.pages.playback_page),
        console_command(PAGE_COMMAND.format(page=state.pages.matrix_page)),
    ]


# =============================================================================
# PAGES
# =============================================================================

def change_matrix_page(state: BridgeState, step: int) -> Transition:
    """
    Move the matrix page by step, clamped to MIN_PAGE..MAX_PAGE.

    The page indicator and console page are sent even when the page
    is already at a bound.
    """
    page = _clamp_page(state.pages.matrix_page + step)
    new_state = replace(state, pages=replace(state.pages, matrix_page=page))
    effects: List[Effect] = [
        SendCcEffect(MATRIX_PAGE_CC, page),
        console_command(PAGE_COMMAND.format(page=page)),
    ]
    return new_state, effects


def change_playback_page(state: BridgeState, step: int) -> Transition:
    """Move the playback page by step; only the surface indicator is updated."""
    page = _clamp_page(state.pages.playback_page + step)
    new_state = replace(state, pages=replace(state.pages, playback_page=page))
    return new_state, [SendCcEffect(PLAYBACK_PAGE_CC, page)]


def handle_matrix_page_up(state: BridgeState, event: NoteEvent) -> Transition:
    if not event.pressed:
        return state, []
    return change_matrix_page(state, 1)


def handle_matrix_page_down(state: BridgeState, event: NoteEvent) -> Transition:
    if not event.pressed:
        return state, []
    return change_matrix_page(state, -1)


def handle_playback_page_up(state: BridgeState, event: NoteEvent) -> Transition:
    if not event.pressed:
        return state, []
    return change_playback_page(state, 1)


def handle_playback_page_down(state: BridgeState, event: NoteEvent) -> Transition:
    if not event.pressed:
        return state, []
    return change_playback_page(state, -1)


# =============================================================================
# GRANDMASTER AND BLACKOUT
# =============================================================================

def _grandmaster_command(level: int) -> SendOscEffect:
    return console_command(GRANDMASTER_COMMAND.format(level=level))


def handle_grandmaster(state: BridgeState, event: ContinuousChange) -> Transition:
    """
    Grandmaster fader moved.

    Level and fader position always follow the fader; while blacked out
    nothing is sent so the console stays at zero.
    """
    grandmaster = replace(
        state.grandmaster,
        level=scale(event.value),
        fader_position=event.value,
    )
    new_state = replace(state, grandmaster=grandmaster)

    if grandmaster.blackout:
        return new_state, []

    effects: List[Effect] = [
        SendNoteEffect(GRANDMASTER_LED_NOTE, grandmaster.led_velocity),
        _grandmaster_command(grandmaster.level),
    ]
    return new_state, effects


def toggle_blackout(state: BridgeState) -> Transition:
    """
    Flip blackout.

    On: master to 0, LED fully off. Off: restore the preserved level and
    the LED for the current fader position.
    """
    grandmaster = replace(state.grandmaster, blackout=not state.grandmaster.blackout)
    new_state = replace(state, grandmaster=grandmaster)

    if grandmaster.blackout:
        effects: List[Effect] = [
            _grandmaster_command(0),
            SendNoteEffect(GRANDMASTER_LED_NOTE, 127),
            LogEffect("Blackout on"),
        ]
    else:
        effects = [
            _grandmaster_command(grandmaster.level),
            SendNoteEffect(GRANDMASTER_LED_NOTE, grandmaster.led_velocity),
            LogEffect(f"Blackout off, master at {grandmaster.level}"),
        ]
    return new_state, effects


def handle_blackout(state: BridgeState, event: NoteEvent) -> Transition:
    # Toggles on every note message, the surface latches this button itself
    return toggle_blackout(state)


# =============================================================================
# FADERS AND KEYS
# =============================================================================

def handle_channel_fader(state: BridgeState, event: ContinuousChange) -> Transition:
    """Channel fader -> fader on the current playback page."""
    address = fader_address(state.pages.playback_page, event.id + CHANNEL_FADER_OFFSET)
    return state, [SendOscEffect(OscCommand(address, [scale(event.value)]))]


def handle_matrix_key(state: BridgeState, event: NoteEvent) -> Transition:
    """Matrix button -> key on the current matrix page, 1 on press, 0 on release."""
    address = key_address(state.pages.matrix_page, matrix_key(event.id))
    return state, [SendOscEffect(OscCommand(address, [int(event.pressed)]))]


def handle_playback_key(state: BridgeState, event: NoteEvent) -> Transition:
    """Playback button -> key on the current playback page, 1 on press, 0 on release."""
    address = key_address(state.pages.playback_page, playback_key(event.id))
    return state, [SendOscEffect(OscCommand(address, [int(event.pressed)]))]


def handle_select_encoder_bank(state: BridgeState, event: NoteEvent) -> Transition:
    bank = event.id - ENCODER_BANK_FIRST_NOTE + 1
    return state, [console_command(ENCODER_BANK_COMMAND.format(bank=bank))]


# =============================================================================
# ENCODERS
# =============================================================================

def handle_playback_encoder(state: BridgeState, event: NoteEvent) -> Transition:
    """
    Playback encoder step.

    Accumulates into the slot of the current playback page and sends the
    stored value, also when the clamp left it unchanged.
    """
    page = state.pages.playback_page
    index = playback_encoder_index(event.id)
    encoders = state.encoders.with_delta(page, index, encoder_delta(event.id))
    new_state = replace(state, encoders=encoders)

    address = fader_address(page, index + PLAYBACK_ENCODER_BASE_KEY)
    return new_state, [SendOscEffect(OscCommand(address, [encoders.value(page, index)]))]


def handle_view_encoder(state: BridgeState, event: NoteEvent) -> Transition:
    """View encoder step -> pull a frame and scroll the remote view under the encoder."""
    pos_x, pos_y = view_encoder_position(event.id)
    effects: List[Effect] = [
        SendRemoteEffect(next_frame_request()),
        SendRemoteEffect(wheel_request(pos_x, pos_y, encoder_delta(event.id))),
    ]
    return state, effects
