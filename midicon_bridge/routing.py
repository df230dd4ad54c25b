"""
Event Routing

Fixed table from surface identities (CC numbers, note numbers) to FSM
handlers. Ranges are sorted and disjoint; each event resolves to at most
one route with a single bisect.
"""

import bisect
from typing import Callable, List, NamedTuple, Optional, Sequence

from . import fsm
from .layout import (
    FIRST_CHANNEL_FADER_CC, LAST_CHANNEL_FADER_CC, GRANDMASTER_CC,
    MATRIX_FIRST_NOTE, MATRIX_LAST_NOTE, PLAYBACK_BANKS,
    PLAYBACK_PAGE_UP_NOTE, PLAYBACK_PAGE_DOWN_NOTE,
    ENCODER_BANK_FIRST_NOTE, ENCODER_BANK_LAST_NOTE,
    MATRIX_PAGE_UP_NOTE, MATRIX_PAGE_DOWN_NOTE, BLACKOUT_NOTE,
    VIEW_ENCODER_FIRST_NOTE, VIEW_ENCODER_LAST_NOTE,
    PLAYBACK_ENCODER_FIRST_NOTE, PLAYBACK_ENCODER_LAST_NOTE,
)
from .model import BridgeState, ContinuousChange, ControlEvent, LogEffect, NoteEvent

Handler = Callable[[BridgeState, ControlEvent], fsm.Transition]


class Route(NamedTuple):
    """Inclusive identity range and the handler it dispatches to."""
    first: int
    last: int
    handler: Handler
    name: str

    def covers(self, identity: int) -> bool:
        return self.first <= identity <= self.last


class RouteTable:
    """Sorted, non-overlapping routes with bisect lookup."""

    def __init__(self, routes: Sequence[Route]):
        ordered = sorted(routes, key=lambda r: r.first)
        for previous, current in zip(ordered, ordered[1:]):
            if current.first <= previous.last:
                raise ValueError(f"Overlapping routes: {previous.name} and {current.name}")
        self._routes: List[Route] = ordered
        self._starts: List[int] = [r.first for r in ordered]

    def resolve(self, identity: int) -> Optional[Route]:
        """Route covering identity, or None if unmapped."""
        pos = bisect.bisect_right(self._starts, identity) - 1
        if pos < 0:
            return None
        route = self._routes[pos]
        return route if route.covers(identity) else None

    def __iter__(self):
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)


# =============================================================================
# TABLES
# =============================================================================

CC_ROUTES = RouteTable([
    Route(FIRST_CHANNEL_FADER_CC, LAST_CHANNEL_FADER_CC, fsm.handle_channel_fader, "channel fader"),
    Route(GRANDMASTER_CC, GRANDMASTER_CC, fsm.handle_grandmaster, "grandmaster"),
])

NOTE_ROUTES = RouteTable([
    Route(MATRIX_FIRST_NOTE, MATRIX_LAST_NOTE, fsm.handle_matrix_key, "matrix key"),
    *(
        Route(first, last, fsm.handle_playback_key, f"playback key {base_key}")
        for first, last, base_key in PLAYBACK_BANKS
    ),
    Route(PLAYBACK_PAGE_UP_NOTE, PLAYBACK_PAGE_UP_NOTE, fsm.handle_playback_page_up, "playback page up"),
    Route(PLAYBACK_PAGE_DOWN_NOTE, PLAYBACK_PAGE_DOWN_NOTE, fsm.handle_playback_page_down, "playback page down"),
    Route(ENCODER_BANK_FIRST_NOTE, ENCODER_BANK_LAST_NOTE, fsm.handle_select_encoder_bank, "encoder bank"),
    Route(MATRIX_PAGE_UP_NOTE, MATRIX_PAGE_UP_NOTE, fsm.handle_matrix_page_up, "matrix page up"),
    Route(MATRIX_PAGE_DOWN_NOTE, MATRIX_PAGE_DOWN_NOTE, fsm.handle_matrix_page_down, "matrix page down"),
    Route(BLACKOUT_NOTE, BLACKOUT_NOTE, fsm.handle_blackout, "blackout"),
    Route(VIEW_ENCODER_FIRST_NOTE, VIEW_ENCODER_LAST_NOTE, fsm.handle_view_encoder, "view encoder"),
    Route(PLAYBACK_ENCODER_FIRST_NOTE, PLAYBACK_ENCODER_LAST_NOTE, fsm.handle_playback_encoder, "playback encoder"),
])


def resolve(event: ControlEvent) -> Optional[Route]:
    """Find the route for a surface event."""
    if isinstance(event, ContinuousChange):
        return CC_ROUTES.resolve(event.id)
    if isinstance(event, NoteEvent):
        return NOTE_ROUTES.resolve(event.id)
    return None


def handle_control_event(state: BridgeState, event: ControlEvent) -> fsm.Transition:
    """
    Dispatch a surface event to its handler.

    Unmapped identities leave the state untouched and only log at debug level.
    """
    route = resolve(event)
    if route is None:
        return state, [LogEffect(f"Unmapped control: {event}", "DEBUG")]
    return route.handler(state, event)
