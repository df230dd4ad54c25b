"""
Tests for the remote session handshake.
"""

from dataclasses import replace

import pytest

from midicon_bridge.model import (
    RemoteSessionPhase, SessionOpened, SessionMessage, SessionError, SessionClosed,
    SendRemoteEffect, LogEffect, ShutdownEffect,
)
from midicon_bridge.session import (
    encode_request, handle_session_event, handle_session_message,
    next_frame_request, wheel_request,
)


def requests(effects):
    return [e.request for e in effects if isinstance(e, SendRemoteEffect)]


@pytest.fixture
def streaming(state):
    return replace(state, session=RemoteSessionPhase.STREAMING)


class TestHandshake:
    """Test the open -> ready -> streaming sequence."""

    def test_open_requests_remote_state(self, state):
        new_state, effects = handle_session_event(state, SessionOpened())
        assert new_state.session == RemoteSessionPhase.AWAITING_READY
        assert requests(effects) == [{"requestType": "remoteState"}]

    def test_server_ready_resyncs(self, state):
        state = replace(state, session=RemoteSessionPhase.AWAITING_READY)
        new_state, effects = handle_session_message(state, '{"status":"server ready"}')
        assert new_state.session == RemoteSessionPhase.READY
        assert requests(effects) == [{"requestType": "remoteState"}]

    def test_remote_state_starts_video(self, state):
        state = replace(state, session=RemoteSessionPhase.READY)
        new_state, effects = handle_session_message(state, '{"type":"remoteState","foo":1}')
        assert new_state.session == RemoteSessionPhase.STREAMING
        assert requests(effects) == [
            {"requestType": "resizeVideo", "width": 2048, "height": 1056},
            {"requestType": "requestVideo"},
        ]

    def test_custom_video_size(self, state):
        _, effects = handle_session_message(state, '{"type":"remoteState"}', video_size=(1280, 720))
        assert requests(effects)[0] == {"requestType": "resizeVideo", "width": 1280, "height": 720}

    def test_full_sequence(self, state):
        state, _ = handle_session_event(state, SessionOpened())
        state, _ = handle_session_event(state, SessionMessage('{"status":"server ready"}'))
        state, _ = handle_session_event(state, SessionMessage('{"type":"remoteState"}'))
        state, effects = handle_session_event(state, SessionMessage('{"MA":"00"}'))
        assert state.session == RemoteSessionPhase.STREAMING
        assert requests(effects) == [{"requestType": "nextFrame"}]


class TestFramePump:
    """Test frame marker handling."""

    def test_marker_pulls_next_frame(self, streaming):
        new_state, effects = handle_session_message(streaming, '{"MA":"00","x":2}')
        assert new_state == streaming
        assert requests(effects) == [next_frame_request()]

    def test_marker_ignored_before_streaming(self, state):
        state = replace(state, session=RemoteSessionPhase.AWAITING_READY)
        _, effects = handle_session_message(state, '{"MA":"00"}')
        assert requests(effects) == []

    def test_other_marker_value_ignored(self, streaming):
        _, effects = handle_session_message(streaming, '{"MA":"01"}')
        assert effects == []


class TestMalformedInput:
    """Malformed payloads are dropped without state change."""

    @pytest.mark.parametrize("payload", ["not json", "{", "[1, 2]", '"text"', "42"])
    def test_dropped_with_warning(self, streaming, payload):
        new_state, effects = handle_session_message(streaming, payload)
        assert new_state == streaming
        assert len(effects) == 1
        assert isinstance(effects[0], LogEffect)
        assert effects[0].level == "WARNING"

    def test_deeply_nested_json_dropped(self, streaming):
        new_state, effects = handle_session_message(streaming, "[" * 200000)
        assert new_state == streaming
        assert len(effects) == 1
        assert effects[0].level == "WARNING"

    def test_binary_frame_ignored(self, streaming):
        new_state, effects = handle_session_message(streaming, b"\x00\x01")
        assert new_state == streaming
        assert effects == []

    def test_unknown_fields_ignored(self, streaming):
        new_state, effects = handle_session_message(streaming, '{"hello":"world"}')
        assert new_state == streaming
        assert effects == []


class TestErrorsAndClose:
    """Test error and close handling."""

    def test_error_only_logs(self, streaming):
        new_state, effects = handle_session_event(streaming, SessionError("boom"))
        assert new_state == streaming
        assert len(effects) == 1
        assert effects[0].level == "ERROR"
        assert "boom" in effects[0].message

    def test_close_shuts_down(self, streaming):
        new_state, effects = handle_session_event(streaming, SessionClosed(1000, "bye"))
        assert new_state.session == RemoteSessionPhase.DISCONNECTED
        assert any(isinstance(e, ShutdownEffect) for e in effects)


class TestEncoding:
    """Test wire format of requests."""

    def test_compact_json(self):
        assert encode_request(next_frame_request()) == '{"requestType":"nextFrame"}'

    def test_wheel_key_order(self):
        assert encode_request(wheel_request(204, 995, -1)) == (
            '{"requestType":"mouseEvent","posX":204,"posY":995,"eventType":"wheel",'
            '"deltaX":1,"deltaY":-1,"deltaZ":0,"deltaMode":0,"ctrlKey":false}'
        )
