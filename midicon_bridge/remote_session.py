"""
Remote Session Client

Persistent WebSocket connection to the remote video session using
websocket-client's WebSocketApp. The socket runs on a daemon thread and
reports everything as SessionEvents; the protocol itself lives in session.py.
"""

import logging
import threading
from typing import Any, Callable, Dict, Optional

import websocket

from .model import SessionClosed, SessionError, SessionEvent, SessionMessage, SessionOpened
from .session import encode_request

logger = logging.getLogger(__name__)


class RemoteSessionClient:
    """
    WebSocket transport for the video session.

    Example:
        client = RemoteSessionClient("ws://localhost:8080/")
        client.start(on_event=queue.put)
        client.send({"requestType": "nextFrame"})
    """

    def __init__(self, url: str):
        self.url = url
        self._app: Optional[websocket.WebSocketApp] = None
        self._thread: Optional[threading.Thread] = None
        self._callback: Optional[Callable[[SessionEvent], None]] = None
        self._connected = False

    def start(self, on_event: Callable[[SessionEvent], None]):
        """Connect in the background. Events arrive through on_event."""
        self._callback = on_event
        self._app = websocket.WebSocketApp(
            self.url,
            on_open=self._on_open,
            on_message=self._on_message,
            on_error=self._on_error,
            on_close=self._on_close,
        )
        logger.info(f"Connecting to remote session at {self.url}")
        self._thread = threading.Thread(target=self._app.run_forever, daemon=True)
        self._thread.start()

    # =========================================================================
    # WEBSOCKET CALLBACKS (socket thread)
    # =========================================================================

    def _emit(self, event: SessionEvent):
        if self._callback:
            self._callback(event)

    def _on_open(self, ws):
        self._connected = True
        self._emit(SessionOpened())

    def _on_message(self, ws, data):
        self._emit(SessionMessage(data))

    def _on_error(self, ws, error):
        self._emit(SessionError(str(error)))

    def _on_close(self, ws, close_status_code=None, close_msg=None):
        self._connected = False
        self._emit(SessionClosed(close_status_code, close_msg))

    # =========================================================================
    # SENDING
    # =========================================================================

    def send(self, request: Dict[str, Any]):
        """Send one request as a JSON text frame. Dropped when not connected."""
        if not self._app or not self._connected:
            logger.debug(f"Remote session not connected, cannot send: {request}")
            return

        try:
            self._app.send(encode_request(request))
            logger.debug(f"Remote sent: {request}")
        except Exception as e:
            logger.error(f"Remote send failed: {e}")

    def stop(self):
        """Close the socket."""
        if self._app:
            try:
                self._app.close()
            except Exception as e:
                logger.error(f"Error closing remote session: {e}")
        self._connected = False

    def is_connected(self) -> bool:
        return self._connected
