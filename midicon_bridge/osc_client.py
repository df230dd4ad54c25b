"""
Console OSC Client

Send-only OSC over UDP to the lighting console.
"""

import logging
from typing import Any, Optional

from pythonosc import udp_client

from .model import OscCommand

logger = logging.getLogger(__name__)


class ConsoleOscClient:
    """
    Fire-and-forget OSC sender.

    Example:
        osc = ConsoleOscClient("127.0.0.1", 8000)
        osc.start()
        osc.send(OscCommand("/cmd", ["Page 1"]))
    """

    def __init__(self, host: str = "127.0.0.1", port: int = 8000):
        self.host = host
        self.port = port
        self._client: Any = None

    def start(self) -> bool:
        """
        Create the UDP client.

        Returns:
            True if started successfully
        """
        try:
            self._client = udp_client.SimpleUDPClient(self.host, self.port)
            logger.info(f"OSC started: sending to {self.host}:{self.port}")
            return True
        except Exception as e:
            logger.error(f"OSC start failed: {e}")
            self._client = None
            return False

    def send(self, command: OscCommand):
        """Send OSC message. Failures are logged, never raised."""
        if not self._client:
            logger.debug(f"OSC not started, cannot send: {command}")
            return

        try:
            self._client.send_message(command.address, command.args)
            logger.debug(f"OSC sent: {command}")
        except Exception as e:
            logger.error(f"OSC send failed: {e}")

    def stop(self):
        self._client = None
        logger.info("OSC stopped")

    def is_running(self) -> bool:
        return self._client is not None

    @property
    def target(self) -> Optional[str]:
        return f"{self.host}:{self.port}" if self._client else None
