"""
MIDIcon Bridge - CLI Application

Connects the control surface, the lighting console and the remote video
session, then runs until the remote session closes.

Usage:
    python -m midicon_bridge
    midicon-bridge --list-ports
"""

import argparse
import logging
import signal
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .config import DEFAULT_CONFIG_PATH, BridgeConfig, ConfigError, load_config, save_config
from .controller import BridgeController
from .midi_device import MidiDevice, list_available_ports
from .osc_client import ConsoleOscClient
from .remote_session import RemoteSessionClient

logger = logging.getLogger(__name__)


class BridgeApp:
    """
    Wires transports to the controller.

    The controller handles all state; this class only opens and closes I/O.
    """

    def __init__(self, config: BridgeConfig):
        self.config = config
        self.midi = MidiDevice(config.midi_input, config.midi_output)
        self.console = ConsoleOscClient(config.console_host, config.console_port)
        self.remote = RemoteSessionClient(config.session_url)
        self.controller = BridgeController(
            feedback=self.midi,
            console=self.console,
            remote=self.remote,
            video_size=config.video_size,
        )

    def start(self):
        """Open transports. A transport that fails to open stays inert."""
        logger.info("Starting MIDIcon bridge...")

        if not self.midi.connect(on_event=self.controller.submit):
            logger.error("MIDI surface not connected - surface events and feedback are disabled")

        if not self.console.start():
            logger.warning("OSC not started - console commands will be dropped")

        self.controller.start()
        self.remote.start(on_event=self.controller.submit)

    def run(self):
        """Block until the remote session closes or stop() is called."""
        self.controller.run()

    def stop(self):
        self.controller.stop()
        self.remote.stop()
        self.midi.close()
        self.console.stop()
        logger.info("Stopped")


def print_ports():
    """List all available MIDI devices."""
    input_ports, output_ports = list_available_ports()

    print("\n=== Available MIDI Devices ===\n")

    print("INPUT PORTS:")
    for i, port in enumerate(input_ports):
        print(f"  {i+1}. {port}")
    if not input_ports:
        print("  (none)")

    print("\nOUTPUT PORTS:")
    for i, port in enumerate(output_ports):
        print(f"  {i+1}. {port}")
    if not output_ports:
        print("  (none)")

    print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="MIDIcon Bridge - control surface to lighting console and remote video session"
    )
    parser.add_argument("--config", type=Path, default=None,
                        help=f"Config file (default: {DEFAULT_CONFIG_PATH})")
    parser.add_argument("--midi-input", help="MIDI input port name (substring match)")
    parser.add_argument("--midi-output", help="MIDI output port name (substring match)")
    parser.add_argument("--console-host", help="Lighting console OSC host")
    parser.add_argument("--console-port", type=int, help="Lighting console OSC port")
    parser.add_argument("--session-url", help="Remote video session WebSocket URL")
    parser.add_argument("--list-ports", action="store_true",
                        help="List MIDI ports and exit")
    parser.add_argument("--write-config", action="store_true",
                        help="Write the effective configuration to the config file and exit")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable verbose logging")
    return parser


def apply_overrides(config: BridgeConfig, args: argparse.Namespace) -> BridgeConfig:
    """Command line flags win over file values."""
    overrides = {
        key: getattr(args, key)
        for key in ("midi_input", "midi_output", "console_host", "console_port", "session_url")
        if getattr(args, key) is not None
    }
    return replace(config, **overrides)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s"
    )

    if args.list_ports:
        print_ports()
        return 0

    try:
        config = apply_overrides(load_config(args.config), args)
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    if args.write_config:
        return 0 if save_config(config, args.config) else 1

    app = BridgeApp(config)

    # Handle Ctrl+C / SIGTERM: let the run loop finish on the main thread
    def signal_handler(signum, frame):
        logger.info("Shutting down...")
        app.controller.stop()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    app.start()
    try:
        app.run()
    finally:
        app.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
