"""
Configuration Persistence

Transport settings (MIDI port names, console address, session URL) in a
YAML file. The control layout is fixed and not part of the configuration.
"""

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .layout import VIDEO_WIDTH, VIDEO_HEIGHT

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "midicon_bridge" / "config.yaml"


class ConfigError(ValueError):
    """Configuration file cannot be used."""


@dataclass
class BridgeConfig:
    """
    Bridge transport configuration.

    Attributes:
        midi_input: Substring of the surface's MIDI input port name
        midi_output: Substring of the surface's MIDI output port name
        console_host: Lighting console OSC host
        console_port: Lighting console OSC port
        session_url: WebSocket URL of the remote video session
        video_width: Requested remote video width
        video_height: Requested remote video height
    """
    midi_input: str = "MIDIcon 2"
    midi_output: str = "MIDIcon 2"
    console_host: str = "127.0.0.1"
    console_port: int = 8000
    session_url: str = "ws://localhost:8080/"
    video_width: int = VIDEO_WIDTH
    video_height: int = VIDEO_HEIGHT

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BridgeConfig":
        """
        Build a config from a mapping, checking keys and types.

        Raises:
            ConfigError: On unknown keys or values of the wrong type
        """
        known = {f.name: f for f in fields(cls)}
        defaults = cls()
        values: Dict[str, Any] = {}

        for key, value in data.items():
            if key not in known:
                raise ConfigError(f"Unknown config key: {key}")
            expected = type(getattr(defaults, key))
            if (expected is int and isinstance(value, bool)) or not isinstance(value, expected):
                raise ConfigError(
                    f"Config key {key} must be {expected.__name__}, got {type(value).__name__}"
                )
            values[key] = value

        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @property
    def video_size(self):
        return self.video_width, self.video_height


def save_config(config: BridgeConfig, path: Optional[Path] = None) -> bool:
    """
    Save configuration to YAML file.

    Returns:
        True if saved successfully
    """
    path = path or DEFAULT_CONFIG_PATH

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.safe_dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
        logger.info(f"Saved config to {path}")
        return True
    except OSError as e:
        logger.error(f"Failed to save config: {e}")
        return False


def load_config(path: Optional[Path] = None) -> BridgeConfig:
    """
    Load configuration from YAML file.

    A missing file yields the defaults.

    Raises:
        ConfigError: If the file is not valid YAML or has invalid entries
    """
    path = path or DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.info(f"No config file at {path}, using defaults")
        return BridgeConfig()

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return BridgeConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    config = BridgeConfig.from_dict(data)
    logger.info(f"Loaded config from {path}")
    return config
