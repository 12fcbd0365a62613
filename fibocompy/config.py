"""
Session configuration.

Defaults, optional YAML file overrides and network device discovery.

Example ``fibocom.yaml``:

.. code-block:: yaml

    serial: /dev/ttyUSB2
    apn: internet
    context_id: 5
    route: true
"""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional, Union

import yaml

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

RNDIS_PATH = Path("/sys/bus/usb/drivers/rndis_host")


def find_netdev(rndis_path: Path = RNDIS_PATH) -> Optional[str]:
    """
    Find the network interface of the first RNDIS-bound USB device.

    Returns:
        Interface name (e.g., "usb0"), or None if none is bound
    """
    try:
        entries = sorted(os.listdir(rndis_path))
    except OSError as e:
        logger.debug(f"Cannot list {rndis_path}: {e}")
        return None

    for entry in entries:
        # USB interface bindings look like "2-1:1.0"
        if ":" not in entry:
            continue
        try:
            netdevs = sorted(os.listdir(rndis_path / entry / "net"))
        except OSError:
            continue
        if netdevs:
            return netdevs[0]

    return None


@dataclass
class ModemConfig:
    """Session configuration with the command line defaults."""
    baud: int = 115200
    timeout: int = 300          # Serial timeout in milliseconds
    context_id: int = 5
    serial: str = ""
    netdev: Optional[str] = field(default_factory=find_netdev)
    simpin: str = ""
    apn: str = ""
    route: bool = False

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000.0

    def update(self, values: dict) -> None:
        """
        Override settings from a mapping.

        Raises:
            ConfigError: On unknown keys
        """
        known = {f.name for f in fields(self)}
        unknown = set(values) - known
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        for key, value in values.items():
            setattr(self, key, value)

    def validate(self) -> None:
        """
        Check the values needed to open a session.

        Raises:
            ConfigError: If a required value is missing or out of range
        """
        if not self.serial:
            raise ConfigError("missing --serial")
        if self.baud < 1:
            raise ConfigError("invalid --baud value")
        if self.timeout < 1:
            raise ConfigError("invalid --timeout value")
        if self.context_id < 1:
            raise ConfigError("invalid --cid value")


def load_config(path: Optional[Union[str, Path]] = None) -> ModemConfig:
    """
    Build a configuration from defaults and an optional YAML file.

    A missing file is not an error: everything may come from the command line.

    Raises:
        ConfigError: If the file cannot be parsed
    """
    config = ModemConfig()
    if path is None:
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            values = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.debug(f"Config file {path} not found, using defaults")
        return config
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config {path}: {e}") from e

    if not isinstance(values, dict):
        raise ConfigError(f"Config {path} must be a mapping")

    config.update(values)
    logger.debug(f"config: {config}")
    return config
