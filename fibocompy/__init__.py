"""
FibocomPy - Python library for controlling Fibocom 5G modems.
"""

from .version import __version__
from .modem import FibocomModem
from .config import ModemConfig, load_config

from .types import (
    ErrorKind,
    RegistrationStatus,
    Signal,
    BandConfiguration,
    SMSMessage,
    DeviceInfo,
)

from .exceptions import (
    FibocomError,
    TransportError,
    ATTimeoutError,
    ATCommandError,
    NetworkError,
    PreconditionError,
    SIMError,
    ConfigError,
    NetLinkError,
)

__all__ = [
    "__version__",
    "FibocomModem",
    "ModemConfig",
    "load_config",
    "ErrorKind",
    "RegistrationStatus",
    "Signal",
    "BandConfiguration",
    "SMSMessage",
    "DeviceInfo",
    "FibocomError",
    "TransportError",
    "ATTimeoutError",
    "ATCommandError",
    "NetworkError",
    "PreconditionError",
    "SIMError",
    "ConfigError",
    "NetLinkError",
]
