"""
Core modem infrastructure.

Provides low-level building blocks for modem communication:
- Transport: Serial communication abstraction
- CommandChannel: Command framing and reply normalization
- Protocol: AT command execution and startup handshake
- NetLink: Host network link control
- ModemCore: Coordination of all core components
"""

from .transport import Transport, SerialTransport, MockTransport
from .channel import CommandChannel
from .protocol import ATProtocol
from .netlink import NetLink, IPRouteNetLink, MockNetLink
from .modem import ModemCore

__all__ = [
    "Transport",
    "SerialTransport",
    "MockTransport",
    "CommandChannel",
    "ATProtocol",
    "NetLink",
    "IPRouteNetLink",
    "MockNetLink",
    "ModemCore",
]
