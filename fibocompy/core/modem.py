"""
Core modem session coordinating transport, channel and protocol.

This is the foundation that feature managers build upon.
"""

import logging
from typing import Optional

from .transport import Transport
from .channel import CommandChannel, DEFAULT_BUFFER_SIZE
from .protocol import ATProtocol
from ..exceptions import ConfigError

logger = logging.getLogger(__name__)


class ModemCore:
    """
    Core modem session.

    Owns the command channel and the PDP context id for its whole lifetime.
    The transport is released exactly once by close().
    """

    def __init__(
        self,
        transport: Transport,
        cid: int = 5,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        at_logger: Optional[logging.Logger] = None
    ) -> None:
        """
        Initialize modem core.

        Args:
            transport: Transport instance for communication
            cid: PDP context id used for data connections
            buffer_size: Receive bound for a single reply in bytes
            at_logger: Logger receiving AT traffic at DEBUG level

        Raises:
            ConfigError: If cid is not a positive integer
        """
        if cid < 1:
            raise ConfigError(f"invalid context id: {cid}")

        self.transport = transport
        self.cid = cid
        self.channel = CommandChannel(transport, buffer_size=buffer_size, at_logger=at_logger)
        self.protocol = ATProtocol(self.channel, at_logger=at_logger)
        self._started = False
        self._closed = False

        logger.info(f"Initialized ModemCore (cid={cid})")

    def start(self) -> None:
        """Run the startup handshake once."""
        if self._started:
            logger.warning("ModemCore already started")
            return

        self.protocol.handshake()
        self._started = True

    def close(self) -> None:
        """Close the modem connection."""
        if self._closed:
            return

        logger.info("Closing modem connection")
        self.channel.close()
        self._closed = True

    def send(self, command: str, keep_ok: bool = False) -> str:
        """
        Send an AT command.

        This is a convenience wrapper around protocol.send().
        """
        return self.protocol.send(command, keep_ok)

    def sendex(self, command: str, prefix: str, keep_ok: bool = False) -> str:
        """
        Send an AT command and strip the expected reply prefix.

        This is a convenience wrapper around protocol.sendex().
        """
        return self.protocol.sendex(command, prefix, keep_ok)

    def is_started(self) -> bool:
        return self._started

    def __enter__(self):
        """Context manager entry."""
        if not self._started:
            self.start()
        return self

    def __exit__(self, *exc):
        """Context manager exit."""
        self.close()
