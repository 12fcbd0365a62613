"""
Command channel over a byte transport.

Frames outgoing commands and normalizes incoming replies.
"""

import logging
import re
from typing import Optional

from .transport import Transport
from ..exceptions import ATTimeoutError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 2048

_CRLF_RUN = re.compile(r"[\r\n]+")


class CommandChannel:
    """
    Line oriented command channel.

    A single read returns at most ``buffer_size`` bytes; a longer modem
    reply is truncated to that bound.
    """

    def __init__(
        self,
        transport: Transport,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        at_logger: Optional[logging.Logger] = None
    ) -> None:
        """
        Initialize command channel.

        Args:
            transport: Transport instance for communication
            buffer_size: Receive bound for a single reply in bytes
            at_logger: Logger receiving AT traffic at DEBUG level
        """
        if buffer_size < 1:
            raise ValueError(f"Invalid buffer size: {buffer_size}")

        self.transport = transport
        self.buffer_size = buffer_size
        self.log = at_logger or logger

    def write(self, text: str) -> None:
        """
        Send text followed by CR-LF.

        Raises:
            TransportError: If the transport rejects the write
        """
        self.log.debug(f"AT: write: {text}")
        data = (text + "\r\n").encode("utf-8")
        written = self.transport.write(data)
        if not written:
            raise TransportError(f"Serial: failed to write: {text}", command=text)

    def read(self) -> str:
        """
        Read one reply.

        Returns:
            Reply with surrounding whitespace trimmed and every CR/LF run
            collapsed to a single line feed

        Raises:
            ATTimeoutError: If nothing arrives within the timeout
            TransportError: If the transport read fails
        """
        data = self.transport.read(self.buffer_size)
        if not data:
            raise ATTimeoutError("Serial: failed to read: no reply within timeout")

        value = data.decode("utf-8", errors="ignore").strip()
        value = _CRLF_RUN.sub("\n", value)
        self.log.debug(f"AT: read: {value}")
        return value

    def drain(self) -> None:
        """Discard any stale input."""
        self.transport.reset_input_buffer()

    def close(self) -> None:
        """Close the underlying transport."""
        self.transport.close()
