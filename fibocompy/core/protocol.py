"""
AT command protocol handler.

Issues one command at a time over a CommandChannel and interprets the
OK/ERROR framing of the reply.
"""

import logging
import re
import time
from typing import Optional

from .channel import CommandChannel
from ..exceptions import ATCommandError, ATTimeoutError

logger = logging.getLogger(__name__)

_OK_SUFFIX = re.compile(r"\n+OK")

# Delay between handshake probes while the modem is still settling
HANDSHAKE_BACKOFF = 1.0


class ATProtocol:
    """
    AT command protocol handler.

    Every command is a strict request/response pair; nothing is sent before
    the previous reply (or timeout) resolves.
    """

    def __init__(
        self,
        channel: CommandChannel,
        at_logger: Optional[logging.Logger] = None
    ) -> None:
        """
        Initialize AT protocol handler.

        Args:
            channel: CommandChannel owning the serial device
            at_logger: Logger receiving AT traffic at DEBUG level
        """
        self.channel = channel
        self.log = at_logger or logger

    def send(self, command: str, keep_ok: bool = False) -> str:
        """
        Send an AT command and return its reply.

        Args:
            command: Full AT command (e.g., "AT+CESQ")
            keep_ok: Keep the trailing OK marker in the reply

        Returns:
            Reply text; a bare "OK" becomes "" unless keep_ok is set

        Raises:
            ATCommandError: If the reply starts with ERROR
            TransportError: If the channel fails
        """
        self.channel.write(command)
        reply = self.channel.read()

        if not keep_ok:
            if reply == "OK":
                reply = ""
            else:
                reply = _OK_SUFFIX.sub("", reply)

        if reply.startswith("ERROR"):
            self.log.error(f"AT command {command} returned {reply}")
            raise ATCommandError("AT command failed", command=command, response=reply)

        return reply

    def sendex(self, command: str, prefix: str, keep_ok: bool = False) -> str:
        """
        Send an AT command and strip the expected reply prefix.

        Args:
            command: Full AT command (e.g., "AT+GTAPPVER?")
            prefix: Expected reply prefix (e.g., "+GTAPPVER: ")
            keep_ok: Keep the trailing OK marker in the reply

        Returns:
            Reply without prefix, or the whole reply when the prefix is absent
        """
        reply = self.send(command, keep_ok)
        if reply.startswith(prefix):
            return reply[len(prefix):]
        return reply

    def handshake(self) -> None:
        """
        Synchronize with the modem.

        Probes with a bare AT until it answers exactly OK, turning local echo
        off when the probe comes back echoed. There is no attempt limit: a
        silent (booting) modem is waited for. Verbose error reporting is enabled once
        the modem is ready.
        """
        logger.info("Synchronizing with modem")
        while True:
            self.channel.drain()
            try:
                result = self.send("AT", keep_ok=True)
            except ATTimeoutError:
                logger.debug("No reply to probe, modem still booting")
                result = ""
            if result == "OK":
                break
            if result == "AT\nOK":
                logger.info("Modem echoes commands, disabling echo")
                try:
                    self.send("ATE0")
                except ATTimeoutError:
                    logger.debug("No reply to ATE0, probing again")
            else:
                logger.debug(f"Unexpected probe reply: {result!r}")
            time.sleep(HANDSHAKE_BACKOFF)

        self.send("AT+CMEE=2")
        logger.info("Modem ready")
