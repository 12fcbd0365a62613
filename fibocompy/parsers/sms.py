"""
SMS response parsers for AT commands.

Parses the PDU mode listing returned by AT+CMGL:

    +CMGL: 0,1,,24
    07911326040000F0040B911346610089F60000208062917314080CC8F71D14969741F977FD07
    +CMGL: 1,1,,23
    ...
"""

import logging

from .base import ResponseParser
from .pdu import PDUError, decode_sms_deliver
from ..types import SMSMessage

logger = logging.getLogger(__name__)


def decode_sms(pdu_hex: str) -> SMSMessage | None:
    """
    Decode one hex PDU line into an SMSMessage.

    Returns:
        SMSMessage, or None when the PDU cannot be decoded
    """
    try:
        decoded = decode_sms_deliver(pdu_hex)
    except PDUError as e:
        logger.warning(f"Skipping undecodable PDU {pdu_hex!r}: {e}")
        return None

    return SMSMessage(sender=decoded.sender, content=decoded.text)


class SMSListParser(ResponseParser[list[SMSMessage]]):
    """Parser for AT+CMGL (list messages, PDU mode) reply."""

    PREFIX = "+CMGL:"

    def parse(self, reply: str) -> list[SMSMessage]:
        """
        Parse AT+CMGL reply.

        Every line that is not an entry header is one PDU. A PDU that fails
        to decode is skipped; the rest of the listing is still returned.
        """
        if not reply.startswith(self.PREFIX + " "):
            return []

        messages = []
        for line in reply.split("\n"):
            line = line.strip()
            if not line or line.startswith(self.PREFIX):
                continue
            message = decode_sms(line)
            if message is not None:
                messages.append(message)

        return messages
