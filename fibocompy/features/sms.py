"""
SMS manager.

Lists received messages stored on the modem (PDU mode).
"""

import logging
from typing import TYPE_CHECKING

from ..types import SMSMessage
from ..parsers.sms import SMSListParser

if TYPE_CHECKING:
    from ..core import ModemCore

logger = logging.getLogger(__name__)

# AT+CMGL=4: all messages, read and unread, in PDU mode
LIST_ALL = 4


class SMSManager:
    """Manages SMS operations."""

    def __init__(self, modem_core: "ModemCore") -> None:
        """
        Initialize SMS manager.

        Args:
            modem_core: ModemCore instance for AT command execution
        """
        self.modem = modem_core
        self._list_parser = SMSListParser()

        logger.debug("Initialized SMSManager")

    def list_messages(self) -> list[SMSMessage]:
        """
        List every stored message.

        Messages whose PDU cannot be decoded are left out.

        Example:

        .. code-block:: python

            for msg in modem.sms.list_messages():
                print(msg.sender, msg.content)
        """
        logger.info("Listing SMS messages")
        messages = self._list_parser.parse(self.modem.send(f"AT+CMGL={LIST_ALL}"))
        logger.debug(f"Listed {len(messages)} messages")
        return messages
