"""
Base parser classes and utilities.

Provides reusable parsing functionality for AT command replies.
"""

import logging
from abc import ABC, abstractmethod
from typing import TypeVar, Generic, Optional

logger = logging.getLogger(__name__)

T = TypeVar('T')


class ResponseParser(ABC, Generic[T]):
    """
    Abstract base class for reply parsers.

    Parsers convert raw AT command replies into typed data structures.
    A reply of unexpected shape degrades to an empty or "unknown" value
    instead of raising.
    """

    @abstractmethod
    def parse(self, reply: str) -> T:
        """
        Parse AT command reply.

        Args:
            reply: Normalized reply text (lines separated by "\\n")

        Returns:
            Parsed data structure
        """
        pass


def strip_prefix(reply: str, prefix: str) -> Optional[str]:
    """Return reply without prefix, or None when the prefix is absent."""
    if not reply.startswith(prefix):
        return None
    return reply[len(prefix):]


def unquote(value: str) -> str:
    """Trim surrounding double quotes."""
    return value.strip('"')


def to_int(value: str) -> Optional[int]:
    """Parse a decimal field, None when it is not a number."""
    try:
        return int(value.strip())
    except ValueError:
        return None
