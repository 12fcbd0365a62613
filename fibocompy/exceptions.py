"""
Exceptions for FibocomPy library.

Every failure carries an ErrorKind so callers can decide whether to abort
or continue without inspecting the concrete class.
"""

from typing import Optional

from .types import ErrorKind


class FibocomError(Exception):
    """
    Base exception for Fibocom modem errors.

    All FibocomPy exceptions inherit from this class.
    """

    kind = ErrorKind.PROTOCOL

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        response: Optional[str] = None
    ) -> None:
        """
        Initialize exception with context.

        Args:
            message: Error description
            command: AT command that caused the error (if applicable)
            response: Raw modem reply (if applicable)
        """
        self.command = command
        self.response = response
        super().__init__(message)

    def __str__(self) -> str:
        """Format error message with context."""
        parts = [super().__str__()]

        if self.command:
            parts.append(f"Command: {self.command}")

        if self.response:
            parts.append(f"Response: {self.response}")

        return " | ".join(parts)


class TransportError(FibocomError):
    """
    Raised when the serial channel fails to read or write.

    This indicates:
    - Serial port issues
    - Device unplugged
    - Hardware communication failure
    """

    kind = ErrorKind.TRANSPORT


class ATTimeoutError(TransportError):
    """
    Raised when no reply arrives within the channel timeout.

    A reply is expected after every request, so silence is a transport fault.
    """
    pass


class ATCommandError(FibocomError):
    """
    Raised when the modem answers a command with ERROR.

    The raw reply (including any CME detail) is kept verbatim in ``response``.
    """
    pass


class NetworkError(FibocomError):
    """
    Raised when the modem does not reach the requested data connection state.

    This indicates:
    - PDP context failed to activate or deactivate
    - Local address configuration missing
    """
    pass


class PreconditionError(FibocomError):
    """
    Raised when an operation is requested in a state that forbids it.

    No AT command is issued for the failing operation.
    """

    kind = ErrorKind.PRECONDITION


class SIMError(PreconditionError):
    """
    Raised when the SIM card cannot be unlocked.
    """
    pass


class ConfigError(PreconditionError):
    """
    Raised when the session configuration is invalid or unreadable.
    """
    pass


class NetLinkError(FibocomError):
    """
    Raised when the host network stack rejects a link, address or route change.
    """

    kind = ErrorKind.NETLINK
