"""
Transport layer abstraction for modem communication.

Provides a byte-in/byte-out serial channel with dependency injection support.
"""

import logging
from abc import ABC, abstractmethod
import serial
from serial import SerialException

from ..exceptions import TransportError

logger = logging.getLogger(__name__)


class Transport(ABC):
    """Abstract base class for modem transport."""

    @abstractmethod
    def write(self, data: bytes) -> int:
        """
        Write data to the transport.

        Args:
            data: Bytes to write

        Returns:
            Number of bytes written

        Raises:
            TransportError: If write fails
        """
        pass

    @abstractmethod
    def read(self, size: int) -> bytes:
        """
        Read one reply from the transport.

        Blocks until data arrives or the read timeout elapses.

        Args:
            size: Maximum number of bytes to return

        Returns:
            Bytes read (empty on timeout)

        Raises:
            TransportError: If read fails
        """
        pass

    @abstractmethod
    def reset_input_buffer(self) -> None:
        """Discard pending, unread input."""
        pass

    @abstractmethod
    def is_open(self) -> bool:
        """Check if transport is open."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the transport."""
        pass


class SerialTransport(Transport):
    """Serial port transport implementation (8-N-1 framing)."""

    def __init__(
        self,
        port: str,
        baudrate: int = 115200,
        timeout: float = 0.3,
        inter_byte_timeout: float = 0.05
    ) -> None:
        """
        Initialize serial transport.

        Args:
            port: Serial port path (e.g., /dev/ttyUSB2)
            baudrate: Baud rate for serial communication
            timeout: Read and write timeout in seconds
            inter_byte_timeout: Silence after which a started reply is complete

        Raises:
            TransportError: If serial port cannot be opened
        """
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout

        try:
            self._serial = serial.Serial(
                port=port,
                baudrate=baudrate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                timeout=timeout,
                write_timeout=timeout,
                inter_byte_timeout=inter_byte_timeout
            )
            logger.info(f"Opened serial port {port} at {baudrate} baud")
        except SerialException as e:
            logger.error(f"Failed to open serial port {port}: {e}")
            raise TransportError(f"Failed to open serial port {port}: {e}") from e

    def write(self, data: bytes) -> int:
        """Write data to serial port."""
        try:
            written = self._serial.write(data)
            logger.debug(f"Wrote {written} bytes: {data}")
            return written
        except SerialException as e:
            logger.error(f"Serial write failed: {e}")
            raise TransportError(f"Serial: failed to write: {e}") from e

    def read(self, size: int) -> bytes:
        """Read up to size bytes from serial port."""
        try:
            data = self._serial.read(size)
            if data:
                logger.debug(f"Read {len(data)} bytes: {data}")
            return data
        except SerialException as e:
            logger.error(f"Serial read failed: {e}")
            raise TransportError(f"Serial: failed to read: {e}") from e

    def reset_input_buffer(self) -> None:
        """Clear the serial input buffer."""
        try:
            self._serial.reset_input_buffer()
            logger.debug("Reset input buffer")
        except SerialException as e:
            logger.error(f"Failed to reset input buffer: {e}")
            raise TransportError(f"Failed to reset input buffer: {e}") from e

    def is_open(self) -> bool:
        """Check if serial port is open."""
        return bool(self._serial and self._serial.is_open)

    def close(self) -> None:
        """Close the serial port."""
        if self._serial and self._serial.is_open:
            self._serial.close()
            logger.info(f"Closed serial port {self.port}")


class MockTransport(Transport):
    """
    Mock transport for testing.

    Every queued response is returned by exactly one read, framed the way
    the modem frames replies (CR-LF around each line).
    """

    def __init__(self) -> None:
        """Initialize mock transport."""
        self._open = True
        self._input_buffer: list[bytes] = []
        self._response_queue: list[bytes] = []
        self.written: list[bytes] = []
        logger.info("Initialized MockTransport")

    def add_response(self, lines: list[str]) -> None:
        """
        Queue a reply to be returned by the next unanswered read.

        Args:
            lines: List of reply lines (e.g., ["+CESQ: 99,99,255,255,20,50,40,60,30", "OK"])
        """
        data = "".join(f"\r\n{line}\r\n" for line in lines).encode("utf-8")
        self._response_queue.append(data)
        logger.debug(f"Added mock response: {lines}")

    def add_raw_response(self, data: bytes) -> None:
        """Queue raw reply bytes."""
        self._response_queue.append(data)

    def add_stale_input(self, data: bytes) -> None:
        """Simulate bytes left unread from an earlier exchange."""
        self._input_buffer.append(data)

    @property
    def commands(self) -> list[str]:
        """Written commands without their line terminator."""
        return [data.decode("utf-8").rstrip("\r\n") for data in self.written]

    def write(self, data: bytes) -> int:
        """Simulate writing data."""
        if not self._open:
            raise TransportError("MockTransport is closed")

        logger.debug(f"Mock write: {data}")
        self.written.append(data)
        return len(data)

    def read(self, size: int) -> bytes:
        """Return stale input first, then the next queued reply."""
        if not self._open:
            raise TransportError("MockTransport is closed")

        if self._input_buffer:
            return self._input_buffer.pop(0)[:size]

        if self._response_queue:
            result = self._response_queue.pop(0)[:size]
            logger.debug(f"Mock read: {result}")
            return result

        # No data available
        return b""

    def reset_input_buffer(self) -> None:
        """Clear stale input, queued replies are kept."""
        self._input_buffer.clear()
        logger.debug("Reset mock input buffer")

    def is_open(self) -> bool:
        """Check if mock transport is open."""
        return self._open

    def close(self) -> None:
        """Close mock transport."""
        self._open = False
        logger.info("Closed MockTransport")

    def clear_responses(self) -> None:
        """Clear all queued responses (useful for testing)."""
        self._response_queue.clear()
        logger.debug("Cleared mock response queue")
