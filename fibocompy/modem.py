"""
Main FibocomModem class.

User-facing API that coordinates all feature managers.
"""

import logging
from typing import Optional

from .core import ModemCore, SerialTransport, Transport, NetLink, IPRouteNetLink
from .core.channel import DEFAULT_BUFFER_SIZE
from .exceptions import ConfigError
from .features import (
    DeviceManager,
    NetworkManager,
    ConnectionManager,
    SMSManager,
    TelemetryAggregator,
)

logger = logging.getLogger(__name__)


class FibocomModem:
    """
    Main interface for Fibocom 5G modem control.

    Provides a high-level API for modem operations through feature managers:

    - device: Identity, firmware, SIM PIN and temperature sensors
    - network: Registration, signal quality, operator, bands, DNS
    - connection: PDP context and host interface configuration
    - sms: Stored SMS listing
    - telemetry: Device info snapshots

    Example usage with context manager:

    .. code-block:: python

        with FibocomModem(port="/dev/ttyUSB2") as modem:
            signal = modem.network.get_signal()
            print(f"Signal: {signal.rsrp} dBm")

            if not modem.connection.is_connected():
                modem.connection.connect("usb0", apn="internet")

    Example usage with manual lifecycle management:

    .. code-block:: python

        modem = FibocomModem(port="/dev/ttyUSB2")
        modem.start()
        # ... use modem ...
        modem.close()
    """

    def __init__(
        self,
        port: Optional[str] = None,
        transport: Optional[Transport] = None,
        baudrate: int = 115200,
        timeout: float = 0.3,
        cid: int = 5,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        netlink: Optional[NetLink] = None,
        at_logger: Optional[logging.Logger] = None,
        auto_start: bool = False
    ) -> None:
        """
        Initialize FibocomModem.

        Args:
            port: Serial port path (e.g., "/dev/ttyUSB2"). Either port or transport required.
            transport: Custom transport instance (for testing). Overrides port if provided.
            baudrate: Serial port baud rate (default: 115200)
            timeout: Serial read/write timeout in seconds (default: 0.3)
            cid: PDP context id (default: 5)
            buffer_size: Receive bound for a single reply in bytes (default: 2048)
            netlink: Host network link control (default: iproute2)
            at_logger: Logger receiving AT traffic at DEBUG level
            auto_start: Run the startup handshake immediately (default: False)

        Raises:
            ConfigError: If the session parameters are invalid
            TransportError: If serial port cannot be opened
        """
        if transport is None and not port:
            raise ConfigError("missing serial port")
        if baudrate < 1:
            raise ConfigError(f"invalid baud rate: {baudrate}")
        if timeout <= 0:
            raise ConfigError(f"invalid timeout: {timeout}")

        if transport is None:
            transport = SerialTransport(
                port=port,
                baudrate=baudrate,
                timeout=timeout
            )
            logger.info(f"Created serial transport for {port}")

        self._core = ModemCore(
            transport=transport,
            cid=cid,
            buffer_size=buffer_size,
            at_logger=at_logger
        )

        self.device = DeviceManager(self._core)
        self.network = NetworkManager(self._core)
        self.connection = ConnectionManager(
            self._core,
            netlink or IPRouteNetLink(),
            device=self.device
        )
        self.sms = SMSManager(self._core)
        self.telemetry = TelemetryAggregator(self.device, self.network)

        logger.info("Initialized FibocomModem")

        if auto_start:
            self.start()

    def start(self) -> None:
        """
        Synchronize with the modem (echo off, verbose errors).

        Must be called before using the modem (unless auto_start=True or using context manager).
        Blocks until the modem answers.
        """
        self._core.start()
        logger.info("Modem started")

    def close(self) -> None:
        """Close the modem connection."""
        self._core.close()
        logger.info("Modem closed")

    def send_raw_at(self, cmd: str, keep_ok: bool = True) -> str:
        """
        Send a raw AT command.

        For advanced users who need to send commands not covered by feature managers.

        Args:
            cmd: Full AT command (e.g., "AT+GTSENRDTEMP=1")
            keep_ok: Keep the trailing OK marker in the reply

        Returns:
            Normalized reply text

        Raises:
            ATCommandError: If command returns ERROR
            TransportError: If the serial channel fails
        """
        return self._core.send(cmd, keep_ok=keep_ok)

    @property
    def cid(self) -> int:
        """PDP context id of this session."""
        return self._core.cid

    @property
    def is_started(self) -> bool:
        """Check if the startup handshake completed."""
        return self._core.is_started()

    def __enter__(self):
        """
        Context manager entry.

        Automatically starts the modem if not already started.
        """
        if not self.is_started:
            self.start()
        return self

    def __exit__(self, *exc):
        """
        Context manager exit.

        Automatically closes the modem connection.
        """
        self.close()

    def __repr__(self) -> str:
        """String representation of modem."""
        status = "ready" if self.is_started else "unsynchronized"
        return f"<FibocomModem cid={self.cid} status={status}>"
