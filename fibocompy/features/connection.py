"""
Data connection manager.

Drives the PDP context state machine (disconnected <-> connected) and keeps
the host interface in step with it.
"""

import logging
import time
from typing import TYPE_CHECKING, Optional

from .device_info import DeviceManager
from .netdev import NetDevSynchronizer
from ..core.netlink import NetLink
from ..exceptions import NetworkError, PreconditionError

if TYPE_CHECKING:
    from ..core import ModemCore

logger = logging.getLogger(__name__)

# The modem state does not converge with the OK of AT+CGACT
CONTEXT_SETTLE_DELAY = 5.0


class ConnectionManager:
    """
    Manages the data connection.

    Asking for the state the modem is already in is an error; check
    is_connected() first.
    """

    def __init__(
        self,
        modem_core: "ModemCore",
        netlink: NetLink,
        device: Optional[DeviceManager] = None
    ) -> None:
        """
        Initialize connection manager.

        Args:
            modem_core: ModemCore instance for AT command execution
            netlink: Host network link control
            device: DeviceManager used to unlock the SIM
        """
        self.modem = modem_core
        self.netlink = netlink
        self.device = device or DeviceManager(modem_core)
        self.netdev = NetDevSynchronizer(modem_core, netlink)

        logger.debug("Initialized ConnectionManager")

    def is_connected(self) -> bool:
        """
        Check whether the PDP context has an address.

        Returns:
            True unless AT+CGPADDR reports an error

        Raises:
            ATCommandError: If the reply starts with ERROR
        """
        response = self.modem.send(f"AT+CGPADDR={self.modem.cid}")
        return "ERROR" not in response

    def set_apn(self, apn: str) -> None:
        """Define the PDP context (dual stack) with the given APN."""
        logger.info(f"Setting APN {apn}")
        self.modem.send(f'AT+CGDCONT={self.modem.cid},"IPV4V6","{apn}"')

    def set_context(self, enable: bool) -> None:
        """
        Activate or deactivate the PDP context and wait for it to settle.
        """
        state = 1 if enable else 0
        logger.info(f"{'Activating' if enable else 'Deactivating'} PDP context {self.modem.cid}")
        self.modem.send(f"AT+CGACT={state},{self.modem.cid}", keep_ok=True)
        time.sleep(CONTEXT_SETTLE_DELAY)

    def connect(self, netdev: str, apn: str, pin: Optional[str] = None) -> None:
        """
        Bring the data connection up and configure the host interface.

        Args:
            netdev: Host interface exposed by the modem (e.g., "usb0")
            apn: Access Point Name
            pin: SIM PIN, needed only when the SIM is locked

        Raises:
            PreconditionError: Missing APN or PIN, or already connected
            NetLinkError: If the interface does not exist
            SIMError: If the PIN does not unlock the SIM
            NetworkError: If the context does not come up

        Example:

        .. code-block:: python

            if not modem.connection.is_connected():
                modem.connection.connect("usb0", apn="internet")
        """
        if not apn:
            raise PreconditionError("Cannot connect without an apn.")
        self._check_netdev(netdev)

        if self.is_connected():
            raise PreconditionError("Modem already connected.")

        self.device.set_sim_pin(pin)
        self.set_apn(apn)
        self.set_context(True)

        if not self.is_connected():
            raise NetworkError("Failed to connect.", command=f"AT+CGACT=1,{self.modem.cid}")

        self.netdev.flush(netdev)
        self.netdev.setup(netdev)
        logger.info("Connected")

    def disconnect(self, netdev: str) -> None:
        """
        Bring the data connection down and flush the host interface.

        Raises:
            PreconditionError: If already disconnected
            NetLinkError: If the interface does not exist
            NetworkError: If the context does not go down
        """
        self._check_netdev(netdev)

        if not self.is_connected():
            raise PreconditionError("Modem already disconnected.")

        self.set_context(False)

        if self.is_connected():
            raise NetworkError("Failed to disconnect.", command=f"AT+CGACT=0,{self.modem.cid}")

        self.netdev.flush(netdev)
        logger.info("Disconnected")

    def add_default_route(self, netdev: str) -> None:
        """Install the IPv4 default route through the modem."""
        self.netdev.set_route4(netdev)

    def _check_netdev(self, netdev: str) -> None:
        if not netdev:
            raise PreconditionError("failed to find netdev. please define it using --netdev")
        self.netlink.check_link(netdev)
