"""
Network interface synchronizer.

Mirrors the PDP context addresses onto the host interface the modem
exposes (usually an RNDIS device) and installs the default route.
"""

import ipaddress
import logging
from typing import TYPE_CHECKING

from ..core.netlink import NetLink
from ..parsers.address import AddressListParser, as_ip_address
from ..exceptions import NetLinkError, NetworkError

if TYPE_CHECKING:
    from ..core import ModemCore

logger = logging.getLogger(__name__)


class NetDevSynchronizer:
    """
    Reconciles a host interface with the modem's data session.

    Only IPv4 is configured statically; IPv6 is left to DHCPv6.
    """

    def __init__(self, modem_core: "ModemCore", netlink: NetLink) -> None:
        """
        Initialize synchronizer.

        Args:
            modem_core: ModemCore instance for AT command execution
            netlink: Host network link control
        """
        self.modem = modem_core
        self.netlink = netlink
        self._address_parser = AddressListParser()

    def flush(self, ifname: str) -> None:
        """
        Bring the interface down and remove its IPv4 addresses.

        Raises:
            NetLinkError: If the interface addresses cannot be listed
        """
        logger.info(f"Flushing {ifname}")
        self.netlink.set_link_state(ifname, up=False)

        for address in self.netlink.list_addresses(ifname):
            if address.version != 4:
                continue
            try:
                self.netlink.delete_address(ifname, address)
                logger.debug(f"Removed {address} from {ifname}")
            except NetLinkError as e:
                logger.warning(f"failed to remove address {address} from {ifname}: {e}")

    def setup(self, ifname: str) -> list[ipaddress.IPv4Interface]:
        """
        Assign the PDP context IPv4 addresses to the interface and bring it up.

        An address that fails to parse or to be added is skipped; the
        remaining ones are still attempted.

        Returns:
            Addresses successfully added

        Raises:
            NetworkError: If the modem does not report its addresses
        """
        command = f"AT+CGPADDR={self.modem.cid}"
        response = self.modem.send(command)
        if not response.startswith(AddressListParser.PREFIX):
            raise NetworkError("Failed to get local net configuration.", command=command, response=response)

        logger.info(f"Connecting the modem to the network via {ifname} device.")

        added = []
        for token in self._address_parser.parse(response):
            try:
                address = ipaddress.ip_interface(as_ip_address(token, masked=True))
            except ValueError as e:
                logger.warning(f"failed to parse {token}: {e}")
                continue

            if address.version != 4:
                # IPv6 comes from DHCPv6
                continue

            try:
                self.netlink.add_address(ifname, address)
            except NetLinkError as e:
                logger.warning(f"failed to add address {address} to {ifname}: {e}")
                continue

            logger.info(f"{ifname} now has ip {address}")
            added.append(address)

        self.netlink.set_link_state(ifname, up=True)
        return added

    def set_route4(self, ifname: str) -> list[ipaddress.IPv4Address]:
        """
        Install a default route for every IPv4 address on the interface.

        The gateway is the address with its last octet set to 1.

        Returns:
            Gateways routes were added through

        Raises:
            NetLinkError: If listing addresses or adding a route fails
        """
        gateways = []
        for address in self.netlink.list_addresses(ifname):
            if address.version != 4:
                continue

            gateway = ipaddress.IPv4Address(address.ip.packed[:3] + b"\x01")
            self.netlink.add_default_route(ifname, gateway)
            logger.info(f"Added route to gw: {gateway}")
            gateways.append(gateway)

        return gateways
