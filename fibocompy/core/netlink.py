"""
Host network link abstraction.

Lists and changes interface addresses, link state and routes. The default
implementation drives iproute2 (``ip -j``); MockNetLink keeps state in memory.
"""

import ipaddress
import json
import logging
import subprocess
from abc import ABC, abstractmethod
from typing import Union

from ..exceptions import NetLinkError

logger = logging.getLogger(__name__)

IPInterface = Union[ipaddress.IPv4Interface, ipaddress.IPv6Interface]


class NetLink(ABC):
    """Abstract base class for host network link control."""

    @abstractmethod
    def check_link(self, ifname: str) -> None:
        """
        Look an interface up by name.

        Raises:
            NetLinkError: If the interface does not exist
        """
        pass

    @abstractmethod
    def list_addresses(self, ifname: str) -> list[IPInterface]:
        """Return every IPv4 and IPv6 address configured on the interface."""
        pass

    @abstractmethod
    def add_address(self, ifname: str, address: IPInterface) -> None:
        """Add an address with its prefix length to the interface."""
        pass

    @abstractmethod
    def delete_address(self, ifname: str, address: IPInterface) -> None:
        """Remove an address from the interface."""
        pass

    @abstractmethod
    def set_link_state(self, ifname: str, up: bool) -> None:
        """Bring the interface up or down."""
        pass

    @abstractmethod
    def add_default_route(self, ifname: str, gateway: ipaddress.IPv4Address) -> None:
        """Install a default route through gateway on the interface."""
        pass


class IPRouteNetLink(NetLink):
    """NetLink implementation on top of the iproute2 ``ip`` command."""

    def __init__(self, ip_command: str = "ip") -> None:
        """
        Initialize iproute2 link control.

        Args:
            ip_command: Path or name of the ip(8) executable
        """
        self.ip_command = ip_command

    def _run(self, *args: str) -> str:
        """Run ip(8) and return its standard output."""
        cmd = [self.ip_command, *args]
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=True)
        except subprocess.CalledProcessError as e:
            raise NetLinkError(
                f"{' '.join(cmd)} failed: {e.stderr.strip() or e.returncode}"
            ) from e
        except OSError as e:
            raise NetLinkError(f"Failed to run {self.ip_command}: {e}") from e
        return result.stdout

    def check_link(self, ifname: str) -> None:
        try:
            self._run("-j", "link", "show", "dev", ifname)
        except NetLinkError as e:
            raise NetLinkError(f"failed to get netdev {ifname}: {e}") from e

    def list_addresses(self, ifname: str) -> list[IPInterface]:
        output = self._run("-j", "addr", "show", "dev", ifname)
        try:
            links = json.loads(output or "[]")
        except json.JSONDecodeError as e:
            raise NetLinkError(f"Unreadable address list for {ifname}: {e}") from e

        addresses = []
        for link in links:
            for info in link.get("addr_info", []):
                if info.get("family") not in ("inet", "inet6"):
                    continue
                addresses.append(
                    ipaddress.ip_interface(f"{info['local']}/{info['prefixlen']}")
                )
        return addresses

    def add_address(self, ifname: str, address: IPInterface) -> None:
        self._run("addr", "add", address.with_prefixlen, "dev", ifname)

    def delete_address(self, ifname: str, address: IPInterface) -> None:
        self._run("addr", "del", address.with_prefixlen, "dev", ifname)

    def set_link_state(self, ifname: str, up: bool) -> None:
        self._run("link", "set", "dev", ifname, "up" if up else "down")

    def add_default_route(self, ifname: str, gateway: ipaddress.IPv4Address) -> None:
        self._run("route", "add", "default", "via", str(gateway), "dev", ifname)


class MockNetLink(NetLink):
    """
    In-memory NetLink for testing.

    Keeps addresses, link state and routes per interface and records
    every mutating call in ``calls``.
    """

    def __init__(self, interfaces: tuple[str, ...] = ("usb0",)) -> None:
        self.addresses: dict[str, list[IPInterface]] = {name: [] for name in interfaces}
        self.link_up: dict[str, bool] = {name: False for name in interfaces}
        self.routes: list[tuple[str, ipaddress.IPv4Address]] = []
        self.calls: list[tuple] = []
        self.fail_add: set[str] = set()
        self.fail_route = False

    def _lookup(self, ifname: str) -> list[IPInterface]:
        if ifname not in self.addresses:
            raise NetLinkError(f"failed to get netdev {ifname}: no such device")
        return self.addresses[ifname]

    def check_link(self, ifname: str) -> None:
        self._lookup(ifname)

    def list_addresses(self, ifname: str) -> list[IPInterface]:
        return list(self._lookup(ifname))

    def add_address(self, ifname: str, address: IPInterface) -> None:
        self.calls.append(("add", ifname, address))
        if str(address.ip) in self.fail_add:
            raise NetLinkError(f"addr add {address} failed: File exists")
        self._lookup(ifname).append(address)

    def delete_address(self, ifname: str, address: IPInterface) -> None:
        self.calls.append(("del", ifname, address))
        self._lookup(ifname).remove(address)

    def set_link_state(self, ifname: str, up: bool) -> None:
        self.calls.append(("up" if up else "down", ifname))
        self._lookup(ifname)
        self.link_up[ifname] = up

    def add_default_route(self, ifname: str, gateway: ipaddress.IPv4Address) -> None:
        self.calls.append(("route", ifname, gateway))
        if self.fail_route:
            raise NetLinkError(f"route add default via {gateway} failed: Network is unreachable")
        self.routes.append((ifname, gateway))
