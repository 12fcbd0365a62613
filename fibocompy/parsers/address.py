"""
PDP context address parsers.

The modem reports addresses as dotted decimal bytes: four bytes for IPv4,
sixteen for IPv6 ("32.1.13.184.0.0.0.0.0.0.0.0.0.0.0.1").
"""

import logging

from .base import ResponseParser, strip_prefix, unquote

logger = logging.getLogger(__name__)

IPV4_PREFIXLEN = 24
IPV6_PREFIXLEN = 64


def as_ip_address(token: str, masked: bool = False) -> str:
    """
    Convert a modem address token into textual IP form.

    Args:
        token: Address token, optionally quoted
        masked: Append the interface prefix length (/24 or /64)

    Returns:
        "10.45.0.2" or "2001:0db8:0000:0000:0000:0000:0000:0001" style text

    Raises:
        ValueError: If an IPv6 byte token is not a decimal number
    """
    token = unquote(token.strip())
    parts = token.split(".")
    if len(parts) == 4:
        return f"{token}/{IPV4_PREFIXLEN}" if masked else token

    ipv6 = ""
    for i, part in enumerate(parts):
        if i > 0 and i % 2 == 0:
            ipv6 += ":"
        ipv6 += f"{int(part):02x}"

    return f"{ipv6}/{IPV6_PREFIXLEN}" if masked else ipv6


def _address_tokens(line: str, prefix: str) -> list[str]:
    payload = strip_prefix(line, prefix)
    if payload is None:
        return []
    # First token is the context id
    return [token for token in payload.split(",")[1:] if unquote(token.strip())]


class AddressListParser(ResponseParser[list[str]]):
    """Parser for AT+CGPADDR=<cid> reply."""

    PREFIX = "+CGPADDR: "

    def parse(self, reply: str) -> list[str]:
        """
        Parse AT+CGPADDR reply into raw address tokens.

        Expected format: '+CGPADDR: 5,"10.45.0.2","32.1.13.184.0.0.0.0.0.0.0.0.0.0.0.1"'
        """
        return _address_tokens(reply.split("\n")[0], self.PREFIX)


class DNSParser(ResponseParser[list[str]]):
    """Parser for AT+GTDNS=<cid> reply."""

    PREFIX = "+GTDNS: "

    def parse(self, reply: str) -> list[str]:
        """
        Parse AT+GTDNS reply into DNS server addresses.

        Expected format, one line per address family:
            +GTDNS: 5,"10.74.210.210","10.74.210.211"
            +GTDNS: 5,"32.1.72.96...","32.1.72.96..."
        """
        servers = []
        for line in reply.split("\n"):
            for token in _address_tokens(line.strip(), self.PREFIX):
                try:
                    servers.append(as_ip_address(token))
                except ValueError as e:
                    logger.warning(f"Skipping DNS address {token}: {e}")
        return servers
