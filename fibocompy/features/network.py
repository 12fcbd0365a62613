"""
Network manager.

Handles registration, signal quality, operator, bands and DNS queries.
"""

import logging
import time
from typing import TYPE_CHECKING

from ..types import Signal, RegistrationStatus, BandConfiguration
from ..parsers.network import (
    SignalParser,
    RegistrationParser,
    OperatorParser,
    BandConfigurationParser
)
from ..parsers.address import DNSParser

if TYPE_CHECKING:
    from ..core import ModemCore

logger = logging.getLogger(__name__)

# Band mask enabling every UMTS, LTE and NR band
ALL_BANDS_COMMAND = 'AT+EPBSEH="FF","FFFF","ffffffff","ffffffffffffffff"'

# The modem applies band changes asynchronously to the OK reply
BAND_SETTLE_DELAY = 5.0


class NetworkManager:
    """
    Manages network queries.

    Provides methods for registration, signal monitoring, operator and
    band configuration.
    """

    def __init__(self, modem_core: "ModemCore") -> None:
        """
        Initialize network manager.

        Args:
            modem_core: ModemCore instance for AT command execution
        """
        self.modem = modem_core

        # Parsers
        self._signal_parser = SignalParser()
        self._registration_parser = RegistrationParser()
        self._operator_parser = OperatorParser()
        self._band_parser = BandConfigurationParser()
        self._dns_parser = DNSParser()

        logger.debug("Initialized NetworkManager")

    def get_signal(self) -> Signal:
        """
        Get 5G/LTE signal quality.

        Returns:
            Signal with received quality, power and SINR (0 when unknown)

        Example:

        .. code-block:: python

            signal = modem.network.get_signal()
            if signal.is_valid:
                print(f"Signal: {signal.rsrp} dBm")
            else:
                print("No signal")
        """
        logger.info("Getting signal quality")
        signal = self._signal_parser.parse(self.modem.send("AT+CESQ"))
        logger.debug(f"Signal: {signal}")
        return signal

    def get_registration_status(self) -> RegistrationStatus:
        """
        Get network registration, 5G taking priority over 4G.

        Both AT+C5GREG? and AT+CEREG? are always queried.

        Example:

        .. code-block:: python

            status = modem.network.get_registration_status()
            print(f"Net Type: {status.label}")
        """
        logger.info("Getting registration status")
        registered_5g = self._registration_parser.parse(
            self.modem.sendex("AT+C5GREG?", "+C5GREG: ")
        )
        registered_4g = self._registration_parser.parse(
            self.modem.sendex("AT+CEREG?", "+CEREG: ")
        )

        if registered_5g:
            status = RegistrationStatus.REGISTERED_5G
        elif registered_4g:
            status = RegistrationStatus.REGISTERED_4G
        else:
            status = RegistrationStatus.NOT_REGISTERED

        logger.debug(f"Registration status: {status.name}")
        return status

    def get_operator(self) -> str:
        """
        Get current network operator name.

        Returns:
            Operator name, "" when not reported, "Unknown" on unexpected reply
        """
        logger.info("Getting current operator")
        operator = self._operator_parser.parse(self.modem.send("AT+GTCURCAR?"))
        logger.debug(f"Operator: {operator}")
        return operator

    def get_bands(self) -> BandConfiguration:
        """
        Get active RAT, preferred technologies and enabled bands.

        Example:

        .. code-block:: python

            config = modem.network.get_bands()
            print(config.rat, config.bands)
        """
        logger.info("Getting band configuration")
        bands = self._band_parser.parse(self.modem.sendex("AT+GTACT?", "+GTACT: "))
        logger.debug(f"Band configuration: {bands}")
        return bands

    def enable_all_bands(self) -> None:
        """Enable every supported band and wait for the modem to apply it."""
        logger.info("Enabling all bands")
        self.modem.sendex(ALL_BANDS_COMMAND, "+CIREPI")
        time.sleep(BAND_SETTLE_DELAY)

    def get_dns(self) -> list[str]:
        """
        Get DNS servers assigned to the PDP context.

        Returns:
            DNS server addresses (IPv4 and IPv6), without prefix length
        """
        logger.info("Getting DNS configuration")
        servers = self._dns_parser.parse(self.modem.send(f"AT+GTDNS={self.modem.cid}"))
        logger.debug(f"DNS servers: {servers}")
        return servers
