"""
Device information manager.

Handles device-related operations: identity, firmware, SIM PIN, temperatures.
"""

import logging
from typing import TYPE_CHECKING, Optional

from ..parsers.device import QuotedValueParser, TemperatureParser
from ..exceptions import PreconditionError, SIMError

if TYPE_CHECKING:
    from ..core import ModemCore

logger = logging.getLogger(__name__)

SIM_READY = "+CPIN: READY"


class DeviceManager:
    """
    Manages device information and status.

    Provides methods for querying device identity, firmware and sensors,
    and for unlocking the SIM card.
    """

    def __init__(self, modem_core: "ModemCore") -> None:
        """
        Initialize device manager.

        Args:
            modem_core: ModemCore instance for AT command execution
        """
        self.modem = modem_core

        # Parsers
        self._firmware_parser = QuotedValueParser("+GTAPPVER: ")
        self._serial_parser = QuotedValueParser("+CFSN: ")
        self._version_parser = QuotedValueParser("+GTPKGVER: ")
        self._temperature_parser = TemperatureParser()

        logger.debug("Initialized DeviceManager")

    def get_firmware_version(self) -> str:
        """
        Get application firmware version.

        Example:

        .. code-block:: python

            firmware = modem.device.get_firmware_version()
            print(f"Firmware: {firmware}")
        """
        logger.info("Getting firmware version")
        firmware = self._firmware_parser.parse(self.modem.send("AT+GTAPPVER?"))
        logger.debug(f"Firmware: {firmware}")
        return firmware

    def get_serial_number(self) -> str:
        """Get factory serial number."""
        logger.info("Getting serial number")
        serial_number = self._serial_parser.parse(self.modem.send("AT+CFSN"))
        logger.debug(f"Serial number: {serial_number}")
        return serial_number

    def get_package_version(self) -> str:
        """Get firmware package version."""
        logger.info("Getting package version")
        version = self._version_parser.parse(self.modem.send("AT+GTPKGVER?"))
        logger.debug(f"Package version: {version}")
        return version

    def get_imei(self) -> str:
        """
        Get device IMEI (International Mobile Equipment Identity).

        Returns:
            15-digit IMEI string
        """
        logger.info("Getting IMEI")
        imei = self.modem.send("AT+CGSN")
        logger.debug(f"IMEI: {imei}")
        return imei

    def has_sim_pin(self) -> bool:
        """
        Check whether the SIM card is unlocked.

        Returns:
            True if AT+CPIN? reports READY
        """
        return self.modem.send("AT+CPIN?") == SIM_READY

    def set_sim_pin(self, pin: Optional[str]) -> None:
        """
        Unlock the SIM card if it is locked.

        Args:
            pin: SIM PIN number

        Raises:
            PreconditionError: If the SIM is locked and no PIN was given
            SIMError: If the SIM is still locked after entering the PIN
        """
        if self.has_sim_pin():
            logger.debug("SIM already unlocked")
            return

        if not pin:
            raise PreconditionError("Modem requires SIM card PIN number.", command="AT+CPIN?")

        logger.info("Entering SIM PIN")
        self.modem.send(f'AT+CPIN="{pin}"')

        response = self.modem.send("AT+CPIN?")
        if response != SIM_READY:
            raise SIMError("SIM still locked after entering PIN", command="AT+CPIN?", response=response)

        logger.info("SIM unlocked")

    def get_temperatures(self) -> dict[str, float]:
        """
        Read every temperature sensor.

        Returns:
            Mapping of sensor name to degrees Celsius, in sensor order

        Example:

        .. code-block:: python

            for sensor, celsius in modem.device.get_temperatures().items():
                print(f"{sensor}: {celsius:.3f}")
        """
        logger.info("Reading temperature sensors")
        temperatures = self._temperature_parser.parse(self.modem.send("AT+GTSENRDTEMP=0"))
        logger.debug(f"Temperatures: {temperatures}")
        return temperatures

    def reset(self) -> str:
        """
        Restart the modem (AT+CFUN=1,1).

        The session is unusable afterwards; the modem drops off the bus.
        """
        logger.warning("Restarting modem")
        response = self.modem.send("AT+CFUN=1,1", keep_ok=True)
        logger.info(f"Restart requested: {response}")
        return response
