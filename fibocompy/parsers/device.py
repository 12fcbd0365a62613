"""
Device-specific response parsers.

Parses replies for identity and temperature sensor commands.
"""

import logging

from .base import ResponseParser, strip_prefix, unquote, to_int

logger = logging.getLogger(__name__)

# Sensor names in AT+GTSENRDTEMP index order (index 1 is "soc_max")
TEMPERATURE_SENSORS = (
    "soc_max",
    "cpu_little0",
    "cpu_little1",
    "cpu_little2",
    "cpu_little3",
    "gpu0",
    "gpu1",
    "dramc",
    "mmsys",
    "md_5g",
    "md_4g",
    "md_3g",
    "soc_dram_ntc",
    "ltepa_ntc",
    "nrpa_ntc",
    "rf_ntc",
    "md_rf",
    "conn_gps",
    "pmic",
    "pmic_vcore",
    "pmic_vproc",
    "pmic_vgpu",
    "unknown",
)


class QuotedValueParser(ResponseParser[str]):
    """Parser for single quoted values such as '+GTAPPVER: "81600.0000.00.29.21.23"'."""

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix

    def parse(self, reply: str) -> str:
        payload = strip_prefix(reply, self.prefix)
        if payload is None:
            payload = reply
        return unquote(payload)


class TemperatureParser(ResponseParser[dict[str, float]]):
    """Parser for AT+GTSENRDTEMP=0 (all temperature sensors) reply."""

    PREFIX = "+GTSENRDTEMP: "

    def parse(self, reply: str) -> dict[str, float]:
        """
        Parse AT+GTSENRDTEMP=0 reply.

        Expected format, one line per sensor:
            +GTSENRDTEMP: 1,43250
            +GTSENRDTEMP: 2,41870

        Values are millidegrees Celsius. Lines that do not match or point
        outside the sensor catalog are skipped.
        """
        temperatures: dict[str, float] = {}

        for line in reply.split("\n"):
            line = line.strip()
            payload = strip_prefix(line, self.PREFIX)
            if payload is None:
                logger.warning(f"Bad response: {line}")
                continue

            tokens = payload.split(",")
            index = to_int(tokens[0])
            value = to_int(tokens[1]) if len(tokens) > 1 else None
            if index is None or value is None:
                logger.warning(f"Bad response: {line}")
                continue

            index -= 1
            if index < 0 or index >= len(TEMPERATURE_SENSORS):
                logger.warning(f"Bad index {index}: {line}")
                continue

            temperatures[TEMPERATURE_SENSORS[index]] = value / 1000.0

        return temperatures
