"""
Network-specific response parsers.

Parses replies for signal, registration, operator and band commands.
"""

import logging

from .base import ResponseParser, strip_prefix, unquote, to_int
from ..types import Signal, BandConfiguration

logger = logging.getLogger(__name__)

RAT_LABELS = {
    1: "UMTS",
    2: "LTE",
    4: "LTE/UMTS",
    10: "Automatic",
    14: "NR-RAN",
    16: "NR-RAN/WCDMA",
    17: "NR-RAN/LTE",
    20: "NR-RAN/WCDMA/LTE",
}

PREFERRED_ACT_LABELS = {
    2: "WCDMA",
    3: "LTE",
    6: "NR-RAN",
}

# (first code, last code, offset, label prefix)
BAND_RANGES = (
    (1, 10, 0, "UMTS"),
    (101, 171, 100, "LTE"),
    (501, 509, 500, "NR"),
    (5010, 5099, 5000, "NR"),
    (50100, 50512, 50000, "NR"),
)


def _lookup_label(table: dict[int, str], raw: str) -> str:
    code = to_int(raw)
    if code is None:
        return f"Unknown ({raw.strip()})"
    if code in table:
        return f"{table[code]} ({code})"
    return f"Unknown ({code})"


def rat_label(raw: str) -> str:
    """Label a GTACT radio access technology code, e.g. "17" -> "NR-RAN/LTE (17)"."""
    return _lookup_label(RAT_LABELS, raw)


def preferred_act_label(raw: str) -> str:
    """Label a GTACT preferred technology code, e.g. "6" -> "NR-RAN (6)"."""
    return _lookup_label(PREFERRED_ACT_LABELS, raw)


def band_label(raw: str) -> str:
    """
    Label a GTACT band code.

    UMTS, LTE and the three NR numbering schemes use disjoint code ranges;
    a code outside all of them is returned as is.
    """
    code = to_int(raw)
    if code is None:
        return raw.strip()
    for first, last, offset, name in BAND_RANGES:
        if first <= code <= last:
            return f"{name}_{code - offset}"
    return str(code)


class SignalParser(ResponseParser[Signal]):
    """Parser for AT+CESQ (extended signal quality) reply."""

    PREFIX = "+CESQ: "

    def parse(self, reply: str) -> Signal:
        """
        Parse AT+CESQ reply.

        Expected format: "+CESQ: 99,99,255,255,255,255,40,60,50"

        The last three fields carry SS-RSRQ, SS-RSRP and SS-SINR codes; 255
        (or anything from 128 up) means not detectable.
        """
        payload = strip_prefix(reply, self.PREFIX)
        if payload is None:
            return Signal()

        fields = payload.split(",")
        if len(fields) != 9:
            return Signal()

        codes = [to_int(f) for f in fields[6:9]]
        if None in codes:
            logger.warning(f"Non-numeric signal fields: {reply}")
            return Signal()
        rsrq, rsrp, sinr = codes

        return Signal(
            rsrq=rsrq * 0.5 - 43 if rsrq < 128 else 0.0,
            rsrp=rsrp - 156 if rsrp < 128 else 0,
            sinr=sinr * 0.5 - 23 if sinr < 128 else 0.0,
        )


class RegistrationParser(ResponseParser[bool]):
    """Parser for AT+C5GREG?/AT+CEREG? replies (prefix already stripped)."""

    def parse(self, reply: str) -> bool:
        """Return True unless the reply carries the "0," not-registered code."""
        return not reply.startswith("0,")


class OperatorParser(ResponseParser[str]):
    """Parser for AT+GTCURCAR? (current carrier) reply."""

    PREFIX = "+GTCURCAR: "

    def parse(self, reply: str) -> str:
        """
        Parse AT+GTCURCAR? reply.

        Expected format: '+GTCURCAR: 1,"Vodafone",...'
        """
        payload = strip_prefix(reply, self.PREFIX)
        if payload is None:
            return "Unknown"

        info = payload.split(",")
        if len(info) > 1:
            return unquote(info[1])
        return ""


class BandConfigurationParser(ResponseParser[BandConfiguration]):
    """Parser for AT+GTACT? reply (prefix already stripped)."""

    def parse(self, reply: str) -> BandConfiguration:
        """
        Parse AT+GTACT? payload.

        Expected format: "17,6,3,101,103,107,5041,50078"
        (RAT, preferred technology 1 and 2, then the enabled bands)
        """
        tokens = reply.split(",")
        head = tokens[:3] + [""] * (3 - len(tokens[:3]))

        return BandConfiguration(
            rat=rat_label(head[0]),
            preferred_act1=preferred_act_label(head[1]),
            preferred_act2=preferred_act_label(head[2]),
            bands=[band_label(token) for token in tokens[3:]],
        )
