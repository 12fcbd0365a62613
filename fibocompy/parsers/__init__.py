"""
Response parsers for AT command replies.

Provides type-safe parsing of modem replies into structured data.
"""

from .base import ResponseParser
from .network import (
    SignalParser,
    RegistrationParser,
    OperatorParser,
    BandConfigurationParser,
    band_label,
    rat_label,
    preferred_act_label,
)
from .device import QuotedValueParser, TemperatureParser, TEMPERATURE_SENSORS
from .address import AddressListParser, DNSParser, as_ip_address
from .sms import SMSListParser, decode_sms

__all__ = [
    "ResponseParser",
    "SignalParser",
    "RegistrationParser",
    "OperatorParser",
    "BandConfigurationParser",
    "band_label",
    "rat_label",
    "preferred_act_label",
    "QuotedValueParser",
    "TemperatureParser",
    "TEMPERATURE_SENSORS",
    "AddressListParser",
    "DNSParser",
    "as_ip_address",
    "SMSListParser",
    "decode_sms",
]
