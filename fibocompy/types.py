"""
Data types and structures for FibocomPy.

Provides type-safe representations of modem data.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum, IntEnum


class ErrorKind(Enum):
    """Failure categories carried by every FibocomError."""
    TRANSPORT = "transport"
    PROTOCOL = "protocol"
    PRECONDITION = "precondition"
    NETLINK = "netlink"


class RegistrationStatus(IntEnum):
    """Network registration, 5G taking priority over 4G."""
    NOT_REGISTERED = 0
    REGISTERED_4G = 1
    REGISTERED_5G = 2

    @property
    def label(self) -> str:
        """Short human label for the registration."""
        return {
            RegistrationStatus.NOT_REGISTERED: "Not connected",
            RegistrationStatus.REGISTERED_4G: "4G",
            RegistrationStatus.REGISTERED_5G: "5G",
        }[self]


@dataclass(frozen=True)
class Signal:
    """
    Signal quality from AT+CESQ (SS-RSRQ, SS-RSRP, SS-SINR).

    A field equal to 0 means the modem reported the value as not known.
    """
    rsrq: float = 0.0   # Received quality in dB
    rsrp: int = 0       # Received power in dBm
    sinr: float = 0.0   # Signal to interference and noise ratio in dB

    @property
    def is_valid(self) -> bool:
        """Check if the received power was reported."""
        return self.rsrp != 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class BandConfiguration:
    """Active RAT and band configuration from AT+GTACT?"""
    rat: str
    preferred_act1: str
    preferred_act2: str
    bands: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class SMSMessage:
    """Decoded SMS message."""
    sender: str     # Originating phone number
    content: str    # Message text

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DeviceInfo:
    """
    Device identity and radio state snapshot.

    Composed by TelemetryAggregator from several independent queries.
    """
    firmware: str
    serial_number: str
    version: str
    imei: str
    has_sim: bool
    net_status: RegistrationStatus
    operator: str
    signal: Signal

    def to_dict(self) -> dict:
        """Flatten into a mapping of plain values for presentation."""
        return {
            "firmware": self.firmware,
            "serialnumber": self.serial_number,
            "version": self.version,
            "imei": self.imei,
            "has_sim": self.has_sim,
            "net_status": self.net_status.label,
            "operator": self.operator,
            "signal": self.signal.to_dict(),
        }
