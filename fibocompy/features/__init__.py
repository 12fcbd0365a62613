"""
Feature managers for modem functionality.

Provides high-level managers for different modem capabilities:
- DeviceManager: Identity, firmware, SIM PIN, temperatures
- NetworkManager: Registration, signal, operator, bands, DNS
- ConnectionManager: PDP context and host interface state
- NetDevSynchronizer: Host interface addresses and routes
- SMSManager: Stored SMS listing
- TelemetryAggregator / SignalMonitor: Snapshots and live signal
"""

from .device_info import DeviceManager
from .network import NetworkManager
from .netdev import NetDevSynchronizer
from .connection import ConnectionManager
from .sms import SMSManager
from .telemetry import TelemetryAggregator, SignalMonitor

__all__ = [
    "DeviceManager",
    "NetworkManager",
    "NetDevSynchronizer",
    "ConnectionManager",
    "SMSManager",
    "TelemetryAggregator",
    "SignalMonitor",
]
