"""
Telemetry aggregation.

Combines device and network queries into presentation-ready snapshots,
and samples the signal continuously for live monitoring.
"""

import logging
import time
from collections import deque
from datetime import datetime
from typing import Callable, Iterator, Optional

from .device_info import DeviceManager
from .network import NetworkManager
from ..types import DeviceInfo, Signal

logger = logging.getLogger(__name__)

SAMPLE_INTERVAL = 1.0
SAMPLE_WINDOW = 32


class TelemetryAggregator:
    """Builds DeviceInfo snapshots out of individual queries."""

    def __init__(self, device: DeviceManager, network: NetworkManager) -> None:
        self.device = device
        self.network = network

    def snapshot(self) -> DeviceInfo:
        """
        Query identity, SIM, registration, operator and signal.

        Returns:
            DeviceInfo snapshot
        """
        logger.info("Collecting device info")
        return DeviceInfo(
            firmware=self.device.get_firmware_version(),
            serial_number=self.device.get_serial_number(),
            version=self.device.get_package_version(),
            imei=self.device.get_imei(),
            has_sim=self.device.has_sim_pin(),
            net_status=self.network.get_registration_status(),
            operator=self.network.get_operator(),
            signal=self.network.get_signal(),
        )


class SignalMonitor:
    """
    Polls the signal once per second.

    Samples without a received power reading are dropped. The most recent
    SAMPLE_WINDOW power readings are kept in ``history``.
    """

    def __init__(
        self,
        network: NetworkManager,
        interval: float = SAMPLE_INTERVAL,
        window: int = SAMPLE_WINDOW
    ) -> None:
        self.network = network
        self.interval = interval
        self.history: deque[int] = deque(maxlen=window)

    def samples(self, limit: Optional[int] = None) -> Iterator[tuple[datetime, Signal]]:
        """
        Yield (timestamp, signal) pairs forever, or until limit samples.

        Args:
            limit: Stop after this many valid samples (None = never)
        """
        count = 0
        while limit is None or count < limit:
            signal = self.network.get_signal()
            if not signal.is_valid:
                logger.debug("No signal reading, waiting")
                time.sleep(self.interval)
                continue

            self.history.append(signal.rsrp)
            count += 1
            yield datetime.now(), signal
            time.sleep(self.interval)

    def run(self, render: Callable[[datetime, Signal, list[int]], None]) -> None:
        """Sample until interrupted, handing every sample to render."""
        for timestamp, signal in self.samples():
            render(timestamp, signal, list(self.history))
