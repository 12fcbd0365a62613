"""
Signal quality monitoring example.

Demonstrates continuous signal sampling with SignalMonitor.
"""

from fibocompy import FibocomModem
from fibocompy.features import SignalMonitor

# Replace with your serial port
PORT = "/dev/ttyUSB2"


def main():
    """Main function."""
    print("FibocomPy - Signal Quality Monitor\n")

    with FibocomModem(port=PORT) as modem:
        print(f"Registration: {modem.network.get_registration_status().label}")
        print("Monitoring signal quality (Ctrl+C to stop)...\n")

        monitor = SignalMonitor(modem.network, interval=5.0)
        try:
            for timestamp, signal in monitor.samples():
                print(
                    f"{timestamp:%H:%M:%S} RSRP={signal.rsrp} dBm "
                    f"RSRQ={signal.rsrq:.1f} dB SINR={signal.sinr:.1f} dB"
                )
                print(f"Best of last {len(monitor.history)}: {max(monitor.history)} dBm")
                print("-" * 40)

        except KeyboardInterrupt:
            print("\nStopping monitor...")


if __name__ == "__main__":
    main()
