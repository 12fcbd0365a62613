"""
Basic connection example.

Demonstrates opening the modem and printing device information.
"""

from fibocompy import FibocomModem, PreconditionError

# Replace with your serial port
PORT = "/dev/ttyUSB2"


def main():
    """Main function."""
    print("FibocomPy - Basic Connection Example\n")

    # The context manager runs the startup handshake and closes the port
    with FibocomModem(port=PORT) as modem:
        print("=== Device Information ===")
        info = modem.telemetry.snapshot()
        print(f"Firmware: {info.firmware}")
        print(f"Version: {info.version}")
        print(f"Serial number: {info.serial_number}")
        print(f"IMEI: {info.imei}")
        print(f"SIM ready: {info.has_sim}")

        print("\n=== Network ===")
        print(f"Net Type: {info.net_status.label}")
        print(f"Operator: {info.operator}")
        if info.signal.is_valid:
            print(f"Signal: {info.signal.rsrp} dBm")
        else:
            print("No signal detected")

        print("\n=== SIM ===")
        try:
            modem.device.set_sim_pin(None)
            print("SIM unlocked")
        except PreconditionError as e:
            print(f"SIM Error: {e}")

    print("\nConnection closed.")


if __name__ == "__main__":
    main()
