"""
Data connection example.

Demonstrates bringing the PDP context up, routing through it and tearing
it down again. Address and route changes need root privileges.
"""

from fibocompy import FibocomModem, FibocomError

# Replace with your serial port, interface and APN
PORT = "/dev/ttyUSB2"
NETDEV = "usb0"
APN = "internet"


def main():
    """Main function."""
    print("FibocomPy - Data Connection Example\n")

    with FibocomModem(port=PORT) as modem:
        try:
            if not modem.connection.is_connected():
                modem.connection.connect(NETDEV, APN)
                print(f"Connected via {NETDEV}")

            modem.connection.add_default_route(NETDEV)
            print("Default route added")

            input("Press Enter to disconnect...")
            modem.connection.disconnect(NETDEV)
            print("Disconnected")

        except FibocomError as e:
            print(f"Connection failed ({e.kind.value}): {e}")


if __name__ == "__main__":
    main()
