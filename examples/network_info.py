"""
Network information example.

Demonstrates band, temperature and DNS queries.
"""

from fibocompy import FibocomModem

# Replace with your serial port
PORT = "/dev/ttyUSB2"


def main():
    """Main function."""
    print("FibocomPy - Network Information\n")

    with FibocomModem(port=PORT) as modem:
        print("=== Bands ===")
        bands = modem.network.get_bands()
        print(f"RAT: {bands.rat}")
        print(f"Preferred: {bands.preferred_act1}, {bands.preferred_act2}")
        print(f"Bands: {', '.join(bands.bands)}")

        print("\n=== Temperatures ===")
        for sensor, celsius in modem.device.get_temperatures().items():
            print(f"{sensor}: {celsius:.3f}")

        if modem.connection.is_connected():
            print("\n=== DNS ===")
            for server in modem.network.get_dns():
                print(server)


if __name__ == "__main__":
    main()
