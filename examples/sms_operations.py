"""
SMS example.

Demonstrates listing the messages stored on the modem.
"""

from fibocompy import FibocomModem

# Replace with your serial port
PORT = "/dev/ttyUSB2"


def main():
    """Main function."""
    print("FibocomPy - SMS Example\n")

    with FibocomModem(port=PORT) as modem:
        messages = modem.sms.list_messages()
        print(f"Found {len(messages)} messages\n")

        for msg in messages:
            print(f"From: {msg.sender}")
            print(f"Message: {msg.content}")
            print("-" * 40)


if __name__ == "__main__":
    main()
