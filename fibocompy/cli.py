"""
Command line front end for FibocomPy.

Runs one operation per invocation against a fresh modem session.
"""

import sys
import logging
from datetime import datetime
from typing import Optional

from .modem import FibocomModem
from .config import ModemConfig, load_config
from .features import SignalMonitor
from .output import format_record, format_list
from .types import Signal
from .version import __version__
from .exceptions import FibocomError, PreconditionError

logger = logging.getLogger(__name__)

MODES = (
    "restart", "graph", "sms", "info", "temp", "bands",
    "set_bands", "dns", "connect", "disconnect", "route",
)


class FibocomCLI:
    """Dispatches a single command line operation."""

    def __init__(self, config: ModemConfig, as_json: bool = False, debug: bool = False):
        """
        Initialize CLI.

        Args:
            config: Validated session configuration
            as_json: Print JSON instead of labeled lines
            debug: Log every AT command and reply
        """
        self.config = config
        self.as_json = as_json
        self.at_logger = logging.getLogger("fibocompy.at")
        if debug:
            self.at_logger.setLevel(logging.DEBUG)
        self.modem: Optional[FibocomModem] = None

    def run(self, mode: str, route: bool = False) -> int:
        """Open the session, run the operation, always release the port."""
        try:
            self.config.validate()
            self.modem = FibocomModem(
                port=self.config.serial,
                baudrate=self.config.baud,
                timeout=self.config.timeout_seconds,
                cid=self.config.context_id,
                at_logger=self.at_logger
            )
            self.modem.start()
            self._dispatch(mode, route)

        except FibocomError as e:
            logger.error(f"{e} ({e.kind.value})")
            return 1
        except KeyboardInterrupt:
            print()
        finally:
            if self.modem:
                self.modem.close()

        return 0

    def _dispatch(self, mode: str, route: bool) -> None:
        modem = self.modem

        if mode == "restart":
            modem.device.reset()
        elif mode == "graph":
            self._require_connection("Modem is not connected!")
            SignalMonitor(modem.network).run(self._render_signal)
        elif mode == "sms":
            messages = [msg.to_dict() for msg in modem.sms.list_messages()]
            self._print_list(messages)
        elif mode == "info":
            self._print_record(modem.telemetry.snapshot().to_dict())
        elif mode == "temp":
            self._print_record(modem.device.get_temperatures())
        elif mode == "bands":
            self._print_record(modem.network.get_bands().to_dict())
        elif mode == "set_bands":
            modem.network.enable_all_bands()
        elif mode == "dns":
            self._require_connection("Modem needs to be connected to retrieve the DNS configuration.")
            self._print_list(modem.network.get_dns())
        elif mode == "connect":
            modem.connection.connect(self.config.netdev, self.config.apn, self.config.simpin)
        elif mode == "disconnect":
            modem.connection.disconnect(self.config.netdev)

        if route and mode in ("connect", "route"):
            if not self.config.netdev:
                raise PreconditionError("failed to find netdev. please define it using --netdev")
            modem.connection.add_default_route(self.config.netdev)

    def _require_connection(self, message: str) -> None:
        if not self.modem.connection.is_connected():
            raise PreconditionError(message)

    def _print_record(self, record: dict) -> None:
        print(format_record(record, self.as_json))

    def _print_list(self, items: list) -> None:
        if items or self.as_json:
            print(format_list(items, self.as_json))

    @staticmethod
    def _render_signal(timestamp: datetime, signal: Signal, history: list[int]) -> None:
        print("\033[2J\033[H", end="")  # Clear screen
        print(
            f"Current Time: {timestamp:%a, %d %b %Y %H:%M:%S} | p:{signal.rsrp} dBm"
            f" | q:{signal.rsrq:.1f} dB | n:{signal.sinr:.1f} dB"
        )
        print(f"Last {len(history)} samples: min {min(history)} dBm, max {max(history)} dBm")
        print(" ".join(str(value) for value in history), flush=True)


def build_config(args) -> ModemConfig:
    """Merge the optional config file with command line overrides."""
    config = load_config(args.config)
    overrides = {
        "serial": args.serial,
        "baud": args.baud,
        "timeout": args.timeout,
        "context_id": args.cid,
        "netdev": args.netdev,
        "simpin": args.simpin,
        "apn": args.apn,
    }
    config.update({key: value for key, value in overrides.items() if value is not None})
    return config


def main(argv: Optional[list[str]] = None):
    """Main entry point for CLI."""
    import argparse

    parser = argparse.ArgumentParser(
        description=f"FibocomPy CLI v{__version__} - Fibocom 5G modem control",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  fibocom-cli --serial /dev/ttyUSB2 --info
  fibocom-cli --serial /dev/ttyUSB2 --connect --apn internet --route
  fibocom-cli --config /etc/fibocom.yaml --temp --json
        """
    )

    modes = parser.add_mutually_exclusive_group()
    modes.add_argument("--restart", action="store_true", help="Restarts the modem")
    modes.add_argument("--graph", action="store_true", help="Shows signal graph")
    modes.add_argument("--sms", action="store_true", help="Prints all the sms received")
    modes.add_argument("--info", action="store_true", help="Prints the modem info")
    modes.add_argument("--temp", action="store_true", help="Prints the modem temperature info")
    modes.add_argument("--bands", action="store_true", help="Prints the current modem bands")
    modes.add_argument("--set-bands", action="store_true", help="Enables every supported band")
    modes.add_argument("--dns", action="store_true", help="Prints the DNS configuration from the ISP")
    modes.add_argument("--connect", action="store_true", help="Connects and sets up the modem")
    modes.add_argument("--disconnect", action="store_true", help="Disconnects the modem")

    parser.add_argument("--route", action="store_true", help="Add default route via modem")
    parser.add_argument("-c", "--config", help="YAML configuration file")
    parser.add_argument("--serial", help="Serial device to use (usually /dev/ttyUSB2 or /dev/ttyUSB4)")
    parser.add_argument("--baud", type=int, help="Serial device baud rate (default: 115200)")
    parser.add_argument("--timeout", type=int, help="Serial device timeout in milliseconds (default: 300)")
    parser.add_argument("--cid", type=int, help="PDP context id (default: 5)")
    parser.add_argument("--netdev", help="Manually sets the net device to use")
    parser.add_argument("--simpin", help="Sets the SIM card PIN number")
    parser.add_argument("--apn", help="Sets the APN")
    parser.add_argument("--json", action="store_true", help="Outputs in json format (info, temp, bands, dns, sms only)")
    parser.add_argument("--debug", action="store_true", help="Prints all the AT commands")

    args = parser.parse_args(argv)

    # --route on its own is a mode too
    mode = next((name for name in MODES if getattr(args, name, False)), None)
    if mode is None:
        parser.error("requires a mode: graph | restart | sms | connect | disconnect | route | dns | info | temp | bands")

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s %(levelname)s: %(message)s'
    )

    try:
        config = build_config(args)
    except FibocomError as e:
        logger.error(str(e))
        return 1

    cli = FibocomCLI(config, as_json=args.json, debug=args.debug)
    return cli.run(mode, route=args.route or (mode == "connect" and config.route))


if __name__ == "__main__":
    sys.exit(main())
