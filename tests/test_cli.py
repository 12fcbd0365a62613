"""
Tests for the command line front end.
"""

import json

import pytest

from fibocompy import cli
from fibocompy import FibocomModem
from fibocompy.core import MockTransport, MockNetLink


@pytest.fixture
def cli_transport(monkeypatch):
    """
    Route the CLI session through a MockTransport.

    The handshake replies are queued already.
    """
    transport = MockTransport()
    transport.add_response(["OK"])
    transport.add_response(["OK"])
    netlink = MockNetLink()

    def make_modem(**kwargs):
        kwargs.pop("port")
        return FibocomModem(transport=transport, netlink=netlink, **kwargs)

    monkeypatch.setattr(cli, "FibocomModem", make_modem)
    transport.netlink = netlink
    return transport


def test_no_mode(capsys):
    """Test a mode is required."""
    with pytest.raises(SystemExit):
        cli.main(["--serial", "/dev/ttyUSB2"])


def test_missing_serial(cli_transport):
    """Test a session without a serial device fails."""
    assert cli.main(["--info"]) == 1
    assert cli_transport.written == []


def test_temp_json(cli_transport, capsys):
    """Test temperature output in JSON."""
    cli_transport.add_response(["+GTSENRDTEMP: 1,25000", "+GTSENRDTEMP: 2,41870", "OK"])

    assert cli.main(["--serial", "/dev/ttyUSB2", "--temp", "--json"]) == 0

    out = capsys.readouterr().out
    assert json.loads(out) == {"soc_max": 25.0, "cpu_little0": 41.87}
    assert cli_transport.is_open() is False


def test_bands_text(cli_transport, capsys):
    """Test band output as labeled lines."""
    cli_transport.add_response(["+GTACT: 17,6,3,101,5078", "OK"])

    assert cli.main(["--serial", "/dev/ttyUSB2", "--bands"]) == 0

    out = capsys.readouterr().out
    assert "rat:            NR-RAN/LTE (17)" in out
    assert "bands:          LTE_1, NR_78" in out


def test_dns_requires_connection(cli_transport, capsys):
    """Test DNS refuses a disconnected modem."""
    cli_transport.add_response(["+CME ERROR: 3"])

    assert cli.main(["--serial", "/dev/ttyUSB2", "--dns"]) == 1
    assert cli_transport.commands[-1] == "AT+CGPADDR=5"
    assert capsys.readouterr().out == ""


def test_dns(cli_transport, capsys):
    """Test DNS listing."""
    cli_transport.add_response(['+CGPADDR: 5,"10.45.0.2"', "OK"])
    cli_transport.add_response(['+GTDNS: 5,"10.74.210.210","10.74.210.211"', "OK"])

    assert cli.main(["--serial", "/dev/ttyUSB2", "--dns", "--json"]) == 0

    assert json.loads(capsys.readouterr().out) == ["10.74.210.210", "10.74.210.211"]


def test_connect_with_route(cli_transport):
    """Test connect followed by the default route."""
    cli_transport.add_response(["+CME ERROR: 3"])
    cli_transport.add_response(["+CPIN: READY", "OK"])
    cli_transport.add_response(["OK"])
    cli_transport.add_response(["OK"])
    cli_transport.add_response(['+CGPADDR: 5,"10.45.0.2"', "OK"])
    cli_transport.add_response(['+CGPADDR: 5,"10.45.0.2"', "OK"])

    code = cli.main([
        "--serial", "/dev/ttyUSB2", "--netdev", "usb0",
        "--apn", "internet", "--connect", "--route",
    ])

    assert code == 0
    assert [str(gw) for _, gw in cli_transport.netlink.routes] == ["10.45.0.1"]


def test_route_only(cli_transport):
    """Test --route on its own only installs the route."""
    import ipaddress

    cli_transport.netlink.addresses["usb0"] = [ipaddress.ip_interface("10.45.0.2/24")]

    assert cli.main(["--serial", "/dev/ttyUSB2", "--netdev", "usb0", "--route"]) == 0
    assert cli_transport.commands == ["AT", "AT+CMEE=2"]
    assert len(cli_transport.netlink.routes) == 1


def test_disconnect_ignores_route(cli_transport):
    """Test --route has no effect when disconnecting."""
    cli_transport.add_response(['+CGPADDR: 5,"10.45.0.2"', "OK"])
    cli_transport.add_response(["OK"])
    cli_transport.add_response(["+CME ERROR: 3"])

    code = cli.main(["--serial", "/dev/ttyUSB2", "--netdev", "usb0", "--disconnect", "--route"])

    assert code == 0
    assert cli_transport.netlink.routes == []


def test_config_file(cli_transport, tmp_path):
    """Test settings come from the YAML file."""
    path = tmp_path / "fibocom.yaml"
    path.write_text("serial: /dev/ttyUSB2\ncontext_id: 3\n")
    cli_transport.add_response(["+CME ERROR: 3"])

    assert cli.main(["--config", str(path), "--dns"]) == 1
    assert cli_transport.commands[-1] == "AT+CGPADDR=3"


def test_flags_override_config_file(cli_transport, tmp_path):
    """Test command line flags win over the YAML file."""
    path = tmp_path / "fibocom.yaml"
    path.write_text("serial: /dev/ttyUSB2\ncontext_id: 3\n")
    cli_transport.add_response(["+CME ERROR: 3"])

    assert cli.main(["--config", str(path), "--cid", "4", "--dns"]) == 1
    assert cli_transport.commands[-1] == "AT+CGPADDR=4"


def test_connect_already_connected(cli_transport):
    """Test precondition failures give a non-zero exit."""
    cli_transport.add_response(['+CGPADDR: 5,"10.45.0.2"', "OK"])

    code = cli.main(["--serial", "/dev/ttyUSB2", "--netdev", "usb0", "--apn", "internet", "--connect"])

    assert code == 1
