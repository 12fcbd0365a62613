"""
Tests for AT protocol handling and the startup handshake.
"""

import pytest

from fibocompy.core import ModemCore
from fibocompy.exceptions import ATCommandError, ConfigError
from fibocompy.types import ErrorKind


def test_send_strips_ok(modem_core, mock_transport):
    """Test trailing OK is removed from data replies."""
    mock_transport.add_response(['+GTAPPVER: "81600.0000.00.29.21.23"', "OK"])

    reply = modem_core.send("AT+GTAPPVER?")

    assert reply == '+GTAPPVER: "81600.0000.00.29.21.23"'


def test_send_bare_ok_is_empty(modem_core, mock_transport):
    """Test a bare OK becomes an empty reply."""
    mock_transport.add_response(["OK"])

    assert modem_core.send("AT+CGDCONT=5,\"IPV4V6\",\"internet\"") == ""


def test_send_keep_ok(modem_core, mock_transport):
    """Test keep_ok leaves the reply untouched."""
    mock_transport.add_response(["OK"])
    assert modem_core.send("AT+CGACT=1,5", keep_ok=True) == "OK"

    mock_transport.add_response(["+CGSN: 1", "OK"])
    assert modem_core.send("AT+CGSN", keep_ok=True) == "+CGSN: 1\nOK"


def test_send_error_raises(modem_core, mock_transport):
    """Test ERROR replies raise ATCommandError with context."""
    mock_transport.add_response(["ERROR"])

    with pytest.raises(ATCommandError) as exc_info:
        modem_core.send("AT+BOGUS")

    error = exc_info.value
    assert error.command == "AT+BOGUS"
    assert error.response == "ERROR"
    assert error.kind is ErrorKind.PROTOCOL
    assert str(error) == "AT command failed | Command: AT+BOGUS | Response: ERROR"


def test_send_cme_error_is_returned(modem_core, mock_transport):
    """Test verbose +CME ERROR replies are returned, not raised."""
    mock_transport.add_response(["+CME ERROR: SIM not inserted"])

    assert modem_core.send("AT+CPIN?") == "+CME ERROR: SIM not inserted"


def test_sendex_strips_prefix(modem_core, mock_transport):
    """Test sendex strips the expected prefix."""
    mock_transport.add_response(["+GTACT: 17,6,3,101", "OK"])
    assert modem_core.sendex("AT+GTACT?", "+GTACT: ") == "17,6,3,101"


def test_sendex_without_prefix(modem_core, mock_transport):
    """Test sendex returns the reply unchanged when the prefix is absent."""
    mock_transport.add_response(["OK"])
    assert modem_core.sendex("AT+EPBSEH", "+CIREPI") == ""


def test_handshake_ready_modem(mock_transport, sleeps):
    """Test handshake with a modem answering OK straight away."""
    mock_transport.add_response(["OK"])
    mock_transport.add_response(["OK"])

    core = ModemCore(transport=mock_transport)
    core.start()

    assert mock_transport.commands == ["AT", "AT+CMEE=2"]
    assert sleeps == []
    assert core.is_started()


def test_handshake_disables_echo(mock_transport, sleeps):
    """Test an echoing modem gets ATE0 and is probed again."""
    mock_transport.add_response(["AT", "OK"])    # echoed probe
    mock_transport.add_response(["ATE0", "OK"])  # echo off
    mock_transport.add_response(["OK"])          # clean probe
    mock_transport.add_response(["OK"])          # AT+CMEE=2

    core = ModemCore(transport=mock_transport)
    core.start()

    assert mock_transport.commands == ["AT", "ATE0", "AT", "AT+CMEE=2"]
    assert sleeps == [1.0]


def test_handshake_survives_lost_echo_off_reply(mock_transport, sleeps):
    """Test a timeout on ATE0 backs off and probes again."""
    mock_transport.add_response(["AT", "OK"])    # echoed probe
    mock_transport.add_raw_response(b"")         # ATE0 reply lost
    mock_transport.add_response(["OK"])          # clean probe
    mock_transport.add_response(["OK"])          # AT+CMEE=2

    core = ModemCore(transport=mock_transport)
    core.start()

    assert mock_transport.commands == ["AT", "ATE0", "AT", "AT+CMEE=2"]
    assert sleeps == [1.0]
    assert core.is_started()


def test_handshake_waits_for_silent_modem(mock_transport, sleeps):
    """Test handshake retries while the modem does not answer."""
    mock_transport.add_raw_response(b"")
    mock_transport.add_raw_response(b"")
    mock_transport.add_response(["OK"])
    mock_transport.add_response(["OK"])

    ModemCore(transport=mock_transport).start()

    assert mock_transport.commands == ["AT", "AT", "AT", "AT+CMEE=2"]
    assert sleeps == [1.0, 1.0]


def test_handshake_drains_stale_input(mock_transport):
    """Test leftover bytes are discarded before probing."""
    mock_transport.add_stale_input(b"\r\n+CIREPH: 1\r\n")
    mock_transport.add_response(["OK"])
    mock_transport.add_response(["OK"])

    ModemCore(transport=mock_transport).start()

    assert mock_transport.commands == ["AT", "AT+CMEE=2"]


def test_handshake_unexpected_reply(mock_transport, sleeps):
    """Test an unexpected probe reply is retried without ATE0."""
    mock_transport.add_response(["RDY"])
    mock_transport.add_response(["OK"])
    mock_transport.add_response(["OK"])

    ModemCore(transport=mock_transport).start()

    assert mock_transport.commands == ["AT", "AT", "AT+CMEE=2"]
    assert sleeps == [1.0]


def test_start_runs_once(modem_core, mock_transport):
    """Test a second start does not repeat the handshake."""
    mock_transport.written.clear()

    modem_core.start()

    assert mock_transport.written == []


def test_close_is_idempotent(modem_core, mock_transport):
    """Test closing twice releases the transport once."""
    modem_core.close()
    modem_core.close()

    assert mock_transport.is_open() is False


def test_invalid_context_id(mock_transport):
    """Test a non-positive context id is rejected."""
    with pytest.raises(ConfigError) as exc_info:
        ModemCore(transport=mock_transport, cid=0)
    assert exc_info.value.kind is ErrorKind.PRECONDITION
