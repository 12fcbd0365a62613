"""
Tests for DeviceManager.
"""

import pytest
from fibocompy.exceptions import PreconditionError, SIMError


def test_get_firmware_version(modem, mock_transport):
    """Test getting firmware version."""
    mock_transport.add_response(['+GTAPPVER: "81600.0000.00.29.21.23"', "OK"])

    assert modem.device.get_firmware_version() == "81600.0000.00.29.21.23"
    assert mock_transport.commands == ["AT+GTAPPVER?"]


def test_get_serial_number(modem, mock_transport):
    """Test getting serial number."""
    mock_transport.add_response(['+CFSN: "7b4a3c2d"', "OK"])

    assert modem.device.get_serial_number() == "7b4a3c2d"


def test_get_package_version(modem, mock_transport):
    """Test getting package version."""
    mock_transport.add_response(['+GTPKGVER: "81600.0000.00.29.21.23_GC"', "OK"])

    assert modem.device.get_package_version() == "81600.0000.00.29.21.23_GC"


def test_get_imei(modem, mock_transport):
    """Test getting IMEI."""
    mock_transport.add_response(["864284040000000", "OK"])

    assert modem.device.get_imei() == "864284040000000"
    assert mock_transport.commands == ["AT+CGSN"]


def test_has_sim_pin(modem, mock_transport):
    """Test SIM readiness check."""
    mock_transport.add_response(["+CPIN: READY", "OK"])
    assert modem.device.has_sim_pin() is True

    mock_transport.add_response(["+CPIN: SIM PIN", "OK"])
    assert modem.device.has_sim_pin() is False


def test_set_sim_pin_already_unlocked(modem, mock_transport):
    """Test no PIN is sent when the SIM is ready."""
    mock_transport.add_response(["+CPIN: READY", "OK"])

    modem.device.set_sim_pin("1234")

    assert mock_transport.commands == ["AT+CPIN?"]


def test_set_sim_pin_unlocks(modem, mock_transport):
    """Test entering the PIN."""
    mock_transport.add_response(["+CPIN: SIM PIN", "OK"])
    mock_transport.add_response(["OK"])
    mock_transport.add_response(["+CPIN: READY", "OK"])

    modem.device.set_sim_pin("1234")

    assert mock_transport.commands == ["AT+CPIN?", 'AT+CPIN="1234"', "AT+CPIN?"]


def test_set_sim_pin_missing(modem, mock_transport):
    """Test a locked SIM without a PIN is a precondition failure."""
    mock_transport.add_response(["+CPIN: SIM PIN", "OK"])

    with pytest.raises(PreconditionError, match="requires SIM card PIN"):
        modem.device.set_sim_pin(None)


def test_set_sim_pin_wrong(modem, mock_transport):
    """Test a PIN that does not unlock the SIM."""
    mock_transport.add_response(["+CPIN: SIM PIN", "OK"])
    mock_transport.add_response(["OK"])
    mock_transport.add_response(["+CPIN: SIM PUK", "OK"])

    with pytest.raises(SIMError) as exc_info:
        modem.device.set_sim_pin("0000")
    assert exc_info.value.response == "+CPIN: SIM PUK"


def test_get_temperatures(modem, mock_transport):
    """Test reading temperature sensors."""
    mock_transport.add_response([
        "+GTSENRDTEMP: 1,25000",
        "+GTSENRDTEMP: 2,41870",
        "OK",
    ])

    temperatures = modem.device.get_temperatures()

    assert temperatures == {"soc_max": 25.0, "cpu_little0": 41.87}
    assert mock_transport.commands == ["AT+GTSENRDTEMP=0"]


def test_reset(modem, mock_transport):
    """Test modem restart keeps the OK."""
    mock_transport.add_response(["OK"])

    assert modem.device.reset() == "OK"
    assert mock_transport.commands == ["AT+CFUN=1,1"]
