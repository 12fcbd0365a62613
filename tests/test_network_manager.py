"""
Tests for NetworkManager.
"""

import pytest
from fibocompy.types import Signal, RegistrationStatus, BandConfiguration
from fibocompy.exceptions import ATCommandError


def test_get_signal(modem, mock_transport, mock_signal_response):
    """Test getting signal quality."""
    mock_transport.add_response(mock_signal_response)

    signal = modem.network.get_signal()

    assert isinstance(signal, Signal)
    assert signal == Signal(rsrq=-23.0, rsrp=-96, sinr=2.0)
    assert mock_transport.commands == ["AT+CESQ"]


def test_get_signal_no_signal(modem, mock_transport):
    """Test getting signal quality when nothing is detectable."""
    mock_transport.add_response(["+CESQ: 99,99,255,255,255,255,255,255,255", "OK"])

    signal = modem.network.get_signal()

    assert signal.is_valid is False


@pytest.mark.parametrize("reply_5g,reply_4g,expected", [
    ("+C5GREG: 1,1", "+CEREG: 1,1", RegistrationStatus.REGISTERED_5G),
    ("+C5GREG: 1,1", "+CEREG: 0,4", RegistrationStatus.REGISTERED_5G),
    ("+C5GREG: 0,5", "+CEREG: 1,5", RegistrationStatus.REGISTERED_4G),
    ("+C5GREG: 0,0", "+CEREG: 0,0", RegistrationStatus.NOT_REGISTERED),
])
def test_get_registration_status(modem, mock_transport, reply_5g, reply_4g, expected):
    """Test 5G registration takes priority over 4G."""
    mock_transport.add_response([reply_5g, "OK"])
    mock_transport.add_response([reply_4g, "OK"])

    status = modem.network.get_registration_status()

    assert status is expected
    # Both technologies are always queried
    assert mock_transport.commands == ["AT+C5GREG?", "AT+CEREG?"]


def test_registration_labels():
    """Test registration display labels."""
    assert RegistrationStatus.REGISTERED_5G.label == "5G"
    assert RegistrationStatus.REGISTERED_4G.label == "4G"
    assert RegistrationStatus.NOT_REGISTERED.label == "Not connected"


def test_get_operator(modem, mock_transport):
    """Test getting current operator."""
    mock_transport.add_response(['+GTCURCAR: 1,"Vodafone"', "OK"])

    assert modem.network.get_operator() == "Vodafone"
    assert mock_transport.commands == ["AT+GTCURCAR?"]


def test_get_bands(modem, mock_transport):
    """Test getting band configuration."""
    mock_transport.add_response(["+GTACT: 20,6,3,1,101,5078,50258", "OK"])

    bands = modem.network.get_bands()

    assert isinstance(bands, BandConfiguration)
    assert bands.rat == "NR-RAN/WCDMA/LTE (20)"
    assert bands.bands == ["UMTS_1", "LTE_1", "NR_78", "NR_258"]
    assert bands.to_dict()["preferred_act2"] == "LTE (3)"


def test_enable_all_bands(modem, mock_transport, sleeps):
    """Test enabling every band waits for the modem to settle."""
    mock_transport.add_response(["OK"])

    modem.network.enable_all_bands()

    assert mock_transport.commands == ['AT+EPBSEH="FF","FFFF","ffffffff","ffffffffffffffff"']
    assert sleeps == [5.0]


def test_get_dns(modem, mock_transport):
    """Test DNS query uses the session context id."""
    mock_transport.add_response(['+GTDNS: 5,"10.74.210.210","10.74.210.211"', "OK"])

    assert modem.network.get_dns() == ["10.74.210.210", "10.74.210.211"]
    assert mock_transport.commands == ["AT+GTDNS=5"]


def test_command_error_propagates(modem, mock_transport):
    """Test ERROR replies surface as ATCommandError."""
    mock_transport.add_response(["ERROR"])

    with pytest.raises(ATCommandError):
        modem.network.get_bands()
