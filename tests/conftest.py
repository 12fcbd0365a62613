"""
Pytest configuration and fixtures.

Provides shared test fixtures for FibocomPy tests.
"""

import pytest
import logging

from fibocompy.core import MockTransport, MockNetLink, ModemCore
from fibocompy import FibocomModem


# Enable logging for tests
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@pytest.fixture(autouse=True)
def sleeps(monkeypatch):
    """
    Record time.sleep calls instead of sleeping.

    Example:
        def test_settle(modem, sleeps):
            modem.network.enable_all_bands()
            assert sleeps == [5.0]
    """
    delays = []
    monkeypatch.setattr("time.sleep", delays.append)
    return delays


@pytest.fixture
def mock_transport():
    """
    Create a MockTransport instance for testing.

    Example:
        def test_something(mock_transport):
            mock_transport.add_response(["OK"])
            # ... test code ...
    """
    transport = MockTransport()
    yield transport
    transport.close()


@pytest.fixture
def mock_netlink():
    """Create a MockNetLink with a single "usb0" interface."""
    return MockNetLink(interfaces=("usb0",))


@pytest.fixture
def modem_core(mock_transport):
    """
    Create a started ModemCore instance with MockTransport.

    Example:
        def test_at_command(modem_core, mock_transport):
            mock_transport.add_response(["+CESQ: 99,99,255,255,20,50,40,60,30", "OK"])
            response = modem_core.send("AT+CESQ")
            assert response.startswith("+CESQ: ")
    """
    mock_transport.add_response(["OK"])     # AT
    mock_transport.add_response(["OK"])     # AT+CMEE=2
    core = ModemCore(transport=mock_transport)
    core.start()
    yield core
    core.close()


@pytest.fixture
def modem(mock_transport, mock_netlink):
    """
    Create a started FibocomModem instance with MockTransport and MockNetLink.

    The handshake commands are cleared from ``mock_transport.written``.

    Example:
        def test_imei(modem, mock_transport):
            mock_transport.add_response(["864284040000000", "OK"])
            assert modem.device.get_imei() == "864284040000000"
    """
    mock_transport.add_response(["OK"])     # AT
    mock_transport.add_response(["OK"])     # AT+CMEE=2
    modem_instance = FibocomModem(transport=mock_transport, netlink=mock_netlink)
    modem_instance.start()
    mock_transport.written.clear()
    yield modem_instance
    modem_instance.close()


@pytest.fixture
def mock_signal_response():
    """Mock response for AT+CESQ command."""
    return ["+CESQ: 99,99,255,255,255,255,40,60,50", "OK"]


@pytest.fixture
def mock_pdu():
    """SMS-DELIVER PDU from +31641600986 reading "How are you?"."""
    return "07911326040000F0040B911346610089F60000208062917314080CC8F71D14969741F977FD07"
