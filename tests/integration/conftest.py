"""pytest fixtures for tests against a real clock."""

import pytest


@pytest.fixture(scope="session")
def serial_port(request):
    port = request.config.getoption("--serial-port")
    if not port:
        pytest.skip("no --serial-port given")
    return port


@pytest.fixture
def connection(serial_port):
    """Open connection to the clock; closed again after the test."""
    from nixieclock.errors import NixieClockError
    from nixieclock.serial_writer import open_connection

    try:
        conn = open_connection(serial_port)
    except NixieClockError as e:
        pytest.skip(f"Cannot open serial port {serial_port}: {e}")

    yield conn
    conn.close()
