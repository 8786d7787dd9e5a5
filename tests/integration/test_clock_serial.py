"""
Integration tests — requires a nixie clock connected via USB serial.

Usage:
    pytest tests/integration -v --serial-port /dev/ttyUSB3
"""

import time

from nixieclock.cli import parse_args
from nixieclock.commands import time_command
from nixieclock.serial_writer import BAUDRATE, send_commands


class TestClockConnection:
    def test_port_configured_9600_8n1(self, connection):
        ser = connection.ser
        assert ser.is_open
        assert ser.baudrate == BAUDRATE
        assert ser.bytesize == 8
        assert ser.stopbits == 1
        assert ser.parity == "N"

    def test_time_sync(self, connection):
        """Sending the current time writes every command and closes the port."""
        assert send_commands(connection, [time_command(now=time.time())])
        assert connection.closed
        assert not connection.ser.is_open


class TestInvocation:
    def test_time_sync_via_cli_args(self, serial_port, connection):
        invocation = parse_args(["--time", "--port", serial_port])
        assert invocation.port == serial_port
        assert send_commands(connection, invocation.commands)
