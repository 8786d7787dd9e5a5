"""
Serial transport to the clock.

The clock resets when the serial line is opened, so commands are written
only after BOOT_DELAY and the port is held open for SETTLE_DELAY afterwards
to let the last command be processed.
"""

import errno
import time
import traceback

try:
    import termios
except ImportError:  # Windows
    termios = None

import serial

from nixieclock.errors import (
    PortConfigError,
    PortInUseError,
    PortIOError,
    PortNotFoundError,
)

# --- Line parameters ---
BAUDRATE = 9600
BYTESIZE = serial.EIGHTBITS
STOPBITS = serial.STOPBITS_ONE
PARITY = serial.PARITY_NONE

# --- Timing (seconds) ---
OPEN_TIMEOUT = 20
OPEN_RETRY_INTERVAL = 0.5
BOOT_DELAY = 5
SETTLE_DELAY = 5

_MISSING_ERRNOS = (errno.ENOENT, errno.ENODEV, errno.ENXIO)
_BUSY_ERRNOS = (errno.EBUSY, errno.EAGAIN, errno.EWOULDBLOCK)

# flush() drains through termios on POSIX
_IO_ERRORS = (serial.SerialException, OSError)
if termios is not None:
    _IO_ERRORS += (termios.error,)


class ClockConnection:
    """Open serial connection to the clock. Closes exactly once."""

    def __init__(self, ser):
        self.ser = ser
        self.closed = False

    def configure(self):
        """Apply 9600-8-N-1 to the open port."""
        try:
            self.ser.baudrate = BAUDRATE
            self.ser.bytesize = BYTESIZE
            self.ser.stopbits = STOPBITS
            self.ser.parity = PARITY
        except (ValueError, serial.SerialException):
            raise PortConfigError() from None

    def send_command(self, command):
        """Write one command line and push it onto the wire."""
        self.ser.write(f"{command}\n".encode("ascii"))
        self.ser.flush()

    def close(self):
        if self.closed:
            return
        self.closed = True
        self.ser.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


def _classify_open_error(e):
    """Map a pyserial open failure to a port error class, None if unknown."""
    if e.errno in _MISSING_ERRNOS:
        return PortNotFoundError
    if e.errno in _BUSY_ERRNOS:
        return PortInUseError
    text = str(e)
    # open() applies the line settings itself; termios rejections surface here
    if text.startswith("Could not configure port"):
        return PortConfigError
    # Windows reports the underlying error only in the message text
    if "FileNotFoundError" in text:
        return PortNotFoundError
    if "PermissionError" in text:
        return PortInUseError
    return None


def open_connection(port, timeout=OPEN_TIMEOUT, sleep=time.sleep, clock=time.monotonic):
    """Open and configure the clock's serial port.

    A port held by another process is retried until `timeout` seconds have
    passed. Raises PortNotFoundError, PortInUseError, PortIOError or
    PortConfigError.
    """
    ser = serial.Serial()
    ser.port = port
    ser.exclusive = True

    deadline = clock() + timeout
    while True:
        try:
            ser.open()
            break
        except serial.SerialException as e:
            error_cls = _classify_open_error(e)
            if error_cls is PortNotFoundError:
                raise PortNotFoundError(port) from e
            if error_cls is PortConfigError:
                raise PortConfigError() from e
            if error_cls is None:
                traceback.print_exc()
                raise PortIOError() from e
            if clock() >= deadline:
                raise PortInUseError(port) from e
            sleep(OPEN_RETRY_INTERVAL)

    conn = ClockConnection(ser)
    try:
        conn.configure()
    except PortConfigError:
        conn.close()
        raise
    return conn


def send_commands(conn, commands, sleep=time.sleep,
                  boot_delay=BOOT_DELAY, settle_delay=SETTLE_DELAY):
    """Write commands in order, then close the connection.

    Returns True when every command was written. Write and close failures
    are reported and do not raise.
    """
    ok = True
    try:
        sleep(boot_delay)
        try:
            for command in commands:
                conn.send_command(command)
        except _IO_ERRORS:
            print("Error while writing to serial connection")
            traceback.print_exc()
            ok = False
        else:
            sleep(settle_delay)
    finally:
        try:
            conn.close()
        except _IO_ERRORS:
            print("Unknown error while closing serial connection")
            traceback.print_exc()
    return ok
