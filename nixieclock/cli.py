"""
Nixie clock CLI — set time, UTC offset and DST over a serial link.

Usage:
    nixieclock --time                      # sync to the current time
    nixieclock --time 1700000000           # epoch seconds
    nixieclock --time "2015-10-27 18:43:25"
    nixieclock --offset 1 --dst on --port /dev/ttyUSB0
    nixieclock --help
"""

import os
import sys
import traceback
from dataclasses import dataclass, field
from importlib import resources

from nixieclock.commands import OFFSET_RE, dst_command, offset_command, time_command
from nixieclock.errors import NixieClockError, UsageError
from nixieclock.serial_writer import open_connection, send_commands

# --- Configuration ---
DEFAULT_PORT = "/dev/ttyUSB3"
PORT_ENV = "NIXIECLOCK_PORT"

HELP_RESOURCE = "help.txt"


@dataclass
class Invocation:
    commands: list = field(default_factory=list)
    port: str = DEFAULT_PORT
    show_help: bool = False


def get_default_port():
    """Default port, overridable through the environment."""
    return os.environ.get(PORT_ENV, "") or DEFAULT_PORT


def parse_args(argv, default_port=None):
    """Translate argv into clock commands and the target port.

    Raises UsageError on invalid input. Commands keep the order of the flags
    that produced them; unrecognized tokens are ignored.
    """
    invocation = Invocation(port=default_port or get_default_port())
    if "--help" in argv:
        invocation.show_help = True
        return invocation

    def next_value(i):
        return argv[i + 1] if i + 1 < len(argv) else None

    i = 0
    while i < len(argv):
        arg = argv[i]
        value = next_value(i)

        if arg in ("-t", "--time"):
            if value is not None and not value.startswith("-"):
                i += 1
                invocation.commands.append(time_command(value))
            else:
                invocation.commands.append(time_command())

        elif arg in ("-o", "--offset"):
            if value is None or not OFFSET_RE.fullmatch(value):
                raise UsageError("Offset needs a numeric offset")
            i += 1
            invocation.commands.append(offset_command(value))

        elif arg in ("-d", "--dst"):
            # Without a value the flag is a no-op
            if value is not None and "-" not in value:
                i += 1
                invocation.commands.append(dst_command(value))

        elif arg in ("-p", "--port"):
            if value is None or value.startswith("-"):
                raise UsageError("Invalid port identifier")
            i += 1
            invocation.port = value

        i += 1
    return invocation


def print_help():
    """Print the bundled help text."""
    try:
        text = resources.files("nixieclock").joinpath(HELP_RESOURCE).read_text(encoding="utf-8")
    except OSError:
        traceback.print_exc()
        return
    print(text, end="")


def run(invocation):
    """Open the port named by the invocation and send its commands."""
    conn = open_connection(invocation.port)
    send_commands(conn, invocation.commands)


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]

    try:
        invocation = parse_args(argv)
    except NixieClockError as e:
        print(e)
        sys.exit(e.exit_code)

    if invocation.show_help:
        print_help()
        sys.exit(0)

    try:
        run(invocation)
    except NixieClockError as e:
        print(e)
        sys.exit(e.exit_code)


if __name__ == "__main__":
    main()
