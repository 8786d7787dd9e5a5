"""
Error types for the nixie clock CLI.

Each error carries the process exit code the CLI terminates with; the
message is what gets printed to the user.
"""


class NixieClockError(Exception):
    exit_code = 1


class UsageError(NixieClockError):
    """Invalid or missing command-line value."""
    exit_code = 1


class PortNotFoundError(NixieClockError):
    exit_code = 1

    def __init__(self, port):
        super().__init__(f"Port {port} not found")
        self.port = port


class PortInUseError(NixieClockError):
    exit_code = 2

    def __init__(self, port):
        super().__init__(f"Port {port} currently in use")
        self.port = port


class PortConfigError(NixieClockError):
    exit_code = 1

    def __init__(self):
        super().__init__("Invalid connection parameters for serial connection")


class PortIOError(NixieClockError):
    exit_code = 2

    def __init__(self):
        super().__init__("Unknown IO Error")
