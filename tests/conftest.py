"""Shared pytest configuration for nixieclock tests."""

import os
import sys

# Allow running the suite from a checkout without installing the package
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))


def pytest_addoption(parser):
    parser.addoption(
        "--serial-port",
        default=None,
        help="Serial port of a connected clock (enables integration tests)",
    )
