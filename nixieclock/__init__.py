"""Configure a nixie-tube clock over a serial link."""

__version__ = "1.0.0"
