"""Sizzling Hot slot-machine rules engine."""

__version__ = "0.1.0"
