"""
Adapters for the bulkrename system.

This module contains the concrete implementations that talk to the
filesystem and the terminal.
"""

from . import io

__all__ = ["io"]
