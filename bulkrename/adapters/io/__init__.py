"""
IO adapters for file operations.

This module provides adapters for walking directory trees, validating
rename destinations, logging and rendering output with Rich.
"""

from .file_discovery import FileDiscoveryError, FileDiscoveryService, build_glob_pattern
from .rich_cli import (
    BULKRENAME_THEME,
    MINIMAL_THEME,
    RichCliComponents,
    UIStyle,
    get_theme,
)
from .safety import SafetyError, SafetyPolicies

__all__ = [
    "FileDiscoveryService",
    "FileDiscoveryError",
    "build_glob_pattern",
    "BULKRENAME_THEME",
    "MINIMAL_THEME",
    "RichCliComponents",
    "UIStyle",
    "get_theme",
    "SafetyPolicies",
    "SafetyError",
]
