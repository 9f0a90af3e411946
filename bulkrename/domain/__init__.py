"""Domain models for bulkrename."""

from .models import (
    BulkRenameError,
    RenameOutcome,
    RenamePair,
    RenameReport,
    RenameResult,
)

__all__ = [
    "BulkRenameError",
    "RenameOutcome",
    "RenamePair",
    "RenameReport",
    "RenameResult",
]
