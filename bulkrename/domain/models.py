"""
Domain models for the bulkrename system.

This module contains the core domain models using Pydantic for validation
and serialization. These models represent a planned move of one path, the
outcome of applying it, and the report produced for a whole batch.
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BulkRenameError(Exception):
    """Base exception for bulkrename domain errors."""

    pass


class RenameOutcome(str, Enum):
    """Enumeration of the possible outcomes of a single rename."""

    RENAMED = "renamed"
    SKIPPED_EXISTS = "skipped_exists"
    UNCHANGED = "unchanged"
    FAILED = "failed"
    DRY_RUN = "dry_run"


class RenamePair(BaseModel):
    """
    Represents a planned move from a source path to a destination path.

    The source path is kept exactly as discovered; the destination is the
    base path joined with the rewritten relative part.
    """

    model_config = ConfigDict(frozen=True)

    source: Path = Field(..., description="Path as it exists on disk")
    destination: Path = Field(..., description="Path after the rename")

    @property
    def changed(self) -> bool:
        """Whether applying this pair would move anything."""
        return self.source != self.destination


class RenameResult(BaseModel):
    """Outcome of applying a single rename pair."""

    model_config = ConfigDict(frozen=True)

    pair: RenamePair
    outcome: RenameOutcome
    error: str | None = Field(None, description="Reason for a skip or failure")

    @field_validator("error")
    @classmethod
    def validate_error(cls, v: str | None) -> str | None:
        """Normalise blank error messages to None."""
        if v is not None and not v.strip():
            return None
        return v


class RenameReport(BaseModel):
    """
    Represents the result of applying a batch of rename pairs.

    Results are stored in the order the pairs were processed.
    """

    results: list[RenameResult] = Field(default_factory=list)
    dry_run: bool = False

    def count(self, outcome: RenameOutcome) -> int:
        """Number of results with the given outcome."""
        return sum(1 for result in self.results if result.outcome == outcome)

    @property
    def renamed(self) -> int:
        return self.count(RenameOutcome.RENAMED)

    @property
    def skipped(self) -> int:
        return self.count(RenameOutcome.SKIPPED_EXISTS)

    @property
    def failed(self) -> int:
        return self.count(RenameOutcome.FAILED)

    @property
    def succeeded(self) -> bool:
        """True when no rename in the batch failed outright."""
        return self.failed == 0

    def summary(self) -> dict[str, int]:
        """Counts per outcome, including outcomes with a zero count."""
        return {outcome.value: self.count(outcome) for outcome in RenameOutcome}
