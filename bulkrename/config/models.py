"""Pydantic models for bulkrename configuration."""

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RenameDefaults(BaseModel):
    """Initial values offered at the interactive prompts."""

    matcher: str = Field(
        default=r".*\.jpeg$",
        description="Regex selecting which paths take part in a rename",
    )

    renamer: str = Field(
        default="(jpeg)",
        description="Regex with a single capture group marking the part to rewrite",
    )

    replacement: str = Field(
        default="jpg",
        description="Replacement for every renamer match ($1 / ${name} supported)",
    )

    show_unchanged: bool = Field(
        default=True,
        description="Show paths the rename would leave untouched in the preview",
    )

    @field_validator("matcher", "renamer")
    @classmethod
    def validate_regex(cls, v: str) -> str:
        """Reject patterns that do not compile."""
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid regular expression '{v}': {e}") from e
        return v

    model_config = ConfigDict(extra="forbid")


class DiscoveryConfig(BaseModel):
    """Configuration for walking the directory tree."""

    exclude_dirs: list[str] = Field(
        default=[
            # Version control
            ".git",
            ".hg",
            ".svn",
            # Caches
            "__pycache__",
        ],
        description="Directory names (fnmatch patterns) pruned from the walk",
    )

    include_directories: bool = Field(
        default=False,
        description="Offer directories as rename candidates, not only files",
    )

    follow_symlinks: bool = Field(
        default=False, description="Descend into symlinked directories"
    )

    @field_validator("exclude_dirs")
    @classmethod
    def validate_exclude_dirs(cls, v: list[str]) -> list[str]:
        """Ensure exclusion patterns are non-empty strings."""
        for pattern in v:
            if not pattern.strip():
                raise ValueError("Exclusion patterns cannot be empty or whitespace")
        return v

    model_config = ConfigDict(extra="forbid")


class DisplayConfig(BaseModel):
    """Configuration for terminal output."""

    preview_limit: int = Field(
        default=10, ge=1, description="Number of matched paths listed after matching"
    )

    ui: Literal["classic", "minimal"] = Field(
        default="classic", description="UI style for tables and panels"
    )

    model_config = ConfigDict(extra="forbid")


class BulkRenameConfig(BaseModel):
    """Main configuration model for bulkrename."""

    defaults: RenameDefaults = Field(
        default_factory=RenameDefaults,
        description="Initial matcher, renamer and replacement values",
    )

    discovery: DiscoveryConfig = Field(
        default_factory=DiscoveryConfig, description="Directory walking options"
    )

    display: DisplayConfig = Field(
        default_factory=DisplayConfig, description="Terminal output options"
    )

    model_config = ConfigDict(validate_assignment=True, extra="forbid")
