"""
Rename Session - match, plan and apply renames below one root directory.

This module implements the workflow behind the interactive loop: the
session remembers the last matcher, renamer and replacement the user
entered, discovers candidates below its canonical root, turns them into
rename pairs and applies those pairs one at a time.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable
from pathlib import Path

from ..adapters.io.file_discovery import FileDiscoveryService
from ..adapters.io.safety import SafetyError, SafetyPolicies
from ..config.models import BulkRenameConfig
from ..domain.models import (
    BulkRenameError,
    RenameOutcome,
    RenamePair,
    RenameReport,
    RenameResult,
)
from .patterns import build_matcher_regex, build_renamer_regex
from .rename_planner import plan_changes, visible_pairs

logger = logging.getLogger(__name__)


class RenameSessionError(BulkRenameError):
    """Exception for rename session specific errors."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


def _destination_taken(pair: RenamePair, claimed: set[Path]) -> bool:
    """Whether moving onto the destination would clobber another path."""
    # Claimed by an earlier pair in this batch, dry run included
    if pair.destination in claimed:
        return True
    if not os.path.lexists(pair.destination):
        return False
    # A case-only rename on a case-insensitive filesystem sees itself
    try:
        return not os.path.samefile(pair.source, pair.destination)
    except OSError:
        return True


def apply_changes(
    pairs: Iterable[RenamePair],
    dry_run: bool = False,
    root: str | Path | None = None,
) -> RenameReport:
    """
    Apply rename pairs in order, never overwriting an existing path.

    A failure on one pair is recorded and the remaining pairs are still
    attempted.

    Args:
        pairs: Planned renames
        dry_run: Report what would happen without touching the filesystem
        root: When given, destinations must stay below this directory

    Returns:
        Report with one result per pair
    """
    report = RenameReport(dry_run=dry_run)
    claimed: set[Path] = set()

    for pair in pairs:
        if not pair.changed:
            report.results.append(RenameResult(pair=pair, outcome=RenameOutcome.UNCHANGED))
            continue

        logger.info(f"moving {pair.source} to {pair.destination}")

        if root is not None:
            try:
                SafetyPolicies.validate_destination(pair.source, pair.destination, root)
            except SafetyError as e:
                logger.error(f"Refusing to rename {pair.source}: {e}")
                report.results.append(
                    RenameResult(pair=pair, outcome=RenameOutcome.FAILED, error=str(e))
                )
                continue

        if _destination_taken(pair, claimed):
            logger.error(f"File already exists! Not taking action! {pair.destination}")
            report.results.append(
                RenameResult(
                    pair=pair,
                    outcome=RenameOutcome.SKIPPED_EXISTS,
                    error=f"Destination already exists: {pair.destination}",
                )
            )
            continue

        if dry_run:
            claimed.add(pair.destination)
            report.results.append(RenameResult(pair=pair, outcome=RenameOutcome.DRY_RUN))
            continue

        try:
            os.rename(pair.source, pair.destination)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to rename: {e}")
            report.results.append(
                RenameResult(pair=pair, outcome=RenameOutcome.FAILED, error=str(e))
            )
            continue

        claimed.add(pair.destination)
        logger.debug("Ok")
        report.results.append(RenameResult(pair=pair, outcome=RenameOutcome.RENAMED))

    logger.info(
        f"Renamed {report.renamed}, skipped {report.skipped}, failed {report.failed}"
    )
    return report


class RenameSession:
    """
    Interactive rename state for a single root directory.

    Holds the values last entered at each prompt so they can be offered as
    defaults on the next pass through the loop.
    """

    def __init__(
        self,
        root: str | Path,
        config: BulkRenameConfig | None = None,
        file_discovery_service: FileDiscoveryService | None = None,
    ):
        """
        Initialize the session.

        Args:
            root: Directory to operate on
            config: Configuration (defaults used if None)
            file_discovery_service: Service for file discovery (created from
                config if None)

        Raises:
            RenameSessionError: If the root cannot be canonicalised
        """
        self.config = config or BulkRenameConfig()
        self._file_discovery = file_discovery_service or FileDiscoveryService(
            self.config.discovery
        )

        try:
            self.base_path = Path(root).resolve(strict=True)
        except (OSError, RuntimeError) as e:
            raise RenameSessionError(f"Error finding path: {e}", cause=e) from e

        defaults = self.config.defaults
        self.matcher = defaults.matcher
        self.renamer = defaults.renamer
        self.replacement = defaults.replacement
        self.show_unchanged = defaults.show_unchanged

        self._matcher_regex: re.Pattern[str] | None = None
        self.matched_paths: list[Path] = []
        self.pairs: list[RenamePair] = []

    def match(self, matcher: str | None = None) -> list[Path]:
        """
        Discover candidate paths and keep the ones the matcher selects.

        Raises:
            PatternError: If the matcher does not compile
            FileDiscoveryError: If the directory walk fails
        """
        if matcher is not None:
            self.matcher = matcher

        self._matcher_regex = build_matcher_regex(self.matcher)
        logger.info("Finding files...")
        candidates = self._file_discovery.discover(self.base_path)
        self.matched_paths = self._file_discovery.match_paths(
            candidates, self._matcher_regex
        )
        self.pairs = []
        return self.matched_paths

    def plan(
        self, renamer: str | None = None, replacement: str | None = None
    ) -> list[RenamePair]:
        """
        Plan renames for the currently matched paths.

        Raises:
            PatternError: If the renamer or replacement is unusable
        """
        if renamer is not None:
            self.renamer = renamer
        if replacement is not None:
            self.replacement = replacement

        renamer_regex = build_renamer_regex(self.renamer)
        self.pairs = plan_changes(
            self.matched_paths, self.base_path, renamer_regex, self.replacement
        )
        return self.pairs

    @property
    def visible_pairs(self) -> list[RenamePair]:
        """Planned pairs filtered by the show-unchanged setting."""
        return visible_pairs(self.pairs, self.show_unchanged)

    def toggle_unchanged(self) -> bool:
        """Flip the show-unchanged setting and return the new value."""
        self.show_unchanged = not self.show_unchanged
        if self.show_unchanged:
            logger.debug("Showing unchanged files")
        else:
            logger.debug("Hiding unchanged files")
        return self.show_unchanged

    def apply(
        self, pairs: list[RenamePair] | None = None, dry_run: bool = False
    ) -> RenameReport:
        """Apply the planned pairs (or ``pairs``) below the session root."""
        pairs = self.pairs if pairs is None else pairs
        report = apply_changes(pairs, dry_run=dry_run, root=self.base_path)
        if not dry_run:
            # Paths on disk moved; a fresh match is needed before planning again
            self.pairs = []
        return report
