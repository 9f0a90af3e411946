"""
File Discovery Service - directory walking and path matching.

This module provides the service that expands a root directory into the
candidate paths for a rename pass, pruning excluded directories, and then
narrows those candidates down with the user's matcher regex.
"""

import fnmatch
import logging
import os
import re
from collections.abc import Iterable
from pathlib import Path

from ...config.models import DiscoveryConfig

logger = logging.getLogger(__name__)


class FileDiscoveryError(Exception):
    """Exception raised when file discovery fails."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


def build_glob_pattern(root: str | Path) -> str:
    """
    Build the recursive glob pattern describing every path below ``root``.

    A trailing separator on ``root`` is reused rather than doubled.
    """
    root = str(root)
    if root.endswith("/"):
        return f"{root}**/*"
    return f"{root}/**/*"


class FileDiscoveryService:
    """
    Service for discovering and filtering paths below a root directory.

    The walk is equivalent to expanding ``<root>/**/*`` with exclusions
    applied to directory names, so excluded trees are never scanned.
    """

    def __init__(self, config: DiscoveryConfig | None = None) -> None:
        """
        Initialize the file discovery service.

        Args:
            config: Discovery configuration. If None, uses default configuration.

        Raises:
            FileDiscoveryError: If configuration contains invalid patterns.
        """
        self.config = config or DiscoveryConfig()
        self._validate_patterns()
        self._exclude_dirs_set: set[str] | None = None

    @property
    def exclude_dirs_set(self) -> set[str]:
        """Get cached set of directory patterns to exclude."""
        if self._exclude_dirs_set is None:
            self._exclude_dirs_set = set(self.config.exclude_dirs)
        return self._exclude_dirs_set

    def _validate_patterns(self) -> None:
        """Validate exclusion patterns to catch invalid patterns early."""
        for pattern in self.config.exclude_dirs:
            if not isinstance(pattern, str) or not pattern.strip():
                raise FileDiscoveryError(
                    f"Exclusion pattern must be a non-empty string: {pattern!r}"
                )

    def _should_exclude_directory(self, name: str) -> bool:
        """Check whether a directory name matches an exclusion pattern."""
        return any(
            name == pattern or fnmatch.fnmatch(name, pattern)
            for pattern in self.exclude_dirs_set
        )

    def discover(self, root: str | Path) -> list[Path]:
        """
        Discover every candidate path below ``root``.

        Args:
            root: Directory to walk recursively

        Returns:
            Sorted list of discovered paths, rooted at ``root`` as given

        Raises:
            FileDiscoveryError: If the root is missing, not a directory, or
                cannot be scanned. Unreadable subdirectories are logged and
                skipped
        """
        if not root:
            raise FileDiscoveryError("Root path cannot be empty")

        root_path = Path(root)
        if not root_path.exists():
            raise FileDiscoveryError(f"Root path does not exist: {root_path}")
        if not root_path.is_dir():
            raise FileDiscoveryError(f"Root path must be a directory: {root_path}")

        logger.debug(f"Discovering paths matching {build_glob_pattern(root_path)}")

        def _on_error(error: OSError) -> None:
            # Only an unreadable root aborts; unreadable subtrees are skipped
            if error.filename is None or Path(error.filename) == root_path:
                raise FileDiscoveryError(
                    f"Failed to scan {error.filename}: {error}", cause=error
                )
            logger.error(f"Error: {error}")

        discovered: list[Path] = []
        try:
            for current, dirs, files in os.walk(
                root_path,
                onerror=_on_error,
                followlinks=self.config.follow_symlinks,
            ):
                # Filter directories in-place to avoid scanning excluded directories
                dirs[:] = [d for d in dirs if not self._should_exclude_directory(d)]

                if self.config.include_directories:
                    discovered.extend(Path(current) / d for d in dirs)
                discovered.extend(Path(current) / f for f in files)

        except FileDiscoveryError:
            raise
        except OSError as e:
            logger.error(f"Filesystem error during discovery in {root_path}: {e}")
            raise FileDiscoveryError(
                f"Discovery failed due to filesystem error: {e}", cause=e
            ) from e

        discovered.sort()
        logger.debug(f"Discovered {len(discovered)} paths in {root_path}")
        return discovered

    def match_paths(
        self, paths: Iterable[Path], matcher: re.Pattern[str]
    ) -> list[Path]:
        """
        Keep the paths whose full string form contains a matcher match.

        Args:
            paths: Candidate paths
            matcher: Compiled matcher regex (search semantics)

        Returns:
            Matching paths in their original order
        """
        matched = []
        for path in paths:
            try:
                path_str = os.fspath(path)
            except TypeError as e:
                logger.error(f"Error: cannot read path {path!r}: {e}")
                continue

            if matcher.search(path_str):
                matched.append(path)

        logger.debug(f"Matched {len(matched)} paths with {matcher.pattern!r}")
        return matched
