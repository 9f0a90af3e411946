"""
Safety policies for rename operations.

This module provides validation functions that a planned move must pass
before it touches the filesystem, so that a careless replacement string
cannot move files outside the directory the user pointed the tool at.
"""

from pathlib import Path


class SafetyError(Exception):
    """Exception raised when safety policies are violated."""

    pass


class SafetyPolicies:
    """
    Safety policies for rename operations.

    This class provides static methods for validating a move from a source
    path to a destination path below a root directory.
    """

    @staticmethod
    def validate_destination(
        source: str | Path, destination: str | Path, root: str | Path
    ) -> None:
        """
        Validate that a destination path is safe to move a file to.

        Args:
            source: Path being moved
            destination: Path produced by the rename
            root: Directory the rename session operates on

        Raises:
            SafetyError: If the destination is not safe
        """
        source = Path(source)
        destination = Path(destination)
        root = Path(root)

        if not destination.name:
            raise SafetyError(f"Destination has an empty file name: {destination}")

        # Check for path traversal attempts in the rewritten path
        if ".." in destination.parts:
            raise SafetyError(f"Path traversal not allowed: {destination}")

        resolved_root = root.resolve()
        # The destination does not exist yet; resolve its parent instead
        resolved_destination = destination.parent.resolve() / destination.name

        if resolved_destination == resolved_root:
            raise SafetyError(f"Destination cannot be the root itself: {destination}")

        if not SafetyPolicies._is_within(resolved_destination, resolved_root):
            raise SafetyError(
                f"Destination {destination} is outside root directory {root}"
            )

        if source.is_dir() and SafetyPolicies._is_within(
            resolved_destination, source.resolve()
        ):
            raise SafetyError(
                f"Cannot move directory {source} inside itself: {destination}"
            )

    @staticmethod
    def _is_within(path: Path, boundary: Path) -> bool:
        """Check whether ``path`` is ``boundary`` or lies below it."""
        try:
            path.relative_to(boundary)
        except ValueError:
            return False
        return True
