"""
Rename planning.

Turns matched paths into (source, destination) pairs by rewriting the part
of each path below the session's base directory.
"""

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from ..domain.models import RenamePair
from .patterns import expand_replacement, validate_replacement

logger = logging.getLogger(__name__)


def plan_changes(
    paths: Iterable[Path],
    base_path: str | Path,
    renamer: re.Pattern[str],
    replacement: str,
) -> list[RenamePair]:
    """
    Build the rename pairs for ``paths``.

    The first occurrence of ``base_path`` is removed from each path, every
    renamer match in what remains is replaced, and the base is put back in
    front. Only the part below the base directory is ever rewritten.

    Args:
        paths: Paths selected by the matcher, in display order
        base_path: Canonical root directory of the session
        renamer: Compiled renamer regex
        replacement: Replacement string ($1 / ${name} / \\g<name> supported)

    Returns:
        One pair per path, in the same order

    Raises:
        PatternError: If the replacement refers to a group the renamer lacks
    """
    base = str(base_path)
    template = expand_replacement(replacement)
    validate_replacement(template, renamer)

    pairs = []
    for path in paths:
        path_str = str(path)
        relative = path_str.replace(base, "", 1)
        rewritten = renamer.sub(template, relative)
        pairs.append(RenamePair(source=path, destination=Path(f"{base}{rewritten}")))

    logger.debug(
        f"Planned {len(pairs)} renames, {sum(p.changed for p in pairs)} would change"
    )
    return pairs


def visible_pairs(pairs: Iterable[RenamePair], show_unchanged: bool) -> list[RenamePair]:
    """Return the pairs to display, dropping unchanged ones when hidden."""
    if show_unchanged:
        return list(pairs)
    return [pair for pair in pairs if pair.changed]
