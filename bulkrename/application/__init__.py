from .patterns import (
    PatternError,
    build_matcher_regex,
    build_renamer_regex,
    expand_replacement,
)
from .rename_planner import plan_changes, visible_pairs
from .rename_session import RenameSession, RenameSessionError, apply_changes

__all__ = [
    "PatternError",
    "build_matcher_regex",
    "build_renamer_regex",
    "expand_replacement",
    "plan_changes",
    "visible_pairs",
    "RenameSession",
    "RenameSessionError",
    "apply_changes",
]
