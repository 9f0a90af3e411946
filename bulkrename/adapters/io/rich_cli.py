"""
Rich CLI components for bulkrename.

This module provides the themes and the reusable Rich building blocks used by
the command line: the rename preview table, outcome summaries, framed error
messages and the small informational panels shown between prompts.
"""

from collections.abc import Sequence
from enum import Enum
from pathlib import Path

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme

from ...domain.models import RenameOutcome, RenamePair, RenameReport


class UIStyle(str, Enum):
    """UI style options for controlling visual complexity and theming."""

    MINIMAL = "minimal"
    CLASSIC = "classic"


BULKRENAME_THEME = Theme(
    {
        "primary": "bold cyan",
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "bold red",
        "muted": "dim",
        "border": "blue",
        "original": "white",
        "replacement": "bold yellow",
        "unchanged": "dim",
    }
)

# Restricted palette for CI logs and non-TTY output
MINIMAL_THEME = Theme(
    {
        "primary": "bold",
        "info": "default",
        "success": "default",
        "warning": "bold",
        "error": "bold",
        "muted": "dim",
        "border": "dim",
        "original": "default",
        "replacement": "bold",
        "unchanged": "dim",
    }
)

ERROR_FRAME = "#" * 51

OUTCOME_STYLES = {
    RenameOutcome.RENAMED: "success",
    RenameOutcome.SKIPPED_EXISTS: "warning",
    RenameOutcome.UNCHANGED: "muted",
    RenameOutcome.FAILED: "error",
    RenameOutcome.DRY_RUN: "info",
}


def get_theme(ui_style: UIStyle) -> Theme:
    """Return the theme matching a UI style."""
    if ui_style == UIStyle.MINIMAL:
        return MINIMAL_THEME
    return BULKRENAME_THEME


def display_path(path: Path, base_path: Path | None = None) -> str:
    """Render a path relative to ``base_path`` when it lies below it."""
    if base_path is not None:
        try:
            return str(path.relative_to(base_path))
        except ValueError:
            pass
    return str(path)


class RichCliComponents:
    """Rich components used by the bulkrename command line."""

    def __init__(
        self, console: Console | None = None, ui_style: UIStyle = UIStyle.CLASSIC
    ) -> None:
        self.ui_style = ui_style
        self.console = console or Console(theme=get_theme(ui_style))

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def _message_panel(self, message: str, title: str, style: str) -> None:
        if self.ui_style == UIStyle.MINIMAL:
            self.console.print(f"[{style}]{escape(title.lower())}:[/] {escape(message)}")
            return
        self.console.print(
            Panel(
                f"[{style}]{escape(message)}[/]",
                title=f"[{style}]{escape(title)}[/]",
                border_style="border",
                padding=(0, 1),
            )
        )

    def display_error(self, message: str, title: str = "Error") -> None:
        self._message_panel(message, title, "error")

    def display_success(self, message: str, title: str = "Success") -> None:
        self._message_panel(message, title, "success")

    def display_info(self, message: str, title: str = "Info") -> None:
        self._message_panel(message, title, "info")

    def display_error_with_suggestions(
        self, error_message: str, suggestions: list[str], title: str = "Error"
    ) -> None:
        """Display error with helpful suggestions."""
        error_content = [f"[error]{escape(error_message)}[/]"]

        if suggestions:
            error_content.append("")
            error_content.append("[warning]suggestions:[/]")
            for suggestion in suggestions:
                error_content.append(f"  {escape(suggestion)}")

        panel = Panel(
            "\n".join(error_content),
            title=f"[error]{escape(title.lower())}[/]",
            border_style="border",
            padding=(1, 1),
        )
        self.console.print(panel)

    def display_framed_error(self, message: str) -> None:
        """Print an error between two rows of hashes so it stands out in the loop."""
        self.console.print(ERROR_FRAME, style="error", markup=False)
        self.console.print(message, style="error", markup=False)
        self.console.print(ERROR_FRAME, style="error", markup=False)

    # ------------------------------------------------------------------
    # Matching and planning output
    # ------------------------------------------------------------------

    def print_matched_paths(
        self, paths: Sequence[Path], limit: int, base_path: Path | None = None
    ) -> None:
        """Print the match count followed by the first ``limit`` matched paths."""
        self.console.print(f"[success]Matched {len(paths)} paths![/]")
        if not paths:
            return

        if len(paths) > 1:
            shown = min(len(paths), limit)
            self.console.print(f"First {shown} paths:")
            for path in paths[:shown]:
                self.console.print(display_path(path, base_path), markup=False)
        else:
            self.console.print(
                f"Matched: {display_path(paths[0], base_path)}", markup=False
            )

    def create_rename_table(
        self, pairs: Sequence[RenamePair], base_path: Path | None = None
    ) -> Table:
        """Create the Original / Replacement preview table."""
        table = Table(
            show_header=True,
            header_style="bold yellow",
            border_style="border",
            box=box.ASCII if self.ui_style == UIStyle.MINIMAL else box.SQUARE,
            show_lines=self.ui_style == UIStyle.CLASSIC,
        )
        table.add_column("Original", style="original", overflow="fold")
        table.add_column("Replacement", overflow="fold")

        for pair in pairs:
            destination = escape(display_path(pair.destination, base_path))
            if pair.changed:
                destination = f"[replacement]{destination}[/]"
            table.add_row(
                escape(display_path(pair.source, base_path)),
                destination,
                style=None if pair.changed else "unchanged",
            )

        return table

    def create_report_panel(self, report: RenameReport) -> Panel:
        """Create a panel summarising the outcome of an apply pass."""
        lines = []
        for outcome in RenameOutcome:
            count = report.count(outcome)
            if count:
                style = OUTCOME_STYLES[outcome]
                lines.append(f"[{style}]{outcome.value.replace('_', ' ')}:[/] {count}")
        if not lines:
            lines.append("[muted]nothing to do[/]")

        title = "Dry run" if report.dry_run else "Rename results"
        return Panel(
            "\n".join(lines),
            title=f"[primary]{title}[/]",
            border_style="border" if report.succeeded else "error",
            padding=(0, 1),
        )

    # ------------------------------------------------------------------
    # Printing helpers
    # ------------------------------------------------------------------

    def print_table(self, table: Table) -> None:
        self.console.print(table)

    def print_panel(self, panel: Panel) -> None:
        self.console.print(panel)
