"""Interactive rename loop."""

import logging

import click

from ..adapters.io.file_discovery import FileDiscoveryError
from ..adapters.io.rich_cli import RichCliComponents
from ..application.patterns import PatternError, build_renamer_regex
from ..application.rename_session import RenameSession
from ..domain.models import RenameReport

logger = logging.getLogger(__name__)

MENU_CHANGE = 1
MENU_APPLY = 2
MENU_TOGGLE = 3
MENU_QUIT = 4


def _menu_items(session: RenameSession) -> list[str]:
    items = ["Change regexes", f"Apply changes to {len(session.pairs)} files"]
    if session.show_unchanged:
        items.append("Hide unchanged files")
    else:
        items.append("Show unchanged files")
    items.append("Quit without making changes")
    return items


def show_preview(session: RenameSession, rich_cli: RichCliComponents) -> None:
    """Print the Original / Replacement table for the planned pairs."""
    table = rich_cli.create_rename_table(session.visible_pairs, session.base_path)
    rich_cli.print_table(table)


def show_report(report: RenameReport, rich_cli: RichCliComponents) -> None:
    """Print the outcome of an apply pass, including per-path problems."""
    for result in report.results:
        if result.error:
            rich_cli.console.print(
                f"{result.pair.source}: {result.error}", style="warning", markup=False
            )
    rich_cli.print_panel(rich_cli.create_report_panel(report))


def choose_action(session: RenameSession, rich_cli: RichCliComponents) -> int:
    """Show the action menu and return the chosen entry (1-based)."""
    items = _menu_items(session)
    rich_cli.console.print("\n[primary]What next?[/]")
    for i, item in enumerate(items, 1):
        rich_cli.console.print(f"  {i}. {item}")

    return click.prompt(
        "Choose an action", type=click.IntRange(1, len(items)), default=MENU_CHANGE
    )


def run_interactive_session(
    session: RenameSession,
    rich_cli: RichCliComponents,
    dry_run: bool = False,
) -> int:
    """
    Run the prompt / preview / apply loop until the user quits.

    Returns:
        Process exit code
    """
    preview_limit = session.config.display.preview_limit
    console = rich_cli.console

    while True:
        try:
            matcher = click.prompt(
                "Enter your file-matching regex", default=session.matcher
            )
        except click.Abort:
            return 0

        try:
            matched = session.match(matcher)
        except PatternError as e:
            rich_cli.display_framed_error(str(e))
            continue
        except FileDiscoveryError as e:
            rich_cli.display_error(str(e), "Discovery Failed")
            return 1

        if not matched:
            console.print("[warning]Didn't match any paths![/]")
            continue

        rich_cli.print_matched_paths(matched, preview_limit, session.base_path)

        try:
            renamer = click.prompt(
                "Enter a regex to grab the bit you want to rename",
                default=session.renamer,
            )
        except click.Abort:
            return 0

        try:
            build_renamer_regex(renamer)
        except PatternError as e:
            rich_cli.display_framed_error(str(e))
            continue
        session.renamer = renamer

        try:
            replacement = click.prompt(
                "Enter your replacement string", default=session.replacement
            )
        except click.Abort:
            return 0

        try:
            session.plan(renamer, replacement)
        except PatternError as e:
            rich_cli.display_framed_error(str(e))
            continue

        while True:
            show_preview(session, rich_cli)
            try:
                action = choose_action(session, rich_cli)
            except click.Abort:
                return 0

            if action == MENU_APPLY:
                report = session.apply(dry_run=dry_run)
                show_report(report, rich_cli)
                break
            elif action == MENU_TOGGLE:
                if session.toggle_unchanged():
                    console.print("Showing unchanged files")
                else:
                    console.print("Hiding unchanged files")
            elif action == MENU_QUIT:
                return 0
            else:
                break
