"""Main CLI entry point for bulkrename."""

import logging
import os
import sys
from pathlib import Path

import click
from rich.console import Console

from .. import __version__
from ..adapters.io.enhanced_logging import (
    LoggerManager,
    LogMode,
    get_operation_logger,
    setup_enhanced_logging,
)
from ..adapters.io.file_discovery import FileDiscoveryError, build_glob_pattern
from ..adapters.io.rich_cli import RichCliComponents, UIStyle, get_theme
from ..application.patterns import PatternError
from ..application.rename_session import RenameSession, RenameSessionError
from ..config.loader import ConfigLoader, ConfigurationError
from .context import ClickContext
from .interactive import run_interactive_session, show_preview, show_report


def detect_ui_style(ui_flag: str | None, configured: str | None = None) -> UIStyle:
    """Detect appropriate UI style based on flag, environment, TTY status and config."""
    # Priority 1: Explicit --ui flag
    if ui_flag:
        return UIStyle(ui_flag.lower())

    # Priority 2: Environment variable
    env_ui = os.getenv("BULKRENAME_UI", "").lower()
    if env_ui in (UIStyle.MINIMAL.value, UIStyle.CLASSIC.value):
        return UIStyle(env_ui)

    # Priority 3: Auto-detect based on environment
    if os.getenv("CI") == "true" or not sys.stdout.isatty():
        return UIStyle.MINIMAL

    # Priority 4: Configuration file
    if configured:
        return UIStyle(configured)

    return UIStyle.CLASSIC


@click.group()
@click.version_option(__version__, prog_name="bulkrename")
@click.option(
    "--config",
    "-c",
    type=click.Path(path_type=Path),
    help="Path to configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Reduce output: set log level to WARNING and hide INFO",
)
@click.option(
    "--dry-run", "--dry", is_flag=True, help="Preview renames without moving anything"
)
@click.option(
    "--ui",
    type=click.Choice(["minimal", "classic"], case_sensitive=False),
    help="UI style: 'minimal' for CI/non-TTY, 'classic' for interactive (auto-detected by default)",
)
@click.pass_context
def app(
    ctx: click.Context,
    config: Path | None,
    verbose: bool,
    quiet: bool,
    dry_run: bool,
    ui: str | None,
) -> None:
    """bulkrename - rename many files at once with regular expressions."""
    ctx.ensure_object(ClickContext)
    ctx.obj.verbose = verbose
    ctx.obj.quiet = quiet
    ctx.obj.dry_run = dry_run

    # init-config must work even when the existing configuration is broken
    skip_config = ctx.invoked_subcommand == "init-config"

    configured_ui = None
    config_error: ConfigurationError | None = None
    if not skip_config:
        ctx.obj.loader = ConfigLoader(config)
        try:
            ctx.obj.config = ctx.obj.loader.load_config()
            configured_ui = ctx.obj.config.display.ui
        except ConfigurationError as e:
            config_error = e

    ctx.obj.ui_style = detect_ui_style(ui, configured_ui)
    console = Console(theme=get_theme(ctx.obj.ui_style))
    ctx.obj.rich_cli = RichCliComponents(console, ui_style=ctx.obj.ui_style)

    logger = setup_enhanced_logging(console)
    LoggerManager.set_log_mode(
        LogMode.MINIMAL if ctx.obj.ui_style == UIStyle.MINIMAL else LogMode.CLASSIC,
        verbose=verbose,
        quiet=quiet,
    )
    if verbose and not quiet:
        logger.debug("Debug mode enabled - verbose logging active")

    if config_error is not None:
        suggestions = [
            "Check if the configuration file exists and is readable",
            "Verify the configuration file format (TOML or YAML)",
            "Run 'bulkrename init-config --force' to create a fresh configuration file",
        ]
        ctx.obj.rich_cli.display_error_with_suggestions(
            f"Configuration error: {config_error}", suggestions, "Configuration Failed"
        )
        logger.error(f"Configuration initialization failed: {config_error}")
        sys.exit(1)


# ============================================================================
# MAIN COMMANDS
# ============================================================================


@app.command()
@click.argument("filepath", type=str)
@click.option("--matcher", "-m", help="File-matching regex ('$' appended if missing)")
@click.option("--renamer", "-r", help="Regex with one capture group to rewrite")
@click.option("--replacement", "-s", help="Replacement string ($1, ${name} expanded)")
@click.option(
    "--hide-unchanged", is_flag=True, help="Hide paths the rename would not change"
)
@click.option(
    "--yes",
    "-y",
    is_flag=True,
    help="Apply without prompting, using configured or given patterns",
)
@click.pass_context
def rename(
    ctx: click.Context,
    filepath: str,
    matcher: str | None,
    renamer: str | None,
    replacement: str | None,
    hide_unchanged: bool,
    yes: bool,
) -> None:
    """Interactively rename files below FILEPATH."""
    rich_cli: RichCliComponents = ctx.obj.rich_cli
    operation_logger = get_operation_logger("rename")

    overrides: dict = {}
    if matcher is not None:
        overrides["matcher"] = matcher
    if renamer is not None:
        overrides["renamer"] = renamer
    if replacement is not None:
        overrides["replacement"] = replacement
    if hide_unchanged:
        overrides["show_unchanged"] = False

    config = ctx.obj.config
    if overrides:
        try:
            config = ctx.obj.loader.load_config(
                cli_overrides={"defaults": overrides}, reload=True
            )
        except ConfigurationError as e:
            rich_cli.display_error(str(e), "Invalid Options")
            sys.exit(1)

    operation_logger.debug(f"Expanding {build_glob_pattern(filepath)}")
    if not Path(filepath).is_dir():
        rich_cli.console.print("No files found :(")
        sys.exit(1)

    try:
        session = RenameSession(filepath, config)
    except (RenameSessionError, FileDiscoveryError) as e:
        rich_cli.display_error(str(e), "Invalid Path")
        sys.exit(1)

    if ctx.obj.dry_run:
        rich_cli.display_info(
            "DRY RUN: no files will actually be renamed", "Dry Run Mode"
        )

    with operation_logger.operation_context("rename", root=str(session.base_path)):
        if yes:
            exit_code = _run_once(session, rich_cli, dry_run=ctx.obj.dry_run)
        else:
            exit_code = run_interactive_session(
                session, rich_cli, dry_run=ctx.obj.dry_run
            )

    sys.exit(exit_code)


def _run_once(session: RenameSession, rich_cli: RichCliComponents, dry_run: bool) -> int:
    """Single non-interactive match / plan / apply pass."""
    try:
        matched = session.match()
        if not matched:
            rich_cli.console.print("[warning]Didn't match any paths![/]")
            return 1
        rich_cli.print_matched_paths(
            matched, session.config.display.preview_limit, session.base_path
        )
        session.plan()
    except PatternError as e:
        rich_cli.display_framed_error(str(e))
        return 1
    except FileDiscoveryError as e:
        rich_cli.display_error(str(e), "Discovery Failed")
        return 1

    show_preview(session, rich_cli)
    report = session.apply(dry_run=dry_run)
    show_report(report, rich_cli)
    return 0 if report.succeeded else 1


@app.command("init-config")
@click.option(
    "--format",
    "format_",
    type=click.Choice(["toml", "yaml"], case_sensitive=False),
    default="toml",
    help="Configuration file format",
)
@click.option("--force", is_flag=True, help="Overwrite an existing configuration file")
@click.pass_context
def init_config(ctx: click.Context, format_: str, force: bool) -> None:
    """Write a sample configuration file to the current directory."""
    rich_cli: RichCliComponents = ctx.obj.rich_cli
    filename = ".bulkrename.toml" if format_.lower() == "toml" else ".bulkrename.yml"

    try:
        path = ConfigLoader().create_sample_config(filename, force=force)
    except ConfigurationError as e:
        rich_cli.display_error(str(e), "Configuration Exists")
        sys.exit(1)

    rich_cli.display_success(f"Created {path}", "Configuration")
    logging.getLogger(__name__).debug(f"Sample configuration written to {path}")


def main() -> None:
    """Console script entry point."""
    app(obj=ClickContext())


if __name__ == "__main__":
    main()
