"""Shared CLI context for Click commands."""

from ..adapters.io.rich_cli import RichCliComponents, UIStyle
from ..config.loader import ConfigLoader
from ..config.models import BulkRenameConfig


class ClickContext:
    """Context object for Click commands."""

    def __init__(self):
        self.config: BulkRenameConfig | None = None
        self.loader: ConfigLoader | None = None
        self.rich_cli: RichCliComponents | None = None  # Will be initialized in app()
        self.ui_style: UIStyle = UIStyle.CLASSIC  # Will be set in app()
        self.verbose: bool = False
        self.quiet: bool = False
        self.dry_run: bool = False
