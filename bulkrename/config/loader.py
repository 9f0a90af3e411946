"""Configuration loader for bulkrename."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import BulkRenameConfig

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when configuration loading or validation fails."""

    pass


SAMPLE_TOML = """# bulkrename configuration
# Every value below is the built-in default; edit the ones you want to change.

# =============================================================================
# PROMPT DEFAULTS
# =============================================================================

[defaults]
matcher = '.*\\.jpeg$'       # Regex selecting the paths to rename ('$' is appended if missing)
renamer = '(jpeg)'           # Regex with exactly one capture group
replacement = 'jpg'          # Replacement text; $1, ${1} and ${name} are expanded
show_unchanged = true        # Show untouched paths in the preview table

# =============================================================================
# DISCOVERY
# =============================================================================

[discovery]
exclude_dirs = ['.git', '.hg', '.svn', '__pycache__']
include_directories = false  # Offer directories as rename candidates
follow_symlinks = false

# =============================================================================
# DISPLAY
# =============================================================================

[display]
preview_limit = 10           # Matched paths listed before the renamer prompt
ui = 'classic'               # Options: 'classic', 'minimal'
"""

SAMPLE_YAML = """# bulkrename configuration
# Every value below is the built-in default; edit the ones you want to change.

defaults:
  matcher: '.*\\.jpeg$'       # Regex selecting the paths to rename
  renamer: '(jpeg)'           # Regex with exactly one capture group
  replacement: 'jpg'          # $1, ${1} and ${name} are expanded
  show_unchanged: true

discovery:
  exclude_dirs: ['.git', '.hg', '.svn', '__pycache__']
  include_directories: false
  follow_symlinks: false

display:
  preview_limit: 10
  ui: 'classic'               # Options: 'classic', 'minimal'
"""


class ConfigLoader:
    """Configuration loader that merges config files, environment variables, and CLI arguments."""

    DEFAULT_CONFIG_FILES = [
        ".bulkrename.toml",  # TOML files (preferred)
        ".bulkrename.yml",
        ".bulkrename.yaml",
        "bulkrename.toml",
        "bulkrename.yml",
        "bulkrename.yaml",
    ]

    ENV_PREFIX = "BULKRENAME_"

    # Only these keys are split on commas; regexes routinely contain commas
    LIST_KEYS = {"exclude_dirs"}
    # Pattern and replacement text is taken verbatim, never coerced
    STRING_KEYS = {"matcher", "renamer", "replacement"}

    def __init__(self, config_file: str | Path | None = None):
        """Initialize the configuration loader.

        Args:
            config_file: Path to configuration file. If None, will search for default files.
        """
        self.config_file = Path(config_file) if config_file else None
        self._config_cache: BulkRenameConfig | None = None

    def load_config(
        self,
        env_overrides: dict[str, Any] | None = None,
        cli_overrides: dict[str, Any] | None = None,
        reload: bool = False,
    ) -> BulkRenameConfig:
        """Load configuration from all sources.

        Args:
            env_overrides: Environment variable overrides
            cli_overrides: CLI argument overrides
            reload: Force reload even if cached

        Returns:
            Validated bulkrename configuration

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if self._config_cache is not None and not reload:
            return self._config_cache

        try:
            config_dict: dict[str, Any] = {}

            # 1. Load from configuration file (TOML or YAML)
            file_config = self._load_config_file()
            if file_config:
                config_dict = self._deep_merge(config_dict, file_config)
                logger.debug(
                    f"Loaded configuration from {self._get_config_file_path()}"
                )

            # 2. Apply environment variable overrides
            env_config = env_overrides or self._load_env_config()
            if env_config:
                config_dict = self._deep_merge(config_dict, env_config)
                logger.debug("Applied environment variable overrides")

            # 3. Apply CLI overrides (highest priority)
            if cli_overrides:
                config_dict = self._deep_merge(config_dict, cli_overrides)
                logger.debug("Applied CLI argument overrides")

            # 4. Validate and create Pydantic model
            self._config_cache = BulkRenameConfig(**config_dict)
            logger.debug("Configuration loaded and validated successfully")

            return self._config_cache

        except ConfigurationError:
            raise
        except ValidationError as e:
            error_msg = f"Configuration validation failed: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e
        except Exception as e:
            error_msg = f"Failed to load configuration: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

    def _load_config_file(self) -> dict[str, Any] | None:
        """Load configuration from TOML or YAML file."""
        config_file = self._get_config_file_path()

        if not config_file:
            logger.debug("No configuration file found, using defaults")
            return None

        if not config_file.exists():
            if self.config_file is not None:
                raise ConfigurationError(f"Configuration file not found: {config_file}")
            return None

        try:
            if config_file.suffix.lower() == ".toml":
                return self._load_toml_file(config_file)
            elif config_file.suffix.lower() in (".yml", ".yaml"):
                return self._load_yaml_file(config_file)
            else:
                logger.warning(f"Unknown configuration file type: {config_file}")
                return None

        except OSError as e:
            error_msg = f"Failed to read {config_file}: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

    def _load_toml_file(self, config_file: Path) -> dict[str, Any] | None:
        """Load configuration from TOML file."""
        try:
            with open(config_file, "rb") as f:
                content = tomllib.load(f)

            if not content:
                logger.warning(f"Configuration file {config_file} is empty")
                return None

            return content

        except tomllib.TOMLDecodeError as e:
            error_msg = f"Invalid TOML in {config_file}: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

    def _load_yaml_file(self, config_file: Path) -> dict[str, Any] | None:
        """Load configuration from YAML file."""
        try:
            with open(config_file, encoding="utf-8") as f:
                content = yaml.safe_load(f)

            if not content:
                logger.warning(f"Configuration file {config_file} is empty")
                return None

            if not isinstance(content, dict):
                raise ConfigurationError(
                    f"Configuration file {config_file} must contain a mapping"
                )

            return content

        except yaml.YAMLError as e:
            error_msg = f"Invalid YAML in {config_file}: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

    def _load_env_config(self) -> dict[str, Any]:
        """Load configuration from environment variables."""
        env_config: dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(self.ENV_PREFIX):
                continue

            config_key = key[len(self.ENV_PREFIX) :].lower()
            # BULKRENAME_QUIET is a logging switch, not a config section
            if "__" not in config_key:
                continue

            # e.g., BULKRENAME_DISPLAY__PREVIEW_LIMIT -> display.preview_limit
            nested_keys = config_key.split("__")
            parsed_value = self._parse_env_value(value, nested_keys[-1])
            self._set_nested_value(env_config, nested_keys, parsed_value)

        return env_config

    def _parse_env_value(self, value: str, key: str = "") -> Any:
        """Parse environment variable value to appropriate Python type."""
        if key in self.LIST_KEYS:
            return [item.strip() for item in value.split(",") if item.strip()]
        if key in self.STRING_KEYS:
            return value

        # Handle boolean values
        if value.lower() in ("true", "yes", "on"):
            return True
        elif value.lower() in ("false", "no", "off"):
            return False

        # Handle numeric values
        try:
            if "." not in value:
                return int(value)
            else:
                return float(value)
        except ValueError:
            pass

        return value

    def _set_nested_value(self, config: dict[str, Any], keys: list, value: Any) -> None:
        """Set a nested value in the configuration dictionary."""
        current = config

        for key in keys[:-1]:
            if key not in current:
                current[key] = {}
            current = current[key]

        current[keys[-1]] = value

    def _get_config_file_path(self) -> Path | None:
        """Get the path to the configuration file."""
        if self.config_file:
            return self.config_file

        for filename in self.DEFAULT_CONFIG_FILES:
            path = Path(filename)
            if path.exists():
                return path

        return None

    def _deep_merge(
        self, base: dict[str, Any], updates: dict[str, Any]
    ) -> dict[str, Any]:
        """Deeply merge updates into base dictionary."""
        result = base.copy()

        for key, value in updates.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def create_sample_config(
        self, filepath: str | Path | None = None, force: bool = False
    ) -> Path:
        """Create a commented sample configuration file.

        Args:
            filepath: Path for the config file. Defaults to .bulkrename.toml
            force: Overwrite an existing file

        Returns:
            Path to the created configuration file

        Raises:
            ConfigurationError: If the file exists and force is not set
        """
        filepath = Path(filepath) if filepath is not None else Path(".bulkrename.toml")

        if filepath.exists() and not force:
            raise ConfigurationError(
                f"Configuration file already exists: {filepath} (use --force to overwrite)"
            )

        if filepath.suffix.lower() in (".yml", ".yaml"):
            content = SAMPLE_YAML
        else:
            content = SAMPLE_TOML

        try:
            filepath.write_text(content, encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Failed to write {filepath}: {e}") from e

        logger.info(f"Created sample configuration at {filepath}")
        return filepath

