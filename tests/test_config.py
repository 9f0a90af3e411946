"""Tests for configuration models and the layered configuration loader."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from bulkrename.config.loader import ConfigLoader, ConfigurationError
from bulkrename.config.models import BulkRenameConfig, DisplayConfig, RenameDefaults


class TestConfigModels:
    def test_defaults(self):
        config = BulkRenameConfig()

        assert config.defaults.matcher == r".*\.jpeg$"
        assert config.defaults.renamer == "(jpeg)"
        assert config.defaults.replacement == "jpg"
        assert config.defaults.show_unchanged is True
        assert config.display.preview_limit == 10
        assert ".git" in config.discovery.exclude_dirs

    def test_invalid_regex_rejected(self):
        with pytest.raises(ValidationError):
            RenameDefaults(matcher="(")

    def test_preview_limit_must_be_positive(self):
        with pytest.raises(ValidationError):
            DisplayConfig(preview_limit=0)

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValidationError):
            BulkRenameConfig(colour="blue")


class TestConfigLoader:
    def test_load_toml(self, tmp_path: Path) -> None:
        config_file = tmp_path / ".bulkrename.toml"
        config_file.write_text(
            """
[defaults]
matcher = '\\.png$'
renamer = '(png)'
replacement = 'webp'

[display]
preview_limit = 3
"""
        )

        config = ConfigLoader(config_file).load_config()

        assert config.defaults.matcher == r"\.png$"
        assert config.defaults.replacement == "webp"
        assert config.display.preview_limit == 3

    def test_load_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "bulkrename.yml"
        config_file.write_text("discovery:\n  include_directories: true\n")

        config = ConfigLoader(config_file).load_config()

        assert config.discovery.include_directories is True

    def test_invalid_toml(self, tmp_path: Path) -> None:
        config_file = tmp_path / ".bulkrename.toml"
        config_file.write_text("[defaults\n")

        with pytest.raises(ConfigurationError, match="Invalid TOML"):
            ConfigLoader(config_file).load_config()

    def test_validation_error_wrapped(self, tmp_path: Path) -> None:
        config_file = tmp_path / ".bulkrename.toml"
        config_file.write_text("[display]\npreview_limit = 0\n")

        with pytest.raises(ConfigurationError, match="validation failed"):
            ConfigLoader(config_file).load_config()

    def test_explicit_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            ConfigLoader(tmp_path / "nope.toml").load_config()

    def test_default_file_search(self, tmp_path: Path, monkeypatch) -> None:
        (tmp_path / ".bulkrename.toml").write_text("[display]\npreview_limit = 4\n")
        monkeypatch.chdir(tmp_path)

        config = ConfigLoader().load_config()

        assert config.display.preview_limit == 4

    def test_no_file_uses_defaults(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)

        assert ConfigLoader().load_config() == BulkRenameConfig()

    def test_env_overrides(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("BULKRENAME_DISPLAY__PREVIEW_LIMIT", "25")
        monkeypatch.setenv("BULKRENAME_DEFAULTS__MATCHER", r"\d{1,3}\.png")
        monkeypatch.setenv("BULKRENAME_DISCOVERY__EXCLUDE_DIRS", "node_modules, .git")
        monkeypatch.setenv("BULKRENAME_DEFAULTS__SHOW_UNCHANGED", "off")

        config = ConfigLoader().load_config()

        assert config.display.preview_limit == 25
        assert config.defaults.matcher == r"\d{1,3}\.png"
        assert config.discovery.exclude_dirs == ["node_modules", ".git"]
        assert config.defaults.show_unchanged is False

    def test_env_pattern_values_stay_strings(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("BULKRENAME_DEFAULTS__REPLACEMENT", "2024")
        monkeypatch.setenv("BULKRENAME_DEFAULTS__MATCHER", "off")
        monkeypatch.setenv("BULKRENAME_DEFAULTS__RENAMER", "(1.5)")

        config = ConfigLoader().load_config()

        assert config.defaults.replacement == "2024"
        assert config.defaults.matcher == "off"
        assert config.defaults.renamer == "(1.5)"

    def test_cli_overrides_win(self, tmp_path: Path, monkeypatch) -> None:
        (tmp_path / ".bulkrename.toml").write_text("[defaults]\nreplacement = 'png'\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("BULKRENAME_DEFAULTS__REPLACEMENT", "gif")

        config = ConfigLoader().load_config(
            cli_overrides={"defaults": {"replacement": "webp"}}
        )

        assert config.defaults.replacement == "webp"

    def test_cache_and_reload(self, tmp_path: Path) -> None:
        config_file = tmp_path / ".bulkrename.toml"
        config_file.write_text("[display]\npreview_limit = 2\n")
        loader = ConfigLoader(config_file)

        first = loader.load_config()
        config_file.write_text("[display]\npreview_limit = 7\n")

        assert loader.load_config() is first
        assert loader.load_config(reload=True).display.preview_limit == 7

    @pytest.mark.parametrize("filename", [".bulkrename.toml", ".bulkrename.yml"])
    def test_sample_config_round_trips(self, tmp_path: Path, filename: str) -> None:
        path = ConfigLoader().create_sample_config(tmp_path / filename)

        assert ConfigLoader(path).load_config() == BulkRenameConfig()
        assert "Uncomment" not in path.read_text()
        assert "built-in default" in path.read_text()

    def test_sample_config_refuses_overwrite(self, tmp_path: Path) -> None:
        target = tmp_path / ".bulkrename.toml"
        target.write_text("# mine\n")

        with pytest.raises(ConfigurationError, match="already exists"):
            ConfigLoader().create_sample_config(target)

        ConfigLoader().create_sample_config(target, force=True)
        assert "[defaults]" in target.read_text()
