"""End-to-end tests for the bulkrename command line."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from bulkrename import __version__
from bulkrename.cli.main import app


@pytest.fixture
def runner(tmp_path, monkeypatch) -> CliRunner:
    # Keep the repository's own config files out of the search path
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    # Wide enough that long tmp paths never wrap mid-message
    monkeypatch.setenv("COLUMNS", "400")
    return CliRunner()


def test_version(runner) -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_missing_path_exits_with_error(runner, tmp_path) -> None:
    result = runner.invoke(app, ["rename", str(tmp_path / "missing"), "--yes"])

    assert result.exit_code == 1
    assert "No files found :(" in result.output


class TestNonInteractive:
    def test_applies_default_rename(self, runner, photo_library) -> None:
        result = runner.invoke(app, ["rename", str(photo_library), "--yes"])

        assert result.exit_code == 0, result.output
        assert "Matched 3 paths!" in result.output
        assert (photo_library / "beach.jpg").exists()
        assert (photo_library / "trip" / "day1.jpg").exists()
        assert not (photo_library / "sunset.jpeg").exists()

    def test_dry_run_changes_nothing(self, runner, photo_library) -> None:
        result = runner.invoke(app, ["--dry-run", "rename", str(photo_library), "--yes"])

        assert result.exit_code == 0, result.output
        assert "DRY RUN" in result.output
        assert (photo_library / "beach.jpeg").exists()
        assert not (photo_library / "beach.jpg").exists()

    def test_pattern_options(self, runner, photo_library) -> None:
        result = runner.invoke(
            app,
            [
                "rename",
                str(photo_library),
                "--yes",
                "-m",
                r"day\d\.jpe?g",
                "-r",
                r"day(\d)",
                "-s",
                "2024-01-0$1",
            ],
        )

        assert result.exit_code == 0, result.output
        assert (photo_library / "trip" / "2024-01-01.jpeg").exists()
        assert (photo_library / "trip" / "2024-01-02.jpg").exists()

    def test_no_matches_exits_with_error(self, runner, photo_library) -> None:
        result = runner.invoke(app, ["rename", str(photo_library), "--yes", "-m", r"\.png"])

        assert result.exit_code == 1
        assert "Didn't match any paths!" in result.output

    def test_invalid_renamer_option(self, runner, photo_library) -> None:
        result = runner.invoke(app, ["rename", str(photo_library), "--yes", "-r", "jpeg"])

        assert result.exit_code == 1
        assert "capture groups" in result.output

    def test_existing_destination_is_reported(self, runner, photo_library) -> None:
        (photo_library / "beach.jpg").write_text("existing")

        result = runner.invoke(app, ["rename", str(photo_library), "--yes"])

        assert result.exit_code == 0, result.output
        assert "already exists" in result.output
        assert (photo_library / "beach.jpg").read_text() == "existing"
        assert (photo_library / "beach.jpeg").exists()


class TestInteractive:
    def test_accept_defaults_and_apply(self, runner, photo_library) -> None:
        result = runner.invoke(app, ["rename", str(photo_library)], input="\n\n\n2\n")

        assert result.exit_code == 0, result.output
        assert "Enter your file-matching regex" in result.output
        assert "First 3 paths:" in result.output
        assert "Original" in result.output
        assert "Apply changes to 3 files" in result.output
        assert (photo_library / "beach.jpg").exists()

    def test_quit_without_changes(self, runner, photo_library) -> None:
        result = runner.invoke(app, ["rename", str(photo_library)], input="\n\n\n4\n")

        assert result.exit_code == 0, result.output
        assert (photo_library / "beach.jpeg").exists()
        assert not (photo_library / "beach.jpg").exists()

    def test_invalid_matcher_restarts_loop(self, runner, photo_library) -> None:
        result = runner.invoke(app, ["rename", str(photo_library)], input="(\n")

        assert result.exit_code == 0
        assert "#" * 51 in result.output
        assert "Failed to parse matcher regex" in result.output
        assert result.output.count("Enter your file-matching regex") == 2

    def test_no_match_restarts_loop(self, runner, photo_library) -> None:
        result = runner.invoke(app, ["rename", str(photo_library)], input="\\.png\n")

        assert result.exit_code == 0
        assert "Didn't match any paths!" in result.output

    def test_renamer_without_group(self, runner, photo_library) -> None:
        result = runner.invoke(app, ["rename", str(photo_library)], input="\njpeg\n")

        assert result.exit_code == 0
        assert "You don't have any capture groups for renaming?" in result.output

    def test_toggle_unchanged(self, runner, photo_library) -> None:
        result = runner.invoke(
            app, ["rename", str(photo_library)], input=".*\n\n\n3\n4\n"
        )

        assert result.exit_code == 0, result.output
        assert "Hiding unchanged files" in result.output
        assert "Show unchanged files" in result.output

    def test_change_regexes_returns_to_prompt(self, runner, photo_library) -> None:
        result = runner.invoke(app, ["rename", str(photo_library)], input="\n\n\n1\n")

        assert result.exit_code == 0, result.output
        assert result.output.count("Enter your file-matching regex") == 2
        assert (photo_library / "beach.jpeg").exists()


class TestConfigCommands:
    def test_init_config(self, runner) -> None:
        result = runner.invoke(app, ["init-config"])

        assert result.exit_code == 0, result.output
        with open(".bulkrename.toml", encoding="utf-8") as f:
            assert "[defaults]" in f.read()

        again = runner.invoke(app, ["init-config"])
        assert again.exit_code == 1
        assert "already exists" in again.output

    def test_init_config_yaml(self, runner) -> None:
        result = runner.invoke(app, ["init-config", "--format", "yaml"])

        assert result.exit_code == 0, result.output
        with open(".bulkrename.yml", encoding="utf-8") as f:
            assert "defaults:" in f.read()

    def test_config_file_feeds_defaults(self, runner, photo_library) -> None:
        with open(".bulkrename.toml", "w", encoding="utf-8") as f:
            f.write("[defaults]\nmatcher = '\\.txt$'\nrenamer = '(txt)'\nreplacement = 'md'\n")

        result = runner.invoke(app, ["rename", str(photo_library), "--yes"])

        assert result.exit_code == 0, result.output
        assert (photo_library / "notes.md").exists()

    def test_broken_config_exits(self, runner, photo_library) -> None:
        with open(".bulkrename.toml", "w", encoding="utf-8") as f:
            f.write("[display]\npreview_limit = 0\n")

        result = runner.invoke(app, ["rename", str(photo_library), "--yes"])

        assert result.exit_code == 1
        assert "Configuration error" in result.output
