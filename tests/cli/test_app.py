import json
import logging
import os
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import Result
from typer.testing import CliRunner

from character_rankings.cli.app import _parse_character_id, app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolate(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    for key in list(os.environ):
        if key.startswith("RANKINGS__"):
            monkeypatch.delenv(key)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _invoke(data_files: tuple[Path, Path], *args: str) -> Result:
    characters, rankings = data_files
    return runner.invoke(
        app,
        [
            "--config",
            "/nonexistent/rankings.yaml",
            "--characters",
            str(characters),
            "--rankings",
            str(rankings),
            *args,
        ],
    )


class TestParseCharacterId:
    def test_numeric_becomes_int(self) -> None:
        assert _parse_character_id("12") == 12

    def test_text_kept(self) -> None:
        assert _parse_character_id("kitty") == "kitty"


class TestQueryCommands:
    def test_years(self, data_files: tuple[Path, Path]) -> None:
        result = _invoke(data_files, "years")
        assert result.exit_code == 0
        assert "2023, 2024, 2025" in result.output

    def test_characters(self, data_files: tuple[Path, Path]) -> None:
        result = _invoke(data_files, "characters")
        assert result.exit_code == 0
        assert "Ribbon Cat" in result.output
        assert "Wandering Pup" in result.output

    def test_ranking_top(self, data_files: tuple[Path, Path]) -> None:
        result = _invoke(data_files, "ranking", "2025", "--top", "2")
        assert result.exit_code == 0
        assert "Cloud Puppy" in result.output
        assert "Jester Imp" in result.output
        assert "Ribbon Cat" not in result.output

    def test_ranking_unknown_year(self, data_files: tuple[Path, Path]) -> None:
        result = _invoke(data_files, "ranking", "1999")
        assert result.exit_code == 0
        assert "No rankings found for 1999" in result.output

    def test_history(self, data_files: tuple[Path, Path]) -> None:
        result = _invoke(data_files, "history", "5")
        assert result.exit_code == 0
        assert "Jester Imp" in result.output
        assert "2025" in result.output
        assert "2023" not in result.output

    def test_history_unknown_character(self, data_files: tuple[Path, Path]) -> None:
        result = _invoke(data_files, "history", "999")
        assert result.exit_code == 0
        assert "No ranking history for Unknown" in result.output

    def test_changes_default_latest(self, data_files: tuple[Path, Path]) -> None:
        result = _invoke(data_files, "changes")
        assert result.exit_code == 0
        assert "NEW" in result.output
        assert "Pudding Dog" not in result.output

    def test_changes_explicit_years(self, data_files: tuple[Path, Path]) -> None:
        result = _invoke(data_files, "changes", "--year", "2024", "--previous", "2023")
        assert result.exit_code == 0
        assert "Pudding Dog" in result.output

    def test_changes_requires_both_years(self, data_files: tuple[Path, Path]) -> None:
        result = _invoke(data_files, "changes", "--year", "2024")
        assert result.exit_code == 1

    def test_votes(self, data_files: tuple[Path, Path]) -> None:
        result = _invoke(data_files, "votes")
        assert result.exit_code == 0
        assert "3,050" in result.output
        assert "+41.7%" in result.output

    def test_generations(self, data_files: tuple[Path, Path]) -> None:
        result = _invoke(data_files, "generations", "2025")
        assert result.exit_code == 0
        assert "Legend" in result.output
        assert "1.5" in result.output

    def test_trends_default_selection(self, data_files: tuple[Path, Path]) -> None:
        result = _invoke(data_files, "trends")
        assert result.exit_code == 0
        assert "Cloud Puppy" in result.output

    def test_trends_votes(self, data_files: tuple[Path, Path]) -> None:
        result = _invoke(data_files, "trends", "4", "--votes")
        assert result.exit_code == 0
        assert "Pudding Dog" in result.output
        assert "300" in result.output


class TestValidateCommand:
    def test_clean_dataset(self, data_files: tuple[Path, Path]) -> None:
        result = _invoke(data_files, "validate")
        assert result.exit_code == 0
        assert "no issues" in result.output

    def test_reports_issues(self, tmp_path: Path, data_files: tuple[Path, Path]) -> None:
        rankings = json.loads(data_files[1].read_text())
        rankings["total_votes_by_year"]["2025"] = 1
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps(rankings))
        result = _invoke((data_files[0], bad), "validate")
        assert result.exit_code == 1
        assert "total_mismatch" in result.output


class TestErrors:
    def test_missing_dataset_file(self, tmp_path: Path, data_files: tuple[Path, Path]) -> None:
        result = _invoke((tmp_path / "missing.json", data_files[1]), "years")
        assert result.exit_code == 1
        assert "file not found" in result.output.replace("\n", " ")

    def test_invalid_config(self, data_files: tuple[Path, Path], monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RANKINGS__DISPLAY__TOP_N", "-3")
        result = _invoke(data_files, "years")
        assert result.exit_code == 1
        assert "must be > 0" in result.output

    def test_undecodable_dataset_file(self, tmp_path: Path, data_files: tuple[Path, Path]) -> None:
        bad = tmp_path / "broken_characters.json"
        bad.write_bytes(b"\xff\xfe")
        result = _invoke((bad, data_files[1]), "years")
        assert result.exit_code == 1
        assert "not valid utf-8" in result.output.replace("\n", " ")


class TestOptionBounds:
    @pytest.mark.parametrize("top", ["0", "-3"])
    def test_ranking_top_must_be_positive(self, data_files: tuple[Path, Path], top: str) -> None:
        result = _invoke(data_files, "ranking", "2025", "--top", top)
        assert result.exit_code == 2
        assert "No rankings found" not in result.output

    def test_generations_top_must_be_positive(self, data_files: tuple[Path, Path]) -> None:
        result = _invoke(data_files, "generations", "2025", "--top", "0")
        assert result.exit_code == 2

    def test_changes_limit_must_be_positive(self, data_files: tuple[Path, Path]) -> None:
        result = _invoke(data_files, "changes", "--limit", "-1")
        assert result.exit_code == 2
