"""Tests for the command-line entry point (selection_bar/cli.py)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from selection_bar.cli import main

if TYPE_CHECKING:
    from pathlib import Path


class TestCheck:
    def test_valid_config_summary(
        self, sample_config_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["check", str(sample_config_path)]) == 0

        out = capsys.readouterr().out
        assert "Surface: obj-42" in out
        assert "List items: 4" in out
        assert "vCurrency" in out
        assert "initial=North, 42 (oncePerSession)" in out

    def test_invalid_config_exit_code(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text('[[list_items]]\nlistType = "slider"\n', encoding="utf-8")

        assert main(["check", str(path)]) == 1

    def test_missing_config_exit_code(self, tmp_path: Path) -> None:
        assert main(["check", str(tmp_path / "absent.toml")]) == 1


class TestPresets:
    def test_standard(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["presets", "standard", "--today", "2024-03-15"]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 7
        assert lines[1].split() == ["This", "Week", "2024-03-11", "2024-03-17"]

    def test_rolling(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["presets", "rolling", "--today", "2024-03-15"])

        first = capsys.readouterr().out.splitlines()[0]
        assert first.split() == ["R3", "2023-12-15", "2024-03-15"]

    def test_rejects_bad_date(self) -> None:
        with pytest.raises(SystemExit):
            main(["presets", "standard", "--today", "15/03/2024"])

    def test_rejects_none_family(self) -> None:
        with pytest.raises(SystemExit):
            main(["presets", "none"])


class TestExpand:
    def test_expands_in_normalized_order(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["expand", "2024-04-01", "2024-03-30"]) == 0

        assert capsys.readouterr().out.splitlines() == [
            "2024-03-30",
            "2024-03-31",
            "2024-04-01",
        ]
