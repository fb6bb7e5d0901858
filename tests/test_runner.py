"""Tests for run orchestration."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from regdiff import runner
from regdiff.config import AppConfig, DiffConfig
from regdiff.core.types import DetailKind, LifecycleStatus, PairStatus


def _write_input(tmp_path: Path) -> Path:
    data = {
        "versions": [
            {
                "id": "v2020",
                "label": "UU 6",
                "year": 2020,
                "articles": [
                    {"number": "Pasal 1", "content": "Setiap warga negara wajib membayar iuran bulanan."},
                    {"number": "Pasal 2", "content": "Iuran dikelola badan."},
                    {"number": "Pasal 4", "content": "Ketentuan baru."},
                ],
            },
            {
                "id": "v2003",
                "label": "UU 13",
                "year": 2003,
                "articles": [
                    {"number": "Pasal 1", "content": "Setiap orang wajib membayar iuran."},
                    {"number": "Pasal 2", "content": "Iuran dikelola badan."},
                    {"number": "Pasal 3", "content": "Ketentuan lama."},
                ],
            },
        ]
    }
    path = tmp_path / "uu.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def _quiet_config() -> AppConfig:
    cfg = AppConfig()
    cfg.logging.console = False
    return cfg


def test_run_comparison_writes_results(tmp_path: Path) -> None:
    input_path = _write_input(tmp_path)
    output_dir = tmp_path / "out"

    result = runner.run_comparison(input_path, output_dir, _quiet_config(), "UU 13", "v2020")

    assert result.output_path == output_dir / "uu" / "comparison.json"
    assert {item.number: item.status for item in result.items} == {
        "Pasal 1": PairStatus.MODIFIED,
        "Pasal 2": PairStatus.UNCHANGED,
        "Pasal 3": PairStatus.DELETED,
        "Pasal 4": PairStatus.NEW,
    }
    assert list(result.diffs) == ["Pasal 1"]
    assert result.stats.changes == 3

    payload = json.loads(result.output_path.read_text(encoding="utf-8"))
    assert payload["old_version"]["name"] == "UU 13/2003"
    assert payload["stats"]["changes"] == 3
    pasal_1 = payload["articles"][0]
    assert pasal_1["status"] == "modified"
    assert pasal_1["diff"]["has_changes"] is True
    assert {"kind": "delete", "text": "orang"} in pasal_1["diff"]["parts"]
    assert payload["articles"][1]["diff"] is None

    markdown = (output_dir / "uu" / "comparison.md").read_text(encoding="utf-8")
    assert "# UU 13/2003 -> UU 6/2020" in markdown
    assert "| Pasal 3 | deleted |  |" in markdown
    assert (output_dir / "uu" / "run.jsonl").exists()


def test_run_comparison_unknown_version(tmp_path: Path) -> None:
    input_path = _write_input(tmp_path)

    with pytest.raises(ValueError, match="No version matches"):
        runner.run_comparison(input_path, tmp_path / "out", _quiet_config(), "1990", "2020")


def test_run_matrix_uses_default_pair(tmp_path: Path) -> None:
    input_path = _write_input(tmp_path)
    cfg = _quiet_config()
    cfg.output.include_markdown = False

    result = runner.run_matrix(input_path, tmp_path / "out", cfg)

    assert [v.year for v in result.versions] == [2003, 2020]
    assert result.pair == (0, 1)
    statuses = {row.article_number: row.status for row in result.rows}
    assert statuses == {
        "Pasal 1": LifecycleStatus.MODIFIED,
        "Pasal 2": LifecycleStatus.SAME,
        "Pasal 3": LifecycleStatus.INHERITED,
        "Pasal 4": LifecycleStatus.NEW,
    }
    assert result.details["Pasal 1"].kind is DetailKind.DIFF
    assert result.details["Pasal 3"].kind is DetailKind.IN_FORCE
    assert result.details["Pasal 4"].kind is DetailKind.APPEARED
    assert not (tmp_path / "out" / "uu" / "matrix.md").exists()

    payload = json.loads(result.output_path.read_text(encoding="utf-8"))
    assert payload["pair"] == [0, 1]
    assert payload["stats"]["inherited"] == 1
    assert payload["articles"][2]["inherited_from"] == 0
    assert payload["articles"][2]["versions"][1] is None


def test_run_matrix_rejects_out_of_range_pair(tmp_path: Path) -> None:
    input_path = _write_input(tmp_path)

    with pytest.raises(ValueError, match="out of range"):
        runner.run_matrix(input_path, tmp_path / "out", _quiet_config(), pair=(0, 2))


def test_diff_texts_enforces_token_budget():
    cfg = DiffConfig(max_tokens=3)

    assert runner.diff_texts("a b", "a", cfg).has_changes
    with pytest.raises(runner.InputTooLargeError, match="above the limit of 3"):
        runner.diff_texts("a b c", "a", cfg)


def test_diff_texts_without_budget():
    diff = runner.diff_texts("a " * 50, "a " * 49, DiffConfig(max_tokens=None))

    assert diff.deleted_count == 2


def test_run_comparison_fails_on_oversized_article(tmp_path: Path) -> None:
    input_path = _write_input(tmp_path)
    cfg = _quiet_config()
    cfg.diff.max_tokens = 5

    with pytest.raises(runner.InputTooLargeError):
        runner.run_comparison(input_path, tmp_path / "out", cfg, "2003", "2020")


def test_build_run_output_dir_modes(tmp_path: Path) -> None:
    cfg = AppConfig()
    input_path = Path("versions.json")

    assert runner._build_run_output_dir(tmp_path, input_path, cfg) == tmp_path / "versions"  # noqa: SLF001

    cfg.output.run_folder_mode = "input_timestamp"
    name = runner._build_run_output_dir(tmp_path, input_path, cfg).name  # noqa: SLF001
    assert name.startswith("versions-")

    cfg.output.run_folder_mode = "weekly"
    with pytest.raises(ValueError, match="Unsupported run_folder_mode"):
        runner._build_run_output_dir(tmp_path, input_path, cfg)  # noqa: SLF001
