"""Tests for YAML configuration loading."""

from pathlib import Path

import pytest

from regdiff.config import AppConfig, load_config


def test_load_config_without_path_returns_defaults():
    cfg = load_config(None)

    assert cfg == AppConfig()
    assert cfg.diff.max_tokens == 20000
    assert cfg.output.run_folder_mode == "input"
    assert cfg.logging.format == "jsonl"


def test_load_config_returns_independent_defaults():
    cfg = load_config(None)
    cfg.diff.max_tokens = 5

    assert load_config(None).diff.max_tokens == 20000


def test_load_config_merges_sections(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        "diff:\n"
        "  max_tokens: null\n"
        "output:\n"
        "  include_markdown: false\n"
        "logging:\n"
        "  level: DEBUG\n"
        "unknown_section:\n"
        "  foo: bar\n",
        encoding="utf-8",
    )

    cfg = load_config(str(path))

    assert cfg.diff.max_tokens is None
    assert cfg.output.include_markdown is False
    assert cfg.output.run_folder_mode == "input"
    assert cfg.logging.level == "DEBUG"
    assert cfg.logging.console is True


def test_load_config_empty_file_uses_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(str(path)) == AppConfig()


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ValueError, match="must be a mapping"):
        load_config(str(path))
