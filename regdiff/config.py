"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- DiffConfig: Token diff limits
- MatrixConfig: Multi-version matrix settings
- OutputConfig: Output folder and report settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml


@dataclass
class DiffConfig:
    """Configuration for token diffs.

    Attributes:
        max_tokens: Maximum tokens per side before a diff is refused
            (the LCS table grows with the product of both sides). None disables
            the guard.
    """

    max_tokens: int | None = 20000


@dataclass
class MatrixConfig:
    """Configuration for the multi-version matrix.

    Attributes:
        include_details: Whether to compute a detail view for every row
    """

    include_details: bool = True


@dataclass
class OutputConfig:
    """Configuration for output generation.

    Attributes:
        run_folder_mode: How to name output folders ("input", "timestamp", "input_timestamp")
        include_markdown: Whether to write a Markdown report next to the JSON result
        show_unchanged: Whether console tables list unchanged/same articles
    """

    run_folder_mode: str = "input"
    include_markdown: bool = True
    show_unchanged: bool = False


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the main log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = True
    format: str = "jsonl"
    filename: str = "run.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    diff: DiffConfig = field(default_factory=DiffConfig)
    matrix: MatrixConfig = field(default_factory=MatrixConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config file {path}: top level must be a mapping")

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "diff": {
            "max_tokens": cfg.diff.max_tokens,
        },
        "matrix": {
            "include_details": cfg.matrix.include_details,
        },
        "output": {
            "run_folder_mode": cfg.output.run_folder_mode,
            "include_markdown": cfg.output.include_markdown,
            "show_unchanged": cfg.output.show_unchanged,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        diff=DiffConfig(**data["diff"]),
        matrix=MatrixConfig(**data["matrix"]),
        output=OutputConfig(**data["output"]),
        logging=LoggingConfig(**data["logging"]),
    )
