"""
Run orchestration for regdiff.

This module coordinates a comparison run:
1. Load segmented versions from the input file
2. Compare two versions, or reconcile all of them into a matrix
3. Diff modified articles (bounded by DiffConfig.max_tokens)
4. Write JSON (and optionally Markdown) results into a run folder

Logging is configured per run so the run folder holds the result files and
the structured log side by side.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from rich.console import Console

from .config import AppConfig, DiffConfig
from .core.compare import ComparisonStats, compare_versions, comparison_stats
from .core.diff import build_diff
from .core.matrix import (
    MatrixStats,
    build_matrix,
    default_pair,
    matrix_stats,
    select_detail,
    sort_versions,
    validate_pair,
)
from .core.tokenizer import tokenize
from .core.types import (
    ArticleLifecycleRow,
    ComparedArticle,
    DetailView,
    DiffResult,
    PairStatus,
    VersionSnapshot,
)
from .input.parser import find_version, load_versions
from .output.writer import (
    compared_to_dict,
    render_comparison_markdown,
    render_matrix_markdown,
    row_to_dict,
    stats_to_dict,
    version_to_dict,
    write_json,
)
from .utils.logging import log_event, setup_logging


class InputTooLargeError(ValueError):
    """Raised when a text exceeds the configured token budget for diffing."""


@dataclass
class ComparisonRun:
    """Result of a two-version comparison run.

    Attributes:
        old_version: The earlier version
        new_version: The later version
        items: One comparison row per article number
        diffs: Token diffs of modified articles, keyed by article number
        stats: Counts per status
        output_path: Path of the written JSON result
    """

    old_version: VersionSnapshot
    new_version: VersionSnapshot
    items: list[ComparedArticle]
    diffs: dict[str, DiffResult]
    stats: ComparisonStats
    output_path: Path


@dataclass
class MatrixRun:
    """Result of a multi-version matrix run."""

    versions: list[VersionSnapshot]
    rows: list[ArticleLifecycleRow]
    pair: tuple[int, int]
    stats: MatrixStats
    output_path: Path
    details: dict[str, DetailView] = field(default_factory=dict)


def diff_texts(old_text: str, new_text: str, cfg: DiffConfig) -> DiffResult:
    """Diff two texts after checking them against the token budget.

    Raises:
        InputTooLargeError: If either side exceeds cfg.max_tokens tokens
    """
    _check_token_budget(old_text, "old text", cfg)
    _check_token_budget(new_text, "new text", cfg)
    return build_diff(old_text, new_text)


def _check_token_budget(text: str, name: str, cfg: DiffConfig) -> None:
    if cfg.max_tokens is None:
        return
    count = len(tokenize(text))
    if count > cfg.max_tokens:
        raise InputTooLargeError(
            f"{name} has {count} tokens, above the limit of {cfg.max_tokens}"
        )


def run_comparison(
    input_path: Path,
    output_dir: Path,
    cfg: AppConfig,
    old_ref: str,
    new_ref: str,
    console: Console | None = None,
) -> ComparisonRun:
    """Compare two versions from an input file and write the results.

    Args:
        input_path: JSON/YAML file with segmented versions
        output_dir: Base directory for run folders
        cfg: Application configuration
        old_ref: Reference (id, label, name or year) of the earlier version
        new_ref: Reference of the later version
        console: Rich console for the summary line (none printed if None)

    Returns:
        ComparisonRun holding the results and the JSON output path
    """
    run_output_dir = _build_run_output_dir(output_dir, input_path, cfg)
    run_output_dir.mkdir(parents=True, exist_ok=True)
    logger = setup_logging(cfg.logging, run_output_dir)
    log_event(
        logger,
        "Comparison start",
        event="comparison_start",
        input=str(input_path),
        output=str(run_output_dir),
    )

    versions = load_versions(input_path)
    old_version = find_version(versions, old_ref)
    new_version = find_version(versions, new_ref)

    items = compare_versions(old_version.articles, new_version.articles)
    diffs = _diff_modified(items, cfg.diff, logger)
    stats = comparison_stats(items)

    output_path = run_output_dir / "comparison.json"
    write_json(
        {
            "old_version": version_to_dict(old_version),
            "new_version": version_to_dict(new_version),
            "stats": stats_to_dict(stats),
            "articles": [compared_to_dict(item, diffs.get(item.number)) for item in items],
        },
        output_path,
    )
    if cfg.output.include_markdown:
        render_comparison_markdown(
            old_version, new_version, items, stats, diffs, run_output_dir / "comparison.md"
        )

    log_event(
        logger,
        "Comparison complete",
        event="comparison_complete",
        output=str(output_path),
        total=stats.total,
        changes=stats.changes,
    )
    if console is not None:
        _render_comparison_stats(stats, console)

    return ComparisonRun(
        old_version=old_version,
        new_version=new_version,
        items=items,
        diffs=diffs,
        stats=stats,
        output_path=output_path,
    )


def _diff_modified(
    items: list[ComparedArticle], cfg: DiffConfig, logger: logging.Logger
) -> dict[str, DiffResult]:
    diffs: dict[str, DiffResult] = {}
    for item in items:
        if item.status is not PairStatus.MODIFIED:
            continue
        assert item.old_article is not None and item.new_article is not None
        diff = diff_texts(item.old_article.content, item.new_article.content, cfg)
        diffs[item.number] = diff
        logger.debug(
            f"Diffed {item.number}: +{diff.added_count} -{diff.deleted_count}"
        )
    return diffs


def run_matrix(
    input_path: Path,
    output_dir: Path,
    cfg: AppConfig,
    pair: tuple[int, int] | None = None,
    console: Console | None = None,
) -> MatrixRun:
    """Reconcile all versions from an input file and write the matrix.

    Args:
        input_path: JSON/YAML file with segmented versions
        output_dir: Base directory for run folders
        cfg: Application configuration
        pair: Indices (into the year-sorted versions) used for detail views;
            earliest vs latest when None
        console: Rich console for the summary line (none printed if None)

    Returns:
        MatrixRun holding the rows, the selected pair and the JSON output path

    Raises:
        ValueError: If the pair addresses a missing version
    """
    run_output_dir = _build_run_output_dir(output_dir, input_path, cfg)
    run_output_dir.mkdir(parents=True, exist_ok=True)
    logger = setup_logging(cfg.logging, run_output_dir)
    log_event(
        logger,
        "Matrix start",
        event="matrix_start",
        input=str(input_path),
        output=str(run_output_dir),
    )

    versions = sort_versions(load_versions(input_path))
    rows = build_matrix(versions)
    if pair is None:
        pair = default_pair(len(versions))
    elif versions:
        pair = validate_pair(pair, len(versions))

    details: dict[str, DetailView] = {}
    if cfg.matrix.include_details and versions:
        earlier, later = pair
        for row in rows:
            old = row.versions[earlier]
            new = row.versions[later]
            if old is not None and new is not None and old.content != new.content:
                _check_token_budget(old.content, f"{row.article_number} (old)", cfg.diff)
                _check_token_budget(new.content, f"{row.article_number} (new)", cfg.diff)
            details[row.article_number] = select_detail(row, pair)

    stats = matrix_stats(rows)
    output_path = run_output_dir / "matrix.json"
    write_json(
        {
            "versions": [version_to_dict(v) for v in versions],
            "pair": list(pair),
            "stats": stats_to_dict(stats),
            "articles": [row_to_dict(row, details.get(row.article_number)) for row in rows],
        },
        output_path,
    )
    if cfg.output.include_markdown:
        render_matrix_markdown(versions, rows, stats, run_output_dir / "matrix.md")

    log_event(
        logger,
        "Matrix complete",
        event="matrix_complete",
        output=str(output_path),
        versions=len(versions),
        total=stats.total,
    )
    if console is not None:
        _render_matrix_stats(stats, console)

    return MatrixRun(
        versions=versions,
        rows=rows,
        pair=pair,
        stats=stats,
        output_path=output_path,
        details=details,
    )


def _render_comparison_stats(stats: ComparisonStats, console: Console) -> None:
    console.print(
        "[bold]Comparison summary[/bold]: "
        f"total={stats.total}, changes={stats.changes}, modified={stats.modified}, "
        f"new={stats.new}, deleted={stats.deleted}, unchanged={stats.unchanged}"
    )


def _render_matrix_stats(stats: MatrixStats, console: Console) -> None:
    console.print(
        "[bold]Matrix summary[/bold]: "
        f"total={stats.total}, same={stats.same}, modified={stats.modified}, "
        f"new={stats.new}, inherited={stats.inherited}"
    )


def _build_run_output_dir(output_dir: Path, input_path: Path, cfg: AppConfig) -> Path:
    """Build the output directory name based on configured mode.

    Args:
        output_dir: Base output directory
        input_path: Path to input file (for extracting stem name)
        cfg: Application configuration

    Returns:
        Path to the run output directory

    Raises:
        ValueError: If run_folder_mode is not supported
    """
    stem = input_path.stem or "run"
    mode = (cfg.output.run_folder_mode or "input").lower()
    if mode == "input":
        run_dir_name = stem
    elif mode == "timestamp":
        timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        run_dir_name = f"{timestamp}-{stem}"
    elif mode == "input_timestamp":
        timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        run_dir_name = f"{stem}-{timestamp}"
    else:
        raise ValueError(
            "Unsupported run_folder_mode. Use 'input', 'timestamp', or 'input_timestamp'."
        )
    return output_dir / run_dir_name
