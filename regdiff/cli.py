"""
Command-line interface for regdiff.

Uses Typer to expose three commands:
- diff: token diff of two plain-text files
- compare: article-by-article comparison of two versions
- matrix: article lifecycle across every version in the input
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import AppConfig, load_config
from .core.compare import filter_compared
from .core.diff import diff_summary
from .core.matrix import filter_rows
from .core.types import DiffResult, LifecycleStatus, PairStatus, PartKind
from .output.writer import diff_to_dict
from .runner import diff_texts, run_comparison, run_matrix

app = typer.Typer(add_completion=False)
console = Console()


def _load(
    config: Path | None,
    log_level: str | None,
    log_format: str | None,
    log_file: bool | None,
    max_tokens: int | None,
) -> AppConfig:
    cfg = load_config(str(config) if config else None)
    if log_level:
        cfg.logging.level = log_level
    if log_format:
        cfg.logging.format = log_format
    if log_file is not None:
        cfg.logging.file = log_file
    if max_tokens is not None:
        cfg.diff.max_tokens = max_tokens
    return cfg


def _fail(exc: Exception) -> NoReturn:
    console.print(f"[red]Error:[/red] {escape(str(exc))}", highlight=False)
    raise typer.Exit(code=2)


def _format_diff(diff: DiffResult) -> str:
    pieces = []
    for part in diff.parts:
        if part.kind is PartKind.DELETE:
            pieces.append(f"[-{part.text}-]")
        elif part.kind is PartKind.INSERT:
            pieces.append(f"{{+{part.text}+}}")
        else:
            pieces.append(part.text)
    return "".join(pieces)


@app.command()
def diff(
    old_file: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    new_file: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    as_json: bool = typer.Option(False, "--json", help="Print the diff as JSON."),
    max_tokens: int | None = typer.Option(
        None, "--max-tokens", help="Refuse texts with more tokens than this."
    ),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
):
    """Show the word-level diff between two text files.

    Deleted runs are printed as [-text-], inserted runs as {+text+}.
    """
    cfg = _load(config, None, None, None, max_tokens)
    try:
        old_text = old_file.read_text(encoding="utf-8")
        new_text = new_file.read_text(encoding="utf-8")
        result = diff_texts(old_text, new_text, cfg.diff)
    except (TypeError, ValueError) as exc:
        _fail(exc)

    if as_json:
        console.print_json(json.dumps(diff_to_dict(result), ensure_ascii=False))
        return
    console.print(_format_diff(result), markup=False, highlight=False)
    console.print(f"[bold]{diff_summary(result)}[/bold]")


@app.command()
def compare(
    input: Path = typer.Option(..., "--input", "-i", exists=True, readable=True),
    old: str = typer.Option(..., "--old", help="Earlier version: id, label, label/year or year."),
    new: str = typer.Option(..., "--new", help="Later version: id, label, label/year or year."),
    output: Path = typer.Option(Path("out"), "--output", "-o"),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
    status: str | None = typer.Option(
        None, "--status", help="Only list articles with this status."
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_format: str | None = typer.Option(
        None, "--log-format", help="Log file format: jsonl or plain."
    ),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
    max_tokens: int | None = typer.Option(
        None, "--max-tokens", help="Refuse articles with more tokens than this."
    ),
):
    """Compare the articles of two versions."""
    cfg = _load(config, log_level, log_format, log_file, max_tokens)
    try:
        status_filter = PairStatus(status) if status else None
        result = run_comparison(input, output, cfg, old, new, console=console)
    except (TypeError, ValueError) as exc:
        _fail(exc)

    items = filter_compared(result.items, status_filter)
    if status_filter is None and not cfg.output.show_unchanged:
        items = [item for item in items if item.status is not PairStatus.UNCHANGED]

    table = Table(title=f"{result.old_version.display_name} -> {result.new_version.display_name}")
    table.add_column("Article")
    table.add_column("Status")
    table.add_column("Summary")
    for item in items:
        diff_result = result.diffs.get(item.number)
        table.add_row(
            item.number,
            item.status.value,
            diff_summary(diff_result) if diff_result is not None else "",
        )
    console.print(table)
    console.print(f"Result written: {result.output_path}")


@app.command()
def matrix(
    input: Path = typer.Option(..., "--input", "-i", exists=True, readable=True),
    earlier: int | None = typer.Option(
        None, "--earlier", help="Index of the earlier version for detail views."
    ),
    later: int | None = typer.Option(
        None, "--later", help="Index of the later version for detail views."
    ),
    output: Path = typer.Option(Path("out"), "--output", "-o"),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
    status: str | None = typer.Option(
        None, "--status", help="Only list articles with this status."
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_format: str | None = typer.Option(
        None, "--log-format", help="Log file format: jsonl or plain."
    ),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
    max_tokens: int | None = typer.Option(
        None, "--max-tokens", help="Refuse articles with more tokens than this."
    ),
):
    """Track every article across all versions in the input.

    Versions are indexed from 0 in year order. Without --earlier/--later
    details compare the earliest against the latest version.
    """
    cfg = _load(config, log_level, log_format, log_file, max_tokens)
    try:
        status_filter = LifecycleStatus(status) if status else None
        pair = None
        if later is not None:
            pair = (earlier or 0, later)
        elif earlier is not None:
            raise ValueError("--later is required when --earlier is given")
        result = run_matrix(input, output, cfg, pair=pair, console=console)
    except (TypeError, ValueError) as exc:
        _fail(exc)

    rows = filter_rows(result.rows, status_filter)
    if status_filter is None and not cfg.output.show_unchanged:
        rows = [row for row in rows if row.status is not LifecycleStatus.SAME]

    table = Table(title="Article matrix")
    table.add_column("Article")
    for index, version in enumerate(result.versions):
        marker = "*" if index in result.pair else ""
        table.add_column(f"{version.display_name}{marker}", justify="center")
    table.add_column("Status")
    for row in rows:
        cells = ["x" if article is not None else "-" for article in row.versions]
        table.add_row(row.article_number, *cells, row.status.value)
    console.print(table)
    console.print(f"Result written: {result.output_path}")


if __name__ == "__main__":
    app()
