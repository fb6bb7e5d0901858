"""Serialise comparison and matrix results to JSON and Markdown files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..core.compare import ComparisonStats
from ..core.diff import diff_summary
from ..core.matrix import MatrixStats
from ..core.types import (
    Article,
    ArticleLifecycleRow,
    ComparedArticle,
    DetailView,
    DiffResult,
    VersionSnapshot,
)


def diff_to_dict(diff: DiffResult) -> dict[str, Any]:
    return {
        "parts": [{"kind": part.kind.value, "text": part.text} for part in diff.parts],
        "has_changes": diff.has_changes,
        "added_count": diff.added_count,
        "deleted_count": diff.deleted_count,
        "summary": diff_summary(diff),
    }


def _article_to_dict(article: Article | None) -> dict[str, str] | None:
    if article is None:
        return None
    return {"number": article.number, "content": article.content}


def version_to_dict(version: VersionSnapshot) -> dict[str, Any]:
    return {
        "id": version.id,
        "label": version.label,
        "year": version.year,
        "name": version.display_name,
        "article_count": len(version.articles),
    }


def compared_to_dict(item: ComparedArticle, diff: DiffResult | None = None) -> dict[str, Any]:
    return {
        "number": item.number,
        "status": item.status.value,
        "old": _article_to_dict(item.old_article),
        "new": _article_to_dict(item.new_article),
        "diff": diff_to_dict(diff) if diff is not None else None,
    }


def detail_to_dict(detail: DetailView) -> dict[str, Any]:
    return {
        "kind": detail.kind.value,
        "content": detail.content,
        "version_index": detail.version_index,
        "diff": diff_to_dict(detail.diff) if detail.diff is not None else None,
    }


def row_to_dict(row: ArticleLifecycleRow, detail: DetailView | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "number": row.article_number,
        "status": row.status.value,
        "inherited_from": row.inherited_from,
        "versions": [_article_to_dict(article) for article in row.versions],
    }
    if detail is not None:
        payload["detail"] = detail_to_dict(detail)
    return payload


def stats_to_dict(stats: ComparisonStats | MatrixStats) -> dict[str, int]:
    data = dict(vars(stats))
    if isinstance(stats, ComparisonStats):
        data["changes"] = stats.changes
    return data


def write_json(payload: dict[str, Any], output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)


def render_comparison_markdown(
    old_version: VersionSnapshot,
    new_version: VersionSnapshot,
    items: list[ComparedArticle],
    stats: ComparisonStats,
    diffs: dict[str, DiffResult],
    output_path: Path,
) -> None:
    """Write a Markdown summary of a two-version comparison.

    Modified articles get the summary of their entry in ``diffs`` in the last
    column; the table lists every article number in numeric order.
    """
    lines = [
        f"# {old_version.display_name} -> {new_version.display_name}",
        "",
        f"Total: {stats.total} | Changes: {stats.changes} "
        f"(modified {stats.modified}, new {stats.new}, deleted {stats.deleted}, "
        f"unchanged {stats.unchanged})",
        "",
        "| Article | Status | Summary |",
        "| --- | --- | --- |",
    ]
    for item in items:
        diff = diffs.get(item.number)
        summary = diff_summary(diff) if diff is not None else ""
        lines.append(f"| {_cell(item.number)} | {item.status.value} | {summary} |")
    lines.append("")
    output_path.write_text("\n".join(lines), encoding="utf-8")


def render_matrix_markdown(
    versions: list[VersionSnapshot],
    rows: list[ArticleLifecycleRow],
    stats: MatrixStats,
    output_path: Path,
) -> None:
    header = ["Article", *(v.display_name for v in versions), "Status"]
    lines = [
        "# Article matrix",
        "",
        f"Versions: {len(versions)} | Articles: {stats.total} "
        f"(same {stats.same}, modified {stats.modified}, new {stats.new}, "
        f"inherited {stats.inherited})",
        "",
        "| " + " | ".join(_cell(h) for h in header) + " |",
        "| " + " | ".join("---" for _ in header) + " |",
    ]
    for row in rows:
        cells = [_cell(row.article_number)]
        cells.extend("x" if article is not None else "-" for article in row.versions)
        cells.append(row.status.value)
        lines.append("| " + " | ".join(cells) + " |")
    lines.append("")
    output_path.write_text("\n".join(lines), encoding="utf-8")


def _cell(value: str) -> str:
    return value.replace("|", "\\|").replace("\n", " ")
