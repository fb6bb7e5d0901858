"""
Multi-version article matrix.

Rows are article numbers, columns are versions sorted by year. Each row
carries one status describing the whole history of the article:
- new: missing from the earliest version (wins over inherited)
- inherited: present in the earliest version but missing from the latest;
  still in force from the last version that defined it
- modified: present from first to last with more than one distinct text
- same: present from first to last with a single text

The selected version pair only decides what an expanded row shows
(select_detail); it never changes the row status.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .compare import index_articles, sort_by_article_number
from .diff import build_diff
from .types import (
    Article,
    ArticleLifecycleRow,
    DetailKind,
    DetailView,
    LifecycleStatus,
    VersionSnapshot,
)


def sort_versions(versions: Sequence[VersionSnapshot]) -> list[VersionSnapshot]:
    """Sort versions by year; versions sharing a year keep their input order."""
    if versions is None or isinstance(versions, str):
        raise TypeError(f"versions must be a sequence of VersionSnapshot, got {type(versions).__name__}")
    for version in versions:
        if not isinstance(version, VersionSnapshot):
            raise TypeError(f"versions must contain VersionSnapshot items, got {type(version).__name__}")
    return sorted(versions, key=lambda v: v.year)


def build_matrix(versions: Sequence[VersionSnapshot]) -> list[ArticleLifecycleRow]:
    """Reconcile every article number across an ordered set of versions.

    Args:
        versions: Version snapshots in any order; they are sorted by year

    Returns:
        One row per distinct article number, sorted by the numeric part of
        the number. ``row.versions`` is aligned with ``sort_versions(versions)``.
    """
    ordered = sort_versions(versions)
    indexes = [index_articles(v.articles, f"articles of version {v.display_name}") for v in ordered]

    numbers: dict[str, None] = {}
    for index in indexes:
        numbers.update(dict.fromkeys(index))

    rows = [_build_row(number, [index.get(number) for index in indexes]) for number in numbers]
    return sort_by_article_number(rows, key=lambda row: row.article_number)


def _build_row(number: str, per_version: list[Article | None]) -> ArticleLifecycleRow:
    present = [i for i, article in enumerate(per_version) if article is not None]
    first, last = present[0], present[-1]

    inherited_from = None
    if first > 0:
        status = LifecycleStatus.NEW
    elif last < len(per_version) - 1:
        status = LifecycleStatus.INHERITED
        inherited_from = last
    elif len({per_version[i].content for i in present}) > 1:
        status = LifecycleStatus.MODIFIED
    else:
        status = LifecycleStatus.SAME

    return ArticleLifecycleRow(
        article_number=number,
        versions=per_version,
        status=status,
        inherited_from=inherited_from,
    )


def default_pair(version_count: int) -> tuple[int, int]:
    """Earliest against latest version."""
    if version_count < 2:
        return (0, 0)
    return (0, version_count - 1)


def validate_pair(pair: tuple[int, int], version_count: int) -> tuple[int, int]:
    """Check that both indices of a selected pair address existing versions.

    Raises:
        ValueError: If an index is out of range
    """
    earlier, later = pair
    for index in (earlier, later):
        if not 0 <= index < version_count:
            raise ValueError(
                f"Version index {index} out of range for {version_count} version(s)"
            )
    return earlier, later


def select_detail(row: ArticleLifecycleRow, pair: tuple[int, int]) -> DetailView:
    """Pick what to show for a row when versions ``pair`` are compared.

    - both selected versions have the article: their diff, or the text itself
      when identical
    - only the later one has it: the article newly appears in the pair
    - only the earlier one has it: the article stays in force unchanged
    - neither has it: content from the latest version that has it

    Raises:
        ValueError: If an index is out of range for the row
    """
    earlier, later = validate_pair(pair, len(row.versions))
    old = row.versions[earlier]
    new = row.versions[later]

    if old is not None and new is not None:
        if old.content == new.content:
            return DetailView(DetailKind.UNCHANGED, content=new.content, version_index=later)
        return DetailView(DetailKind.DIFF, diff=build_diff(old.content, new.content))
    if new is not None:
        return DetailView(DetailKind.APPEARED, content=new.content, version_index=later)
    if old is not None:
        return DetailView(DetailKind.IN_FORCE, content=old.content, version_index=earlier)

    last = row.last_index
    if last < 0:
        return DetailView(DetailKind.EMPTY)
    return DetailView(DetailKind.FALLBACK, content=row.versions[last].content, version_index=last)


def filter_rows(
    rows: list[ArticleLifecycleRow], status: LifecycleStatus | None = None
) -> list[ArticleLifecycleRow]:
    if status is None:
        return list(rows)
    return [row for row in rows if row.status is status]


@dataclass
class MatrixStats:
    """Counts per lifecycle status across the matrix."""

    total: int = 0
    same: int = 0
    modified: int = 0
    new: int = 0
    inherited: int = 0


def matrix_stats(rows: list[ArticleLifecycleRow]) -> MatrixStats:
    stats = MatrixStats(total=len(rows))
    for row in rows:
        if row.status is LifecycleStatus.SAME:
            stats.same += 1
        elif row.status is LifecycleStatus.MODIFIED:
            stats.modified += 1
        elif row.status is LifecycleStatus.NEW:
            stats.new += 1
        elif row.status is LifecycleStatus.INHERITED:
            stats.inherited += 1
    return stats
