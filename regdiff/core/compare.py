"""
Two-version article comparison.

Articles are matched by their trimmed number. Each number in the union of
both versions gets one status:
- new: only the new version defines it
- deleted: only the old version defines it
- unchanged: both define it with identical content
- modified: both define it with different content

Token diffs of modified articles are left to the caller (see diff_compared)
so listing a large comparison stays cheap.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TypeVar

from .diff import build_diff
from .types import Article, ComparedArticle, DiffResult, PairStatus

T = TypeVar("T")

_NON_DIGIT_RE = re.compile(r"[^0-9]")


def article_sort_key(number: str) -> tuple[int, str]:
    """Numeric ordering key for an article number.

    Every non-digit character is stripped and the rest compared as a
    non-negative integer; numbers without digits sort as 0. The integer is
    kept as (digit count, digits) with leading zeros removed, which orders
    like int() without its limit on very long digit strings.

    Examples:
        >>> article_sort_key("Pasal 1A")
        (1, '1')
        >>> article_sort_key("Penjelasan")
        (0, '')
    """
    digits = _NON_DIGIT_RE.sub("", number).lstrip("0")
    return (len(digits), digits)


def sort_by_article_number(items: Iterable[T], key: Callable[[T], str]) -> list[T]:
    """Stable sort by article_sort_key; ties keep their input order."""
    return sorted(items, key=lambda item: article_sort_key(key(item)))


def index_articles(articles: Iterable[Article], name: str = "articles") -> dict[str, Article]:
    """Map trimmed article numbers to articles; a repeated number keeps the last one."""
    if articles is None or isinstance(articles, str):
        raise TypeError(f"{name} must be a collection of Article, got {type(articles).__name__}")
    mapping: dict[str, Article] = {}
    for article in articles:
        if not isinstance(article, Article):
            raise TypeError(f"{name} must contain Article items, got {type(article).__name__}")
        mapping[article.key] = article
    return mapping


def compare_versions(
    old_articles: Iterable[Article],
    new_articles: Iterable[Article],
) -> list[ComparedArticle]:
    """Classify every article number between two versions.

    Args:
        old_articles: Articles of the earlier version
        new_articles: Articles of the later version

    Returns:
        One ComparedArticle per distinct article number, sorted by the
        numeric part of the number

    Raises:
        TypeError: If either collection is None or holds non-Article items
    """
    old_map = index_articles(old_articles, "old_articles")
    new_map = index_articles(new_articles, "new_articles")

    # dict keeps first-seen order: old numbers first, then numbers only in new
    numbers = dict.fromkeys([*old_map, *new_map])

    compared: list[ComparedArticle] = []
    for number in numbers:
        old_article = old_map.get(number)
        new_article = new_map.get(number)
        if old_article is None:
            status = PairStatus.NEW
        elif new_article is None:
            status = PairStatus.DELETED
        elif old_article.content == new_article.content:
            status = PairStatus.UNCHANGED
        else:
            status = PairStatus.MODIFIED
        compared.append(
            ComparedArticle(
                number=number,
                old_article=old_article,
                new_article=new_article,
                status=status,
            )
        )

    return sort_by_article_number(compared, key=lambda item: item.number)


def diff_compared(item: ComparedArticle) -> DiffResult | None:
    """Token diff for a modified comparison row, None for any other status."""
    if item.status is not PairStatus.MODIFIED:
        return None
    assert item.old_article is not None and item.new_article is not None
    return build_diff(item.old_article.content, item.new_article.content)


def filter_compared(
    items: list[ComparedArticle], status: PairStatus | None = None
) -> list[ComparedArticle]:
    if status is None:
        return list(items)
    return [item for item in items if item.status is status]


@dataclass
class ComparisonStats:
    """Counts per status for a two-version comparison.

    Attributes:
        total: Number of distinct article numbers
        unchanged: Articles identical in both versions
        modified: Articles whose content changed
        new: Articles only in the new version
        deleted: Articles only in the old version
    """

    total: int = 0
    unchanged: int = 0
    modified: int = 0
    new: int = 0
    deleted: int = 0

    @property
    def changes(self) -> int:
        return self.modified + self.new + self.deleted


def comparison_stats(items: list[ComparedArticle]) -> ComparisonStats:
    stats = ComparisonStats(total=len(items))
    for item in items:
        if item.status is PairStatus.UNCHANGED:
            stats.unchanged += 1
        elif item.status is PairStatus.MODIFIED:
            stats.modified += 1
        elif item.status is PairStatus.NEW:
            stats.new += 1
        elif item.status is PairStatus.DELETED:
            stats.deleted += 1
    return stats
