"""
Core diff engine and article reconciliation.

This package is pure computation: plain data in, plain data out, no I/O
and no shared state.
"""

from .compare import (
    ComparisonStats,
    article_sort_key,
    compare_versions,
    comparison_stats,
    diff_compared,
    filter_compared,
)
from .diff import build_diff, diff_summary, merge_parts
from .lcs import longest_common_subsequence
from .matrix import (
    MatrixStats,
    build_matrix,
    default_pair,
    filter_rows,
    matrix_stats,
    select_detail,
    sort_versions,
    validate_pair,
)
from .tokenizer import tokenize
from .types import (
    Article,
    ArticleLifecycleRow,
    ComparedArticle,
    DetailKind,
    DetailView,
    DiffPart,
    DiffResult,
    LifecycleStatus,
    PairStatus,
    PartKind,
    VersionSnapshot,
)

__all__ = [
    "Article",
    "ArticleLifecycleRow",
    "ComparedArticle",
    "ComparisonStats",
    "DetailKind",
    "DetailView",
    "DiffPart",
    "DiffResult",
    "LifecycleStatus",
    "MatrixStats",
    "PairStatus",
    "PartKind",
    "VersionSnapshot",
    "article_sort_key",
    "build_diff",
    "build_matrix",
    "compare_versions",
    "comparison_stats",
    "default_pair",
    "diff_compared",
    "diff_summary",
    "filter_compared",
    "filter_rows",
    "longest_common_subsequence",
    "matrix_stats",
    "merge_parts",
    "select_detail",
    "sort_versions",
    "tokenize",
    "validate_pair",
]
