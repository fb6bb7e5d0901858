"""
regdiff - verbatim diffs and version tracking for regulation articles.

This package compares already-segmented legal articles ("Pasal") across
successive versions of a regulation: a word-level LCS diff for article
texts, a two-version comparison, and a multi-version lifecycle matrix.

Main entry point is the CLI via the `regdiff` command.

Example:
    $ regdiff matrix -i versions.json -o output/
"""

__all__ = [
    "__version__",
    "build_diff",
    "build_matrix",
    "compare_versions",
    "select_detail",
    "tokenize",
]
__version__ = "0.1.0"

from .core.compare import compare_versions
from .core.diff import build_diff
from .core.matrix import build_matrix, select_detail
from .core.tokenizer import tokenize
