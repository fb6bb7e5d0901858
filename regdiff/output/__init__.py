"""Result serialisation helpers."""

from .writer import (
    compared_to_dict,
    detail_to_dict,
    diff_to_dict,
    render_comparison_markdown,
    render_matrix_markdown,
    row_to_dict,
    stats_to_dict,
    version_to_dict,
    write_json,
)

__all__ = [
    "compared_to_dict",
    "detail_to_dict",
    "diff_to_dict",
    "render_comparison_markdown",
    "render_matrix_markdown",
    "row_to_dict",
    "stats_to_dict",
    "version_to_dict",
    "write_json",
]
