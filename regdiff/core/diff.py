"""
Verbatim word-level diff between two article texts.

The diff walks the old tokens, the new tokens and their longest common
subsequence with three cursors:
1. Old tokens before the next common token form a delete run
2. New tokens before the next common token form an insert run
3. The common token itself is emitted as an equal part
Once the common subsequence is exhausted, leftovers become a trailing
delete run and a trailing insert run. Adjacent parts of the same kind are
merged at the end.
"""

from __future__ import annotations

from .lcs import longest_common_subsequence
from .tokenizer import tokenize
from .types import DiffPart, DiffResult, PartKind


def build_diff(old_text: str, new_text: str) -> DiffResult:
    """Compute the token-level diff of two texts.

    Args:
        old_text: Text of the earlier version
        new_text: Text of the later version

    Returns:
        DiffResult whose equal+delete parts rebuild old_text and whose
        equal+insert parts rebuild new_text

    Raises:
        TypeError: If either text is not a string
    """
    if not isinstance(old_text, str):
        raise TypeError(f"old_text must be a str, got {type(old_text).__name__}")
    if not isinstance(new_text, str):
        raise TypeError(f"new_text must be a str, got {type(new_text).__name__}")

    old_tokens = tokenize(old_text)
    new_tokens = tokenize(new_text)
    lcs = longest_common_subsequence(old_tokens, new_tokens)

    parts: list[DiffPart] = []
    old_index = 0
    new_index = 0
    added = 0
    deleted = 0

    for common in lcs:
        start = old_index
        while old_index < len(old_tokens) and old_tokens[old_index] != common:
            old_index += 1
        if old_index > start:
            parts.append(DiffPart(PartKind.DELETE, "".join(old_tokens[start:old_index])))
            deleted += old_index - start

        start = new_index
        while new_index < len(new_tokens) and new_tokens[new_index] != common:
            new_index += 1
        if new_index > start:
            parts.append(DiffPart(PartKind.INSERT, "".join(new_tokens[start:new_index])))
            added += new_index - start

        parts.append(DiffPart(PartKind.EQUAL, common))
        old_index += 1
        new_index += 1

    if old_index < len(old_tokens):
        parts.append(DiffPart(PartKind.DELETE, "".join(old_tokens[old_index:])))
        deleted += len(old_tokens) - old_index
    if new_index < len(new_tokens):
        parts.append(DiffPart(PartKind.INSERT, "".join(new_tokens[new_index:])))
        added += len(new_tokens) - new_index

    return DiffResult(
        parts=merge_parts(parts),
        has_changes=added > 0 or deleted > 0,
        added_count=added,
        deleted_count=deleted,
    )


def merge_parts(parts: list[DiffPart]) -> list[DiffPart]:
    """Merge neighbouring parts that share a kind."""
    merged: list[DiffPart] = []
    for part in parts:
        if merged and merged[-1].kind is part.kind:
            merged[-1] = DiffPart(part.kind, merged[-1].text + part.text)
        else:
            merged.append(part)
    return merged


def diff_summary(diff: DiffResult) -> str:
    """Describe a diff in one short line, e.g. "+3 words added, -1 words deleted"."""
    if not diff.has_changes:
        return "No changes"
    pieces = []
    if diff.added_count > 0:
        pieces.append(f"+{diff.added_count} words added")
    if diff.deleted_count > 0:
        pieces.append(f"-{diff.deleted_count} words deleted")
    return ", ".join(pieces)
