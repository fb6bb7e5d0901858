"""
Longest common subsequence over token sequences.

Classic dynamic programming: O(m*n) time and memory in the token counts.
Article-length inputs (a few thousand tokens) are fine; callers comparing
whole documents should bound the input size first (see DiffConfig.max_tokens).
"""

from __future__ import annotations

from collections.abc import Sequence


def longest_common_subsequence(a: Sequence[str], b: Sequence[str]) -> list[str]:
    """Return one longest common subsequence of two token sequences.

    Tokens are compared with exact, case-sensitive equality. When several
    subsequences of the same length exist, backtracking steps through ``a``
    only when that keeps a strictly longer prefix, otherwise through ``b``.

    Args:
        a: Old token sequence
        b: New token sequence

    Returns:
        Common tokens in their original relative order

    Raises:
        TypeError: If either argument is None or a plain string
    """
    _require_sequence(a, "a")
    _require_sequence(b, "b")

    m = len(a)
    n = len(b)
    if m == 0 or n == 0:
        return []

    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(1, m + 1):
        row = dp[i]
        prev = dp[i - 1]
        token = a[i - 1]
        for j in range(1, n + 1):
            if token == b[j - 1]:
                row[j] = prev[j - 1] + 1
            else:
                row[j] = prev[j] if prev[j] > row[j - 1] else row[j - 1]

    lcs: list[str] = []
    i, j = m, n
    while i > 0 and j > 0:
        if a[i - 1] == b[j - 1]:
            lcs.append(a[i - 1])
            i -= 1
            j -= 1
        elif dp[i - 1][j] > dp[i][j - 1]:
            i -= 1
        else:
            j -= 1

    lcs.reverse()
    return lcs


def _require_sequence(value: object, name: str) -> None:
    if value is None or isinstance(value, str) or not isinstance(value, Sequence):
        raise TypeError(f"{name} must be a sequence of tokens, got {type(value).__name__}")
