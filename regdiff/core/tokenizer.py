"""Split article text into word, whitespace and punctuation tokens."""

from __future__ import annotations

PUNCTUATION = frozenset(".,;:!?()[]{}")


def tokenize(text: str) -> list[str]:
    """Split text into atomic comparison units.

    Runs of ordinary characters become one word token. Every whitespace
    character and every character in PUNCTUATION is emitted as its own
    single-character token. Joining the result reproduces the input.

    Args:
        text: Raw article text (may be empty)

    Returns:
        List of tokens in original order

    Raises:
        TypeError: If text is not a string
    """
    if not isinstance(text, str):
        raise TypeError(f"text must be a str, got {type(text).__name__}")

    tokens: list[str] = []
    current: list[str] = []

    for ch in text:
        if ch.isspace() or ch in PUNCTUATION:
            if current:
                tokens.append("".join(current))
                current = []
            tokens.append(ch)
        else:
            current.append(ch)

    if current:
        tokens.append("".join(current))

    return tokens
