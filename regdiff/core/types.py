"""
Core data types for regdiff.

This module defines the value types shared by the diff engine and the
article reconciliation algorithms:
- DiffPart / DiffResult: Token-level diff between two texts
- Article / VersionSnapshot: Already-segmented regulation input
- ComparedArticle: One row of a two-version comparison
- ArticleLifecycleRow: One row of the multi-version matrix
- DetailView: Content selected for an expanded matrix row

All of them are built and owned by the caller; the core never keeps
references to them between calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class PartKind(str, Enum):
    """Label of a diff run."""

    EQUAL = "equal"
    INSERT = "insert"
    DELETE = "delete"


class PairStatus(str, Enum):
    """Status of an article when comparing exactly two versions."""

    UNCHANGED = "unchanged"
    MODIFIED = "modified"
    NEW = "new"
    DELETED = "deleted"


class LifecycleStatus(str, Enum):
    """Status of an article across the whole version history."""

    SAME = "same"
    MODIFIED = "modified"
    NEW = "new"
    INHERITED = "inherited"


class DetailKind(str, Enum):
    """What an expanded matrix row shows for the selected version pair."""

    UNCHANGED = "unchanged"
    DIFF = "diff"
    APPEARED = "appeared"
    IN_FORCE = "in_force"
    FALLBACK = "fallback"
    EMPTY = "empty"


@dataclass(frozen=True)
class DiffPart:
    """A run of consecutive tokens sharing one kind."""

    kind: PartKind
    text: str


@dataclass
class DiffResult:
    """Token-level difference between an old and a new text.

    Attributes:
        parts: Ordered diff runs; no two neighbours share a kind
        has_changes: True if any token was inserted or deleted
        added_count: Number of tokens in insert runs
        deleted_count: Number of tokens in delete runs
    """

    parts: list[DiffPart] = field(default_factory=list)
    has_changes: bool = False
    added_count: int = 0
    deleted_count: int = 0

    def old_text(self) -> str:
        """Rebuild the old text from equal and delete runs."""
        return "".join(p.text for p in self.parts if p.kind is not PartKind.INSERT)

    def new_text(self) -> str:
        """Rebuild the new text from equal and insert runs."""
        return "".join(p.text for p in self.parts if p.kind is not PartKind.DELETE)


@dataclass(frozen=True)
class Article:
    """A single legal article (a "Pasal") inside one version.

    Attributes:
        number: Article identifier as written in the source, e.g. "Pasal 6A"
        content: Raw article text
    """

    number: str
    content: str

    @property
    def key(self) -> str:
        """Identifier used for matching across versions."""
        return self.number.strip()


@dataclass
class VersionSnapshot:
    """One dated revision of a regulation.

    Attributes:
        year: Year of the revision, used for ordering and display
        articles: Articles defined by this revision
        label: Optional regulation number, e.g. "UU 13"
        id: Optional stable identifier from the upstream store
    """

    year: int
    articles: list[Article] = field(default_factory=list)
    label: str = ""
    id: str | None = None

    @property
    def display_name(self) -> str:
        if self.label:
            return f"{self.label}/{self.year}"
        return str(self.year)


@dataclass
class ComparedArticle:
    """Pairing of one article number between an old and a new version."""

    number: str
    old_article: Article | None
    new_article: Article | None
    status: PairStatus


@dataclass
class ArticleLifecycleRow:
    """One article number across an ordered sequence of versions.

    Attributes:
        article_number: Trimmed article identifier
        versions: Article per version (None where the version lacks it),
            aligned with the year-sorted version sequence
        status: Classification over the whole history
        inherited_from: For inherited rows, index of the last version that
            still defines the article
    """

    article_number: str
    versions: list[Article | None]
    status: LifecycleStatus
    inherited_from: int | None = None

    @property
    def first_index(self) -> int:
        return next((i for i, a in enumerate(self.versions) if a is not None), -1)

    @property
    def last_index(self) -> int:
        for i in range(len(self.versions) - 1, -1, -1):
            if self.versions[i] is not None:
                return i
        return -1


@dataclass
class DetailView:
    """Content shown for a matrix row under a selected version pair.

    Attributes:
        kind: Which selection rule applied
        content: Plain text to display (None for diff and empty views)
        diff: Token diff when both selected versions differ
        version_index: Version the content was taken from
    """

    kind: DetailKind
    content: str | None = None
    diff: DiffResult | None = None
    version_index: int | None = None
