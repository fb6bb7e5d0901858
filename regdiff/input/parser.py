"""Parser for already-segmented regulation versions.

Article segmentation happens upstream (PDF/OCR/LLM tooling); this module
only reads its output. The expected document is JSON or YAML:

    {
        "versions": [
            {
                "id": "uu-13-2003",
                "label": "UU 13",
                "year": 2003,
                "articles": [
                    {"number": "Pasal 1", "content": "Dalam undang-undang ini ..."}
                ]
            }
        ]
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from ..core.types import Article, VersionSnapshot

logger = logging.getLogger(__name__)


def parse_versions(data: dict[str, Any]) -> list[VersionSnapshot]:
    """Parse an input document into version snapshots.

    Args:
        data: The parsed JSON/YAML content as a dictionary

    Returns:
        Version snapshots in document order. Articles with a missing number
        or non-text content are skipped with a warning.

    Raises:
        ValueError: If the 'versions' list is missing or a version has no
            usable year
    """
    if not isinstance(data, dict) or "versions" not in data:
        raise ValueError("Invalid input format: missing 'versions' key")
    items = data["versions"]
    if not isinstance(items, list):
        raise ValueError("Invalid input format: 'versions' must be a list")

    versions: list[VersionSnapshot] = []
    for position, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValueError(f"Invalid version at position {position}: expected a mapping")
        year = _parse_year(item.get("year"), position)
        label = str(item.get("label") or item.get("number") or "")
        version_id = item.get("id")
        articles = _parse_articles(item.get("articles") or [], label or str(year))
        versions.append(
            VersionSnapshot(
                year=year,
                articles=articles,
                label=label,
                id=str(version_id) if version_id is not None else None,
            )
        )

    return versions


def _parse_year(value: Any, position: int) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid version at position {position}: 'year' must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ValueError(f"Invalid version at position {position}: 'year' must be an integer")


def _parse_articles(items: list[Any], version_name: str) -> list[Article]:
    articles: list[Article] = []
    seen: set[str] = set()
    for item in items:
        number = item.get("number") if isinstance(item, dict) else None
        content = item.get("content") if isinstance(item, dict) else None
        if not isinstance(number, str) or not number.strip() or not isinstance(content, str):
            logger.warning(f"Skipping article in version {version_name}: missing number or content")
            continue

        article = Article(number=number, content=content)
        if article.key in seen:
            # Lookups keep the last occurrence
            logger.warning(f"Duplicate article {article.key} in version {version_name}")
        seen.add(article.key)
        articles.append(article)
    return articles


def load_versions(path: Path) -> list[VersionSnapshot]:
    """Read and parse a JSON or YAML input file.

    Raises:
        ValueError: If the file is not valid JSON/YAML or not a versions document
    """
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() in {".yaml", ".yml"}:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
        else:
            data = json.load(f)
    return parse_versions(data)


def find_version(versions: list[VersionSnapshot], ref: str) -> VersionSnapshot:
    """Resolve a version by id, label, display name or year.

    Raises:
        ValueError: If no version or more than one version matches
    """
    ref = ref.strip()
    matches = [
        v
        for v in versions
        if ref in {v.id, v.label, v.display_name, str(v.year)}
    ]
    if not matches:
        raise ValueError(f"No version matches '{ref}'")
    if len(matches) > 1:
        names = ", ".join(v.display_name for v in matches)
        raise ValueError(f"Version reference '{ref}' is ambiguous: {names}")
    return matches[0]
