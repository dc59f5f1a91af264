"""Line classification for section files."""

from __future__ import annotations

import re
from functools import lru_cache

from .config import OutlineConfig
from .models import LineKind


@lru_cache(maxsize=32)
def _compile_patterns(
    title_keywords: tuple[str, ...], item_marker: str
) -> tuple[re.Pattern[str], re.Pattern[str], re.Pattern[str]]:
    marker = re.escape(item_marker)
    # Longest keyword first so "Módulo" is not shadowed by a shorter prefix.
    ordered = sorted(title_keywords, key=len, reverse=True)
    keywords = "|".join(re.escape(keyword) for keyword in ordered)
    title_pattern = re.compile(rf"^(?:{keywords})\s*")
    item_pattern = re.compile(rf"^{marker}\s")
    nested_pattern = re.compile(rf"^{marker}{{2}}\s")
    return title_pattern, item_pattern, nested_pattern


def _patterns(config: OutlineConfig) -> tuple[re.Pattern[str], re.Pattern[str], re.Pattern[str]]:
    return _compile_patterns(tuple(config.title_keywords), config.item_marker)


def classify(line: str, config: OutlineConfig | None = None) -> LineKind:
    """Classify a section-file line by its prefix.

    Nested items are tested before items because a naive single-marker test
    also matches two markers. Any line that is neither an item nor a nested
    item is a title, with or without a title keyword.

    Args:
        line: The line to classify, without its line ending.
        config: Configuration supplying the marker and title keywords.

    Returns:
        LineKind: The structural role of the line.

    Examples:
        classify(">> Detail")  # LineKind.NESTED_ITEM
        classify("> Item with > inside")  # LineKind.ITEM
        classify(">>> too deep")  # LineKind.TITLE
    """
    _, item_pattern, nested_pattern = _patterns(config or OutlineConfig())
    if nested_pattern.match(line):
        return LineKind.NESTED_ITEM
    if item_pattern.match(line):
        return LineKind.ITEM
    return LineKind.TITLE


def has_title_keyword(line: str, config: OutlineConfig | None = None) -> bool:
    """Return True when the line starts with one of the title keywords."""
    title_pattern, _, _ = _patterns(config or OutlineConfig())
    return title_pattern.match(line) is not None


def strip_title(line: str, config: OutlineConfig | None = None) -> str:
    """Remove a leading title keyword and the whitespace after it.

    Lines without a keyword are returned unchanged.

    Examples:
        strip_title("Mòdul 1: Intro")  # "1: Intro"
    """
    title_pattern, _, _ = _patterns(config or OutlineConfig())
    return title_pattern.sub("", line, count=1)


def strip_item(line: str, config: OutlineConfig | None = None) -> str:
    """Remove the single-marker prefix of an item line."""
    _, item_pattern, _ = _patterns(config or OutlineConfig())
    return item_pattern.sub("", line, count=1)


def strip_nested_item(line: str, config: OutlineConfig | None = None) -> str:
    """Remove the double-marker prefix of a nested item line."""
    _, _, nested_pattern = _patterns(config or OutlineConfig())
    return nested_pattern.sub("", line, count=1)
