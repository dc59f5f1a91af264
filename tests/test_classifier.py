from __future__ import annotations

import pytest

from course_outline.classifier import (
    classify,
    has_title_keyword,
    strip_item,
    strip_nested_item,
    strip_title,
)
from course_outline.config import OutlineConfig
from course_outline.models import LineKind


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("Mòdul 1: Intro", LineKind.TITLE),
        ("Módulo 2: Intro", LineKind.TITLE),
        ("> First item", LineKind.ITEM),
        (">\tTabbed item", LineKind.ITEM),
        (">> Detail", LineKind.NESTED_ITEM),
        (">>\tDetail", LineKind.NESTED_ITEM),
    ],
)
def test_classify_recognized_prefixes(line, expected):
    assert classify(line) is expected


def test_single_marker_with_more_markers_later_is_item():
    assert classify("> compare a > b >> c") is LineKind.ITEM


def test_double_marker_is_never_item():
    assert classify(">> Detail > more") is LineKind.NESTED_ITEM


@pytest.mark.parametrize(
    "line",
    [
        "Plain text line",
        "",
        ">no space",
        ">>no space",
        ">>> third level",
        " > indented item",
        "Introduction",
    ],
)
def test_unrecognized_lines_fall_back_to_title(line):
    assert classify(line) is LineKind.TITLE


def test_has_title_keyword():
    assert has_title_keyword("Mòdul 1") is True
    assert has_title_keyword("Módulo 1") is True
    assert has_title_keyword("Module 1") is False
    assert has_title_keyword("> Mòdul") is False


def test_strip_title_removes_keyword_and_following_whitespace():
    assert strip_title("Mòdul 1: Intro") == "1: Intro"
    assert strip_title("Módulo   Dos") == "Dos"
    assert strip_title("Mòdul") == ""


def test_strip_title_keeps_lines_without_keyword():
    assert strip_title("Loose heading") == "Loose heading"


def test_strip_title_only_removes_leading_keyword():
    assert strip_title("Mòdul about Mòdul") == "about Mòdul"


def test_strip_item_prefixes():
    assert strip_item("> First item") == "First item"
    assert strip_item(">  Two spaces") == " Two spaces"
    assert strip_nested_item(">> Detail A") == "Detail A"
    assert strip_nested_item(">> a >> b") == "a >> b"


def test_custom_keywords_and_marker():
    config = OutlineConfig(title_keywords=["Module", "Unit"], item_marker="-")

    assert classify("Module 3", config) is LineKind.TITLE
    assert has_title_keyword("Unit 4", config) is True
    assert has_title_keyword("Mòdul 1", config) is False
    assert classify("- item", config) is LineKind.ITEM
    assert classify("-- nested", config) is LineKind.NESTED_ITEM
    assert classify("> not an item here", config) is LineKind.TITLE
    assert strip_title("Unit 4: Loops", config) == "4: Loops"


def test_keywords_with_regex_characters_are_literal():
    config = OutlineConfig(title_keywords=["Part (A)", "Step.*"])

    assert has_title_keyword("Part (A) one", config) is True
    assert has_title_keyword("Part A one", config) is False
    assert has_title_keyword("Step.* two", config) is True
    assert has_title_keyword("Stepping", config) is False


def test_longest_keyword_is_stripped_first():
    config = OutlineConfig(title_keywords=["Mod", "Module"])

    assert strip_title("Module 7", config) == "7"
