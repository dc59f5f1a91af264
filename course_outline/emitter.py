"""Fragment emitters for section and content files.

Section files are converted by a single-pass state machine whose only state
is the kind of the previous line. Each step returns the new state and the
fragments to append, so the whole conversion is a fold over the lines:

    state = None
    for line in lines:
        state, fragments = advance(state, line)
    fragments = finalize(state)

Every opened wrapper is closed later in the sequence, including at end of
input, so the output is always a balanced tree.
"""

from __future__ import annotations

from collections.abc import Iterable

from .classifier import classify, has_title_keyword, strip_item, strip_nested_item, strip_title
from .config import OutlineConfig
from .exceptions import UntitledSectionError
from .models import Fragment, FragmentKind, LineKind

SECTION_OPEN = Fragment(FragmentKind.SECTION_OPEN)
SECTION_CLOSE = Fragment(FragmentKind.SECTION_CLOSE)
ITEM_OPEN = Fragment(FragmentKind.ITEM_OPEN)
ITEM_CLOSE = Fragment(FragmentKind.ITEM_CLOSE)
NESTED_LIST_OPEN = Fragment(FragmentKind.NESTED_LIST_OPEN)
NESTED_LIST_CLOSE = Fragment(FragmentKind.NESTED_LIST_CLOSE)
LIST_OPEN = Fragment(FragmentKind.LIST_OPEN)
LIST_CLOSE = Fragment(FragmentKind.LIST_CLOSE)

SectionState = LineKind | None


def _close_open_wrappers(state: SectionState) -> list[Fragment]:
    """Close everything opened since the current section began."""
    if state is None:
        return []
    if state is LineKind.NESTED_ITEM:
        return [NESTED_LIST_CLOSE, ITEM_CLOSE, SECTION_CLOSE]
    if state is LineKind.ITEM:
        return [ITEM_CLOSE, SECTION_CLOSE]
    return [SECTION_CLOSE]


def _title_step(state: SectionState, text: str) -> list[Fragment]:
    return [
        *_close_open_wrappers(state),
        SECTION_OPEN,
        Fragment(FragmentKind.TITLE, text),
    ]


def _item_step(state: SectionState, text: str) -> list[Fragment]:
    fragments: list[Fragment] = []
    if state is None:
        # Item before any title: open an untitled section to hold it
        fragments.append(SECTION_OPEN)
    elif state is LineKind.NESTED_ITEM:
        fragments.extend([NESTED_LIST_CLOSE, ITEM_CLOSE])
    elif state is LineKind.ITEM:
        fragments.append(ITEM_CLOSE)

    fragments.extend([ITEM_OPEN, Fragment(FragmentKind.ITEM_TEXT, text)])
    return fragments


def _nested_item_step(state: SectionState, text: str) -> list[Fragment]:
    fragments: list[Fragment] = []
    if state is None:
        fragments.extend([SECTION_OPEN, ITEM_OPEN, NESTED_LIST_OPEN])
    elif state is LineKind.TITLE:
        # Orphan nested item: give it an empty item to hang from
        fragments.extend([ITEM_OPEN, NESTED_LIST_OPEN])
    elif state is LineKind.ITEM:
        fragments.append(NESTED_LIST_OPEN)

    fragments.append(Fragment(FragmentKind.NESTED_ENTRY, text))
    return fragments


def advance(
    state: SectionState,
    line: str,
    config: OutlineConfig | None = None,
    line_number: int | None = None,
) -> tuple[LineKind, list[Fragment]]:
    """Consume one section line.

    Args:
        state: Kind of the previous line, or None before the first line.
        line: The line to consume, without its line ending.
        config: Configuration supplying markers, keywords and strictness.
        line_number: One-based line index, used in strict-mode errors.

    Returns:
        tuple[LineKind, list[Fragment]]: The kind of `line`, which becomes the
            next state, and the fragments it produces.

    Raises:
        UntitledSectionError: If `config.strict_titles` is set and the line is
            neither an item nor a keyword title.

    Examples:
        state, fragments = advance(None, "Mòdul 1: Intro")
        state, fragments = advance(state, "> First item")
    """
    config = config or OutlineConfig()
    kind = classify(line, config)

    if kind is LineKind.NESTED_ITEM:
        return kind, _nested_item_step(state, strip_nested_item(line, config))
    if kind is LineKind.ITEM:
        return kind, _item_step(state, strip_item(line, config))

    if config.strict_titles and not has_title_keyword(line, config):
        raise UntitledSectionError(line_number or 0, line)
    return kind, _title_step(state, strip_title(line, config))


def finalize(state: SectionState) -> list[Fragment]:
    """Close the wrappers still open once the input is exhausted.

    Examples:
        finalize(LineKind.NESTED_ITEM)  # nested list, item, section closes
        finalize(None)  # []
    """
    return _close_open_wrappers(state)


def emit_section(lines: Iterable[str], config: OutlineConfig | None = None) -> list[Fragment]:
    """Convert the lines of a section file into a balanced fragment sequence.

    Args:
        lines: Lines of the file, without line endings.
        config: Configuration controlling classification.

    Returns:
        list[Fragment]: Fragments in output order. Empty input yields an
            empty list.

    Raises:
        UntitledSectionError: Only in strict mode, see `advance`.

    Examples:
        emit_section(["Mòdul X", "> a", "Mòdul Y", "> b"])
    """
    config = config or OutlineConfig()
    state: SectionState = None
    fragments: list[Fragment] = []

    for line_number, line in enumerate(lines, start=1):
        state, emitted = advance(state, line, config, line_number)
        fragments.extend(emitted)

    fragments.extend(finalize(state))
    return fragments


def emit_content(lines: Iterable[str]) -> list[Fragment]:
    """Wrap every line of a content file as an entry of a single list.

    Lines are kept verbatim; no marker prefix is stripped.
    """
    entries = [Fragment(FragmentKind.LIST_ENTRY, line) for line in lines]
    return [LIST_OPEN, *entries, LIST_CLOSE]
