"""HTML rendering of emitted fragments."""

from __future__ import annotations

from collections.abc import Iterable

from .config import OutlineConfig
from .constants import FRAGMENT_MARKUP
from .models import Fragment


def render_fragment(fragment: Fragment) -> str:
    """Render a single fragment as HTML.

    Text is inserted as-is; no escaping is applied.

    Examples:
        render_fragment(Fragment(FragmentKind.NESTED_ENTRY, "Detail"))  # "<li>Detail</li>"
    """
    template = FRAGMENT_MARKUP[fragment.kind]
    if fragment.text is None:
        return template
    # str.replace keeps braces in the text itself from being interpreted
    return template.replace("{text}", fragment.text)


def render_fragments(fragments: Iterable[Fragment], config: OutlineConfig | None = None) -> str:
    """Render a fragment sequence into the content of an output file.

    Args:
        fragments: Fragments in output order.
        config: Configuration supplying the separator placed between
            fragments. Defaults to plain concatenation.

    Returns:
        str: The rendered markup.

    Examples:
        render_fragments(emit_content(["a", "b"]))
        render_fragments(fragments, OutlineConfig(separator="\\n"))
    """
    config = config or OutlineConfig()
    return config.separator.join(render_fragment(fragment) for fragment in fragments)
