"""Constants used across the course-outline package."""

from __future__ import annotations

from .config import OutlineConfig
from .models import FragmentKind

DEFAULT_CONFIG = OutlineConfig()

DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size
ERROR_LOG_HEADER = "ERROR LOGS"

# Markup emitted for structural fragments. Content-bearing kinds are
# templates filled with the fragment text.
FRAGMENT_MARKUP = {
    FragmentKind.SECTION_OPEN: '<div class="section">',
    FragmentKind.SECTION_CLOSE: "</div>",
    FragmentKind.TITLE: '<div class="section-title">{text}</div>',
    FragmentKind.ITEM_OPEN: '<div class="section-item">',
    FragmentKind.ITEM_CLOSE: "</div>",
    FragmentKind.ITEM_TEXT: "{text}",
    FragmentKind.NESTED_LIST_OPEN: '<ul class="section-item-list">',
    FragmentKind.NESTED_LIST_CLOSE: "</ul>",
    FragmentKind.NESTED_ENTRY: "<li>{text}</li>",
    FragmentKind.LIST_OPEN: "<ul>",
    FragmentKind.LIST_CLOSE: "</ul>",
    FragmentKind.LIST_ENTRY: '<li class="content-list-item">{text}</li>',
}
