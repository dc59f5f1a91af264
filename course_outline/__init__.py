"""
course-outline: HTML fragments from plain-text course outlines.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    course-outline files out

Library Usage:
    from course_outline import convert, emit_section, render_fragments

    html = convert("section-1.txt", ["Mòdul 1: Intro", "> First item"])
    fragments = emit_section(["Mòdul 1: Intro", "> First item", ">> Detail"])
    html = render_fragments(fragments)
"""

from .classifier import classify
from .config import ConfigError, OutlineConfig
from .dispatcher import convert, detect_file_kind, run_batch, run_batch_async
from .emitter import advance, emit_content, emit_section, finalize
from .exceptions import (
    OutlineError,
    ReadError,
    UnrecognizedFilePrefixError,
    UntitledSectionError,
)
from .models import BatchResult, ErrorLog, FileError, FileKind, Fragment, FragmentKind, LineKind
from .renderer import render_fragment, render_fragments

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "classify",
    "advance",
    "finalize",
    "emit_section",
    "emit_content",
    "render_fragment",
    "render_fragments",
    "convert",
    "detect_file_kind",
    "run_batch",
    "run_batch_async",
    # Data models
    "BatchResult",
    "ErrorLog",
    "FileError",
    "FileKind",
    "Fragment",
    "FragmentKind",
    "LineKind",
    # Configuration
    "OutlineConfig",
    "ConfigError",
    # Exceptions
    "OutlineError",
    "ReadError",
    "UnrecognizedFilePrefixError",
    "UntitledSectionError",
    # Version
    "__version__",
]
