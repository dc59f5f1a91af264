"""Configuration loading and management."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

CONFIG_TABLE = "course-outline"
DOTFILE_NAME = ".course-outline.toml"


@dataclass
class OutlineConfig:
    """Configuration for converting course outlines.

    Attributes:
        title_keywords: Literal prefixes that mark a section title line.
        item_marker: Single character marking item depth (``>`` and ``>>``).
        content_prefix: File name prefix selecting flat list mode.
        section_prefix: File name prefix selecting tree mode.
        input_dir: Directory scanned for outline files.
        output_dir: Directory receiving converted files and the error log.
        log_file: Name of the error log written inside `output_dir`.
        separator: Text placed between rendered fragments.
        strict_titles: Reject section lines that are neither items nor
            keyword titles instead of treating them as titles.
        max_file_size: Maximum input file size in bytes.
        max_concurrent_reads: Upper bound on files read at the same time.

    Examples:
        OutlineConfig(title_keywords=["Module"], separator="\\n")
    """

    # Markup
    title_keywords: list[str] = field(default_factory=lambda: ["Mòdul", "Módulo"])
    item_marker: str = ">"

    # File dispatch
    content_prefix: str = "content"
    section_prefix: str = "section"

    # Locations
    input_dir: str = "files"
    output_dir: str = "out"
    log_file: str = "errors.txt"

    # Output
    separator: str = ""
    strict_titles: bool = False

    # Limits
    max_file_size: int = 10 * 1024 * 1024
    max_concurrent_reads: int = 20


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`item_marker` must be a single character")
    """


def load_config(search_path: Path) -> OutlineConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.course-outline]`` table from `pyproject.toml` and the
    ``[course-outline]`` or ``[tool.course-outline]`` table from
    `.course-outline.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        OutlineConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("courses"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", CONFIG_TABLE)]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / DOTFILE_NAME,
            table_paths=[(CONFIG_TABLE,), ("tool", CONFIG_TABLE)],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return OutlineConfig()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> OutlineConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        table: object = data
        for key in table_path:
            table = table.get(key) if isinstance(table, dict) else None
        if table is None:
            continue

        table_display = ".".join(table_path)
        if not isinstance(table, dict):
            raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")
        try:
            return OutlineConfig(**table)
        except TypeError as error:
            raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error

    return None


def validate_config(config: OutlineConfig) -> None:
    """Validate an `OutlineConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If keywords are missing or empty, the item marker is not a
            single non-whitespace character, the file prefixes are empty or
            identical, locations are empty, or numeric limits are non-positive.

    Examples:
        validate_config(OutlineConfig(title_keywords=["Module"]))
    """
    keywords = config.title_keywords
    if isinstance(keywords, str) or not isinstance(keywords, (list, tuple)):
        raise ConfigError("`title_keywords` must be a list of strings")
    if not keywords:
        raise ConfigError("`title_keywords` must not be empty")
    for keyword in keywords:
        if not isinstance(keyword, str) or not keyword.strip():
            raise ConfigError("`title_keywords` entries must be non-empty strings")

    if not isinstance(config.item_marker, str) or len(config.item_marker) != 1:
        raise ConfigError("`item_marker` must be a single character")
    if config.item_marker.isspace():
        raise ConfigError("`item_marker` must not be whitespace")

    for key in ("content_prefix", "section_prefix", "input_dir", "output_dir", "log_file"):
        value = getattr(config, key)
        if not isinstance(value, str) or not value:
            raise ConfigError(f"`{key}` must not be empty")
    if config.content_prefix == config.section_prefix:
        raise ConfigError("`content_prefix` and `section_prefix` must differ")

    if not isinstance(config.separator, str):
        raise ConfigError("`separator` must be a string")
    if not isinstance(config.strict_titles, bool):
        raise ConfigError("`strict_titles` must be a boolean")

    for key in ("max_file_size", "max_concurrent_reads"):
        value = getattr(config, key)
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def apply_overrides(config: OutlineConfig, **overrides: object) -> OutlineConfig:
    """Apply override values to an `OutlineConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set
            to None and empty keyword tuples are ignored.

    Returns:
        OutlineConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `OutlineConfig`.

    Examples:
        updated = apply_overrides(config, separator="\\n", strict_titles=True)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    # click hands repeatable options over as tuples, empty when unused
    if "title_keywords" in changes:
        if not changes["title_keywords"]:
            del changes["title_keywords"]
        else:
            changes["title_keywords"] = list(changes["title_keywords"])
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> OutlineConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        OutlineConfig: Validated configuration ready for conversion.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), output_dir="html", strict_titles=True)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config
