from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from course_outline.config import (
    ConfigError,
    OutlineConfig,
    apply_overrides,
    build_config,
    load_config,
    validate_config,
)


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".course-outline.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.course-outline]
        title_keywords = ["Module", "Unit"]
        item_marker = "-"
        content_prefix = "list"
        section_prefix = "tree"
        input_dir = "src"
        output_dir = "html"
        log_file = "log.txt"
        separator = "\\n"
        strict_titles = true
        max_file_size = 1
        max_concurrent_reads = 2
        """,
    )

    config = load_config(tmp_path)

    assert config == OutlineConfig(
        title_keywords=["Module", "Unit"],
        item_marker="-",
        content_prefix="list",
        section_prefix="tree",
        input_dir="src",
        output_dir="html",
        log_file="log.txt",
        separator="\n",
        strict_titles=True,
        max_file_size=1,
        max_concurrent_reads=2,
    )


def test_loads_config_from_dotfile(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [course-outline]
        title_keywords = ["Lesson"]
        """,
    )
    nested = tmp_path / "child"
    nested.mkdir()

    config = load_config(nested)

    assert config.title_keywords == ["Lesson"]
    assert config.item_marker == ">"


def test_pyproject_wins_over_dotfile_in_same_directory(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.course-outline]
        output_dir = "from-pyproject"
        """,
    )
    _write_dotfile(
        tmp_path,
        """
        [course-outline]
        output_dir = "from-dotfile"
        """,
    )

    assert load_config(tmp_path).output_dir == "from-pyproject"


def test_load_config_walks_up_directories(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.course-outline]
        separator = " "
        """,
    )
    nested = tmp_path / "a" / "b" / "c"
    nested.mkdir(parents=True)

    assert load_config(nested).separator == " "


def test_empty_config_table_stops_inheritance(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.course-outline]
        separator = " "
        """,
    )
    child = tmp_path / "child"
    child.mkdir()
    _write_pyproject(
        child,
        """
        [tool.course-outline]
        """,
    )

    assert load_config(child).separator == OutlineConfig().separator


def test_pyproject_without_table_is_ignored(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.other]
        value = 1
        """,
    )

    assert load_config(tmp_path) == OutlineConfig()


def test_load_config_returns_defaults_when_missing(tmp_path: Path):
    assert load_config(tmp_path) == OutlineConfig()


def test_load_config_skips_invalid_toml(tmp_path: Path):
    invalid_dir = tmp_path / "invalid"
    invalid_dir.mkdir()
    _write_pyproject(invalid_dir, "not = {valid")
    _write_pyproject(
        tmp_path,
        """
        [tool.course-outline]
        log_file = "parent.txt"
        """,
    )

    assert load_config(invalid_dir).log_file == "parent.txt"


def test_load_config_errors_on_unknown_keys(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.course-outline]
        separator = ""
        unexpected = true
        """,
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_errors_on_non_table(tmp_path: Path):
    _write_dotfile(tmp_path, 'course-outline = "nope"\n')

    with pytest.raises(ConfigError):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "config",
    [
        OutlineConfig(title_keywords=[]),
        OutlineConfig(title_keywords=["Mòdul", ""]),
        OutlineConfig(title_keywords="Mòdul"),
        OutlineConfig(item_marker=""),
        OutlineConfig(item_marker=">>"),
        OutlineConfig(item_marker=" "),
        OutlineConfig(content_prefix=""),
        OutlineConfig(section_prefix="content"),
        OutlineConfig(output_dir=""),
        OutlineConfig(log_file=""),
        OutlineConfig(separator=None),
        OutlineConfig(strict_titles="yes"),
        OutlineConfig(max_file_size=0),
        OutlineConfig(max_concurrent_reads=-1),
        OutlineConfig(max_concurrent_reads=True),
    ],
)
def test_validate_config_rejects_invalid_values(config: OutlineConfig):
    with pytest.raises(ConfigError):
        validate_config(config)


def test_validate_config_accepts_defaults():
    validate_config(OutlineConfig())


def test_apply_overrides_ignores_none_and_empty_keywords():
    config = OutlineConfig()

    assert apply_overrides(config, separator=None, title_keywords=()) is config


def test_apply_overrides_converts_keyword_tuple():
    updated = apply_overrides(OutlineConfig(), title_keywords=("Module",), strict_titles=False)

    assert updated.title_keywords == ["Module"]
    assert updated.strict_titles is False


def test_apply_overrides_rejects_unknown_field():
    with pytest.raises(TypeError):
        apply_overrides(OutlineConfig(), unknown="value")


def test_build_config_applies_overrides_and_validates(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.course-outline]
        output_dir = "html"
        """,
    )

    config = build_config(tmp_path, separator="\n")
    assert config.output_dir == "html"
    assert config.separator == "\n"

    with pytest.raises(ConfigError):
        build_config(tmp_path, item_marker="")
