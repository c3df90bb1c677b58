from __future__ import annotations

import textwrap
import pytest
from pathlib import Path

from pumlformat.config import (
    FormatConfig,
    apply_overrides,
    build_config,
    load_config,
    validate_config,
    validate_indent_width,
)
from pumlformat.exceptions import ConfigError, InvalidConfigurationError


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".pumlformat.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.pumlformat]
        indent_width = 2
        max_file_size = 1024
        """,
    )

    assert load_config(tmp_path) == FormatConfig(indent_width=2, max_file_size=1024)


def test_loads_config_from_dotfile(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [pumlformat]
        indent-width = 3
        """,
    )
    nested = tmp_path / "child"
    nested.mkdir()

    assert load_config(nested).indent_width == 3


def test_dotfile_accepts_tool_table(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [tool.pumlformat]
        indent_width = 1
        """,
    )

    assert load_config(tmp_path).indent_width == 1


def test_load_config_walks_up_directories(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.pumlformat]
        indent_width = 6
        """,
    )
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert load_config(nested).indent_width == 6


def test_nearest_config_wins(tmp_path: Path):
    _write_pyproject(tmp_path, "[tool.pumlformat]\nindent_width = 6\n")
    nested = tmp_path / "inner"
    nested.mkdir()
    _write_dotfile(nested, "[pumlformat]\nindent_width = 1\n")

    assert load_config(nested).indent_width == 1


def test_pyproject_without_table_is_ignored(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.other]
        indent_width = 8
        """,
    )

    assert load_config(tmp_path) == FormatConfig()


def test_invalid_toml_is_skipped(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text("[tool.pumlformat\n", encoding="utf-8")

    assert load_config(tmp_path) == FormatConfig()


def test_unknown_keys_raise(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.pumlformat]
        tab_width = 2
        """,
    )

    with pytest.raises(ConfigError, match=r"Invalid `\[tool.pumlformat\]` settings"):
        load_config(tmp_path)


def test_non_table_settings_raise(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool]
        pumlformat = 4
        """,
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_empty_table_uses_defaults(tmp_path: Path):
    _write_pyproject(tmp_path, "[tool.pumlformat]\n")

    assert load_config(tmp_path) == FormatConfig()


@pytest.mark.parametrize("value", [0, 1, 4, 100])
def test_validate_indent_width_accepts_non_negative_integers(value: int):
    validate_indent_width(value)


@pytest.mark.parametrize(
    ("value", "message"),
    [
        (-1, "`indent_width` must be a non-negative integer, got -1"),
        (False, "`indent_width` must be an integer, got False"),
        (1.5, "`indent_width` must be an integer, got 1.5"),
        ("2", "`indent_width` must be an integer, got '2'"),
    ],
)
def test_validate_indent_width_rejects_invalid_values(value: object, message: str):
    with pytest.raises(InvalidConfigurationError) as error:
        validate_indent_width(value)

    assert str(error.value) == message
    assert error.value.setting == "indent_width"
    assert error.value.value == value


def test_validate_config_rejects_non_positive_size():
    with pytest.raises(InvalidConfigurationError, match="max_file_size"):
        validate_config(FormatConfig(max_file_size=0))


def test_apply_overrides_ignores_none():
    config = FormatConfig(indent_width=2)

    assert apply_overrides(config, indent_width=None) is config
    assert apply_overrides(config, indent_width=8).indent_width == 8


def test_build_config_applies_overrides(tmp_path: Path):
    _write_pyproject(tmp_path, "[tool.pumlformat]\nindent_width = 2\n")

    assert build_config(tmp_path).indent_width == 2
    assert build_config(tmp_path, indent_width=0).indent_width == 0


def test_build_config_validates_loaded_values(tmp_path: Path):
    _write_pyproject(tmp_path, "[tool.pumlformat]\nindent_width = -4\n")

    with pytest.raises(ConfigError, match="non-negative"):
        build_config(tmp_path)
