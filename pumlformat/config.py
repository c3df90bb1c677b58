"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

from .exceptions import ConfigError, InvalidConfigurationError


@dataclass
class FormatConfig:
    """Configuration for formatting PlantUML sources.

    Attributes:
        indent_width: Number of spaces per nesting level; ``0`` disables
            indentation while still tracking depth.
        max_file_size: Maximum input size in bytes that will be processed.

    Examples:
        FormatConfig(indent_width=2)
    """

    indent_width: int = 4
    max_file_size: int = 10 * 1024 * 1024


def load_config(search_path: Path) -> FormatConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.pumlformat]`` table from `pyproject.toml` and the
    ``[pumlformat]`` or ``[tool.pumlformat]`` table from `.pumlformat.toml`
    when present. Returns default values when no configuration is found. TOML
    files that cannot be read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        FormatConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("diagrams"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "pumlformat")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".pumlformat.toml",
            table_paths=[("pumlformat",), ("tool", "pumlformat")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return FormatConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> FormatConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> FormatConfig:
    table_display = ".".join(table_path)

    if raw_config is None or raw_config == {}:
        return FormatConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    normalized = {key.replace("-", "_"): value for key, value in raw_config.items()}
    try:
        return FormatConfig(**normalized)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_indent_width(indent_width: object) -> None:
    """Reject indentation widths that cannot be rendered.

    Args:
        indent_width: Candidate number of spaces per nesting level.

    Raises:
        InvalidConfigurationError: If the value is not a non-negative integer.
            Booleans are rejected even though they are `int` instances.

    Examples:
        validate_indent_width(0)  # accepted
        validate_indent_width(-1)  # raises
    """
    if isinstance(indent_width, bool) or not isinstance(indent_width, int):
        raise InvalidConfigurationError("indent_width", indent_width, "an integer")
    if indent_width < 0:
        raise InvalidConfigurationError("indent_width", indent_width, "a non-negative integer")


def validate_config(config: FormatConfig) -> None:
    """Validate a `FormatConfig` instance.

    Raises:
        ConfigError: If the indentation width is negative or the size limit is
            not a positive integer.
    """
    validate_indent_width(config.indent_width)

    max_file_size = config.max_file_size
    if isinstance(max_file_size, bool) or not isinstance(max_file_size, int):
        raise InvalidConfigurationError("max_file_size", max_file_size, "an integer")
    if max_file_size <= 0:
        raise InvalidConfigurationError("max_file_size", max_file_size, "a positive integer")


def apply_overrides(config: FormatConfig, **overrides: object) -> FormatConfig:
    """Apply override values to a `FormatConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        FormatConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `FormatConfig`.
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> FormatConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        FormatConfig: Validated configuration ready for formatting.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), indent_width=2)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config
