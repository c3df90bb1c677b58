"""Package-specific exception types."""

from __future__ import annotations


class FormatterError(ValueError):
    """Base class for pumlformat errors.

    Formatting itself never fails on malformed diagrams; these errors cover
    configuration and source handling only.
    """


class ConfigError(FormatterError):
    """Raised when configuration files or values are invalid.

    Examples:
        raise ConfigError("Invalid `[tool.pumlformat]` settings in pyproject.toml")
    """


class InvalidConfigurationError(ConfigError):
    """Raised when a single configuration setting holds an unusable value.

    Args:
        setting: Name of the offending setting.
        value: Value that was rejected.
        expected: Short description of the accepted values.
    """

    def __init__(self, setting: str, value: object, expected: str):
        self.setting = setting
        self.value = value
        self.expected = expected
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"`{self.setting}` must be {self.expected}, got {self.value!r}"


class SourceError(FormatterError):
    """Raised when a PlantUML source cannot be read or written."""
