"""
pumlformat: indentation and spacing formatter for PlantUML diagrams.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    pumlformat sequence.puml --indent 2

Library Usage:
    from pathlib import Path
    from pumlformat import format_text

    content = Path("sequence.puml").read_text()
    print(format_text(content, indent_width=2), end="")
"""

from .classifier import classify, normalize_spacing
from .config import FormatConfig
from .exceptions import ConfigError, FormatterError, InvalidConfigurationError, SourceError
from .formatter import format_lines, format_text
from .models import Classification, FormatterState, LineKind

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "format_lines",
    "format_text",
    "classify",
    "normalize_spacing",
    # Data models
    "Classification",
    "FormatterState",
    "LineKind",
    "FormatConfig",
    # Exceptions
    "FormatterError",
    "ConfigError",
    "InvalidConfigurationError",
    "SourceError",
    # Version
    "__version__",
]
