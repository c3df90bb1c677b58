"""Filesystem helpers for pumlformat."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

from .constants import DEFAULT_MAX_FILE_SIZE
from .exceptions import SourceError

MAX_FILE_SIZE_ENV_VAR = "PUMLFORMAT_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed input size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed input size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["PUMLFORMAT_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ValueError(error_message) from error

    if max_size <= 0:
        error_message = f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}."
        raise ValueError(error_message)

    return max_size


def read_source(filepath: Path, max_size: int = DEFAULT_MAX_FILE_SIZE) -> str:
    """Read a PlantUML source file as UTF-8 text.

    Args:
        filepath: Path to the file.
        max_size: Maximum allowed size in bytes.

    Returns:
        str: File content.

    Raises:
        SourceError: If the file is missing, inaccessible, larger than
            `max_size`, or not valid UTF-8.

    Examples:
        content = read_source(Path("sequence.puml"))
    """
    try:
        size = filepath.stat().st_size
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise SourceError(error_message) from error

    if size > max_size:
        error_message = f"{filepath} exceeds the maximum allowed size of {max_size} bytes."
        raise SourceError(error_message)

    try:
        with open(filepath, "r", encoding="UTF-8", newline="") as handle:
            return handle.read()
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise SourceError(error_message) from error
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise SourceError(error_message) from error


def write_output(filepath: Path, content: str) -> None:
    """Write formatted content, replacing the destination atomically.

    The content goes to a temporary file in the destination directory which
    then replaces `filepath`. Permissions of an existing destination are kept.

    Args:
        filepath: Destination path.
        content: Text to write.

    Raises:
        SourceError: If the destination cannot be written.

    Examples:
        write_output(Path("sequence.puml"), formatted)
    """
    try:
        permissions = stat.S_IMODE(filepath.stat().st_mode)
    except FileNotFoundError:
        permissions = None
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise SourceError(error_message) from error

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", delete=False, dir=filepath.parent, newline=""
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(content)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())

        if permissions is not None:
            os.chmod(temp_path, permissions)
        os.replace(temp_path, filepath)
    except OSError as error:
        error_message = f"Error writing {filepath}: {error}"
        raise SourceError(error_message) from error
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass
