"""Data models for pumlformat."""

from dataclasses import dataclass
from enum import Enum, auto

from .constants import BLOCK_COMMENT_START, COMMENT_PREFIX, DIAGRAM_MARKER_PATTERN


class LineKind(Enum):
    """Role of a single line in the block structure of a diagram.

    Attributes:
        BLOCK_OPEN: Opens a nested block (``alt``, ``loop``, ``class A {``).
        BLOCK_CLOSE: Closes the innermost block (``end``, ``endif``, ``}``).
        BLOCK_CONTINUATION: Branch inside a block (``else``, ``fork again``).
        BLANK: Empty or whitespace-only line.
        PLAIN: Anything else, including comments and diagram markers.
    """

    BLOCK_OPEN = auto()
    BLOCK_CLOSE = auto()
    BLOCK_CONTINUATION = auto()
    BLANK = auto()
    PLAIN = auto()


@dataclass(frozen=True)
class Classification:
    """Result of classifying one line of PlantUML source.

    Attributes:
        kind: Structural role of the line.
        content: Trimmed line text with symbol spacing normalized.
        keyword: Lower-cased keyword that decided the kind, if any.
    """

    kind: LineKind
    content: str
    keyword: str | None = None

    @property
    def is_comment(self) -> bool:
        return self.content.startswith((COMMENT_PREFIX, BLOCK_COMMENT_START))

    @property
    def is_diagram_marker(self) -> bool:
        return DIAGRAM_MARKER_PATTERN.match(self.content) is not None


@dataclass
class FormatterState:
    """Running state of one formatting pass.

    Attributes:
        depth: Number of blocks currently open.
        last_was_blank: Whether the last emitted line was blank.
        in_block_comment: Inside a multi-line ``/' ... '/`` comment.
        free_text_keyword: Keyword of the open note, legend or title block
            whose body is copied as text, if any.
    """

    depth: int = 0
    last_was_blank: bool = False
    in_block_comment: bool = False
    free_text_keyword: str | None = None
