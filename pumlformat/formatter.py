"""Depth-aware reindentation of PlantUML sources."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .classifier import classify, closes_free_text, opens_block_comment
from .config import validate_indent_width
from .constants import (
    BLOCK_COMMENT_END,
    DEFAULT_INDENT_WIDTH,
    DIAGRAM_MARKER_PATTERN,
    FREE_TEXT_CLOSERS,
)
from .models import Classification, FormatterState, LineKind

logger = logging.getLogger(__name__)


def _emit_blank(state: FormatterState, output: list[str]) -> None:
    # Blank runs collapse to one line; nothing blank precedes the first content
    if state.last_was_blank or not output:
        return
    output.append("")
    state.last_was_blank = True


def _emit_comment_body(state: FormatterState, raw_line: str, output: list[str]) -> None:
    """Copy a line inside a ``/' ... '/`` comment without reindenting it."""
    line = raw_line.rstrip()
    if not line.strip():
        _emit_blank(state, output)
        return

    output.append(line)
    state.last_was_blank = False
    if BLOCK_COMMENT_END in line:
        state.in_block_comment = False


def _emit_free_text_body(
    state: FormatterState, raw_line: str, output: list[str], indent_width: int, line_number: int
) -> bool:
    """Copy a note, legend or title body line at the block's depth.

    Returns False for the closing line (or a diagram marker), which the caller
    classifies as usual.
    """
    text = raw_line.strip()
    if not text:
        _emit_blank(state, output)
        return True

    if closes_free_text(text, state.free_text_keyword) or DIAGRAM_MARKER_PATTERN.match(text):
        state.free_text_keyword = None
        return False

    logger.debug("Line %d: text at depth %d: %s", line_number, state.depth, text)
    output.append(" " * (state.depth * indent_width) + text)
    state.last_was_blank = False
    return True


def _render_depth(state: FormatterState, classification: Classification, line_number: int) -> int:
    """Return the depth a line renders at, updating the state for closes.

    Opens render at the current depth; the caller increments afterwards.
    """
    if classification.is_diagram_marker:
        if state.depth:
            logger.info(
                "Line %d: %d block(s) still open at %s",
                line_number,
                state.depth,
                classification.content,
            )
        state.depth = 0
        return 0

    if classification.kind is LineKind.BLOCK_CLOSE:
        if state.depth == 0:
            logger.info("Line %d: unmatched %r ignored", line_number, classification.content)
        state.depth = max(state.depth - 1, 0)

    return state.depth


def format_lines(lines: Iterable[str], indent_width: int = DEFAULT_INDENT_WIDTH) -> list[str]:
    """Reindent PlantUML lines according to their block depth.

    Makes a single forward pass. Block bodies and continuation branches
    (``else``) are indented one level deeper than the lines that open and
    close the block. Consecutive blank lines collapse to one, and the result
    never starts or ends with a blank line. Malformed nesting is formatted on
    a best-effort basis: unmatched closes are ignored, and unclosed blocks keep
    the rest of the diagram indented. Bodies of multi-line notes, legends and
    titles are free text: they are indented one level but never classified,
    up to the matching ``end note`` (``endlegend``, ...).

    Args:
        lines: Source lines without line terminators.
        indent_width: Number of spaces per nesting level.

    Returns:
        list[str]: Formatted lines without line terminators.

    Raises:
        InvalidConfigurationError: If `indent_width` is not a non-negative
            integer. Raised before any line is processed.

    Examples:
        format_lines(["alt ok", "A->B:hi", "end"])  # ["alt ok", "    A -> B : hi", "end"]
    """
    validate_indent_width(indent_width)

    state = FormatterState()
    output: list[str] = []

    for line_number, raw_line in enumerate(lines, start=1):
        if state.in_block_comment:
            _emit_comment_body(state, raw_line, output)
            continue
        if state.free_text_keyword and _emit_free_text_body(
            state, raw_line, output, indent_width, line_number
        ):
            continue

        classification = classify(raw_line)
        if classification.kind is LineKind.BLANK:
            _emit_blank(state, output)
            continue

        state.last_was_blank = False
        depth = _render_depth(state, classification, line_number)
        logger.debug(
            "Line %d: %s at depth %d: %s",
            line_number,
            classification.kind.name,
            depth,
            classification.content,
        )
        output.append(" " * (depth * indent_width) + classification.content)

        if classification.kind is LineKind.BLOCK_OPEN:
            state.depth += 1
            if classification.keyword in FREE_TEXT_CLOSERS:
                state.free_text_keyword = classification.keyword
        if classification.is_comment and opens_block_comment(classification):
            state.in_block_comment = True

    if output and output[-1] == "":
        output.pop()

    if state.depth:
        logger.info("%d block(s) still open at end of input", state.depth)

    return output


def format_text(text: str, indent_width: int = DEFAULT_INDENT_WIDTH) -> str:
    """Format a complete PlantUML document.

    Args:
        text: Document content.
        indent_width: Number of spaces per nesting level.

    Returns:
        str: Formatted document terminated by a single newline, or an empty
            string when the document has no content.

    Raises:
        InvalidConfigurationError: If `indent_width` is invalid.

    Examples:
        format_text("@startuml\\nloop\\nA->B\\nend\\n@enduml")
    """
    formatted = format_lines(text.splitlines(), indent_width)
    if not formatted:
        return ""
    return "\n".join(formatted) + "\n"
