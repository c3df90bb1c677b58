"""PlantUML line classification and symbol spacing."""

from __future__ import annotations

from .constants import (
    ARROW_CHARS,
    ARROW_DECORATION_CHARS,
    ARROW_PATTERN,
    BARE_OPEN_KEYWORDS,
    BLOCK_COMMENT_END,
    BLOCK_COMMENT_START,
    CLOSE_KEYWORDS,
    CLOSE_PHRASES,
    COMMENT_PREFIX,
    CONTINUATION_KEYWORDS,
    CONTINUATION_PHRASES,
    DEFINITION_KEYWORDS,
    DIAGRAM_MARKER_PATTERN,
    FIRST_TOKEN_PATTERN,
    FREE_TEXT_CLOSER_PATTERN,
    FREE_TEXT_CLOSERS,
    INLINE_RETURN,
    LAYOUT_PREFIXES,
    NOTE_KEYWORDS,
    OPEN_KEYWORDS,
    QUOTED_PATTERN,
    TEXT_KEYWORDS,
)
from .models import Classification, LineKind

# Arrow heads written as a lone letter glued to the operator (o->, ->x)
_HEAD_LETTERS = frozenset("ox")

KEYWORD_TABLE: dict[str, LineKind] = {
    **{keyword: LineKind.BLOCK_OPEN for keyword in OPEN_KEYWORDS},
    **{keyword: LineKind.BLOCK_OPEN for keyword in NOTE_KEYWORDS},
    **{keyword: LineKind.BLOCK_OPEN for keyword in BARE_OPEN_KEYWORDS},
    **{keyword: LineKind.BLOCK_CLOSE for keyword in CLOSE_KEYWORDS},
    **{keyword: LineKind.BLOCK_CONTINUATION for keyword in CONTINUATION_KEYWORDS},
}

PHRASE_TABLE: dict[str, LineKind] = {
    **{phrase: LineKind.BLOCK_CLOSE for phrase in CLOSE_PHRASES},
    **{phrase: LineKind.BLOCK_CONTINUATION for phrase in CONTINUATION_PHRASES},
}


def is_arrow(token: str) -> bool:
    """Decide whether a run of ``-``, ``.``, ``<`` and ``>`` is an arrow.

    Angle brackets alone are stereotype or markup delimiters (``<<Entity>>``)
    and a single dash or dot belongs to a word (``long-name``, ``a.b``).

    Examples:
        is_arrow("->")  # True
        is_arrow("..")  # True
        is_arrow("<<")  # False
        is_arrow("-")  # False
    """
    if "<" in token or ">" in token:
        return "-" in token or "." in token
    return len(token) >= 2


def _quoted_spans(text: str) -> list[tuple[int, int]]:
    return [match.span() for match in QUOTED_PATTERN.finditer(text)]


def _in_spans(position: int, spans: list[tuple[int, int]]) -> bool:
    return any(start <= position < end for start, end in spans)


def _is_decorated(text: str, start: int, end: int) -> bool:
    """Check whether the operator at ``text[start:end]`` carries decorations."""
    neighbours = []
    if start > 0:
        before = text[start - 1]
        if before in _HEAD_LETTERS and (start == 1 or text[start - 2].isspace()):
            return True
        neighbours.append(before)
    if end < len(text):
        after = text[end]
        if after in _HEAD_LETTERS and (end + 1 == len(text) or text[end + 1].isspace()):
            return True
        neighbours.append(after)
    return any(char in ARROW_DECORATION_CHARS for char in neighbours)


def _is_dotted(operator: str) -> bool:
    return set(operator) == {"."}


def _normalize_arrows(text: str, allow_dotted: bool = True) -> tuple[str, bool]:
    """Put exactly one space around each plain arrow outside quotes.

    A run of dots is an arrow only when it links two operands and
    `allow_dotted` is set; otherwise it is an ellipsis in display text.

    Returns:
        tuple[str, bool]: Rewritten text, and whether any arrow (plain or
            decorated) was found.
    """
    spans = _quoted_spans(text)
    found = False
    rewritten = ""
    position = 0

    for match in ARROW_PATTERN.finditer(text):
        start, end = match.span()
        operator = match.group(0)
        if _in_spans(start, spans) or not is_arrow(operator):
            continue
        if _is_dotted(operator) and not (
            allow_dotted and text[:start].strip() and text[end:].strip()
        ):
            continue
        found = True
        if _is_decorated(text, start, end):
            continue

        rewritten += text[position:start].rstrip()
        if not rewritten.endswith(" "):
            rewritten += " "
        rewritten += f"{operator} "
        position = end
        while position < len(text) and text[position].isspace():
            position += 1

    return rewritten + text[position:], found


def find_label_separator(text: str) -> int | None:
    """Locate the colon that separates a relation from its label.

    The separator is the first colon that is not the first character, not
    part of a ``::`` pair, and not inside quotes or square brackets.

    Args:
        text: Trimmed line content.

    Returns:
        int | None: Index of the separator, or None when the line has none.

    Examples:
        find_label_separator("A -> B : hello")  # 7
        find_label_separator('A -> B "x:y"')  # None
    """
    spans = _quoted_spans(text)
    bracket_depth = 0
    index = 1
    while index < len(text):
        char = text[index]
        if _in_spans(index, spans):
            index += 1
            continue
        if char == "[":
            bracket_depth += 1
        elif char == "]":
            bracket_depth = max(bracket_depth - 1, 0)
        elif char == ":" and bracket_depth == 0:
            if index + 1 < len(text) and text[index + 1] == ":":
                index += 2
                continue
            return index
        index += 1
    return None


def normalize_spacing(text: str) -> str:
    """Normalize spacing around arrows and the label separator.

    Only whitespace changes: arrows outside quotes get one space on each
    side, and on relation lines the label colon becomes ``" : "``. Label text
    after the colon is kept as written. Comments, activity actions
    (``:text;``), preprocessor directives, layout lines (``...``, ``== x ==``,
    ``||45||``) and display text after ``title``, ``header``, ``footer``,
    ``caption`` or ``legend`` are returned trimmed only.

    Args:
        text: Raw line text.

    Returns:
        str: Normalized, trimmed text.

    Examples:
        normalize_spacing("User->Server:Login")  # "User -> Server : Login"
        normalize_spacing("class Foo <<Entity>>")  # unchanged
    """
    text = text.strip()
    if not text or text.startswith((COMMENT_PREFIX, BLOCK_COMMENT_START, ":", "!")):
        return text
    if text.startswith(LAYOUT_PREFIXES):
        return text

    first = FIRST_TOKEN_PATTERN.match(text)
    keyword = first.group(1).lower() if first else None
    if keyword in TEXT_KEYWORDS:
        return text

    separator = find_label_separator(text)
    head = text if separator is None else text[:separator]
    head, is_relation = _normalize_arrows(head, allow_dotted=keyword not in KEYWORD_TABLE)
    if separator is None:
        return head.strip()
    if not is_relation:
        return text

    label = text[separator + 1 :].strip()
    return f"{head.strip()} : {label}".rstrip()


def _starts_with_relation(content: str, token: str) -> bool:
    rest = content[len(token) :].lstrip()
    operator = rest[: len(rest) - len(rest.lstrip(ARROW_CHARS))]
    return bool(operator) and is_arrow(operator) and not _is_dotted(operator)


def _classify_keyword(content: str) -> tuple[LineKind | None, str | None]:
    match = FIRST_TOKEN_PATTERN.match(content)
    if match is None:
        return None, None

    token = match.group(1)
    keyword = token.lower()
    if _starts_with_relation(content, token):
        return None, None

    if match.group(2):
        phrase = f"{keyword} {match.group(2).lower()}"
        if phrase in PHRASE_TABLE:
            return PHRASE_TABLE[phrase], phrase

    kind = KEYWORD_TABLE.get(keyword)
    if kind is None:
        return None, None

    # Single-line notes and references carry their text on the same line
    if keyword in NOTE_KEYWORDS and (":" in content or '"' in content):
        return None, None
    if keyword in BARE_OPEN_KEYWORDS and content[len(token) :].strip():
        return None, None
    if keyword in DEFINITION_KEYWORDS and INLINE_RETURN in content.lower():
        return None, None

    return kind, keyword


def _classify_braces(content: str) -> tuple[LineKind | None, str | None]:
    opens = content.endswith("{")
    closes = content.startswith("}") or (content.endswith("}") and "{" not in content)
    if opens and content.startswith("}"):
        return LineKind.BLOCK_CONTINUATION, "}"
    if opens:
        return LineKind.BLOCK_OPEN, "{"
    if closes:
        return LineKind.BLOCK_CLOSE, "}"
    return None, None


def classify(raw_line: str) -> Classification:
    """Classify one line of PlantUML source.

    Every input has a classification; unrecognized content is ``PLAIN``.
    Comments and diagram markers are trimmed but otherwise untouched.

    Args:
        raw_line: Line text, with or without surrounding whitespace.

    Returns:
        Classification: Line kind, normalized content, and matched keyword.

    Examples:
        classify("  alt success").kind  # LineKind.BLOCK_OPEN
        classify("User->Server:Login").content  # "User -> Server : Login"
    """
    stripped = raw_line.strip()
    if not stripped:
        return Classification(LineKind.BLANK, "")

    if stripped.startswith((COMMENT_PREFIX, BLOCK_COMMENT_START)):
        return Classification(LineKind.PLAIN, stripped)
    if DIAGRAM_MARKER_PATTERN.match(stripped):
        return Classification(LineKind.PLAIN, stripped)

    content = normalize_spacing(stripped)
    kind, keyword = _classify_keyword(content)
    if kind is None:
        kind, keyword = _classify_braces(content)
    if kind is None:
        return Classification(LineKind.PLAIN, content)
    return Classification(kind, content, keyword)


def opens_block_comment(classification: Classification) -> bool:
    """Return True when a line starts a ``/'`` comment that continues below."""
    content = classification.content
    return content.startswith(BLOCK_COMMENT_START) and BLOCK_COMMENT_END not in content[2:]


def closes_free_text(content: str, keyword: str) -> bool:
    """Return True when `content` ends the free-text block opened by `keyword`.

    Examples:
        closes_free_text("end note", "hnote")  # True
        closes_free_text("end of transfer", "note")  # False
    """
    match = FREE_TEXT_CLOSER_PATTERN.match(content.strip())
    return match is not None and match.group(1).lower() in FREE_TEXT_CLOSERS[keyword]
