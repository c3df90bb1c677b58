"""Constants used across the pumlformat package."""

from __future__ import annotations

import re

from .config import FormatConfig

DEFAULT_CONFIG = FormatConfig()
DEFAULT_INDENT_WIDTH = DEFAULT_CONFIG.indent_width
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size

# Comments
COMMENT_PREFIX = "'"
BLOCK_COMMENT_START = "/'"
BLOCK_COMMENT_END = "'/"

# Diagram boundaries (@startuml, @enduml, @startmindmap, ...)
DIAGRAM_MARKER_PATTERN = re.compile(r"^@(start|end)\w*", re.IGNORECASE)

# First word of a line; preprocessor directives keep their leading "!"
FIRST_TOKEN_PATTERN = re.compile(r"^(!?\w+)(?:\s+(\w+))?")

# Keywords that open a block
OPEN_KEYWORDS = frozenset(
    {
        "alt",
        "opt",
        "loop",
        "par",
        "par2",
        "break",
        "critical",
        "group",
        "box",
        "if",
        "while",
        "repeat",
        "fork",
        "split",
        "switch",
        "legend",
        "package",
        "namespace",
        "!if",
        "!ifdef",
        "!ifndef",
        "!while",
        "!foreach",
        "!procedure",
        "!function",
        "!unquoted",
        "!definelong",
    }
)

# Keywords that open a block only in their multi-line form (no ":" label,
# no quoted text on the same line)
NOTE_KEYWORDS = frozenset({"note", "hnote", "rnote", "ref"})

# Keywords that open a block only when used without an argument
BARE_OPEN_KEYWORDS = frozenset({"title", "header", "footer"})

CLOSE_KEYWORDS = frozenset(
    {
        "end",
        "endif",
        "endwhile",
        "endfork",
        "endsplit",
        "endswitch",
        "endrepeat",
        "endlegend",
        "endnote",
        "endhnote",
        "endrnote",
        "endref",
        "endgroup",
        "endbox",
        "endpackage",
        "endnamespace",
        "endtitle",
        "endheader",
        "endfooter",
        "!endif",
        "!endwhile",
        "!endfor",
        "!endprocedure",
        "!endfunction",
        "!enddefinelong",
    }
)

CONTINUATION_KEYWORDS = frozenset({"else", "elseif", "case", "!else", "!elseif"})

# Two-word phrases, matched before single keywords
CLOSE_PHRASES = frozenset({"repeat while"})
CONTINUATION_PHRASES = frozenset({"fork again", "split again"})

# Arrow operators: runs of "-", ".", "<", ">"
ARROW_CHARS = "-.<>"
ARROW_PATTERN = re.compile(r"[-.<>]+")
# Characters that mark a decorated arrow (-[#red]->, --|>, -\\) left untouched
ARROW_DECORATION_CHARS = frozenset("[]|\\/*#()")
QUOTED_PATTERN = re.compile(r'"[^"]*"')

# Prefixes of lines whose spacing is layout: sequence delays and dividers,
# spacers, class body separators
LAYOUT_PREFIXES = ("..", "--", "__", "==", "||")

# Keywords whose argument is display text rather than a relation
TEXT_KEYWORDS = frozenset({"title", "header", "footer", "caption", "legend"})

# Blocks whose body is free text, mapped to the words allowed after "end"
_NOTE_FAMILY = frozenset({"note", "hnote", "rnote"})
FREE_TEXT_CLOSERS = {
    "note": _NOTE_FAMILY,
    "hnote": _NOTE_FAMILY,
    "rnote": _NOTE_FAMILY,
    "ref": frozenset({"ref"}),
    "legend": frozenset({"legend"}),
    "title": frozenset({"title"}),
    "header": frozenset({"header"}),
    "footer": frozenset({"footer"}),
}
FREE_TEXT_CLOSER_PATTERN = re.compile(r"^end\s*(\w+)", re.IGNORECASE)

# Preprocessor definitions written on one line
DEFINITION_KEYWORDS = frozenset({"!function", "!procedure", "!unquoted"})
INLINE_RETURN = "!return"
