from __future__ import annotations

import string

from hypothesis import given
from hypothesis import strategies as st
from pumlformat.classifier import classify, normalize_spacing
from pumlformat.formatter import format_lines

FRAGMENTS = [
    "@startuml",
    "@enduml",
    "actor User",
    "participant Server",
    "alt success",
    "else failure",
    "end",
    "loop 3 times",
    "group Login",
    "box \"Internal\"",
    "end box",
    "User->Server:Login",
    "Server --> User : token",
    "Loop -> Server",
    "note left of User",
    "note right: inline",
    "end note",
    "if the token expires",
    "end of transfer",
    "legend right",
    "endlegend",
    "== Init... ==",
    "title Loading...",
    "!function $d($a) !return $a",
    "' alt commented out",
    "class User {",
    "}",
    "if (ok?) then (yes)",
    "elseif (maybe?)",
    "endif",
    "repeat",
    "repeat while (more?)",
    "fork",
    "fork again",
    "end fork",
    ":action;",
    "",
    "   ",
]

indent_strategy = st.sampled_from(["", " ", "  ", "\t", "        "])
line_strategy = st.builds(
    lambda before, fragment, after: f"{before}{fragment}{after}",
    indent_strategy,
    st.sampled_from(FRAGMENTS),
    st.sampled_from(["", " ", "\t"]),
)
document_strategy = st.lists(line_strategy, max_size=40)
width_strategy = st.integers(min_value=0, max_value=8)

# Free-form lines built from characters that matter to the classifier
noise_strategy = st.lists(
    st.text(alphabet=string.ascii_letters[:8] + "ox \t-.<>:'\"{}[]/#@!*|", max_size=24),
    max_size=20,
)


def _non_whitespace(lines: list[str]) -> str:
    return "".join("".join(lines).split())


@given(document_strategy, width_strategy)
def test_formatting_is_idempotent(lines: list[str], indent_width: int):
    once = format_lines(lines, indent_width)

    assert format_lines(once, indent_width) == once


@given(noise_strategy, width_strategy)
def test_formatting_noise_is_idempotent(lines: list[str], indent_width: int):
    once = format_lines(lines, indent_width)

    assert format_lines(once, indent_width) == once


@given(document_strategy, st.integers(min_value=1, max_value=8))
def test_indentation_is_a_multiple_of_width(lines: list[str], indent_width: int):
    for line in format_lines(lines, indent_width):
        indentation = len(line) - len(line.lstrip(" "))
        assert indentation % indent_width == 0
        assert not line[indentation:].startswith((" ", "\t"))


@given(st.one_of(document_strategy, noise_strategy), width_strategy)
def test_blank_lines_never_repeat_or_border_output(lines: list[str], indent_width: int):
    formatted = format_lines(lines, indent_width)

    if formatted:
        assert formatted[0] != ""
        assert formatted[-1] != ""
    for previous, current in zip(formatted, formatted[1:]):
        assert not (previous == "" and current == "")


@given(st.one_of(document_strategy, noise_strategy), width_strategy)
def test_non_whitespace_content_is_preserved(lines: list[str], indent_width: int):
    formatted = format_lines(lines, indent_width)

    assert _non_whitespace(formatted) == _non_whitespace(lines)


@given(st.one_of(document_strategy, noise_strategy), width_strategy)
def test_formatting_is_deterministic(lines: list[str], indent_width: int):
    assert format_lines(lines, indent_width) == format_lines(lines, indent_width)


@given(st.text(alphabet=string.ascii_letters + " \t-.<>:\"[]", max_size=40))
def test_normalize_spacing_is_idempotent(text: str):
    once = normalize_spacing(text)

    assert normalize_spacing(once) == once
    assert once == once.strip()


@given(st.text(max_size=60))
def test_classify_is_total(text: str):
    classification = classify(text)

    assert classification.content == classification.content.strip()
