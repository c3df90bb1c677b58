from pumlformat.models import Classification, FormatterState, LineKind


def test_line_kind_members():
    assert list(LineKind) == [
        LineKind.BLOCK_OPEN,
        LineKind.BLOCK_CLOSE,
        LineKind.BLOCK_CONTINUATION,
        LineKind.BLANK,
        LineKind.PLAIN,
    ]


def test_formatter_state_defaults():
    state = FormatterState()

    assert state.depth == 0
    assert state.last_was_blank is False
    assert state.in_block_comment is False
    assert state.free_text_keyword is None


def test_formatter_states_are_independent():
    first = FormatterState()
    second = FormatterState()

    first.depth = 3

    assert second.depth == 0


def test_classification_defaults_to_no_keyword():
    classification = Classification(LineKind.PLAIN, "actor User")

    assert classification.keyword is None
    assert classification.is_comment is False
    assert classification.is_diagram_marker is False


def test_classification_detects_comments():
    assert Classification(LineKind.PLAIN, "' note").is_comment
    assert Classification(LineKind.PLAIN, "/' block").is_comment


def test_classification_detects_diagram_markers():
    assert Classification(LineKind.PLAIN, "@startuml").is_diagram_marker
    assert Classification(LineKind.PLAIN, "@EndUML").is_diagram_marker
    assert Classification(LineKind.PLAIN, "@startmindmap").is_diagram_marker
    assert not Classification(LineKind.PLAIN, "User @ home").is_diagram_marker
