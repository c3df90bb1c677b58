from __future__ import annotations

import os

import pytest
from pumlformat.formatter import format_lines

atheris = pytest.importorskip("atheris")


def test_format_lines_with_fuzzed_input():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    lines: list[str] = []

    while provider.remaining_bytes() > 0 and len(lines) < 64:
        lines.append(provider.ConsumeUnicodeNoSurrogates(48))

    indent_width = provider.ConsumeIntInRange(0, 8) if provider.remaining_bytes() else 4
    formatted = format_lines(lines, indent_width)

    assert format_lines(formatted, indent_width) == formatted
    assert "".join("".join(formatted).split()) == "".join("".join(lines).split())
