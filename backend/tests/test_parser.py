# tests/test_parser.py
from __future__ import annotations

import pytest

from echobody.services.parser import CompletionParseError, parse_completion


def test_strict_parses_json():
    assert parse_completion('{"Day 1": {"Lunch": "Soup"}}') == {"Day 1": {"Lunch": "Soup"}}


def test_strict_rejects_text():
    with pytest.raises(CompletionParseError):
        parse_completion("not json")


def test_lenient_passes_text_through():
    assert parse_completion("not json", lenient=True) == "not json"
    assert parse_completion("[1, 2]", lenient=True) == [1, 2]
