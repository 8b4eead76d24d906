"""
Unit tests for LLM reply JSON extraction.
Tests: plain JSON, markdown fence, prose wrapping, trailing-comma repair, ParseFailure cases.
"""
from __future__ import annotations

import pytest

from core.models import ParseFailure
from utils.json_utils import extract_first_json_object, parse_json_object


def test_plain_object() -> None:
    assert parse_json_object('{"parsedFields": {"unitsKWh": 600}}') == {"parsedFields": {"unitsKWh": 600}}


def test_markdown_fence_is_stripped() -> None:
    raw = '```json\n{"parsedFields": {"unitsKWh": 350}, "assumptions": []}\n```'
    assert parse_json_object(raw)["parsedFields"]["unitsKWh"] == 350


def test_object_wrapped_in_prose() -> None:
    raw = 'Here is the data:\n{"parsedFields": {"location": "Lahore"}}\nLet me know if you need more.'
    assert parse_json_object(raw) == {"parsedFields": {"location": "Lahore"}}


def test_trailing_commas_repaired() -> None:
    raw = 'Result: {"parsedFields": {"unitsKWh": 600, "totalCost": 18000,}, "assumptions": ["a",],}'
    data = parse_json_object(raw)
    assert data["parsedFields"] == {"unitsKWh": 600, "totalCost": 18000}
    assert data["assumptions"] == ["a"]


def test_braces_inside_strings_do_not_end_object() -> None:
    text = 'x {"note": "use } carefully", "n": 1} y'
    assert extract_first_json_object(text) == '{"note": "use } carefully", "n": 1}'


@pytest.mark.parametrize("raw", ["", "   ", "not json at all", "{unclosed", "[1, 2, 3]", '"just a string"'])
def test_unusable_replies_return_parse_failure(raw: str) -> None:
    out = parse_json_object(raw)
    assert isinstance(out, ParseFailure)
    assert out.reason
    assert out.raw == raw


@pytest.mark.parametrize("raw", [
    '{"parsedFields": {"unitsKWh": NaN, "totalCost": 18000}}',
    'Result: {"parsedFields": {"totalCost": Infinity}}',
    '```json\n{"parsedFields": {"unitsKWh": -Infinity,}}\n```',
])
def test_non_standard_number_constants_are_rejected(raw: str) -> None:
    out = parse_json_object(raw)
    assert isinstance(out, ParseFailure)
    assert "constant" in out.reason
    assert out.raw == raw
