"""
JSON extraction for LLM replies.
Models wrap JSON in markdown fences or prose and leave trailing commas; repair those,
and report anything else as ParseFailure rather than guessing.
"""
from __future__ import annotations

import json
import re
from typing import Any

from core.models import ParseFailure

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")


def strip_code_fence(text: str) -> str:
    """Return the body of the first ```json fence, or text unchanged."""
    m = _FENCE_RE.search(text)
    return m.group(1).strip() if m else text


def extract_first_json_object(text: str) -> str | None:
    """Extract the first {...} object from text (brace-balanced, string-aware)."""
    start = text.find("{")
    if start < 0:
        return None
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def fix_json(s: str) -> str:
    """Remove trailing commas before } and ]."""
    s = re.sub(r",\s*}", "}", s)
    s = re.sub(r",\s*]", "]", s)
    return s


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def _loads(s: str) -> Any:
    """Strict json.loads: NaN, Infinity and -Infinity are rejected."""
    return json.loads(s, parse_constant=_reject_constant)


def parse_json_object(raw: str) -> dict[str, Any] | ParseFailure:
    """
    Parse an LLM reply into a JSON object.
    Order: whole reply (fence stripped) -> first balanced object -> same with trailing commas removed.
    """
    text = strip_code_fence((raw or "").strip())
    if not text:
        return ParseFailure("empty response", raw=raw or "")
    try:
        data = _loads(text)
    except ValueError:
        candidate = extract_first_json_object(text)
        if candidate is None:
            return ParseFailure("no JSON object in response", raw=raw)
        try:
            data = _loads(candidate)
        except ValueError:
            try:
                data = _loads(fix_json(candidate))
            except ValueError as e:
                return ParseFailure(f"invalid JSON: {e}", raw=raw)
    if not isinstance(data, dict):
        return ParseFailure("response is not a JSON object", raw=raw)
    return data
