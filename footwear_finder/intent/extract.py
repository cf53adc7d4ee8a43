"""Extraction of a JSON object embedded in free-form model output."""

from __future__ import annotations

import json
from typing import Any

_DECODER = json.JSONDecoder()


def _balanced_end(text: str, start: int) -> int:
    """Return the index just past the `}` closing the `{` at `start`, or -1 if it never closes.

    Braces inside JSON string literals are not counted.
    """

    depth = 0
    in_string = False
    escaped = False
    for idx in range(start, len(text)):
        char = text[idx]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return idx + 1
    return -1


def extract_json_object(text: str) -> dict[str, Any] | None:
    """Return the first complete top-level JSON object found in `text`, or `None`.

    Only `{` positions outside any earlier brace span are tried. When a span fails to decode the
    scan resumes after its closing `}`, so a nested object (e.g. `price_range`) of a malformed reply
    is never mistaken for the whole answer.
    """

    pos = text.find("{")
    while pos != -1:
        try:
            value, _end = _DECODER.raw_decode(text, pos)
        except json.JSONDecodeError:
            pass
        else:
            if isinstance(value, dict):
                return value

        end = _balanced_end(text, pos)
        if end == -1:
            return None
        pos = text.find("{", end)
    return None
