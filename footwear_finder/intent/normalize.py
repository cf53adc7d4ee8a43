"""Normalization of string fields returned by the model."""

from __future__ import annotations

import re
from typing import Any

_TYPE_SEPARATOR_RE = re.compile(r"[\s\-]+")


def normalize_field(value: Any) -> str | None:
    """Lowercase and strip a string field.

    `None` and blank strings become `None`. Non-string scalars (e.g. a number where a color was
    expected) are stringified rather than rejected; the model output is treated as best-effort.
    """

    if value is None:
        return None
    text = str(value).strip().lower()
    return text or None


def normalize_footwear_type(value: Any) -> str | None:
    """Normalize a footwear type to snake_case (`"Flip-Flops"` -> `"flip_flops"`)."""

    text = normalize_field(value)
    if text is None:
        return None
    return _TYPE_SEPARATOR_RE.sub("_", text)
