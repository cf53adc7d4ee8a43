"""Query intent schema (Pydantic models).

`QueryIntent` is the contract between the Gemini analysis step and the catalog query builder.
Fields are deliberately permissive: an unknown gender or footwear type must survive parsing so that
the table resolver can reject it as a client error.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from footwear_finder.intent.normalize import normalize_field, normalize_footwear_type

DEFAULT_PRICE_MIN = 0
DEFAULT_PRICE_MAX = 50000


class Gender(StrEnum):
    """Catalog gender segments."""

    men = "m"
    women = "f"
    kids = "k"


class FootwearType(StrEnum):
    """Footwear categories present in the catalog (not every gender has every type)."""

    sport_shoes = "sport_shoes"
    flip_flops = "flip_flops"
    sandals = "sandals"
    flats = "flats"
    heels = "heels"
    school_shoes = "school_shoes"


class QueryIntent(BaseModel):
    """Structured product query extracted from the user's free text."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    gender: str | None = None
    footwear_type: str | None = None
    color: str | None = None
    subtype: str | None = None
    price_min: float = Field(default=DEFAULT_PRICE_MIN)
    price_max: float = Field(default=DEFAULT_PRICE_MAX)

    @field_validator("gender", "color", "subtype", mode="before")
    @classmethod
    def normalize_text_fields(cls, value: Any) -> str | None:
        """Lowercase/strip string fields; blank strings become absent."""

        return normalize_field(value)

    @field_validator("footwear_type", mode="before")
    @classmethod
    def normalize_type_field(cls, value: Any) -> str | None:
        """Normalize the footwear type to its snake_case catalog spelling."""

        return normalize_footwear_type(value)

    @field_validator("price_min", mode="before")
    @classmethod
    def default_price_min(cls, value: Any) -> Any:
        return DEFAULT_PRICE_MIN if value is None else value

    @field_validator("price_max", mode="before")
    @classmethod
    def default_price_max(cls, value: Any) -> Any:
        return DEFAULT_PRICE_MAX if value is None else value


class _AnalysisPayload(BaseModel):
    """Shape of the JSON object Gemini is expected to produce."""

    model_config = ConfigDict(extra="ignore")

    gender: Any = None
    footwear_type: Any = None
    color: Any = None
    subtype: Any = None
    price_range: Any = None


def intent_from_obj(obj: Any) -> QueryIntent:
    """Build a `QueryIntent` from the decoded Gemini JSON object.

    Missing fields resolve to absent values. A missing, null or non-object `price_range`, and any
    missing or null bound inside it, falls back to the catalog-wide default (0 / 50000).

    Raises:
        pydantic.ValidationError: If the object is not a mapping or a price is not numeric.
    """

    payload = _AnalysisPayload.model_validate(obj)
    # e.g. "under 3000": no usable bounds.
    price_range = payload.price_range if isinstance(payload.price_range, dict) else {}
    return QueryIntent(
        gender=payload.gender,
        footwear_type=payload.footwear_type,
        color=payload.color,
        subtype=payload.subtype,
        price_min=price_range.get("min"),
        price_max=price_range.get("max"),
    )
