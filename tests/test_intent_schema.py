"""Tests for tolerant decoding of the Gemini JSON object into a `QueryIntent`."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from footwear_finder.intent.schema import QueryIntent, intent_from_obj


def test_full_object_is_lowercased() -> None:
    intent = intent_from_obj(
        {
            "gender": "M",
            "footwear_type": "Sport_Shoes",
            "color": " Red ",
            "subtype": "Running",
            "price_range": {"min": 500, "max": 3000},
        }
    )

    assert intent == QueryIntent(
        gender="m",
        footwear_type="sport_shoes",
        color="red",
        subtype="running",
        price_min=500,
        price_max=3000,
    )


def test_missing_fields_resolve_to_absent_and_defaults() -> None:
    intent = intent_from_obj({})

    assert intent.gender is None
    assert intent.footwear_type is None
    assert intent.color is None
    assert intent.subtype is None
    assert (intent.price_min, intent.price_max) == (0, 50000)


def test_null_price_bounds_use_defaults() -> None:
    intent = intent_from_obj({"price_range": {"min": None, "max": 3000}})
    assert (intent.price_min, intent.price_max) == (0, 3000)

    intent = intent_from_obj({"price_range": None})
    assert (intent.price_min, intent.price_max) == (0, 50000)


def test_numeric_strings_are_accepted_as_prices() -> None:
    intent = intent_from_obj({"price_range": {"max": "2999.5"}})
    assert intent.price_max == 2999.5


def test_blank_strings_are_absent() -> None:
    intent = intent_from_obj({"color": "   ", "subtype": ""})
    assert intent.color is None
    assert intent.subtype is None


def test_footwear_type_spelling_is_normalized() -> None:
    assert intent_from_obj({"footwear_type": "Flip-Flops"}).footwear_type == "flip_flops"
    assert intent_from_obj({"footwear_type": "school  shoes"}).footwear_type == "school_shoes"


def test_unknown_gender_survives_parsing() -> None:
    assert intent_from_obj({"gender": "X"}).gender == "x"


def test_extra_keys_are_ignored() -> None:
    intent = intent_from_obj({"gender": "f", "brand": "nike", "confidence": 0.9})
    assert intent.gender == "f"


def test_non_numeric_price_is_rejected() -> None:
    with pytest.raises(ValidationError):
        intent_from_obj({"price_range": {"max": "cheap"}})


@pytest.mark.parametrize("price_range", ["under 3000", [0, 100], 3000])
def test_non_object_price_range_uses_defaults(price_range: object) -> None:
    intent = intent_from_obj(
        {"gender": "m", "footwear_type": "sport_shoes", "price_range": price_range}
    )
    assert intent.gender == "m"
    assert (intent.price_min, intent.price_max) == (0, 50000)


def test_non_object_payload_is_rejected() -> None:
    with pytest.raises(ValidationError):
        intent_from_obj(["m", "sport_shoes"])


def test_intent_is_immutable() -> None:
    intent = QueryIntent(color="red")
    with pytest.raises(ValidationError):
        intent.color = "blue"  # type: ignore[misc]
