"""Catalog table resolution.

The product catalog is split into one denormalized table per (gender, footwear type) pair. Table
names are derived only from the static mappings below; request values are used as lookup keys and
never become part of an identifier themselves.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from footwear_finder.intent.schema import FootwearType, Gender

_TABLE_PREFIXES: Mapping[Gender, str] = MappingProxyType(
    {
        Gender.men: "m",
        Gender.women: "w",
        Gender.kids: "k",
    }
)

_TYPES_BY_GENDER: Mapping[Gender, frozenset[FootwearType]] = MappingProxyType(
    {
        Gender.men: frozenset(
            {FootwearType.sport_shoes, FootwearType.flip_flops, FootwearType.sandals}
        ),
        Gender.women: frozenset(
            {FootwearType.sport_shoes, FootwearType.flats, FootwearType.heels}
        ),
        Gender.kids: frozenset(
            {FootwearType.sport_shoes, FootwearType.flip_flops, FootwearType.school_shoes}
        ),
    }
)


def _table_name(gender: Gender, footwear_type: FootwearType) -> str:
    return f"{_TABLE_PREFIXES[gender]}_product_details_{footwear_type.value}_processed"


CATALOG_TABLES: Mapping[tuple[Gender, FootwearType], str] = MappingProxyType(
    {
        (gender, footwear_type): _table_name(gender, footwear_type)
        for gender, types in _TYPES_BY_GENDER.items()
        for footwear_type in types
    }
)

TOP_SELLING_TABLES: Mapping[Gender, str] = MappingProxyType(
    {
        Gender.men: CATALOG_TABLES[(Gender.men, FootwearType.sport_shoes)],
        Gender.women: CATALOG_TABLES[(Gender.women, FootwearType.sport_shoes)],
    }
)

KNOWN_TABLES: frozenset[str] = frozenset(CATALOG_TABLES.values())


def resolve_table(gender: str | None, footwear_type: str | None) -> str | None:
    """Map a gender/footwear-type pair to its catalog table.

    Returns `None` when either value is absent, unknown, or not offered for that gender.
    """

    if gender is None or footwear_type is None:
        return None
    try:
        key = (Gender(gender), FootwearType(footwear_type))
    except ValueError:
        return None
    return CATALOG_TABLES.get(key)


def top_selling_table(gender: str | None) -> str | None:
    """Return the sport-shoes table used for the top-sellers listing (men and women only)."""

    if gender is None:
        return None
    try:
        return TOP_SELLING_TABLES.get(Gender(gender))
    except ValueError:
        return None
