"""Allowlisted SQL identifiers.

The catalog tables were imported from spreadsheets and keep their mixed-case column names, so every
identifier is stored here already double-quoted. No request value is ever used as an identifier.
"""

from __future__ import annotations

DESCRIPTION = '"Description"'
PRICE = '"Price"'
RATING = '"Rating"'
RATINGS_COUNT = '"Ratings Count"'
TYPE = '"Type"'

# Raw column name as stored in information_schema (used as a bound value, not an identifier).
TYPE_COLUMN_NAME = "Type"
