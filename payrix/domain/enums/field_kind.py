"""Declared target kinds for record fields.

A record schema maps every attribute to one FieldKind; the flexible codec
holds an ordered list of accepted wire encodings per kind.
"""

from enum import Enum


class FieldKind(str, Enum):
    """Target kind of a decoded field."""

    INTEGER = "integer"  # Enum codes and counts (int, "12", 12.0)
    AMOUNT = "amount"  # Monetary values in cents, int or float on the wire
    FLOAT = "float"  # Rates and percentages
    TIMESTAMP = "timestamp"  # YYYYMMDD, YYYY, YYYY-MM-DD HH:MM:SS, YYYYMMDDHHMM
    IDENTIFIER = "identifier"  # Entity ids, 1-50 characters
    ENUM = "enum"  # Closed value sets with an unrecognized-variant fallback
    TEXT = "text"  # Free text
    BOOLEAN = "boolean"  # 0/1 integers, true/false
    RELATION = "relation"  # Id string, or the related object when expanded
