"""Placeholder for enum values outside the known set."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class UnrecognizedVariant:
    """Enum wire value that matched no declared member.

    Kept instead of failing so that upstream additions do not break decoding
    of the rest of the record. Encodes back to `raw` unchanged.

    Attributes:
        enum_name: Name of the declared enum class.
        raw: The wire value as received.
    """

    enum_name: str
    raw: Any

    def __str__(self) -> str:
        return f"{self.enum_name}?{self.raw!r}"
