"""Search and expansion query composition.

Pure string building, no network effects.

Search expressions travel in the `search` request header as
`field[operator]=value` terms joined with `&`:

    SearchBuilder().equals("merchant", "t1_mer_123").greater("created", day).build()
    -> "merchant[equals]=t1_mer_123&created[greater]=20240101"

Relation expansion is a query string appended to the record path:

    build_expand_query(["token", "token|customer"])
    -> "expand[token][]&expand[token][][customer][]"
"""

from collections.abc import Iterable
from datetime import date, datetime
from enum import Enum
from typing import Any, Self

from payrix.domain.value_objects import PayrixDate


class SearchOperator(str, Enum):
    """Search comparison operators."""

    EQUALS = "equals"
    EXACT = "exact"
    GREATER = "greater"
    LESS = "less"
    LIKE = "like"
    IN = "in"
    SORT = "sort"
    DIFF = "diff"
    NOTLIKE = "notlike"
    NOTIN = "notin"


def format_payrix_date(value: date) -> str:
    """Format a date as YYYYMMDD."""
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"


def parse_payrix_date(value: str) -> date | None:
    """Parse a YYYYMMDD string; None when it is not a valid date."""
    if len(value) != 8 or not value.isdigit():
        return None
    try:
        return date(int(value[:4]), int(value[4:6]), int(value[6:]))
    except ValueError:
        return None


def format_search_value(value: Any) -> str:
    """Render one search value in wire form."""
    match value:
        case bool():
            return "1" if value else "0"
        case PayrixDate():
            return value.to_wire()
        case datetime():
            return format_payrix_date(value.date())
        case date():
            return format_payrix_date(value)
        case Enum():
            return str(value.value)
        case _:
            return str(value)


def make_search_field(
    field: str, value: Any, operator: SearchOperator = SearchOperator.EQUALS
) -> str:
    """Build one `field[operator]=value` term."""
    return f"{field}[{SearchOperator(operator).value}]={format_search_value(value)}"


def make_search_field_multi(
    field: str, values: Iterable[Any], operator: SearchOperator = SearchOperator.IN
) -> str:
    """Build a term whose values are joined with commas (in, notin)."""
    joined = ",".join(format_search_value(value) for value in values)
    return f"{field}[{SearchOperator(operator).value}]={joined}"


def build_expand_query(expand: Iterable[str]) -> str:
    """Build the expansion query string.

    Nested relations are written `a|b` and expand `b` inside `a`.
    """
    terms = []
    for relation in expand:
        parts = [part for part in relation.split("|") if part]
        if not parts:
            continue
        terms.append("expand" + "".join(f"[{part}][]" for part in parts))
    return "&".join(terms)


class SearchBuilder:
    """Fluent builder for search expressions.

    Example:
        search = (
            SearchBuilder()
            .equals("merchant", merchant_id)
            .equals("actionable", True)
            .sort("created", "desc")
            .build()
        )
    """

    def __init__(self) -> None:
        self._terms: list[str] = []

    def field(
        self, name: str, value: Any, operator: SearchOperator = SearchOperator.EQUALS
    ) -> Self:
        self._terms.append(make_search_field(name, value, operator))
        return self

    def field_multi(
        self,
        name: str,
        values: Iterable[Any],
        operator: SearchOperator = SearchOperator.IN,
    ) -> Self:
        self._terms.append(make_search_field_multi(name, values, operator))
        return self

    def equals(self, name: str, value: Any) -> Self:
        return self.field(name, value, SearchOperator.EQUALS)

    def exact(self, name: str, value: Any) -> Self:
        return self.field(name, value, SearchOperator.EXACT)

    def greater(self, name: str, value: Any) -> Self:
        return self.field(name, value, SearchOperator.GREATER)

    def less(self, name: str, value: Any) -> Self:
        return self.field(name, value, SearchOperator.LESS)

    def like(self, name: str, value: Any) -> Self:
        return self.field(name, value, SearchOperator.LIKE)

    def diff(self, name: str, value: Any) -> Self:
        return self.field(name, value, SearchOperator.DIFF)

    def not_like(self, name: str, value: Any) -> Self:
        return self.field(name, value, SearchOperator.NOTLIKE)

    def is_in(self, name: str, values: Iterable[Any]) -> Self:
        return self.field_multi(name, values, SearchOperator.IN)

    def not_in(self, name: str, values: Iterable[Any]) -> Self:
        return self.field_multi(name, values, SearchOperator.NOTIN)

    def sort(self, name: str, direction: str = "asc") -> Self:
        return self.field(name, direction, SearchOperator.SORT)

    def raw(self, expression: str) -> Self:
        """Append a pre-built expression verbatim."""
        if expression:
            self._terms.append(expression)
        return self

    def build(self) -> str:
        return "&".join(self._terms)

    def __bool__(self) -> bool:
        return bool(self._terms)
