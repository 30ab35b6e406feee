"""Upstream error entries.

The upstream reports failures as a list of entry objects, either at the top
level of the document or nested under the primary resource key. Field names
drift between endpoints (`msg` vs `message`, `errorCode` vs `code`) and some
endpoints answer with a single object or a field-to-messages mapping.

Usage:
    from payrix.domain.value_objects import ApiErrorSet

    errors = ApiErrorSet.from_wire(body["response"]["errors"])
    if errors.has_code("C_RATE_LIMIT_EXCEEDED_TEMP_BLOCK"):
        ...
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True, kw_only=True)
class ApiErrorEntry:
    """One error entry reported by the upstream.

    Attributes:
        message: Human-readable message (may be empty).
        code: Upstream error code, stringified when numeric.
        field: Offending request field, when reported.
        raw: The wire entry exactly as received.
    """

    message: str
    code: str | None = None
    field: str | None = None
    raw: Any = None

    @classmethod
    def from_wire(cls, entry: Any) -> "ApiErrorEntry":
        """Build an entry from one wire element.

        Strings become message-only entries; mappings are read with the
        upstream's alternate key names.
        """
        if not isinstance(entry, dict):
            return cls(message=str(entry), raw=entry)

        message = entry.get("msg")
        if message is None:
            message = entry.get("message")
        code = entry.get("errorCode")
        if code is None:
            code = entry.get("code")
        error_field = entry.get("field")

        return cls(
            message="" if message is None else str(message),
            code=None if code is None else str(code),
            field=None if error_field is None else str(error_field),
            raw=entry,
        )

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


@dataclass(frozen=True, slots=True)
class ApiErrorSet:
    """Ordered collection of upstream error entries.

    Empty only when a failure was determined from the status code alone and
    the body carried nothing usable.
    """

    entries: tuple[ApiErrorEntry, ...] = field(default_factory=tuple)

    @classmethod
    def from_wire(cls, value: Any) -> "ApiErrorSet":
        """Parse the wire `errors` value in any of its observed shapes."""
        match value:
            case None:
                return cls()
            case list():
                return cls(tuple(ApiErrorEntry.from_wire(item) for item in value))
            case dict() if any(k in value for k in ("msg", "message", "errorCode")):
                return cls((ApiErrorEntry.from_wire(value),))
            case dict():
                # {"field": ["message", ...]} form
                entries = []
                for name, messages in value.items():
                    items = messages if isinstance(messages, list) else [messages]
                    for message in items:
                        entries.append(
                            ApiErrorEntry(
                                message=str(message),
                                field=str(name),
                                raw={name: message},
                            )
                        )
                return cls(tuple(entries))
            case str() if value:
                return cls((ApiErrorEntry(message=value, raw=value),))
            case _:
                return cls()

    @classmethod
    def from_status(cls, status_code: int, reason: str = "") -> "ApiErrorSet":
        """Synthesize a single entry from the HTTP status line."""
        message = f"HTTP {status_code} {reason}".strip()
        return cls((ApiErrorEntry(message=message, code=str(status_code)),))

    @property
    def messages(self) -> list[str]:
        return [entry.message for entry in self.entries]

    @property
    def codes(self) -> list[str]:
        return [entry.code for entry in self.entries if entry.code is not None]

    def has_code(self, code: str) -> bool:
        """Check whether any entry carries the given upstream code."""
        return any(entry.code == code for entry in self.entries)

    def __iter__(self) -> Iterator[ApiErrorEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)

    def __str__(self) -> str:
        return "; ".join(str(entry) for entry in self.entries)
