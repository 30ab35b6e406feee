"""Precision-preserving date value.

The upstream encodes dates in several shapes depending on endpoint and verb:
bare years, YYYYMMDD, YYYYMMDDHHMM and `YYYY-MM-DD HH:MM:SS[.fff]`. A
PayrixDate keeps exactly the components that were present on the wire and
reports the precision it was received with; missing components are never
filled in.

Usage:
    from payrix.domain.value_objects import PayrixDate

    date = PayrixDate.from_wire("20240315")
    date.precision        # DatePrecision.DAY
    date.to_date()        # datetime.date(2024, 3, 15)
    date.to_wire()        # "20240315"
"""

import re
from dataclasses import dataclass
from datetime import date, datetime

from payrix.domain.enums import DatePrecision

_YEAR = re.compile(r"^(\d{4})$")
_DAY = re.compile(r"^(\d{4})(\d{2})(\d{2})$")
_MINUTE = re.compile(r"^(\d{4})(\d{2})(\d{2})(\d{2})(\d{2})$")
_FULL = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[ T](\d{2}):(\d{2}):(\d{2})(?:\.(\d{1,6}))?$"
)


@dataclass(frozen=True, slots=True, kw_only=True)
class PayrixDate:
    """Date/time value with the precision it was received with.

    Attributes:
        year: Always present.
        month, day: Present from DAY precision upward.
        hour, minute: Present from MINUTE precision upward.
        second: Present from SECOND precision upward.
        millisecond: Present only at MILLISECOND precision.

    Raises:
        ValueError: If components are missing out of order or name an
            impossible calendar date/time.
    """

    year: int
    month: int | None = None
    day: int | None = None
    hour: int | None = None
    minute: int | None = None
    second: int | None = None
    millisecond: int | None = None

    def __post_init__(self) -> None:
        components = (
            self.month,
            self.day,
            self.hour,
            self.minute,
            self.second,
            self.millisecond,
        )
        seen_missing = False
        for component in components:
            if component is None:
                seen_missing = True
            elif seen_missing:
                raise ValueError("Date components must be filled from the left")
        if (self.month is None) != (self.day is None):
            raise ValueError("Month and day must be given together")
        if (self.hour is None) != (self.minute is None):
            raise ValueError("Hour and minute must be given together")

        if not 1 <= self.year <= 9999:
            raise ValueError(f"Year out of range: {self.year}")
        if self.month is not None:
            # date() rejects impossible days such as Feb 30
            date(self.year, self.month, self.day)  # type: ignore[arg-type]
        if self.hour is not None and not (
            0 <= self.hour <= 23 and 0 <= self.minute <= 59  # type: ignore[operator]
        ):
            raise ValueError(f"Invalid time {self.hour}:{self.minute}")
        if self.second is not None and not 0 <= self.second <= 59:
            raise ValueError(f"Invalid second {self.second}")
        if self.millisecond is not None and not 0 <= self.millisecond <= 999:
            raise ValueError(f"Invalid millisecond {self.millisecond}")

    @property
    def precision(self) -> DatePrecision:
        if self.millisecond is not None:
            return DatePrecision.MILLISECOND
        if self.second is not None:
            return DatePrecision.SECOND
        if self.minute is not None:
            return DatePrecision.MINUTE
        if self.day is not None:
            return DatePrecision.DAY
        return DatePrecision.YEAR

    @classmethod
    def from_wire(cls, value: str | int) -> "PayrixDate":
        """Parse any of the upstream's date encodings.

        Args:
            value: YYYY, YYYYMMDD, YYYYMMDDHHMM (string or integer) or
                `YYYY-MM-DD HH:MM:SS[.fff]`.

        Raises:
            ValueError: If the value matches no known shape or names an
                impossible date.
        """
        if isinstance(value, bool):
            raise ValueError("Booleans are not dates")
        if isinstance(value, int):
            text = str(value)
        elif isinstance(value, str):
            text = value.strip()
        else:
            raise ValueError(f"Unrecognized date value: {value!r}")

        if match := _DAY.match(text):
            year, month, day = (int(part) for part in match.groups())
            return cls(year=year, month=month, day=day)
        if match := _YEAR.match(text):
            return cls(year=int(match.group(1)))
        if match := _MINUTE.match(text):
            year, month, day, hour, minute = (int(part) for part in match.groups())
            return cls(year=year, month=month, day=day, hour=hour, minute=minute)
        if match := _FULL.match(text):
            year, month, day, hour, minute, second = (
                int(part) for part in match.groups()[:6]
            )
            fraction = match.group(7)
            millisecond = None
            if fraction is not None:
                millisecond = int(fraction.ljust(3, "0")[:3])
            return cls(
                year=year,
                month=month,
                day=day,
                hour=hour,
                minute=minute,
                second=second,
                millisecond=millisecond,
            )
        raise ValueError(f"Unrecognized date format: {value!r}")

    @classmethod
    def from_date(cls, value: date) -> "PayrixDate":
        """Build a DAY-precision value."""
        return cls(year=value.year, month=value.month, day=value.day)

    def to_date(self) -> date | None:
        """Return the calendar date, or None at YEAR precision."""
        if self.month is None or self.day is None:
            return None
        return date(self.year, self.month, self.day)

    def to_datetime(self) -> datetime | None:
        """Return a naive datetime, or None below MINUTE precision."""
        if self.month is None or self.day is None or self.hour is None:
            return None
        return datetime(
            self.year,
            self.month,
            self.day,
            self.hour,
            self.minute or 0,
            self.second or 0,
            (self.millisecond or 0) * 1000,
        )

    def to_wire(self) -> str:
        """Render in the wire shape matching this value's precision."""
        match self.precision:
            case DatePrecision.YEAR:
                return f"{self.year:04d}"
            case DatePrecision.DAY:
                return f"{self.year:04d}{self.month:02d}{self.day:02d}"
            case DatePrecision.MINUTE:
                return (
                    f"{self.year:04d}{self.month:02d}{self.day:02d}"
                    f"{self.hour:02d}{self.minute:02d}"
                )
            case DatePrecision.SECOND:
                return (
                    f"{self.year:04d}-{self.month:02d}-{self.day:02d} "
                    f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
                )
            case _:
                return (
                    f"{self.year:04d}-{self.month:02d}-{self.day:02d} "
                    f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
                    f".{self.millisecond:03d}"
                )

    def __str__(self) -> str:
        return self.to_wire()
