"""Precision of a decoded date/time value."""

from enum import IntEnum


class DatePrecision(IntEnum):
    """Finest component present in the wire value.

    Ordered so that comparisons express "at least as precise as".
    """

    YEAR = 1
    DAY = 2
    MINUTE = 3
    SECOND = 4
    MILLISECOND = 5
