"""Time unit taxonomy.

Units are ordered from finest (millisecond) to coarsest (year). The order
drives both display sequencing and the coarsest-first recording discipline
of chained breakdowns.
"""

from enum import IntEnum

from typing_extensions import override


class UnrecognizedUnit(ValueError):
    """Raised when text or a character does not name a known time unit."""

    def __init__(self, text: object, accepted: str):
        self.text: object = text
        super().__init__(
            f"Unrecognized time unit: {text!r}\n"
            f"Accepted forms: {accepted}"
        )


class TimeUnit(IntEnum):
    MILLISECOND = 0
    SECOND = 1
    MINUTE = 2
    HOUR = 3
    DAY = 4
    WEEK = 5
    MONTH = 6
    YEAR = 7

    def label(self) -> str:
        """Long plural form, e.g. ``"hour(s)"``."""
        return _LABELS[self]

    def abbreviation(self) -> str:
        """Medium abbreviation, e.g. ``"hr"``."""
        return _ABBREVIATIONS[self]

    def short_abbreviation(self) -> str:
        """Shortest unambiguous form.

        Single characters, except milliseconds and minutes which keep two or
        three characters so they stay distinct from months.
        """
        return _SHORT_ABBREVIATIONS[self]

    @classmethod
    def parse(cls, text: str) -> "TimeUnit":
        """Parse a unit name, abbreviation or label (case-insensitive).

        Raises:
            UnrecognizedUnit: If no unit matches. A bare ``"m"`` never
                matches since it could mean minute, month or millisecond.
        """
        if not isinstance(text, str):
            raise UnrecognizedUnit(text, ", ".join(sorted(_SYNONYMS)))
        key = text.strip().lower()
        try:
            return _SYNONYMS[key]
        except KeyError:
            raise UnrecognizedUnit(text, ", ".join(sorted(_SYNONYMS))) from None

    @classmethod
    def parse_long(cls, text: str) -> "TimeUnit":
        """Alias of :meth:`parse` for full names and multi-letter forms."""
        return cls.parse(text)

    @classmethod
    def parse_char(cls, symbol: str) -> "TimeUnit":
        """Parse a single unit character: s, h, d, w or y (case-insensitive).

        Raises:
            UnrecognizedUnit: For any other input, including ``"m"``.
        """
        if not isinstance(symbol, str):
            raise UnrecognizedUnit(symbol, ", ".join(_CHARS))
        try:
            return _CHARS[symbol.lower()]
        except KeyError:
            raise UnrecognizedUnit(symbol, ", ".join(_CHARS)) from None

    @override
    def __str__(self) -> str:
        return self.label()


_LABELS: dict[TimeUnit, str] = {
    TimeUnit.MILLISECOND: "millisecond(s)",
    TimeUnit.SECOND: "second(s)",
    TimeUnit.MINUTE: "minute(s)",
    TimeUnit.HOUR: "hour(s)",
    TimeUnit.DAY: "day(s)",
    TimeUnit.WEEK: "week(s)",
    TimeUnit.MONTH: "month(s)",
    TimeUnit.YEAR: "year(s)",
}

_ABBREVIATIONS: dict[TimeUnit, str] = {
    TimeUnit.MILLISECOND: "ms",
    TimeUnit.SECOND: "sec",
    TimeUnit.MINUTE: "min",
    TimeUnit.HOUR: "hr",
    TimeUnit.DAY: "d",
    TimeUnit.WEEK: "wk",
    TimeUnit.MONTH: "mo",
    TimeUnit.YEAR: "y",
}

_SHORT_ABBREVIATIONS: dict[TimeUnit, str] = {
    TimeUnit.MILLISECOND: "ms",
    TimeUnit.SECOND: "s",
    TimeUnit.MINUTE: "min",
    TimeUnit.HOUR: "h",
    TimeUnit.DAY: "d",
    TimeUnit.WEEK: "w",
    TimeUnit.MONTH: "m",
    TimeUnit.YEAR: "y",
}

_SYNONYMS: dict[str, TimeUnit] = {
    "ms": TimeUnit.MILLISECOND,
    "msec": TimeUnit.MILLISECOND,
    "millisecond": TimeUnit.MILLISECOND,
    "milliseconds": TimeUnit.MILLISECOND,
    "s": TimeUnit.SECOND,
    "sec": TimeUnit.SECOND,
    "secs": TimeUnit.SECOND,
    "second": TimeUnit.SECOND,
    "seconds": TimeUnit.SECOND,
    "min": TimeUnit.MINUTE,
    "mins": TimeUnit.MINUTE,
    "minute": TimeUnit.MINUTE,
    "minutes": TimeUnit.MINUTE,
    "h": TimeUnit.HOUR,
    "hr": TimeUnit.HOUR,
    "hrs": TimeUnit.HOUR,
    "hour": TimeUnit.HOUR,
    "hours": TimeUnit.HOUR,
    "d": TimeUnit.DAY,
    "day": TimeUnit.DAY,
    "days": TimeUnit.DAY,
    "w": TimeUnit.WEEK,
    "wk": TimeUnit.WEEK,
    "wks": TimeUnit.WEEK,
    "week": TimeUnit.WEEK,
    "weeks": TimeUnit.WEEK,
    "mo": TimeUnit.MONTH,
    "mon": TimeUnit.MONTH,
    "month": TimeUnit.MONTH,
    "months": TimeUnit.MONTH,
    "y": TimeUnit.YEAR,
    "yr": TimeUnit.YEAR,
    "yrs": TimeUnit.YEAR,
    "year": TimeUnit.YEAR,
    "years": TimeUnit.YEAR,
}
# Labels parse back to their own unit
_SYNONYMS.update({label: unit for unit, label in _LABELS.items()})

# "m" is shared by minute, month and millisecond
_CHARS: dict[str, TimeUnit] = {
    "s": TimeUnit.SECOND,
    "h": TimeUnit.HOUR,
    "d": TimeUnit.DAY,
    "w": TimeUnit.WEEK,
    "y": TimeUnit.YEAR,
}
