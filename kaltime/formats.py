"""
Format catalog and strict strftime-style matcher.

A format string is compiled into an anchored regular expression. Numeric
directives are greedy and never give back digits, so ``"%d %Hh"`` reads
``"123h"`` as day 12, hour 3, the same way a left-to-right scanner would.
A space in the format matches any run of whitespace, including none, and
numeric directives skip leading whitespace. Trailing whitespace is rejected.
Epoch seconds (``%s``) are unsigned.
"""

from dataclasses import dataclass, fields as dataclass_fields
from datetime import datetime
from functools import lru_cache
from typing import Optional

import regex as re

from kaltime.exceptions import FormatMismatchError, InvalidFieldError

# Order matters: the first format that matches wins.
FORMATS = (
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%m-%d",
    "%m/%d",
    "%m-%d %H:%M:%S",
    "%m-%d %H:%M",
    "%d %H:%M",
    "%d %Hh%M",
    "%d %Hh",
    "%H:%M:%S",
    "%H:%M",
    "%Hh%M",
    "%Hh",
    "%Mm",
    "%M",
    "@%s",
)

# directive -> (field name, regex body)
DIRECTIVES = {
    "Y": ("year", r"\d++"),
    "m": ("month", r"\d{1,2}+"),
    "d": ("day", r"\d{1,2}+"),
    "H": ("hour", r"\d{1,2}+"),
    "M": ("minute", r"\d{1,2}+"),
    "S": ("second", r"\d{1,2}+"),
    "f": ("microsecond", r"\d{1,6}+"),
    "s": ("timestamp", r"\d++"),
}

FIELD_RANGES = {
    "year": (1, 9999),
    "month": (1, 12),
    "day": (1, 31),
    "hour": (0, 23),
    "minute": (0, 59),
    "second": (0, 59),
    "microsecond": (0, 999999),
}

MAX_YEAR_DIGITS = 4


@dataclass(frozen=True)
class FieldSet:
    """Calendar and clock fields found in an input string.

    Each field is either an ``int`` or ``None`` when the format did not
    provide it. ``timestamp`` carries absolute epoch seconds; when it is set
    the calendar fields are meaningless.
    """

    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    hour: Optional[int] = None
    minute: Optional[int] = None
    second: Optional[int] = None
    microsecond: Optional[int] = None
    timestamp: Optional[int] = None

    @property
    def is_complete(self):
        if self.timestamp is not None:
            return True
        return all(
            getattr(self, f.name) is not None
            for f in dataclass_fields(self)
            if f.name != "timestamp"
        )

    def to_naive_datetime(self) -> datetime:
        if self.timestamp is not None or not self.is_complete:
            raise ValueError("Cannot build a datetime from incomplete fields: %r" % (self,))
        try:
            return datetime(
                self.year,
                self.month,
                self.day,
                self.hour,
                self.minute,
                self.second,
                self.microsecond,
            )
        except ValueError as e:
            raise InvalidFieldError("date", self._date_repr(), str(e))

    def _date_repr(self):
        return "%04d-%02d-%02d" % (self.year, self.month, self.day)


@lru_cache(maxsize=None)
def compile_format(fmt):
    """Compile a strftime-style format string into an anchored pattern."""
    parts = []
    seen = set()
    chars = iter(fmt)
    for ch in chars:
        if ch == " ":
            parts.append(r"\s*+")
            continue
        if ch != "%":
            parts.append(re.escape(ch))
            continue

        directive = next(chars, None)
        if directive == "%":
            parts.append("%")
            continue
        if directive not in DIRECTIVES:
            raise ValueError("Unsupported directive %%%s in format %r" % (directive, fmt))

        name, body = DIRECTIVES[directive]
        if name in seen:
            raise ValueError("Directive %%%s repeated in format %r" % (directive, fmt))
        seen.add(name)
        parts.append(r"\s*+(?P<%s>%s)" % (name, body))

    return re.compile("".join(parts))


def _to_field_value(name, text):
    if name == "timestamp":
        return int(text)

    if name == "year" and len(text) > MAX_YEAR_DIGITS:
        raise InvalidFieldError(name, text, "too long")

    if name == "microsecond":
        value = int(text.ljust(6, "0"))
    else:
        value = int(text)

    low, high = FIELD_RANGES[name]
    if not low <= value <= high:
        raise InvalidFieldError(name, value, "out of range %d..%d" % (low, high))
    return value


def match_format(date_string, fmt) -> FieldSet:
    """Match the whole of ``date_string`` against ``fmt``.

    :raises FormatMismatchError: when the text does not fit the format.
    :raises InvalidFieldError: when it fits but a value is out of its domain.
    """
    match = compile_format(fmt).fullmatch(date_string)
    if match is None:
        raise FormatMismatchError(date_string, fmt)

    values = {
        name: _to_field_value(name, text)
        for name, text in match.groupdict().items()
    }
    return FieldSet(**values)


# The catalog is compiled once, at import time.
for _fmt in FORMATS:
    compile_format(_fmt)
