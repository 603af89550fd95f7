"""Exceptions raised while resolving time and timespan expressions."""

from datetime import datetime, tzinfo
from typing import Optional


class KaltimeError(ValueError):
    """Base class for every parse failure raised by kaltime."""


class FormatMismatchError(KaltimeError):
    def __init__(self, input_string: str, fmt: Optional[str] = None):
        self.input_string = input_string
        self.fmt = fmt
        if fmt is None:
            message = 'Could not parse time string: "%s"' % input_string
        else:
            message = "Time string %r does not match format %r" % (input_string, fmt)
        super().__init__(message)


class InvalidFieldError(KaltimeError):
    """A matched format produced a value outside its field's domain."""

    def __init__(self, field: str, value, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__("Invalid %s %r: %s" % (field, value, reason))


class LocalTimeError(KaltimeError):
    def __init__(self, naive: datetime, timezone: tzinfo, message: str):
        self.naive = naive
        self.timezone = timezone
        super().__init__(message)


class LocalTimeAmbiguousError(LocalTimeError):
    def __init__(self, naive: datetime, timezone: tzinfo):
        super().__init__(
            naive,
            timezone,
            "Local time %s is ambiguous in timezone %s" % (naive.isoformat(" "), timezone),
        )


class LocalTimeNonexistentError(LocalTimeError):
    def __init__(self, naive: datetime, timezone: tzinfo):
        super().__init__(
            naive,
            timezone,
            "Local time %s does not exist in timezone %s" % (naive.isoformat(" "), timezone),
        )


class InvalidTimespanError(KaltimeError):
    """Raised when the stop of a timespan resolves before its start."""

    def __init__(self, input_string: str, start: datetime, stop: datetime):
        self.input_string = input_string
        self.start = start
        self.stop = stop
        super().__init__(
            "Invalid timespan '{}': end time ({}) is before start time ({})".format(
                input_string,
                stop.strftime("%Y-%m-%d %H:%M:%S %z"),
                start.strftime("%Y-%m-%d %H:%M:%S %z"),
            )
        )


class InvalidReferenceError(KaltimeError):
    def __init__(self, reference: str, reason: str = "Unable to parse reference timestamp"):
        self.reference = reference
        super().__init__("%s: %s" % (reason, reference))
