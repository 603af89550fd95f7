__version__ = "0.1.0"

from .conf import Settings, SettingValidationError, apply_settings
from .exceptions import (
    KaltimeError,
    FormatMismatchError,
    InvalidFieldError,
    LocalTimeError,
    LocalTimeAmbiguousError,
    LocalTimeNonexistentError,
    InvalidTimespanError,
    InvalidReferenceError,
)
from .formats import FORMATS, FieldSet
from .parser import TimeParser, Timespan

_default_parser = TimeParser()


def _get_parser(settings):
    if settings._default:
        return _default_parser
    return TimeParser(settings=settings)


@apply_settings
def parse_with_reference(date_string, reference, settings=None):
    """Parse a partial time string, filling missing fields from ``reference``.

    :param date_string:
        A string such as ``"2015-02-01"``, ``"10:15"``, ``"9h"``, ``"30m"`` or
        ``"@1704150000"``. An empty string returns ``reference``.
    :type date_string: str

    :param reference:
        An offset-aware datetime used for every field the input leaves out.
    :type reference: datetime.datetime

    :param settings:
        Configure customized behavior using settings defined in :mod:`kaltime.conf.Settings`.
    :type settings: dict

    :return: An aware datetime with a fixed UTC offset.
    :rtype: datetime.datetime

    :raises:
        ``FormatMismatchError``: no known format matches,
        ``InvalidFieldError``: a field is out of range,
        ``LocalTimeError``: the local time falls in a DST gap, or is ambiguous
        and ``AMBIGUOUS_LOCAL_TIME`` is ``'raise'``.

    Example usage::

        >>> import kaltime
        >>> from datetime import datetime, timezone
        >>> ref = datetime(2014, 7, 8, 9, 10, 11, tzinfo=timezone.utc)
        >>> kaltime.parse_with_reference("9h", ref)
        datetime.datetime(2014, 7, 8, 9, 0, tzinfo=datetime.timezone.utc)
        >>> kaltime.parse_with_reference("2015-01-01 08:08", ref)
        datetime.datetime(2015, 1, 1, 8, 8, tzinfo=datetime.timezone.utc)
    """
    return _get_parser(settings).parse_with_reference(date_string, reference)


@apply_settings
def parse(date_string, settings=None):
    """Like :func:`parse_with_reference`, against the current local time."""
    parser = _get_parser(settings)
    return parser.parse_with_reference(date_string, parser.now())


@apply_settings
def parse_utc(date_string, settings=None):
    """Like :func:`parse_with_reference`, against the current UTC time."""
    parser = _get_parser(settings)
    return parser.parse_with_reference(date_string, parser.now_utc())


@apply_settings
def parse_timespan_with_reference(timespan, reference, settings=None):
    """Parse ``start..stop`` into a :class:`Timespan`.

    The stop side borrows its missing fields from the resolved start:

        >>> ref = datetime(2025, 10, 27, 6, 0, tzinfo=timezone.utc)
        >>> kaltime.parse_timespan_with_reference("10:15..30", ref)
        Timespan(start=datetime.datetime(2025, 10, 27, 10, 15, tzinfo=datetime.timezone.utc),
                 stop=datetime.datetime(2025, 10, 27, 10, 30, tzinfo=datetime.timezone.utc))

    Without separator, the span covers the 24 hours following the start.
    """
    return _get_parser(settings).parse_timespan_with_reference(timespan, reference)


@apply_settings
def parse_timespan(timespan, settings=None):
    parser = _get_parser(settings)
    return parser.parse_timespan_with_reference(timespan, parser.now())


@apply_settings
def parse_timespan_utc(timespan, settings=None):
    parser = _get_parser(settings)
    return parser.parse_timespan_with_reference(timespan, parser.now_utc())
