import logging
from datetime import datetime, timedelta, timezone
from typing import NamedTuple

from kaltime.completion import complete_fields
from kaltime.conf import apply_settings, check_settings
from kaltime.exceptions import (
    FormatMismatchError,
    InvalidFieldError,
    InvalidTimespanError,
)
from kaltime.formats import FORMATS, match_format
from kaltime.offsets import get_local_timezone, resolve_offset
from kaltime.utils import to_fixed_offset

logger = logging.getLogger(__name__)


class Timespan(NamedTuple):
    start: datetime
    stop: datetime


def _check_reference(reference):
    if not isinstance(reference, datetime):
        raise TypeError("reference must be a datetime (%r given)" % type(reference))
    if reference.utcoffset() is None:
        raise TypeError("reference must be an offset-aware datetime")


class TimeParser:
    """
    Resolve partial time strings ("30m", "10:15", "2015-02-01") against a
    reference timestamp.

    :param settings:
        Configure customized behavior using settings defined in :mod:`kaltime.conf.Settings`.
    :type settings: dict

    :raises:
         ``SettingValidationError``: A provided setting is not valid.
    """

    @apply_settings
    def __init__(self, settings=None):
        check_settings(settings)
        self._settings = settings

    @property
    def settings(self):
        return self._settings

    def local_timezone(self):
        return get_local_timezone(self._settings)

    def now(self):
        """Current time in the local zone, as a fixed-offset datetime."""
        return to_fixed_offset(datetime.now(self.local_timezone()))

    def now_utc(self):
        return datetime.now(timezone.utc)

    def parse_partial(self, date_string, date_format, reference, complete_with_zeroes=True):
        """Run a single format through matching, completion and offset resolution.

        :raises FormatMismatchError: ``date_string`` does not fit ``date_format``.
        :raises InvalidFieldError: a field is outside its domain.
        :raises LocalTimeError: the wall-clock time is missing or ambiguous
            in the local zone.
        """
        _check_reference(reference)
        fields = match_format(date_string, date_format)
        fields = complete_fields(fields, reference, complete_with_zeroes)
        return resolve_offset(
            fields,
            reference,
            self.local_timezone(),
            mode=self._settings.OFFSET_RESOLUTION,
            ambiguous=self._settings.AMBIGUOUS_LOCAL_TIME,
        )

    def parse_with_reference(self, date_string, reference):
        """
        Parse ``date_string`` with the first matching entry of
        :data:`kaltime.formats.FORMATS`, borrowing missing fields from
        ``reference``.

        An empty string returns ``reference`` itself.

        >>> from datetime import datetime, timezone
        >>> ref = datetime(2014, 7, 8, 9, 10, 11, tzinfo=timezone.utc)
        >>> TimeParser().parse_with_reference("30m", ref)
        datetime.datetime(2014, 7, 8, 9, 30, tzinfo=datetime.timezone.utc)
        """
        if not isinstance(date_string, str):
            raise TypeError("Input type must be str")
        _check_reference(reference)

        if not date_string:
            logger.debug("Using reference: %r", reference)
            return to_fixed_offset(reference)

        invalid_field = None
        for date_format in FORMATS:
            logger.debug("Trying to parse %r with format %r", date_string, date_format)
            try:
                date_obj = self.parse_partial(date_string, date_format, reference)
            except FormatMismatchError:
                continue
            except InvalidFieldError as e:
                logger.debug("Format %r matched %r but %s", date_format, date_string, e)
                if invalid_field is None:
                    invalid_field = e
                continue
            logger.debug("Parsed %r with format %r: %s", date_string, date_format, date_obj)
            return date_obj

        if invalid_field is not None:
            raise invalid_field
        raise FormatMismatchError(date_string)

    def parse_timespan_with_reference(self, timespan, reference):
        """
        Parse ``timespan`` as ``start..stop``.

        The stop expression is resolved against the resolved start, so the
        fields it omits come from the start rather than from ``reference``.
        Without a separator the span lasts 24 hours from the start.

        :raises InvalidTimespanError: if the stop falls before the start.
        """
        if not isinstance(timespan, str):
            raise TypeError("Input type must be str")

        separator = self._settings.TIMESPAN_SEPARATOR
        if separator in timespan:
            start_string, stop_string = timespan.split(separator, 1)
            start = self.parse_with_reference(start_string, reference)
            stop = self.parse_with_reference(stop_string, start)
        else:
            start = self.parse_with_reference(timespan, reference)
            stop = start + timedelta(days=1)

        if start > stop:
            raise InvalidTimespanError(timespan, start, stop)

        return Timespan(start, stop)
