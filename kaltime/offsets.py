import logging
from datetime import datetime, timedelta, timezone

from dateutil import tz
from tzlocal import get_localzone

from kaltime.exceptions import (
    InvalidFieldError,
    LocalTimeAmbiguousError,
    LocalTimeNonexistentError,
)
from kaltime.formats import FieldSet
from kaltime.utils import to_fixed_offset

logger = logging.getLogger(__name__)


def get_local_timezone(settings=None):
    """Return the zone standing in for "system local time"."""
    name = getattr(settings, "LOCAL_TIMEZONE", None)
    if name:
        local_tz = tz.gettz(name)
        if local_tz is None:
            raise ValueError("Unknown timezone: %r" % name)
        return local_tz
    return get_localzone()


def localize(naive: datetime, local_tz, ambiguous="earlier") -> datetime:
    """Attach ``local_tz`` to a wall-clock time, with explicit DST handling.

    :raises LocalTimeNonexistentError: when ``naive`` falls in a DST gap.
    :raises LocalTimeAmbiguousError: when ``naive`` happens twice and
        ``ambiguous`` is ``'raise'``.
    """
    aware = naive.replace(tzinfo=local_tz)

    if not tz.datetime_exists(aware):
        raise LocalTimeNonexistentError(naive, local_tz)

    if tz.datetime_ambiguous(aware):
        logger.debug("%s is ambiguous in %s, picking %s", naive, local_tz, ambiguous)
        if ambiguous == "raise":
            raise LocalTimeAmbiguousError(naive, local_tz)
        aware = aware.replace(fold=0 if ambiguous == "earlier" else 1)

    return to_fixed_offset(aware)


def resolve_offset(
    fields: FieldSet,
    reference: datetime,
    local_tz,
    mode="system",
    ambiguous="earlier",
) -> datetime:
    """Turn completed fields into an instant carrying a fixed UTC offset.

    An absolute timestamp is always UTC. Otherwise the wall-clock value is
    read as UTC when the reference is UTC. If not, ``mode`` decides:
    ``'system'`` looks the time up in ``local_tz`` (DST-aware), ``'reference'``
    reuses the reference's own offset as-is.

    In ``'system'`` mode the reference offset only matters when it is zero,
    so a fully spelled-out time gives a different instant against a UTC
    reference than against any other one.
    """
    if fields.timestamp is not None:
        try:
            return datetime.fromtimestamp(fields.timestamp, timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise InvalidFieldError("timestamp", fields.timestamp, str(e))

    naive = fields.to_naive_datetime()
    offset = reference.utcoffset()

    if offset == timedelta(0):
        return naive.replace(tzinfo=timezone.utc)

    if mode == "reference":
        return naive.replace(tzinfo=timezone(offset))

    return localize(naive, local_tz, ambiguous=ambiguous)
