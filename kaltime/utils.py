import math
from datetime import datetime, timezone


def to_fixed_offset(date_obj: datetime) -> datetime:
    """Swap the tzinfo of an aware datetime for its current fixed offset.

    The instant and wall-clock fields are unchanged.
    """
    offset = date_obj.utcoffset()
    if offset is None:
        raise TypeError("Expected an offset-aware datetime, got %r" % date_obj)
    return date_obj.replace(tzinfo=timezone(offset), fold=0)


def format_offset(date_obj):
    """Format the UTC offset as ``+HH:MM``."""
    total = int(date_obj.utcoffset().total_seconds())
    sign = "-" if total < 0 else "+"
    hours, minutes = divmod(abs(total) // 60, 60)
    return "%s%02d:%02d" % (sign, hours, minutes)


def format_timestamp(date_obj):
    """``<unix-seconds> <YYYY-MM-DD HH:MM:SS +HH:MM>``, as printed by kt-parse."""
    return "{} {} {}".format(
        math.floor(date_obj.timestamp()),
        date_obj.strftime("%Y-%m-%d %H:%M:%S"),
        format_offset(date_obj),
    )
