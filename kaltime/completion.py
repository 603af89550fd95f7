from dataclasses import replace
from datetime import datetime

from kaltime.formats import FieldSet

# Finest to coarsest, with the value used when zero-filling.
COMPLETION_ORDER = (
    ("microsecond", 0),
    ("second", 0),
    ("minute", 0),
    ("hour", 0),
    ("day", 1),
    ("month", 1),
    ("year", 1970),
)


def complete_fields(fields: FieldSet, reference: datetime, complete_with_zeroes: bool) -> FieldSet:
    """Fill every missing calendar/clock field of ``fields``.

    Fields are visited from the finest to the coarsest. While nothing explicit
    has been seen, missing fields get their minimum value if
    ``complete_with_zeroes`` is true. Once an explicit field shows up, every
    coarser missing field is read from ``reference`` instead. With reference
    ``2014-07-08 09:10:11``, an hour-only ``12`` becomes ``2014-07-08 12:00:00``.

    Fields carrying an absolute timestamp are returned untouched.
    """
    if fields.timestamp is not None:
        return fields

    use_zero = complete_with_zeroes
    filled = {}
    for name, minimum in COMPLETION_ORDER:
        if getattr(fields, name) is None:
            filled[name] = minimum if use_zero else getattr(reference, name)
        else:
            use_zero = False

    return replace(fields, **filled)
