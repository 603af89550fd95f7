import argparse
import logging
import sys
from datetime import datetime

from dateutil.parser import isoparse

from kaltime import TimeParser
from kaltime.exceptions import InvalidReferenceError, KaltimeError
from kaltime.utils import format_timestamp

REFERENCE_FORMATS = (
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M %z",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M%z",
)


class _ArgumentParser(argparse.ArgumentParser):
    # Every failure, usage errors included, exits with status 1.
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, "%s: error: %s\n" % (self.prog, message))


def parse_reference(reference_string):
    """Parse a fully specified timestamp; the UTC offset is mandatory."""
    date_obj = None
    try:
        date_obj = isoparse(reference_string)
    except ValueError:
        for date_format in REFERENCE_FORMATS:
            try:
                date_obj = datetime.strptime(reference_string, date_format)
            except ValueError:
                continue
            break

    if date_obj is None:
        raise InvalidReferenceError(reference_string)
    if date_obj.utcoffset() is None:
        raise InvalidReferenceError(reference_string, "Missing UTC offset in reference timestamp")
    return date_obj


def build_argparser():
    kt_argparse = _ArgumentParser(
        prog="kt-parse",
        description="Resolve partial time and timespan strings into full timestamps.",
    )
    kt_argparse.add_argument(
        "-v",
        "--verbose",
        help="Log every format attempt",
        action="store_true",
    )
    kt_argparse.add_argument("action", choices=("time", "timespan"))
    kt_argparse.add_argument(
        "input",
        help="time or timespan string, e.g. '10:15', '2015-02-01', '10:15..30'",
    )
    kt_argparse.add_argument(
        "reference",
        nargs="?",
        help="fully specified timestamp with timezone (e.g. 2025-10-22T09:10:11+00:00)",
    )
    return kt_argparse


def run(args):
    parser = TimeParser()

    reference = None
    if args.reference is not None:
        try:
            reference = parse_reference(args.reference)
        except InvalidReferenceError as e:
            raise KaltimeError("Invalid reference time: %s" % e) from e
    if reference is None:
        reference = parser.now()

    if args.action == "time":
        try:
            dates = [parser.parse_with_reference(args.input, reference)]
        except KaltimeError as e:
            raise KaltimeError("Failed to parse time: %s" % e) from e
    else:
        try:
            dates = list(parser.parse_timespan_with_reference(args.input, reference))
        except KaltimeError as e:
            raise KaltimeError("Failed to parse timespan: %s" % e) from e

    return [format_timestamp(date_obj) for date_obj in dates]


def entrance(argv=None):
    kt_argparse = build_argparser()
    args = kt_argparse.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        lines = run(args)
    except KaltimeError as e:
        logging.getLogger(__name__).debug("kt-parse failed", exc_info=True)
        kt_argparse.exit(1, "%s\n" % e)

    for line in lines:
        print(line)
