"""Shared fixtures for kaltime tests."""

from datetime import datetime, timedelta, timezone

import pytest

from kaltime import TimeParser


CET = timezone(timedelta(hours=1))
CEST = timezone(timedelta(hours=2))


@pytest.fixture
def reference():
    """`2014-07-08T09:10:11Z`"""
    return datetime(2014, 7, 8, 9, 10, 11, tzinfo=timezone.utc)


@pytest.fixture
def parser():
    return TimeParser()


@pytest.fixture
def winter_reference():
    return datetime(2025, 12, 1, 12, 0, 0, tzinfo=CET)


@pytest.fixture
def summer_reference():
    return datetime(2025, 7, 1, 12, 0, 0, tzinfo=CEST)
