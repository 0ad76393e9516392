"""Tests for TimeRange setters, containment and validation."""

from datetime import datetime, timedelta, timezone

import pytest

from account_kernel.domain.nullable_time import ZERO_TIME, NullableTime
from account_kernel.domain.time_range import TimeRange
from account_kernel.exceptions import (
    DateClosedBeforeDateOpenedError,
    FieldError,
    TimeRangeError,
    ValidationMessage,
    ZeroDateOpenedError,
    ZeroValidDateClosedError,
)

START = datetime(2000, 1, 1, 1, 1, 1, 1, tzinfo=timezone.utc)
END = datetime(2001, 1, 1, 1, 1, 1, 1, tzinfo=timezone.utc)


class TestSetters:
    def test_set_start(self):
        tr = TimeRange()
        tr.set_start(START)
        assert tr.start == NullableTime.of(START)
        assert tr.is_open

    def test_set_start_rejects_zero(self):
        tr = TimeRange()
        with pytest.raises(ZeroDateOpenedError) as exc_info:
            tr.set_start(ZERO_TIME)
        assert exc_info.value.code == "ZERO_DATE_OPENED"
        assert str(exc_info.value) == ValidationMessage.ZERO_DATE_OPENED.value
        assert tr.start == NullableTime.null()

    def test_set_end(self):
        tr = TimeRange.from_bounds(START)
        tr.set_end(END)
        assert tr.end == NullableTime.of(END)
        assert not tr.is_open

    def test_set_end_equal_to_start_is_allowed(self):
        tr = TimeRange.from_bounds(START, START)
        assert tr.end.equals_time(START)

    def test_set_end_rejects_zero(self):
        tr = TimeRange.from_bounds(START)
        with pytest.raises(ZeroValidDateClosedError):
            tr.set_end(ZERO_TIME)
        assert tr.is_open

    def test_set_end_rejects_time_before_start(self):
        tr = TimeRange.from_bounds(START)
        before = START - timedelta(microseconds=1)
        with pytest.raises(DateClosedBeforeDateOpenedError) as exc_info:
            tr.set_end(before)
        assert exc_info.value.time == before
        assert exc_info.value.opened == START
        assert tr.is_open

    def test_setter_errors_share_a_base(self):
        with pytest.raises(TimeRangeError):
            TimeRange.from_bounds(START, ZERO_TIME)


class TestContains:
    def test_open_range(self):
        tr = TimeRange.from_bounds(START)
        assert tr.contains(START)
        assert tr.contains(START + timedelta(days=10000))
        assert not tr.contains(START - timedelta(microseconds=1))

    def test_closed_range_is_inclusive_at_both_ends(self):
        tr = TimeRange.from_bounds(START, END)
        assert tr.contains(START)
        assert tr.contains(END)
        assert tr.contains(START + (END - START) / 2)
        assert not tr.contains(START - timedelta(microseconds=1))
        assert not tr.contains(END + timedelta(microseconds=1))

    def test_naive_times_are_read_as_utc(self):
        tr = TimeRange.from_bounds(START, END)
        assert tr.contains(START.replace(tzinfo=None))


class TestValidate:
    def test_valid_ranges(self):
        assert TimeRange.from_bounds(START).validate() is None
        assert TimeRange.from_bounds(START, END).validate() is None

    def test_empty_range(self):
        assert TimeRange().validate() == FieldError([ValidationMessage.ZERO_DATE_OPENED])

    def test_zero_start_and_zero_valid_end(self):
        tr = TimeRange(end=NullableTime(valid=True))
        assert tr.validate() == FieldError(
            [ValidationMessage.ZERO_DATE_OPENED, ValidationMessage.ZERO_VALID_DATE_CLOSED]
        )

    def test_end_before_start(self):
        tr = TimeRange(start=NullableTime.of(END), end=NullableTime.of(START))
        error = tr.validate()
        assert error == FieldError([ValidationMessage.DATE_CLOSED_BEFORE_DATE_OPENED])

    def test_all_checks_run(self):
        """A set-but-zero start and a set-but-zero end are both reported, in order."""
        tr = TimeRange(start=NullableTime(valid=True, time=ZERO_TIME), end=NullableTime(valid=True))
        assert list(tr.validate()) == [
            ValidationMessage.ZERO_DATE_OPENED.value,
            ValidationMessage.ZERO_VALID_DATE_CLOSED.value,
        ]

    def test_unset_start_with_real_time_is_still_invalid(self):
        tr = TimeRange(start=NullableTime(valid=False, time=START))
        assert ValidationMessage.ZERO_DATE_OPENED in tr.validate()


class TestEquality:
    def test_equal_ranges(self):
        assert TimeRange.from_bounds(START, END) == TimeRange.from_bounds(START, END)
        assert TimeRange.from_bounds(START) == TimeRange.from_bounds(START)

    def test_different_start(self):
        assert TimeRange.from_bounds(START) != TimeRange.from_bounds(END)

    def test_open_and_closed_differ(self):
        assert TimeRange.from_bounds(START) != TimeRange.from_bounds(START, END)

    def test_copy_is_independent(self):
        tr = TimeRange.from_bounds(START)
        copied = tr.copy()
        copied.set_end(END)
        assert tr.is_open
        assert copied != tr
