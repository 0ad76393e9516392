"""
TimeRange -- the open or closed lifetime of an Account.

Responsibility:
    Holds a required start and an optional end, both as NullableTime, and
    owns interval containment and ordering validation.

Invariants enforced:
    - start is set and not the zero timestamp
    - a set end is not the zero timestamp and not before start
    - an unset end means the interval is ongoing

Failure modes:
    - Setters raise a TimeRangeError subclass and leave the range unchanged.
    - validate() reports every violated invariant at once as a FieldError.

Not safe for concurrent mutation; a TimeRange is owned by one Account.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from account_kernel.domain.nullable_time import NullableTime, as_utc, is_zero_time
from account_kernel.exceptions import (
    DateClosedBeforeDateOpenedError,
    FieldError,
    ValidationMessage,
    ZeroDateOpenedError,
    ZeroValidDateClosedError,
)


@dataclass
class TimeRange:
    """An interval with a required start and an optional end."""

    start: NullableTime = field(default_factory=NullableTime.null)
    end: NullableTime = field(default_factory=NullableTime.null)

    @classmethod
    def from_bounds(cls, start: datetime, end: datetime | None = None) -> TimeRange:
        """
        Build a range through the validating setters.

        Raises:
            ZeroDateOpenedError: If ``start`` is the zero timestamp.
            ZeroValidDateClosedError: If ``end`` is the zero timestamp.
            DateClosedBeforeDateOpenedError: If ``end`` is before ``start``.
        """
        time_range = cls()
        time_range.set_start(start)
        if end is not None:
            time_range.set_end(end)
        return time_range

    def set_start(self, t: datetime) -> None:
        """Set the start of the range."""
        if is_zero_time(t):
            raise ZeroDateOpenedError(t)
        self.start = NullableTime.of(t)

    def set_end(self, t: datetime) -> None:
        """Set the end of the range, closing it."""
        if is_zero_time(t):
            raise ZeroValidDateClosedError(t)
        t = as_utc(t)
        if t < self.start.time:
            raise DateClosedBeforeDateOpenedError(t, self.start.time)
        self.end = NullableTime.of(t)

    @property
    def is_open(self) -> bool:
        return not self.end.valid

    def contains(self, t: datetime) -> bool:
        """True if ``t`` is not before start and, when closed, not after end."""
        t = as_utc(t)
        if t < self.start.time:
            return False
        return not self.end.valid or not t > self.end.time

    def validate(self) -> FieldError | None:
        """
        Report every violated range invariant.

        Checks run in a fixed order and all of them run: zero start, zero
        end, end before start.
        """
        messages: list[str] = []
        if not self.start.valid or is_zero_time(self.start.time):
            messages.append(ValidationMessage.ZERO_DATE_OPENED)
        if self.end.valid and is_zero_time(self.end.time):
            messages.append(ValidationMessage.ZERO_VALID_DATE_CLOSED)
        if self.end.valid and self.end.time < self.start.time:
            messages.append(ValidationMessage.DATE_CLOSED_BEFORE_DATE_OPENED)
        return FieldError.from_messages(messages)

    def copy(self) -> TimeRange:
        # NullableTime is immutable, so a shallow copy is independent
        return TimeRange(start=self.start, end=self.end)

    def __str__(self) -> str:
        return f"[{self.start}, {self.end}]"
