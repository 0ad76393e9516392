"""
NullableTime -- a timestamp that may be unset.

Responsibility:
    Models "no timestamp" distinctly from any concrete timestamp, including
    the zero timestamp, so that an Account's close date can be absent.

Equality:
    Two NullableTimes are equal only when their validity flags match AND
    their underlying timestamps are equal. This holds even when both are
    unset: two unset values carrying different raw timestamps are NOT equal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

# The uninitialized timestamp. Never a meaningful open or close date.
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def as_utc(t: datetime) -> datetime:
    """Return ``t`` as an aware datetime; naive values are taken to be UTC."""
    if t.tzinfo is None:
        return t.replace(tzinfo=timezone.utc)
    return t


def is_zero_time(t: datetime | None) -> bool:
    """True for ``None`` and for the zero timestamp."""
    return t is None or as_utc(t) == ZERO_TIME


@dataclass(frozen=True, slots=True)
class NullableTime:
    """
    A timestamp paired with an explicit validity flag.

    Guarantees:
        - Immutable and hashable
        - ``time`` is always timezone-aware
    """

    valid: bool = False
    time: datetime = field(default=ZERO_TIME)

    def __post_init__(self) -> None:
        object.__setattr__(self, "time", as_utc(self.time))

    @classmethod
    def of(cls, t: datetime) -> NullableTime:
        """A set NullableTime wrapping ``t``."""
        return cls(valid=True, time=t)

    @classmethod
    def null(cls) -> NullableTime:
        """An unset NullableTime."""
        return cls()

    def equals_time(self, t: datetime) -> bool:
        """True if this value is set and represents ``t``. Always False when unset."""
        if not self.valid:
            return False
        return self.time == as_utc(t)

    def __str__(self) -> str:
        if not self.valid:
            return "null"
        return self.time.isoformat()
