"""Balance -- a dated monetary snapshot of an Account."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from account_kernel.domain.nullable_time import ZERO_TIME, as_utc, is_zero_time
from account_kernel.domain.values import Money
from account_kernel.exceptions import FieldError, ValidationMessage


@dataclass(frozen=True, slots=True)
class Balance:
    """
    The value of an Account at a point in time.

    Only ``date`` takes part in consistency checks; ``money`` is carried
    through untouched.
    """

    date: datetime = ZERO_TIME
    money: Money | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", as_utc(self.date))

    def validate(self) -> FieldError | None:
        """A Balance must be dated."""
        if is_zero_time(self.date):
            return FieldError([ValidationMessage.ZERO_BALANCE_DATE])
        return None
