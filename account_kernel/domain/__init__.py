"""
Pure domain layer.

Value objects and entities with NO dependencies on:
- Persistence
- Clock
- I/O (other than logging)

Every failure is a typed exception from account_kernel.exceptions.
"""

from account_kernel.domain.account import (
    Account,
    AccountOption,
    Accounts,
    close_time,
    new_account,
)
from account_kernel.domain.balance import Balance
from account_kernel.domain.currency import CurrencyRegistry
from account_kernel.domain.nullable_time import (
    ZERO_TIME,
    NullableTime,
    as_utc,
    is_zero_time,
)
from account_kernel.domain.time_range import TimeRange
from account_kernel.domain.values import CurrencyCode, Money

__all__ = [
    # Value objects
    "CurrencyCode",
    "Money",
    "NullableTime",
    "ZERO_TIME",
    "as_utc",
    "is_zero_time",
    # Currency
    "CurrencyRegistry",
    # Entities
    "TimeRange",
    "Account",
    "AccountOption",
    "Accounts",
    "Balance",
    # Construction
    "new_account",
    "close_time",
]
