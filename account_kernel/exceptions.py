"""
Typed Exception Hierarchy for the Account Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers branch on the kind of failure, never on message text:

    try:
        account.validate_balance(balance)
    except FieldError as e:
        # The account itself is broken: fix every listed field in one pass
        render_form_errors(e.descriptions)
    except BalanceDateOutOfAccountTimeRangeError as e:
        # The account is fine, the balance is dated outside of it
        log.warning("balance rejected", extra={"date": e.balance_date})

Every exception has a CODE class attribute (machine-readable, API-safe) and
carries its context as attributes rather than only inside the message.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    AccountKernelError (base)
    |
    +-- FieldError
    |
    +-- TimeRangeError
    |   +-- ZeroDateOpenedError
    |   +-- ZeroValidDateClosedError
    |   +-- DateClosedBeforeDateOpenedError
    |
    +-- BalanceError
    |   +-- BalanceDateOutOfAccountTimeRangeError
    |
    +-- CurrencyError
    |   +-- InvalidCurrencyError
    |
    +-- SerializationError
        +-- MalformedAccountRecordError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                           | When Raised
----------------|--------------------------------|------------------------------------
Validation      | FIELD_ERROR                    | One or more fields of an entity are invalid
----------------|--------------------------------|------------------------------------
Time range      | ZERO_DATE_OPENED               | Start set to the zero timestamp
                | ZERO_VALID_DATE_CLOSED         | End set to the zero timestamp
                | DATE_CLOSED_BEFORE_DATE_OPENED | End set before start
----------------|--------------------------------|------------------------------------
Balance         | BALANCE_DATE_OUT_OF_RANGE      | Balance dated outside account range
----------------|--------------------------------|------------------------------------
Currency        | INVALID_CURRENCY               | Not an accepted ISO 4217 code
----------------|--------------------------------|------------------------------------
Serialization   | MALFORMED_ACCOUNT_RECORD       | Snapshot is missing keys or has bad values

===============================================================================
DESIGN DECISIONS
===============================================================================

1. FieldError ACCUMULATES.
   Validation of one entity runs every check and reports every failure at
   once, so a caller can fix all fields in a single pass. A FieldError is
   always a flat ordered list of descriptions; it never wraps another
   FieldError.

2. SETTER ERRORS DO NOT ACCUMULATE.
   TimeRange setters reject a single bad write immediately. Their messages
   are the same ValidationMessage strings the validators accumulate.

3. CONSTRUCTION FAILURES ARE NOT WRAPPED.
   Whatever a setter or option raises during Account construction reaches
   the caller unchanged.

===============================================================================
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import datetime
from enum import Enum, unique
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from account_kernel.domain.time_range import TimeRange


@unique
class ValidationMessage(str, Enum):
    """Stable descriptions of every single-field validation failure."""

    EMPTY_NAME = "Empty name"
    ZERO_DATE_OPENED = "No opened date given"
    ZERO_VALID_DATE_CLOSED = "Closed date marked as valid but not set"
    DATE_CLOSED_BEFORE_DATE_OPENED = "Closed date is before opened date"
    ZERO_BALANCE_DATE = "Balance date is not set"

    def __str__(self) -> str:
        return self.value


class AccountKernelError(Exception):
    """
    Base exception for all account kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "ACCOUNT_KERNEL_ERROR"


# Validation


class FieldError(AccountKernelError):
    """
    One or more fields of a single entity failed validation.

    Holds the failure descriptions in the order the checks ran. Two
    FieldErrors are equal when they hold the same descriptions in the same
    order. An empty FieldError is never produced by the validators: no
    failures is reported as ``None``.
    """

    code: str = "FIELD_ERROR"

    def __init__(self, descriptions: Iterable[str]):
        if isinstance(descriptions, str):
            raise TypeError("FieldError expects a collection of descriptions, not a str")
        ordered: list[str] = []
        for description in descriptions:
            text = str(description)
            if text not in ordered:
                ordered.append(text)
        self.descriptions: tuple[str, ...] = tuple(ordered)
        super().__init__(self._render())

    @classmethod
    def from_messages(cls, messages: Iterable[str]) -> FieldError | None:
        """Build a FieldError, or return None when there is nothing to report."""
        collected = list(messages)
        if not collected:
            return None
        return cls(collected)

    def _render(self) -> str:
        return ", ".join(self.descriptions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldError):
            return NotImplemented
        if len(self.descriptions) != len(other.descriptions):
            return False
        return all(a == b for a, b in zip(self.descriptions, other.descriptions))

    def __hash__(self) -> int:
        return hash(self.descriptions)

    def __len__(self) -> int:
        return len(self.descriptions)

    def __iter__(self) -> Iterator[str]:
        return iter(self.descriptions)

    def __contains__(self, description: object) -> bool:
        return str(description) in self.descriptions

    def __repr__(self) -> str:
        return f"FieldError({list(self.descriptions)!r})"


# Time range setters


class TimeRangeError(AccountKernelError):
    """Base exception for rejected writes to a TimeRange."""

    code: str = "TIME_RANGE_ERROR"
    message: ValidationMessage

    def __init__(self, time: datetime | None):
        self.time = time
        super().__init__(self.message.value)


class ZeroDateOpenedError(TimeRangeError):
    """Start of a range set to the zero timestamp."""

    code: str = "ZERO_DATE_OPENED"
    message = ValidationMessage.ZERO_DATE_OPENED


class ZeroValidDateClosedError(TimeRangeError):
    """End of a range set to the zero timestamp."""

    code: str = "ZERO_VALID_DATE_CLOSED"
    message = ValidationMessage.ZERO_VALID_DATE_CLOSED


class DateClosedBeforeDateOpenedError(TimeRangeError):
    """End of a range set strictly before its start."""

    code: str = "DATE_CLOSED_BEFORE_DATE_OPENED"
    message = ValidationMessage.DATE_CLOSED_BEFORE_DATE_OPENED

    def __init__(self, time: datetime, opened: datetime):
        self.opened = opened
        super().__init__(time)


# Balance


class BalanceError(AccountKernelError):
    """Base exception for balance-related errors."""

    code: str = "BALANCE_ERROR"


class BalanceDateOutOfAccountTimeRangeError(BalanceError):
    """
    Balance is dated outside of its account's time range.

    Carries the rejected date and a copy of the account's full range so the
    caller can render both.
    """

    code: str = "BALANCE_DATE_OUT_OF_RANGE"

    def __init__(self, balance_date: datetime, account_time_range: TimeRange):
        self.balance_date = balance_date
        self.account_time_range = account_time_range
        super().__init__(
            f"Balance date {balance_date.isoformat()} is outside of account "
            f"time range {account_time_range}"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BalanceDateOutOfAccountTimeRangeError):
            return NotImplemented
        return (
            self.balance_date == other.balance_date
            and self.account_time_range == other.account_time_range
        )

    def __hash__(self) -> int:
        return hash(self.balance_date)


# Currency


class CurrencyError(AccountKernelError):
    """Base exception for currency-related errors."""

    code: str = "CURRENCY_ERROR"


class InvalidCurrencyError(CurrencyError):
    """Unrecognized or disallowed ISO 4217 currency code."""

    code: str = "INVALID_CURRENCY"

    def __init__(self, currency: object, reason: str = "unrecognized code"):
        self.currency = currency
        self.reason = reason
        super().__init__(f"Invalid ISO 4217 currency code {currency!r}: {reason}")


# Serialization


class SerializationError(AccountKernelError):
    """Base exception for snapshot encoding and decoding errors."""

    code: str = "SERIALIZATION_ERROR"


class MalformedAccountRecordError(SerializationError):
    """Account snapshot is structurally unusable."""

    code: str = "MALFORMED_ACCOUNT_RECORD"

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Malformed account record field '{field}': {reason}")
