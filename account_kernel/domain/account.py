"""
Account -- a named, currency-denominated entity with a lifetime.

Responsibility:
    Owns the multi-field validation of an Account (name plus its TimeRange)
    and the consistency rule between an Account and a Balance.

Construction:
    ``new_account`` applies the opening date through the TimeRange setter,
    then every option in order, then validates the assembled Account. The
    first setter or option failure aborts construction and reaches the
    caller unchanged; a failed validation raises the accumulated
    FieldError. No partially built Account is ever returned.

Consistency check:
    ``validate_balance`` first validates the Account. An invalid Account
    short-circuits with its own FieldError. Otherwise the Balance is
    accepted if its date is within the range, or if it equals the close
    date exactly.

Concurrency:
    Account values are not safe for concurrent mutation. An Account has one
    logical owner at a time; readers must not overlap with ``close``.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from account_kernel.domain.balance import Balance
from account_kernel.domain.nullable_time import NullableTime
from account_kernel.domain.time_range import TimeRange
from account_kernel.domain.values import CurrencyCode
from account_kernel.exceptions import (
    AccountKernelError,
    BalanceDateOutOfAccountTimeRangeError,
    FieldError,
    ValidationMessage,
)
from account_kernel.logging_config import get_logger

logger = get_logger("domain.account")

AccountOption = Callable[["Account"], None]


class Account:
    """
    A named account with a TimeRange and a currency.

    Equality compares name, time range and currency.
    """

    def __init__(
        self,
        name: str = "",
        currency: CurrencyCode | None = None,
        time_range: TimeRange | None = None,
    ):
        self.name = name
        self._currency = currency
        self._time_range = time_range if time_range is not None else TimeRange()

    @property
    def currency(self) -> CurrencyCode | None:
        return self._currency

    @property
    def start(self) -> datetime:
        """The time the Account opened."""
        return self._time_range.start.time

    @property
    def end(self) -> NullableTime:
        """The close time; set only if the Account has been closed."""
        return self._time_range.end

    @property
    def time_range(self) -> TimeRange:
        """A copy of the Account's range; mutate through ``close`` instead."""
        return self._time_range.copy()

    def is_open(self) -> bool:
        """True while no close time is set."""
        return not self._time_range.end.valid

    def close(self, t: datetime) -> None:
        """Close the Account at ``t`` through the validating end setter."""
        close_time(t)(self)
        logger.info(
            "account_closed",
            extra={"account_name": self.name, "closed_at": self.end.time},
        )

    def validate(self) -> FieldError | None:
        """
        Report every logical error with the Account's own fields.

        The name check runs first, then every TimeRange check; all run
        regardless of earlier failures.
        """
        messages: list[str] = []
        if not self.name.strip():
            messages.append(ValidationMessage.EMPTY_NAME)
        range_error = self._time_range.validate()
        if range_error is not None:
            messages.extend(range_error.descriptions)
        field_error = FieldError.from_messages(messages)
        if field_error is not None:
            logger.debug(
                "account_validation_failed",
                extra={"account_name": self.name, "descriptions": field_error.descriptions},
            )
        return field_error

    def validate_balance(self, balance: Balance) -> None:
        """
        Validate a Balance against this Account.

        Raises:
            FieldError: The Account itself is invalid (identical to what
                ``validate`` returns), or the Balance is undated.
            BalanceDateOutOfAccountTimeRangeError: The Balance date falls
                outside of the Account's range.
        """
        account_error = self.validate()
        if account_error is not None:
            raise account_error
        balance_error = balance.validate()
        if balance_error is not None:
            raise balance_error

        # A balance at the exact close time is always accepted, independent
        # of how contains() treats the end boundary.
        if self._time_range.contains(balance.date) or self.end.equals_time(balance.date):
            return

        logger.warning(
            "balance_rejected",
            extra={
                "account_name": self.name,
                "balance_date": balance.date,
                "account_start": self.start,
                "account_end": str(self.end),
            },
        )
        raise BalanceDateOutOfAccountTimeRangeError(balance.date, self.time_range)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return (
            self.name == other.name
            and self._time_range == other._time_range
            and self._currency == other._currency
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        from account_kernel.serialization import dumps_account

        try:
            return dumps_account(self)
        except (AccountKernelError, TypeError, ValueError):
            return "Unable to form Account string."

    def __repr__(self) -> str:
        return (
            f"Account(name={self.name!r}, currency={self._currency!r}, "
            f"time_range={self._time_range!r})"
        )


Accounts = list[Account]


def close_time(t: datetime) -> AccountOption:
    """Option that closes the Account at ``t``."""

    def _apply(account: Account) -> None:
        account._time_range.set_end(t)

    return _apply


def new_account(
    name: str,
    currency: CurrencyCode | str,
    start: datetime,
    *options: AccountOption,
) -> Account:
    """
    Create a validated Account.

    Args:
        name: Display name; must not be blank.
        currency: A CurrencyCode, or a code string parsed into one.
        start: Opening time; must not be the zero timestamp.
        options: Mutators applied in order after the start is set.

    Returns:
        An Account whose ``validate()`` is None.

    Raises:
        InvalidCurrencyError: ``currency`` is a string that is not a
            recognized code.
        TimeRangeError: The start setter, or a close option, rejected its
            timestamp.
        FieldError: The assembled Account failed validation.
    """
    try:
        if not isinstance(currency, CurrencyCode):
            currency = CurrencyCode(currency)
        account = Account(name=name, currency=currency)
        account._time_range.set_start(start)
        for option in options:
            option(account)
    except AccountKernelError as e:
        logger.warning(
            "account_construction_failed",
            extra={"account_name": name, "error_code": e.code},
        )
        raise

    field_error = account.validate()
    if field_error is not None:
        logger.warning(
            "account_construction_failed",
            extra={"account_name": name, "error_code": field_error.code},
        )
        raise field_error

    logger.info(
        "account_created",
        extra={
            "account_name": account.name,
            "currency": account.currency,
            "start": account.start,
            "is_open": account.is_open(),
        },
    )
    return account
