"""
Serialization -- JSON snapshot of an Account.

Responsibility:
    Converts between the domain Account and ``AccountRecord``, an explicit
    transfer object exposing the fields ``Name``, ``Start``, ``End`` and
    ``Currency``, and between ``AccountRecord`` and JSON text.

Wire format:
    {
        "Name": "Current",
        "Start": "2024-01-01T12:00:00+00:00",
        "End": {"Time": "0001-01-01T00:00:00+00:00", "Valid": false},
        "Currency": "EUR"
    }

    ``End`` always carries both the timestamp and its validity flag so that
    an unset close date survives the round trip as unset.

Decoding:
    The Account is rebuilt through the TimeRange setters, never by copying
    raw fields, and is then validated. Setter, currency and validation
    failures propagate as raised; structural problems raise
    MalformedAccountRecordError.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from account_kernel.domain.account import Account
from account_kernel.domain.nullable_time import NullableTime
from account_kernel.domain.time_range import TimeRange
from account_kernel.domain.values import CurrencyCode
from account_kernel.exceptions import MalformedAccountRecordError
from account_kernel.logging_config import get_logger

logger = get_logger("serialization")

CurrencyParser = Callable[[str], CurrencyCode]


@dataclass(frozen=True)
class AccountRecord:
    """Flat, serializable view of an Account."""

    Name: str
    Start: datetime
    End: NullableTime
    Currency: str | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "Name": self.Name,
            "Start": self.Start.isoformat(),
            "End": {"Time": self.End.time.isoformat(), "Valid": self.End.valid},
            "Currency": self.Currency,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AccountRecord:
        """
        Parse a decoded JSON object.

        Raises:
            MalformedAccountRecordError: A key is missing or holds a value
                of the wrong shape.
        """
        if not isinstance(data, Mapping):
            raise MalformedAccountRecordError("<root>", "expected a JSON object")

        name = _require(data, "Name")
        if not isinstance(name, str):
            raise MalformedAccountRecordError("Name", "expected a string")

        start = _parse_timestamp("Start", _require(data, "Start"))

        end_data = _require(data, "End")
        if end_data is None:
            end = NullableTime.null()
        elif isinstance(end_data, Mapping):
            valid = end_data.get("Valid", False)
            if not isinstance(valid, bool):
                raise MalformedAccountRecordError("End.Valid", "expected a boolean")
            raw_time = end_data.get("Time")
            if raw_time is None:
                end = NullableTime(valid=valid)
            else:
                end = NullableTime(valid=valid, time=_parse_timestamp("End.Time", raw_time))
        else:
            raise MalformedAccountRecordError("End", "expected an object or null")

        currency = data.get("Currency")
        if currency is not None and not isinstance(currency, str):
            raise MalformedAccountRecordError("Currency", "expected a string")

        return cls(Name=name, Start=start, End=end, Currency=currency)


def _require(data: Mapping[str, Any], key: str) -> Any:
    if key not in data:
        raise MalformedAccountRecordError(key, "missing")
    return data[key]


def _parse_timestamp(field: str, value: Any) -> datetime:
    if not isinstance(value, str):
        raise MalformedAccountRecordError(field, "expected an ISO-8601 string")
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise MalformedAccountRecordError(field, f"invalid timestamp {value!r}") from e


def account_to_record(account: Account) -> AccountRecord:
    """Map an Account onto its transfer object."""
    return AccountRecord(
        Name=account.name,
        Start=account.start,
        End=account.end,
        Currency=account.currency.code if account.currency is not None else None,
    )


def account_from_record(
    record: AccountRecord,
    parse_currency: CurrencyParser = CurrencyCode,
) -> Account:
    """
    Rebuild a validated Account from its transfer object.

    Raises:
        InvalidCurrencyError: ``Currency`` is not accepted by ``parse_currency``.
        TimeRangeError: ``Start`` or a valid ``End`` is rejected by the setters.
        FieldError: The rebuilt Account fails validation.
    """
    currency = parse_currency(record.Currency) if record.Currency is not None else None

    time_range = TimeRange()
    time_range.set_start(record.Start)
    if record.End.valid:
        time_range.set_end(record.End.time)
    else:
        # No setter applies to an unset end; keep its raw time for equality
        time_range.end = record.End

    account = Account(name=record.Name, currency=currency, time_range=time_range)
    field_error = account.validate()
    if field_error is not None:
        raise field_error
    return account


def dumps_account(account: Account, **kwargs: Any) -> str:
    """Encode an Account as JSON text."""
    return json.dumps(account_to_record(account).to_dict(), **kwargs)


def loads_account(text: str | bytes, parse_currency: CurrencyParser = CurrencyCode) -> Account:
    """
    Decode JSON text into a validated Account.

    Raises:
        MalformedAccountRecordError: The text is not JSON or not an
            account snapshot.
        plus everything ``account_from_record`` raises.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedAccountRecordError("<root>", f"invalid JSON: {e}") from e

    account = account_from_record(AccountRecord.from_dict(data), parse_currency)
    logger.debug(
        "account_deserialized",
        extra={"account_name": account.name, "is_open": account.is_open()},
    )
    return account
