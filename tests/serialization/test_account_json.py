"""
Tests for the Account JSON snapshot.

Round trips must preserve equality, including whether a close date is set.
Decoding goes through the same setters and validation as construction.
"""

import json
from datetime import timedelta

import pytest

from account_kernel.domain.account import Account, close_time, new_account
from account_kernel.domain.nullable_time import ZERO_TIME, NullableTime
from account_kernel.domain.time_range import TimeRange
from account_kernel.domain.values import CurrencyCode
from account_kernel.exceptions import (
    DateClosedBeforeDateOpenedError,
    FieldError,
    InvalidCurrencyError,
    MalformedAccountRecordError,
    ValidationMessage,
    ZeroDateOpenedError,
    ZeroValidDateClosedError,
)
from account_kernel.serialization import (
    AccountRecord,
    account_from_record,
    account_to_record,
    dumps_account,
    loads_account,
)


def _payload(**overrides) -> str:
    data = {
        "Name": "TEST ACCOUNT",
        "Start": "2024-06-15T09:30:00+00:00",
        "End": {"Time": ZERO_TIME.isoformat(), "Valid": False},
        "Currency": "EUR",
    }
    data.update(overrides)
    return json.dumps(data)


class TestRoundTrip:
    def test_open_account(self, open_account):
        decoded = loads_account(dumps_account(open_account))
        assert decoded == open_account
        assert decoded.is_open()

    def test_closed_account(self, open_account, now):
        close = now + timedelta(hours=48)
        open_account.close(close)
        decoded = loads_account(dumps_account(open_account))
        assert decoded == open_account
        assert decoded.end.equals_time(close)

    def test_currency_survives(self, now):
        account = new_account("Yen", CurrencyCode("JPY"), now)
        assert loads_account(dumps_account(account)).currency == CurrencyCode("JPY")

    def test_unset_end_keeps_its_raw_time(self, now, eur):
        account = Account(
            name="Leftover",
            currency=eur,
            time_range=TimeRange(
                start=NullableTime.of(now),
                end=NullableTime(valid=False, time=now + timedelta(days=1)),
            ),
        )
        assert account.validate() is None

        decoded = loads_account(dumps_account(account))
        assert decoded == account
        assert decoded.is_open()
        assert decoded.end.time == now + timedelta(days=1)

    def test_record_mapping(self, closed_account):
        record = account_to_record(closed_account)
        assert record.Name == closed_account.name
        assert record.Start == closed_account.start
        assert record.End == closed_account.end
        assert record.Currency == "EUR"
        assert account_from_record(record) == closed_account


class TestWireFormat:
    def test_fields(self, open_account, now):
        data = json.loads(dumps_account(open_account))
        assert set(data) == {"Name", "Start", "End", "Currency"}
        assert data["Name"] == "Test Account"
        assert data["Start"] == now.isoformat()
        assert data["End"] == {"Time": ZERO_TIME.isoformat(), "Valid": False}
        assert data["Currency"] == "EUR"

    def test_closed_end_is_marked_valid(self, closed_account):
        data = json.loads(dumps_account(closed_account))
        assert data["End"]["Valid"] is True
        assert data["End"]["Time"] == closed_account.end.time.isoformat()

    def test_kwargs_forwarded_to_json(self, open_account):
        assert "\n" in dumps_account(open_account, indent=2)


class TestDecodingValidates:
    def test_null_end_is_open(self):
        assert loads_account(_payload(End=None)).is_open()

    def test_end_without_time_is_open(self):
        assert loads_account(_payload(End={"Valid": False})).is_open()

    def test_blank_name_raises_field_error(self):
        with pytest.raises(FieldError) as exc_info:
            loads_account(_payload(Name=" "))
        assert exc_info.value == FieldError([ValidationMessage.EMPTY_NAME])

    def test_zero_start_rejected_by_setter(self):
        with pytest.raises(ZeroDateOpenedError):
            loads_account(_payload(Start=ZERO_TIME.isoformat()))

    def test_zero_valid_end_rejected_by_setter(self):
        with pytest.raises(ZeroValidDateClosedError):
            loads_account(_payload(End={"Time": ZERO_TIME.isoformat(), "Valid": True}))

    def test_end_before_start_rejected_by_setter(self):
        with pytest.raises(DateClosedBeforeDateOpenedError):
            loads_account(_payload(End={"Time": "2020-01-01T00:00:00+00:00", "Valid": True}))

    def test_unknown_currency(self):
        with pytest.raises(InvalidCurrencyError):
            loads_account(_payload(Currency="QWERTYUIOP"))

    def test_custom_currency_parser(self):
        def only_gbp(code):
            return CurrencyCode.parse(code, frozenset({"GBP"}))

        with pytest.raises(InvalidCurrencyError):
            loads_account(_payload(), parse_currency=only_gbp)

    def test_missing_currency_is_allowed(self):
        data = json.loads(_payload())
        del data["Currency"]
        assert loads_account(json.dumps(data)).currency is None


class TestMalformed:
    @pytest.mark.parametrize(
        "text, field",
        [
            ("not json", "<root>"),
            ("[1, 2]", "<root>"),
            (json.dumps({"Start": "2024-01-01T00:00:00+00:00", "End": None}), "Name"),
            (_payload(Name=7), "Name"),
            (_payload(Start="yesterday"), "Start"),
            (_payload(Start=12), "Start"),
            (_payload(End="2024-01-01"), "End"),
            (_payload(End={"Time": "2024-01-01T00:00:00", "Valid": "yes"}), "End.Valid"),
            (_payload(End={"Time": "soon", "Valid": True}), "End.Time"),
            (_payload(Currency=978), "Currency"),
            (b'{"Name": "\xff\xfe"}', "<root>"),
        ],
    )
    def test_malformed_payloads(self, text, field):
        with pytest.raises(MalformedAccountRecordError) as exc_info:
            loads_account(text)
        assert exc_info.value.field == field
        assert exc_info.value.code == "MALFORMED_ACCOUNT_RECORD"

    def test_missing_start(self):
        with pytest.raises(MalformedAccountRecordError, match="'Start': missing"):
            AccountRecord.from_dict({"Name": "x", "End": None})


class TestUnvalidatedAccounts:
    def test_str_of_default_account(self):
        assert '"Name": ""' in str(Account())

    def test_invalid_account_still_encodes(self):
        account = Account(
            name="x",
            time_range=TimeRange(start=NullableTime.null(), end=NullableTime(valid=True)),
        )
        data = json.loads(dumps_account(account))
        assert data["End"]["Valid"] is True
        assert data["Currency"] is None

    def test_new_account_round_trips_with_close_option(self, now, eur):
        account = new_account("A", eur, now, close_time(now + timedelta(days=1)))
        assert loads_account(dumps_account(account).encode()) == account
