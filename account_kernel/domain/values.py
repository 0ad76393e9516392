"""
Values -- Immutable, self-validating value objects consumed by the core.

Responsibility:
    CurrencyCode is the validated currency identifier an Account references.
    Money is the monetary payload a Balance carries. Neither takes part in
    the temporal consistency rules; they are validated at their own
    construction boundary so the core never sees a raw currency string.

Failure modes:
    - InvalidCurrencyError on construction with an unrecognized code
    - ValueError when a Money amount cannot be read as a Decimal
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from account_kernel.domain.currency import CurrencyRegistry


@dataclass(frozen=True, slots=True)
class CurrencyCode:
    """
    ISO 4217 currency code value object.

    Guarantees:
        - Immutable and hashable
        - code is uppercase, stripped, and recognized by CurrencyRegistry
    """

    code: str

    def __post_init__(self) -> None:
        # Override frozen to store the normalized value
        object.__setattr__(self, "code", CurrencyRegistry.validate(self.code))

    @classmethod
    def parse(cls, code: str, allowed: frozenset[str] | None = None) -> CurrencyCode:
        """Parse a code, optionally restricted to an allow-list."""
        return cls(CurrencyRegistry.validate(code, allowed))

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"CurrencyCode({self.code!r})"


@dataclass(frozen=True, slots=True)
class Money:
    """
    Monetary amount paired with its currency.

    Non-goals:
        - No arithmetic; balances are compared by date only.
    """

    amount: Decimal
    currency: CurrencyCode

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            if isinstance(self.amount, float):
                raise ValueError(f"Money amount must not be a float: {self.amount!r}")
            try:
                object.__setattr__(self, "amount", Decimal(str(self.amount)))
            except (InvalidOperation, ValueError) as e:
                raise ValueError(f"Invalid amount: {self.amount!r}") from e

        if isinstance(self.currency, str):
            object.__setattr__(self, "currency", CurrencyCode(self.currency))
        elif not isinstance(self.currency, CurrencyCode):
            raise TypeError(
                f"currency must be CurrencyCode or str, got {type(self.currency)}"
            )

    @classmethod
    def of(cls, amount: Decimal | str | int, currency: str | CurrencyCode) -> Money:
        """Factory method for creating Money."""
        return cls(amount=amount, currency=currency)

    def __str__(self) -> str:
        return f"{self.amount} {self.currency.code}"
