"""Currency -- ISO 4217 code registry used to accept account currencies."""

from typing import ClassVar

from account_kernel.exceptions import InvalidCurrencyError


def _codes(block: str) -> frozenset[str]:
    return frozenset(block.split())


class CurrencyRegistry:
    """
    Registry of active ISO 4217 currency codes.

    Contract:
        The registry only answers whether a code is recognized. It never
        interprets amounts.
    """

    # Source: https://www.iso.org/iso-4217-currency-codes.html
    _ALL: ClassVar[frozenset[str]] = _codes(
        """
        AED AFN ALL AMD ANG AOA ARS AUD AWG AZN BAM BBD BDT BGN BHD BIF
        BMD BND BOB BOV BRL BSD BTN BWP BYN BZD CAD CDF CHE CHF CHW CLF
        CLP CNY COP COU CRC CUC CUP CVE CZK DJF DKK DOP DZD EGP ERN ETB
        EUR FJD FKP GBP GEL GHS GIP GMD GNF GTQ GYD HKD HNL HTG HUF IDR
        ILS INR IQD IRR ISK JMD JOD JPY KES KGS KHR KMF KPW KRW KWD KYD
        KZT LAK LBP LKR LRD LSL LYD MAD MDL MGA MKD MMK MNT MOP MRU MUR
        MVR MWK MXN MXV MYR MZN NAD NGN NIO NOK NPR NZD OMR PAB PEN PGK
        PHP PKR PLN PYG QAR RON RSD RUB RWF SAR SBD SCR SDG SEK SGD SHP
        SLE SLL SOS SRD SSP STN SVC SYP SZL THB TJS TMT TND TOP TRY TTD
        TWD TZS UAH UGX USD USN UYI UYU UYW UZS VED VES VND VUV WST XAF
        XAG XAU XBA XBB XBC XBD XCD XDR XOF XPD XPF XPT XSU XTS XUA XXX
        YER ZAR ZMW ZWL
        """
    )

    @staticmethod
    def normalize(code: object) -> str:
        """Strip and upper-case a candidate code; non-strings normalize to ''."""
        if not isinstance(code, str):
            return ""
        return code.strip().upper()

    @classmethod
    def is_valid(cls, code: object) -> bool:
        """Check if a currency code is valid ISO 4217."""
        return cls.normalize(code) in cls._ALL

    @classmethod
    def validate(cls, code: object, allowed: frozenset[str] | None = None) -> str:
        """
        Validate and normalize a currency code.

        Args:
            code: Candidate code, e.g. ``" eur"``.
            allowed: Optional allow-list narrowing the accepted codes.

        Returns:
            The normalized three-letter code.

        Raises:
            InvalidCurrencyError: If the code is not a string, not three
                letters, not in ISO 4217, or not in ``allowed``.
        """
        if not code or not isinstance(code, str):
            raise InvalidCurrencyError(code, "code must be a non-empty string")

        normalized = cls.normalize(code)

        if len(normalized) != 3:
            raise InvalidCurrencyError(code, "code must be 3 characters")

        if normalized not in cls._ALL:
            raise InvalidCurrencyError(code)

        if allowed is not None and normalized not in allowed:
            raise InvalidCurrencyError(code, "code is not allowed by configuration")

        return normalized

    @classmethod
    def all_codes(cls) -> frozenset[str]:
        """Get all valid currency codes."""
        return cls._ALL
