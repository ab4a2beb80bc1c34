from __future__ import annotations

import logging
from threading import RLock

from bidict import bidict

from monetary.domain.currency.currency_unit import CurrencyUnit
from monetary.errors import MissingArgumentError, UnknownCurrencyError

logger = logging.getLogger(__name__)


class CurrencyRegistry:
    """Owns the canonical `CurrencyUnit` instances of a process.

    Lookups are pure in-memory reads. Registration is guarded by a lock so concurrent
    first-time registrations converge on a single instance per code.
    """

    def __init__(self, currencies: list[CurrencyUnit] | None = None):
        self._lock = RLock()
        self._currencies_by_code: dict[str, CurrencyUnit] = {}
        # Bi-directional mapping numeric code <-> alphabetic code
        self._codes_by_numeric_bidict: bidict[int, str] = bidict()

        for currency in currencies or []:
            self.register(currency)

    def register(self, currency: CurrencyUnit, overwrite: bool = False) -> CurrencyUnit:
        """Register a currency.

        Args:
            currency: The currency to register.
            overwrite: Whether to replace an already registered currency with the same code.

        Returns:
            The registered (canonical) instance. When $overwrite is False and the code is
            already known, the existing instance is returned unchanged.

        Raises:
            TypeError: If $currency is not a CurrencyUnit.
            ValueError: If the numeric code is already used by another currency code.
        """
        if not isinstance(currency, CurrencyUnit):
            raise TypeError(f"$currency must be a CurrencyUnit instance, but provided value is: {currency}")

        with self._lock:
            existing = self._currencies_by_code.get(currency.code)
            if existing is not None and not overwrite:
                return existing

            numeric_code = currency.numeric_code
            if numeric_code is not None:
                owner = self._codes_by_numeric_bidict.get(numeric_code)
                # Raise: numeric codes must stay unique across currency codes
                if owner is not None and owner != currency.code:
                    raise ValueError(f"Cannot register currency '{currency.code}' because $numeric_code {numeric_code} is already used by '{owner}'")

            if existing is not None and existing.numeric_code is not None:
                self._codes_by_numeric_bidict.pop(existing.numeric_code, None)
            if numeric_code is not None:
                self._codes_by_numeric_bidict[numeric_code] = currency.code

            self._currencies_by_code[currency.code] = currency
            logger.debug(f"Registered currency '{currency.code}' (numeric code {numeric_code}, fraction digits {currency.default_fraction_digits})")
            return currency

    def get(self, code: str) -> CurrencyUnit:
        """Get currency by code.

        Raises:
            MissingArgumentError: If $code is None.
            UnknownCurrencyError: If no currency is registered under $code.
        """
        if code is None:
            raise MissingArgumentError("code", "get_currency")

        normalized_code = str(code).upper().strip()
        currency = self._currencies_by_code.get(normalized_code)
        if currency is None:
            raise UnknownCurrencyError(code, sorted(self._currencies_by_code.keys()))
        return currency

    def get_by_numeric_code(self, numeric_code: int) -> CurrencyUnit:
        """Get currency by ISO numeric code.

        Raises:
            UnknownCurrencyError: If no currency uses $numeric_code.
        """
        code = self._codes_by_numeric_bidict.get(numeric_code)
        if code is None:
            raise UnknownCurrencyError(numeric_code)
        return self._currencies_by_code[code]

    def numeric_code_of(self, code: str) -> int | None:
        """Return the numeric code registered for $code, or None."""
        return self._codes_by_numeric_bidict.inverse.get(str(code).upper().strip())

    def is_available(self, code: str) -> bool:
        return code is not None and str(code).upper().strip() in self._currencies_by_code

    def list_currencies(self) -> list[CurrencyUnit]:
        """All registered currencies, ordered by code."""
        return sorted(self._currencies_by_code.values())

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and self.is_available(code)

    def __len__(self) -> int:
        return len(self._currencies_by_code)


# region Predefined currencies

# Fiat currencies (ISO 4217)
USD = CurrencyUnit("USD", 2, 840, "US Dollar")
EUR = CurrencyUnit("EUR", 2, 978, "Euro")
CHF = CurrencyUnit("CHF", 2, 756, "Swiss Franc")
GBP = CurrencyUnit("GBP", 2, 826, "British Pound")
JPY = CurrencyUnit("JPY", 0, 392, "Japanese Yen")
BRL = CurrencyUnit("BRL", 2, 986, "Brazilian Real")
INR = CurrencyUnit("INR", 2, 356, "Indian Rupee")
CAD = CurrencyUnit("CAD", 2, 124, "Canadian Dollar")
AUD = CurrencyUnit("AUD", 2, 36, "Australian Dollar")
NZD = CurrencyUnit("NZD", 2, 554, "New Zealand Dollar")
CNY = CurrencyUnit("CNY", 2, 156, "Yuan Renminbi")
HKD = CurrencyUnit("HKD", 2, 344, "Hong Kong Dollar")
SGD = CurrencyUnit("SGD", 2, 702, "Singapore Dollar")
SEK = CurrencyUnit("SEK", 2, 752, "Swedish Krona")
NOK = CurrencyUnit("NOK", 2, 578, "Norwegian Krone")
DKK = CurrencyUnit("DKK", 2, 208, "Danish Krone")
PLN = CurrencyUnit("PLN", 2, 985, "Zloty")
CZK = CurrencyUnit("CZK", 2, 203, "Czech Koruna")
HUF = CurrencyUnit("HUF", 2, 348, "Forint")
RUB = CurrencyUnit("RUB", 2, 643, "Russian Ruble")
TRY = CurrencyUnit("TRY", 2, 949, "Turkish Lira")
ZAR = CurrencyUnit("ZAR", 2, 710, "Rand")
MXN = CurrencyUnit("MXN", 2, 484, "Mexican Peso")
ARS = CurrencyUnit("ARS", 2, 32, "Argentine Peso")
KRW = CurrencyUnit("KRW", 0, 410, "Won")
ISK = CurrencyUnit("ISK", 0, 352, "Iceland Krona")
CLP = CurrencyUnit("CLP", 0, 152, "Chilean Peso")
BHD = CurrencyUnit("BHD", 3, 48, "Bahraini Dinar")
KWD = CurrencyUnit("KWD", 3, 414, "Kuwaiti Dinar")
JOD = CurrencyUnit("JOD", 3, 400, "Jordanian Dinar")
TND = CurrencyUnit("TND", 3, 788, "Tunisian Dinar")
CLF = CurrencyUnit("CLF", 4, 990, "Unidad de Fomento")

# Precious metals and special codes (no minor unit)
XAU = CurrencyUnit("XAU", -1, 959, "Gold")
XAG = CurrencyUnit("XAG", -1, 961, "Silver")
XPT = CurrencyUnit("XPT", -1, 962, "Platinum")
XDR = CurrencyUnit("XDR", -1, 960, "SDR (Special Drawing Right)")
XTS = CurrencyUnit("XTS", -1, 963, "Codes specifically reserved for testing purposes")
XXX = CurrencyUnit("XXX", -1, 999, "The codes assigned for transactions where no currency is involved")

# Crypto currencies (not part of ISO 4217, no numeric code)
BTC = CurrencyUnit("BTC", 8, None, "Bitcoin")
ETH = CurrencyUnit("ETH", 18, None, "Ethereum")
USDT = CurrencyUnit("USDT", 6, None, "Tether")

_PREDEFINED_CURRENCIES = [
    USD, EUR, CHF, GBP, JPY, BRL, INR, CAD, AUD, NZD, CNY, HKD, SGD, SEK, NOK, DKK, PLN, CZK, HUF, RUB,
    TRY, ZAR, MXN, ARS, KRW, ISK, CLP, BHD, KWD, JOD, TND, CLF,
    XAU, XAG, XPT, XDR, XTS, XXX,
    BTC, ETH, USDT,
]

# endregion

_default_registry = CurrencyRegistry(_PREDEFINED_CURRENCIES)


def get_default_registry() -> CurrencyRegistry:
    """The process-wide registry that owns the canonical currency instances."""
    return _default_registry


def get_currency(code: str) -> CurrencyUnit:
    """Resolve a currency by code in the default registry.

    Raises:
        UnknownCurrencyError: If $code is unknown.
    """
    return _default_registry.get(code)


def get_currency_by_numeric_code(numeric_code: int) -> CurrencyUnit:
    """Resolve a currency by ISO numeric code in the default registry."""
    return _default_registry.get_by_numeric_code(numeric_code)


def resolve_currency(currency: CurrencyUnit | str) -> CurrencyUnit:
    """Accept either a `CurrencyUnit` or a code and return the `CurrencyUnit`.

    Raises:
        MissingArgumentError: If $currency is None.
        TypeError: If $currency is neither a CurrencyUnit nor a str.
        UnknownCurrencyError: If the code is unknown.
    """
    if currency is None:
        raise MissingArgumentError("currency")
    if isinstance(currency, CurrencyUnit):
        return currency
    if isinstance(currency, str):
        return get_currency(currency)
    raise TypeError(f"$currency must be a CurrencyUnit instance or currency code, but provided value is: {currency!r}")
