from __future__ import annotations

from functools import total_ordering
from types import NotImplementedType


@total_ordering
class CurrencyUnit:
    """Represents a currency with code, numeric code and default fraction digits.

    Two currency units are equal if their codes are equal; all other attributes are
    informational. Ordering is by code as well.

    Attributes:
        code (str): Currency code (e.g., "USD", "CHF", "XAU").
        numeric_code (int | None): ISO 4217 numeric code, or None when undefined.
        default_fraction_digits (int): Number of minor-unit digits (e.g., 2 for USD). -1 marks
            a pseudo currency (e.g., "XXX") without a defined minor unit.
        name (str | None): Optional human-readable name.
    """

    __slots__ = ("_code", "_numeric_code", "_default_fraction_digits", "_name")

    def __init__(
        self,
        code: str,
        default_fraction_digits: int,
        numeric_code: int | None = None,
        name: str | None = None,
    ):
        """Initialize a CurrencyUnit instance.

        Args:
            code: Currency code (e.g., "USD", "BTC").
            default_fraction_digits: Number of minor-unit digits (-1 for pseudo currencies).
            numeric_code: ISO numeric code; None if undefined.
            name: Optional currency name.

        Raises:
            ValueError: If parameters are invalid.
        """
        # Raise: $code must be a non-empty string
        if not isinstance(code, str) or not code.strip():
            raise ValueError(f"$code must be a non-empty string, but provided value is: '{code}'")

        # Raise: $default_fraction_digits must be -1 (undefined) or a non-negative int
        if isinstance(default_fraction_digits, bool) or not isinstance(default_fraction_digits, int) or default_fraction_digits < -1:
            raise ValueError(f"$default_fraction_digits must be an integer >= -1, but provided value is: {default_fraction_digits}")

        # Raise: $numeric_code must be None or a non-negative int
        if numeric_code is not None and (isinstance(numeric_code, bool) or not isinstance(numeric_code, int) or numeric_code < 0):
            raise ValueError(f"$numeric_code must be None or a non-negative integer, but provided value is: {numeric_code}")

        self._code = code.upper().strip()
        self._default_fraction_digits = default_fraction_digits
        self._numeric_code = numeric_code
        self._name = name.strip() if name else None

    @property
    def code(self) -> str:
        """Get the currency code."""
        return self._code

    @property
    def numeric_code(self) -> int | None:
        """Get the numeric code, or None if undefined."""
        return self._numeric_code

    @property
    def default_fraction_digits(self) -> int:
        """Get the default number of fraction digits (-1 if undefined)."""
        return self._default_fraction_digits

    @property
    def name(self) -> str | None:
        """Get the currency name."""
        return self._name

    @property
    def is_pseudo_currency(self) -> bool:
        """True if the currency has no defined minor unit."""
        return self._default_fraction_digits < 0

    def __eq__(self, other) -> bool:
        """Check equality with another CurrencyUnit (by code only)."""
        if not isinstance(other, CurrencyUnit):
            return False
        return self._code == other._code

    def __lt__(self, other: object) -> bool | NotImplementedType:
        """Order currencies by code."""
        if not isinstance(other, CurrencyUnit):
            return NotImplemented
        return self._code < other._code

    def __hash__(self) -> int:
        """Hash based on currency code."""
        return hash(self._code)

    def __str__(self) -> str:
        """Return string representation."""
        return self._code

    def __repr__(self) -> str:
        """Return detailed string representation."""
        return f"{self.__class__.__name__}('{self._code}', {self._default_fraction_digits}, {self._numeric_code})"


class CurrencyUnitBuilder:
    """Builds custom currency units, optionally registering them in the default registry.

    Example:
        ```python
        bitcoin = CurrencyUnitBuilder("BTC").set_default_fraction_digits(8).build(register=True)
        ```
    """

    def __init__(self, code: str):
        if code is None:
            raise ValueError("$code is required")
        self._code = code
        self._numeric_code: int | None = None
        self._default_fraction_digits = 2
        self._name: str | None = None

    def set_numeric_code(self, numeric_code: int) -> CurrencyUnitBuilder:
        """Sets the numeric code; -1 means undefined.

        Raises:
            ValueError: If $numeric_code < -1.
        """
        if numeric_code < -1:
            raise ValueError(f"$numeric_code must be >= -1, but provided value is: {numeric_code}")
        self._numeric_code = None if numeric_code == -1 else numeric_code
        return self

    def set_default_fraction_digits(self, default_fraction_digits: int) -> CurrencyUnitBuilder:
        """Sets the default fraction digits.

        Raises:
            ValueError: If $default_fraction_digits < 0.
        """
        if default_fraction_digits < 0:
            raise ValueError(f"$default_fraction_digits must be >= 0, but provided value is: {default_fraction_digits}")
        self._default_fraction_digits = default_fraction_digits
        return self

    def set_name(self, name: str) -> CurrencyUnitBuilder:
        self._name = name
        return self

    def build(self, register: bool = False) -> CurrencyUnit:
        """Creates the currency unit.

        Args:
            register: If True, the unit is also registered (overwriting) in the default registry.
        """
        currency = CurrencyUnit(self._code, self._default_fraction_digits, self._numeric_code, self._name)
        if register:
            # Local import: the registry module imports this module
            from monetary.domain.currency.currency_registry import get_default_registry

            get_default_registry().register(currency, overwrite=True)
        return currency
