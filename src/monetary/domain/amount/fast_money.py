from __future__ import annotations

import logging
from decimal import Decimal, ROUND_HALF_EVEN
from typing import Any, Callable, ClassVar, TypeVar

from monetary.domain.amount.checks import (
    compare_numbers,
    compare_total,
    decimal_errors,
    number_from_minor,
    require_amount,
    require_amount_of_type,
    require_same_currency,
)
from monetary.domain.amount.protocol import MonetaryAmount
from monetary.domain.context.monetary_context import FAST_MONEY_CONTEXT, FAST_MONEY_SCALE, MonetaryContext
from monetary.domain.currency.currency_registry import resolve_currency, XXX
from monetary.domain.currency.currency_unit import CurrencyUnit
from monetary.errors import (
    ArithmeticOverflowError,
    DivisionByZeroError,
    InvalidConfigurationError,
    InvalidNumberError,
    MissingArgumentError,
    PrecisionLossError,
)
from monetary.platform.context_resolution import is_fast_money_scale_enforced
from monetary.utils.decimal_tools import (
    decimal_precision,
    decimal_scale,
    divide_to_scale,
    exact_context,
    set_scale,
    strip_trailing_zeros,
    to_plain_string,
)
from monetary.utils.numeric_tools import as_decimal, check_finite, DecimalLike, is_infinite_and_not_nan

logger = logging.getLogger(__name__)

R = TypeVar("R")

# Bounds of the signed 64-bit integer holding the unscaled value
MAX_UNITS = 2**63 - 1
MIN_UNITS = -(2**63)
MAX_PRECISION = 19

_MAX_NUMBER = Decimal(MAX_UNITS).scaleb(-FAST_MONEY_SCALE)
_MIN_NUMBER = Decimal(MIN_UNITS).scaleb(-FAST_MONEY_SCALE)


class FastMoney:
    """Currency-tagged fixed-point amount: an integer number of 1/100000 currency units.

    Values are held as `value * 10^5` in the range of a signed 64-bit integer, i.e.
    roughly +/-92 trillion with exactly 5 fraction digits. Addition, subtraction and
    negation are exact integer operations; any result outside the range raises
    `ArithmeticOverflowError` instead of wrapping around.

    Inputs with more than 5 fraction digits are rejected with `PrecisionLossError`.
    Only the results of division, multiplication and scaling are rounded (half-even).

    Example:
        ```python
        FastMoney.of(100, "CHF").divide("0.1")  # CHF 1000.00000
        ```
    """

    __slots__ = ("_units", "_currency")

    # Populated below the class body (need the class itself)
    MAX_VALUE: ClassVar[FastMoney]
    MIN_VALUE: ClassVar[FastMoney]

    def __init__(self, number: DecimalLike, currency: CurrencyUnit):
        """Initialize FastMoney from a decimal value.

        Raises:
            MissingArgumentError: If $number or $currency is None.
            InvalidNumberError: If $number is NaN, infinite or not numeric.
            PrecisionLossError: If $number has more than 5 fraction digits.
            ArithmeticOverflowError: If $number is outside the 64-bit range.
        """
        # Raise: currency must be an instance of CurrencyUnit
        if currency is None:
            raise MissingArgumentError("currency", "FastMoney")
        if not isinstance(currency, CurrencyUnit):
            raise TypeError(f"$currency must be a CurrencyUnit instance, but provided value is: {currency!r}")

        self._currency = currency
        self._units = _to_units(check_finite(number), allow_rounding=False)

    @classmethod
    def _create(cls, units: int, currency: CurrencyUnit) -> FastMoney:
        # Raise: result must stay within the signed 64-bit range
        if units > MAX_UNITS or units < MIN_UNITS:
            raise ArithmeticOverflowError(f"Overflow: {Decimal(units).scaleb(-FAST_MONEY_SCALE)} is outside [{_MIN_NUMBER}, {_MAX_NUMBER}]", units)

        instance = object.__new__(cls)
        instance._units = units
        instance._currency = currency
        return instance

    # region Factories

    @classmethod
    def of(cls, number: DecimalLike, currency: CurrencyUnit | str, context: MonetaryContext | None = None) -> FastMoney:
        """Creates an amount of $number in $currency (unit or ISO code).

        Raises:
            InvalidConfigurationError: If $context differs from the fixed `FastMoney` context.
        """
        _check_context(context)
        return cls(number, resolve_currency(currency))

    @classmethod
    def zero(cls, currency: CurrencyUnit | str, context: MonetaryContext | None = None) -> FastMoney:
        _check_context(context)
        return cls._create(0, resolve_currency(currency))

    @classmethod
    def of_minor(cls, currency: CurrencyUnit | str, minor_units: int, fraction_digits: int | None = None) -> FastMoney:
        unit = resolve_currency(currency)
        return cls(number_from_minor(unit, minor_units, fraction_digits), unit)

    @classmethod
    def of_units(cls, units: int, currency: CurrencyUnit | str) -> FastMoney:
        """Creates an amount directly from its unscaled value (`value * 10^5`)."""
        if isinstance(units, bool) or not isinstance(units, int):
            raise TypeError(f"$units must be an int, but provided value is: {units!r}")
        return cls._create(units, resolve_currency(currency))

    @classmethod
    def from_amount(cls, amount: MonetaryAmount, context: MonetaryContext | None = None) -> FastMoney:
        """Creates a `FastMoney` with the value and currency of an amount of any representation.

        Raises:
            PrecisionLossError: If the value has more than 5 fraction digits.
            ArithmeticOverflowError: If the value is outside the 64-bit range.
        """
        require_amount(amount, "FastMoney.from_amount")
        _check_context(context)
        if isinstance(amount, FastMoney):
            return amount
        return cls(amount.number, amount.currency)

    # endregion

    # region Properties

    @property
    def number(self) -> Decimal:
        """Numeric value as `Decimal`, always with 5 fraction digits."""
        return Decimal(self._units).scaleb(-FAST_MONEY_SCALE, exact_context())

    @property
    def number_stripped(self) -> Decimal:
        return strip_trailing_zeros(self.number)

    @property
    def units(self) -> int:
        """Unscaled value, i.e. the number multiplied by 10^5."""
        return self._units

    @property
    def currency(self) -> CurrencyUnit:
        return self._currency

    @property
    def context(self) -> MonetaryContext:
        return FAST_MONEY_CONTEXT

    @property
    def scale(self) -> int:
        return FAST_MONEY_SCALE

    @property
    def precision(self) -> int:
        return decimal_precision(self.number)

    # endregion

    # region Arithmetic

    def add(self, amount: FastMoney) -> FastMoney:
        """Returns the exact sum.

        Raises:
            TypeError: If $amount is not a `FastMoney`.
            CurrencyMismatchError: If the currencies differ.
            ArithmeticOverflowError: If the sum is outside the 64-bit range.
        """
        require_amount_of_type(amount, FastMoney, "add")
        require_same_currency(self._currency, amount, "add")
        if amount.is_zero():
            return self
        return self._create(self._units + amount.units, self._currency)

    def subtract(self, amount: FastMoney) -> FastMoney:
        require_amount_of_type(amount, FastMoney, "subtract")
        require_same_currency(self._currency, amount, "subtract")
        if amount.is_zero():
            return self
        return self._create(self._units - amount.units, self._currency)

    def multiply(self, multiplicand: DecimalLike) -> FastMoney:
        """Returns the product, rounded half-even to 5 fraction digits.

        Raises:
            InvalidNumberError: If $multiplicand is NaN or infinite.
            ArithmeticOverflowError: If the product is outside the 64-bit range.
        """
        factor = self._check_operand(check_finite(multiplicand), "multiply")
        if factor == 1:
            return self

        with decimal_errors("multiply", self.number):
            product = exact_context().multiply(Decimal(self._units), factor)
        return self._create(_rounded_units(product), self._currency)

    def divide(self, divisor: DecimalLike) -> FastMoney:
        """Returns the quotient, rounded half-even to 5 fraction digits.

        Dividing by infinity yields zero.

        Raises:
            InvalidNumberError: If $divisor is NaN.
            DivisionByZeroError: If $divisor is zero.
            ArithmeticOverflowError: If $divisor has more than 19 digits or exceeds the range.
        """
        if is_infinite_and_not_nan(divisor):
            return self._create(0, self._currency)

        number = self._check_divisor(divisor, "divide")
        if number == 1:
            return self

        with decimal_errors("divide", self.number):
            quotient = divide_to_scale(Decimal(self._units), number, 0, ROUND_HALF_EVEN)
        return self._create(int(quotient), self._currency)

    def divide_and_remainder(self, divisor: DecimalLike) -> tuple[FastMoney, FastMoney]:
        """Returns the truncated integral quotient and the remainder (sign of the dividend)."""
        if is_infinite_and_not_nan(divisor):
            zero = self._create(0, self._currency)
            return zero, zero

        number = self._check_divisor(divisor, "divide_and_remainder")
        with decimal_errors("divide_and_remainder", self.number):
            quotient, remainder = exact_context().divmod(self.number, number)
        return (
            self._create(_to_units(quotient, allow_rounding=True), self._currency),
            self._create(_to_units(remainder, allow_rounding=True), self._currency),
        )

    def divide_to_integral_value(self, divisor: DecimalLike) -> FastMoney:
        if is_infinite_and_not_nan(divisor):
            return self._create(0, self._currency)

        number = self._check_divisor(divisor, "divide_to_integral_value")
        if number == 1:
            return self

        with decimal_errors("divide_to_integral_value", self.number):
            quotient = exact_context().divide_int(self.number, number)
        return self._create(_to_units(quotient, allow_rounding=False), self._currency)

    def remainder(self, divisor: DecimalLike) -> FastMoney:
        if is_infinite_and_not_nan(divisor):
            return self._create(0, self._currency)

        number = self._check_divisor(divisor, "remainder")
        with decimal_errors("remainder", self.number):
            remainder = exact_context().remainder(self.number, number)
        return self._create(_to_units(remainder, allow_rounding=False), self._currency)

    def negate(self) -> FastMoney:
        """Returns the negated amount.

        Raises:
            ArithmeticOverflowError: For `MIN_VALUE`, whose negation is not representable.
        """
        return self._create(-self._units, self._currency)

    def plus(self) -> FastMoney:
        return self

    def abs(self) -> FastMoney:
        if self._units >= 0:
            return self
        return self.negate()

    def scale_by_power_of_ten(self, power: int) -> FastMoney:
        """Returns the amount multiplied by 10^$power, rounded half-even to 5 fraction digits."""
        if power == 0:
            return self
        scaled = self.number.scaleb(power, exact_context())
        return self._create(_to_units(scaled, allow_rounding=True), self._currency)

    def strip_trailing_zeros(self) -> FastMoney:
        # Fixed scale: there is nothing to strip
        return self

    def has_same_number_as(self, number: DecimalLike) -> bool:
        """True if $number converts to exactly the value of this amount."""
        try:
            return self._units == _to_units(check_finite(number), allow_rounding=False)
        except (ArithmeticOverflowError, PrecisionLossError, InvalidNumberError):
            return False

    # endregion

    # region Functional extension points

    def with_number(self, number: DecimalLike) -> FastMoney:
        return FastMoney(number, self._currency)

    def with_operator(self, operator: Callable[[FastMoney], FastMoney]) -> FastMoney:
        if operator is None:
            raise MissingArgumentError("operator", "with_operator")
        result = operator(self)
        if not isinstance(result, FastMoney):
            raise TypeError(f"Cannot call `with_operator` because $operator must return `FastMoney`, but returned: {result!r}")
        return result

    def query(self, query: Callable[[FastMoney], R]) -> R:
        if query is None:
            raise MissingArgumentError("query", "query")
        return query(self)

    # endregion

    # region Sign queries

    def is_zero(self) -> bool:
        return self._units == 0

    def is_positive(self) -> bool:
        return self._units > 0

    def is_positive_or_zero(self) -> bool:
        return self._units >= 0

    def is_negative(self) -> bool:
        return self._units < 0

    def is_negative_or_zero(self) -> bool:
        return self._units <= 0

    def signum(self) -> int:
        if self._units == 0:
            return 0
        return 1 if self._units > 0 else -1

    # endregion

    # region Comparison

    def is_less_than(self, amount: MonetaryAmount) -> bool:
        return compare_numbers(self, amount, "is_less_than") < 0

    def is_less_than_or_equal_to(self, amount: MonetaryAmount) -> bool:
        return compare_numbers(self, amount, "is_less_than_or_equal_to") <= 0

    def is_greater_than(self, amount: MonetaryAmount) -> bool:
        return compare_numbers(self, amount, "is_greater_than") > 0

    def is_greater_than_or_equal_to(self, amount: MonetaryAmount) -> bool:
        return compare_numbers(self, amount, "is_greater_than_or_equal_to") >= 0

    def is_equal_to(self, amount: MonetaryAmount) -> bool:
        return compare_numbers(self, amount, "is_equal_to") == 0

    def is_not_equal_to(self, amount: MonetaryAmount) -> bool:
        return compare_numbers(self, amount, "is_not_equal_to") != 0

    def compare_to(self, amount: MonetaryAmount) -> int:
        return compare_total(self, amount)

    # endregion

    # region Python operators

    def __add__(self, other: FastMoney) -> FastMoney:
        return self.add(other)

    def __sub__(self, other: FastMoney) -> FastMoney:
        return self.subtract(other)

    def __mul__(self, other: DecimalLike) -> FastMoney:
        if isinstance(other, MonetaryAmount):
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other: DecimalLike) -> FastMoney:
        return self.__mul__(other)

    def __truediv__(self, other: DecimalLike) -> FastMoney:
        if isinstance(other, MonetaryAmount):
            return NotImplemented
        return self.divide(other)

    def __floordiv__(self, other: DecimalLike) -> FastMoney:
        return self.divide_to_integral_value(other)

    def __mod__(self, other: DecimalLike) -> FastMoney:
        return self.remainder(other)

    def __divmod__(self, other: DecimalLike) -> tuple[FastMoney, FastMoney]:
        return self.divide_and_remainder(other)

    def __neg__(self) -> FastMoney:
        return self.negate()

    def __pos__(self) -> FastMoney:
        return self.plus()

    def __abs__(self) -> FastMoney:
        return self.abs()

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, MonetaryAmount):
            return NotImplemented
        return self.is_less_than(other)

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, MonetaryAmount):
            return NotImplemented
        return self.is_less_than_or_equal_to(other)

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, MonetaryAmount):
            return NotImplemented
        return self.is_greater_than(other)

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, MonetaryAmount):
            return NotImplemented
        return self.is_greater_than_or_equal_to(other)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, FastMoney):
            return False
        return self._currency == other._currency and self._units == other._units

    def __hash__(self) -> int:
        return hash((self._currency, self._units))

    # endregion

    # region String representations

    def __str__(self) -> str:
        """Return string like 'CHF 10.50000'."""
        return f"{self._currency.code} {to_plain_string(self.number)}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({to_plain_string(self.number)}, {self._currency.code})"

    # endregion

    # region Internals

    def _check_divisor(self, divisor: DecimalLike, operation: str) -> Decimal:
        number = as_decimal(divisor)
        if number.is_nan():
            raise InvalidNumberError(divisor, "NaN")
        number = self._check_operand(number, operation)
        if number.is_zero():
            raise DivisionByZeroError(self)
        return number

    @staticmethod
    def _check_operand(number: Decimal, operation: str) -> Decimal:
        """Checks a numeric operand against the capabilities of the fixed-point representation.

        Operands with more than 5 fraction digits are rounded half-even, unless the setting
        `monetary.fast_money.enforce_scale_compatibility` is "true".

        Raises:
            ArithmeticOverflowError: If $number is outside the range or has more than 19 digits.
            PrecisionLossError: If $number has more than 5 fraction digits and enforcement is on.
        """
        stripped = strip_trailing_zeros(number)
        # Raise: operand must fit into the 64-bit range
        if stripped > _MAX_NUMBER or stripped < _MIN_NUMBER:
            raise ArithmeticOverflowError(f"Cannot call `{operation}` because $number ({number}) exceeds maximal value: {_MAX_NUMBER}", number)
        if decimal_precision(stripped) > MAX_PRECISION:
            raise ArithmeticOverflowError(f"Cannot call `{operation}` because $number ({number}) exceeds maximal precision: {MAX_PRECISION}", number)

        if decimal_scale(stripped) > FAST_MONEY_SCALE:
            # Raise: implicit rounding of operands is disabled by configuration
            if is_fast_money_scale_enforced():
                raise PrecisionLossError(number, FAST_MONEY_SCALE, f"scale of operand exceeds maximal scale {FAST_MONEY_SCALE}")
            logger.debug(f"Scale of $number ({number}) exceeds maximal scale of FastMoney ({FAST_MONEY_SCALE}), implicit rounding will be applied in `{operation}`")
        return number

    # endregion


def _to_units(number: Decimal, allow_rounding: bool) -> int:
    stripped = strip_trailing_zeros(number)

    # Raise: value with more than 5 fraction digits needs rounding
    if decimal_scale(stripped) > FAST_MONEY_SCALE:
        if not allow_rounding:
            raise PrecisionLossError(number, FAST_MONEY_SCALE)
        stripped = set_scale(stripped, FAST_MONEY_SCALE, ROUND_HALF_EVEN)

    # Raise: value must fit into the signed 64-bit range
    if stripped > _MAX_NUMBER:
        raise ArithmeticOverflowError(f"Overflow: {number} > {_MAX_NUMBER}", number)
    if stripped < _MIN_NUMBER:
        raise ArithmeticOverflowError(f"Overflow: {number} < {_MIN_NUMBER}", number)

    return int(stripped.scaleb(FAST_MONEY_SCALE, exact_context()))


def _rounded_units(value_in_units: Decimal) -> int:
    # $value_in_units is a number of 1/100000 units that may carry further fraction digits
    return int(set_scale(value_in_units, 0, ROUND_HALF_EVEN))


def _check_context(context: MonetaryContext | None) -> None:
    if context is None:
        return
    if not isinstance(context, MonetaryContext):
        raise TypeError(f"$context must be a MonetaryContext instance, but provided value is: {context!r}")
    # Raise: the fixed-point representation cannot honor other limits
    if context.max_scale not in (-1, FAST_MONEY_SCALE) or context.precision not in (0, MAX_PRECISION):
        raise InvalidConfigurationError(f"`FastMoney` supports only precision {MAX_PRECISION} and max scale {FAST_MONEY_SCALE}, but provided context is: {context}")


FastMoney.MAX_VALUE = FastMoney._create(MAX_UNITS, XXX)
FastMoney.MIN_VALUE = FastMoney._create(MIN_UNITS, XXX)
