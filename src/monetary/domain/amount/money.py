from __future__ import annotations

from decimal import Decimal
from typing import Any, Callable, TypeVar

from monetary.domain.amount.checks import (
    check_number_fits,
    compare_numbers,
    compare_total,
    decimal_errors,
    fit_to_context,
    number_from_minor,
    require_amount,
    require_amount_of_type,
    require_same_currency,
)
from monetary.domain.amount.protocol import MonetaryAmount
from monetary.domain.context.monetary_context import AmountKind, MonetaryContext
from monetary.domain.context.rounding_mode import RoundingMode
from monetary.domain.currency.currency_registry import resolve_currency
from monetary.domain.currency.currency_unit import CurrencyUnit
from monetary.errors import DivisionByZeroError, InvalidNumberError, MissingArgumentError
from monetary.platform.context_resolution import get_default_context
from monetary.utils.decimal_tools import (
    decimal_precision,
    decimal_scale,
    divide_to_scale,
    exact_quotient,
    strip_trailing_zeros,
    to_plain_string,
    unsigned_zero,
    ZERO,
)
from monetary.utils.numeric_tools import as_decimal, check_finite, DecimalLike, is_infinite_and_not_nan

R = TypeVar("R")


class Money:
    """Currency-tagged amount backed by an arbitrary-precision `Decimal`.

    The numeric value keeps its natural scale (`Money.of("10.50", "CHF")` prints as
    `CHF 10.50`), but equality and hashing ignore trailing zeros. Arithmetic runs within
    the precision and rounding mode of the amount's `MonetaryContext`; by default 64
    significant digits, rounding half-even.

    Example:
        ```python
        price = Money.of("19.99", "EUR")
        total = price * 3 + Money.of(5, "EUR")  # EUR 64.97
        ```
    """

    __slots__ = ("_number", "_currency", "_context")

    def __init__(self, number: DecimalLike, currency: CurrencyUnit, context: MonetaryContext | None = None):
        """Initialize Money with a validated number.

        Args:
            number: Finite numeric value.
            currency: Currency unit of the amount.
            context: Context to use; None uses the default context of `Money`.

        Raises:
            MissingArgumentError: If $number or $currency is None.
            InvalidNumberError: If $number is NaN, infinite or not numeric.
            ArithmeticOverflowError: If $number exceeds the precision of the context.
            PrecisionLossError: If $number exceeds the max scale of the context.
        """
        # Raise: currency must be an instance of CurrencyUnit
        if currency is None:
            raise MissingArgumentError("currency", "Money")
        if not isinstance(currency, CurrencyUnit):
            raise TypeError(f"$currency must be a CurrencyUnit instance, but provided value is: {currency!r}")

        self._context = _money_context(context)
        self._currency = currency
        self._number = unsigned_zero(check_number_fits(check_finite(number), self._context))

    @classmethod
    def _create(cls, number: Decimal, currency: CurrencyUnit, context: MonetaryContext) -> Money:
        # Internal constructor for values that already fit $context
        instance = object.__new__(cls)
        instance._number = unsigned_zero(number)
        instance._currency = currency
        instance._context = context
        return instance

    # region Factories

    @classmethod
    def of(cls, number: DecimalLike, currency: CurrencyUnit | str, context: MonetaryContext | None = None) -> Money:
        """Creates an amount of $number in $currency (unit or ISO code)."""
        return cls(number, resolve_currency(currency), context)

    @classmethod
    def zero(cls, currency: CurrencyUnit | str, context: MonetaryContext | None = None) -> Money:
        return cls(ZERO, resolve_currency(currency), context)

    @classmethod
    def of_minor(cls, currency: CurrencyUnit | str, minor_units: int, fraction_digits: int | None = None) -> Money:
        """Creates an amount from minor units, e.g. `Money.of_minor("USD", 1234)` is USD 12.34."""
        unit = resolve_currency(currency)
        return cls(number_from_minor(unit, minor_units, fraction_digits), unit)

    @classmethod
    def from_amount(cls, amount: MonetaryAmount, context: MonetaryContext | None = None) -> Money:
        """Creates a `Money` with the value and currency of an amount of any representation."""
        require_amount(amount, "Money.from_amount")
        if isinstance(amount, Money) and context is None:
            return amount
        return cls(amount.number, amount.currency, context)

    # endregion

    # region Properties

    @property
    def number(self) -> Decimal:
        return self._number

    @property
    def number_stripped(self) -> Decimal:
        """Numeric value without trailing zeros."""
        return strip_trailing_zeros(self._number)

    @property
    def currency(self) -> CurrencyUnit:
        return self._currency

    @property
    def context(self) -> MonetaryContext:
        return self._context

    @property
    def scale(self) -> int:
        return decimal_scale(self._number)

    @property
    def precision(self) -> int:
        return decimal_precision(self._number)

    # endregion

    # region Arithmetic

    def add(self, amount: Money) -> Money:
        """Returns the sum; $self is returned unchanged when $amount is zero.

        Raises:
            TypeError: If $amount is not a `Money`.
            CurrencyMismatchError: If the currencies differ.
            ArithmeticOverflowError: If the sum exceeds the context.
        """
        require_amount_of_type(amount, Money, "add")
        require_same_currency(self._currency, amount, "add")
        if amount.is_zero():
            return self

        with decimal_errors("add", self._number):
            result = self._context.to_decimal_context().add(self._number, amount.number)
        return self._with_result(result, "add")

    def subtract(self, amount: Money) -> Money:
        require_amount_of_type(amount, Money, "subtract")
        require_same_currency(self._currency, amount, "subtract")
        if amount.is_zero():
            return self

        with decimal_errors("subtract", self._number):
            result = self._context.to_decimal_context().subtract(self._number, amount.number)
        return self._with_result(result, "subtract")

    def multiply(self, multiplicand: DecimalLike) -> Money:
        """Returns the product rounded to the context precision.

        Raises:
            InvalidNumberError: If $multiplicand is NaN or infinite.
        """
        factor = check_finite(multiplicand)
        if factor == 1:
            return self

        with decimal_errors("multiply", self._number):
            result = self._context.to_decimal_context().multiply(self._number, factor)
        return self._with_result(result, "multiply")

    def divide(self, divisor: DecimalLike) -> Money:
        """Returns the quotient.

        With a bounded max scale the quotient is rounded to that scale, otherwise to the
        context precision. Dividing by infinity yields zero.

        Raises:
            InvalidNumberError: If $divisor is NaN.
            DivisionByZeroError: If $divisor is zero.
            ArithmeticOverflowError: If the precision is unlimited and the quotient has no
                finite decimal expansion (e.g. 1 / 3).
        """
        if is_infinite_and_not_nan(divisor):
            return self._with_result(ZERO, "divide")

        number = as_decimal(divisor)
        if number.is_zero():
            raise DivisionByZeroError(self)
        if number == 1:
            return self

        context = self._context
        with decimal_errors("divide", self._number):
            if context.max_scale > 0 and context.rounding_mode != RoundingMode.UNNECESSARY:
                result = divide_to_scale(self._number, number, context.max_scale, context.rounding_mode.decimal_rounding)
            elif context.is_unlimited_precision:
                result = exact_quotient(self._number, number)
            else:
                result = context.to_decimal_context().divide(self._number, number)
        return self._with_result(result, "divide")

    def divide_and_remainder(self, divisor: DecimalLike) -> tuple[Money, Money]:
        """Returns the truncated integral quotient and the remainder (sign of the dividend).

        Raises:
            InvalidNumberError: If $divisor is NaN.
            DivisionByZeroError: If $divisor is zero.
            ArithmeticOverflowError: If the integral quotient exceeds the precision.
        """
        if is_infinite_and_not_nan(divisor):
            zero = self._with_result(ZERO, "divide_and_remainder")
            return zero, zero

        number = self._checked_divisor(divisor)
        with decimal_errors("divide_and_remainder", self._number):
            quotient, remainder = self._context.to_decimal_context().divmod(self._number, number)
        return self._with_result(quotient, "divide_and_remainder"), self._with_result(remainder, "divide_and_remainder")

    def divide_to_integral_value(self, divisor: DecimalLike) -> Money:
        if is_infinite_and_not_nan(divisor):
            return self._with_result(ZERO, "divide_to_integral_value")

        number = self._checked_divisor(divisor)
        with decimal_errors("divide_to_integral_value", self._number):
            result = self._context.to_decimal_context().divide_int(self._number, number)
        return self._with_result(result, "divide_to_integral_value")

    def remainder(self, divisor: DecimalLike) -> Money:
        if is_infinite_and_not_nan(divisor):
            return self._with_result(ZERO, "remainder")

        number = self._checked_divisor(divisor)
        with decimal_errors("remainder", self._number):
            result = self._context.to_decimal_context().remainder(self._number, number)
        return self._with_result(result, "remainder")

    def negate(self) -> Money:
        return self._create(self._number.copy_negate(), self._currency, self._context)

    def plus(self) -> Money:
        return self

    def abs(self) -> Money:
        if self.is_positive_or_zero():
            return self
        return self.negate()

    def scale_by_power_of_ten(self, power: int) -> Money:
        """Returns the amount multiplied by 10^$power (only the exponent changes)."""
        if power == 0:
            return self
        return self._with_result(self._number.scaleb(power, self._context.to_decimal_context()), "scale_by_power_of_ten")

    def strip_trailing_zeros(self) -> Money:
        if self._number.is_zero():
            return self._create(ZERO, self._currency, self._context)
        return self._create(strip_trailing_zeros(self._number), self._currency, self._context)

    # endregion

    # region Functional extension points

    def with_number(self, number: DecimalLike) -> Money:
        """Returns an amount with the same currency and context, but another value."""
        return Money(number, self._currency, self._context)

    def with_operator(self, operator: Callable[[Money], Money]) -> Money:
        """Applies $operator (e.g. a `RoundingOperator`) and returns its result.

        Raises:
            MissingArgumentError: If $operator is None.
            TypeError: If $operator does not return a `Money`.
        """
        if operator is None:
            raise MissingArgumentError("operator", "with_operator")
        result = operator(self)
        if not isinstance(result, Money):
            raise TypeError(f"Cannot call `with_operator` because $operator must return `Money`, but returned: {result!r}")
        return result

    def query(self, query: Callable[[Money], R]) -> R:
        if query is None:
            raise MissingArgumentError("query", "query")
        return query(self)

    # endregion

    # region Sign queries

    def is_zero(self) -> bool:
        return self._number.is_zero()

    def is_positive(self) -> bool:
        return self.signum() == 1

    def is_positive_or_zero(self) -> bool:
        return self.signum() >= 0

    def is_negative(self) -> bool:
        return self.signum() == -1

    def is_negative_or_zero(self) -> bool:
        return self.signum() <= 0

    def signum(self) -> int:
        if self._number.is_zero():
            return 0
        return -1 if self._number.is_signed() else 1

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
        """Numeric equality with an amount of any representation (same currency required)."""
        return compare_numbers(self, amount, "is_equal_to") == 0

    def is_not_equal_to(self, amount: MonetaryAmount) -> bool:
        return compare_numbers(self, amount, "is_not_equal_to") != 0

    def compare_to(self, amount: MonetaryAmount) -> int:
        """Total order: by currency code first, then by numeric value."""
        return compare_total(self, amount)

    # endregion

    # region Python operators

    def __add__(self, other: Money) -> Money:
        return self.add(other)

    def __sub__(self, other: Money) -> Money:
        return self.subtract(other)

    def __mul__(self, other: DecimalLike) -> Money:
        if isinstance(other, MonetaryAmount):
            return NotImplemented  # Money * Money doesn't make sense
        return self.multiply(other)

    def __rmul__(self, other: DecimalLike) -> Money:
        return self.__mul__(other)

    def __truediv__(self, other: DecimalLike | Money) -> Money | Decimal:
        """Divide Money by number (returns Money) or Money by Money (returns Decimal ratio)."""
        if isinstance(other, Money):
            require_same_currency(self._currency, other, "__truediv__")
            return self.divide(other.number).number
        return self.divide(other)

    def __floordiv__(self, other: DecimalLike) -> Money:
        return self.divide_to_integral_value(other)

    def __mod__(self, other: DecimalLike) -> Money:
        return self.remainder(other)

    def __divmod__(self, other: DecimalLike) -> tuple[Money, Money]:
        return self.divide_and_remainder(other)

    def __neg__(self) -> Money:
        return self.negate()

    def __pos__(self) -> Money:
        return self.plus()

    def __abs__(self) -> Money:
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
        """Same representation, same currency and numerically equal value (scale ignored)."""
        if not isinstance(other, Money):
            return False
        return self._currency == other._currency and self._number == other._number

    def __hash__(self) -> int:
        # Decimal hashes are scale-independent: hash(Decimal("5")) == hash(Decimal("5.000"))
        return hash((self._currency, self._number))

    # endregion

    # region String representations

    def __str__(self) -> str:
        """Return string like 'CHF 10.50'."""
        return f"{self._currency.code} {to_plain_string(self._number)}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({to_plain_string(self._number)}, {self._currency.code})"

    # endregion

    # region Internals

    def _with_result(self, number: Decimal, operation: str) -> Money:
        return self._create(fit_to_context(number, self._context, operation), self._currency, self._context)

    def _checked_divisor(self, divisor: DecimalLike) -> Decimal:
        number = as_decimal(divisor)
        if number.is_nan():
            raise InvalidNumberError(divisor, "NaN")
        if number.is_zero():
            raise DivisionByZeroError(self)
        return number

    # endregion


def _money_context(context: MonetaryContext | None) -> MonetaryContext:
    if context is None:
        return get_default_context(AmountKind.MONEY)
    if not isinstance(context, MonetaryContext):
        raise TypeError(f"$context must be a MonetaryContext instance, but provided value is: {context!r}")
    return context.with_kind(AmountKind.MONEY)
