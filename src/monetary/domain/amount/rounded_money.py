from __future__ import annotations

from decimal import Context, Decimal
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
from monetary.domain.context.math_context import DECIMAL128
from monetary.domain.context.monetary_context import AmountKind, MonetaryContext
from monetary.domain.currency.currency_registry import resolve_currency
from monetary.domain.currency.currency_unit import CurrencyUnit
from monetary.domain.rounding.rounding_operator import RoundingOperator
from monetary.domain.rounding.rounding_registry import get_rounding
from monetary.errors import DivisionByZeroError, InvalidNumberError, MissingArgumentError
from monetary.platform.context_resolution import get_default_context
from monetary.utils.decimal_tools import (
    decimal_context,
    decimal_precision,
    decimal_scale,
    strip_trailing_zeros,
    to_plain_string,
    unsigned_zero,
    ZERO,
)
from monetary.utils.numeric_tools import as_decimal, check_finite, DecimalLike, is_infinite_and_not_nan

R = TypeVar("R")


class RoundedMoney:
    """Currency-tagged decimal amount that rounds every magnitude-changing result.

    Each amount holds a `RoundingOperator`; results of `multiply`, `divide`,
    `divide_and_remainder`, `negate`, `plus` and `pow` pass through it before they are
    returned. Without an explicit operator, amounts round to the default fraction digits
    of their currency, half-up.

    Factories do not round the input value. Use `amount.with_operator(amount.rounding)`
    to round a freshly created amount explicitly.

    Example:
        ```python
        price = RoundedMoney.of("10.00", "EUR")
        price.divide(3)  # EUR 3.33
        ```
    """

    __slots__ = ("_number", "_currency", "_context", "_rounding")

    def __init__(
        self,
        number: DecimalLike,
        currency: CurrencyUnit,
        context: MonetaryContext | None = None,
        rounding: RoundingOperator | None = None,
    ):
        """Initialize RoundedMoney with a validated (but not rounded) number.

        Args:
            number: Finite numeric value.
            currency: Currency unit of the amount.
            context: Context to use; None uses the default context of `RoundedMoney`.
            rounding: Operator applied to arithmetic results; None resolves the
                currency-default rounding.

        Raises:
            MissingArgumentError: If $number or $currency is None.
            InvalidNumberError: If $number is NaN, infinite or not numeric.
            ArithmeticOverflowError: If $number exceeds the precision of the context.
            PrecisionLossError: If $number exceeds the max scale of the context.
        """
        # Raise: currency must be an instance of CurrencyUnit
        if currency is None:
            raise MissingArgumentError("currency", "RoundedMoney")
        if not isinstance(currency, CurrencyUnit):
            raise TypeError(f"$currency must be a CurrencyUnit instance, but provided value is: {currency!r}")

        # Raise: rounding must be a RoundingOperator
        if rounding is not None and not isinstance(rounding, RoundingOperator):
            raise TypeError(f"$rounding must be a RoundingOperator instance, but provided value is: {rounding!r}")

        self._context = _rounded_money_context(context)
        self._currency = currency
        self._rounding = rounding if rounding is not None else get_rounding(currency)
        self._number = unsigned_zero(check_number_fits(check_finite(number), self._context))

    def _create(self, number: Decimal) -> RoundedMoney:
        # Internal constructor for values that already fit the context of $self
        instance = object.__new__(RoundedMoney)
        instance._number = unsigned_zero(number)
        instance._currency = self._currency
        instance._context = self._context
        instance._rounding = self._rounding
        return instance

    # region Factories

    @classmethod
    def of(
        cls,
        number: DecimalLike,
        currency: CurrencyUnit | str,
        context: MonetaryContext | None = None,
        rounding: RoundingOperator | None = None,
    ) -> RoundedMoney:
        """Creates an amount of $number in $currency (unit or ISO code)."""
        return cls(number, resolve_currency(currency), context, rounding)

    @classmethod
    def zero(cls, currency: CurrencyUnit | str, context: MonetaryContext | None = None) -> RoundedMoney:
        return cls(ZERO, resolve_currency(currency), context)

    @classmethod
    def of_minor(cls, currency: CurrencyUnit | str, minor_units: int, fraction_digits: int | None = None) -> RoundedMoney:
        unit = resolve_currency(currency)
        return cls(number_from_minor(unit, minor_units, fraction_digits), unit)

    @classmethod
    def from_amount(cls, amount: MonetaryAmount, context: MonetaryContext | None = None, rounding: RoundingOperator | None = None) -> RoundedMoney:
        """Creates a `RoundedMoney` with the value and currency of an amount of any representation.

        A `RoundedMoney` source keeps its rounding unless $rounding is given.
        """
        require_amount(amount, "RoundedMoney.from_amount")
        if isinstance(amount, RoundedMoney):
            if context is None and rounding is None:
                return amount
            rounding = rounding if rounding is not None else amount.rounding
        return cls(amount.number, amount.currency, context, rounding)

    # endregion

    # region Properties

    @property
    def number(self) -> Decimal:
        return self._number

    @property
    def number_stripped(self) -> Decimal:
        return strip_trailing_zeros(self._number)

    @property
    def currency(self) -> CurrencyUnit:
        return self._currency

    @property
    def context(self) -> MonetaryContext:
        return self._context

    @property
    def rounding(self) -> RoundingOperator:
        return self._rounding

    @property
    def scale(self) -> int:
        return decimal_scale(self._number)

    @property
    def precision(self) -> int:
        return decimal_precision(self._number)

    # endregion

    # region Arithmetic

    def add(self, amount: RoundedMoney) -> RoundedMoney:
        """Returns the sum.

        Operands sharing the rounding of $self are already rounded, so the sum is not
        rounded again; a sum with an operand rounded differently is.
        """
        require_amount_of_type(amount, RoundedMoney, "add")
        require_same_currency(self._currency, amount, "add")
        if amount.is_zero():
            return self

        with decimal_errors("add", self._number):
            result = self._context.to_decimal_context().add(self._number, amount.number)
        return self._sum_result(result, amount, "add")

    def subtract(self, amount: RoundedMoney) -> RoundedMoney:
        require_amount_of_type(amount, RoundedMoney, "subtract")
        require_same_currency(self._currency, amount, "subtract")
        if amount.is_zero():
            return self

        with decimal_errors("subtract", self._number):
            result = self._context.to_decimal_context().subtract(self._number, amount.number)
        return self._sum_result(result, amount, "subtract")

    def multiply(self, multiplicand: DecimalLike) -> RoundedMoney:
        factor = check_finite(multiplicand)
        if factor == 1:
            return self

        with decimal_errors("multiply", self._number):
            result = self._context.to_decimal_context().multiply(self._number, factor)
        return self._rounded_result(result, "multiply")

    def divide(self, divisor: DecimalLike) -> RoundedMoney:
        """Returns the rounded quotient; dividing by infinity yields zero.

        Raises:
            InvalidNumberError: If $divisor is NaN.
            DivisionByZeroError: If $divisor is zero.
        """
        if is_infinite_and_not_nan(divisor):
            return self._rounded_result(ZERO, "divide")

        number = self._checked_divisor(divisor)
        if number == 1:
            return self

        with decimal_errors("divide", self._number):
            result = self._working_context().divide(self._number, number)
        return self._rounded_result(result, "divide")

    def divide_and_remainder(self, divisor: DecimalLike) -> tuple[RoundedMoney, RoundedMoney]:
        if is_infinite_and_not_nan(divisor):
            zero = self._rounded_result(ZERO, "divide_and_remainder")
            return zero, zero

        number = self._checked_divisor(divisor)
        with decimal_errors("divide_and_remainder", self._number):
            quotient, remainder = self._context.to_decimal_context().divmod(self._number, number)
        return self._rounded_result(quotient, "divide_and_remainder"), self._rounded_result(remainder, "divide_and_remainder")

    def divide_to_integral_value(self, divisor: DecimalLike) -> RoundedMoney:
        if is_infinite_and_not_nan(divisor):
            return self._plain_result(ZERO, "divide_to_integral_value")

        number = self._checked_divisor(divisor)
        with decimal_errors("divide_to_integral_value", self._number):
            result = self._context.to_decimal_context().divide_int(self._number, number)
        return self._plain_result(result, "divide_to_integral_value")

    def remainder(self, divisor: DecimalLike) -> RoundedMoney:
        if is_infinite_and_not_nan(divisor):
            return self._plain_result(ZERO, "remainder")

        number = self._checked_divisor(divisor)
        with decimal_errors("remainder", self._number):
            result = self._context.to_decimal_context().remainder(self._number, number)
        return self._plain_result(result, "remainder")

    def pow(self, exponent: int) -> RoundedMoney:
        """Returns the amount raised to the integral $exponent, rounded."""
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            raise TypeError(f"Cannot call `pow` because $exponent must be an int, but provided value is: {exponent!r}")
        if exponent < 0 and self.is_zero():
            raise DivisionByZeroError(self)

        with decimal_errors("pow", self._number):
            result = self._working_context().power(self._number, exponent)
        return self._rounded_result(result, "pow")

    def negate(self) -> RoundedMoney:
        return self._rounded_result(self._number.copy_negate(), "negate")

    def plus(self) -> RoundedMoney:
        return self._rounded_result(self._number, "plus")

    def abs(self) -> RoundedMoney:
        if self.is_positive_or_zero():
            return self
        return self.negate()

    def scale_by_power_of_ten(self, power: int) -> RoundedMoney:
        if power == 0:
            return self
        return self._plain_result(self._number.scaleb(power, self._context.to_decimal_context()), "scale_by_power_of_ten")

    def strip_trailing_zeros(self) -> RoundedMoney:
        return self._create(strip_trailing_zeros(self._number))

    # endregion

    # region Functional extension points

    def with_number(self, number: DecimalLike) -> RoundedMoney:
        """Returns an amount with the same currency, context and rounding, but another value."""
        return RoundedMoney(number, self._currency, self._context, self._rounding)

    def with_rounding(self, rounding: RoundingOperator) -> RoundedMoney:
        """Returns the same (unrounded) value held with another rounding operator."""
        if rounding is None:
            raise MissingArgumentError("rounding", "with_rounding")
        return RoundedMoney(self._number, self._currency, self._context, rounding)

    def with_operator(self, operator: Callable[[RoundedMoney], RoundedMoney]) -> RoundedMoney:
        if operator is None:
            raise MissingArgumentError("operator", "with_operator")
        result = operator(self)
        if not isinstance(result, RoundedMoney):
            raise TypeError(f"Cannot call `with_operator` because $operator must return `RoundedMoney`, but returned: {result!r}")
        return result

    def query(self, query: Callable[[RoundedMoney], R]) -> R:
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
        return compare_numbers(self, amount, "is_equal_to") == 0

    def is_not_equal_to(self, amount: MonetaryAmount) -> bool:
        return compare_numbers(self, amount, "is_not_equal_to") != 0

    def compare_to(self, amount: MonetaryAmount) -> int:
        return compare_total(self, amount)

    # endregion

    # region Python operators

    def __add__(self, other: RoundedMoney) -> RoundedMoney:
        return self.add(other)

    def __sub__(self, other: RoundedMoney) -> RoundedMoney:
        return self.subtract(other)

    def __mul__(self, other: DecimalLike) -> RoundedMoney:
        if isinstance(other, MonetaryAmount):
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other: DecimalLike) -> RoundedMoney:
        return self.__mul__(other)

    def __truediv__(self, other: DecimalLike) -> RoundedMoney:
        if isinstance(other, MonetaryAmount):
            return NotImplemented
        return self.divide(other)

    def __floordiv__(self, other: DecimalLike) -> RoundedMoney:
        return self.divide_to_integral_value(other)

    def __mod__(self, other: DecimalLike) -> RoundedMoney:
        return self.remainder(other)

    def __divmod__(self, other: DecimalLike) -> tuple[RoundedMoney, RoundedMoney]:
        return self.divide_and_remainder(other)

    def __pow__(self, exponent: int) -> RoundedMoney:
        return self.pow(exponent)

    def __neg__(self) -> RoundedMoney:
        return self.negate()

    def __pos__(self) -> RoundedMoney:
        return self.plus()

    def __abs__(self) -> RoundedMoney:
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
        """Same representation, same currency and numerically equal value.

        The rounding operators of both amounts are not compared.
        """
        if not isinstance(other, RoundedMoney):
            return False
        return self._currency == other._currency and self._number == other._number

    def __hash__(self) -> int:
        return hash((self._currency, self._number))

    # endregion

    # region String representations

    def __str__(self) -> str:
        return f"{self._currency.code} {to_plain_string(self._number)}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({to_plain_string(self._number)}, {self._currency.code}, {self._rounding})"

    # endregion

    # region Internals

    def _working_context(self) -> Context:
        # Unlimited precision cannot hold non-terminating quotients; round them afterwards
        if self._context.is_unlimited_precision:
            return decimal_context(DECIMAL128.precision, self._context.rounding_mode.decimal_rounding)
        return self._context.to_decimal_context()

    def _plain_result(self, number: Decimal, operation: str) -> RoundedMoney:
        return self._create(fit_to_context(number, self._context, operation))

    def _rounded_result(self, number: Decimal, operation: str) -> RoundedMoney:
        return self._rounding.apply(self._plain_result(number, operation))

    def _sum_result(self, number: Decimal, amount: RoundedMoney, operation: str) -> RoundedMoney:
        if amount.rounding == self._rounding:
            return self._plain_result(number, operation)
        return self._rounded_result(number, operation)

    def _checked_divisor(self, divisor: DecimalLike) -> Decimal:
        number = as_decimal(divisor)
        if number.is_nan():
            raise InvalidNumberError(divisor, "NaN")
        if number.is_zero():
            raise DivisionByZeroError(self)
        return number

    # endregion


def _rounded_money_context(context: MonetaryContext | None) -> MonetaryContext:
    if context is None:
        return get_default_context(AmountKind.ROUNDED_MONEY)
    if not isinstance(context, MonetaryContext):
        raise TypeError(f"$context must be a MonetaryContext instance, but provided value is: {context!r}")
    return context.with_kind(AmountKind.ROUNDED_MONEY)
