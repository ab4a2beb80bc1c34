from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import TypeVar, TYPE_CHECKING

from monetary.domain.context.math_context import MathContext
from monetary.domain.context.rounding_mode import RoundingMode
from monetary.errors import InvalidConfigurationError, MissingArgumentError, PrecisionLossError
from monetary.utils.decimal_tools import divide_to_scale, exact_context, round_to_precision, set_scale

if TYPE_CHECKING:
    from monetary.domain.amount.protocol import MonetaryAmount
    from monetary.domain.currency.currency_unit import CurrencyUnit

A = TypeVar("A", bound="MonetaryAmount")


class RoundingKind(Enum):
    """The closed set of rounding strategies.

    Members:
        CURRENCY_DEFAULT: Round to the currency's default fraction digits.
        MATH_CONTEXT: Round to a number of significant digits.
        SCALE: Round to a fixed number of fraction digits.
        PRECISION_SCALE: Round to significant digits first, then force a fixed scale.
        CASH: Round to the currency's fraction digits, then to a multiple of the smallest
            cash unit (e.g., 0.05 CHF).
    """

    CURRENCY_DEFAULT = "CURRENCY_DEFAULT"
    MATH_CONTEXT = "MATH_CONTEXT"
    SCALE = "SCALE"
    PRECISION_SCALE = "PRECISION_SCALE"
    CASH = "CASH"


@dataclass(frozen=True)
class RoundingOperator:
    """Pure transform from an amount to a rounded amount of the same representation.

    Create instances with the `of_*` class methods; they validate the parameters of each
    variant. Operators are callables, so `amount.with_operator(operator)` and
    `operator(amount)` are equivalent.

    Example:
        ```python
        two_digits = RoundingOperator.of_scale(2, RoundingMode.HALF_EVEN)
        two_digits(Money.of("10.125", "EUR"))  # EUR 10.12
        ```
    """

    kind: RoundingKind
    rounding_mode: RoundingMode
    precision: int | None = None
    scale: int | None = None
    minimal_minors: int | None = None

    # region Factories

    @classmethod
    def of_currency_default(cls, rounding_mode: RoundingMode = RoundingMode.HALF_UP) -> RoundingOperator:
        """Round to the default fraction digits of the amount's currency."""
        _require_rounding_mode(rounding_mode)
        return cls(RoundingKind.CURRENCY_DEFAULT, rounding_mode)

    @classmethod
    def of_math_context(cls, math_context: MathContext) -> RoundingOperator:
        """Round to `math_context.precision` significant digits.

        Raises:
            InvalidConfigurationError: If precision is 0 or the rounding mode is UNNECESSARY.
        """
        if math_context is None:
            raise MissingArgumentError("math_context", "RoundingOperator.of_math_context")
        _reject_unnecessary(math_context.rounding_mode, "math context")
        # Raise: unlimited precision would never round
        if math_context.precision <= 0:
            raise InvalidConfigurationError(f"Cannot create math-context rounding because $precision must be > 0, but provided value is: {math_context.precision}")
        return cls(RoundingKind.MATH_CONTEXT, math_context.rounding_mode, precision=math_context.precision)

    @classmethod
    def of_scale(cls, scale: int, rounding_mode: RoundingMode) -> RoundingOperator:
        """Round to $scale fraction digits.

        Raises:
            InvalidConfigurationError: If the rounding mode is UNNECESSARY.
        """
        _reject_unnecessary(rounding_mode, "scale")
        return cls(RoundingKind.SCALE, rounding_mode, scale=_require_int(scale, "scale"))

    @classmethod
    def of_precision_scale(cls, precision: int, scale: int, rounding_mode: RoundingMode) -> RoundingOperator:
        """Round to $precision significant digits, then force $scale fraction digits.

        Raises:
            InvalidConfigurationError: If $precision <= 0 or the rounding mode is UNNECESSARY.
        """
        _reject_unnecessary(rounding_mode, "precision-scale")
        precision = _require_int(precision, "precision")
        if precision <= 0:
            raise InvalidConfigurationError(f"Cannot create precision-scale rounding because $precision must be > 0, but provided value is: {precision}")
        return cls(RoundingKind.PRECISION_SCALE, rounding_mode, precision=precision, scale=_require_int(scale, "scale"))

    @classmethod
    def of_cash(cls, minimal_minors: int, rounding_mode: RoundingMode = RoundingMode.HALF_UP) -> RoundingOperator:
        """Round to the currency's fraction digits and then to multiples of $minimal_minors.

        Raises:
            InvalidConfigurationError: If $minimal_minors < 1.
        """
        _require_rounding_mode(rounding_mode)
        minimal_minors = _require_int(minimal_minors, "minimal_minors")
        if minimal_minors < 1:
            raise InvalidConfigurationError(f"Cannot create cash rounding because $minimal_minors must be >= 1, but provided value is: {minimal_minors}")
        return cls(RoundingKind.CASH, rounding_mode, minimal_minors=minimal_minors)

    # endregion

    # region Application

    def apply(self, amount: A) -> A:
        """Round $amount; the result has the same representation and currency.

        Raises:
            MissingArgumentError: If $amount is None.
            PrecisionLossError: If the rounding mode is UNNECESSARY and rounding is required.
        """
        if amount is None:
            raise MissingArgumentError("amount", "RoundingOperator.apply")

        rounded = self.round_number(amount.number, amount.currency)
        if rounded is amount.number:
            return amount
        return amount.with_number(rounded)

    def __call__(self, amount: A) -> A:
        return self.apply(amount)

    def round_number(self, number: Decimal, currency: CurrencyUnit) -> Decimal:
        """Round a bare decimal as this operator would round an amount of $currency."""
        match self.kind:
            case RoundingKind.CURRENCY_DEFAULT:
                # Pseudo currencies (e.g. XXX) have no minor unit and are left untouched
                if currency.default_fraction_digits < 0:
                    return number
                return _round_to_scale(number, currency.default_fraction_digits, self.rounding_mode)
            case RoundingKind.MATH_CONTEXT:
                return round_to_precision(number, self.precision, self.rounding_mode.decimal_rounding)
            case RoundingKind.SCALE:
                return _round_to_scale(number, self.scale, self.rounding_mode)
            case RoundingKind.PRECISION_SCALE:
                by_precision = round_to_precision(number, self.precision, self.rounding_mode.decimal_rounding)
                return _round_to_scale(by_precision, self.scale, self.rounding_mode)
            case RoundingKind.CASH:
                return _round_to_cash(number, max(currency.default_fraction_digits, 0), self.minimal_minors, self.rounding_mode)
            case _:
                raise InvalidConfigurationError(f"Unsupported rounding kind: {self.kind}")

    # endregion

    def __str__(self) -> str:
        match self.kind:
            case RoundingKind.CURRENCY_DEFAULT:
                details = ""
            case RoundingKind.MATH_CONTEXT:
                details = f"precision={self.precision}, "
            case RoundingKind.SCALE:
                details = f"scale={self.scale}, "
            case RoundingKind.PRECISION_SCALE:
                details = f"precision={self.precision}, scale={self.scale}, "
            case _:
                details = f"minimal_minors={self.minimal_minors}, "
        return f"RoundingOperator({self.kind.name}, {details}rounding_mode={self.rounding_mode.name})"


def _round_to_scale(number: Decimal, scale: int, rounding_mode: RoundingMode) -> Decimal:
    rounded = set_scale(number, scale, rounding_mode.decimal_rounding)
    # Raise: UNNECESSARY only accepts values that are already exact at $scale
    if rounding_mode == RoundingMode.UNNECESSARY and rounded != number:
        raise PrecisionLossError(number, scale, f"rounding to scale {scale} is necessary")
    return rounded


def _round_to_cash(number: Decimal, scale: int, minimal_minors: int, rounding_mode: RoundingMode) -> Decimal:
    context = exact_context(rounding_mode.decimal_rounding)
    minors = _round_to_scale(number, scale, rounding_mode).scaleb(scale, context)
    steps = divide_to_scale(minors, Decimal(minimal_minors), 0, rounding_mode.decimal_rounding)
    cash_minors = context.multiply(steps, minimal_minors)
    # Raise: UNNECESSARY only accepts values that already are a multiple of the cash unit
    if rounding_mode == RoundingMode.UNNECESSARY and cash_minors != minors:
        raise PrecisionLossError(number, scale, f"not a multiple of {minimal_minors} minor units")
    return set_scale(cash_minors.scaleb(-scale, context), scale, rounding_mode.decimal_rounding)


def _reject_unnecessary(rounding_mode: RoundingMode, variant: str) -> None:
    _require_rounding_mode(rounding_mode)
    if rounding_mode == RoundingMode.UNNECESSARY:
        raise InvalidConfigurationError(f"Cannot create {variant} rounding with RoundingMode.UNNECESSARY")


def _require_rounding_mode(rounding_mode: RoundingMode) -> None:
    if rounding_mode is None:
        raise MissingArgumentError("rounding_mode")
    if not isinstance(rounding_mode, RoundingMode):
        raise InvalidConfigurationError(f"$rounding_mode must be a RoundingMode, but provided value is: {rounding_mode}")


def _require_int(value: int, name: str) -> int:
    if value is None:
        raise MissingArgumentError(name)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigurationError(f"${name} must be an integer, but provided value is: {value}")
    return value
