from __future__ import annotations

import logging
from dataclasses import dataclass

from monetary.domain.amount.rounded_money import RoundedMoney
from monetary.domain.context.math_context import MathContext
from monetary.domain.context.monetary_context import MonetaryContext
from monetary.domain.context.rounding_mode import RoundingMode
from monetary.domain.currency.currency_registry import resolve_currency
from monetary.domain.currency.currency_unit import CurrencyUnit
from monetary.domain.rounding.rounding_operator import RoundingOperator
from monetary.errors import InvalidConfigurationError, MissingArgumentError
from monetary.utils.decimal_tools import ZERO
from monetary.utils.numeric_tools import DecimalLike

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoundedMoneyFactory:
    """Creates `RoundedMoney` amounts sharing one rounding operator (and optionally a context)."""

    rounding: RoundingOperator
    context: MonetaryContext | None = None

    def create(self, number: DecimalLike, currency: CurrencyUnit | str) -> RoundedMoney:
        """Creates an amount of $number in $currency; the value itself is not rounded."""
        return RoundedMoney(number, resolve_currency(currency), self.context, self.rounding)

    def zero(self, currency: CurrencyUnit | str) -> RoundedMoney:
        return self.create(ZERO, currency)


class RoundedMoneyFactoryBuilder:
    """
    For convenience to configure the rounding of a `RoundedMoneyFactory` step by step.

    Rules enforced by `build()`:
        - At least one of math context, rounding mode or rounding operator is required.
        - An explicit rounding operator cannot be combined with other settings.
        - A rounding mode alone needs a scale and/or a precision.

    Example with scale:
        factory = (RoundedMoneyFactoryBuilder()
                    .with_rounding_mode(RoundingMode.HALF_EVEN)
                    .with_scale(2)
                    .build())
        factory.create("10.125", "EUR").plus()  # EUR 10.12

    Example with precision and scale:
        factory = (RoundedMoneyFactoryBuilder()
                    .with_rounding_mode(RoundingMode.HALF_UP)
                    .with_precision(6).with_scale(2)
                    .build())
    """

    def __init__(self):
        self.__math_context: MathContext | None = None
        self.__rounding_mode: RoundingMode | None = None
        self.__rounding_operator: RoundingOperator | None = None
        self.__scale: int | None = None
        self.__precision: int | None = None
        self.__context: MonetaryContext | None = None

    def with_math_context(self, math_context: MathContext) -> RoundedMoneyFactoryBuilder:
        if math_context is None:
            raise MissingArgumentError("math_context", "with_math_context")
        self.__math_context = math_context
        return self

    def with_rounding_mode(self, rounding_mode: RoundingMode) -> RoundedMoneyFactoryBuilder:
        if rounding_mode is None:
            raise MissingArgumentError("rounding_mode", "with_rounding_mode")
        self.__rounding_mode = rounding_mode
        return self

    def with_rounding_operator(self, rounding_operator: RoundingOperator) -> RoundedMoneyFactoryBuilder:
        if rounding_operator is None:
            raise MissingArgumentError("rounding_operator", "with_rounding_operator")
        self.__rounding_operator = rounding_operator
        return self

    def with_scale(self, scale: int) -> RoundedMoneyFactoryBuilder:
        # Raise: scale must be a positive integer
        if isinstance(scale, bool) or not isinstance(scale, int) or scale <= 0:
            raise InvalidConfigurationError(f"Cannot call `with_scale` because $scale must be an integer > 0, but provided value is: {scale}")
        self.__scale = scale
        return self

    def with_precision(self, precision: int) -> RoundedMoneyFactoryBuilder:
        # Raise: precision must be a positive integer
        if isinstance(precision, bool) or not isinstance(precision, int) or precision <= 0:
            raise InvalidConfigurationError(f"Cannot call `with_precision` because $precision must be an integer > 0, but provided value is: {precision}")
        self.__precision = precision
        return self

    def with_context(self, context: MonetaryContext) -> RoundedMoneyFactoryBuilder:
        """Sets the context of created amounts (default: the `RoundedMoney` default context)."""
        if context is None:
            raise MissingArgumentError("context", "with_context")
        self.__context = context
        return self

    def build(self) -> RoundedMoneyFactory:
        """Creates the factory.

        Raises:
            InvalidConfigurationError: If the collected settings do not define a rounding.
        """
        rounding = self.__build_rounding()
        logger.debug(f"Built RoundedMoneyFactory with {rounding}")
        return RoundedMoneyFactory(rounding, self.__context)

    def __build_rounding(self) -> RoundingOperator:
        if self.__rounding_operator is not None:
            # Raise: an explicit operator already defines the complete rounding
            if self.__math_context is not None or self.__rounding_mode is not None or self.__scale is not None or self.__precision is not None:
                raise InvalidConfigurationError("Cannot call `build` because a rounding operator cannot be combined with math context, rounding mode, scale or precision")
            return self.__rounding_operator

        if self.__math_context is not None:
            # Raise: math context already defines precision and rounding mode
            if self.__rounding_mode is not None or self.__precision is not None:
                raise InvalidConfigurationError("Cannot call `build` because a math context cannot be combined with rounding mode or precision")
            if self.__scale is not None:
                return RoundingOperator.of_precision_scale(self.__math_context.precision, self.__scale, self.__math_context.rounding_mode)
            return RoundingOperator.of_math_context(self.__math_context)

        if self.__rounding_mode is not None:
            if self.__scale is not None and self.__precision is not None:
                return RoundingOperator.of_precision_scale(self.__precision, self.__scale, self.__rounding_mode)
            if self.__scale is not None:
                return RoundingOperator.of_scale(self.__scale, self.__rounding_mode)
            if self.__precision is not None:
                return RoundingOperator.of_math_context(MathContext(self.__precision, self.__rounding_mode))
            raise InvalidConfigurationError("Cannot call `build` because a rounding mode needs a scale or a precision")

        raise InvalidConfigurationError("Cannot call `build` because none of math context, rounding mode or rounding operator was provided")

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(math_context={self.__math_context}, rounding_mode={self.__rounding_mode}, scale={self.__scale}, precision={self.__precision})"
