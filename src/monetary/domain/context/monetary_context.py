from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Context, Inexact
from enum import Enum

from monetary.domain.context.math_context import MathContext
from monetary.domain.context.rounding_mode import RoundingMode
from monetary.errors import InvalidConfigurationError
from monetary.utils.decimal_tools import decimal_context


class AmountKind(Enum):
    """The amount representations a context can belong to.

    Members:
        MONEY: Arbitrary-precision decimal amount.
        FAST_MONEY: Fixed-point amount backed by a bounded 64-bit integer at scale 5.
        ROUNDED_MONEY: Decimal amount that rounds every magnitude-changing result.
    """

    MONEY = "MONEY"
    FAST_MONEY = "FAST_MONEY"
    ROUNDED_MONEY = "ROUNDED_MONEY"


@dataclass(frozen=True)
class MonetaryContext:
    """Numeric capabilities and limits of an amount.

    Attributes:
        precision: Maximal significant digits; 0 means unlimited.
        max_scale: Maximal digits right of the decimal point; -1 means unlimited.
        fixed_scale: If True, the scale never shrinks below $max_scale.
        rounding_mode: Rounding applied when a result must be shortened.
        amount_kind: The amount representation owning this context.
    """

    precision: int
    max_scale: int = -1
    fixed_scale: bool = False
    rounding_mode: RoundingMode = RoundingMode.HALF_EVEN
    amount_kind: AmountKind = AmountKind.MONEY

    def __post_init__(self) -> None:
        # Raise: precision must be >= 0 (0 = unlimited)
        if isinstance(self.precision, bool) or not isinstance(self.precision, int) or self.precision < 0:
            raise InvalidConfigurationError(f"Cannot create `MonetaryContext` because $precision must be an integer >= 0, but provided value is: {self.precision}")

        # Raise: max_scale must be >= -1 (-1 = unlimited)
        if isinstance(self.max_scale, bool) or not isinstance(self.max_scale, int) or self.max_scale < -1:
            raise InvalidConfigurationError(f"Cannot create `MonetaryContext` because $max_scale must be an integer >= -1, but provided value is: {self.max_scale}")

        # Raise: a fixed scale needs a bounded max_scale
        if self.fixed_scale and self.max_scale < 0:
            raise InvalidConfigurationError("Cannot create `MonetaryContext` because $fixed_scale requires $max_scale >= 0")

        if not isinstance(self.rounding_mode, RoundingMode):
            raise InvalidConfigurationError(f"Cannot create `MonetaryContext` because $rounding_mode must be a RoundingMode, but provided value is: {self.rounding_mode}")

        if not isinstance(self.amount_kind, AmountKind):
            raise InvalidConfigurationError(f"Cannot create `MonetaryContext` because $amount_kind must be an AmountKind, but provided value is: {self.amount_kind}")

    @classmethod
    def of(cls, math_context: MathContext, amount_kind: AmountKind = AmountKind.MONEY) -> MonetaryContext:
        """Creates a context with the precision and rounding of $math_context."""
        return cls(precision=math_context.precision, rounding_mode=math_context.rounding_mode, amount_kind=amount_kind)

    @property
    def is_unlimited_precision(self) -> bool:
        return self.precision == 0

    @property
    def is_unlimited_scale(self) -> bool:
        return self.max_scale == -1

    @property
    def math_context(self) -> MathContext:
        return MathContext(self.precision, self.rounding_mode)

    def with_kind(self, amount_kind: AmountKind) -> MonetaryContext:
        """Copy of this context owned by another amount kind."""
        if amount_kind == self.amount_kind:
            return self
        return replace(self, amount_kind=amount_kind)

    def to_decimal_context(self) -> Context:
        """A fresh `decimal.Context` performing arithmetic under this context.

        With RoundingMode.UNNECESSARY any inexact result raises `decimal.Inexact`.
        """
        context = decimal_context(self.precision, self.rounding_mode.decimal_rounding)
        if self.rounding_mode == RoundingMode.UNNECESSARY:
            context.traps[Inexact] = True
        return context

    def __str__(self) -> str:
        return f"MonetaryContext(kind={self.amount_kind.name}, precision={self.precision}, max_scale={self.max_scale}, fixed_scale={self.fixed_scale}, rounding_mode={self.rounding_mode.name})"


# Fixed-point representation: value x 10^5 held in a signed 64-bit integer (19 digits)
FAST_MONEY_SCALE = 5
FAST_MONEY_CONTEXT = MonetaryContext(
    precision=19,
    max_scale=FAST_MONEY_SCALE,
    fixed_scale=True,
    rounding_mode=RoundingMode.HALF_EVEN,
    amount_kind=AmountKind.FAST_MONEY,
)
