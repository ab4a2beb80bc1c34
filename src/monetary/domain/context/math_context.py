from __future__ import annotations

from dataclasses import dataclass
from decimal import Context

from monetary.domain.context.rounding_mode import RoundingMode
from monetary.errors import InvalidConfigurationError
from monetary.utils.decimal_tools import decimal_context


@dataclass(frozen=True)
class MathContext:
    """Precision (significant digits, 0 = unlimited) together with a rounding mode."""

    precision: int
    rounding_mode: RoundingMode = RoundingMode.HALF_UP

    def __post_init__(self) -> None:
        # Raise: precision must not be negative
        if isinstance(self.precision, bool) or not isinstance(self.precision, int) or self.precision < 0:
            raise InvalidConfigurationError(f"$precision must be an integer >= 0, but provided value is: {self.precision}")
        if not isinstance(self.rounding_mode, RoundingMode):
            raise InvalidConfigurationError(f"$rounding_mode must be a RoundingMode, but provided value is: {self.rounding_mode}")

    @property
    def is_unlimited(self) -> bool:
        return self.precision == 0

    def to_decimal_context(self) -> Context:
        """A fresh `decimal.Context` equivalent to this math context."""
        return decimal_context(self.precision, self.rounding_mode.decimal_rounding)

    def __str__(self) -> str:
        return f"precision={self.precision} rounding_mode={self.rounding_mode.name}"


DECIMAL32 = MathContext(7, RoundingMode.HALF_EVEN)
DECIMAL64 = MathContext(16, RoundingMode.HALF_EVEN)
DECIMAL128 = MathContext(34, RoundingMode.HALF_EVEN)
UNLIMITED = MathContext(0, RoundingMode.HALF_UP)

NAMED_MATH_CONTEXTS = {
    "DECIMAL32": DECIMAL32,
    "DECIMAL64": DECIMAL64,
    "DECIMAL128": DECIMAL128,
    "UNLIMITED": UNLIMITED,
}
