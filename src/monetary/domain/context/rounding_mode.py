from __future__ import annotations

from decimal import (
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
)
from enum import Enum


class RoundingMode(Enum):
    """Rounding behavior for discarded digits.

    Members:
        UP: Away from zero.
        DOWN: Towards zero (truncation).
        CEILING: Towards positive infinity.
        FLOOR: Towards negative infinity.
        HALF_UP: To nearest neighbor; ties away from zero.
        HALF_DOWN: To nearest neighbor; ties towards zero.
        HALF_EVEN: To nearest neighbor; ties to the even neighbor (banker's rounding).
        UNNECESSARY: Asserts that no rounding is needed; discarding a non-zero digit fails.
    """

    UP = "UP"
    DOWN = "DOWN"
    CEILING = "CEILING"
    FLOOR = "FLOOR"
    HALF_UP = "HALF_UP"
    HALF_DOWN = "HALF_DOWN"
    HALF_EVEN = "HALF_EVEN"
    UNNECESSARY = "UNNECESSARY"

    @property
    def decimal_rounding(self) -> str:
        """The matching rounding constant of the `decimal` module.

        UNNECESSARY has no counterpart; it maps to ROUND_HALF_EVEN and callers check
        exactness themselves.
        """
        return _DECIMAL_ROUNDINGS[self]

    @classmethod
    def from_str(cls, name: str) -> RoundingMode:
        """Parse a rounding mode name like "half_even" or "HALF-EVEN".

        Raises:
            ValueError: If $name is not a rounding mode.
        """
        normalized = str(name).strip().upper().replace("-", "_")
        if normalized.startswith("ROUND_"):
            normalized = normalized[len("ROUND_"):]
        try:
            return cls(normalized)
        except ValueError as e:
            raise ValueError(f"Unknown rounding mode $name '{name}'. Valid values: {[m.value for m in cls]}") from e


# Mapping onto the rounding constants of the `decimal` module
_DECIMAL_ROUNDINGS = {
    RoundingMode.UP: ROUND_UP,
    RoundingMode.DOWN: ROUND_DOWN,
    RoundingMode.CEILING: ROUND_CEILING,
    RoundingMode.FLOOR: ROUND_FLOOR,
    RoundingMode.HALF_UP: ROUND_HALF_UP,
    RoundingMode.HALF_DOWN: ROUND_HALF_DOWN,
    RoundingMode.HALF_EVEN: ROUND_HALF_EVEN,
    RoundingMode.UNNECESSARY: ROUND_HALF_EVEN,
}
