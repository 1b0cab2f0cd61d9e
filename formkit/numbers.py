"""Numeric input widget, value checks and range strings such as ``1000,5000``."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


def _decimal(value: float) -> Decimal:
    return Decimal(str(value))


def _plain(value: float) -> str:
    if isinstance(value, int):
        return str(value)
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


@dataclass
class NumberWidget:
    """A numeric input with optional bounds, step, precision and unit.

    Bounds, step and precision left as None are not enforced.
    """

    min: float | None = None
    max: float | None = None
    step: float | None = None
    precision: int | None = None  # number of decimal places
    placeholder: str = ""
    unit: str = ""

    def __post_init__(self) -> None:
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"min {self.min} is greater than max {self.max}")
        if self.step is not None and self.step <= 0:
            raise ValueError("step must be positive")
        if self.precision is not None and self.precision < 0:
            raise ValueError("precision must not be negative")

    def validate(self, value: float) -> float:
        """Return value if it lies within bounds, on a step and within precision.

        Steps are counted from min, or from zero when min is not set.
        Raises ValueError otherwise, and TypeError for a non-number.
        """
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"{value!r} is not a number")
        if self.min is not None and value < self.min:
            raise ValueError(f"{value} is less than the minimum {self.min}")
        if self.max is not None and value > self.max:
            raise ValueError(f"{value} is greater than the maximum {self.max}")
        number = _decimal(value)
        if self.precision is not None:
            exponent = number.as_tuple().exponent
            places = -exponent if isinstance(exponent, int) and exponent < 0 else 0
            if places > self.precision:
                raise ValueError(f"{value} has more than {self.precision} decimal places")
        if self.step is not None:
            base = _decimal(self.min) if self.min is not None else Decimal(0)
            steps = (number - base) / _decimal(self.step)
            if steps != steps.to_integral_value():
                raise ValueError(f"{value} is not a multiple of the step {self.step}")
        return value

    def format(self, value: float) -> str:
        """Render value with the configured precision followed by the unit."""
        if self.precision is not None:
            text = f"{value:.{self.precision}f}"
        else:
            text = _plain(value)
        return f"{text}{self.unit}"


def parse_range(text: str, separator: str = ",") -> tuple[float, float]:
    """Split a range string into its lower and upper bound.

    Raises ValueError unless the text holds exactly two numbers with the
    lower one first.
    """
    if not separator:
        raise ValueError("separator must not be empty")
    parts = [part.strip() for part in text.split(separator)]
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"{text!r} is not two numbers separated by {separator!r}")
    low, high = (float(part) for part in parts)
    if low > high:
        raise ValueError(f"range {text!r} has its lower bound above its upper bound")
    return low, high