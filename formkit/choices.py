"""Fixed-option choice widgets: multi-choice checkboxes and single-choice radios."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from formkit.options import Option, format_options, parse_options


class Direction(str, Enum):
    """How the choices of a widget are laid out."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


def _lookup(choices: list[Option], text: str) -> Option:
    for option in choices:
        if option.matches(text):
            return option
    raise ValueError(f"{text!r} is not one of the options: {format_options(choices)}")


def _split(text: str) -> list[str]:
    return [part.strip() for part in text.split(",") if part.strip()]


@dataclass
class CheckboxWidget:
    """A group of checkboxes over a fixed option list; any number may be ticked."""

    options: str = ""
    default_value: str = ""
    multiple_limit: int = 0  # 0 means no limit
    direction: Direction | str = Direction.VERTICAL
    columns: int = 0
    show_select_all: bool = False
    disabled: bool = False

    def __post_init__(self) -> None:
        self.direction = Direction(self.direction)
        if self.multiple_limit < 0:
            raise ValueError("multiple_limit must not be negative")
        if self.columns < 0:
            raise ValueError("columns must not be negative")

    @property
    def choices(self) -> list[Option]:
        return parse_options(self.options)

    def _select(self, entries: Iterable[str]) -> list[str]:
        choices = self.choices
        selected: list[str] = []
        for entry in entries:
            value = _lookup(choices, entry).value
            if value not in selected:
                selected.append(value)
        if self.multiple_limit and len(selected) > self.multiple_limit:
            raise ValueError(
                f"{len(selected)} choices selected, at most {self.multiple_limit} allowed"
            )
        return selected

    def default_values(self) -> list[str]:
        """Return the values ticked by default; each must be one of the options."""
        return self._select(_split(self.default_value))

    def validate(self, values: Iterable[str]) -> list[str]:
        """Return the selected option values, without duplicates and in order.

        Raises ValueError if an entry is not an option or the selection
        exceeds multiple_limit.
        """
        return self._select(values)


@dataclass
class RadioWidget:
    """A group of radio buttons over a fixed option list; exactly one may be chosen."""

    options: str = ""
    default_value: str = ""
    direction: Direction | str = Direction.VERTICAL

    def __post_init__(self) -> None:
        self.direction = Direction(self.direction)

    @property
    def choices(self) -> list[Option]:
        return parse_options(self.options)

    def default(self) -> str:
        """Return the default value, or "" when none is set.

        Raises ValueError if the default is not one of the options.
        """
        if not self.default_value:
            return ""
        return _lookup(self.choices, self.default_value).value

    def validate(self, value: str) -> str:
        """Return the chosen option's value; "" stands for no choice.

        Raises ValueError if value is not one of the options.
        """
        if not value:
            return ""
        return _lookup(self.choices, value).value