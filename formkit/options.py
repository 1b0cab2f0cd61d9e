"""Option lists written as ``value(label),value2(label2)`` and the select widget."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

_OPTION_PATTERN = re.compile(r"^(.*?)\((.*)\)$", re.DOTALL)


@dataclass(frozen=True)
class Option:
    """One choice of a selector: the stored value and the text shown for it."""

    value: str
    label: str

    def __str__(self) -> str:
        if self.value == self.label:
            return self.value
        return f"{self.value}({self.label})"

    def matches(self, text: str) -> bool:
        """True if text names this option, in full form or by bare value."""
        return text == str(self) or text == self.value or text == f"{self.value}({self.label})"


def parse_options(text: str) -> list[Option]:
    """Parse a comma-separated option list.

    Each item is ``value(label)``; an item without parentheses stands for
    itself as both value and label. Empty items are skipped.
    """
    options: list[Option] = []
    for item in text.split(","):
        item = item.strip()
        if not item:
            continue
        match = _OPTION_PATTERN.match(item)
        if match is not None:
            value, label = match.group(1).strip(), match.group(2).strip()
            options.append(Option(value, label))
        else:
            options.append(Option(item, item))
    return options


def format_options(options: Iterable[Option]) -> str:
    """Write options back in the ``value(label),...`` form."""
    return ",".join(str(option) for option in options)


@dataclass
class SelectWidget:
    """A drop-down selector over a fixed option list."""

    options: str = ""
    default_value: str = ""
    multiple: bool = False
    searchable: bool = False

    @property
    def choices(self) -> list[Option]:
        return parse_options(self.options)

    def _is_choice(self, text: str) -> bool:
        return any(option.matches(text) for option in self.choices)

    def _check(self, text: str) -> None:
        if not self._is_choice(text):
            allowed = format_options(self.choices)
            raise ValueError(f"{text!r} is not one of the options: {allowed}")

    def default(self) -> str:
        """Return the default value; it must be one of the options if given."""
        if not self.default_value:
            return ""
        self._check(self.default_value)
        return self.default_value

    def validate(self, value: str) -> str:
        """Return value if every selected entry is an option, else raise ValueError.

        In multiple mode value is a comma-separated list of entries. An empty
        value is accepted as no selection.
        """
        if not value:
            return value
        entries = [part.strip() for part in value.split(",")] if self.multiple else [value]
        for entry in entries:
            self._check(entry)
        return value