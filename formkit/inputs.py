"""Text input widget and its input modes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class InputMode(str, Enum):
    """How a text input is rendered."""

    LINE_TEXT = "line_text"
    TEXT_AREA = "text_area"
    PASSWORD = "password"


def parse_mode(text: str) -> InputMode:
    """Return the input mode named by text; an empty name means single-line text.

    Raises ValueError for an unknown mode.
    """
    name = text.strip()
    if not name:
        return InputMode.LINE_TEXT
    return InputMode(name)


@dataclass
class InputWidget:
    """A text input: single line, multi-line or password."""

    mode: InputMode | str = InputMode.LINE_TEXT
    placeholder: str = ""

    def __post_init__(self) -> None:
        self.mode = parse_mode(self.mode.value if isinstance(self.mode, InputMode) else self.mode)