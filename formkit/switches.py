"""Two-state switch widget with custom labels for each state."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_TRUE_LABEL = "开启"
DEFAULT_FALSE_LABEL = "关闭"

_BOOL_WORDS = {"true": True, "false": False}


def _to_bool(value: bool | str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return _BOOL_WORDS[value.strip().lower()]
        except KeyError:
            raise ValueError(f"{value!r} is neither 'true' nor 'false'") from None
    raise TypeError(f"{value!r} is not a boolean")


@dataclass
class SwitchWidget:
    """An on/off switch bound to a boolean value.

    Requests render it as a switch; responses show the label of the state.
    """

    true_label: str = DEFAULT_TRUE_LABEL
    false_label: str = DEFAULT_FALSE_LABEL
    default_value: bool | str = False

    def __post_init__(self) -> None:
        self.default_value = _to_bool(self.default_value)
        if not self.true_label:
            self.true_label = DEFAULT_TRUE_LABEL
        if not self.false_label:
            self.false_label = DEFAULT_FALSE_LABEL

    def label(self, value: bool | str) -> str:
        """Return the text shown for value.

        Accepts a bool or the words "true" and "false"; raises ValueError for
        other words and TypeError for other types.
        """
        return self.true_label if _to_bool(value) else self.false_label