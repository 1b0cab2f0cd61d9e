"""Colour picker widget and validation of colour strings in several notations."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum


class ColorFormat(str, Enum):
    """Notations a colour value can be written in."""

    HEX = "hex"
    RGB = "rgb"
    RGBA = "rgba"
    HSL = "hsl"
    HSLA = "hsla"


COLOR_FORMAT_SAMPLES: dict[ColorFormat, str] = {
    ColorFormat.HEX: "#FFFFFF",
    ColorFormat.RGB: "rgb()",
    ColorFormat.RGBA: "rgba()",
    ColorFormat.HSL: "hsl()",
    ColorFormat.HSLA: "hsla()",
}

_NUM = r"\s*(\d+(?:\.\d+)?|\.\d+)\s*"
_PCT = r"\s*(\d+(?:\.\d+)?|\.\d+)%\s*"

_HEX = re.compile(r"^#(?:[0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$")
_RGB = re.compile(rf"^rgb\({_NUM},{_NUM},{_NUM}\)$")
_RGBA = re.compile(rf"^rgba\({_NUM},{_NUM},{_NUM},{_NUM}\)$")
_HSL = re.compile(rf"^hsl\({_NUM},{_PCT},{_PCT}\)$")
_HSLA = re.compile(rf"^hsla\({_NUM},{_PCT},{_PCT},{_NUM}\)$")


def _channels_ok(parts: tuple[str, ...]) -> bool:
    return all(float(p).is_integer() and 0 <= float(p) <= 255 for p in parts)


def _alpha_ok(text: str) -> bool:
    return 0 <= float(text) <= 1


def _hsl_ok(hue: str, saturation: str, lightness: str) -> bool:
    return (
        0 <= float(hue) <= 360
        and 0 <= float(saturation) <= 100
        and 0 <= float(lightness) <= 100
    )


def is_valid_color(value: str, color_format: ColorFormat | str) -> bool:
    """True if value is a well-formed colour in the given notation.

    Raises ValueError for an unknown notation.
    """
    kind = ColorFormat(color_format)
    text = value.strip()
    if kind is ColorFormat.HEX:
        return _HEX.match(text) is not None
    if kind is ColorFormat.RGB:
        match = _RGB.match(text)
        return match is not None and _channels_ok(match.groups())
    if kind is ColorFormat.RGBA:
        match = _RGBA.match(text)
        if match is None:
            return False
        *channels, alpha = match.groups()
        return _channels_ok(tuple(channels)) and _alpha_ok(alpha)
    if kind is ColorFormat.HSL:
        match = _HSL.match(text)
        return match is not None and _hsl_ok(*match.groups())
    match = _HSLA.match(text)
    if match is None:
        return False
    hue, saturation, lightness, alpha = match.groups()
    return _hsl_ok(hue, saturation, lightness) and _alpha_ok(alpha)


@dataclass
class ColorWidget:
    """A colour picker whose values are written in one notation."""

    format: ColorFormat | str = ColorFormat.HEX
    show_alpha: bool = False  # only meaningful for rgba and hsla
    default_value: str = ""
    predefine: str = ""  # comma-separated preset colours
    show_swatches: bool = False
    allow_empty: bool = False

    def __post_init__(self) -> None:
        self.format = ColorFormat(self.format)
        if self.default_value and not is_valid_color(self.default_value, self.format):
            raise ValueError(
                f"default value {self.default_value!r} is not a {self.format.value} colour"
            )

    def predefined(self) -> list[str]:
        """Return the preset colours; each must be in the widget's notation."""
        colours = [part.strip() for part in self.predefine.split(",") if part.strip()]
        for colour in colours:
            if not is_valid_color(colour, self.format):
                raise ValueError(f"preset {colour!r} is not a {self.format.value} colour")
        return colours

    def validate(self, value: str) -> str:
        """Return value if it is a colour in the widget's notation.

        An empty value is accepted only when allow_empty is set; anything
        else that is not a valid colour raises ValueError.
        """
        if not value:
            if self.allow_empty:
                return ""
            raise ValueError("a colour is required")
        if not is_valid_color(value, self.format):
            raise ValueError(f"{value!r} is not a {ColorFormat(self.format).value} colour")
        return value