"""HSL color math shared by the generator and the exporters.

Inputs are parsed with ColorAide, so anything CSS understands (``#f06``,
``rgb(...)``, ``hsl(...)``, named colors) is accepted as a base color. All
palette derivation then happens in plain HSL (hue in degrees, saturation and
lightness in percent) and is quantized to 8-bit sRGB exactly once, when
ColorAide serializes the color to hex.
"""

from __future__ import annotations

import math
import string
from typing import Tuple

from coloraide import Color

from .errors import InvalidColorInput

Hex = str
HSL = Tuple[float, float, float]
RGB8 = Tuple[int, int, int]

FIT_HEX = {"method": "raytrace"}  # consistent gamut-fit for hex output


def canon_hex(s: str) -> Hex:
    """Normalize to '#rrggbb'; accept 3- or 6-digit hex only."""
    raw = (s or "").strip().lstrip("#")
    if len(raw) == 3 and all(c in string.hexdigits for c in raw):
        raw = "".join(ch * 2 for ch in raw)
    if len(raw) != 6 or not all(c in string.hexdigits for c in raw):
        raise ValueError("hex must be 3 or 6 hex digits")
    return "#" + raw.lower()


def wrap_hue(h: float) -> float:
    return float(h) % 360.0


def clamp_percent(x: float) -> float:
    return max(0.0, min(100.0, float(x)))


def hue_distance(h1: float, h2: float) -> float:
    """Shortest angular distance between two hues, in degrees."""
    d = (h1 - h2 + 180.0) % 360.0 - 180.0
    return abs(d)


def _srgb(value: object) -> Color:
    if not isinstance(value, str) or not value.strip():
        raise InvalidColorInput(f"invalid color: {value!r}")
    raw = value.strip()
    try:
        color = Color(raw)
    except ValueError as exc:
        # the web form sends bare 'rrggbb'; short bare forms read as words
        if raw.startswith("#") or len(raw) != 6:
            raise InvalidColorInput(f"invalid color: {value!r}") from exc
        try:
            color = Color(canon_hex(raw))
        except ValueError:
            raise InvalidColorInput(f"invalid color: {value!r}") from exc

    srgb = color.convert("srgb")
    if not srgb.in_gamut():
        srgb.fit(**FIT_HEX)
    return srgb.clip()


def parse_color(value: object) -> Tuple[float, float, float]:
    """Parse a color string into sRGB channels in [0, 1].

    Bare six-digit hex (``ff6b6b``) is accepted like the web form sends it;
    colors outside sRGB are gamut-fitted. Alpha is ignored.
    """
    r, g, b = (0.0 if math.isnan(c) else float(c) for c in _srgb(value).coords())
    return r, g, b


def rgb_to_hsl(r: float, g: float, b: float) -> HSL:
    """sRGB in [0, 1] -> (hue deg, saturation %, lightness %)."""
    h, s, l = Color("srgb", [r, g, b]).convert("hsl").coords(nans=False)
    return (wrap_hue(h), s * 100.0, l * 100.0)


def hsl_color(h: float, s: float, l: float) -> Color:
    """sRGB color for hue in degrees, saturation and lightness in percent."""
    return Color("hsl", [wrap_hue(h), clamp_percent(s) / 100.0, clamp_percent(l) / 100.0]).convert("srgb")


def hsl_to_hex(h: float, s: float, l: float) -> Hex:
    return hsl_color(h, s, l).to_string(hex=True, alpha=False, fit=FIT_HEX)


def hex_to_rgb8(hex_color: str) -> RGB8:
    r, g, b = (int(round(c * 255.0)) for c in Color(canon_hex(hex_color)).coords())
    return r, g, b


def hex_to_hsl(hex_color: str) -> HSL:
    h, s, l = Color(canon_hex(hex_color)).convert("hsl").coords(nans=False)
    return (wrap_hue(h), s * 100.0, l * 100.0)


def base_hsl(value: object) -> HSL:
    """HSL of a user-supplied base color (unquantized)."""
    return rgb_to_hsl(*parse_color(value))


def to_hex(value: object) -> Hex:
    """Canonical '#rrggbb' for any parseable color."""
    return _srgb(value).to_string(hex=True, alpha=False, fit=FIT_HEX)


__all__ = [
    "Hex",
    "HSL",
    "RGB8",
    "FIT_HEX",
    "canon_hex",
    "wrap_hue",
    "clamp_percent",
    "hue_distance",
    "parse_color",
    "rgb_to_hsl",
    "hsl_color",
    "hex_to_rgb8",
    "hsl_to_hex",
    "hex_to_hsl",
    "base_hsl",
    "to_hex",
]
