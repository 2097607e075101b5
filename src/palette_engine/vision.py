"""Color-vision deficiency previews.

Each deficiency is a 3x3 matrix applied to 8-bit sRGB channels. These are the
quick linear approximations the widget shows, not a physiological model.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np
from coloraide import Color

from .errors import InvalidParameter
from .generator import ColorPalette
from .hsl import FIT_HEX, Hex, hex_to_rgb8

Matrix = Tuple[Tuple[float, float, float], Tuple[float, float, float], Tuple[float, float, float]]


@dataclass(frozen=True)
class ColorBlindnessType:
    id: str
    name: str
    description: str
    prevalence: str
    matrix: Matrix


COLOR_BLINDNESS_TYPES: Tuple[ColorBlindnessType, ...] = (
    ColorBlindnessType(
        "protanopia", "Protanopia", "Unable to perceive red", "1% of men",
        ((0.567, 0.433, 0.0), (0.558, 0.442, 0.0), (0.0, 0.242, 0.758)),
    ),
    ColorBlindnessType(
        "deuteranopia", "Deuteranopia", "Unable to perceive green", "1% of men",
        ((0.625, 0.375, 0.0), (0.7, 0.3, 0.0), (0.0, 0.3, 0.7)),
    ),
    ColorBlindnessType(
        "tritanopia", "Tritanopia", "Unable to perceive blue", "0.003% of people",
        ((0.95, 0.05, 0.0), (0.0, 0.433, 0.567), (0.0, 0.475, 0.525)),
    ),
    ColorBlindnessType(
        "protanomaly", "Protanomaly", "Weak perception of red", "1% of men",
        ((0.817, 0.183, 0.0), (0.333, 0.667, 0.0), (0.0, 0.125, 0.875)),
    ),
    ColorBlindnessType(
        "deuteranomaly", "Deuteranomaly", "Weak perception of green", "5% of men",
        ((0.8, 0.2, 0.0), (0.258, 0.742, 0.0), (0.0, 0.142, 0.858)),
    ),
    ColorBlindnessType(
        "tritanomaly", "Tritanomaly", "Weak perception of blue", "0.01% of people",
        ((0.967, 0.033, 0.0), (0.0, 0.733, 0.267), (0.0, 0.183, 0.817)),
    ),
    ColorBlindnessType(
        "achromatopsia", "Achromatopsia", "Complete color blindness", "0.003% of people",
        ((0.299, 0.587, 0.114), (0.299, 0.587, 0.114), (0.299, 0.587, 0.114)),
    ),
)
_BY_ID: Dict[str, ColorBlindnessType] = {t.id: t for t in COLOR_BLINDNESS_TYPES}


def get_color_blindness_type(kind: str) -> Optional[ColorBlindnessType]:
    return _BY_ID.get((kind or "").strip().lower())


def _matrix(kind: str) -> np.ndarray:
    found = get_color_blindness_type(kind)
    if found is None:
        raise InvalidParameter(f"unknown color blindness type '{kind}'; expected one of {sorted(_BY_ID)}")
    return np.asarray(found.matrix, dtype=float)


def simulate_colors(colors: List[Hex], kind: str) -> List[Hex]:
    """How ``colors`` look under deficiency ``kind``; order is preserved."""
    m = _matrix(kind)
    if not colors:
        return []
    rgb = np.array([hex_to_rgb8(c) for c in colors], dtype=float)
    out = np.clip(rgb @ m.T, 0.0, 255.0) / 255.0
    return [Color("srgb", row.tolist()).to_string(hex=True, fit=FIT_HEX) for row in out]


def simulate_color_blindness(palette: ColorPalette, kind: str) -> ColorPalette:
    """Same palette (same id) with every color run through ``kind``'s matrix."""
    return ColorPalette(
        colors=tuple(simulate_colors(list(palette.colors), kind)),
        algorithm=palette.algorithm,
        base_color=palette.base_color,
        name=palette.name,
        id=palette.id,
        created_at=palette.created_at,
    )


__all__ = [
    "ColorBlindnessType",
    "COLOR_BLINDNESS_TYPES",
    "get_color_blindness_type",
    "simulate_colors",
    "simulate_color_blindness",
]
