"""Similarity scores between colors and between palettes."""

from __future__ import annotations

import math
from typing import Any, Dict, Sequence

import numpy as np

from .generator import ColorPalette
from .hsl import Hex, hex_to_rgb8

MAX_DISTANCE = math.sqrt(3 * 255.0**2)


def color_similarity(a: Hex, b: Hex) -> float:
    """100 for identical colors, 0 for black vs white (Euclidean RGB)."""
    d = float(np.linalg.norm(np.subtract(hex_to_rgb8(a), hex_to_rgb8(b), dtype=float)))
    return max(0.0, 100.0 - d / MAX_DISTANCE * 100.0)


def colors_similarity(a: Sequence[Hex], b: Sequence[Hex]) -> float:
    """Mean similarity over every (a, b) color pair; 0 when either is empty."""
    if not a or not b:
        return 0.0
    x = np.array([hex_to_rgb8(c) for c in a], dtype=float)
    y = np.array([hex_to_rgb8(c) for c in b], dtype=float)
    dist = np.linalg.norm(x[:, None, :] - y[None, :, :], axis=-1)
    return float(np.maximum(0.0, 100.0 - dist / MAX_DISTANCE * 100.0).mean())


def palette_similarity(a: ColorPalette, b: ColorPalette) -> float:
    return colors_similarity(a.colors, b.colors)


def compare_palettes(a: ColorPalette, b: ColorPalette) -> Dict[str, Any]:
    shared = [c for c in dict.fromkeys(a.colors) if c in set(b.colors)]
    return {
        "first": a.id,
        "second": b.id,
        "similarity": round(palette_similarity(a, b), 1),
        "sharedColors": shared,
        "sameAlgorithm": a.algorithm == b.algorithm,
    }


__all__ = ["color_similarity", "colors_similarity", "palette_similarity", "compare_palettes", "MAX_DISTANCE"]
