"""WCAG 2.1 contrast checks for generated palettes."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Any, Dict, List, Literal

from coloraide import Color

from .generator import ColorPalette
from .hsl import canon_hex

Level = Literal["AAA", "AA", "AA Large", "Fail"]

WHITE = "#ffffff"
BLACK = "#000000"


def contrast_ratio(a: str, b: str) -> float:
    return float(Color(canon_hex(a)).contrast(canon_hex(b), method="wcag21"))


def wcag_level(ratio: float) -> Level:
    if ratio >= 7.0:
        return "AAA"
    if ratio >= 4.5:
        return "AA"
    if ratio >= 3.0:
        return "AA Large"
    return "Fail"


def best_text_color(background: str) -> str:
    """Black or white, whichever reads better on ``background``."""
    return BLACK if contrast_ratio(background, BLACK) >= contrast_ratio(background, WHITE) else WHITE


@dataclass(frozen=True)
class ContrastCheck:
    foreground: str
    background: str
    ratio: float

    @property
    def level(self) -> Level:
        return wcag_level(self.ratio)

    @property
    def passed(self) -> bool:
        return self.level != "Fail"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "foreground": self.foreground,
            "background": self.background,
            "ratio": round(self.ratio, 2),
            "level": self.level,
            "passed": self.passed,
        }


def accessibility_report(palette: ColorPalette) -> Dict[str, Any]:
    """Every color against white and black, then every pair of colors."""
    checks: List[ContrastCheck] = []
    for c in palette.colors:
        checks.append(ContrastCheck(c, WHITE, contrast_ratio(c, WHITE)))
        checks.append(ContrastCheck(c, BLACK, contrast_ratio(c, BLACK)))
    for a, b in combinations(palette.colors, 2):
        checks.append(ContrastCheck(a, b, contrast_ratio(a, b)))

    passed = sum(1 for c in checks if c.passed)
    return {
        "paletteId": palette.id,
        "checks": [c.to_dict() for c in checks],
        "passed": passed,
        "total": len(checks),
        "passRate": round(100 * passed / len(checks)) if checks else 0,
        "textColors": {c: best_text_color(c) for c in palette.colors},
    }


__all__ = ["contrast_ratio", "wcag_level", "best_text_color", "ContrastCheck", "accessibility_report"]
