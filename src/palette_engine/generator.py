"""Palette generation: color-theory algorithms over HSL."""

from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional, Sequence, Tuple, cast, get_args

import numpy as np

from .errors import InvalidCount, InvalidParameter
from .hsl import HSL, Hex, base_hsl, clamp_percent, hex_to_rgb8, hsl_to_hex, to_hex, wrap_hue

log = logging.getLogger(__name__)

Algorithm = Literal[
    "monochromatic",
    "analogous",
    "complementary",
    "triadic",
    "tetradic",
    "random",
    "harmony",
    "gradient",
]
ALGORITHMS: Tuple[str, ...] = get_args(Algorithm)

MAX_COUNT = 12

_ADJECTIVES = ("Vibrant", "Elegant", "Bold", "Soft", "Dynamic", "Harmonious", "Rich", "Subtle")
_NOUNS = ("Palette", "Scheme", "Collection", "Harmony", "Blend", "Mix", "Set", "Range")


@dataclass(frozen=True)
class ColorConfig:
    algorithm: Algorithm = "harmony"
    base_color: str = "#ff6b6b"
    count: int = 5
    saturation: float = 70
    lightness: float = 50
    variation: float = 20


DEFAULT_CONFIG = ColorConfig()


def _new_id() -> str:
    return uuid.uuid4().hex


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ColorPalette:
    """Generated palette. Immutable; ``colors`` order is significant."""

    colors: Tuple[Hex, ...]
    algorithm: str
    base_color: Hex
    name: str = ""
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "algorithm": self.algorithm,
            "baseColor": self.base_color,
            "colors": list(self.colors),
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ColorPalette":
        return cls(
            colors=tuple(data["colors"]),
            algorithm=str(data["algorithm"]),
            base_color=str(data.get("baseColor") or data["colors"][0]),
            name=str(data.get("name", "")),
            id=str(data["id"]),
            created_at=datetime.fromisoformat(data["createdAt"]),
        )


# ---- validation -------------------------------------------------------------


def validate_config(config: ColorConfig) -> None:
    """Raise a typed error for the first invalid field of ``config``."""
    if config.algorithm not in ALGORITHMS:
        raise InvalidParameter(f"unknown algorithm '{config.algorithm}'")
    count = config.count
    if isinstance(count, bool) or not isinstance(count, (int, np.integer)):
        raise InvalidCount(f"count must be an integer, got {count!r}")
    if not 1 <= count <= MAX_COUNT:
        raise InvalidCount(f"count must be between 1 and {MAX_COUNT}, got {count}")
    for name in ("saturation", "lightness", "variation"):
        v = getattr(config, name)
        if isinstance(v, bool) or not isinstance(v, (int, float, np.number)) or not 0 <= v <= 100:
            raise InvalidParameter(f"{name} must be a percentage in 0..100, got {v!r}")


# ---- algorithms ---------------------------------------------------------------

# Each algorithm maps (H0, config, rng) to `count` HSL triples.
AlgorithmFn = Callable[[float, ColorConfig, np.random.Generator], List[HSL]]


def _alternate(i: int) -> int:
    """0, +1, -1, +2, -2, ... for i = 0, 1, 2, 3, 4, ..."""
    mag = (i + 1) // 2
    return mag if i % 2 else -mag


def _hsl(h: float, s: float, l: float) -> HSL:
    return (wrap_hue(h), clamp_percent(s), clamp_percent(l))


def _cycle_anchors(h0: float, offsets: Sequence[float], config: ColorConfig) -> List[HSL]:
    """Cycle through anchor hues, perturbing lightness/saturation per repetition."""
    out: List[HSL] = []
    v = float(config.variation)
    for i in range(config.count):
        rep = i // len(offsets)
        a = _alternate(rep)
        out.append(
            _hsl(
                h0 + offsets[i % len(offsets)],
                config.saturation - abs(a) * v / 2.0,
                config.lightness + a * v,
            )
        )
    return out


def _analogous_offsets(config: ColorConfig) -> List[float]:
    step = 3.6 * float(config.variation) / config.count
    return [_alternate(i) * step for i in range(config.count)]


def _monochromatic(h0: float, config: ColorConfig, rng: np.random.Generator) -> List[HSL]:
    n = config.count
    step = float(config.variation) / (n - 1) if n > 1 else 0.0
    return [_hsl(h0, config.saturation, config.lightness + _alternate(i) * step) for i in range(n)]


def _analogous(h0: float, config: ColorConfig, rng: np.random.Generator) -> List[HSL]:
    return [_hsl(h0 + d, config.saturation, config.lightness) for d in _analogous_offsets(config)]


def _complementary(h0: float, config: ColorConfig, rng: np.random.Generator) -> List[HSL]:
    return _cycle_anchors(h0, (0.0, 180.0), config)


def _triadic(h0: float, config: ColorConfig, rng: np.random.Generator) -> List[HSL]:
    return _cycle_anchors(h0, (0.0, 120.0, 240.0), config)


def _tetradic(h0: float, config: ColorConfig, rng: np.random.Generator) -> List[HSL]:
    return _cycle_anchors(h0, (0.0, 90.0, 180.0, 270.0), config)


def _random(h0: float, config: ColorConfig, rng: np.random.Generator) -> List[HSL]:
    n = config.count
    half = float(config.variation) / 2.0
    s, l = float(config.saturation), float(config.lightness)
    hues = rng.uniform(0.0, 360.0, n)
    sats = rng.uniform(clamp_percent(s - half), clamp_percent(s + half), n)
    lights = rng.uniform(clamp_percent(l - half), clamp_percent(l + half), n)
    return [_hsl(float(h), float(si), float(li)) for h, si, li in zip(hues, sats, lights)]


def _harmony(h0: float, config: ColorConfig, rng: np.random.Generator) -> List[HSL]:
    n = config.count
    amp = float(config.variation) / 2.0
    return [
        _hsl(h0 + d, config.saturation, config.lightness + amp * math.sin(2.0 * math.pi * i / n))
        for i, d in enumerate(_analogous_offsets(config))
    ]


def _gradient(h0: float, config: ColorConfig, rng: np.random.Generator) -> List[HSL]:
    ts = np.linspace(0.0, 1.0, config.count) if config.count > 1 else np.zeros(1)
    return [_hsl(h0 + 180.0 * float(t), config.saturation, config.lightness) for t in ts]


GENERATORS: Dict[str, AlgorithmFn] = {
    "monochromatic": _monochromatic,
    "analogous": _analogous,
    "complementary": _complementary,
    "triadic": _triadic,
    "tetradic": _tetradic,
    "random": _random,
    "harmony": _harmony,
    "gradient": _gradient,
}


def palette_name(colors: Sequence[Hex]) -> str:
    """Stable, friendly name derived from the colors."""
    total = sum(sum(hex_to_rgb8(c)) for c in colors)
    return f"{_ADJECTIVES[total % len(_ADJECTIVES)]} {_NOUNS[(total // len(_ADJECTIVES)) % len(_NOUNS)]}"


def generate_colors(config: ColorConfig, rng: Optional[np.random.Generator] = None) -> List[Hex]:
    """Validate ``config`` and return ``config.count`` hex colors."""
    validate_config(config)
    h0, _, _ = base_hsl(config.base_color)
    if rng is None:
        rng = np.random.default_rng()
    return [hsl_to_hex(*hsl) for hsl in GENERATORS[config.algorithm](h0, config, rng)]


def generate(config: ColorConfig, rng: Optional[np.random.Generator] = None) -> ColorPalette:
    """Generate a palette for ``config``.

    Deterministic for every algorithm except ``random``, which draws from
    ``rng`` (a fresh ``numpy.random.default_rng()`` when omitted).

    Raises InvalidColorInput, InvalidCount or InvalidParameter; never returns
    a partial palette.
    """
    colors = generate_colors(config, rng)
    palette = ColorPalette(
        colors=tuple(colors),
        algorithm=config.algorithm,
        base_color=to_hex(config.base_color),
        name=palette_name(colors),
    )
    log.debug("generated %s palette %s: %s", palette.algorithm, palette.id, ", ".join(colors))
    return palette


def random_config(rng: Optional[np.random.Generator] = None) -> ColorConfig:
    """A random configuration, as the widget's "surprise me" button builds it."""
    if rng is None:
        rng = np.random.default_rng()
    base = hsl_to_hex(
        float(rng.integers(0, 360)),
        float(rng.integers(60, 100)),
        float(rng.integers(40, 80)),
    )
    return ColorConfig(
        algorithm=cast(Algorithm, ALGORITHMS[int(rng.integers(0, len(ALGORITHMS)))]),
        base_color=base,
        count=int(rng.integers(3, 9)),
        saturation=int(rng.integers(50, 90)),
        lightness=int(rng.integers(40, 80)),
        variation=int(rng.integers(10, 40)),
    )


__all__ = [
    "Algorithm",
    "ALGORITHMS",
    "MAX_COUNT",
    "ColorConfig",
    "ColorPalette",
    "DEFAULT_CONFIG",
    "GENERATORS",
    "validate_config",
    "generate_colors",
    "generate",
    "palette_name",
    "random_config",
]
