"""Color palette generation and design-tool export.

Re-exports the user-facing types and functions so callers can import from
``palette_engine`` directly.
"""

from .comparison import palette_similarity
from .errors import (
    InvalidColorInput,
    InvalidCount,
    InvalidParameter,
    NoPaletteToExport,
    PaletteError,
    SerializationFailure,
)
from .exporters import (
    export,
    export_ase,
    export_css,
    export_figma,
    export_json,
    export_less,
    export_scss,
    export_sketch,
    export_tailwind,
    export_text,
    supported_formats,
)
from .generator import ALGORITHMS, MAX_COUNT, ColorConfig, ColorPalette, generate
from .store import HISTORY_LIMIT, PaletteStore
from .vision import COLOR_BLINDNESS_TYPES, simulate_color_blindness

__all__ = [
    "ALGORITHMS",
    "MAX_COUNT",
    "HISTORY_LIMIT",
    "ColorConfig",
    "ColorPalette",
    "generate",
    "export",
    "export_json",
    "export_css",
    "export_scss",
    "export_less",
    "export_tailwind",
    "export_text",
    "export_sketch",
    "export_figma",
    "export_ase",
    "supported_formats",
    "palette_similarity",
    "simulate_color_blindness",
    "COLOR_BLINDNESS_TYPES",
    "PaletteStore",
    "PaletteError",
    "InvalidColorInput",
    "InvalidCount",
    "InvalidParameter",
    "NoPaletteToExport",
    "SerializationFailure",
]
