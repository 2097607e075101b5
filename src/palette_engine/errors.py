"""Typed failures raised by the palette engine.

Every error is a ``ValueError`` so callers that only care about "bad input"
can catch the builtin, while the store and the web layer dispatch on ``kind``.
"""

from __future__ import annotations


class PaletteError(ValueError):
    kind = "palette_error"


class InvalidColorInput(PaletteError):
    kind = "invalid_color"


class InvalidCount(PaletteError):
    kind = "invalid_count"


class InvalidParameter(PaletteError):
    kind = "invalid_parameter"


class NoPaletteToExport(PaletteError):
    kind = "no_palette"


class SerializationFailure(PaletteError):
    kind = "serialization_failure"


__all__ = [
    "PaletteError",
    "InvalidColorInput",
    "InvalidCount",
    "InvalidParameter",
    "NoPaletteToExport",
    "SerializationFailure",
]
