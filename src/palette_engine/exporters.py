"""Serialize palettes for design tools.

Each ``export_<fmt>`` takes a :class:`ColorPalette` and returns ``str`` (text
formats) or ``bytes`` (ASE). Exporters are registered with the ``exporter``
decorator so the store and the web layer can dispatch on a format key.
"""

from __future__ import annotations

import functools
import json
import struct
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple, Union

from .errors import InvalidParameter, NoPaletteToExport, SerializationFailure
from .generator import ColorPalette
from .hsl import RGB8, canon_hex, hex_to_rgb8

Payload = Union[str, bytes]
ExportFn = Callable[[ColorPalette], Payload]


@dataclass(frozen=True)
class ExportFormat:
    key: str
    extension: str
    mimetype: str
    fn: ExportFn


_REGISTRY: Dict[str, ExportFormat] = {}


def exporter(key: str, *, extension: str, mimetype: str):
    """Register an export function under ``key``; reject missing palettes."""

    def _decorator(fn: ExportFn) -> ExportFn:
        @functools.wraps(fn)
        def wrapper(palette: Optional[ColorPalette]) -> Payload:
            if palette is None:
                raise NoPaletteToExport("no palette to export")
            return fn(palette)

        _REGISTRY[key] = ExportFormat(key, extension, mimetype, wrapper)
        return wrapper

    return _decorator


def supported_formats() -> Tuple[str, ...]:
    return tuple(_REGISTRY)


def get_format(key: str) -> ExportFormat:
    try:
        return _REGISTRY[key.lower()]
    except KeyError:
        raise InvalidParameter(f"unknown export format '{key}'") from None


def export(palette: Optional[ColorPalette], fmt: str) -> Payload:
    return get_format(fmt).fn(palette)


def filename_for(fmt: str, stem: str = "color-palette") -> str:
    return stem + get_format(fmt).extension


# ---- helpers ----------------------------------------------------------------


def _canonical(color: str) -> str:
    try:
        return canon_hex(color)
    except (AttributeError, TypeError, ValueError) as exc:
        raise SerializationFailure(f"cannot serialize color {color!r}") from exc


def _channels(color: str) -> RGB8:
    try:
        return hex_to_rgb8(color)
    except (AttributeError, TypeError, ValueError) as exc:
        raise SerializationFailure(f"cannot serialize color {color!r}") from exc


def _rgb_floats(color: str) -> Tuple[float, float, float]:
    r, g, b = _channels(color)
    return r / 255.0, g / 255.0, b / 255.0


def _hex_colors(palette: ColorPalette) -> List[str]:
    # normalized lowercase '#rrggbb'; also validates every entry up front
    return [_canonical(c) for c in palette.colors]


def _header(palette: ColorPalette, comment: str) -> str:
    name = palette.name or "Color Palette"
    return f"{comment} {name} - Generated Color Palette ({palette.algorithm}, {palette.id})"


# ---- text formats -------------------------------------------------------------


@exporter("json", extension=".json", mimetype="application/json")
def export_json(palette: ColorPalette) -> str:
    data = palette.to_dict()
    data["colors"] = _hex_colors(palette)
    return json.dumps(data, indent=2)


@exporter("css", extension=".css", mimetype="text/css")
def export_css(palette: ColorPalette) -> str:
    colors = _hex_colors(palette)
    lines = [_header(palette, "/*") + " */", ":root {"]
    lines += [f"  --color-{i}: {c};" for i, c in enumerate(colors, 1)]
    lines += ["}", "", "/* Usage examples */"]
    lines += [f".palette-color-{i} {{ color: var(--color-{i}); }}" for i in range(1, len(colors) + 1)]
    return "\n".join(lines) + "\n"


@exporter("scss", extension=".scss", mimetype="text/x-scss")
def export_scss(palette: ColorPalette) -> str:
    colors = _hex_colors(palette)
    lines = [_header(palette, "//")]
    lines += [f"$color-{i}: {c};" for i, c in enumerate(colors, 1)]
    lines += ["", "$palette: ("]
    lines += [",\n".join(f"  {i}: $color-{i}" for i in range(1, len(colors) + 1))]
    lines += [
        ");",
        "",
        "// Usage examples",
        "@each $index, $color in $palette {",
        "  .palette-color-#{$index} {",
        "    color: $color;",
        "  }",
        "}",
    ]
    return "\n".join(lines) + "\n"


@exporter("less", extension=".less", mimetype="text/x-less")
def export_less(palette: ColorPalette) -> str:
    colors = _hex_colors(palette)
    lines = [_header(palette, "//")]
    lines += [f"@color-{i}: {c};" for i, c in enumerate(colors, 1)]
    lines += ["", "// Usage examples"]
    lines += [f".palette-color-{i} {{ color: @color-{i}; }}" for i in range(1, len(colors) + 1)]
    return "\n".join(lines) + "\n"


@exporter("tailwind", extension=".js", mimetype="text/javascript")
def export_tailwind(palette: ColorPalette) -> str:
    shades = {f"color-{i}": c for i, c in enumerate(_hex_colors(palette), 1)}
    config = {"theme": {"extend": {"colors": {"palette": shades}}}}
    return f"{_header(palette, '//')}\nmodule.exports = {json.dumps(config, indent=2)};\n"


@exporter("text", extension=".txt", mimetype="text/plain")
def export_text(palette: ColorPalette) -> str:
    return ", ".join(_hex_colors(palette))


# ---- structured / binary formats ----------------------------------------------


@exporter("sketch", extension=".sketchpalette", mimetype="application/json")
def export_sketch(palette: ColorPalette) -> str:
    colors = []
    for c in palette.colors:
        r, g, b = _rgb_floats(c)
        colors.append({"red": r, "green": g, "blue": b, "alpha": 1})
    data = {
        "compatibleVersion": "2.0",
        "pluginVersion": "2.0",
        "colors": colors,
        "gradients": [],
        "images": [],
    }
    return json.dumps(data, indent=2)


@exporter("figma", extension=".figma.json", mimetype="application/json")
def export_figma(palette: ColorPalette) -> str:
    name = palette.name or "Color Palette"
    colors = []
    for i, c in enumerate(_hex_colors(palette), 1):
        r, g, b = _rgb_floats(c)
        colors.append(
            {"name": f"Color {i}", "value": c, "type": "SOLID", "rgb": {"r": r, "g": g, "b": b}}
        )
    data = {
        "name": name,
        "description": f"Generated color palette: {name}",
        "algorithm": palette.algorithm,
        "colors": colors,
        "version": "1.0.0",
        "created": palette.created_at.isoformat(),
    }
    return json.dumps(data, indent=2)


# Adobe Swatch Exchange 1.0, all fields big-endian.
ASE_SIGNATURE = b"ASEF"
ASE_VERSION = (1, 0)
ASE_GROUP_START = 0xC001
ASE_GROUP_END = 0xC002
ASE_COLOR_ENTRY = 0x0001
ASE_COLOR_NORMAL = 2


def _ase_name(name: str) -> bytes:
    # length in UTF-16 code units, null terminator included
    encoded = (name + "\0").encode("utf-16-be")
    return struct.pack(">H", len(encoded) // 2) + encoded


def _ase_block(block_type: int, body: bytes) -> bytes:
    return struct.pack(">HI", block_type, len(body)) + body


@exporter("ase", extension=".ase", mimetype="application/octet-stream")
def export_ase(palette: ColorPalette) -> bytes:
    blocks = [_ase_block(ASE_GROUP_START, _ase_name(palette.name or "Color Palette"))]
    for i, c in enumerate(palette.colors, 1):
        r, g, b = _rgb_floats(c)
        body = _ase_name(f"Color {i}") + b"RGB " + struct.pack(">fffH", r, g, b, ASE_COLOR_NORMAL)
        blocks.append(_ase_block(ASE_COLOR_ENTRY, body))
    blocks.append(_ase_block(ASE_GROUP_END, b""))

    header = ASE_SIGNATURE + struct.pack(">HHI", *ASE_VERSION, len(blocks))
    return header + b"".join(blocks)


__all__ = [
    "ExportFormat",
    "Payload",
    "exporter",
    "supported_formats",
    "get_format",
    "export",
    "filename_for",
    "export_json",
    "export_css",
    "export_scss",
    "export_less",
    "export_tailwind",
    "export_text",
    "export_sketch",
    "export_figma",
    "export_ase",
]
