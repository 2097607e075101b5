import json
import struct

import pytest

from palette_engine.errors import InvalidParameter, NoPaletteToExport, SerializationFailure
from palette_engine.exporters import (
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
    filename_for,
    get_format,
    supported_formats,
)
from palette_engine.generator import ColorConfig, ColorPalette, generate
from palette_engine.hsl import hex_to_rgb8

COLORS = ("#ff0000", "#00ff80", "#123456")


@pytest.fixture
def palette():
    return ColorPalette(colors=COLORS, algorithm="triadic", base_color="#ff0000", name="Bold Set")


def parse_ase(data: bytes):
    assert data[:4] == b"ASEF"
    major, minor, n_blocks = struct.unpack(">HHI", data[4:12])
    pos = 12
    blocks = []
    for _ in range(n_blocks):
        block_type, length = struct.unpack(">HI", data[pos : pos + 6])
        pos += 6
        blocks.append((block_type, data[pos : pos + length]))
        pos += length
    assert pos == len(data)
    return (major, minor), blocks


def read_ase_name(body: bytes):
    (n,) = struct.unpack(">H", body[:2])
    raw = body[2 : 2 + 2 * n]
    return raw.decode("utf-16-be").rstrip("\0"), body[2 + 2 * n :]


def test_json_roundtrip(palette):
    data = json.loads(export_json(palette))
    assert tuple(data["colors"]) == palette.colors
    assert data["id"] == palette.id
    assert data["algorithm"] == "triadic"
    assert data["createdAt"] == palette.created_at.isoformat()


def test_json_roundtrip_generated():
    p = generate(ColorConfig(algorithm="tetradic", count=9))
    assert json.loads(export_json(p))["colors"] == list(p.colors)


def test_css_variables(palette):
    css = export_css(palette)
    assert ":root {" in css
    assert "  --color-1: #ff0000;" in css
    assert "  --color-3: #123456;" in css
    assert ".palette-color-3 { color: var(--color-3); }" in css
    assert "--color-4" not in css


def test_scss_variables(palette):
    scss = export_scss(palette)
    assert "$color-2: #00ff80;" in scss
    assert "  3: $color-3" in scss
    assert "@each $index, $color in $palette {" in scss


def test_less_variables(palette):
    less = export_less(palette)
    assert "@color-1: #ff0000;" in less
    assert ".palette-color-2 { color: @color-2; }" in less


def test_tailwind_fragment(palette):
    js = export_tailwind(palette)
    assert js.startswith("//")
    body = js.split("module.exports = ", 1)[1].rstrip().rstrip(";")
    config = json.loads(body)
    assert config["theme"]["extend"]["colors"]["palette"] == {
        "color-1": "#ff0000",
        "color-2": "#00ff80",
        "color-3": "#123456",
    }


def test_text(palette):
    assert export_text(palette) == "#ff0000, #00ff80, #123456"


def test_sketch_full_precision(palette):
    data = json.loads(export_sketch(palette))
    assert data["compatibleVersion"] == "2.0"
    got = [
        (round(c["red"] * 255), round(c["green"] * 255), round(c["blue"] * 255)) for c in data["colors"]
    ]
    assert got == [hex_to_rgb8(c) for c in COLORS]
    assert all(c["alpha"] == 1 for c in data["colors"])


def test_figma_document(palette):
    data = json.loads(export_figma(palette))
    assert data["name"] == "Bold Set"
    assert [c["value"] for c in data["colors"]] == list(COLORS)
    assert data["colors"][0]["name"] == "Color 1"
    assert data["colors"][0]["type"] == "SOLID"
    rgb = data["colors"][2]["rgb"]
    assert (round(rgb["r"] * 255), round(rgb["g"] * 255), round(rgb["b"] * 255)) == (0x12, 0x34, 0x56)
    assert data["created"] == palette.created_at.isoformat()


def test_ase_structure(palette):
    version, blocks = parse_ase(export_ase(palette))
    assert version == (1, 0)
    assert [t for t, _ in blocks] == [0xC001, 1, 1, 1, 0xC002]

    group_name, _ = read_ase_name(blocks[0][1])
    assert group_name == "Bold Set"

    decoded = []
    for i, (_, body) in enumerate(blocks[1:-1], 1):
        name, rest = read_ase_name(body)
        assert name == f"Color {i}"
        assert rest[:4] == b"RGB "
        r, g, b, color_type = struct.unpack(">fffH", rest[4:])
        assert color_type == 2
        decoded.append((round(r * 255), round(g * 255), round(b * 255)))
    assert decoded == [hex_to_rgb8(c) for c in COLORS]
    assert blocks[-1][1] == b""


@pytest.mark.parametrize("fmt", supported_formats())
def test_missing_palette(fmt):
    with pytest.raises(NoPaletteToExport):
        export(None, fmt)


@pytest.mark.parametrize("fmt", supported_formats())
def test_bad_color_fails_whole_export(fmt):
    broken = ColorPalette(colors=("#ff0000", "#gg0000"), algorithm="triadic", base_color="#ff0000")
    with pytest.raises(SerializationFailure):
        export(broken, fmt)


def test_registry(palette):
    assert set(supported_formats()) == {
        "json", "css", "scss", "less", "tailwind", "text", "sketch", "figma", "ase"
    }
    assert export(palette, "CSS") == export_css(palette)
    assert isinstance(export(palette, "ase"), bytes)
    assert get_format("ase").mimetype == "application/octet-stream"
    assert filename_for("sketch") == "color-palette.sketchpalette"
    with pytest.raises(InvalidParameter):
        export(palette, "pdf")
