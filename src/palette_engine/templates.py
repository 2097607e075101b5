"""Curated palette templates shown next to the generator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Optional, Tuple

from .generator import ColorPalette
from .hsl import canon_hex

Category = Literal["material", "flat", "gradient", "monochrome", "vibrant", "pastel"]


@dataclass(frozen=True)
class PaletteTemplate:
    id: str
    name: str
    description: str
    category: Category
    colors: Tuple[str, ...]
    tags: Tuple[str, ...]

    def matches(self, query: str) -> bool:
        q = query.lower()
        return (
            q in self.name.lower()
            or q in self.description.lower()
            or any(q in tag.lower() for tag in self.tags)
        )

    def to_palette(self) -> ColorPalette:
        """A fresh palette (new id/timestamp) holding this template's colors."""
        colors = tuple(canon_hex(c) for c in self.colors)
        return ColorPalette(colors=colors, algorithm="template", base_color=colors[0], name=self.name)


def _t(id, name, description, category, colors, tags) -> PaletteTemplate:
    return PaletteTemplate(id, name, description, category, tuple(colors), tuple(tags))


PALETTE_TEMPLATES: Tuple[PaletteTemplate, ...] = (
    # Material Design
    _t("material-blue", "Material Blue", "Classic Material Design blue", "material",
       ["#2196F3", "#1976D2", "#0D47A1", "#BBDEFB", "#E3F2FD"], ["material", "blue", "google", "android"]),
    _t("material-green", "Material Green", "Green palette for success states", "material",
       ["#4CAF50", "#388E3C", "#1B5E20", "#C8E6C9", "#E8F5E8"], ["material", "green", "success", "nature"]),
    _t("material-red", "Material Red", "Red palette for errors and warnings", "material",
       ["#F44336", "#D32F2F", "#B71C1C", "#FFCDD2", "#FFEBEE"], ["material", "red", "error", "warning"]),
    _t("material-orange", "Material Orange", "Orange palette for accents", "material",
       ["#FF9800", "#F57C00", "#E65100", "#FFE0B2", "#FFF3E0"], ["material", "orange", "accent", "warm"]),
    # Flat
    _t("flat-turquoise", "Flat Turquoise", "Modern turquoise palette", "flat",
       ["#1ABC9C", "#16A085", "#2ECC71", "#27AE60", "#58D68D"], ["flat", "turquoise", "modern", "fresh"]),
    _t("flat-purple", "Flat Purple", "Elegant purple palette", "flat",
       ["#9B59B6", "#8E44AD", "#663399", "#BB8FCE", "#E8DAEF"], ["flat", "purple", "elegant", "creative"]),
    _t("flat-sunflower", "Flat Sunflower", "Bright yellow palette", "flat",
       ["#F1C40F", "#F39C12", "#E67E22", "#F7DC6F", "#FCF3CF"], ["flat", "yellow", "bright", "energy"]),
    # Gradients
    _t("sunset-gradient", "Sunset Gradient", "Warm sunset gradient", "gradient",
       ["#FF6B6B", "#FF8E53", "#FF6B9D", "#C44569", "#F8B500"], ["gradient", "sunset", "warm", "romantic"]),
    _t("ocean-gradient", "Ocean Gradient", "Cool ocean gradient", "gradient",
       ["#667eea", "#764ba2", "#f093fb", "#f5576c", "#4facfe"], ["gradient", "ocean", "cool", "calm"]),
    _t("forest-gradient", "Forest Gradient", "Natural forest gradient", "gradient",
       ["#134E5E", "#71B280", "#A8E6CF", "#88D8A3", "#2D5016"], ["gradient", "forest", "nature", "organic"]),
    # Monochrome
    _t("grayscale", "Grayscale", "Classic gray palette", "monochrome",
       ["#2C3E50", "#34495E", "#7F8C8D", "#BDC3C7", "#ECF0F1"], ["monochrome", "gray", "neutral", "professional"]),
    _t("sepia", "Sepia", "Vintage sepia palette", "monochrome",
       ["#8B4513", "#A0522D", "#CD853F", "#DEB887", "#F5DEB3"], ["monochrome", "sepia", "vintage", "warm"]),
    # Vibrant
    _t("neon-vibes", "Neon Vibes", "Bright neon palette", "vibrant",
       ["#FF0080", "#00FF80", "#8000FF", "#FF8000", "#0080FF"], ["vibrant", "neon", "bright", "cyberpunk"]),
    _t("rainbow", "Rainbow", "Classic rainbow palette", "vibrant",
       ["#FF0000", "#FF8000", "#FFFF00", "#00FF00", "#0080FF"], ["vibrant", "rainbow", "colorful", "fun"]),
    # Pastel
    _t("soft-pastels", "Soft Pastels", "Soft pastel tones", "pastel",
       ["#FFB3BA", "#FFDFBA", "#FFFFBA", "#BAFFC9", "#BAE1FF"], ["pastel", "soft", "gentle", "calm"]),
    _t("lavender-dreams", "Lavender Dreams", "Gentle lavender shades", "pastel",
       ["#E6E6FA", "#D8BFD8", "#DDA0DD", "#DA70D6", "#BA55D3"], ["pastel", "lavender", "dreamy", "feminine"]),
    # Professional
    _t("corporate-blue", "Corporate Blue", "Professional blue palette", "material",
       ["#1E3A8A", "#3B82F6", "#60A5FA", "#93C5FD", "#DBEAFE"], ["corporate", "blue", "professional", "business"]),
    _t("tech-dark", "Tech Dark", "Dark technology palette", "monochrome",
       ["#0F172A", "#1E293B", "#334155", "#64748B", "#94A3B8"], ["tech", "dark", "modern", "developer"]),
    # Nature
    _t("earth-tones", "Earth Tones", "Natural earth tones", "material",
       ["#8B4513", "#A0522D", "#D2691E", "#CD853F", "#DEB887"], ["earth", "nature", "organic", "warm"]),
    _t("forest-greens", "Forest Greens", "Forest green shades", "material",
       ["#2D5016", "#3E7B3E", "#4A7C59", "#6B8E6B", "#8FBC8F"], ["forest", "green", "nature", "fresh"]),
)


def get_templates_by_category(category: str) -> List[PaletteTemplate]:
    return [t for t in PALETTE_TEMPLATES if t.category == category]


def get_template(template_id: str) -> Optional[PaletteTemplate]:
    return next((t for t in PALETTE_TEMPLATES if t.id == template_id), None)


def search_templates(query: str) -> List[PaletteTemplate]:
    return [t for t in PALETTE_TEMPLATES if t.matches(query)]


__all__ = [
    "PaletteTemplate",
    "PALETTE_TEMPLATES",
    "get_templates_by_category",
    "get_template",
    "search_templates",
]
