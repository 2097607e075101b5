"""State holder for the palette widget.

``PaletteStore`` owns the current configuration, the current palette, a
bounded history and the persisted favorites. It calls the pure engine and
turns engine failures into a user-facing ``error`` message instead of letting
them escape. Views subscribe with a callback and re-read the store when
notified.
"""

from __future__ import annotations

import json
import logging
from collections import deque
from dataclasses import replace
from typing import Any, Callable, Deque, Dict, List, Optional

import numpy as np

from .errors import NoPaletteToExport, PaletteError
from .exporters import Payload, export
from .generator import DEFAULT_CONFIG, ColorConfig, ColorPalette, generate, random_config
from .storage import KeyValueStorage, MemoryStorage

log = logging.getLogger(__name__)

HISTORY_LIMIT = 20
FAVORITES_KEY = "color-favorites"

ERROR_MESSAGES: Dict[str, str] = {
    "invalid_color": "The base color is not a valid color",
    "invalid_count": "The number of colors is out of range",
    "invalid_parameter": "Invalid palette settings",
    "no_palette": "There is no palette to export",
    "serialization_failure": "The palette could not be exported in this format",
}
GENERIC_ERROR = "Something went wrong while building the palette"

Listener = Callable[["PaletteStore"], None]


class PaletteStore:
    def __init__(
        self,
        storage: Optional[KeyValueStorage] = None,
        *,
        config: ColorConfig = DEFAULT_CONFIG,
        rng: Optional[np.random.Generator] = None,
        history_limit: int = HISTORY_LIMIT,
    ) -> None:
        self.storage: KeyValueStorage = storage if storage is not None else MemoryStorage()
        self.config = config
        self.rng = rng
        self.current_palette: Optional[ColorPalette] = None
        self.error: Optional[str] = None
        self.error_kind: Optional[str] = None
        self._history: Deque[ColorPalette] = deque(maxlen=history_limit)
        self._favorites: Dict[str, ColorPalette] = {}
        self._listeners: List[Listener] = []
        self._load_favorites()

    # ---- observers ----

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ---- config ----

    def set_config(self, **changes: Any) -> ColorConfig:
        self.config = replace(self.config, **changes)
        self._notify()
        return self.config

    # ---- generation ----

    def generate_palette(self) -> Optional[ColorPalette]:
        self.error = None
        self.error_kind = None
        try:
            palette = generate(self.config, self.rng)
        except PaletteError as exc:
            self._fail(exc)
            return None
        except Exception:
            log.exception("Palette generation failed")
            self.error = GENERIC_ERROR
            self.error_kind = "unexpected"
            self._notify()
            return None

        self.current_palette = palette
        self._history.appendleft(palette)
        self._notify()
        return palette

    def generate_random_palette(self) -> Optional[ColorPalette]:
        self.config = random_config(self.rng)
        return self.generate_palette()

    def set_current_palette(self, palette: Optional[ColorPalette]) -> None:
        self.current_palette = palette
        self._notify()

    def clear_current_palette(self) -> None:
        self.current_palette = None
        self.error = None
        self.error_kind = None
        self._notify()

    # ---- history ----

    @property
    def history(self) -> List[ColorPalette]:
        """Most recent first."""
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()
        self._notify()

    # ---- favorites ----

    @property
    def favorites(self) -> List[ColorPalette]:
        return list(self._favorites.values())

    def is_favorite(self, palette_id: str) -> bool:
        return palette_id in self._favorites

    def add_to_favorites(self, palette: ColorPalette) -> None:
        if palette.id in self._favorites:
            return
        self._favorites[palette.id] = palette
        self._save_favorites()
        self._notify()

    def remove_from_favorites(self, palette_id: str) -> None:
        if self._favorites.pop(palette_id, None) is not None:
            self._save_favorites()
        self._notify()

    def find_palette(self, palette_id: str) -> Optional[ColorPalette]:
        if self.current_palette is not None and self.current_palette.id == palette_id:
            return self.current_palette
        for p in self._history:
            if p.id == palette_id:
                return p
        return self._favorites.get(palette_id)

    def _save_favorites(self) -> None:
        payload = json.dumps([p.to_dict() for p in self._favorites.values()])
        try:
            self.storage.set(FAVORITES_KEY, payload)
        except (OSError, ValueError) as exc:
            log.warning("Failed to save favorites: %s", exc)

    def _load_favorites(self) -> None:
        try:
            saved = self.storage.get(FAVORITES_KEY)
            if not saved:
                return
            palettes = [ColorPalette.from_dict(d) for d in json.loads(saved)]
        except (OSError, ValueError, KeyError, TypeError) as exc:
            log.warning("Failed to load favorites: %s", exc)
            return
        self._favorites = {p.id: p for p in palettes}

    # ---- export ----

    def export(self, fmt: str) -> Optional[Payload]:
        """Serialize the current palette; ``None`` with ``error`` set on failure."""
        self.error = None
        self.error_kind = None
        try:
            if self.current_palette is None:
                raise NoPaletteToExport("no palette to export")
            return export(self.current_palette, fmt)
        except PaletteError as exc:
            self._fail(exc)
            return None

    def copy_palette_text(self) -> Optional[str]:
        text = self.export("text")
        return text if isinstance(text, str) else None

    def _fail(self, exc: PaletteError) -> None:
        log.warning("%s: %s", exc.kind, exc)
        self.error = ERROR_MESSAGES.get(exc.kind, GENERIC_ERROR)
        self.error_kind = exc.kind
        self._notify()


__all__ = ["PaletteStore", "HISTORY_LIMIT", "FAVORITES_KEY", "ERROR_MESSAGES"]
