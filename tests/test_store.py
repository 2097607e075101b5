import json

import numpy as np

from palette_engine.generator import ColorConfig
from palette_engine.storage import JsonFileStorage, MemoryStorage
from palette_engine.store import ERROR_MESSAGES, FAVORITES_KEY, HISTORY_LIMIT, PaletteStore


def make_store(**kw):
    kw.setdefault("rng", np.random.default_rng(0))
    return PaletteStore(**kw)


def test_history_keeps_most_recent_twenty():
    store = make_store()
    generated = [store.generate_palette() for _ in range(25)]
    assert HISTORY_LIMIT == 20
    assert len(store.history) == 20
    assert store.history == list(reversed(generated))[:20]
    assert store.current_palette is generated[-1]


def test_failed_generation_sets_error_and_keeps_state():
    store = make_store()
    first = store.generate_palette()
    store.set_config(base_color="not-a-color")
    assert store.generate_palette() is None
    assert store.error == ERROR_MESSAGES["invalid_color"]
    assert store.error_kind == "invalid_color"
    assert store.current_palette is first
    assert store.history == [first]

    store.set_config(base_color="#00ff00")
    assert store.generate_palette() is not None
    assert store.error is None


def test_invalid_count_message():
    store = make_store(config=ColorConfig(count=0))
    assert store.generate_palette() is None
    assert store.error == ERROR_MESSAGES["invalid_count"]


def test_subscribers_are_notified():
    store = make_store()
    seen = []
    unsubscribe = store.subscribe(lambda s: seen.append(s.current_palette))
    palette = store.generate_palette()
    assert seen[-1] is palette
    unsubscribe()
    store.generate_palette()
    assert len(seen) == 1


def test_set_config_is_partial():
    store = make_store()
    store.set_config(algorithm="gradient", count=4)
    assert store.config.algorithm == "gradient"
    assert store.config.count == 4
    assert store.config.base_color == "#ff6b6b"


def test_favorites_persist_across_stores():
    storage = MemoryStorage()
    store = make_store(storage=storage)
    palette = store.generate_palette()
    store.add_to_favorites(palette)
    store.add_to_favorites(palette)
    assert store.is_favorite(palette.id)
    assert len(store.favorites) == 1

    reloaded = make_store(storage=storage)
    assert reloaded.is_favorite(palette.id)
    assert reloaded.favorites[0].colors == palette.colors
    assert reloaded.favorites[0].created_at == palette.created_at

    reloaded.remove_from_favorites(palette.id)
    assert not reloaded.is_favorite(palette.id)
    assert json.loads(storage.get(FAVORITES_KEY)) == []


def test_favorites_in_json_file(tmp_path):
    path = tmp_path / "state" / "favorites.json"
    store = make_store(storage=JsonFileStorage(path))
    palette = store.generate_palette()
    store.add_to_favorites(palette)
    assert path.exists()

    reloaded = make_store(storage=JsonFileStorage(path))
    assert [p.id for p in reloaded.favorites] == [palette.id]


def test_corrupt_favorites_are_ignored():
    storage = MemoryStorage()
    storage.set(FAVORITES_KEY, "{not json")
    store = make_store(storage=storage)
    assert store.favorites == []


def test_export_without_palette():
    store = make_store()
    assert store.export("json") is None
    assert store.error == ERROR_MESSAGES["no_palette"]
    assert store.error_kind == "no_palette"


def test_export_current_palette():
    store = make_store()
    palette = store.generate_palette()
    payload = store.export("json")
    assert json.loads(payload)["colors"] == list(palette.colors)
    assert store.copy_palette_text() == ", ".join(palette.colors)
    assert store.export("pdf") is None
    assert store.error == ERROR_MESSAGES["invalid_parameter"]


def test_random_palette():
    store = make_store()
    palette = store.generate_random_palette()
    assert palette is not None
    assert 3 <= len(palette.colors) <= 8
    assert palette.algorithm == store.config.algorithm


def test_clear_history_and_current():
    store = make_store()
    store.generate_palette()
    store.clear_history()
    assert store.history == []
    store.clear_current_palette()
    assert store.current_palette is None
