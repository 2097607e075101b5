from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Tuple, Type

from flask import Flask, Response, jsonify, request

from .accessibility import accessibility_report
from .comparison import compare_palettes
from .errors import InvalidCount, InvalidParameter, NoPaletteToExport, PaletteError
from .exporters import export, filename_for, get_format, supported_formats
from .generator import ALGORITHMS, DEFAULT_CONFIG, ColorConfig
from .storage import JsonFileStorage, KeyValueStorage
from .store import PaletteStore
from .templates import PALETTE_TEMPLATES, get_template, get_templates_by_category
from .vision import COLOR_BLINDNESS_TYPES, simulate_color_blindness

log = logging.getLogger(__name__)

ERROR_STATUS = {
    "no_palette": 409,
    "serialization_failure": 500,
    "unexpected": 500,
}


def parse_int(
    val: Optional[str], name: str, default: int, error: Type[PaletteError] = InvalidParameter
) -> int:
    if val is None or val == "":
        return default
    try:
        return int(val)
    except ValueError:
        raise error(f"{name} must be an integer") from None


def parse_percent(val: Optional[str], name: str, default: float) -> float:
    if val is None or val == "":
        return default
    try:
        return float(val)
    except ValueError:
        raise InvalidParameter(f"{name} must be a number") from None


def parse_config(args: Mapping[str, str], base: ColorConfig = DEFAULT_CONFIG) -> ColorConfig:
    """Build a config from query args; missing args keep ``base`` values."""
    algo = (args.get("algorithm") or args.get("algo") or base.algorithm).strip().lower()
    if algo not in ALGORITHMS:
        raise InvalidParameter(f"unknown algorithm '{algo}'")
    return ColorConfig(
        algorithm=algo,  # type: ignore[arg-type]
        base_color=args.get("base") or args.get("baseColor") or base.base_color,
        count=parse_int(args.get("count", args.get("n")), "count", base.count, InvalidCount),
        saturation=parse_percent(args.get("saturation"), "saturation", base.saturation),
        lightness=parse_percent(args.get("lightness"), "lightness", base.lightness),
        variation=parse_percent(args.get("variation"), "variation", base.variation),
    )


def error_response(exc: PaletteError) -> Tuple[Response, int]:
    body: dict[str, Any] = {"error": str(exc), "kind": exc.kind}
    if exc.kind == "invalid_parameter":
        body["algorithms"] = ALGORITHMS
        body["formats"] = supported_formats()
    return jsonify(body), ERROR_STATUS.get(exc.kind, 400)


# ----------------------------- Flask app ----------------------------------


def create_app(store: Optional[PaletteStore] = None) -> Flask:
    app = Flask(__name__)
    app.config.from_prefixed_env("PALETTE")
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    if store is None:
        storage: Optional[KeyValueStorage] = None
        if app.config.get("FAVORITES_PATH"):
            storage = JsonFileStorage(app.config["FAVORITES_PATH"])
        store = PaletteStore(storage)
    app.extensions["palette_store"] = store

    @app.errorhandler(PaletteError)
    def handle_palette_error(exc: PaletteError):
        log.info("Rejected request: %s", exc)
        return error_response(exc)

    @app.route("/generate")
    def generate_palette():
        previous = store.config
        store.config = parse_config(request.args, previous)
        palette = store.generate_palette()
        if palette is None:
            store.config = previous
            return _store_failure(store)
        return jsonify(palette.to_dict())

    @app.route("/random")
    def random_palette():
        palette = store.generate_random_palette()
        if palette is None:
            return _store_failure(store)
        return jsonify(palette.to_dict())

    @app.route("/export/<fmt>")
    def export_palette(fmt: str):
        target = get_format(fmt)
        try:
            payload = export(store.current_palette, target.key)
        except PaletteError:
            raise
        except Exception as exc:
            log.exception("Export to %s failed", target.key)
            return jsonify({"error": str(exc)}), 500
        resp = Response(payload, mimetype=target.mimetype)
        resp.headers["Content-Disposition"] = f'attachment; filename="{filename_for(target.key)}"'
        return resp

    @app.route("/history", methods=["GET", "DELETE"])
    def history():
        if request.method == "DELETE":
            store.clear_history()
        return jsonify([p.to_dict() for p in store.history])

    @app.route("/favorites")
    def favorites():
        return jsonify([p.to_dict() for p in store.favorites])

    @app.route("/favorites/<palette_id>", methods=["POST", "DELETE"])
    def favorite(palette_id: str):
        if request.method == "DELETE":
            store.remove_from_favorites(palette_id)
        else:
            palette = store.find_palette(palette_id)
            if palette is None:
                return jsonify({"error": f"unknown palette '{palette_id}'"}), 404
            store.add_to_favorites(palette)
        return jsonify([p.to_dict() for p in store.favorites])

    @app.route("/templates")
    def templates():
        category = request.args.get("category")
        query = request.args.get("q")
        found = get_templates_by_category(category) if category else list(PALETTE_TEMPLATES)
        if query:
            found = [t for t in found if t.matches(query)]
        return jsonify(
            [
                {
                    "id": t.id,
                    "name": t.name,
                    "description": t.description,
                    "category": t.category,
                    "colors": list(t.colors),
                    "tags": list(t.tags),
                }
                for t in found
            ]
        )

    @app.route("/templates/<template_id>", methods=["POST"])
    def use_template(template_id: str):
        template = get_template(template_id)
        if template is None:
            return jsonify({"error": f"unknown template '{template_id}'"}), 404
        palette = template.to_palette()
        store.set_current_palette(palette)
        return jsonify(palette.to_dict())

    @app.route("/accessibility")
    def accessibility():
        if store.current_palette is None:
            raise NoPaletteToExport("no palette to check")
        return jsonify(accessibility_report(store.current_palette))

    @app.route("/simulate")
    def color_blindness_types():
        return jsonify(
            [
                {"id": t.id, "name": t.name, "description": t.description, "prevalence": t.prevalence}
                for t in COLOR_BLINDNESS_TYPES
            ]
        )

    @app.route("/simulate/<kind>")
    def simulate(kind: str):
        if store.current_palette is None:
            raise NoPaletteToExport("no palette to simulate")
        simulated = simulate_color_blindness(store.current_palette, kind)
        body = simulated.to_dict()
        body["original"] = list(store.current_palette.colors)
        body["simulation"] = kind.strip().lower()
        return jsonify(body)

    @app.route("/compare")
    def compare():
        first_id = request.args.get("first") or request.args.get("a")
        second_id = request.args.get("second") or request.args.get("b")
        if not first_id:
            raise InvalidParameter("first palette id is required")
        first = store.find_palette(first_id)
        second = store.find_palette(second_id) if second_id else store.current_palette
        if first is None or second is None:
            missing = first_id if first is None else (second_id or "current")
            return jsonify({"error": f"unknown palette '{missing}'"}), 404
        return jsonify(compare_palettes(first, second))

    return app


def _store_failure(store: PaletteStore):
    kind = store.error_kind or "palette_error"
    return jsonify({"error": store.error, "kind": kind}), ERROR_STATUS.get(kind, 400)


if __name__ == "__main__":
    create_app().run(debug=False, threaded=True)
