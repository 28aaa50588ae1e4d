# app.py — Slim Flask API over the tactical pathfinder for out-of-process overlays
# deps: pip install flask numpy pillow requests

from __future__ import annotations
import logging
from typing import Optional, Tuple
from flask import Flask, request, jsonify

from .config import Settings, load_settings
from .navgrid import DirectoryAssetSource, NavigationGridStore
from .route_export import route_positions
from .tactical import TacticalPositionSolver

logger = logging.getLogger(__name__)


class RequestError(ValueError):
    pass


# region Request Helpers
def _point(data: dict, key: str) -> Tuple[float, float]:
    raw = data.get(key)
    try:
        if isinstance(raw, dict):
            return float(raw["x"]), float(raw["y"])
        x, y = raw
        return float(x), float(y)
    except (KeyError, TypeError, ValueError):
        raise RequestError(f"{key} must be {{x, y}} or [x, y]") from None


def _map(data: dict) -> str:
    name = data.get("map")
    if not name:
        raise RequestError("map required")
    return name


def _pt(p) -> Optional[dict]:
    return None if p is None else {"x": float(p[0]), "y": float(p[1])}
# endregion


def build_solver(settings: Settings) -> TacticalPositionSolver:
    store = NavigationGridStore()
    if settings.navgrid_dir:
        store.init(DirectoryAssetSource(settings.navgrid_dir))
    return TacticalPositionSolver(store)


def create_app(solver: Optional[TacticalPositionSolver] = None, settings: Optional[Settings] = None) -> Flask:
    settings = settings or load_settings()
    solver = solver or build_solver(settings)
    app = Flask(__name__)
    app.config["SOLVER"] = solver

    # ======= CORS =======
    @app.after_request
    def _cors(resp):
        resp.headers["Access-Control-Allow-Origin"]  = "*"
        resp.headers["Access-Control-Allow-Headers"] = "*"
        resp.headers["Access-Control-Allow-Methods"] = "GET,POST,OPTIONS"
        return resp

    @app.errorhandler(RequestError)
    def _bad_request(e):
        return jsonify({"error": str(e)}), 400

    def _body() -> dict:
        return request.get_json(force=True, silent=True) or {}

    def _unknown(name: str):
        return jsonify({"error": f"unknown map: {name}"}), 404

    # ======= maps =======
    @app.route("/", methods=["GET"])
    def root():
        return {"ok": True, "maps": solver.registry.map_names(),
                "path": "/path (POST JSON)", "ghost": "/ghost (POST JSON)"}

    @app.route("/maps", methods=["GET"])
    def maps():
        out = []
        for name in solver.registry.map_names():
            cfg = solver.registry.get(name)
            out.append({"map": cfg.key, "displayName": cfg.display_name, "image": cfg.image_url,
                        "hasNavGrid": solver.store.get(name) is not None})
        return jsonify({"maps": out})

    @app.route("/maps/<name>/bounds", methods=["GET"])
    def bounds(name):
        if name not in solver.registry:
            return _unknown(name)
        b = solver.validator.compute_playable_bounds(name)
        if b is None:
            return jsonify({"map": name, "bounds": None})
        return jsonify({"map": name, "bounds": {"minX": b.min_x, "maxX": b.max_x,
                                                "minY": b.min_y, "maxY": b.max_y}})

    # ======= queries =======
    @app.route("/path", methods=["POST"])
    def path():
        """
        JSON body:
        {"map": "ascent", "start": {"x":..,"y":..}, "end": {"x":..,"y":..},
         "width": 1024, "height": 1024}   // width/height optional, adds pixel coords
        """
        data = _body()
        name = _map(data)
        start, end = _point(data, "start"), _point(data, "end")
        pts = solver.find_path(start, end, name)
        if pts is None:
            return _unknown(name)
        return jsonify({"map": name, "positions": route_positions(pts, data.get("width"), data.get("height"))})

    @app.route("/ghost", methods=["POST"])
    def ghost():
        """
        JSON body:
        {"map": "ascent", "death": {..}, "teammate": {..}, "tradeDistance": 2500}
        """
        data = _body()
        name = _map(data)
        if name not in solver.registry:
            return _unknown(name)
        death, mate = _point(data, "death"), _point(data, "teammate")
        try:
            trade = float(data.get("tradeDistance", 2500.0))
        except (TypeError, ValueError):
            raise RequestError("tradeDistance must be a number") from None

        normalized = solver.find_optimal_ghost_position(death, mate, trade, name)
        rec = None if normalized is None else solver.validate_ghost(normalized, death, name)
        return jsonify({
            "map": name,
            "ghost": _pt(normalized),
            "world": None if rec is None else _pt(rec.point),
            "wasAdjusted": None if rec is None else rec.was_adjusted,
        })

    @app.route("/walkable", methods=["POST"])
    def walkable():
        data = _body()
        name = _map(data)
        if name not in solver.registry:
            return _unknown(name)
        return jsonify({"map": name, "walkable": solver.is_walkable(_point(data, "point"), name)})

    @app.route("/nearest-walkable", methods=["POST"])
    def nearest_walkable():
        data = _body()
        name = _map(data)
        p = solver.find_nearest_walkable_position(_point(data, "point"), name)
        if p is None:
            return _unknown(name)
        return jsonify({"map": name, "position": _pt(p)})

    @app.route("/crosses-wall", methods=["POST"])
    def crosses_wall():
        data = _body()
        name = _map(data)
        if name not in solver.registry:
            return _unknown(name)
        a, b = _point(data, "start"), _point(data, "end")
        return jsonify({"map": name, "crossesWall": solver.path_crosses_wall(a, b, name)})

    return app


if __name__ == "__main__":
    s = load_settings()
    logging.basicConfig(level=s.log_level)
    create_app(settings=s).run(host=s.host, port=s.port, threaded=True)
