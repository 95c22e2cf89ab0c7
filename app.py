from __future__ import annotations

import os
import sys
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

# Ensure package imports work when executed directly from repo root or as module
if __package__ in (None, ""):
    sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

try:
    from .game import (  # type: ignore
        GRID_SIZE,
        INIT_MOVES,
        MIN_PATH,
        NUM_COLORS,
        CoordinateError,
        GameSession,
        GesturePhase,
        ResolveResult,
        SessionStore,
        TouchResult,
        cell_at,
        events_for,
        handle_touch,
        release,
    )
    from .dotty_core.log import configure_logging, get_logger  # type: ignore
except ImportError:
    from game import (  # type: ignore
        GRID_SIZE,
        INIT_MOVES,
        MIN_PATH,
        NUM_COLORS,
        CoordinateError,
        GameSession,
        GesturePhase,
        ResolveResult,
        SessionStore,
        TouchResult,
        cell_at,
        events_for,
        handle_touch,
        release,
    )
    from dotty_core.log import configure_logging, get_logger  # type: ignore

log = get_logger("api")

app = Flask(__name__)

# Live games owned by this process, one engine per game id.
sessions = SessionStore()


class ApiError(ValueError):
    pass


class UnknownGame(LookupError):
    pass


# ---------- JSON helpers ----------

def resolution_to_json(res: Optional[ResolveResult]) -> Optional[Dict[str, Any]]:
    if res is None:
        return None
    return {
        "removed": int(res.removed),
        "score": int(res.score),
        "movesLeft": int(res.moves_left),
        "cells": [[int(r), int(c)] for (r, c) in res.cells],
        "drops": {str(c): int(n) for c, n in res.drops.items()},
        "lowest": {str(c): [int(r), int(cc)] for c, (r, cc) in res.lowest.items()},
    }


def state_to_json(session: GameSession) -> Dict[str, Any]:
    state = session.engine.snapshot()
    state["gameId"] = session.game_id
    return state


def _touch_to_json(session: GameSession, result: TouchResult) -> Dict[str, Any]:
    tone = session.tones.cue_for(result.outcome)
    if result.resolution is not None or result.cleared:
        session.tones.reset()
    return {
        "ok": True,
        "ignored": result.ignored,
        "outcome": result.outcome.value if result.outcome is not None else None,
        "tone": tone,
        "cleared": result.cleared,
        "resolution": resolution_to_json(result.resolution),
        "events": events_for(result.outcome, result.resolution),
        "state": state_to_json(session),
    }


def _error(message: str, status: int) -> Tuple[Any, int]:
    log.debug("%s %s -> %d: %s", request.method, request.path, status, message)
    return jsonify({"ok": False, "error": message}), status


def _body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True) or {}
    if not isinstance(body, dict):
        raise ApiError("JSON object body required")
    return body


def _lookup(game_id: str) -> GameSession:
    try:
        return sessions.get(game_id)
    except KeyError:
        raise UnknownGame(game_id) from None


def _session_from(body: Dict[str, Any]) -> GameSession:
    game_id = body.get("gameId")
    if not isinstance(game_id, str) or not game_id:
        raise ApiError("gameId required")
    return _lookup(game_id)


def _coord_from(value: Any) -> Tuple[int, int]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ApiError("coord must be [row, col]")
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in value):
        raise ApiError("coord must be [row, col] integers")
    return value[0], value[1]


def _phase_from(body: Dict[str, Any]) -> GesturePhase:
    try:
        return GesturePhase.parse(body.get("phase", GesturePhase.ADDITIONAL.value))
    except ValueError as e:
        raise ApiError(str(e)) from None


@app.errorhandler(ApiError)
def _bad_request(e: ApiError) -> Any:
    return _error(str(e), 400)


@app.errorhandler(CoordinateError)
def _bad_coord(e: CoordinateError) -> Any:
    return _error(str(e), 400)


@app.errorhandler(UnknownGame)
def _unknown_game(e: UnknownGame) -> Any:
    return _error("unknown game", 404)


# ---------- Game API ----------

@app.get("/api/config")
def api_config() -> Any:
    return jsonify({
        "ok": True,
        "gridSize": GRID_SIZE,
        "numColors": NUM_COLORS,
        "initMoves": INIT_MOVES,
        "minPath": MIN_PATH,
    })


@app.post("/api/new")
def api_new() -> Any:
    body = _body()
    seed = body.get("seed", None)
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        raise ApiError("seed must be an integer")
    session = sessions.create(seed=seed)
    with session.lock:
        return jsonify({"ok": True, "gameId": session.game_id, "state": state_to_json(session)})


@app.get("/api/state/<game_id>")
def api_state(game_id: str) -> Any:
    session = _lookup(game_id)
    with session.lock:
        return jsonify({"ok": True, "state": state_to_json(session)})


@app.post("/api/new_game")
def api_new_game() -> Any:
    session = _session_from(_body())
    with session.lock:
        session.engine.new_game()
        session.tones.reset()
        return jsonify({"ok": True, "state": state_to_json(session)})


@app.post("/api/select")
def api_select() -> Any:
    body = _body()
    session = _session_from(body)
    coord = _coord_from(body.get("coord"))
    phase = _phase_from(body)
    with session.lock:
        result = handle_touch(session.engine, coord, phase)
        return jsonify(_touch_to_json(session, result))


@app.post("/api/touch")
def api_touch() -> Any:
    body = _body()
    session = _session_from(body)
    phase = _phase_from(body)
    try:
        x, y = float(body["x"]), float(body["y"])
        cell_w, cell_h = float(body["cellWidth"]), float(body["cellHeight"])
    except (KeyError, TypeError, ValueError) as e:
        raise ApiError(f"bad touch: {e}") from None
    if cell_w <= 0 or cell_h <= 0:
        raise ApiError("cellWidth and cellHeight must be positive")
    with session.lock:
        coord = cell_at(x, y, cell_w, cell_h, session.engine.size)
        result = handle_touch(session.engine, coord, phase)
        return jsonify(_touch_to_json(session, result))


@app.post("/api/release")
def api_release() -> Any:
    session = _session_from(_body())
    with session.lock:
        result = release(session.engine)
        return jsonify(_touch_to_json(session, result))


@app.post("/api/clear")
def api_clear() -> Any:
    session = _session_from(_body())
    with session.lock:
        session.engine.clear_selection()
        session.tones.reset()
        return jsonify({"ok": True, "state": state_to_json(session)})


@app.delete("/api/game/<game_id>")
def api_discard(game_id: str) -> Any:
    if not sessions.discard(game_id):
        return _error("unknown game", 404)
    return jsonify({"ok": True})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    configure_logging()
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
