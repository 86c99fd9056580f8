"""
main.py - Graph Visualizer Flask App
======================================
JSON API in front of one EditorSession per browser.

Routes:
  GET  /api/state              - current view (graph, step, panels)
  GET  /api/algorithms         - registry cards
  GET  /api/samples            - sample-graph presets
  POST /api/graph/parse        - parse text and commit the graph
  POST /api/graph/sample       - load a preset
  POST /api/graph/generate     - build a named graph family
  POST /api/graph/change       - commit a graph edited on the canvas
  POST /api/graph/clear        - commit an empty graph
  POST /api/history/undo       - step back in the edit history
  POST /api/history/redo       - step forward in the edit history
  POST /api/config/algo        - select algorithm
  POST /api/config/nodes       - set start / end node
  POST /api/config/speed       - playback speed (multiplier or preset)
  POST /api/run                - execute the selected algorithm
  GET  /api/run/export         - last run as a JSON snapshot
  POST /api/step/next|prev|reset|play|pause - playback

State management:
  The Flask signed cookie only holds a session id.  The EditorSession it
  points at lives in an in-process SessionStore, together with the one
  TickScheduler every session's playback timer registers with.  The
  scheduler is polled at the start of every request, so auto-play
  advances between the browser's polls of /api/state.
  Sessions idle past the configured timeout are closed first, which
  releases their playback timers.

Errors:
  Failures come back as 400 {"error", "kind", "suggestion"?}.
"""

import logging
import secrets
import time
from typing import Any, Callable, Dict, Optional

from flask import Flask, current_app, jsonify, request, session

from config import Config, load_config
from graph import Graph, generators
from graph.errors import ConfigError, GraphError
from algorithms import list_algorithms
from engine import EditorSession, SPEED_PRESETS, TickScheduler
from ui import algorithm_cards

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


# ---------------------------------------------------------------------------
# Session store
# ---------------------------------------------------------------------------
class SessionStore:
    """
    Browser session id -> EditorSession, sharing one scheduler.

    Sessions idle for longer than `server.session_idle_timeout` are closed
    and dropped by `expire()`, which runs at the start of every request.
    """

    def __init__(self, config: Config, clock: Callable[[], float] = time.monotonic):
        self.config = config
        self.clock = clock
        self.scheduler = TickScheduler(clock)
        self.idle_timeout = config.server.session_idle_timeout
        self._sessions: Dict[str, EditorSession] = {}
        self._last_seen: Dict[str, float] = {}

    def get(self, session_id: str) -> EditorSession:
        editor = self._sessions.get(session_id)
        if editor is None:
            editor = EditorSession(self.config, self.scheduler)
            self._sessions[session_id] = editor
            logger.info("new editor session (%d active)", len(self._sessions))
        self._last_seen[session_id] = self.clock()
        return editor

    def drop(self, session_id: str) -> None:
        self._last_seen.pop(session_id, None)
        editor = self._sessions.pop(session_id, None)
        if editor is not None:
            editor.close()

    def expire(self) -> int:
        """Drop every session idle past the timeout.  Returns how many went."""
        cutoff = self.clock() - self.idle_timeout
        stale = [sid for sid, seen in self._last_seen.items() if seen < cutoff]
        for sid in stale:
            self.drop(sid)
        if stale:
            logger.info("expired %d idle editor session(s) (%d active)", len(stale), len(self))
        return len(stale)

    def close(self) -> None:
        for editor in self._sessions.values():
            editor.close()
        self._sessions.clear()
        self._last_seen.clear()

    def __len__(self) -> int:
        return len(self._sessions)


# ---------------------------------------------------------------------------
# Request helpers
# ---------------------------------------------------------------------------
def get_store() -> SessionStore:
    return current_app.extensions["editor_sessions"]


def get_editor() -> EditorSession:
    """The caller's EditorSession, creating the session id on first use."""
    if "sid" not in session:
        session["sid"] = secrets.token_hex(16)
    return get_store().get(session["sid"])


def payload() -> Dict[str, Any]:
    """The JSON body when it is an object, otherwise an empty dict."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def error_response(error: str, kind: str, suggestion: Optional[str] = None, status: int = 400):
    body: Dict[str, Any] = {"error": error, "kind": kind}
    if suggestion:
        body["suggestion"] = suggestion
    return jsonify(body), status


def optional_node(value: Any) -> Optional[str]:
    return str(value) if value not in (None, "") else None


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(config: Optional[Config] = None, clock: Callable[[], float] = time.monotonic) -> Flask:
    config = config or load_config()

    app = Flask(__name__)
    app.secret_key = config.server.secret_key
    app.extensions["editor_sessions"] = SessionStore(config, clock)

    @app.before_request
    def poll_timers():
        store = get_store()
        store.expire()
        store.scheduler.poll()

    @app.errorhandler(GraphError)
    def handle_graph_error(exc: GraphError):
        logger.info("request rejected (%s): %s", exc.kind.value, exc.message)
        return error_response(exc.message, exc.kind.value)

    # ------------------------------------------------------------------
    # Read-only
    # ------------------------------------------------------------------
    @app.route("/api/state", methods=["GET"])
    def api_state():
        return jsonify(get_editor().view())

    @app.route("/api/algorithms", methods=["GET"])
    def api_algorithms():
        editor = get_editor()
        return jsonify(algorithm_cards(list_algorithms(), editor.algorithm.id))

    @app.route("/api/samples", methods=["GET"])
    def api_samples():
        return jsonify([
            {"key": key, "name": name, "description": description}
            for key, (name, description, _factory) in generators.SAMPLE_GRAPHS.items()
        ])

    # ------------------------------------------------------------------
    # Graph changes
    # ------------------------------------------------------------------
    @app.route("/api/graph/parse", methods=["POST"])
    def api_graph_parse():
        editor = get_editor()
        result = editor.load_text(str(payload().get("text", "")))
        if not result.success:
            return error_response(result.error, result.error_kind.value, result.suggestion)
        view = editor.view()
        view["strategy"] = result.strategy
        return jsonify(view)

    @app.route("/api/graph/sample", methods=["POST"])
    def api_graph_sample():
        editor = get_editor()
        editor.load_sample(str(payload().get("key", "")))
        return jsonify(editor.view())

    @app.route("/api/graph/generate", methods=["POST"])
    def api_graph_generate():
        data = payload()
        editor = get_editor()
        try:
            n = int(data.get("n", 0))
            m = int(data["m"]) if data.get("m") is not None else None
        except (TypeError, ValueError):
            raise ConfigError("Graph sizes must be whole numbers")
        editor.generate(str(data.get("kind", "")), n, m)
        return jsonify(editor.view())

    @app.route("/api/graph/change", methods=["POST"])
    def api_graph_change():
        editor = get_editor()
        editor.apply_change(Graph.from_dict(payload().get("graph") or {}))
        return jsonify(editor.view())

    @app.route("/api/graph/clear", methods=["POST"])
    def api_graph_clear():
        editor = get_editor()
        editor.clear()
        return jsonify(editor.view())

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    @app.route("/api/history/undo", methods=["POST"])
    def api_history_undo():
        editor = get_editor()
        editor.undo()
        return jsonify(editor.view())

    @app.route("/api/history/redo", methods=["POST"])
    def api_history_redo():
        editor = get_editor()
        editor.redo()
        return jsonify(editor.view())

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    @app.route("/api/config/algo", methods=["POST"])
    def api_config_algo():
        editor = get_editor()
        editor.select_algorithm(str(payload().get("algorithm_id", "")))
        return jsonify(editor.view())

    @app.route("/api/config/nodes", methods=["POST"])
    def api_config_nodes():
        data = payload()
        editor = get_editor()
        editor.configure(optional_node(data.get("start_node")), optional_node(data.get("end_node")))
        return jsonify(editor.view())

    @app.route("/api/config/speed", methods=["POST"])
    def api_config_speed():
        speed = payload().get("speed", 1.0)
        editor = get_editor()
        if not (isinstance(speed, str) and speed in SPEED_PRESETS):
            try:
                speed = float(speed)
            except (TypeError, ValueError):
                raise ConfigError(f"Invalid speed: {speed!r}")
        editor.set_speed(speed)
        return jsonify(editor.controller.snapshot())

    # ------------------------------------------------------------------
    # Run & playback
    # ------------------------------------------------------------------
    @app.route("/api/run", methods=["POST"])
    def api_run():
        editor = get_editor()
        result = editor.run()
        if not result.success:
            return error_response(result.error, result.error_kind.value)
        view = editor.view()
        view["total_steps"] = len(result.steps)
        return jsonify(view)

    @app.route("/api/run/export", methods=["GET"])
    def api_run_export():
        return jsonify(get_editor().export())

    @app.route("/api/step/<action>", methods=["POST"])
    def api_step(action: str):
        editor = get_editor()
        controller = editor.controller
        actions = {
            "next":  controller.step_forward,
            "prev":  controller.step_backward,
            "reset": controller.reset,
            "play":  controller.play,
            "pause": controller.pause,
        }
        handler = actions.get(action)
        if handler is None:
            return error_response(f"Unknown playback action '{action}'", "config", status=404)
        handler()
        return jsonify(editor.view())

    return app


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    cfg = load_config()
    logging.basicConfig(level=cfg.server.log_level.upper(), format=LOG_FORMAT)
    logger.info("Starting graph visualizer on http://%s:%d", cfg.server.host, cfg.server.port)
    create_app(cfg).run(debug=cfg.server.debug, host=cfg.server.host, port=cfg.server.port)
