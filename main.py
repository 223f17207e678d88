"""
main.py — Stepwise Dijkstra Flask App
======================================
JSON API that lets a browser (or any HTTP client) drive a
ShortestPathStepper one micro-step at a time.

Routes:
  GET  /api/info               – pseudocode, current config
  POST /api/graph/preset       – load the cube or a random graph
  POST /api/graph/import       – import from adjacency-list text
  POST /api/run                – choose a start vertex, rewind to step 0
  POST /api/step/next          – advance one step
  POST /api/step/prev          – rewind one step
  GET  /api/state              – distances, frontier, colours at the current step
  GET  /api/result             – distances, predecessors and paths once finished

State management:
  The Flask session holds only the serialised graph, the start vertex and
  the number of steps taken.  Every request rebuilds the stepper and
  replays that many steps; runs are deterministic, so the replay lands
  on exactly the state the previous request left.

Configuration (app.config, overridable via STEPPER_* environment variables):
  DEFAULT_PRESET  – graph loaded into a fresh session ("cube" / "random")
  DEFAULT_WEIGHT  – uniform weight for the cube and for unweighted imports
  LOG_LEVEL       – logging level when run as a script
"""

from flask import Flask, request, jsonify, session
import logging
import secrets
import sys
import os

# add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from graph import WeightedGraph, GraphAlgoError, StepperExhausted, DEFAULT_WEIGHT
from algorithms import INFINITY, PSEUDOCODE, ShortestPathStepper
from engine import Highlighter

logger = logging.getLogger(__name__)


app = Flask(__name__)
app.config.update(
    SECRET_KEY=secrets.token_hex(32),
    DEFAULT_PRESET="cube",
    DEFAULT_WEIGHT=DEFAULT_WEIGHT,
    LOG_LEVEL="INFO",
)
app.config.from_prefixed_env("STEPPER")


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------
@app.errorhandler(GraphAlgoError)
def handle_graph_error(e):
    logger.warning("rejected request: %s", e)
    return jsonify({"error": str(e), "type": type(e).__name__}), 400


@app.errorhandler(StepperExhausted)
def handle_exhausted(e):
    return jsonify({"error": str(e), "type": type(e).__name__}), 409


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def build_preset(name: str, params: dict) -> WeightedGraph:
    if name == "cube":
        return WeightedGraph.cube(weight=int(params.get("weight", app.config["DEFAULT_WEIGHT"])))
    if name == "random":
        return WeightedGraph.generate_random(
            num_vertices=int(params.get("num_vertices", 8)),
            edge_probability=float(params.get("edge_probability", 0.3)),
            connect=bool(params.get("connect", True)),
            seed=params.get("seed"),
        )
    raise ValueError(f"Unknown preset: {name}")


def get_graph() -> WeightedGraph:
    """Deserialise graph from session, or create the configured default."""
    if "graph" not in session:
        session["graph"] = build_preset(app.config["DEFAULT_PRESET"], {}).to_dict()
    return WeightedGraph.from_dict(session["graph"])


def save_graph(graph: WeightedGraph):
    session["graph"] = graph.to_dict()
    session.pop("start", None)
    session["steps"] = 0


def replay():
    """Rebuild (graph, stepper, highlighter) at the session's current step."""
    graph = get_graph()
    start = session.get("start")
    if start is None:
        return graph, None, None
    stepper = ShortestPathStepper(graph, start)
    hl = Highlighter(graph)
    for _ in range(session.get("steps", 0)):
        hl.apply(stepper.advance())
    return graph, stepper, hl


def snapshot(stepper: ShortestPathStepper, hl: Highlighter) -> dict:
    return {
        "start":           stepper.start,
        "step":            stepper.steps_taken,
        "state":           stepper.state.value,
        "cursor":          stepper.cursor,
        "finished":        stepper.is_finished,
        "frontier":        stepper.frontier,
        "distances":       [_dist(d) for d in stepper.distances()],
        "pseudocode_line": stepper.pseudocode_line,
        "highlights":      hl.to_dict(),
    }


def _dist(d):
    return None if d == INFINITY else d


def _no_run():
    return jsonify({"error": "Choose a start vertex with /api/run first"}), 400


# ---------------------------------------------------------------------------
# API: Info
# ---------------------------------------------------------------------------
@app.route("/api/info")
def api_info():
    graph = get_graph()
    return jsonify({
        "pseudocode":     PSEUDOCODE,
        "default_preset": app.config["DEFAULT_PRESET"],
        "default_weight": app.config["DEFAULT_WEIGHT"],
        "vertex_count":   graph.vertex_count(),
    })


# ---------------------------------------------------------------------------
# API: Graph
# ---------------------------------------------------------------------------
@app.route("/api/graph/preset", methods=["POST"])
def api_graph_preset():
    data = request.get_json(silent=True) or {}
    try:
        graph = build_preset(data.get("preset", "cube"), data)
    except (TypeError, ValueError) as e:
        return jsonify({"error": str(e)}), 400
    save_graph(graph)
    return jsonify({"graph": graph.to_dict(), "vertex_count": graph.vertex_count()})


@app.route("/api/graph/import", methods=["POST"])
def api_graph_import():
    data = request.get_json(silent=True) or {}
    try:
        default_weight = int(data.get("default_weight", app.config["DEFAULT_WEIGHT"]))
    except (TypeError, ValueError):
        return jsonify({"error": f"default_weight must be an integer, got {data.get('default_weight')!r}"}), 400

    graph = WeightedGraph.from_adjacency_list(
        data.get("text", ""),
        default_weight=default_weight,
        link_reverse=bool(data.get("link_reverse", False)),
    )
    save_graph(graph)
    return jsonify({"graph": graph.to_dict(), "vertex_count": graph.vertex_count()})


# ---------------------------------------------------------------------------
# API: Run
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    data = request.get_json(silent=True) or {}
    graph = get_graph()
    start = data.get("start", 0)

    # validates start; raises OutOfRange → 400
    stepper = ShortestPathStepper(graph, start)
    session["start"] = start
    session["steps"] = 0
    logger.info("run started from vertex %s on %r", start, graph)
    return jsonify(snapshot(stepper, Highlighter(graph)))


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    graph, stepper, hl = replay()
    if stepper is None:
        return _no_run()

    event = stepper.advance()
    vertex_changes, edge_changes = hl.apply(event)
    session["steps"] = stepper.steps_taken

    body = snapshot(stepper, hl)
    body.update({
        "event":       event.to_dict(),
        "explanation": stepper.explain(event),
        "changes": {
            "vertices": {str(v): c.value for v, c in vertex_changes.items()},
            "edges":    [{"locator": loc.to_dict(), "color": c.value} for loc, c in edge_changes.items()],
        },
    })
    return jsonify(body)


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    if session.get("start") is None:
        return _no_run()
    if session.get("steps", 0) <= 0:
        return jsonify({"error": "Already at first step"}), 400
    session["steps"] = session["steps"] - 1
    graph, stepper, hl = replay()
    return jsonify(snapshot(stepper, hl))


@app.route("/api/state")
def api_state():
    graph, stepper, hl = replay()
    if stepper is None:
        return _no_run()
    return jsonify(snapshot(stepper, hl))


@app.route("/api/result")
def api_result():
    graph, stepper, hl = replay()
    if stepper is None:
        return _no_run()
    if not stepper.is_finished:
        return jsonify({"error": "Run has not finished", "step": stepper.steps_taken}), 409

    n = graph.vertex_count()
    paths = [stepper.path_to(v) for v in range(n)]
    preds = [stepper.predecessor_edge(v) for v in range(n)]
    return jsonify({
        "start":        stepper.start,
        "distances":    [_dist(stepper.distance_to(v)) for v in range(n)],
        "predecessors": [p.to_dict() if p else None for p in preds],
        "paths":        [[loc.to_dict() for loc in p] if p is not None else None for p in paths],
    })


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    print("=" * 60)
    print("  Stepwise Dijkstra")
    print("  Starting Flask server...")
    print("  Open http://localhost:5000")
    print("=" * 60)
    app.run(debug=True, host="0.0.0.0", port=5000)
