"""
main.py — Algorithm Playback Flask App
========================================
The web server in front of the trace engine.

Routes:
  GET  /                       – algorithm catalogue (HTML)
  GET  /api/health             – liveness check
  GET  /api/algorithms         – catalogue as JSON
  POST /api/array/load         – validate and store an element sequence
  POST /api/array/clear        – forget the stored sequence
  POST /api/sort               – record a sorting trace
  POST /api/search             – record a searching trace
  POST /api/graph/load         – build and store a graph
  POST /api/graph/clear        – forget the stored graph
  POST /api/graph/run          – record BFS / DFS / Dijkstra / A*
  POST /api/tree/build         – build a BST from values
  POST /api/tree/insert        – insert one value into the stored BST
  POST /api/tree/search        – search the stored BST
  POST /api/tree/traverse      – in-order / pre-order / post-order
  POST /api/list/build         – build a singly or doubly linked list
  POST /api/list/search        – search the stored list
  POST /api/list/delete        – delete a value from the stored list

Every run answers with
    {"algorithm", "steps": [...], "artifact", "notices", "metrics"}
and every failure with
    {"error", "message", "instruction"}  (+ "steps" for PathNotFound)

State management:
  Structures live in the Flask session as their plain inputs (values,
  edge lists), never as trace objects.  A structure is written to the
  session only AFTER it validated, so a bad request never replaces the
  last good one.

CLI:
  flask --app main play bubble_sort "5,3,8,1" --order descending --speed 2800
"""

import asyncio
import logging
import os
import secrets

import click
from flask import Flask, jsonify, render_template_string, request, session

from algorithms import algorithms_by_family, get_algorithm, list_algorithms, FAMILIES
from algorithms.astar import make_heuristic
from engine import DEFAULT_SPEED, PlaybackScheduler, Recorder
from structures import BinarySearchTree, Graph, LinkedList, parse_elements
from structures.errors import (
    GraphParseError, NoStructureLoaded, PathNotFound, UnknownAlgorithm, VisualizerError,
)

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------
app = Flask(__name__)
app.secret_key = os.environ.get("ALGOVIZ_SECRET_KEY") or secrets.token_hex(32)

TRAVERSALS = {"inorder", "preorder", "postorder"}


# ---------------------------------------------------------------------------
# Session helpers
# ---------------------------------------------------------------------------
def get_array() -> list:
    if "array" not in session:
        raise NoStructureLoaded("No array loaded.", "Load an array of numbers first.")
    return session["array"]


def get_graph() -> Graph:
    if "graph" not in session:
        raise NoStructureLoaded("No graph loaded.", "Load a graph before running an algorithm.")
    return Graph.from_dict(session["graph"])


def get_tree() -> BinarySearchTree:
    if "tree" not in session:
        raise NoStructureLoaded("No tree built.", "Build a tree first.")
    return BinarySearchTree.from_values(session["tree"])


def get_list() -> LinkedList:
    if "list" not in session:
        raise NoStructureLoaded("No linked list built.", "Build a linked list first.")
    stored = session["list"]
    return LinkedList.from_values(stored["values"], doubly=stored["doubly"])


def payload() -> dict:
    return request.get_json(silent=True) or {}


def algorithm_for(family: str, key: str):
    info = get_algorithm(key)
    if info is None or info.family != family:
        names = ", ".join(a.key for a in algorithms_by_family(family))
        raise UnknownAlgorithm(f"Unknown {family} algorithm: '{key}'.", f"Choose one of: {names}.")
    return info


def run(key: str, **inputs) -> dict:
    rec = Recorder()
    rec.record(key, **inputs)
    app.logger.info(
        "%s: %d steps, %d notice(s)", key, rec.metrics.total_steps, rec.metrics.notices
    )
    return rec.export()


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
@app.errorhandler(VisualizerError)
def handle_visualizer_error(exc: VisualizerError):
    body = exc.to_dict()
    if isinstance(exc, PathNotFound):
        body["steps"] = [s.to_dict() for s in exc.trace]
    app.logger.info("%s: %s", exc.code, exc.message)
    return jsonify(body), exc.status


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>Algorithm Playback</title>
  <style>
    body  { font-family: system-ui, sans-serif; background: #0f1117; color: #e2e8f0; margin: 2rem; }
    h2    { color: #63b3ed; margin-top: 2rem; text-transform: capitalize; }
    table { border-collapse: collapse; width: 100%; }
    td, th { border-bottom: 1px solid #2d3748; padding: .5rem; text-align: left; vertical-align: top; }
    code  { color: #f6ad55; }
  </style>
</head>
<body>
  <h1>Algorithm Playback</h1>
  {% for family, algos in families %}
  <h2>{{ family }}</h2>
  <table>
    <tr><th>Key</th><th>Algorithm</th><th>Time</th><th>Space</th><th>Description</th></tr>
    {% for a in algos %}
    <tr>
      <td><code>{{ a.key }}</code></td>
      <td>{{ a.label }}</td>
      <td>{{ a.complexity_time }}</td>
      <td>{{ a.complexity_space }}</td>
      <td>{{ a.description }}</td>
    </tr>
    {% endfor %}
  </table>
  {% endfor %}
</body>
</html>
"""


@app.route("/")
def index():
    families = [(f, algorithms_by_family(f)) for f in FAMILIES]
    return render_template_string(INDEX_TEMPLATE, families=families)


@app.route("/api/health")
def api_health():
    return jsonify({"status": "ok", "message": "API is working!"})


@app.route("/api/algorithms")
def api_algorithms():
    return jsonify([a.card() for a in list_algorithms()])


# ---------------------------------------------------------------------------
# API: Arrays (sorting / searching)
# ---------------------------------------------------------------------------
@app.route("/api/array/load", methods=["POST"])
def api_array_load():
    values = parse_elements(payload().get("values", ""))
    session["array"] = values
    return jsonify({"array": values})


@app.route("/api/array/clear", methods=["POST"])
def api_array_clear():
    session.pop("array", None)
    return jsonify({"array": None})


@app.route("/api/sort", methods=["POST"])
def api_sort():
    data = payload()
    info = algorithm_for("sorting", data.get("algorithm", ""))
    return jsonify(run(info.key, values=get_array(), order=data.get("order", "ascending")))


@app.route("/api/search", methods=["POST"])
def api_search():
    data = payload()
    info = algorithm_for("searching", data.get("algorithm", ""))
    out  = run(info.key, values=get_array(), target=data.get("target"))
    # auto-sorted input replaces the stored array, as shown to the user
    if out["notices"]:
        session["array"] = out["artifact"]["sequence"]
    return jsonify(out)


# ---------------------------------------------------------------------------
# API: Graphs
# ---------------------------------------------------------------------------
@app.route("/api/graph/load", methods=["POST"])
def api_graph_load():
    data    = payload()
    edges   = data.get("edges", "")
    weights = data.get("weights", "")
    # edges and weights must share a form: both text or both lists
    if weights and isinstance(edges, str) != isinstance(weights, str):
        raise GraphParseError(
            "Edges and weights were given in different forms.",
            "Send both as text (\"A-B:5\") or both as lists ([\"A\", \"B\", 5]).",
        )
    if isinstance(edges, str):
        graph = Graph.from_text(edges, weights or "")
    else:
        graph = Graph.from_edges(edges, weights or [])
    session["graph"] = graph.to_dict()
    return jsonify(session["graph"])


@app.route("/api/graph/clear", methods=["POST"])
def api_graph_clear():
    session.pop("graph", None)
    return jsonify({"graph": None})


@app.route("/api/graph/run", methods=["POST"])
def api_graph_run():
    data = payload()
    info = algorithm_for("graph", data.get("algorithm", ""))
    inputs = {"graph": get_graph(), "start": data.get("start"), "end": data.get("end")}
    if info.has_heuristic:
        inputs["heuristic"] = make_heuristic(data.get("heuristic", "euclidean"), data.get("positions"))
    return jsonify(run(info.key, **inputs))


# ---------------------------------------------------------------------------
# API: Binary search tree
# ---------------------------------------------------------------------------
@app.route("/api/tree/build", methods=["POST"])
def api_tree_build():
    out = run("tree_build", values=payload().get("values", ""))
    session["tree"] = out["artifact"]["values"]
    return jsonify(out)


@app.route("/api/tree/insert", methods=["POST"])
def api_tree_insert():
    out = run("tree_insert", tree=get_tree(), value=payload().get("value"))
    session["tree"] = out["artifact"]["values"]
    return jsonify(out)


@app.route("/api/tree/search", methods=["POST"])
def api_tree_search():
    return jsonify(run("tree_search", tree=get_tree(), value=payload().get("value")))


@app.route("/api/tree/traverse", methods=["POST"])
def api_tree_traverse():
    key = payload().get("order", "inorder")
    if key not in TRAVERSALS:
        raise UnknownAlgorithm(
            f"Unknown traversal: '{key}'.", "Choose one of: inorder, preorder, postorder."
        )
    return jsonify(run(key, tree=get_tree()))


# ---------------------------------------------------------------------------
# API: Linked list
# ---------------------------------------------------------------------------
@app.route("/api/list/build", methods=["POST"])
def api_list_build():
    data   = payload()
    doubly = data.get("kind", "singly") == "doubly"
    out    = run("list_build", values=data.get("values", ""), doubly=doubly)
    session["list"] = {"values": out["artifact"]["values"], "doubly": doubly}
    return jsonify(out)


@app.route("/api/list/search", methods=["POST"])
def api_list_search():
    return jsonify(run("list_search", lst=get_list(), value=payload().get("value")))


@app.route("/api/list/delete", methods=["POST"])
def api_list_delete():
    lst = get_list()
    out = run("list_delete", lst=lst, value=payload().get("value"))
    if out["artifact"]["deleted"]:
        session["list"] = {"values": out["artifact"]["values"], "doubly": lst.doubly}
    return jsonify(out)


# ---------------------------------------------------------------------------
# CLI: terminal playback through the scheduler
# ---------------------------------------------------------------------------
async def _play(result, speed: int):
    done = asyncio.get_running_loop().create_future()

    def on_step(s):
        click.echo(f"[{s.kind.value:>9}] {s.narrative}")

    scheduler = PlaybackScheduler(on_step, on_complete=done.set_result, speed=speed)
    scheduler.start(result.trace, artifact=result.artifact)
    return await done


@app.cli.command("play")
@click.argument("algorithm")
@click.argument("values")
@click.option("--order", default="ascending", type=click.Choice(["ascending", "descending"]))
@click.option("--target", default=None, help="Value to look for (searching algorithms).")
@click.option("--speed", default=DEFAULT_SPEED, type=int, help="Slider value, 10 (slow) to 3000 (fast).")
def play_command(algorithm, values, order, target, speed):
    """Replay a sorting or searching trace in the terminal."""
    info = get_algorithm(algorithm)
    if info is None or info.family not in ("sorting", "searching"):
        raise click.BadParameter(f"'{algorithm}' is not a sorting or searching algorithm.")

    inputs = {"values": values}
    if info.family == "sorting":
        inputs["order"] = order
    else:
        inputs["target"] = target

    try:
        result = Recorder().record(algorithm, **inputs)
    except VisualizerError as exc:
        raise click.ClickException(f"{exc.message} {exc.instruction}") from exc

    for notice in result.notices:
        click.echo(f"Notice: {notice.message}")
    artifact = asyncio.run(_play(result, speed))
    click.echo(f"Result: {artifact}")


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    print("=" * 60)
    print("  Algorithm Playback")
    print("  Starting Flask server...")
    print("  Open http://localhost:5000")
    print("=" * 60)
    app.run(debug=True, host="0.0.0.0", port=5000)
