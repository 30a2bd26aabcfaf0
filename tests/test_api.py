import pytest

from main import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


def test_health(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    assert res.get_json()["message"] == "API is working!"


def test_catalogue(client):
    res = client.get("/")
    assert res.status_code == 200
    assert b"Bubble Sort" in res.data
    cards = client.get("/api/algorithms").get_json()
    assert {c["family"] for c in cards} == {"sorting", "searching", "graph", "tree", "list"}


# ---------------------------------------------------------------------------
# Arrays
# ---------------------------------------------------------------------------
def test_sort_without_array_is_409(client):
    res = client.post("/api/sort", json={"algorithm": "bubble_sort"})
    assert res.status_code == 409
    assert res.get_json()["error"] == "NoStructureLoaded"


def test_sort_response_shape(client):
    client.post("/api/array/load", json={"values": "5, 3, 8, 1"})
    res = client.post("/api/sort", json={"algorithm": "merge_sort", "order": "descending"})
    body = res.get_json()
    assert res.status_code == 200
    assert set(body) == {"algorithm", "steps", "artifact", "notices", "metrics"}
    assert body["artifact"]["sorted_array"] == [8, 5, 3, 1]
    assert body["metrics"]["total_steps"] == len(body["steps"])
    assert body["steps"][0]["kind"] == "compare"


def test_sorting_sorted_array_reports_notice(client):
    client.post("/api/array/load", json={"values": "1, 2, 3"})
    body = client.post("/api/sort", json={"algorithm": "heap_sort"}).get_json()
    assert body["notices"][0]["error"] == "AlreadySortedInput"
    assert body["steps"][0]["kind"] == "notice"
    assert body["metrics"]["notices"] == 1


def test_failed_load_keeps_previous_array(client):
    client.post("/api/array/load", json={"values": "3,1,2"})
    res = client.post("/api/array/load", json={"values": "1, x"})
    assert res.status_code == 400
    body = res.get_json()
    assert body["error"] == "InvalidElementInput"
    assert body["instruction"]
    sorted_ = client.post("/api/sort", json={"algorithm": "quick_sort"}).get_json()
    assert sorted_["artifact"]["sorted_array"] == [1, 2, 3]


def test_load_rejects_too_few_elements(client):
    res = client.post("/api/array/load", json={"values": [7]})
    assert res.status_code == 400


def test_clear_array(client):
    client.post("/api/array/load", json={"values": "3,1"})
    client.post("/api/array/clear")
    assert client.post("/api/sort", json={"algorithm": "bubble_sort"}).status_code == 409


def test_unknown_algorithm_for_route(client):
    client.post("/api/array/load", json={"values": "3,1"})
    res = client.post("/api/sort", json={"algorithm": "dijkstra"})
    assert res.status_code == 400
    assert res.get_json()["error"] == "UnknownAlgorithm"


def test_binary_search_auto_sort_notice(client):
    client.post("/api/array/load", json={"values": "9, 4, 7, 1"})
    body = client.post("/api/search", json={"algorithm": "binary_search", "target": 7}).get_json()
    assert body["notices"][0]["error"] == "UnsortedInputForBinarySearch"
    assert body["steps"][0]["kind"] == "notice"
    assert body["artifact"] == {"found": True, "index": 2, "sequence": [1, 4, 7, 9]}

    again = client.post("/api/search", json={"algorithm": "binary_search", "target": 7}).get_json()
    assert again["notices"] == []


# ---------------------------------------------------------------------------
# Graphs
# ---------------------------------------------------------------------------
def load_graph(client, edges="A-B, A-C, B-D, C-E", weights="A-B:5, A-C:2, B-D:4, C-E:8"):
    return client.post("/api/graph/load", json={"edges": edges, "weights": weights})


def test_graph_load_and_dijkstra(client):
    res = load_graph(client)
    assert res.get_json()["nodes"] == ["A", "B", "C", "D", "E"]
    body = client.post(
        "/api/graph/run", json={"algorithm": "dijkstra", "start": "A", "end": "D"}
    ).get_json()
    assert body["artifact"]["path"] == ["A", "B", "D"]
    assert body["artifact"]["total_weight"] == 9


def test_graph_load_from_lists(client):
    res = client.post("/api/graph/load", json={"edges": [["A", "B"]], "weights": [["A", "B", 2]]})
    assert res.status_code == 200
    assert res.get_json()["weights"] == [["A", "B", 2]]


def test_graph_load_rejects_mixed_forms(client):
    load_graph(client)
    res = client.post("/api/graph/load", json={"edges": "A-B, B-C", "weights": [["A", "B", 3]]})
    assert res.status_code == 400
    assert res.get_json()["error"] == "GraphParseError"
    res = client.post("/api/graph/load", json={"edges": [["A", "B"]], "weights": "A-B:3"})
    assert res.get_json()["error"] == "GraphParseError"
    # the previous graph survives both rejections
    body = client.post("/api/graph/run", json={"algorithm": "bfs", "start": "A"}).get_json()
    assert body["artifact"]["order"] == ["A", "B", "C", "D", "E"]


def test_astar_with_positions(client):
    load_graph(client)
    body = client.post("/api/graph/run", json={
        "algorithm": "astar", "start": "A", "end": "D",
        "positions": {"A": [0, 0], "B": [5, 0], "C": [0, 2], "D": [9, 0], "E": [0, 10]},
    }).get_json()
    assert body["artifact"]["path"] == ["A", "B", "D"]


def test_bfs_over_api(client):
    load_graph(client)
    body = client.post("/api/graph/run", json={"algorithm": "bfs", "start": "A"}).get_json()
    assert body["artifact"]["order"] == ["A", "B", "C", "D", "E"]


def test_unreachable_end_returns_404_with_exploration(client):
    load_graph(client, "A-B, C-D", "")
    res = client.post("/api/graph/run", json={"algorithm": "dijkstra", "start": "A", "end": "D"})
    assert res.status_code == 404
    body = res.get_json()
    assert body["error"] == "PathNotFound"
    assert body["steps"][0]["kind"] == "start"


def test_bad_graph_keeps_previous(client):
    load_graph(client)
    res = load_graph(client, "A-A", "")
    assert res.status_code == 400
    assert res.get_json()["error"] == "GraphParseError"
    body = client.post("/api/graph/run", json={"algorithm": "bfs", "start": "A"}).get_json()
    assert body["artifact"]["order"] == ["A", "B", "C", "D", "E"]


def test_graph_start_and_target_errors(client):
    load_graph(client)
    res = client.post("/api/graph/run", json={"algorithm": "bfs", "start": "Z"})
    assert res.get_json()["error"] == "UnknownStartNode"
    res = client.post("/api/graph/run", json={"algorithm": "dijkstra", "start": "A"})
    assert res.get_json()["error"] == "MissingTargetNode"


def test_graph_clear(client):
    load_graph(client)
    client.post("/api/graph/clear")
    res = client.post("/api/graph/run", json={"algorithm": "bfs", "start": "A"})
    assert res.status_code == 409


# ---------------------------------------------------------------------------
# Trees
# ---------------------------------------------------------------------------
def test_tree_build_insert_traverse_search(client):
    body = client.post("/api/tree/build", json={"values": "50, 25, 75, 10"}).get_json()
    assert body["artifact"]["values"] == [50, 25, 75, 10]

    inorder = client.post("/api/tree/traverse", json={"order": "inorder"}).get_json()
    assert inorder["artifact"]["order"] == [10, 25, 50, 75]
    preorder = client.post("/api/tree/traverse", json={"order": "preorder"}).get_json()
    assert preorder["artifact"]["order"] == [50, 25, 10, 75]

    client.post("/api/tree/insert", json={"value": 60})
    inorder = client.post("/api/tree/traverse", json={"order": "inorder"}).get_json()
    assert inorder["artifact"]["order"] == [10, 25, 50, 60, 75]

    found = client.post("/api/tree/search", json={"value": 60}).get_json()
    assert found["artifact"]["found"] is True


def test_tree_errors(client):
    assert client.post("/api/tree/search", json={"value": 1}).status_code == 409
    client.post("/api/tree/build", json={"values": "1"})
    res = client.post("/api/tree/traverse", json={"order": "levelorder"})
    assert res.get_json()["error"] == "UnknownAlgorithm"


# ---------------------------------------------------------------------------
# Linked lists
# ---------------------------------------------------------------------------
def test_doubly_list_delete_head(client):
    client.post("/api/list/build", json={"values": "10,20,30", "kind": "doubly"})
    body = client.post("/api/list/delete", json={"value": 10}).get_json()
    nodes = body["artifact"]["list"]["nodes"]
    assert nodes[0]["value"] == 20 and nodes[0]["prev"] is None
    assert body["artifact"]["values"] == [20, 30]

    search = client.post("/api/list/search", json={"value": 10}).get_json()
    assert search["artifact"] == {"found": False, "index": None}


def test_list_delete_missing_value(client):
    client.post("/api/list/build", json={"values": [1, 2]})
    body = client.post("/api/list/delete", json={"value": 5}).get_json()
    assert body["artifact"]["deleted"] is False
    assert body["steps"][-1]["kind"] == "not_found"


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------
def test_play_command_replays_trace():
    runner = app.test_cli_runner()
    result = runner.invoke(args=["play", "bubble_sort", "3,1,2", "--speed", "3000"])
    assert result.exit_code == 0, result.output
    assert "[  compare] Comparing adjacent elements 3 and 1." in result.output
    assert "Result: {'sorted_array': [1, 2, 3]}" in result.output


def test_play_command_reports_notice_and_errors():
    runner = app.test_cli_runner()
    result = runner.invoke(args=["play", "binary_search", "5,1,3", "--target", "3", "--speed", "3000"])
    assert result.exit_code == 0, result.output
    assert "Notice: Binary Search requires a sorted array." in result.output

    bad = runner.invoke(args=["play", "bubble_sort", "1"])
    assert bad.exit_code != 0
    assert "between 2 and 50" in bad.output
