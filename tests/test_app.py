"""Tests for the Flask JSON API."""

import pytest

from graph import SUGGESTION


class TestReadOnly:
    def test_state(self, client):
        resp = client.get("/api/state")
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["graph_name"] == "Sample Graph"
        assert len(data["graph"]["nodes"]) == 5

    def test_algorithms(self, client):
        data = client.get("/api/algorithms").get_json()
        assert [a["id"] for a in data] == ["dijkstra", "bfs", "dfs", "prim"]
        assert data[0]["selected"] is True

    def test_samples(self, client):
        data = client.get("/api/samples").get_json()
        assert data[0] == {"key": "complete4", "name": "Complete K₄", "description": "4 nodes, all connected"}
        assert len(data) == 8


class TestGraphRoutes:
    def test_parse_persists_per_session(self, client):
        resp = client.post("/api/graph/parse", json={"text": "cycle 4"})
        assert resp.status_code == 200
        assert resp.get_json()["strategy"] == "named"
        data = client.get("/api/state").get_json()
        assert len(data["graph"]["nodes"]) == 4

    def test_sessions_are_isolated(self, app):
        first, second = app.test_client(), app.test_client()
        first.post("/api/graph/parse", json={"text": "complete 3"})
        assert len(second.get("/api/state").get_json()["graph"]["nodes"]) == 5

    def test_parse_failure(self, client):
        resp = client.post("/api/graph/parse", json={"text": "???"})
        assert resp.status_code == 400
        assert resp.get_json() == {
            "error": "Could not parse input", "kind": "format", "suggestion": SUGGESTION,
        }

    def test_parse_domain_failure(self, client):
        resp = client.post("/api/graph/parse", json={"text": "complete 30"})
        assert resp.status_code == 400
        body = resp.get_json()
        assert body["kind"] == "domain"
        assert "suggestion" not in body

    def test_sample(self, client):
        assert client.post("/api/graph/sample", json={"key": "petersen"}).get_json()["graph_name"] == "Petersen Graph"
        resp = client.post("/api/graph/sample", json={"key": "nope"})
        assert resp.status_code == 400
        assert resp.get_json()["kind"] == "domain"

    def test_generate(self, client):
        resp = client.post("/api/graph/generate", json={"kind": "bipartite", "n": 2, "m": 2})
        assert resp.status_code == 200
        assert len(resp.get_json()["graph"]["edges"]) == 4
        assert client.post("/api/graph/generate", json={"kind": "star", "n": 25}).status_code == 400
        bad = client.post("/api/graph/generate", json={"kind": "star", "n": "many"})
        assert bad.get_json()["kind"] == "config"

    def test_change(self, client):
        graph = {"nodes": [{"id": "a"}, {"id": "b"}], "edges": [{"source": "a", "target": "b", "weight": 2}]}
        data = client.post("/api/graph/change", json={"graph": graph}).get_json()
        assert data["graph_name"] == "Custom Graph"
        assert data["graph"]["edges"][0]["weight"] == 2

    def test_change_rejects_invalid_graph(self, client):
        graph = {"nodes": [{"id": "a"}], "edges": [{"source": "a", "target": "z"}]}
        resp = client.post("/api/graph/change", json={"graph": graph})
        assert resp.status_code == 400
        assert "missing node 'z'" in resp.get_json()["error"]


    @pytest.mark.parametrize("route,body", [
        ("/api/graph/change", {"graph": {"nodes": ["1"]}}),
        ("/api/graph/change", {"graph": [1, 2]}),
        ("/api/graph/change", {"graph": {"nodes": [{"id": "1"}, {"id": "2"}],
                                   "edges": [{"source": "1", "target": "2", "weight": "nan"}]}}),
    ])
    def test_malformed_graph_is_rejected(self, client, route, body):
        resp = client.post(route, json=body)
        assert resp.status_code == 400
        assert resp.get_json()["kind"] == "domain"
        assert client.get("/api/state").get_json()["graph_name"] == "Sample Graph"

    def test_non_object_body_is_treated_as_empty(self, client):
        resp = client.post("/api/graph/parse", json=["cycle 4"])
        assert resp.status_code == 400
        assert resp.get_json()["kind"] == "format"
        assert client.post("/api/config/algo", json="dfs").status_code == 400
    def test_clear_and_undo_redo(self, client):
        assert client.post("/api/graph/clear").get_json()["empty"] is True
        data = client.post("/api/history/undo").get_json()
        assert data["empty"] is False
        assert data["history"]["can_redo"] is True
        assert client.post("/api/history/redo").get_json()["graph_name"] == "Empty Graph"


class TestRunAndPlayback:
    def test_run_and_step(self, client):
        resp = client.post("/api/run")
        assert resp.status_code == 200
        total = resp.get_json()["total_steps"]
        assert total > 0
        data = client.post("/api/step/next").get_json()
        assert data["playback"]["index"] == 1
        data = client.post("/api/step/prev").get_json()
        assert data["playback"]["index"] == 0

    def test_auto_play_advances_between_requests(self, client, clock):
        client.post("/api/run")
        client.post("/api/step/play")
        clock.advance(2.0)
        data = client.get("/api/state").get_json()
        assert data["playback"]["index"] == 2
        assert data["playback"]["state"] == "playing"
        client.post("/api/step/pause")
        clock.advance(5.0)
        assert client.get("/api/state").get_json()["playback"]["index"] == 2

    def test_reset(self, client):
        client.post("/api/run")
        client.post("/api/step/next")
        data = client.post("/api/step/reset").get_json()
        assert data["playback"]["index"] == 0
        assert data["playback"]["state"] == "ready"

    def test_run_failure(self, client):
        client.post("/api/graph/clear")
        resp = client.post("/api/run")
        assert resp.status_code == 400
        assert resp.get_json()["kind"] == "domain"

    def test_unknown_action(self, client):
        assert client.post("/api/step/rewind").status_code == 404


class TestConfigRoutes:
    def test_select_algorithm(self, client):
        assert client.post("/api/config/algo", json={"algorithm_id": "dfs"}).get_json()["algorithm_id"] == "dfs"
        resp = client.post("/api/config/algo", json={"algorithm_id": "astar"})
        assert resp.status_code == 400
        assert resp.get_json()["kind"] == "config"

    def test_nodes(self, client):
        data = client.post("/api/config/nodes", json={"start_node": "2", "end_node": ""}).get_json()
        assert data["start_node"] == "2"
        assert data["end_node"] is None
        assert client.post("/api/config/nodes", json={"start_node": "99"}).status_code == 400

    def test_speed(self, client):
        assert client.post("/api/config/speed", json={"speed": "fast"}).get_json()["speed"] == 2.0
        assert client.post("/api/config/speed", json={"speed": 10}).get_json()["speed"] == 3.0
        assert client.post("/api/config/speed", json={"speed": "0.5"}).get_json()["speed"] == 0.5
        assert client.post("/api/config/speed", json={"speed": "warp"}).status_code == 400


class TestExport:
    def test_export_before_run(self, client):
        resp = client.get("/api/run/export")
        assert resp.status_code == 400
        assert resp.get_json()["kind"] == "domain"

    def test_export_is_json_safe(self, client):
        graph = {
            "nodes": [{"id": "a"}, {"id": "b"}, {"id": "c"}],
            "edges": [{"source": "a", "target": "b", "weight": 2}],
        }
        client.post("/api/graph/change", json={"graph": graph})
        client.post("/api/config/nodes", json={"start_node": "a"})
        client.post("/api/run")
        resp = client.get("/api/run/export")
        assert resp.status_code == 200
        assert b"Infinity" not in resp.data
        data = resp.get_json()
        assert data["algorithm_id"] == "dijkstra"
        assert data["config"]["start_node"] == "a"
        assert [n["id"] for n in data["graph"]["nodes"]] == ["a", "b", "c"]
        assert data["graph"]["edges"] == [{"id": "ea-b", "source": "a", "target": "b", "weight": 2.0}]
        assert data["metrics"]["success"] is True
        assert data["result"]["final_data"]["distances"] == {"a": 0, "b": 2, "c": None}
        assert data["result"]["total_steps"] == data["metrics"]["total_steps"]


class TestSessionExpiry:
    def test_idle_sessions_are_dropped(self, app, clock):
        store = app.extensions["editor_sessions"]
        clients = [app.test_client() for _ in range(5)]
        for c in clients:
            c.get("/api/state")
        assert len(store) == 5

        clock.advance(store.idle_timeout + 1)
        clients[0].get("/api/state")
        assert len(store) == 1

    def test_active_sessions_survive(self, app, clock):
        store = app.extensions["editor_sessions"]
        busy, idle = app.test_client(), app.test_client()
        busy.post("/api/graph/parse", json={"text": "cycle 4"})
        idle.get("/api/state")
        for _ in range(3):
            clock.advance(store.idle_timeout / 2)
            busy.get("/api/state")
        assert len(store) == 1
        assert busy.get("/api/state").get_json()["graph_name"] == "cycle 4"

    def test_expired_session_releases_its_timer(self, app, client, clock):
        store = app.extensions["editor_sessions"]
        client.post("/api/run")
        client.post("/api/step/play")
        assert store.scheduler.active_count == 1

        clock.advance(store.idle_timeout + 1)
        app.test_client().get("/api/state")
        assert store.scheduler.active_count == 0

    def test_returning_browser_starts_fresh(self, app, client, clock):
        store = app.extensions["editor_sessions"]
        client.post("/api/graph/parse", json={"text": "cycle 4"})
        clock.advance(store.idle_timeout + 1)
        assert client.get("/api/state").get_json()["graph_name"] == "Sample Graph"
