import time
from uuid import uuid4


SQUARE = {
    "name": "Square",
    "nodes": [{"id": n} for n in "ABCD"],
    "edges": [
        {"id": "ab", "start": "A", "end": "B"},
        {"id": "bc", "start": "B", "end": "C"},
        {"id": "cd", "start": "C", "end": "D"},
        {"id": "da", "start": "D", "end": "A"},
    ],
}


def start_konigsberg(client):
    response = client.post("/games/", json={"topology": "konigsberg"})
    assert response.status_code == 201
    return response.json()


def start_square(client):
    puzzle_id = client.post("/puzzles/", json=SQUARE).json()["id"]
    return client.post("/games/", json={"puzzle_id": puzzle_id}).json()


class TestGameApi:

    def test_konigsberg_game(self, client):
        state = start_konigsberg(client)
        assert state["message"] == "Ready to play..."
        assert state["graph"]["variant"] == "grouped"
        assert len(state["graph"]["edges"]) == 7
        assert state["classification"] == {
            "kind": "impossible", "odd_nodes": ["A", "B", "C", "D"], "connected": True,
        }
        assert state["player"]["status"] == "not_started"

    def test_select_and_cross(self, client):
        game_id = start_konigsberg(client)["id"]
        state = client.post(f"/games/{game_id}/select", json={"node_id": "A1"}).json()
        assert state["message"] == "Started at A1"
        assert state["player"]["next_targets"] == ["D1", "D2", "C4"]

        state = client.post(f"/games/{game_id}/select", json={"node_id": "D5"}).json()
        assert state["message"] == "Crossed bridge #1 -> Arrived at Land D"
        assert state["edge_id"] == "1"
        assert state["player"]["position"] == "D1"
        assert state["player"]["unit"] == "D"
        assert state["player"]["moves"] == ["1"]
        used = [edge["id"] for edge in state["graph"]["edges"] if edge["used"]]
        assert used == ["1"]

    def test_invalid_and_unknown_nodes(self, client):
        game_id = start_konigsberg(client)["id"]
        client.post(f"/games/{game_id}/select", json={"node_id": "A1"})

        state = client.post(f"/games/{game_id}/select", json={"node_id": "B6"}).json()
        assert state["message"] == "No available bridge to cross from Land A"
        assert state["level"] == "warning"

        state = client.post(f"/games/{game_id}/select", json={"node_id": "Z"}).json()
        assert state["message"] == "Unknown node Z"

    def test_undo_and_reset(self, client):
        game_id = start_konigsberg(client)["id"]
        client.post(f"/games/{game_id}/select", json={"node_id": "A1"})
        client.post(f"/games/{game_id}/select", json={"node_id": "C7"})

        state = client.post(f"/games/{game_id}/undo").json()
        assert state["message"] == "Undid bridge #4, back at Land A"
        assert state["player"]["position"] == "A1"

        state = client.post(f"/games/{game_id}/reset").json()
        assert state["message"] == "Game reset."
        assert state["player"]["status"] == "not_started"

    def test_suggest_fix_then_add_bridge(self, client):
        game_id = start_konigsberg(client)["id"]
        state = client.post(f"/games/{game_id}/suggest-fix").json()
        assert state["suggestions"] == [["A", "B"]]

        state = client.post(f"/games/{game_id}/bridges", json={"start": "A1", "end": "B5"}).json()
        assert state["message"] == "Added bridge #8 between A1 and B5 (now trail)"
        assert state["classification"]["kind"] == "trail"
        assert state["classification"]["odd_nodes"] == ["C", "D"]

        state = client.post(f"/games/{game_id}/hint").json()
        assert state["message"].startswith("Hint: cross bridge #")

    def test_hint_on_impossible_graph(self, client):
        game_id = start_konigsberg(client)["id"]
        state = client.post(f"/games/{game_id}/hint").json()
        assert state["message"] == "No valid Eulerian path exists."

    def test_ai_solve_impossible(self, client):
        game_id = start_konigsberg(client)["id"]
        state = client.post(f"/games/{game_id}/ai-solve").json()
        assert state["message"] == "Unsolvable: Odd-degree nodes: A, B, C, D"
        assert state["level"] == "error"
        assert state["player"]["animating"] is False

    def test_ai_solve_without_animation(self, client):
        game_id = start_square(client)["id"]
        state = client.post(f"/games/{game_id}/ai-solve", params={"animate": False}).json()
        assert state["message"] == "AI finished traversal"
        assert state["player"]["completed"] is True
        assert state["player"]["outcome"] == "circuit_completed"
        assert state["player"]["moves"] == ["ab", "bc", "cd", "da"]
        assert all(edge["used"] for edge in state["graph"]["edges"])

    def test_reset_stops_animation(self, client):
        game_id = start_square(client)["id"]
        state = client.post(f"/games/{game_id}/ai-solve", params={"animate": True}).json()
        assert state["message"] == "AI solving from node A: 4 bridges"
        assert state["player"]["animating"] is True

        state = client.post(f"/games/{game_id}/reset").json()
        assert state["player"]["status"] == "not_started"
        assert state["player"]["animating"] is False

        time.sleep(0.7)
        state = client.get(f"/games/{game_id}").json()
        assert state["player"]["moves"] == []
        assert not any(edge["used"] for edge in state["graph"]["edges"])

    def test_random_game(self, client):
        state = client.post("/games/", json={"difficulty": "hard", "seed": 5}).json()
        assert state["graph"]["variant"] == "single"
        assert len(state["graph"]["nodes"]) == 8
        assert len(state["graph"]["edges"]) == 12
        assert state["classification"]["connected"] is True

    def test_new_puzzle(self, client):
        game_id = start_konigsberg(client)["id"]
        client.post(f"/games/{game_id}/select", json={"node_id": "A1"})

        state = client.post(f"/games/{game_id}/new-puzzle", json={"difficulty": "medium", "seed": 1}).json()
        assert state["message"] == "New puzzle ready"
        assert state["graph"]["variant"] == "single"
        assert len(state["graph"]["nodes"]) == 6
        assert state["player"]["status"] == "not_started"

        state = client.post(f"/games/{game_id}/new-puzzle", json={}).json()
        assert len(state["graph"]["nodes"]) == 4

    def test_stranding_can_be_disabled(self, client):
        puzzle = dict(SQUARE, edges=SQUARE["edges"][:2])
        puzzle_id = client.post("/puzzles/", json=puzzle).json()["id"]
        game_id = client.post("/games/", json={"puzzle_id": puzzle_id, "detect_stranding": False}).json()["id"]
        client.post(f"/games/{game_id}/select", json={"node_id": "B"})
        state = client.post(f"/games/{game_id}/select", json={"node_id": "A"}).json()
        assert state["player"]["status"] == "positioned"
        assert state["player"]["stranded"] is False

    def test_stranded_player(self, client):
        puzzle = dict(SQUARE, edges=SQUARE["edges"][:2])
        puzzle_id = client.post("/puzzles/", json=puzzle).json()["id"]
        game_id = client.post("/games/", json={"puzzle_id": puzzle_id}).json()["id"]
        client.post(f"/games/{game_id}/select", json={"node_id": "B"})
        state = client.post(f"/games/{game_id}/select", json={"node_id": "A"}).json()
        assert state["player"]["stranded"] is True
        assert state["level"] == "error"

    def test_delete_game(self, client):
        game_id = start_konigsberg(client)["id"]
        assert client.delete(f"/games/{game_id}").status_code == 204
        assert client.get(f"/games/{game_id}").status_code == 404

    def test_unknown_game(self, client):
        assert client.get(f"/games/{uuid4()}").status_code == 404
        assert client.post(f"/games/{uuid4()}/undo").status_code == 404

    def test_unknown_puzzle(self, client):
        assert client.post("/games/", json={"puzzle_id": str(uuid4())}).status_code == 404

    def test_two_sources_rejected(self, client):
        response = client.post("/games/", json={"puzzle_id": str(uuid4()), "topology": "konigsberg"})
        assert response.status_code == 422
