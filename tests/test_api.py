import pytest
from fastapi.testclient import TestClient

import api.app as app_module
from duel.core.types import Player

ROSTER_ONE = ["gunslinger", "gunslinger", "bruiser", "bruiser"]
ROSTER_TWO = ["bruiser"] * 4


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(app_module, "game", None)
    monkeypatch.setattr(app_module, "runner", None)
    return TestClient(app_module.app)


def test_no_active_game_is_rejected(client):
    assert client.get("/state").status_code == 400
    assert client.post("/roll").status_code == 400


def test_pvp_start_place_state_round_trip(client):
    response = client.post("/start", json={"mode": "pvp", "roster_one": ROSTER_ONE, "roster_two": ROSTER_TWO, "seed": 1})
    assert response.status_code == 200
    assert response.json()["state"]["phase"] == "placement"

    placed = client.post("/place", json={"row": 4, "col": 1})
    assert placed.status_code == 200

    state = client.get("/state").json()["state"]
    pieces = state["players"]["1"]["pieces"]
    assert {(p["r"], p["c"]) for p in pieces} == {(5, 0), (4, 1)}
    assert state["awaiting_placement"] == 3


def test_rejection_maps_to_400_with_code(client):
    client.post("/start", json={"mode": "pvp", "roster_one": ROSTER_ONE, "roster_two": ROSTER_TWO, "seed": 1})
    response = client.post("/place", json={"row": 3, "col": 1})
    assert response.status_code == 400
    assert response.json()["detail"]["error_code"] == "OUT_OF_BAND"


def test_bad_roster_is_rejected(client):
    response = client.post("/start", json={"mode": "pvp", "roster_one": ROSTER_ONE[:3], "roster_two": ROSTER_TWO})
    assert response.status_code == 400
    assert response.json()["detail"]["error_code"] == "ROSTER_SIZE"


def test_pvai_auto_picks_roster_and_plays_ai_turns(client):
    response = client.post("/start", json={"roster_one": ROSTER_ONE, "difficulty": "hard", "seed": 4})
    assert response.status_code == 200
    assert len(response.json()["state"]["roster_choices"]["2"]) == 4

    assert client.post("/auto-place").status_code == 200
    state = client.get("/state").json()["state"]
    assert state["phase"] == "play"
    assert len(state["players"]["2"]["pieces"]) == 5

    if state["current_player"] == 2:
        turn = client.post("/ai-turn")
        assert turn.status_code == 200
        assert turn.json()["turns"]
    else:
        assert client.post("/ai-turn").status_code == 400
        rolled = client.post("/roll")
        assert rolled.status_code == 200
        assert rolled.json()["roll"]["value"] in range(1, 7)


def test_human_input_is_refused_while_the_ai_is_to_move(client):
    client.post("/start", json={"roster_one": ROSTER_ONE, "difficulty": "easy", "seed": 4})
    assert client.post("/auto-place").status_code == 200
    app_module.game.state.current_player = Player.TWO
    app_module.game.state.dice = None

    for path in ("/roll", "/end-turn"):
        response = client.post(path)
        assert response.status_code == 400
        assert response.json()["detail"]["error_code"] == "AI_TURN"
    assert app_module.game.current_player == Player.TWO
    assert app_module.game.state.dice is None

    assert client.post("/ai-turn").status_code == 200
