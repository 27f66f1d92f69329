"""HTTP API entrypoint for driving a duel from a web UI."""

from typing import Any, Dict, List, Literal, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from agents import create_agent_for_difficulty
from duel.core.types import ActionValidation, Difficulty, Phase, Player
from duel.game import DuelGame, auto_pick_roster
from infra.logger import configure_from_settings, get_logger
from infra.settings import get_settings
from runtime.logfire_config import configure_logfire
from runtime.runner import GameRunner

# Configure logging and observability before any game is created.
configure_from_settings(get_settings())
configure_logfire()

log = get_logger(__name__)

app = FastAPI(title="Kings of the West")
game: DuelGame | None = None
runner: GameRunner | None = None


# Allow a browser-based board (served from file:// or other origins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class StartRequest(BaseModel):
    mode: Literal["pvp", "pvai"] = "pvai"
    roster_one: List[str]
    roster_two: Optional[List[str]] = None
    difficulty: Optional[str] = None
    seed: Optional[int] = None


class PlaceRequest(BaseModel):
    row: int
    col: int


class SelectRequest(BaseModel):
    piece_id: int


class MoveRequest(BaseModel):
    piece_id: int
    row: int
    col: int


class AttackRequest(BaseModel):
    attacker_id: int
    target_id: int


def _active_game() -> DuelGame:
    if game is None:
        raise HTTPException(400, "No active game")
    return game


def _human_game() -> DuelGame:
    """The active game, refusing input while an AI-controlled side is to move."""
    current = _active_game()
    if current.state.phase == Phase.PLAY and current.is_ai(current.current_player):
        raise HTTPException(400, {"error_code": "AI_TURN", "message": f"{current.current_player} is played by the AI"})
    return current


def _respond(result: ActionValidation, **extra: Any) -> Dict[str, Any]:
    """Map a rejection to HTTP 400; otherwise return the result with the new state."""
    if not result:
        raise HTTPException(400, {"error_code": result.error_code, "message": result.message})
    return {"result": result.to_dict(), "state": _active_game().to_dict(), **extra}


@app.post("/start")
def start(request: StartRequest):
    global game, runner

    new_game = DuelGame(seed=request.seed)
    new_runner: GameRunner | None = None
    roster_two = request.roster_two

    if request.mode == "pvai":
        difficulty = Difficulty.from_setting(request.difficulty or get_settings().ai_difficulty)
        agent = create_agent_for_difficulty(difficulty, Player.TWO, seed=request.seed)
        new_runner = GameRunner(new_game, {Player.TWO: agent})
        if roster_two is None:
            roster_two = [a.value for a in auto_pick_roster(new_game.rng)]
    elif roster_two is None:
        raise HTTPException(400, {"error_code": "ROSTER_SIZE", "message": "Player 2 must choose a roster"})

    result = new_game.start(request.roster_one, roster_two)
    if not result:
        raise HTTPException(400, {"error_code": result.error_code, "message": result.message})

    game, runner = new_game, new_runner
    log.info("New %s game started", request.mode)
    return _respond(result)


@app.post("/place")
def place(request: PlaceRequest):
    return _respond(_active_game().place(request.row, request.col))


@app.post("/auto-place")
def auto_place():
    return _respond(_active_game().auto_place())


@app.post("/roll")
def roll():
    outcome = _human_game().roll()
    return _respond(outcome.validation, roll=outcome.to_dict())


@app.post("/select")
def select(request: SelectRequest):
    options = _human_game().select(request.piece_id)
    return _respond(options.validation, selection=options.to_dict())


@app.post("/move")
def move(request: MoveRequest):
    return _respond(_human_game().move(request.piece_id, request.row, request.col))


@app.post("/attack")
def attack(request: AttackRequest):
    return _respond(_human_game().attack(request.attacker_id, request.target_id))


@app.post("/end-turn")
def end_turn():
    return _respond(_human_game().end_turn())


@app.post("/ai-turn")
def ai_turn():
    _active_game()
    if runner is None or not runner.is_ai_turn():
        raise HTTPException(400, {"error_code": "WRONG_PHASE", "message": "It is not the AI's turn"})
    turns = runner.run_ai_turns()
    return _respond(ActionValidation.success(f"AI played {len(turns)} turn(s)"), turns=[t.to_dict() for t in turns])


@app.get("/state")
def state():
    return {"state": _active_game().to_dict()}
