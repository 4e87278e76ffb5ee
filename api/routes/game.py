"""Game API endpoints."""

import logging
from fastapi import APIRouter, HTTPException, Header
from typing import Annotated, Callable

from api.schemas import GameStateResponse, HintsResponse, MoveRequest, ProbeResponse
from api.session import GameSession, get_session_store
from core.game import KlondikeGame

logger = logging.getLogger(__name__)

router = APIRouter()

SessionHeader = Annotated[str, Header(alias="X-Session-ID")]


def _game_state_response(game: KlondikeGame) -> GameStateResponse:
    """Convert game state to response."""
    return GameStateResponse.from_state(
        game.get_state(),
        phase=game.phase.name,
        can_undo=game.can_undo(),
        is_win=game.is_win(),
    )


async def _get_session(session_id: str) -> GameSession:
    """Look up a session or fail with 404."""
    session = await get_session_store().get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Unknown or expired session")
    return session


async def _run(
    session_id: str,
    label: str,
    command: Callable[[KlondikeGame], bool],
) -> GameStateResponse:
    """Run one engine command under the session lock."""
    session = await _get_session(session_id)
    async with session.lock:
        if not command(session.game):
            logger.debug("Rejected %s", label)
            raise HTTPException(status_code=400, detail=f"Illegal move: {label}")
        return _game_state_response(session.game)


@router.post("/new")
async def new_game(
    session_id: Annotated[str | None, Header(alias="X-Session-ID")] = None,
) -> dict[str, str]:
    """Create a new game session, or re-deal an existing one."""
    store = get_session_store()
    if session_id is not None:
        session = await store.get(session_id)
        if session is not None:
            async with session.lock:
                session.game.init()
            return {"session_id": session_id}

    return {"session_id": await store.create()}


@router.get("/state")
async def get_state(session_id: SessionHeader) -> GameStateResponse:
    """Get current game state."""
    session = await _get_session(session_id)
    return _game_state_response(session.game)


@router.post("/draw")
async def draw(session_id: SessionHeader) -> GameStateResponse:
    """Draw a card from the stock, recycling the waste when the stock is empty."""
    return await _run(session_id, "draw", lambda game: game.draw_one())


@router.post("/undo")
async def undo(session_id: SessionHeader) -> GameStateResponse:
    """Undo the last move."""
    return await _run(session_id, "undo", lambda game: game.undo())


@router.post("/auto-waste")
async def auto_waste(session_id: SessionHeader) -> GameStateResponse:
    """Send the waste card to the first pile that accepts it."""
    return await _run(session_id, "auto-waste", lambda game: game.auto_move_waste())


@router.post("/move")
async def move(request: MoveRequest, session_id: SessionHeader) -> GameStateResponse:
    """Execute a move."""
    core_move = request.to_move()
    return await _run(session_id, str(core_move), lambda game: game.apply(core_move))


@router.post("/probe")
async def probe(request: MoveRequest, session_id: SessionHeader) -> ProbeResponse:
    """Check whether a move is legal without performing it."""
    session = await _get_session(session_id)
    return ProbeResponse(legal=session.game.can_apply(request.to_move()))


@router.get("/hints")
async def hints(session_id: SessionHeader) -> HintsResponse:
    """List every legal move in the current position."""
    session = await _get_session(session_id)
    return HintsResponse(
        moves=[MoveRequest.from_move(m) for m in session.game.legal_moves()]
    )
