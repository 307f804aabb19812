"""
Battles Router

Endpoints:
1) POST /battles                  - start a battle on a fresh random board
2) GET /battles                   - the current user's battles, newest first
3) GET /battles/{battle_id}       - one battle (masked board)
4) POST /battles/{battle_id}/guesses
   - Guess a cell. Off-board coordinates are reported as a miss and do not
     change the board.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.auth import get_current_user
from app.db.session import get_db
from app.models.battle import Battle
from app.models.user import User
from app.schemas.battle import BattleOut, GuessIn, GuessOut
from app.services import battles as battle_service
from app.services.registry import start_battle

router = APIRouter(prefix="/battles", tags=["battles"])


def _owned_battle(db: Session, user: User, battle_id: int) -> Battle:
    battle = battle_service.get_battle(db, user, battle_id)
    if not battle:
        raise HTTPException(404, "Battle not found")
    return battle


@router.post("", response_model=BattleOut, status_code=201)
def create_battle(
    user: User = Depends(get_current_user), db: Session = Depends(get_db)
):
    try:
        battle = start_battle(db, user)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to start battle: {e}")
    return BattleOut.from_battle(battle)


@router.get("", response_model=List[BattleOut])
def list_battles(
    user: User = Depends(get_current_user), db: Session = Depends(get_db)
):
    return [BattleOut.from_battle(b) for b in battle_service.list_battles(db, user)]


@router.get("/{battle_id}", response_model=BattleOut)
def read_battle(
    battle_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return BattleOut.from_battle(_owned_battle(db, user, battle_id))


@router.post("/{battle_id}/guesses", response_model=GuessOut)
def submit_guess(
    battle_id: int,
    payload: GuessIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Guess a cell of the user's battle.

    Returns:
        Hit flag, win flag and the updated masked board.

    Raises:
        HTTPException: 404 if the battle is missing or belongs to someone else.
    """
    battle = _owned_battle(db, user, battle_id)
    try:
        hit = battle_service.guess(db, battle, payload.row, payload.col)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to save guess: {e}")

    return GuessOut(
        hit=hit,
        all_ships_sunk=battle_service.all_ships_sunk(battle),
        battle=BattleOut.from_battle(battle),
    )
