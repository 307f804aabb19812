"""
Battle Service

Persisted battle operations. Every mutation rewrites the whole board and
commits; reads never write.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import commit_or_rollback
from app.models.battle import Battle
from app.models.user import User
from app.services import board

logger = logging.getLogger(__name__)

# Largest id a 64-bit INTEGER primary key can hold
MAX_ID = 2**63 - 1


def start_game(
    db: Session,
    battle: Battle,
    *,
    size: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> Battle:
    """Replace the battle's board with a freshly populated one and save it."""
    battle.matrix = board.populate(size or settings.MATRIX_SIZE, rng)
    db.add(battle)
    commit_or_rollback(db)
    db.refresh(battle)
    return battle


def guess(db: Session, battle: Battle, row: int, col: int) -> bool:
    """
    Guess a cell of the battle's board.

    Out-of-bounds coordinates return False without touching the board.
    Otherwise the cell becomes HIT or MISS, the board is saved and the
    hit flag is returned.
    """
    if not board.in_bounds(battle.matrix, row, col):
        logger.debug("Battle %s: guess (%s, %s) out of bounds", battle.id, row, col)
        return False

    is_hit, battle.matrix = board.apply_guess(battle.matrix, row, col)
    commit_or_rollback(db)
    logger.debug(
        "Battle %s: guess (%s, %s) -> %s", battle.id, row, col, "hit" if is_hit else "miss"
    )
    if is_hit and board.all_ships_sunk(battle.matrix):
        logger.info("Battle %s: all ships sunk", battle.id)
    return is_hit


def all_ships_sunk(battle: Battle) -> bool:
    return board.all_ships_sunk(battle.matrix)


def get_battle(db: Session, user: User, battle_id: int) -> Optional[Battle]:
    """Return the user's battle by id, or None if absent or owned by someone else."""
    if not 1 <= battle_id <= MAX_ID:
        return None
    battle = db.get(Battle, battle_id)
    if battle is None or battle.user_id != user.id:
        return None
    return battle


def list_battles(db: Session, user: User) -> List[Battle]:
    """Battles owned by the user, newest first."""
    return list(
        db.scalars(
            select(Battle)
            .where(Battle.user_id == user.id)
            .order_by(Battle.id.desc())
        ).all()
    )
