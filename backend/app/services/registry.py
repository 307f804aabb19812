"""
User / Opponent Registry

Finds or creates users by name, pairs waiting users as opponents and
starts battles. Pairing touches two rows; both are written in a single
commit so readers never see a one-sided pairing.

"""

from __future__ import annotations

import logging
import random
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.db.session import commit_or_rollback
from app.models.battle import Battle
from app.models.user import User
from app.services.battles import start_game

logger = logging.getLogger(__name__)


def find_or_create(db: Session, name: str) -> User:
    """
    Return the first user (by creation order) with this exact name,
    creating one if there is none. Names are not unique.
    """
    user = db.scalar(
        select(User).where(User.name == name).order_by(User.id).limit(1)
    )
    if user:
        return user
    user = User(name=name)
    db.add(user)
    commit_or_rollback(db)
    db.refresh(user)
    logger.info("Created user %s (%r)", user.id, user.name)
    return user


def get_user(db: Session, user_id: Optional[int]) -> Optional[User]:
    if user_id is None:
        return None
    return db.get(User, user_id)


def get_opponent(db: Session, user: User) -> Optional[User]:
    return get_user(db, user.opponent_id)


def _release(db: Session, user: User) -> None:
    """Clear both sides of the user's current pairing (no commit)."""
    opponent = get_opponent(db, user)
    if opponent is not None:
        opponent.opponent_id = None
    user.opponent_id = None


def assign_opponent(db: Session, user: User) -> Optional[User]:
    """
    Pair the user with the first other user that has no opponent.

    Returns the new opponent, or None (leaving the user untouched) when
    nobody else is waiting. A previous pairing of the user is released in
    the same transaction.
    """
    opponent = db.scalar(
        select(User)
        .where(User.opponent_id.is_(None), User.id != user.id)
        .order_by(User.id)
        .limit(1)
    )
    if opponent is None:
        return None

    if user.opponent_id is not None:
        _release(db, user)
    user.opponent_id = opponent.id
    opponent.opponent_id = user.id
    commit_or_rollback(db)
    logger.info("Paired user %s with user %s", user.id, opponent.id)
    return opponent


def disconnect_opponent(db: Session, user: User) -> None:
    """Clear the pairing on both the user and its opponent."""
    opponent_id = user.opponent_id
    _release(db, user)
    commit_or_rollback(db)
    if opponent_id is not None:
        logger.info("Disconnected user %s from user %s", user.id, opponent_id)


def start_battle(
    db: Session, user: User, *, rng: Optional[random.Random] = None
) -> Battle:
    """Create a battle owned by the user with a freshly populated board."""
    # Via the relationship, so a loaded `user.battles` includes it
    battle = Battle(user=user)
    start_game(db, battle, rng=rng)
    logger.info("User %s started battle %s", user.id, battle.id)
    return battle


def delete_user(db: Session, user: User) -> None:
    """Release the user's pairing and delete it together with its battles."""
    user_id = user.id
    _release(db, user)
    db.delete(user)
    commit_or_rollback(db)
    logger.info("Deleted user %s", user_id)
