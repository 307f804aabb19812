"""Tests for persisted battle operations (guessing and win detection)."""

from __future__ import annotations

import random

import pytest

from app.models.battle import Battle, CellState
from app.models.user import User
from app.services import battles

E, S, M, H = (int(CellState.EMPTY), int(CellState.SHIP), int(CellState.MISS), int(CellState.HIT))


@pytest.fixture
def battle(db) -> Battle:
    """Battle with ships at (0,1), (1,2) and (2,0)."""
    user = User(name="alice")
    db.add(user)
    db.commit()
    b = Battle(user_id=user.id, matrix=[[E, S, E], [E, E, S], [S, E, E]])
    db.add(b)
    db.commit()
    return b


def _reload(db, battle: Battle) -> Battle:
    db.expire_all()
    return db.get(Battle, battle.id)


def test_guess_scenario(db, battle: Battle) -> None:
    assert battles.guess(db, battle, 0, 1) is True
    assert _reload(db, battle).matrix[0][1] == H

    # Re-guessing a hit cell reports a hit again; no "already guessed" outcome.
    assert battles.guess(db, battle, 0, 1) is True
    assert _reload(db, battle).matrix[0][1] == H

    assert battles.guess(db, battle, 5, 5) is False


def test_guess_ship_column_clears_row(db, battle: Battle) -> None:
    assert battle.matrix[1].count(S) == 1
    assert battles.guess(db, battle, 1, 2) is True
    assert _reload(db, battle).matrix[1].count(S) == 0


def test_guess_non_ship_column_misses(db, battle: Battle) -> None:
    assert battles.guess(db, battle, 1, 0) is False
    row = _reload(db, battle).matrix[1]
    assert row == [M, E, S]
    assert row.count(S) == 1

    # Re-guessing a miss reports a miss again.
    assert battles.guess(db, battle, 1, 0) is False
    assert _reload(db, battle).matrix[1] == [M, E, S]


@pytest.mark.parametrize("row,col", [(3, 0), (-1, 0), (0, 3), (0, -1), (5, 5)])
def test_guess_out_of_bounds_is_a_noop(db, battle: Battle, row: int, col: int) -> None:
    before = [list(r) for r in battle.matrix]
    assert battles.guess(db, battle, row, col) is False
    assert _reload(db, battle).matrix == before


def test_all_ships_sunk_after_every_row(db, battle: Battle) -> None:
    assert battles.all_ships_sunk(battle) is False
    assert battles.all_ships_sunk(battle) is False

    for row, col in [(0, 1), (1, 2)]:
        battles.guess(db, battle, row, col)
        assert battles.all_ships_sunk(battle) is False

    battles.guess(db, battle, 2, 0)
    assert battles.all_ships_sunk(battle) is True
    assert battles.all_ships_sunk(battle) is True
    assert battles.all_ships_sunk(_reload(db, battle)) is True


def test_start_game_replaces_board(db, battle: Battle) -> None:
    battles.guess(db, battle, 0, 1)
    battles.start_game(db, battle, size=4, rng=random.Random(3))

    matrix = _reload(db, battle).matrix
    assert len(matrix) == 4
    assert [r.count(S) for r in matrix] == [1, 1, 1, 1]
    assert all(c in (E, S) for r in matrix for c in r)


def test_get_battle_checks_owner(db, battle: Battle) -> None:
    owner = db.get(User, battle.user_id)
    stranger = User(name="mallory")
    db.add(stranger)
    db.commit()

    assert battles.get_battle(db, owner, battle.id) is battle
    assert battles.get_battle(db, stranger, battle.id) is None
    assert battles.get_battle(db, owner, 999) is None


@pytest.mark.parametrize("battle_id", [0, -1, 2**63, 2**64])
def test_get_battle_outside_id_range_is_missing(db, battle: Battle, battle_id: int) -> None:
    owner = db.get(User, battle.user_id)
    assert battles.get_battle(db, owner, battle_id) is None
