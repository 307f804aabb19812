"""
Battle Schemas

Pydantic schemas for battle responses and guesses. Boards are always sent
masked: ships that have not been hit are shown as empty cells.

"""

from typing import List

from pydantic import BaseModel, Field

from app.models.battle import Battle
from app.services.board import all_ships_sunk, masked_matrix, ships_remaining


class GuessIn(BaseModel):
    """Coordinates of a guess; anything off the board simply misses."""

    row: int = Field(..., description="Row index, 0-based")
    col: int = Field(..., description="Column index, 0-based")


class BattleOut(BaseModel):
    """
    Schema for battle response data.

    Attributes:
        id: Unique battle identifier
        user_id: Owning user identifier
        board: Masked board rows (0 empty, 2 miss, 3 hit)
        ships_remaining: Ships not yet hit
        all_ships_sunk: True once every ship has been hit
    """

    id: int = Field(..., description="Unique battle identifier")
    user_id: int = Field(..., description="Owning user identifier")
    board: List[List[int]] = Field(..., description="Masked board rows")
    ships_remaining: int
    all_ships_sunk: bool

    @classmethod
    def from_battle(cls, battle: Battle) -> "BattleOut":
        return cls(
            id=battle.id,
            user_id=battle.user_id,
            board=masked_matrix(battle.matrix),
            ships_remaining=ships_remaining(battle.matrix),
            all_ships_sunk=all_ships_sunk(battle.matrix),
        )


class GuessOut(BaseModel):
    hit: bool
    all_ships_sunk: bool
    battle: BattleOut
