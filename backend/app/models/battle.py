"""
Battle Model

This module defines the Battle database model: one user's board of hidden
ships. The board is stored as a single JSON value (rows of cell states)
and is rewritten as a whole after every guess.

"""

from __future__ import annotations

from datetime import datetime
from enum import IntEnum
from typing import TYPE_CHECKING, List

from sqlalchemy import JSON, DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base

if TYPE_CHECKING:
    from app.models.user import User


class CellState(IntEnum):
    """State of a single board cell."""

    EMPTY = 0
    SHIP = 1
    MISS = 2
    HIT = 3


class Battle(Base):
    """
    Battle model representing a board owned by exactly one user.

    Attributes:
        id: Primary key, auto-incrementing battle identifier
        user_id: Foreign key to the owning user
        matrix: Square grid of CellState values, rows first
        created_at: Creation timestamp
    """

    __tablename__ = "battles"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Unique battle identifier",
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
        comment="Reference to the owning user",
    )
    matrix: Mapped[List[List[int]]] = mapped_column(
        JSON, nullable=False, default=list, comment="Board rows of cell states"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )

    user: Mapped["User"] = relationship(back_populates="battles")

    def __repr__(self) -> str:
        return f"<Battle {self.id} user={self.user_id}>"
