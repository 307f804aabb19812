"""
User Model

This module defines the User database model. A user is identified by the
session and may be paired with exactly one opponent. Pairing is stored as
a self-reference on both rows.

"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base
from app.models.battle import Battle


class User(Base):
    """
    User model representing a player.

    Attributes:
        id: Primary key, auto-incrementing user identifier (creation order)
        name: Display name, not unique
        opponent_id: Id of the paired user, mirrored on the opponent's row
        created_at: Creation timestamp
        battles: Battles owned by this user, deleted together with it
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Unique user identifier",
    )
    name: Mapped[str] = mapped_column(
        String(255), index=True, nullable=False, comment="Display name"
    )
    opponent_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
        comment="Reference to the paired user",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )

    battles: Mapped[List[Battle]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        order_by=Battle.id,
    )

    def __repr__(self) -> str:
        return f"<User {self.id} {self.name!r} opponent={self.opponent_id}>"
