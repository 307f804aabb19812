"""
User Schemas

Pydantic schemas for session and opponent requests and responses.

"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SessionCreate(BaseModel):
    """
    Schema for signing in by name.

    Attributes:
        name: Display name; an existing user with this name is reused
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Display name of the user",
    )

    model_config = ConfigDict(str_strip_whitespace=True)


class UserOut(BaseModel):
    """
    Schema for user response data.

    Attributes:
        id: Unique user identifier
        name: Display name
        opponent_id: Id of the paired user, if any
    """

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Unique user identifier")
    name: str = Field(..., description="Display name")
    opponent_id: Optional[int] = Field(None, description="Paired user identifier")
