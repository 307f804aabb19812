"""
Opponents Router

Endpoints:
1) GET /opponent     - current opponent, or null
2) POST /opponent    - pair with the first waiting user; null if nobody waits
3) DELETE /opponent  - release the pairing on both sides
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from app.core.auth import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.user import UserOut
from app.services.registry import assign_opponent, disconnect_opponent, get_opponent

router = APIRouter(prefix="/opponent", tags=["opponent"])


@router.get("", response_model=Optional[UserOut])
def read_opponent(
    user: User = Depends(get_current_user), db: Session = Depends(get_db)
):
    return get_opponent(db, user)


@router.post("", response_model=Optional[UserOut])
def request_opponent(
    user: User = Depends(get_current_user), db: Session = Depends(get_db)
):
    """
    Pair the current user with a waiting user.

    Returns:
        The new opponent, or null when no other user is waiting.
    """
    try:
        return assign_opponent(db, user)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to assign opponent: {e}")


@router.delete("", status_code=204)
def release_opponent(
    user: User = Depends(get_current_user), db: Session = Depends(get_db)
):
    try:
        disconnect_opponent(db, user)
    except Exception as e:
        raise HTTPException(
            status_code=500, detail=f"Failed to disconnect opponent: {e}"
        )
    return Response(status_code=204)
