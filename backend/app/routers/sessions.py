"""
Sessions Router

Endpoints:
1) POST /session    - sign in by name (the user is created on first use)
2) GET /session     - current user
3) DELETE /session  - sign out
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from app.core.auth import authenticate_user, get_current_user, unauthenticate_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.user import SessionCreate, UserOut
from app.services.registry import find_or_create

router = APIRouter(prefix="/session", tags=["session"])


@router.post("", response_model=UserOut)
def create_session(
    request: Request, payload: SessionCreate, db: Session = Depends(get_db)
):
    """Find or create the user by name and remember it in the session."""
    try:
        user = find_or_create(db, payload.name)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to sign in: {e}")
    authenticate_user(request, user.id)
    return user


@router.get("", response_model=UserOut)
def read_session(user: User = Depends(get_current_user)):
    return user


@router.delete("", status_code=204)
def destroy_session(request: Request):
    unauthenticate_user(request)
    return Response(status_code=204)
