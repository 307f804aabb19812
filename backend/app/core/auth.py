"""
Session Authentication

Keeps the signed-in user id in the Starlette session cookie and resolves
it back to a User for the routers. No credentials are involved: a name is
enough to sign in.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.models.user import User
from app.services.registry import get_user

logger = logging.getLogger(__name__)

SESSION_KEY = "user_id"


def authenticate_user(request: Request, user_id: int) -> None:
    request.session[SESSION_KEY] = user_id


def unauthenticate_user(request: Request) -> None:
    request.session.pop(SESSION_KEY, None)


def current_user_id(request: Request) -> Optional[int]:
    value = request.session.get(SESSION_KEY)
    return value if isinstance(value, int) else None


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """
    FastAPI dependency resolving the signed-in user.

    Raises:
        HTTPException: 401 if there is no session or its user no longer exists.
    """
    user = get_user(db, current_user_id(request))
    if user is None:
        if current_user_id(request) is not None:
            logger.warning("Session points at missing user; clearing it")
            unauthenticate_user(request)
        raise HTTPException(401, "Not signed in")
    return user
