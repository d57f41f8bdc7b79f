# instashare/utils/auth_utils.py
from __future__ import annotations

import logging
import os
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError

from ..db.mongo import users_collection
from .ids import id_criteria

logger = logging.getLogger(__name__)

# ------------------------------------------------------------------
# Config
# ------------------------------------------------------------------
SECRET_KEY = os.getenv("JWT_SECRET_KEY") or ""
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

# Missing credentials must answer 401 (HTTPBearer alone would answer 403)
bearer_scheme = HTTPBearer(auto_error=False)


# ------------------------------------------------------------------
# Internal helper
# ------------------------------------------------------------------
async def _load_active_user(user_id: str) -> dict:
    user = await users_collection.find_one(id_criteria(user_id))
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    # Soft-deleted accounts keep their documents but lose access until reactivated
    if user.get("isActive") is False:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account removed")

    return user


# ------------------------------------------------------------------
# Public dependencies
# ------------------------------------------------------------------
async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> dict:
    """
    Validates the Bearer JWT and loads the logged-in user.
    Returns the Mongo user document (password included; never send it back as is).
    """
    if not credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    if not SECRET_KEY:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="JWT secret not configured")

    try:
        payload = jwt.decode(credentials.credentials, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")

    user_id = payload.get("user_id")
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload")

    return await _load_active_user(user_id)


async def get_current_admin_user(user: dict = Depends(get_current_user)) -> dict:
    if user.get("isAdmin") is not True:
        logger.warning("Non-admin user %s tried an admin route", user.get("_id"))
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin only")
    return user


def user_snapshot(user: dict) -> dict:
    """Display fields of a user, embedded into posts and comments at write time."""
    return {
        "_id": str(user["_id"]),
        "fullname": user.get("fullname") or "",
        "username": user.get("username") or "",
        "imgUrl": user.get("imgUrl") or "",
    }
