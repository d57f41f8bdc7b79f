# instashare/utils/jwt_utils.py
import os
from datetime import datetime, timedelta

import jwt
from dotenv import load_dotenv
from fastapi import HTTPException, status

load_dotenv()

SECRET_KEY = os.getenv("JWT_SECRET_KEY") or ""
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
EXPIRE_DAYS = int(os.getenv("JWT_EXPIRE_DAYS", "7"))


def require_secret() -> None:
    """Token issuing needs a secret; fail before any write happens."""
    if not SECRET_KEY:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="JWT secret not configured")


def create_jwt_token(data: dict, expires_delta: timedelta = timedelta(days=EXPIRE_DAYS)) -> str:
    to_encode = data.copy()
    to_encode.update({"exp": datetime.utcnow() + expires_delta})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def create_login_token(user: dict) -> str:
    """Token for a freshly signed-up / logged-in user document."""
    return create_jwt_token({
        "user_id": str(user["_id"]),
        "username": user.get("username"),
        "isAdmin": bool(user.get("isAdmin", False)),
    })
