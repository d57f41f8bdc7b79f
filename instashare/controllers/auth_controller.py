# instashare/controllers/auth_controller.py
import logging

from fastapi import HTTPException

from ..models.user_model import UserModel
from ..schemas.auth_schema import SignupRequest, LoginRequest, AuthResponse
from ..utils.hashing import hash_password, verify_password
from ..utils import jwt_utils
from .user_controller import add_user, get_user_by_username, to_user_out

logger = logging.getLogger(__name__)


# -----------------------
# Signup
# -----------------------
async def signup(data: SignupRequest) -> AuthResponse:
    jwt_utils.require_secret()
    if await get_user_by_username(data.username):
        raise HTTPException(status_code=409, detail="Username already taken")

    profile = data.model_dump(exclude={"username", "password", "fullname"}, exclude_none=True)
    user = UserModel(
        username=data.username,
        password=hash_password(data.password),
        fullname=data.fullname,
        **profile,
    )
    doc = await add_user(user)
    logger.info("New user signed up: %s", data.username)

    return AuthResponse(token=jwt_utils.create_login_token(doc), user=to_user_out(doc))


# -----------------------
# Login
# -----------------------
async def login(data: LoginRequest) -> AuthResponse:
    jwt_utils.require_secret()
    user = await get_user_by_username(data.username)
    if not user or not verify_password(data.password, user.get("password", "")):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    # Removed accounts must go through reactivation first
    if user.get("isActive") is False:
        raise HTTPException(status_code=403, detail="Account removed")

    logger.info("User logged in: %s", data.username)
    return AuthResponse(token=jwt_utils.create_login_token(user), user=to_user_out(user))
