# instashare/routes/auth.py
from fastapi import APIRouter

from ..controllers.auth_controller import signup, login
from ..schemas.auth_schema import SignupRequest, LoginRequest, AuthResponse
from ..schemas.user_schema import MsgResponse
from ..utils.errors import failure_as_400

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/signup", response_model=AuthResponse, summary="Create an account and log in")
async def signup_route(data: SignupRequest):
    with failure_as_400("Failed to signup"):
        return await signup(data)


@router.post("/login", response_model=AuthResponse, summary="Log in with username and password")
async def login_route(data: LoginRequest):
    with failure_as_400("Failed to login"):
        return await login(data)


# Tokens are stateless; the client just drops it
@router.post("/logout", response_model=MsgResponse, summary="Log out")
async def logout_route():
    return {"msg": "Logged out successfully"}
