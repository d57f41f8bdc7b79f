# instashare/routes/user.py
from fastapi import APIRouter, Depends
from typing import List

from ..schemas.user_schema import (
    UserOut,
    UserDetailOut,
    UserUpdateRequest,
    ReactivateRequest,
    MsgResponse,
)
from ..controllers.user_controller import (
    query_users,
    get_removed_users,
    get_user_by_id,
    update_user,
    remove_user,
    reactivate_user,
    permanent_delete_user,
)
from ..utils.auth_utils import get_current_user, get_current_admin_user
from ..utils.errors import failure_as_400

router = APIRouter(prefix="/api/user", tags=["Users"])


# ---------- Static paths first ----------
@router.get("", response_model=List[UserOut], summary="List active users")
async def get_users_route(txt: str = "", minBalance: int = 0):
    with failure_as_400("Failed to get users"):
        return await query_users(txt, minBalance)


@router.get("/removed", response_model=List[UserOut], summary="List soft-deleted users")
async def get_removed_users_route():
    with failure_as_400("Failed to get removed users"):
        return await get_removed_users()


# ---------- By id ----------
@router.get("/{user_id}", response_model=UserDetailOut, summary="Get a user profile with given reviews")
async def get_user_route(user_id: str):
    with failure_as_400("Failed to get user"):
        return await get_user_by_id(user_id)


@router.put("/{user_id}", response_model=UserOut, summary="Update profile fields")
async def update_user_route(
    user_id: str,
    data: UserUpdateRequest,
    current_user: dict = Depends(get_current_user),
):
    with failure_as_400("Failed to update user"):
        return await update_user(user_id, data)


@router.post("/{user_id}/reactivate", response_model=UserOut, summary="Reactivate a soft-deleted user")
async def reactivate_user_route(user_id: str, data: ReactivateRequest):
    with failure_as_400("Failed to reactivate user"):
        return await reactivate_user(user_id, data.password)


@router.delete("/{user_id}", response_model=MsgResponse, summary="Soft-delete a user (self or admin)")
async def delete_user_route(
    user_id: str,
    current_user: dict = Depends(get_current_user),
):
    with failure_as_400("Failed to delete user"):
        return await remove_user(user_id, current_user)


@router.delete("/{user_id}/permanent", response_model=MsgResponse, summary="Permanently delete a user (admin)")
async def permanent_delete_user_route(
    user_id: str,
    admin: dict = Depends(get_current_admin_user),
):
    with failure_as_400("Failed to permanently delete user"):
        return await permanent_delete_user(user_id)
