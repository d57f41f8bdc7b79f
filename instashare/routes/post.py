# instashare/routes/post.py
from fastapi import APIRouter, Depends
from typing import List

from ..schemas.post_schema import (
    PostCreateRequest,
    PostUpdateRequest,
    PostOut,
    CommentCreateRequest,
    CommentOut,
)
from ..controllers.post_controller import (
    query_posts,
    get_post_by_id,
    add_post,
    update_post,
    remove_post,
    add_post_comment,
    remove_post_comment,
    toggle_post_like,
    toggle_comment_like,
)
from ..utils.auth_utils import get_current_user
from ..utils.errors import failure_as_400
from ..utils.logger import log_request

router = APIRouter(prefix="/api/post", tags=["Posts"])


# ✅ Feed
@router.get("", response_model=List[PostOut], dependencies=[Depends(log_request)], summary="List posts")
async def get_posts_route():
    with failure_as_400("Failed to get posts"):
        return await query_posts()


@router.get("/{post_id}", response_model=PostOut, dependencies=[Depends(log_request)], summary="Get a post by ID")
async def get_post_route(post_id: str):
    with failure_as_400("Failed to get post"):
        return await get_post_by_id(post_id)


# ✅ Create / update / delete
@router.post("", response_model=PostOut, dependencies=[Depends(log_request)], summary="Create a post")
async def add_post_route(
    data: PostCreateRequest,
    current_user: dict = Depends(get_current_user),
):
    with failure_as_400("Failed to add post"):
        return await add_post(data, current_user)


@router.put("/{post_id}", response_model=PostOut, summary="Update a post (author or admin)")
async def update_post_route(
    post_id: str,
    data: PostUpdateRequest,
    current_user: dict = Depends(get_current_user),
):
    with failure_as_400("Failed to update post"):
        return await update_post(post_id, data, current_user)


@router.delete("/{post_id}", response_model=str, summary="Remove a post (author or admin)")
async def remove_post_route(
    post_id: str,
    current_user: dict = Depends(get_current_user),
):
    with failure_as_400("Failed to remove post"):
        return await remove_post(post_id, current_user)


# ✅ Comments
@router.post("/{post_id}/comment", response_model=CommentOut, summary="Add a comment")
async def add_comment_route(
    post_id: str,
    data: CommentCreateRequest,
    current_user: dict = Depends(get_current_user),
):
    with failure_as_400("Failed to add post comment"):
        return await add_post_comment(post_id, data, current_user)


@router.delete("/{post_id}/comment/{comment_id}", response_model=str, summary="Remove a comment")
async def remove_comment_route(
    post_id: str,
    comment_id: str,
    current_user: dict = Depends(get_current_user),
):
    with failure_as_400("Failed to remove post comment"):
        return await remove_post_comment(post_id, comment_id, current_user)


# ✅ Likes (toggle)
@router.post("/{post_id}/like", response_model=PostOut, summary="Like / unlike a post")
async def toggle_post_like_route(
    post_id: str,
    current_user: dict = Depends(get_current_user),
):
    with failure_as_400("Failed to toggle post like"):
        return await toggle_post_like(post_id, current_user)


@router.put("/{post_id}/comment/{comment_id}/like", response_model=PostOut, summary="Like / unlike a comment")
async def toggle_comment_like_route(
    post_id: str,
    comment_id: str,
    current_user: dict = Depends(get_current_user),
):
    with failure_as_400("Failed to toggle comment like"):
        return await toggle_comment_like(post_id, comment_id, current_user)
