# instashare/controllers/post_controller.py
from __future__ import annotations

import logging
from typing import List

from fastapi import HTTPException

from ..db.mongo import posts_collection
from ..models.post_model import PostModel, CommentModel, UserSnapshotModel
from ..schemas.post_schema import (
    PostCreateRequest,
    PostUpdateRequest,
    PostOut,
    CommentCreateRequest,
    CommentOut,
)
from ..services.notify import emit_to_user_bg
from ..utils.auth_utils import user_snapshot
from ..utils.ids import id_criteria, created_at_from_id

logger = logging.getLogger(__name__)


# ---------------------------
# Helpers
# ---------------------------

async def _find_post_or_404(post_id: str) -> dict:
    post = await posts_collection.find_one(id_criteria(post_id))
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


def _is_admin(user: dict) -> bool:
    return user.get("isAdmin") is True


def _is_post_author(post: dict, user: dict) -> bool:
    return str((post.get("by") or {}).get("_id")) == str(user["_id"])


# ---------------------------
# List / Get
# ---------------------------

async def query_posts() -> List[PostOut]:
    try:
        docs = await posts_collection.find({}).to_list(length=None)
    except Exception:
        logger.exception("cannot find posts")
        raise
    return [PostOut(**doc) for doc in docs]


async def get_post_by_id(post_id: str) -> PostOut:
    try:
        post = await _find_post_or_404(post_id)
    except HTTPException:
        raise
    except Exception:
        logger.exception("while finding post %s", post_id)
        raise

    # Generated ids carry the real creation time
    created_at = created_at_from_id(post["_id"])
    if created_at is not None:
        post["createdAt"] = created_at
    return PostOut(**post)


# ---------------------------
# Create / Update / Delete
# ---------------------------

async def add_post(data: PostCreateRequest, current_user: dict) -> PostOut:
    post = PostModel(
        by=UserSnapshotModel(**user_snapshot(current_user)),
        txt=data.txt,
        tags=data.tags or [],
        imgUrl=data.imgUrl,
    ).to_document()

    try:
        result = await posts_collection.insert_one(post)
    except Exception:
        logger.exception("cannot insert post")
        raise

    post["_id"] = result.inserted_id
    return PostOut(**post)


async def update_post(post_id: str, data: PostUpdateRequest, current_user: dict) -> PostOut:
    post = await _find_post_or_404(post_id)
    if not (_is_post_author(post, current_user) or _is_admin(current_user)):
        raise HTTPException(status_code=403, detail="Not your post")

    post_to_save = data.model_dump(exclude_unset=True, exclude_none=True)
    if not post_to_save:
        return PostOut(**post)

    criteria = id_criteria(post_id)
    try:
        await posts_collection.update_one(criteria, {"$set": post_to_save})
        updated = await posts_collection.find_one(criteria)
    except Exception:
        logger.exception("cannot update post %s", post_id)
        raise
    return PostOut(**updated)


async def remove_post(post_id: str, current_user: dict) -> str:
    post = await _find_post_or_404(post_id)
    if not (_is_post_author(post, current_user) or _is_admin(current_user)):
        raise HTTPException(status_code=403, detail="Not your post")

    try:
        await posts_collection.delete_one({"_id": post["_id"]})
    except Exception:
        logger.exception("cannot remove post %s", post_id)
        raise
    return post_id


# ---------------------------
# Comments
# ---------------------------

async def add_post_comment(post_id: str, data: CommentCreateRequest, current_user: dict) -> CommentOut:
    comment = CommentModel(
        by=UserSnapshotModel(**user_snapshot(current_user)),
        txt=data.txt,
    ).to_document()

    try:
        result = await posts_collection.update_one(
            id_criteria(post_id),
            {"$push": {"comments": comment}},
        )
    except Exception:
        logger.exception("cannot add post comment %s", post_id)
        raise

    if result.matched_count == 0:
        raise HTTPException(status_code=404, detail="Post not found")
    return CommentOut(**comment)


async def remove_post_comment(post_id: str, comment_id: str, current_user: dict) -> str:
    post = await _find_post_or_404(post_id)
    comment = next((c for c in post.get("comments") or [] if c.get("id") == comment_id), None)
    if comment is None:
        raise HTTPException(status_code=404, detail="Comment not found")

    is_comment_author = str((comment.get("by") or {}).get("_id")) == str(current_user["_id"])
    if not (is_comment_author or _is_post_author(post, current_user) or _is_admin(current_user)):
        raise HTTPException(status_code=403, detail="Not authorized to delete this comment")

    try:
        await posts_collection.update_one(
            {"_id": post["_id"]},
            {"$pull": {"comments": {"id": comment_id}}},
        )
    except Exception:
        logger.exception("cannot remove post comment %s/%s", post_id, comment_id)
        raise
    return comment_id


# ---------------------------
# Likes
# ---------------------------

async def toggle_post_like(post_id: str, current_user: dict) -> PostOut:
    user_id = str(current_user["_id"])
    try:
        post = await _find_post_or_404(post_id)
        criteria = {"_id": post["_id"]}

        if user_id in (post.get("likedBy") or []):
            await posts_collection.update_one(criteria, {"$pull": {"likedBy": user_id}})
        elif post.get("likedBy") is None:
            # Posts created without a likedBy array
            await posts_collection.update_one(criteria, {"$set": {"likedBy": [user_id]}})
        else:
            await posts_collection.update_one(criteria, {"$addToSet": {"likedBy": user_id}})

        updated = await posts_collection.find_one(criteria)
    except HTTPException:
        raise
    except Exception:
        logger.exception("cannot toggle post like %s", post_id)
        raise

    created_at = created_at_from_id(updated["_id"])
    if created_at is not None:
        updated["createdAt"] = created_at
    out = PostOut(**updated)

    author_id = str((updated.get("by") or {}).get("_id") or "")
    if author_id and author_id != user_id:
        emit_to_user_bg(author_id, "post-like-toggled", {"post": out, "byUserId": user_id})
    return out


async def toggle_comment_like(post_id: str, comment_id: str, current_user: dict) -> PostOut:
    user_id = str(current_user["_id"])
    try:
        post = await _find_post_or_404(post_id)

        comment = next((c for c in post.get("comments") or [] if c.get("id") == comment_id), None)
        if comment is None:
            raise HTTPException(status_code=404, detail="Comment not found")

        # Positional updates touch only this comment; the rest of the array is left alone
        criteria = {"_id": post["_id"], "comments": {"$elemMatch": {"id": comment_id}}}
        liked_by = comment.get("likedBy")
        if not isinstance(liked_by, list):
            await posts_collection.update_one(criteria, {"$set": {"comments.$.likedBy": []}})
            liked_by = []

        if user_id in liked_by:
            result = await posts_collection.update_one(criteria, {"$pull": {"comments.$.likedBy": user_id}})
        else:
            result = await posts_collection.update_one(criteria, {"$addToSet": {"comments.$.likedBy": user_id}})
        if result.matched_count == 0:
            raise HTTPException(status_code=404, detail="Comment not found")

        updated = await posts_collection.find_one({"_id": post["_id"]})
    except HTTPException:
        raise
    except Exception:
        logger.exception("cannot toggle comment like %s/%s", post_id, comment_id)
        raise

    created_at = created_at_from_id(updated["_id"])
    if created_at is not None:
        updated["createdAt"] = created_at
    out = PostOut(**updated)

    author_id = str((comment.get("by") or {}).get("_id") or "")
    if author_id and author_id != user_id:
        emit_to_user_bg(
            author_id,
            "comment-like-toggled",
            {"post": out, "commentId": comment_id, "byUserId": user_id},
        )
    return out
