# instashare/controllers/user_controller.py
from __future__ import annotations

import logging
import re
from typing import List, Optional

from bson import ObjectId
from fastapi import HTTPException
from fastapi.encoders import jsonable_encoder

from ..db.mongo import users_collection, reviews_collection
from ..models.user_model import UserModel, UPDATABLE_USER_FIELDS
from ..schemas.user_schema import UserOut, UserDetailOut, UserUpdateRequest
from ..utils.hashing import verify_password
from ..utils.ids import id_criteria, created_at_from_id

logger = logging.getLogger(__name__)


# ---------------------------
# Helpers
# ---------------------------

def _build_criteria(txt: str = "", min_balance: int = 0) -> dict:
    criteria: dict = {}
    if txt:
        txt_criteria = {"$regex": re.escape(txt), "$options": "i"}
        criteria["$or"] = [{"username": txt_criteria}, {"fullname": txt_criteria}]
    if min_balance:
        criteria["score"] = {"$gte": min_balance}
    return criteria


def to_user_out(doc: dict, cls=UserOut):
    doc = dict(doc)
    doc.pop("password", None)
    created_at = created_at_from_id(doc.get("_id"))
    if created_at is not None:
        doc["createdAt"] = created_at
    return cls(**doc)


def _review_to_dict(review: dict) -> dict:
    # Reviews embed the reviewer; on the reviewer's own profile that's redundant
    review = {k: v for k, v in review.items() if k != "byUser"}
    return jsonable_encoder(review, custom_encoder={ObjectId: str})


# ---------------------------
# List / Get
# ---------------------------

async def query_users(txt: str = "", min_balance: int = 0) -> List[UserOut]:
    criteria = _build_criteria(txt, min_balance)
    # Soft-deleted users never show up in lists
    criteria["isActive"] = {"$ne": False}
    try:
        docs = await users_collection.find(criteria).to_list(length=None)
    except Exception:
        logger.exception("cannot find users")
        raise
    return [to_user_out(doc) for doc in docs]


async def get_removed_users() -> List[UserOut]:
    try:
        docs = await users_collection.find({"isActive": False}).to_list(length=None)
    except Exception:
        logger.exception("cannot get removed users")
        raise
    logger.info("Found %d removed users", len(docs))
    return [to_user_out(doc) for doc in docs]


async def get_user_by_id(user_id: str) -> UserDetailOut:
    try:
        user = await users_collection.find_one(id_criteria(user_id))
        if not user:
            raise HTTPException(status_code=404, detail="User not found")

        reviews = await reviews_collection.find({"byUserId": user_id}).to_list(length=None)
    except HTTPException:
        raise
    except Exception:
        logger.exception("while finding user by id: %s", user_id)
        raise

    user["givenReviews"] = [_review_to_dict(r) for r in reviews]
    return to_user_out(user, UserDetailOut)


async def get_user_by_username(username: str) -> Optional[dict]:
    """Raw document (password included). Used by login/signup only."""
    try:
        return await users_collection.find_one({"username": username})
    except Exception:
        logger.exception("while finding user by username: %s", username)
        raise


# ---------------------------
# Create / Update
# ---------------------------

async def add_user(user: UserModel) -> dict:
    doc = user.to_document()
    try:
        result = await users_collection.insert_one(doc)
    except Exception:
        logger.exception("cannot add user")
        raise
    doc["_id"] = result.inserted_id
    return doc


async def update_user(user_id: str, data: UserUpdateRequest) -> UserOut:
    criteria = id_criteria(user_id)

    # Only the fields actually sent are written
    sent = data.model_dump(exclude_unset=True)
    user_to_save = {k: sent[k] for k in UPDATABLE_USER_FIELDS if k in sent}

    try:
        if user_to_save:
            await users_collection.update_one(criteria, {"$set": user_to_save})
        updated = await users_collection.find_one(criteria)
    except Exception:
        logger.exception("cannot update user %s", user_id)
        raise

    if not updated:
        return UserOut(_id=user_id, **user_to_save)
    return to_user_out(updated)


# ---------------------------
# Soft delete / Reactivate / Permanent delete
# ---------------------------

async def remove_user(user_id: str, current_user: dict) -> dict:
    logger.info("Delete request received for user: %s by %s", user_id, current_user["_id"])

    # Users may remove themselves; admins may remove anyone
    if str(current_user["_id"]) != user_id and current_user.get("isAdmin") is not True:
        logger.warning("User %s tried to delete %s - not authorized", current_user["_id"], user_id)
        raise HTTPException(status_code=403, detail="Not authorized to delete this user")

    try:
        await users_collection.update_one(id_criteria(user_id), {"$set": {"isActive": False}})
    except Exception:
        logger.exception("cannot remove user %s", user_id)
        raise

    logger.info("User %s marked as inactive (soft delete)", user_id)
    return {"msg": "Deleted successfully"}


async def reactivate_user(user_id: str, password: Optional[str]) -> UserOut:
    if not password:
        raise HTTPException(status_code=400, detail="Password is required")

    criteria = id_criteria(user_id)
    try:
        user = await users_collection.find_one(criteria)
    except Exception:
        logger.exception("cannot reactivate user %s", user_id)
        raise

    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    if not verify_password(password, user.get("password", "")):
        logger.warning("Reactivation of user %s refused: incorrect password", user_id)
        raise HTTPException(status_code=401, detail="Incorrect password")

    try:
        await users_collection.update_one(criteria, {"$set": {"isActive": True}})
    except Exception:
        logger.exception("cannot reactivate user %s", user_id)
        raise

    logger.info("User %s reactivated successfully", user_id)
    user["isActive"] = True
    return to_user_out(user)


async def permanent_delete_user(user_id: str) -> dict:
    try:
        result = await users_collection.delete_one(id_criteria(user_id))
    except Exception:
        logger.exception("cannot permanently delete user %s", user_id)
        raise

    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail="User not found")

    logger.info("User %s permanently deleted from DB", user_id)
    return {"msg": "Deleted permanently"}
