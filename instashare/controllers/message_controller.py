# instashare/controllers/message_controller.py
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from ..db.mongo import messages_collection, users_collection
from ..models.message_model import MessageModel
from ..schemas.message_schema import (
    MessageCreateRequest,
    MessageOut,
    ConversationOut,
)
from ..services.notify import emit_to_user_bg
from ..utils.ids import id_criteria

logger = logging.getLogger(__name__)


# ---------------------------
# Helpers
# ---------------------------

def _pair_criteria(user_id1: str, user_id2: str) -> dict:
    return {
        "$or": [
            {"fromUserId": user_id1, "toUserId": user_id2},
            {"fromUserId": user_id2, "toUserId": user_id1},
        ]
    }


async def _find_user_display(user_id: str) -> Optional[dict]:
    """Fresh display data for a user, or None when the lookup fails/misses."""
    try:
        return await users_collection.find_one(
            id_criteria(user_id),
            {"fullname": 1, "imgUrl": 1, "username": 1},
        )
    except Exception:
        logger.warning("Could not fetch user data for %s", user_id, exc_info=True)
        return None


# ---------------------------
# Read
# ---------------------------

async def get_messages(user_id: str, other_user_id: str) -> List[MessageOut]:
    try:
        docs = await messages_collection.find(
            _pair_criteria(str(user_id), other_user_id),
            sort=[("createdAt", 1)],
        ).to_list(length=None)
    except Exception:
        logger.exception("cannot find messages")
        raise
    return [MessageOut(**doc) for doc in docs]


async def get_conversations(user_id: str) -> List[ConversationOut]:
    """
    One entry per counterpart, built from the newest message exchanged with
    them, ordered by that message's recency. Counterpart display data comes
    from the user collection and falls back to what the message recorded.
    """
    me = str(user_id)
    try:
        messages = await messages_collection.find(
            {"$or": [{"fromUserId": me}, {"toUserId": me}]},
            sort=[("createdAt", -1)],
        ).to_list(length=None)
    except Exception:
        logger.exception("cannot get conversations")
        raise

    conversations: Dict[str, ConversationOut] = {}
    for msg in messages:
        from_id = str(msg.get("fromUserId") or "")
        to_id = str(msg.get("toUserId") or "")
        is_from_me = from_id == me
        other_id = to_id if is_from_me else from_id

        if not other_id or other_id == me or other_id in conversations:
            continue

        user = await _find_user_display(other_id)
        if user:
            conversations[other_id] = ConversationOut(
                otherUserId=other_id,
                otherFullname=user.get("fullname"),
                imgUrl=user.get("imgUrl") or "",
                username=user.get("username"),
                lastMessage=msg.get("txt"),
                lastMessageAt=msg.get("createdAt"),
            )
        else:
            conversations[other_id] = ConversationOut(
                otherUserId=other_id,
                otherFullname=msg.get("toFullname") if is_from_me else msg.get("fromFullname"),
                imgUrl=(msg.get("toImgUrl") if is_from_me else msg.get("fromImgUrl")) or "",
                lastMessage=msg.get("txt"),
                lastMessageAt=msg.get("createdAt"),
            )

    # dicts keep insertion order, which is newest-first here
    return list(conversations.values())


# ---------------------------
# Write
# ---------------------------

async def add_message(data: MessageCreateRequest, current_user: dict) -> MessageOut:
    from_id = str(current_user["_id"])

    from_fullname = current_user.get("fullname") or ""
    from_img = current_user.get("imgUrl") or ""
    to_fullname = data.toFullname or ""
    to_img = data.toImgUrl or ""

    # Prefer what the DB says about both parties right now
    sender = await _find_user_display(from_id)
    if sender:
        from_fullname = sender.get("fullname") or from_fullname
        from_img = sender.get("imgUrl") or ""
    recipient = await _find_user_display(data.toUserId)
    if recipient:
        to_fullname = recipient.get("fullname") or to_fullname
        to_img = recipient.get("imgUrl") or ""
    else:
        logger.warning("Recipient %s not found; keeping request display data", data.toUserId)

    message = MessageModel(
        fromUserId=from_id,
        fromFullname=from_fullname,
        fromImgUrl=from_img,
        toUserId=data.toUserId,
        toFullname=to_fullname,
        toImgUrl=to_img,
        txt=data.txt,
    ).model_dump()

    try:
        result = await messages_collection.insert_one(message)
    except Exception:
        logger.exception("cannot add message")
        raise

    message["_id"] = result.inserted_id
    saved = MessageOut(**message)

    emit_to_user_bg(data.toUserId, "chat-add-msg", saved)
    return saved


async def delete_conversation(user_id: str, other_user_id: str) -> dict:
    try:
        result = await messages_collection.delete_many(_pair_criteria(str(user_id), other_user_id))
    except Exception:
        logger.exception("cannot delete conversation")
        raise

    logger.info("Deleted %d messages between %s and %s", result.deleted_count, user_id, other_user_id)
    return {"deletedCount": result.deleted_count}
