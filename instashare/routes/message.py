# instashare/routes/message.py
from fastapi import APIRouter, Depends
from typing import List

from ..schemas.message_schema import (
    MessageCreateRequest,
    MessageOut,
    ConversationOut,
    DeleteConversationResponse,
)
from ..controllers.message_controller import (
    get_messages,
    add_message,
    get_conversations,
    delete_conversation,
)
from ..utils.auth_utils import get_current_user
from ..utils.errors import failure_as_400

router = APIRouter(prefix="/api/message", tags=["Messages"])


# ---------- Static path first ----------
@router.get("/conversations", response_model=List[ConversationOut], summary="My conversations, newest first")
async def get_conversations_route(current_user: dict = Depends(get_current_user)):
    with failure_as_400("Failed to get conversations"):
        return await get_conversations(str(current_user["_id"]))


@router.get("/{other_user_id}", response_model=List[MessageOut], summary="Messages with another user")
async def get_messages_route(
    other_user_id: str,
    current_user: dict = Depends(get_current_user),
):
    with failure_as_400("Failed to get messages"):
        return await get_messages(str(current_user["_id"]), other_user_id)


@router.post("", response_model=MessageOut, summary="Send a direct message")
async def add_message_route(
    data: MessageCreateRequest,
    current_user: dict = Depends(get_current_user),
):
    with failure_as_400("Failed to add message"):
        return await add_message(data, current_user)


@router.delete("/{other_user_id}", response_model=DeleteConversationResponse, summary="Delete a whole conversation")
async def delete_conversation_route(
    other_user_id: str,
    current_user: dict = Depends(get_current_user),
):
    with failure_as_400("Failed to delete conversation"):
        return await delete_conversation(str(current_user["_id"]), other_user_id)
