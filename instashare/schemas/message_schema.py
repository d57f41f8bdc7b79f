# instashare/schemas/message_schema.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from typing_extensions import Annotated
from pydantic.functional_validators import BeforeValidator

PyObjectId = Annotated[str, BeforeValidator(lambda x: str(x))]


class MessageCreateRequest(BaseModel):
    toUserId: str
    toFullname: Optional[str] = None   # used only if the recipient can't be looked up
    toImgUrl: Optional[str] = None
    txt: str


class MessageOut(BaseModel):
    id: PyObjectId = Field(alias="_id")
    fromUserId: PyObjectId
    fromFullname: Optional[str] = ""
    fromImgUrl: Optional[str] = ""
    toUserId: PyObjectId
    toFullname: Optional[str] = ""
    toImgUrl: Optional[str] = ""
    txt: str = ""
    createdAt: Optional[datetime] = None

    model_config = {"populate_by_name": True, "extra": "ignore"}


class ConversationOut(BaseModel):
    otherUserId: str
    otherFullname: Optional[str] = ""
    imgUrl: Optional[str] = ""
    username: Optional[str] = None
    lastMessage: Optional[str] = ""
    lastMessageAt: Optional[datetime] = None


class DeleteConversationResponse(BaseModel):
    deletedCount: int
