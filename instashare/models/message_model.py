# instashare/models/message_model.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing_extensions import Annotated
from pydantic.functional_validators import BeforeValidator

PyObjectId = Annotated[str, BeforeValidator(lambda x: str(x))]


class MessageModel(BaseModel):
    """A direct message. Sender/recipient display fields are denormalized at send time."""

    fromUserId: PyObjectId
    fromFullname: str = ""
    fromImgUrl: str = ""
    toUserId: PyObjectId
    toFullname: str = ""
    toImgUrl: str = ""
    txt: str
    createdAt: datetime = Field(default_factory=datetime.utcnow)
