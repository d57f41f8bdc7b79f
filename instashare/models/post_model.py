# instashare/models/post_model.py
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from typing_extensions import Annotated
from pydantic.functional_validators import BeforeValidator

from ..utils.ids import make_id

PyObjectId = Annotated[str, BeforeValidator(lambda x: str(x))]


class UserSnapshotModel(BaseModel):
    """Author display fields copied into a post/comment when it is written."""

    id: PyObjectId = Field(alias="_id")
    fullname: str = ""
    username: str = ""
    imgUrl: str = ""

    model_config = {"populate_by_name": True, "extra": "ignore"}


class CommentModel(BaseModel):
    id: str = Field(default_factory=make_id)
    by: UserSnapshotModel
    txt: str
    date: datetime = Field(default_factory=datetime.utcnow)
    likedBy: List[PyObjectId] = Field(default_factory=list)

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True)


class PostModel(BaseModel):
    by: UserSnapshotModel
    txt: str = ""
    tags: List[str] = Field(default_factory=list)
    imgUrl: Optional[str] = None
    createdAt: datetime = Field(default_factory=datetime.utcnow)
    comments: List[CommentModel] = Field(default_factory=list)
    likedBy: List[PyObjectId] = Field(default_factory=list)

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True)
