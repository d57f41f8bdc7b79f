# instashare/schemas/post_schema.py
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from typing_extensions import Annotated
from pydantic.functional_validators import BeforeValidator

PyObjectId = Annotated[str, BeforeValidator(lambda x: str(x))]
IdList = Annotated[List[PyObjectId], BeforeValidator(lambda v: v or [])]


class UserSnapshot(BaseModel):
    id: PyObjectId = Field(alias="_id")
    fullname: Optional[str] = ""
    username: Optional[str] = ""
    imgUrl: Optional[str] = ""

    model_config = {"populate_by_name": True, "extra": "ignore"}


# ---------- Requests ----------
class PostCreateRequest(BaseModel):
    txt: str = ""
    tags: Optional[List[str]] = None
    imgUrl: Optional[str] = None


class PostUpdateRequest(BaseModel):
    txt: Optional[str] = None
    tags: Optional[List[str]] = None
    imgUrl: Optional[str] = None

    model_config = {"extra": "ignore"}


class CommentCreateRequest(BaseModel):
    txt: str


# ---------- Responses ----------
class CommentOut(BaseModel):
    id: str
    by: UserSnapshot
    txt: str = ""
    date: Optional[datetime] = None
    likedBy: IdList = []

    model_config = {"extra": "ignore"}


class PostOut(BaseModel):
    id: PyObjectId = Field(alias="_id")
    by: Optional[UserSnapshot] = None
    txt: Optional[str] = ""
    tags: Annotated[List[str], BeforeValidator(lambda v: v or [])] = []
    imgUrl: Optional[str] = None
    createdAt: Optional[datetime] = None
    comments: Annotated[List[CommentOut], BeforeValidator(lambda v: v or [])] = []
    likedBy: IdList = []

    model_config = {"populate_by_name": True, "extra": "ignore"}
