# instashare/schemas/user_schema.py
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import datetime
from typing_extensions import Annotated
from pydantic.functional_validators import BeforeValidator

# For MongoDB ObjectId support
PyObjectId = Annotated[str, BeforeValidator(lambda x: str(x))]
# Legacy documents may hold null instead of an empty list
IdList = Annotated[List[PyObjectId], BeforeValidator(lambda v: v or [])]


# ✅ Request Schemas
class UserUpdateRequest(BaseModel):
    """Partial profile update: only the fields present in the body are written."""

    fullname: Optional[str] = None
    score: Optional[int] = None
    bio: Optional[str] = None
    imgUrl: Optional[str] = None
    gender: Optional[str] = None
    customGender: Optional[str] = None
    mobileOrEmail: Optional[str] = None
    website: Optional[str] = None
    following: Optional[List[str]] = None
    followers: Optional[List[str]] = None
    savedPostIds: Optional[List[str]] = None
    recentSearches: Optional[List[Any]] = None

    model_config = {"extra": "ignore"}


class ReactivateRequest(BaseModel):
    password: Optional[str] = None


# ✅ Response Schemas
class UserOut(BaseModel):
    # `password` is never declared here, so it can't leak through a response
    id: PyObjectId = Field(alias="_id")
    username: Optional[str] = None
    fullname: Optional[str] = None
    imgUrl: Optional[str] = ""
    isAdmin: bool = False
    isActive: bool = True
    score: Optional[int] = None
    bio: Optional[str] = ""
    gender: Optional[str] = ""
    customGender: Optional[str] = ""
    mobileOrEmail: Optional[str] = ""
    website: Optional[str] = ""
    following: IdList = []
    followers: IdList = []
    savedPostIds: IdList = []
    recentSearches: Annotated[List[Any], BeforeValidator(lambda v: v or [])] = []
    createdAt: Optional[datetime] = None

    model_config = {"populate_by_name": True, "extra": "ignore"}


class UserDetailOut(UserOut):
    givenReviews: List[Dict[str, Any]] = []


class MsgResponse(BaseModel):
    msg: str
