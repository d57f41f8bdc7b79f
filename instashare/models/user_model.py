# instashare/models/user_model.py
from pydantic import BaseModel, Field
from typing import Any, List, Optional
from bson import ObjectId
from typing_extensions import Annotated
from pydantic.functional_validators import BeforeValidator

# ✅ Converts ObjectId to string before validation
PyObjectId = Annotated[str, BeforeValidator(lambda x: str(x))]


class UserModel(BaseModel):
    """Stored shape of a user document; defaults are the signup defaults."""

    id: Optional[PyObjectId] = Field(alias="_id", default=None)
    username: str
    password: str                      # pbkdf2 hash
    fullname: str
    imgUrl: str = ""
    isAdmin: bool = False
    isActive: bool = True              # False = soft-deleted
    score: int = 100
    bio: str = ""
    gender: str = ""
    customGender: str = ""
    mobileOrEmail: str = ""
    website: str = ""
    following: List[PyObjectId] = Field(default_factory=list)
    followers: List[PyObjectId] = Field(default_factory=list)
    savedPostIds: List[PyObjectId] = Field(default_factory=list)
    recentSearches: List[Any] = Field(default_factory=list)

    model_config = {
        "populate_by_name": True,
        "arbitrary_types_allowed": True,
        "json_encoders": {ObjectId: str},
        "extra": "ignore",
    }

    def to_document(self) -> dict:
        return self.model_dump(exclude={"id"})


# Fields a profile update may touch. Anything else in the body is ignored.
UPDATABLE_USER_FIELDS = (
    "fullname",
    "score",
    "bio",
    "imgUrl",
    "gender",
    "customGender",
    "mobileOrEmail",
    "website",
    "following",
    "followers",
    "savedPostIds",
    "recentSearches",
)
