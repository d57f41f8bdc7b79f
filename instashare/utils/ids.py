# instashare/utils/ids.py
import random
import string
from typing import Any, Union

from bson import ObjectId

_ID_CHARS = string.ascii_letters + string.digits


def to_doc_id(value: Any) -> Union[ObjectId, Any]:
    """
    Documents created through the API carry ObjectId `_id`s while seeded/legacy
    ones may carry plain strings. A 24-char valid hex string is treated as an
    ObjectId; anything else is looked up as is.
    """
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and len(value) == 24 and ObjectId.is_valid(value):
        return ObjectId(value)
    return value


def id_criteria(value: Any) -> dict:
    return {"_id": to_doc_id(value)}


def created_at_from_id(doc_id: Any):
    # Only ObjectIds embed a creation time
    if isinstance(doc_id, ObjectId):
        return doc_id.generation_time
    return None


def make_id(length: int = 6) -> str:
    return "".join(random.choice(_ID_CHARS) for _ in range(length))
