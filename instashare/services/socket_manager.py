# instashare/services/socket_manager.py
import logging
import os
from datetime import datetime
from typing import Any, Dict, List, Optional, Set
from urllib.parse import parse_qs

import jwt
import socketio

from instashare.db.mongo import socket_sessions_collection, users_collection
from instashare.utils.ids import id_criteria

logger = logging.getLogger(__name__)

# ------------------------
# Config
# ------------------------
JWT_SECRET = os.getenv("JWT_SECRET_KEY") or ""
JWT_ALG = os.getenv("JWT_ALGORITHM", "HS256")

# Comma-separated list of origins, e.g. "https://instashare.app,https://www.instashare.app"
_raw_origins = os.getenv("SOCKETIO_CORS_ORIGINS", "*").strip()
if _raw_origins == "*" or not _raw_origins:
    CORS_ORIGINS = "*"
else:
    CORS_ORIGINS = [o.strip() for o in _raw_origins.split(",") if o.strip()]

SOCKETIO_PATH = os.getenv("SOCKETIO_PATH", "/socket.io")

# ------------------------
# In-memory maps
# ------------------------
user_to_sids: Dict[str, Set[str]] = {}
sid_to_user: Dict[str, str] = {}

sio = socketio.AsyncServer(
    async_mode="asgi",
    cors_allowed_origins=CORS_ORIGINS,
    ping_interval=25,
    ping_timeout=60,
)

# ------------------------
# Helpers
# ------------------------
async def _persist_session(user_id: str, sid: str) -> None:
    await socket_sessions_collection.update_one(
        {"sid": sid},
        {"$set": {"sid": sid, "user_id": user_id, "connected_at": datetime.utcnow()}},
        upsert=True,
    )

async def _remove_session(sid: str) -> None:
    await socket_sessions_collection.delete_one({"sid": sid})

async def get_user_sids(user_id: str) -> List[str]:
    if user_to_sids.get(user_id):
        return list(user_to_sids[user_id])
    docs = await socket_sessions_collection.find({"user_id": user_id}).to_list(length=None)
    return [doc["sid"] for doc in docs]

async def emit_to_user(user_id: str, event: str, payload: Any) -> int:
    delivered = 0
    for sid in await get_user_sids(str(user_id)):
        await sio.emit(event, payload, to=sid)
        delivered += 1
    return delivered

def _decode_jwt(maybe_token: Optional[str]) -> Optional[str]:
    if not maybe_token or not JWT_SECRET:
        return None
    try:
        payload = jwt.decode(maybe_token, JWT_SECRET, algorithms=[JWT_ALG])
    except jwt.PyJWTError:
        return None
    uid = payload.get("user_id") or payload.get("sub")
    return str(uid) if uid else None

def _get_token_from_environ(environ: dict) -> Optional[str]:
    # Authorization: Bearer <token>
    authz = environ.get("HTTP_AUTHORIZATION")
    if authz and isinstance(authz, str):
        parts = authz.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            return parts[1]

    # Query string ?token=...
    qs = parse_qs(environ.get("QUERY_STRING", "") or "")
    vals = qs.get("token")
    if vals and vals[0]:
        return vals[0]
    return None

def extract_user_id_from_connect(environ: dict, auth: Optional[dict]) -> Optional[str]:
    """
    Accept the login JWT from:
      1) the client auth dict: io(url, { auth: { token: "<JWT>" } })
      2) the query string: ?token=...
      3) an Authorization: Bearer <JWT> header
    """
    if isinstance(auth, dict):
        uid = _decode_jwt(auth.get("token"))
        if uid:
            return uid
    return _decode_jwt(_get_token_from_environ(environ))

# ------------------------
# Lifecycle events
# ------------------------
@sio.event
async def connect(sid, environ, auth):
    user_id = extract_user_id_from_connect(environ, auth)
    if not user_id:
        return False

    user = await users_collection.find_one(id_criteria(user_id), {"_id": 1, "isActive": 1})
    if not user or user.get("isActive") is False:
        return False

    sid_to_user[sid] = user_id
    user_to_sids.setdefault(user_id, set()).add(sid)

    await _persist_session(user_id, sid)
    logger.info("Socket %s connected for user %s", sid, user_id)
    return True

@sio.event
async def disconnect(sid):
    user_id = sid_to_user.pop(sid, None)
    await _remove_session(sid)
    if user_id and user_id in user_to_sids:
        user_to_sids[user_id].discard(sid)
        if not user_to_sids[user_id]:
            user_to_sids.pop(user_id, None)

__all__ = ["sio", "emit_to_user", "SOCKETIO_PATH"]
