from bson import ObjectId

from instashare.db import mongo
from instashare.services import socket_manager
from instashare.utils.jwt_utils import create_jwt_token


def test_token_accepted_from_auth_dict_query_and_header():
    token = create_jwt_token({"user_id": "abc"})

    assert socket_manager.extract_user_id_from_connect({}, {"token": token}) == "abc"
    assert socket_manager.extract_user_id_from_connect({"QUERY_STRING": f"token={token}"}, None) == "abc"
    assert socket_manager.extract_user_id_from_connect({"HTTP_AUTHORIZATION": f"Bearer {token}"}, None) == "abc"


def test_bad_or_missing_token_is_rejected():
    assert socket_manager.extract_user_id_from_connect({}, None) is None
    assert socket_manager.extract_user_id_from_connect({}, {"token": "garbage"}) is None


async def test_emit_to_user_without_sessions_delivers_nothing():
    assert await socket_manager.emit_to_user("nobody", "chat-add-msg", {}) == 0


async def test_emit_to_user_reaches_every_socket(monkeypatch):
    sent = []

    async def _fake_emit(event, payload, to=None):
        sent.append((event, to))

    monkeypatch.setattr(socket_manager.sio, "emit", _fake_emit)
    socket_manager.user_to_sids["u1"] = {"sid-1", "sid-2"}

    assert await socket_manager.emit_to_user("u1", "chat-add-msg", {"txt": "hi"}) == 2
    assert sorted(to for _, to in sent) == ["sid-1", "sid-2"]


async def test_connect_registers_active_user(make_user):
    account = await make_user("alice")
    uid = account["user"]["_id"]

    assert await socket_manager.connect("sid-a", {}, {"token": account["token"]}) is True
    assert socket_manager.sid_to_user["sid-a"] == uid
    assert await socket_manager.get_user_sids(uid) == ["sid-a"]

    await socket_manager.disconnect("sid-a")
    assert uid not in socket_manager.user_to_sids


async def test_connect_refused_for_inactive_or_unknown_user(make_user):
    account = await make_user("gone")
    await mongo.users_collection.update_one({"username": "gone"}, {"$set": {"isActive": False}})

    assert await socket_manager.connect("sid-b", {}, {"token": account["token"]}) is False
    unknown = create_jwt_token({"user_id": str(ObjectId())})
    assert await socket_manager.connect("sid-c", {}, {"token": unknown}) is False
    assert await socket_manager.connect("sid-d", {}, None) is False
    assert socket_manager.sid_to_user == {}
