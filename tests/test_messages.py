"""Direct messages and derived conversations."""

from datetime import datetime, timedelta

from instashare.db import mongo

T0 = datetime(2025, 1, 1, 12, 0, 0)


async def _insert_message(from_id, to_id, txt, minutes, **extra):
    doc = {
        "fromUserId": from_id,
        "toUserId": to_id,
        "txt": txt,
        "createdAt": T0 + timedelta(minutes=minutes),
    }
    doc.update(extra)
    await mongo.messages_collection.insert_one(doc)


async def test_add_message_denormalizes_from_db_and_notifies(client, make_user, notifications):
    alice = await make_user("alice", fullname="Alice L", imgUrl="http://img/a.png")
    bob = await make_user("bob", fullname="Bob B", imgUrl="http://img/b.png")
    bob_id = bob["user"]["_id"]

    res = await client.post(
        "/api/message",
        json={"toUserId": bob_id, "toFullname": "stale name", "txt": "hey"},
        headers=alice["headers"],
    )
    assert res.status_code == 200
    msg = res.json()
    assert msg["_id"]
    assert msg["fromUserId"] == alice["user"]["_id"]
    assert msg["fromFullname"] == "Alice L"
    assert msg["fromImgUrl"] == "http://img/a.png"
    assert msg["toFullname"] == "Bob B"
    assert msg["toImgUrl"] == "http://img/b.png"
    assert msg["createdAt"]

    assert len(notifications) == 1
    uid, event, payload = notifications[0]
    assert (uid, event) == (bob_id, "chat-add-msg")
    assert payload.txt == "hey"


async def test_add_message_to_unknown_user_keeps_request_data(client, make_user, notifications):
    alice = await make_user("alice")
    res = await client.post(
        "/api/message",
        json={"toUserId": "u-unknown", "toFullname": "Someone", "txt": "hello?"},
        headers=alice["headers"],
    )
    assert res.status_code == 200
    assert res.json()["toFullname"] == "Someone"
    assert res.json()["toImgUrl"] == ""


async def test_get_messages_returns_both_directions_oldest_first(client, make_user):
    alice = await make_user("alice")
    a = alice["user"]["_id"]
    await _insert_message(a, "b", "second", 2)
    await _insert_message("b", a, "first", 1)
    await _insert_message(a, "c", "other pair", 3)
    await _insert_message("b", a, "third", 5)

    res = await client.get("/api/message/b", headers=alice["headers"])
    assert res.status_code == 200
    assert [m["txt"] for m in res.json()] == ["first", "second", "third"]


async def test_conversations_one_per_counterpart_newest_first(client, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob", fullname="Bob B", imgUrl="http://img/b.png")
    a, b = alice["user"]["_id"], bob["user"]["_id"]

    await _insert_message(a, b, "old to bob", 1, toFullname="Bob Old")
    await _insert_message("ghost", a, "boo", 2, fromFullname="Ghost G", fromImgUrl="http://img/g.png")
    await _insert_message(b, a, "latest from bob", 3)
    await _insert_message(a, a, "note to self", 4)

    res = await client.get("/api/message/conversations", headers=alice["headers"])
    assert res.status_code == 200
    convs = res.json()

    assert [c["otherUserId"] for c in convs] == [b, "ghost"]

    bob_conv = convs[0]
    assert bob_conv["lastMessage"] == "latest from bob"
    assert bob_conv["otherFullname"] == "Bob B"
    assert bob_conv["imgUrl"] == "http://img/b.png"
    assert bob_conv["username"] == "bob"

    # unknown counterpart falls back to what the message recorded
    ghost_conv = convs[1]
    assert ghost_conv["otherFullname"] == "Ghost G"
    assert ghost_conv["imgUrl"] == "http://img/g.png"
    assert ghost_conv["username"] is None


async def test_delete_conversation_removes_only_that_pair(client, make_user):
    alice = await make_user("alice")
    a = alice["user"]["_id"]
    await _insert_message(a, "b", "1", 1)
    await _insert_message("b", a, "2", 2)
    await _insert_message(a, "c", "3", 3)
    await _insert_message("b", "c", "4", 4)

    res = await client.delete("/api/message/b", headers=alice["headers"])
    assert res.status_code == 200
    assert res.json() == {"deletedCount": 2}

    remaining = await mongo.messages_collection.find({}).to_list(length=None)
    assert sorted(m["txt"] for m in remaining) == ["3", "4"]


async def test_messages_require_auth(client):
    res = await client.post("/api/message", json={"toUserId": "x", "txt": "y"})
    assert res.status_code == 401
