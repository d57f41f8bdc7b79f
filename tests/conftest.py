"""Shared test configuration: env, an in-memory Mongo behind motor, API client.

Invariants:
    - Every test starts with empty collections
    - Socket emits are captured instead of sent (see `notifications`)
"""

import os
from unittest import mock

os.environ.setdefault("MONGODB_URL", "mongodb://localhost:27017")
os.environ.setdefault("MONGODB_DB", "instashare_test")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-long-enough-for-hs256-signing")
os.environ.setdefault("LOG_FORMAT", "text")

from mongomock_motor import AsyncMongoMockClient

# instashare.db.mongo builds its client at import time
mock.patch("motor.motor_asyncio.AsyncIOMotorClient", AsyncMongoMockClient).start()

import pytest
from httpx import ASGITransport, AsyncClient

from instashare.db import mongo
from instashare.main import fastapi_app
from instashare.services import socket_manager

COLLECTIONS = (
    mongo.users_collection,
    mongo.posts_collection,
    mongo.messages_collection,
    mongo.reviews_collection,
    mongo.socket_sessions_collection,
)


@pytest.fixture(autouse=True)
async def clean_db():
    for collection in COLLECTIONS:
        await collection.delete_many({})
    socket_manager.user_to_sids.clear()
    socket_manager.sid_to_user.clear()
    yield


@pytest.fixture
async def client():
    async with AsyncClient(
        transport=ASGITransport(app=fastapi_app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def notifications(monkeypatch):
    """Record fire-and-forget emits as (user_id, event, payload) tuples."""
    sent = []

    def _record(user_id, event, payload):
        sent.append((str(user_id), event, payload))

    monkeypatch.setattr("instashare.controllers.post_controller.emit_to_user_bg", _record)
    monkeypatch.setattr("instashare.controllers.message_controller.emit_to_user_bg", _record)
    return sent


@pytest.fixture
def make_user(client):
    """Sign a user up through the API; returns {"token", "user", "headers"}."""

    async def _make(username, fullname=None, password="secret123", **extra):
        body = {"username": username, "password": password, "fullname": fullname or username.title()}
        body.update(extra)
        res = await client.post("/api/auth/signup", json=body)
        assert res.status_code == 200, res.text
        data = res.json()
        data["headers"] = {"Authorization": f"Bearer {data['token']}"}
        return data

    return _make


@pytest.fixture
def make_admin(make_user):
    async def _make(username="admin"):
        account = await make_user(username)
        await mongo.users_collection.update_one(
            {"username": username}, {"$set": {"isAdmin": True}},
        )
        return account

    return _make
