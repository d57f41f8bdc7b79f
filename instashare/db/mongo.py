# instashare/db/mongo.py
import logging
import os

from dotenv import load_dotenv
from motor.motor_asyncio import AsyncIOMotorClient

load_dotenv()

logger = logging.getLogger(__name__)

MONGO_URL = os.getenv("MONGODB_URL")
if not MONGO_URL:
    raise RuntimeError("MONGODB_URL env var is not set")

MONGO_DB_NAME = os.getenv("MONGODB_DB", "instashare_db")

client = AsyncIOMotorClient(MONGO_URL)
db = client[MONGO_DB_NAME]

# Collections
users_collection = db["user"]
posts_collection = db["post"]                        # comments are embedded in each post
messages_collection = db["message"]
reviews_collection = db["review"]                    # written by the review service, read here
socket_sessions_collection = db["socket_sessions"]   # { sid, user_id, connected_at }


# Call once at startup. Indexes are best-effort: legacy data with duplicate
# usernames must not keep the API from booting.
async def init_db_indexes() -> None:
    # Users: login lookups + admin listing of removed accounts
    await users_collection.create_index("username", unique=True)
    await users_collection.create_index("isActive")

    # Posts: comment sub-document lookups
    await posts_collection.create_index([("comments.id", 1)])
    await posts_collection.create_index([("by._id", 1)])

    # Messages: pair history (both directions) and per-user conversation scan
    await messages_collection.create_index(
        [("fromUserId", 1), ("toUserId", 1), ("createdAt", 1)],
        name="pair_createdAt",
    )
    await messages_collection.create_index(
        [("toUserId", 1), ("createdAt", -1)],
        name="to_createdAt_desc",
    )

    # Reviews given by a user (profile page)
    await reviews_collection.create_index("byUserId")

    # Map user -> sockets quickly
    await socket_sessions_collection.create_index([("user_id", 1)])
    await socket_sessions_collection.create_index([("sid", 1)], unique=True)

    logger.info("MongoDB indexes ensured on %s", MONGO_DB_NAME)
