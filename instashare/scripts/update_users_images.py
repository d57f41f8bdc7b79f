# instashare/scripts/update_users_images.py
# One-time script: give every user without an imgUrl a random avatar, then copy
# each author's imgUrl into the `by` snapshot of their posts.
#
#   python -m instashare.scripts.update_users_images
import os
import random

from dotenv import load_dotenv
from pymongo import MongoClient

from instashare.utils.ids import id_criteria

AVATAR_URL = "https://i.pravatar.cc/150?img={}"
AVATAR_COUNT = 70


def random_avatar_url() -> str:
    return AVATAR_URL.format(random.randint(1, AVATAR_COUNT))


def update_users_images(db) -> dict:
    users_collection = db["user"]
    posts_collection = db["post"]

    users_without_image = list(users_collection.find({"imgUrl": {"$exists": False}}))
    print(f"Found {len(users_without_image)} users without imgUrl")

    for user in users_without_image:
        users_collection.update_one(
            {"_id": user["_id"]},
            {"$set": {"imgUrl": random_avatar_url()}},
        )
    print("✅ All users updated with imgUrl")

    posts = list(posts_collection.find({}))
    print(f"Updating {len(posts)} posts...")

    posts_updated = 0
    for post in posts:
        author_id = (post.get("by") or {}).get("_id")
        if not author_id:
            continue
        user = users_collection.find_one(id_criteria(author_id))
        if user and user.get("imgUrl"):
            posts_collection.update_one(
                {"_id": post["_id"]},
                {"$set": {"by.imgUrl": user["imgUrl"]}},
            )
            posts_updated += 1
    print("✅ All posts updated")

    return {"users_updated": len(users_without_image), "posts_updated": posts_updated}


def main():
    load_dotenv()
    client = MongoClient(os.getenv("MONGODB_URL", "mongodb://127.0.0.1:27017"))
    try:
        db = client[os.getenv("MONGODB_DB", "instashare_db")]
        print("Connected to MongoDB")
        update_users_images(db)
    finally:
        client.close()


if __name__ == "__main__":
    main()
