# instashare/utils/hashing.py
from passlib.hash import pbkdf2_sha256


def hash_password(password: str) -> str:
    return pbkdf2_sha256.hash(password)


def verify_password(password: str, stored: str) -> bool:
    if not password or not stored:
        return False
    try:
        return pbkdf2_sha256.verify(password, stored)
    except ValueError:
        # Stored value is not a pbkdf2 hash (e.g. seeded plain-text password)
        return False
