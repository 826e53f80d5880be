"""Security Primitives — bcrypt password hashing and reset-token generation.

Invariants:
    - Plain passwords are never stored or logged
    - Reset tokens are handed out raw once; only their SHA-256 digest is persisted
    - Work factor comes from settings (lowered in tests)
    - Candidates longer than bcrypt's 72-byte input limit never verify
"""

import hashlib
import secrets

import bcrypt

from fantasy_api.config import get_settings

BCRYPT_MAX_BYTES = 72


def hash_password(password: str) -> str:
    rounds = get_settings().bcrypt_rounds
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password or not password_hash:
        return False
    candidate = password.encode("utf-8")
    if len(candidate) > BCRYPT_MAX_BYTES:
        return False
    return bcrypt.checkpw(candidate, password_hash.encode("utf-8"))


def new_reset_token() -> str:
    return secrets.token_urlsafe(32)


def digest_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
