from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import bcrypt
from jose import JWTError, jwt

from config import BCRYPT_ROUNDS, JWT_ALGORITHM, JWT_EXPIRE_MINUTES, JWT_SECRET_KEY


# =========================
# PASSWORD (bcrypt)
# =========================
def _encode_for_bcrypt(password: str) -> bytes:
    """bcrypt only looks at the first 72 bytes; longer input is truncated."""
    return (password or "").encode("utf-8")[:72]


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(_encode_for_bcrypt(password), salt).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(_encode_for_bcrypt(plain_password), password_hash.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt digest
        return False


# =========================
# JWT HELPERS
# =========================
def create_access_token(
    user_id: int,
    email: str,
    role: str,
    expires_minutes: int = JWT_EXPIRE_MINUTES,
) -> str:
    """
    Sign a session token carrying the caller identity.

    "sub" has to be a string for python-jose, so the numeric id is also kept
    under "id".
    """
    now = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "id": user_id,
        "email": email,
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=expires_minutes)).timestamp()),
    }
    return jwt.encode(payload, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Return the claims of a valid token, or raise ValueError when the token is
    malformed, expired, badly signed or missing identity claims.
    """
    try:
        payload = jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        raise ValueError("Invalid or expired token") from e

    if not isinstance(payload.get("id"), int) or not payload.get("role"):
        raise ValueError("Token is missing identity claims")
    return payload
