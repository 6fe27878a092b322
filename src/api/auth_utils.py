import os
from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import jwt

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60


def get_secret_key() -> str:
    return os.environ.get("ACCOUNTS_SECRET_KEY", "dev-secret-unsafe")


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
    now_utc: datetime | None = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        data: Claims to encode; "sub" is the actor id and "roles" its role list
        expires_delta: Optional custom expiration delta
        now_utc: Current UTC time (for testing/determinism). Defaults to datetime.now(UTC).
    """
    to_encode = data.copy()
    current_time = now_utc if now_utc is not None else datetime.now(UTC)
    expire = current_time + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    encoded_jwt: str = jwt.encode(to_encode, get_secret_key(), algorithm=ALGORITHM)
    return encoded_jwt


def decode_access_token(token: str) -> dict[str, Any] | None:
    try:
        payload = jwt.decode(token, get_secret_key(), algorithms=[ALGORITHM])
        return cast(dict[str, Any], payload)
    except jwt.JWTError:
        return None
