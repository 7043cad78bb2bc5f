import time
from typing import Optional, Dict
from fastapi import Depends, Header
from jose import jwt, JWTError

from jobly import config
from jobly.errors import UnauthorizedError
from jobly.models import User


def create_access_token(username: str, is_admin: bool) -> str:
    now = int(time.time())
    payload = {
        "sub": username,
        "is_admin": is_admin,
        "exp": now + config.ACCESS_TOKEN_EXPIRE_SECONDS,
        "iat": now,
    }
    return jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALG)


def decode_token(token: str) -> Optional[Dict]:
    try:
        return jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALG])
    except JWTError:
        return None


def current_user(authorization: Optional[str] = Header(default=None)) -> Optional[User]:
    """User from a valid bearer token; anything else is anonymous (None)."""
    if not authorization or not authorization.lower().startswith("bearer "):
        return None
    payload = decode_token(authorization.split(" ", 1)[1].strip())
    if not payload or "sub" not in payload:
        return None
    return User(username=payload["sub"], is_admin=bool(payload.get("is_admin", False)))


def ensure_logged_in(user: Optional[User] = Depends(current_user)) -> User:
    if user is None:
        raise UnauthorizedError()
    return user


def ensure_admin(user: Optional[User] = Depends(current_user)) -> User:
    if user is None or not user.is_admin:
        raise UnauthorizedError()
    return user
