from __future__ import annotations
import logging
from typing import Optional

from passlib.context import CryptContext
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from jobly import config
from jobly.errors import ConflictError
from .models import UserAccount

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def register_user(engine: Engine, username: str, password: str, is_admin: bool = False) -> UserAccount:
    with Session(engine) as s:
        if s.exec(select(UserAccount).where(UserAccount.username == username)).first():
            raise ConflictError(f"Duplicate username: {username}")
        acct = UserAccount(username=username, password_hash=pwd_context.hash(password), is_admin=is_admin)
        s.add(acct)
        try:
            s.commit()
        except IntegrityError:
            s.rollback()
            raise ConflictError(f"Duplicate username: {username}") from None
        s.refresh(acct)
    logger.info("Registered user %s (admin=%s)", username, is_admin)
    return acct


def authenticate_user(engine: Engine, username: str, password: str) -> Optional[UserAccount]:
    with Session(engine) as s:
        acct = s.exec(select(UserAccount).where(UserAccount.username == username)).first()
    if not acct:
        return None
    if not pwd_context.verify(password, acct.password_hash):
        return None
    return acct


def seed_admin(engine: Engine) -> None:
    """Create the admin named in JOBLY_ADMIN_USERNAME/JOBLY_ADMIN_PASSWORD if missing."""
    if not (config.ADMIN_USERNAME and config.ADMIN_PASSWORD):
        return
    with Session(engine) as s:
        if s.exec(select(UserAccount).where(UserAccount.username == config.ADMIN_USERNAME)).first():
            return
    register_user(engine, config.ADMIN_USERNAME, config.ADMIN_PASSWORD, is_admin=True)
