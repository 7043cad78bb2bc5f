from __future__ import annotations
from typing import Optional
from sqlmodel import SQLModel, Field


class UserAccount(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(index=True, unique=True)
    password_hash: str
    is_admin: bool = Field(default=False)
