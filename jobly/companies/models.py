from __future__ import annotations
from typing import Optional
from sqlalchemy import CheckConstraint
from sqlmodel import SQLModel, Field


class Company(SQLModel, table=True):
    __tablename__ = "companies"
    __table_args__ = (CheckConstraint("num_employees >= 0", name="ck_companies_num_employees"),)

    handle: str = Field(primary_key=True, max_length=25)
    name: str
    description: str
    num_employees: Optional[int] = Field(default=None)
    logo_url: Optional[str] = Field(default=None)
