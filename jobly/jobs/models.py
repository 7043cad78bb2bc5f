from __future__ import annotations
from decimal import Decimal
from typing import Any, Optional
from sqlalchemy import CheckConstraint, Column, ForeignKey, Numeric, String
from sqlmodel import SQLModel, Field


class Job(SQLModel, table=True):
    __tablename__ = "jobs"
    __table_args__ = (
        CheckConstraint("salary >= 0", name="ck_jobs_salary"),
        CheckConstraint("equity <= 1.0", name="ck_jobs_equity"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    salary: Optional[int] = Field(default=None)
    equity: Optional[Decimal] = Field(default=None, sa_column=Column(Numeric, nullable=True))
    company_handle: str = Field(
        sa_column=Column(String(25), ForeignKey("companies.handle", ondelete="CASCADE"), nullable=False)
    )


def equity_str(value: Any) -> Optional[str]:
    # drivers hand back Decimal (postgres) or float/int (sqlite)
    if value is None:
        return None
    return str(value)
