"""Request shapes for the job endpoints."""

from __future__ import annotations
from decimal import Decimal
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictInt, field_validator

from jobly.db import INT4_MAX


def _float_as_str(v: Any) -> Any:
    # JSON 0.1 arrives as a float; keep its short repr, not the binary expansion
    return str(v) if isinstance(v, float) else v


Equity = Annotated[Decimal, BeforeValidator(_float_as_str), Field(ge=0, le=1)]
Salary = Annotated[StrictInt, Field(ge=0, le=INT4_MAX)]


class JobNew(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1)
    salary: Optional[Salary] = None
    equity: Optional[Equity] = None
    company_handle: str = Field(min_length=1, max_length=25)


class JobUpdate(BaseModel):
    """Only title, salary and equity change; id and company are fixed."""

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(default=None, min_length=1)
    salary: Optional[Salary] = None
    equity: Optional[Equity] = None

    @field_validator("title", mode="before")
    @classmethod
    def _title_not_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("may not be null")
        return v


class JobFilter(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    title: Optional[str] = None
    min_salary: Optional[Salary] = Field(default=None, alias="minSalary")
    has_equity: Optional[bool] = Field(default=None, alias="hasEquity")
