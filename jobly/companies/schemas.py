"""Request shapes for the company endpoints."""

from __future__ import annotations
from typing import Annotated, Any, Optional
from urllib.parse import urlparse

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictInt, field_validator

from jobly.db import INT4_MAX


def _valid_url(v: str) -> str:
    p = urlparse(v)
    if not (p.scheme in {"http", "https"} and p.netloc):
        raise ValueError("must be a valid absolute URL (scheme + host)")
    return v


LogoUrl = Annotated[str, AfterValidator(_valid_url)]
Count = Annotated[StrictInt, Field(ge=0, le=INT4_MAX)]


class CompanyNew(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    handle: str = Field(min_length=1, max_length=25)
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    num_employees: Optional[Count] = Field(default=None, alias="numEmployees")
    logo_url: Optional[LogoUrl] = Field(default=None, alias="logoUrl")


class CompanyUpdate(BaseModel):
    """Fields a company may change; the handle is fixed once created."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    num_employees: Optional[Count] = Field(default=None, alias="numEmployees")
    logo_url: Optional[LogoUrl] = Field(default=None, alias="logoUrl")

    @field_validator("name", "description", mode="before")
    @classmethod
    def _not_null(cls, v: Any) -> Any:
        # may be left out, but never cleared
        if v is None:
            raise ValueError("may not be null")
        return v


class CompanyFilter(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: Optional[str] = None
    min_employees: Optional[Count] = Field(default=None, alias="minEmployees")
    max_employees: Optional[Count] = Field(default=None, alias="maxEmployees")
