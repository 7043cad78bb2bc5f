from __future__ import annotations
from fastapi import APIRouter, Depends, Request
from sqlalchemy.engine import Engine

from jobly.auth import ensure_admin
from jobly.db import get_engine
from .schemas import CompanyNew, CompanyUpdate
from .store import CompanyStore

router = APIRouter(prefix="/companies", tags=["companies"])


def company_store(engine: Engine = Depends(get_engine)) -> CompanyStore:
    return CompanyStore(engine)


@router.get("")
async def list_companies(request: Request, store: CompanyStore = Depends(company_store)):
    """All companies, or those matching ?name=&minEmployees=&maxEmployees=."""
    if request.query_params:
        return {"companies": store.filter(dict(request.query_params))}
    return {"companies": store.find_all()}


@router.get("/{handle}")
async def get_company(handle: str, store: CompanyStore = Depends(company_store)):
    return {"company": store.get(handle)}


@router.post("", status_code=201, dependencies=[Depends(ensure_admin)])
async def create_company(data: CompanyNew, store: CompanyStore = Depends(company_store)):
    return {"company": store.create(data)}


@router.patch("/{handle}", dependencies=[Depends(ensure_admin)])
async def update_company(handle: str, data: CompanyUpdate, store: CompanyStore = Depends(company_store)):
    return {"company": store.update(handle, data.model_dump(exclude_unset=True, by_alias=True))}


@router.delete("/{handle}", dependencies=[Depends(ensure_admin)])
async def delete_company(handle: str, store: CompanyStore = Depends(company_store)):
    store.remove(handle)
    return {"deleted": handle}
