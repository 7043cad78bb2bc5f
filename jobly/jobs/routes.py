from __future__ import annotations
from fastapi import APIRouter, Depends, Request
from sqlalchemy.engine import Engine

from jobly.auth import ensure_admin
from jobly.db import get_engine
from .schemas import JobNew, JobUpdate
from .store import JobStore

router = APIRouter(prefix="/jobs", tags=["jobs"])


def job_store(engine: Engine = Depends(get_engine)) -> JobStore:
    return JobStore(engine)


@router.get("")
async def list_jobs(request: Request, store: JobStore = Depends(job_store)):
    """All jobs, or those matching ?title=&minSalary=&hasEquity=."""
    if request.query_params:
        return {"jobs": store.filter(dict(request.query_params))}
    return {"jobs": store.find_all()}


@router.get("/{job_id}")
async def get_job(job_id: int, store: JobStore = Depends(job_store)):
    return {"job": store.get(job_id)}


@router.post("", status_code=201, dependencies=[Depends(ensure_admin)])
async def create_job(data: JobNew, store: JobStore = Depends(job_store)):
    return {"job": store.create(data)}


@router.patch("/{job_id}", dependencies=[Depends(ensure_admin)])
async def update_job(job_id: int, data: JobUpdate, store: JobStore = Depends(job_store)):
    return {"job": store.update(job_id, data.model_dump(exclude_unset=True))}


@router.delete("/{job_id}", dependencies=[Depends(ensure_admin)])
async def delete_job(job_id: int, store: JobStore = Depends(job_store)):
    store.remove(job_id)
    return {"deleted": str(job_id)}
