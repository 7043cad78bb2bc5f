from __future__ import annotations
import logging
from typing import Any, Dict, List, Mapping

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from jobly.companies.store import fetch_company
from jobly.db import run_query
from jobly.errors import BadRequestError, NotFoundError
from jobly.filters import parse_filters, validate_shape
from jobly.jobs.models import equity_str
from jobly.jobs.schemas import JobFilter, JobNew, JobUpdate
from jobly.sql import WhereClause, sql_for_partial_update

logger = logging.getLogger(__name__)

JOB_COLUMNS = "id, title, salary, equity, company_handle"


def _job(row: Mapping[str, Any]) -> Dict[str, Any]:
    job = dict(row)
    job["equity"] = equity_str(job["equity"])
    return job


class JobStore:
    def __init__(self, engine: Engine):
        self.engine = engine

    def create(self, data: JobNew) -> Dict[str, Any]:
        """Insert a job for an existing company; returns it with its new id."""
        values = data.model_dump(mode="json")
        with self.engine.begin() as conn:
            if not run_query(conn, "SELECT handle FROM companies WHERE handle = $1", [data.company_handle]).first():
                raise BadRequestError(f"No company: {data.company_handle}")
            try:
                row = run_query(
                    conn,
                    f"""INSERT INTO jobs
                       (title, salary, equity, company_handle)
                       VALUES ($1, $2, $3, $4)
                       RETURNING {JOB_COLUMNS}""",
                    [values["title"], values["salary"], values["equity"], values["company_handle"]],
                ).mappings().one()
            except IntegrityError:
                # company removed between the check and the insert
                raise BadRequestError(f"No company: {data.company_handle}") from None
        logger.info("Created job %s for %s", row["id"], data.company_handle)
        return _job(row)

    def find_all(self) -> List[Dict[str, Any]]:
        with self.engine.connect() as conn:
            rows = run_query(
                conn,
                f"""SELECT {JOB_COLUMNS}
                   FROM jobs
                   ORDER BY title""",
            ).mappings().all()
        return [_job(r) for r in rows]

    def get(self, job_id: int) -> Dict[str, Any]:
        """Job by id with its company attached under "company"."""
        with self.engine.connect() as conn:
            row = run_query(
                conn,
                f"""SELECT {JOB_COLUMNS}
                   FROM jobs
                   WHERE id = $1""",
                [job_id],
            ).mappings().first()
            if not row:
                raise NotFoundError(f"No job: {job_id}")
            job = _job(row)
            job["company"] = fetch_company(conn, job["company_handle"])
        return job

    def update(self, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
        # mode="json" renders Decimal equity as a string the drivers can bind
        changes = validate_shape(JobUpdate, data).model_dump(exclude_unset=True, mode="json")
        set_cols, values = sql_for_partial_update(changes, {})
        id_idx = len(values) + 1

        sql = f"""UPDATE jobs
                  SET {set_cols}
                  WHERE id = ${id_idx}
                  RETURNING {JOB_COLUMNS}"""
        with self.engine.begin() as conn:
            row = run_query(conn, sql, [*values, job_id]).mappings().first()
        if not row:
            raise NotFoundError(f"No job: {job_id}")
        logger.info("Updated job %s: %s", job_id, ", ".join(changes))
        return _job(row)

    def remove(self, job_id: int) -> None:
        with self.engine.begin() as conn:
            row = run_query(
                conn,
                """DELETE
                   FROM jobs
                   WHERE id = $1
                   RETURNING id""",
                [job_id],
            ).first()
        if not row:
            raise NotFoundError(f"No job: {job_id}")
        logger.info("Removed job %s", job_id)

    def filter(self, raw_filters: Mapping[str, Any]) -> List[Dict[str, Any]]:
        """Search by title substring, minimum salary and non-zero equity.

        hasEquity=false is the same as leaving it out.
        """
        filters = parse_filters(raw_filters, JobFilter, ints=("minSalary",), bools=("hasEquity",))

        where = WhereClause()
        if filters.title:
            where.add("LOWER(title) LIKE '%' || LOWER({param}) || '%'", filters.title)
        if filters.min_salary is not None:
            where.add("salary >= {param}", filters.min_salary)
        if filters.has_equity:
            where.add("equity > {param}", 0)

        sql = f"""SELECT {JOB_COLUMNS}
                 FROM jobs
                 WHERE {where.render()}
                 ORDER BY title"""
        logger.debug("Job filter %s with %s", sql, where.values)
        with self.engine.connect() as conn:
            rows = run_query(conn, sql, where.values).mappings().all()
        if not rows:
            raise NotFoundError("No job results found")
        return [_job(r) for r in rows]
