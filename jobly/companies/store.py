from __future__ import annotations
import logging
from typing import Any, Dict, List, Mapping

from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import IntegrityError

from jobly.companies.schemas import CompanyFilter, CompanyNew, CompanyUpdate
from jobly.db import run_query
from jobly.errors import BadRequestError, ConflictError, NotFoundError
from jobly.filters import parse_filters, validate_shape
from jobly.jobs.models import equity_str
from jobly.sql import WhereClause, sql_for_partial_update

logger = logging.getLogger(__name__)

COMPANY_COLUMNS = ('handle, name, description, '
                   'num_employees AS "numEmployees", logo_url AS "logoUrl"')

# external field name -> column
ALIASES = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}


def fetch_company(conn: Connection, handle: str) -> Dict[str, Any] | None:
    row = run_query(
        conn,
        f"""SELECT {COMPANY_COLUMNS}
           FROM companies
           WHERE handle = $1""",
        [handle],
    ).mappings().first()
    return dict(row) if row else None


class CompanyStore:
    """Company rows: create, read, partial update, delete and filtered search."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def create(self, data: CompanyNew) -> Dict[str, Any]:
        """Insert a company; ConflictError if the handle is taken."""
        with self.engine.begin() as conn:
            dup = run_query(conn, "SELECT handle FROM companies WHERE handle = $1", [data.handle]).first()
            if dup:
                raise ConflictError(f"Duplicate company: {data.handle}")
            try:
                row = run_query(
                    conn,
                    f"""INSERT INTO companies
                       (handle, name, description, num_employees, logo_url)
                       VALUES ($1, $2, $3, $4, $5)
                       RETURNING {COMPANY_COLUMNS}""",
                    [data.handle, data.name, data.description, data.num_employees, data.logo_url],
                ).mappings().one()
            except IntegrityError:
                # another request inserted the same handle after the check
                raise ConflictError(f"Duplicate company: {data.handle}") from None
        logger.info("Created company %s", data.handle)
        return dict(row)

    def find_all(self) -> List[Dict[str, Any]]:
        with self.engine.connect() as conn:
            rows = run_query(
                conn,
                f"""SELECT {COMPANY_COLUMNS}
                   FROM companies
                   ORDER BY name""",
            ).mappings().all()
        return [dict(r) for r in rows]

    def get(self, handle: str) -> Dict[str, Any]:
        """Company projection plus its jobs as {id, title, salary, equity}."""
        with self.engine.connect() as conn:
            company = fetch_company(conn, handle)
            if not company:
                raise NotFoundError(f"No company: {handle}")
            jobs = run_query(
                conn,
                """SELECT id, title, salary, equity
                   FROM jobs
                   WHERE company_handle = $1
                   ORDER BY id""",
                [handle],
            ).mappings().all()
        company["jobs"] = [{**j, "equity": equity_str(j["equity"])} for j in jobs]
        return company

    def update(self, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Partial update of name, description, numEmployees and logoUrl."""
        changes = validate_shape(CompanyUpdate, data).model_dump(exclude_unset=True, by_alias=True)
        set_cols, values = sql_for_partial_update(changes, ALIASES)
        handle_idx = len(values) + 1

        sql = f"""UPDATE companies
                  SET {set_cols}
                  WHERE handle = ${handle_idx}
                  RETURNING {COMPANY_COLUMNS}"""
        with self.engine.begin() as conn:
            row = run_query(conn, sql, [*values, handle]).mappings().first()
        if not row:
            raise NotFoundError(f"No company: {handle}")
        logger.info("Updated company %s: %s", handle, ", ".join(changes))
        return dict(row)

    def remove(self, handle: str) -> None:
        with self.engine.begin() as conn:
            row = run_query(
                conn,
                """DELETE
                   FROM companies
                   WHERE handle = $1
                   RETURNING handle""",
                [handle],
            ).first()
        if not row:
            raise NotFoundError(f"No company: {handle}")
        logger.info("Removed company %s", handle)

    def filter(self, raw_filters: Mapping[str, Any]) -> List[Dict[str, Any]]:
        """Search by name substring and employee-count range.

        Raw values are query-string strings; counts are coerced to int before
        validation. Only supplied filters constrain the result.
        """
        filters = parse_filters(raw_filters, CompanyFilter, ints=("minEmployees", "maxEmployees"))
        lo, hi = filters.min_employees, filters.max_employees
        if lo is not None and hi is not None and lo > hi:
            raise BadRequestError("Minimum employees should not exceed maximum employees")

        where = WhereClause()
        if filters.name:
            where.add("LOWER(name) LIKE '%' || LOWER({param}) || '%'", filters.name)
        if lo is not None:
            where.add("num_employees >= {param}", lo)
        if hi is not None:
            where.add("num_employees <= {param}", hi)

        sql = f"""SELECT {COMPANY_COLUMNS}
                 FROM companies
                 WHERE {where.render()}
                 ORDER BY name"""
        logger.debug("Company filter %s with %s", sql, where.values)
        with self.engine.connect() as conn:
            rows = run_query(conn, sql, where.values).mappings().all()
        if not rows:
            raise NotFoundError("No company results found")
        return [dict(r) for r in rows]
