from __future__ import annotations
import re
from typing import Any, Sequence

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.engine import Connection, CursorResult, Engine
from sqlmodel import SQLModel, create_engine

from jobly import config

_PLACEHOLDER = re.compile(r"\$(\d+)")

# largest value an INTEGER column holds on PostgreSQL
INT4_MAX = 2**31 - 1


def make_engine(url: str | None = None) -> Engine:
    url = url or config.DATABASE_URL
    if url.startswith("sqlite"):
        engine = create_engine(url, echo=False, connect_args={"check_same_thread": False})

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_conn, _record):
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA foreign_keys = ON")
            cur.close()

        return engine
    return create_engine(url, echo=False, pool_pre_ping=True)


def init_db(engine: Engine) -> None:
    # table classes register themselves on import
    from jobly.accounts import models as _accounts  # noqa: F401
    from jobly.companies import models as _companies  # noqa: F401
    from jobly.jobs import models as _jobs  # noqa: F401

    SQLModel.metadata.create_all(engine)


def run_query(conn: Connection, sql: str, values: Sequence[Any] = ()) -> CursorResult:
    """Execute SQL written with $1..$N placeholders against `values`."""
    bound = _PLACEHOLDER.sub(lambda m: f":p{m.group(1)}", sql)
    params = {f"p{i}": v for i, v in enumerate(values, start=1)}
    return conn.execute(text(bound), params)


def get_engine(request: Request) -> Engine:
    return request.app.state.engine
