"""
Pytest configuration and shared fixtures.

Every test gets a fresh SQLite database with three companies, three jobs
and two users (one admin).
"""

import pytest
from fastapi.testclient import TestClient

from jobly.accounts.db import register_user
from jobly.auth import create_access_token
from jobly.db import init_db, make_engine, run_query
from jobly.main import create_app

COMPANIES = [
    ("c1", "C1", "Desc1", 1, "http://c1.img"),
    ("c2", "C2", "Desc2", 2, "http://c2.img"),
    ("c3", "C3", "Desc3", 3, "http://c3.img"),
]

JOBS = [
    ("Software Engineer", 5000, "0.1", "c1"),
    ("Intern Dev", 1000, "0", "c1"),
    ("Data Analyst", None, None, "c2"),
]


@pytest.fixture
def bare_engine(tmp_path):
    """Engine on an empty schema."""
    engine = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def engine(bare_engine):
    """Engine on a seeded schema."""
    with bare_engine.begin() as conn:
        for row in COMPANIES:
            run_query(
                conn,
                """INSERT INTO companies (handle, name, description, num_employees, logo_url)
                   VALUES ($1, $2, $3, $4, $5)""",
                row,
            )
        for row in JOBS:
            run_query(
                conn,
                "INSERT INTO jobs (title, salary, equity, company_handle) VALUES ($1, $2, $3, $4)",
                row,
            )
    register_user(bare_engine, "u1", "password1")
    register_user(bare_engine, "admin", "password2", is_admin=True)
    return bare_engine


@pytest.fixture
def job_ids(engine) -> dict:
    """Seeded job ids keyed by title."""
    with engine.connect() as conn:
        rows = run_query(conn, "SELECT id, title FROM jobs").all()
    return {title: job_id for job_id, title in rows}


@pytest.fixture
def client(engine):
    app = create_app(engine)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def u1_token() -> str:
    return create_access_token("u1", False)


@pytest.fixture
def admin_token() -> str:
    return create_access_token("admin", True)


@pytest.fixture
def c1() -> dict:
    """Projection of company c1 as the API returns it."""
    return {
        "handle": "c1",
        "name": "C1",
        "description": "Desc1",
        "numEmployees": 1,
        "logoUrl": "http://c1.img",
    }
