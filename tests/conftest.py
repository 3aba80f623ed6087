"""Shared test fixtures."""

import os

# antes de importar la app: nada de MySQL en los tests
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CREATE_TABLES"] = "true"

from datetime import date  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from employee_api import models  # noqa: E402,F401
from employee_api.db import Base, get_db  # noqa: E402
from employee_api.main import app  # noqa: E402
from employee_api.repository import EmployeeRepository  # noqa: E402

CSV_HEADER = "First name,Last name,Location,Birthday\n"
TODAY = date(2025, 6, 1)


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database for each test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    with session_factory() as session:
        yield session


@pytest.fixture
def repository(db_session):
    return EmployeeRepository(db_session)


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def write_csv(tmp_path):
    """Write CSV text under tmp_path and return its path."""

    def _write(body: str, header: str = CSV_HEADER, name: str = "employees.csv"):
        path = tmp_path / name
        path.write_text(header + body, encoding="utf-8")
        return path

    return _write
