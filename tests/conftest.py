"""Shared fixtures: in-memory database, fixed clock and API client."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("JWT_SECRET", "test-secret-for-signing-bearer-tokens")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from clinic.api.dependencies import get_clock  # noqa: E402
from clinic.main import app  # noqa: E402
from clinic.models import Dentist, Procedure  # noqa: E402
from clinic.services.db import create_db_engine, get_db, init_db  # noqa: E402
from tests.factories import FIXED_NOW  # noqa: E402


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def client(session_factory, fixed_clock):
    """Test client whose requests use the in-memory database and fixed clock."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: fixed_clock
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def dentist(session):
    dentist = Dentist(id=7, full_name="Maria Santos", first_name="Maria", last_name="Santos")
    session.add(dentist)
    session.commit()
    return dentist


@pytest.fixture
def procedure(session):
    procedure = Procedure(id=3, name="Cleaning")
    session.add(procedure)
    session.commit()
    return procedure


@pytest.fixture
def auth_headers(client):
    """Bearer header for a freshly reset admin account."""
    client.post("/api/auth/reset-admin", json={"email": "admin@clinic.test", "password": "s3cret-pass"})
    response = client.post("/api/auth/login", json={"email": "admin@clinic.test", "password": "s3cret-pass"})
    return {"Authorization": f"Bearer {response.json()['accessToken']}"}
