"""
Shared pytest fixtures

Provides:
    - engine: in-memory SQLite engine with all tables (function-scoped)
    - db: SQLAlchemy session bound to that engine
    - client: TestClient whose requests share the db session
    - auth_client: client with a registered, signed-in user
    - department / employee: pre-created records
"""
import os

os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_DEFAULT_DATA", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hr_console.database import Base, get_db, init_db
from hr_console.main import app
from hr_console.services.departments import department_service
from hr_console.services.employees import employee_service

TEST_EMAIL = "jane.doe@example.com"
TEST_PASSWORD = "secret123"


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def db(engine):
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
    session = TestingSession()
    yield session
    session.close()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_client(client):
    """Client holding the session cookie of a registered user."""
    res = client.post("/auth/signup", json={"email": TEST_EMAIL, "password": TEST_PASSWORD})
    assert res.status_code == 201, res.text
    res = client.post("/auth/login", json={"email": TEST_EMAIL, "password": TEST_PASSWORD})
    assert res.status_code == 200, res.text
    return client


@pytest.fixture
def department(db):
    return department_service.create(db, "Assembly")


@pytest.fixture
def employee(db, department):
    return employee_service.create(db, {
        "name": "Ravi Kumar",
        "employee_code": "EMP001",
        "position": "Assembly Operator",
        "department_id": department.id,
    })
