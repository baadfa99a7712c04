import os
from contextlib import contextmanager
from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

# Set testing environment before the application reads its settings
os.environ["TESTING"] = "1"
os.environ["SEED_ON_STARTUP"] = "0"
os.environ["RATE_LIMIT_ENABLED"] = "0"

from hms.main import app
from hms.core.database import build_engine, get_db, get_redis, init_db
from hms.core.security import create_user_token
from hms.models.ward import Ward
from hms.services.auth_service import AuthService
from hms.services.employee_service import EmployeeService

APP_DATE = date(2030, 1, 15)

class FakeRedis:
    """In-memory stand-in for the handful of Redis commands the rate limiter uses."""

    def __init__(self):
        self.store = {}

    def get(self, key):
        return self.store.get(key)

    def setex(self, key, seconds, value):
        self.store[key] = str(value)

    def incr(self, key):
        self.store[key] = str(int(self.store.get(key, 0)) + 1)
        return int(self.store[key])

@pytest.fixture(scope="function")
def engine():
    # Fresh in-memory database per test
    test_engine = build_engine("sqlite://")
    init_db(bind=test_engine)
    yield test_engine
    test_engine.dispose()

@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture(scope="function")
def db(session_factory):
    session = session_factory()
    yield session
    session.close()

@pytest.fixture(scope="function")
def fake_redis():
    return FakeRedis()

@pytest.fixture
def client(session_factory, fake_redis):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_redis] = lambda: fake_redis

    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client

    app.dependency_overrides.clear()

@contextmanager
def fail_on(engine, statement_prefix):
    """Make every statement starting with the given SQL prefix fail like a dropped connection."""
    def _fail(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith(statement_prefix.upper()):
            raise OperationalError(statement, parameters, Exception("injected failure"))

    event.listen(engine, "before_cursor_execute", _fail)
    try:
        yield
    finally:
        event.remove(engine, "before_cursor_execute", _fail)

# Data helpers

def add_wards(db, count=3):
    wards = [Ward(name=f"Ward {i}", occupied=False) for i in range(1, count + 1)]
    db.add_all(wards)
    db.commit()
    return [ward.id for ward in wards]

def add_doctor(db, employee_id=1, name="Meredith Grey", specialization="Surgery", **kwargs):
    EmployeeService(db).add_employee(
        name=name,
        designation="Doctor",
        employee_id=employee_id,
        age=kwargs.get("age", 40),
        salary=kwargs.get("salary", Decimal("5000.00")),
        email=kwargs.get("email", f"doctor{employee_id}@hospital.test"),
        specialization=specialization,
        is_available=kwargs.get("is_available", True)
    )
    return employee_id

def auth_headers(db, user_id, password="secret-pass"):
    user = AuthService(db).ensure_user(user_id, password)
    token = create_user_token(user.user_id, user.role)
    return {"Authorization": f"Bearer {token.access_token}"}

@pytest.fixture
def admin_headers(db):
    return auth_headers(db, "admin1")

@pytest.fixture
def patient_headers(db):
    return auth_headers(db, "p100")
