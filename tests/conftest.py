"""
Test configuration and fixtures.

Provides:
- In-memory SQLite session shared with the app through dependency overrides
- Users with minted JWTs for authenticated requests
- A weekly schedule open every day 09:00-18:00
"""
import os
from datetime import date, time, timedelta

# keep the app away from the on-disk database during import
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_DEFAULTS", "false")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session, create_engine
from sqlmodel.pool import StaticPool

from barbershop.main import app
from barbershop.db import get_session
from barbershop.auth import create_access_token, hash_password
from barbershop.data import WEEKDAYS
from barbershop.models import Service, User, WorkingHours


@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def _make_user(session: Session, email: str, role: str = "user", password: str = None) -> User:
    user = User(
        email=email,
        name=email.split("@")[0].title(),
        role=role,
        password_hash=hash_password(password) if password else None,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def auth_header(user: User) -> dict:
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def customer(session: Session) -> User:
    return _make_user(session, "jane@example.com", password="correct-horse")


@pytest.fixture
def other_customer(session: Session) -> User:
    return _make_user(session, "sam@example.com")


@pytest.fixture
def admin(session: Session) -> User:
    return _make_user(session, "owner@example.com", role="admin")


@pytest.fixture
def customer_headers(customer: User) -> dict:
    return auth_header(customer)


@pytest.fixture
def other_headers(other_customer: User) -> dict:
    return auth_header(other_customer)


@pytest.fixture
def admin_headers(admin: User) -> dict:
    return auth_header(admin)


@pytest.fixture
def open_every_day(session: Session):
    rows = []
    for day in WEEKDAYS:
        row = WorkingHours(day_of_week=day, start_time=time(9, 0), end_time=time(18, 0))
        session.add(row)
        rows.append(row)
    session.commit()
    return rows


@pytest.fixture
def haircut(session: Session) -> Service:
    service = Service(
        name="Classic Haircut",
        description="Scissor cut and style",
        price=25.0,
        duration=30,
        category="haircut",
    )
    session.add(service)
    session.commit()
    session.refresh(service)
    return service


@pytest.fixture
def next_week() -> date:
    return date.today() + timedelta(days=7)
