# tests/conftest.py

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.api import deps
from app.core.config import DEFAULT_SLOT_TEMPLATES
from app.core.tracing import Tracer
from app.db.base import Base
from app.db.init_db import seed_slot_templates
from app.db.session import get_db
from app.models.apartment import Apartment
from app.models.user import Role, User
from app.services.reservations import ReservationService
from app.services.slots import SlotService
from app.services.users import UserDirectory
from app.utils.timeslots import resolve_timezone


# --- Test Database Setup ---
# In-memory SQLite shared across threads, rebuilt for every test.
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    seed_slot_templates(session, DEFAULT_SLOT_TEMPLATES)
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


# --- Domain fixtures ---
@pytest.fixture
def apartment(db):
    apt = Apartment(floor=3, door_number=12)
    db.add(apt)
    db.commit()
    return apt


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(role=Role.GUEST, apartment=None, username=None):
        counter["n"] += 1
        user = User(
            username=username or f"resident{counter['n']}",
            first_name="Test",
            last_name=f"User{counter['n']}",
            role=role,
            apartment_id=apartment.id if apartment else None,
            is_approved=True,
        )
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture
def slot_service(db):
    return SlotService(db, Tracer("slots"), tz=resolve_timezone("UTC"))


@pytest.fixture
def reservation_service(db, slot_service):
    return ReservationService(db, slot_service, UserDirectory(db), Tracer("reservations", enabled=True))


# --- Test Client Fixtures ---
@pytest.fixture(scope="function")
def client(db):
    """
    TestClient bound to the test database. Authentication is the real bearer
    token check unless a test calls ``act_as``.
    """

    def override_get_db():
        yield db

    def override_get_slot_service():
        return SlotService(db, Tracer("slots"), tz=resolve_timezone("UTC"))

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[deps.get_slot_service] = override_get_slot_service

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def act_as(client):
    def _act(user):
        app.dependency_overrides[deps.get_current_user] = lambda: user

    return _act
