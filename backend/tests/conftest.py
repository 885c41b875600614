"""Pytest fixtures — per-test SQLite database with foreign keys enforced."""
import io
from datetime import datetime
import pytest
import pytz
from PIL import Image
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from holiday_api.database import Base, enable_sqlite_foreign_keys, get_db
from holiday_api.main import app
from holiday_api.models.activity import Activity
from holiday_api.models.holiday import Holiday
from holiday_api.models.invitation import Invitation
from holiday_api.models.location import Location
from holiday_api.models.message import Message
from holiday_api.models.participant import Participant
from holiday_api.models.participate import Participate
from holiday_api.services import activity_service, holiday_service, invitation_service, participant_service
from holiday_api.services.location_service import get_address_validator
from holiday_api.services.picture_storage import PictureStorage, get_picture_storage


@pytest.fixture(scope="function")
def db_engine(tmp_path):
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}", connect_args={"check_same_thread": False}
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db(session_factory):
    """Yield a database session for service-level tests."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def pictures(tmp_path):
    return PictureStorage(root=str(tmp_path / "wwwroot"), folder="images")


@pytest.fixture(scope="function")
def client(session_factory, pictures):
    """FastAPI TestClient with database, validator and storage dependencies overridden."""

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_address_validator] = lambda: None
    app.dependency_overrides[get_picture_storage] = lambda: pictures
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def utc(*args) -> datetime:
    return pytz.utc.localize(datetime(*args))


def image_bytes(fmt: str = "PNG", size: tuple = (40, 20), color: str = "orange") -> bytes:
    """Encode a small solid-colour picture."""
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format=fmt)
    return buffer.getvalue()


# ---------------------------------------------------------------------------
# Service-level helpers
# ---------------------------------------------------------------------------
def make_participant(db, first_name: str = "Alice", email: str = None) -> Participant:
    participant = Participant(
        first_name=first_name,
        last_name="Tester",
        email=email or f"{first_name.lower()}@example.com",
    )
    assert participant_service.create_participant(db, participant)
    return participant


def make_location(locality: str = "Monaco", country: str = "Monaco", postal_code: str = "98000") -> Location:
    return Location(locality=locality, postal_code=postal_code, country=country)


def make_holiday(
    db,
    creator: Participant,
    name: str = "Monaco 2024",
    start: datetime = None,
    end: datetime = None,
    location: Location = None,
    is_published: bool = False,
) -> Holiday:
    holiday = Holiday(
        name=name,
        start_date=start or utc(2024, 7, 1),
        end_date=end or utc(2024, 7, 8),
        is_published=is_published,
        creator_id=creator.participant_id,
        location=location or make_location(),
    )
    assert holiday_service.create_holiday(db, holiday)
    return holiday


def make_activity(db, holiday: Holiday, name: str = "Casino Night", start: datetime = None, end: datetime = None) -> Activity:
    activity = Activity(
        holiday_id=holiday.holiday_id,
        name=name,
        price=50.0,
        start_date=start or utc(2024, 7, 3, 20),
        end_date=end or utc(2024, 7, 3, 23),
        location=make_location(),
    )
    assert activity_service.add_activity(db, activity)
    return activity


def invite(db, holiday: Holiday, participant: Participant, accepted: bool = True) -> Invitation:
    invitation = Invitation(
        holiday_id=holiday.holiday_id,
        participant_id=participant.participant_id,
        is_accepted=accepted,
    )
    assert invitation_service.add_invitation(db, invitation)
    return invitation


def row_ids(db) -> dict:
    """Primary keys of every table, for before/after comparisons."""
    return {
        model.__tablename__: sorted(getattr(row, model.__mapper__.primary_key[0].name) for row in db.query(model).all())
        for model in (Location, Participant, Holiday, Activity, Invitation, Participate, Message)
    }


# ---------------------------------------------------------------------------
# API helpers
# ---------------------------------------------------------------------------
def create_test_participant(client: TestClient, first_name: str = "Alice") -> dict:
    """Helper — POST /api/participants and return response JSON."""
    resp = client.post("/api/participants/", json={
        "first_name": first_name,
        "last_name": "Tester",
        "email": f"{first_name.lower()}@example.com",
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_test_holiday(client: TestClient, creator_id: str, name: str = "Monaco 2024") -> dict:
    """Helper — POST /api/holidays and return response JSON."""
    resp = client.post("/api/holidays/", json={
        "name": name,
        "start_date": "2024-07-01T00:00:00Z",
        "end_date": "2024-07-08T00:00:00Z",
        "creator_id": creator_id,
        "location": {"locality": "Monaco", "postal_code": "98000", "country": "Monaco"},
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_test_activity(client: TestClient, holiday_id: str, name: str = "Casino Night") -> dict:
    """Helper — POST /api/activities and return response JSON."""
    resp = client.post("/api/activities/", json={
        "holiday_id": holiday_id,
        "name": name,
        "price": 50,
        "start_date": "2024-07-03T20:00:00Z",
        "end_date": "2024-07-03T23:00:00Z",
        "location": {"street": "Place du Casino", "locality": "Monaco", "postal_code": "98000", "country": "Monaco"},
    })
    assert resp.status_code == 201, resp.text
    return resp.json()
