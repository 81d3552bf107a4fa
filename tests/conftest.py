"""
Pytest configuration and fixtures for the Hospeda tests.
"""

import itertools
from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hospeda_api.main import app
from hospeda_api.models import (
    Accommodation,
    Base,
    Destination,
    EntityTag,
    Event,
    Post,
    Tag,
    utcnow,
)
from hospeda_api.services import ServiceContext, ServiceLogger
from hospeda_api.services.permissions import Actor, ActorState, RoleEnum
from hospeda_shared.config.constants import (
    AccommodationTypeEnum,
    EventCategoryEnum,
    PostCategoryEnum,
    VisibilityEnum,
)
from hospeda_shared.infrastructure.db import get_db


_counter = itertools.count(1)


def next_suffix() -> int:
    return next(_counter)


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session override.

    The lifespan is not run: tables come from db_session and logging is
    left to pytest.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    yield TestClient(app)

    app.dependency_overrides.clear()


# =============================================================================
# Service context
# =============================================================================


@pytest.fixture
def ctx(db_session):
    """Service context with the real service logger."""
    return ServiceContext(db=db_session, logger=ServiceLogger())


@pytest.fixture
def mock_logger():
    return MagicMock(spec=ServiceLogger)


@pytest.fixture
def mock_ctx(mock_logger):
    """Service context with a mocked session and logger, for repository mocks."""
    return ServiceContext(db=MagicMock(), logger=mock_logger)


# =============================================================================
# Actors
# =============================================================================


@pytest.fixture
def guest():
    return Actor.guest()


@pytest.fixture
def admin():
    return Actor.for_role("admin-1", RoleEnum.ADMIN)


@pytest.fixture
def host():
    return Actor.for_role("host-1", RoleEnum.HOST)


@pytest.fixture
def other_host():
    return Actor.for_role("host-2", RoleEnum.HOST)


@pytest.fixture
def editor():
    return Actor.for_role("editor-1", RoleEnum.EDITOR)


@pytest.fixture
def user():
    return Actor.for_role("user-1", RoleEnum.USER)


@pytest.fixture
def disabled_admin():
    return Actor.for_role("admin-2", RoleEnum.ADMIN, state=ActorState.INACTIVE)


# =============================================================================
# Seed factories
# =============================================================================


def _save(db_session, entity):
    db_session.add(entity)
    db_session.commit()
    db_session.refresh(entity)
    return entity


@pytest.fixture
def make_destination(db_session):
    def _make(**overrides):
        n = next_suffix()
        values = {
            "slug": f"destination-{n}",
            "name": f"Destination {n}",
            "summary": "A quiet town by the river",
            "country": "AR",
            "city": "Colon",
            "visibility": VisibilityEnum.PUBLIC,
        }
        values.update(overrides)
        return _save(db_session, Destination(**values))

    return _make


@pytest.fixture
def make_accommodation(db_session):
    def _make(**overrides):
        n = next_suffix()
        values = {
            "slug": f"accommodation-{n}",
            "name": f"Accommodation {n}",
            "summary": "Cozy cabin near the river",
            "type": AccommodationTypeEnum.CABIN,
            "owner_id": "host-1",
            "visibility": VisibilityEnum.PUBLIC,
        }
        values.update(overrides)
        return _save(db_session, Accommodation(**values))

    return _make


@pytest.fixture
def make_event(db_session):
    def _make(**overrides):
        n = next_suffix()
        values = {
            "slug": f"event-{n}",
            "name": f"Event {n}",
            "summary": "Open air concert on the beach",
            "category": EventCategoryEnum.MUSIC,
            "author_id": "editor-1",
            "start_date": utcnow() + timedelta(days=5),
            "visibility": VisibilityEnum.PUBLIC,
        }
        values.update(overrides)
        return _save(db_session, Event(**values))

    return _make


@pytest.fixture
def make_post(db_session):
    def _make(**overrides):
        n = next_suffix()
        values = {
            "slug": f"post-{n}",
            "title": f"Post {n}",
            "summary": "Ten places to visit this summer",
            "content": "Long form content",
            "category": PostCategoryEnum.TOURISM,
            "author_id": "editor-1",
            "visibility": VisibilityEnum.PUBLIC,
        }
        values.update(overrides)
        return _save(db_session, Post(**values))

    return _make


@pytest.fixture
def make_tag(db_session):
    def _make(**overrides):
        n = next_suffix()
        values = {
            "slug": f"tag-{n}",
            "name": f"Tag {n}",
            "color": "#336699",
        }
        values.update(overrides)
        return _save(db_session, Tag(**values))

    return _make


@pytest.fixture
def make_entity_tag(db_session):
    def _make(tag, entity_id, entity_type):
        return _save(db_session, EntityTag(tag_id=tag.id, entity_id=entity_id, entity_type=entity_type))

    return _make
