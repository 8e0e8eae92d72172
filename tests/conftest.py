"""
Pytest fixtures for the inventory and auth APIs.

Each test gets its own in-memory SQLite database shared by both apps.
"""

import os
import uuid

# both app modules build a default app at import time; keep it off disk
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient

from auth_service.app.main import create_app as create_auth_app
from inventory_service.app.crud.location_paths import join_path
from inventory_service.app.main import create_app
from inventory_service.app.models import Location, ResourceInstance, ResourceInstanceTag, ResourceModel
from inventory_service.seed_tags import seed_tags
from shared.core.auth import create_access_token
from shared.core.database import Database
from shared.models.user_login_session import UserLoginSession
from shared.models.users import UserRole, Users


@pytest.fixture
def database():
    database = Database("sqlite://")
    yield database
    database.dispose()


@pytest.fixture
def app(database):
    return create_app(database)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth_client(database):
    return TestClient(create_auth_app(database))


@pytest.fixture
def db(app, database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def user(db):
    user = Users(email="member@example.org", name="Test Member",
                 external_id="1001", role=UserRole.member)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def login_session(db, user):
    session = UserLoginSession(user_id=user.id)
    db.add(session)
    db.commit()
    db.refresh(session)
    return session


@pytest.fixture
def auth_headers(user, login_session):
    token = create_access_token({"user_id": user.id, "session_id": login_session.id})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def tags(db, user):
    """Default tag set keyed by category name, then tag name."""
    seeded = seed_tags(db, user.id)
    db.commit()
    return seeded


@pytest.fixture
def make_location(db, user, tags):
    def _make(name, parent=None, type_name="Area"):
        location_id = str(uuid.uuid4())
        location = Location(
            id=location_id,
            name=name,
            location_type_tag_id=tags["Location Type"][type_name].id,
            parent_id=parent.id if parent else None,
            path=join_path(parent.path if parent else None, name),
            path_ids=join_path(parent.path_ids if parent else None, location_id),
            created_by_id=user.id,
        )
        db.add(location)
        db.commit()
        db.refresh(location)
        return location
    return _make


@pytest.fixture
def make_resource_model(db, user):
    def _make(name, manufacturer=None, description=None):
        model = ResourceModel(name=name, manufacturer=manufacturer,
                              description=description, created_by_id=user.id)
        db.add(model)
        db.commit()
        db.refresh(model)
        return model
    return _make


@pytest.fixture
def make_resource(db, user):
    def _make(model, location, tags=(), serial_number=None):
        resource = ResourceInstance(model_id=model.id, location_id=location.id,
                                    serial_number=serial_number, created_by_id=user.id)
        resource.tag_links = [ResourceInstanceTag(tag_id=tag.id) for tag in tags]
        db.add(resource)
        db.commit()
        db.refresh(resource)
        return resource
    return _make
