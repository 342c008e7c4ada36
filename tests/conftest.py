from __future__ import annotations

import os

# Must be set before core.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import date
from itertools import count

import pytest
from fastapi.testclient import TestClient

from core.database import Base, SessionLocal, engine
from crud.attribute_crud import create_attribute
from crud.project_crud import create_project
from crud.token_crud import issue_token
from crud.user_crud import create_user
from main import app
from models.timesheet import Timesheet
from schemas.attribute_schema import AttributeCreate
from schemas.project_schema import ProjectCreate
from schemas.user_schema import UserCreate

_seq = count(1)


@pytest.fixture(autouse=True)
def _schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_user(db):
    def _make(first_name="Test", last_name="User", email=None, password="password123"):
        n = next(_seq)
        return create_user(
            db,
            UserCreate(
                first_name=first_name,
                last_name=last_name,
                email=email or f"user{n}@example.com",
                password=password,
                password_confirmation=password,
            ),
        )

    return _make


@pytest.fixture
def headers_for(db):
    def _headers(user):
        return {"Authorization": f"Bearer {issue_token(db, user.id).token}"}

    return _headers


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def auth_headers(user, headers_for):
    return headers_for(user)


@pytest.fixture
def make_project(db):
    def _make(actor, name=None, status="active", members=(), attributes=None):
        payload = ProjectCreate(
            name=name or f"Project {next(_seq)}",
            status=status,
            user_ids=[actor.id, *(m.id for m in members)],
            attributes=attributes,
        )
        return create_project(db, payload, actor=actor)

    return _make


@pytest.fixture
def project(make_project, user):
    return make_project(user, name="Test Project")


@pytest.fixture
def make_attribute(db):
    def _make(project, name=None, type="string", value="value", options=None):
        return create_attribute(
            db,
            AttributeCreate(
                project_id=project.id,
                name=name or f"attr_{next(_seq)}",
                type=type,
                value=value,
                options=options,
            ),
        )

    return _make


@pytest.fixture
def make_timesheet(db):
    def _make(user, project, task_name="Development Task", day=date(2024, 3, 10), hours=4.0):
        ts = Timesheet(user_id=user.id, project_id=project.id, task_name=task_name, date=day, hours=hours)
        db.add(ts)
        db.commit()
        db.refresh(ts)
        return ts

    return _make
