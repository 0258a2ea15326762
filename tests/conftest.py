from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel

from db import get_session, make_engine
from main import app
from models import Event, Task, User


@pytest.fixture
def engine():
    # One shared in-memory database per test; foreign keys are on via make_engine.
    engine = make_engine("sqlite://", poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def _get_test_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_test_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def add_user(db: Session, username: str) -> User:
    user = User(email=f"{username}@example.com", username=username, password_hash="x" * 20)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def add_task(db: Session, user: User, **fields) -> Task:
    fields.setdefault("title", "Write report")
    task = Task(user_id=user.id, **fields)
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def add_event(db: Session, user: User, **fields) -> Event:
    fields.setdefault("start_time", datetime(2024, 1, 15, 14, 0))
    fields.setdefault("end_time", datetime(2024, 1, 15, 15, 0))
    fields.setdefault("title", "Standup")
    event = Event(user_id=user.id, **fields)
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


@pytest.fixture
def user(db):
    return add_user(db, "alice")


@pytest.fixture
def other_user(db):
    return add_user(db, "bob")
