"""Shared fixtures for crud unit tests"""

import pytest
from sqlalchemy import create_engine
from sqlmodel import SQLModel, Session

from boardpost.crud.models import Post, Thread


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Fresh session per test; changes are not committed."""
    with Session(engine) as s:
        yield s


@pytest.fixture(name="thread")
def thread_fixture(session):
    """A thread on /g/ with one opening post persisted to the session."""
    t = Thread(board="g")
    session.add(t)
    session.flush()
    session.add(Post(thread_id=t.id, body="first", body_html="<p>first</p>"))
    session.flush()
    return t
