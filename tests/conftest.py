# /tests/conftest.py

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine

from app.core.security import create_access_token
from app.db.base import Base
from app.db.database import build_session_factory, get_db
from app.main import app
from app.models.book_model import BookCreate
from app.models.user_model import UserCreate
from app.services import book_service, user_service
from app.services.database_service import DatabaseService


@pytest.fixture
def session_factory(tmp_path):
    """
    A fresh SQLite file database for EACH test. A file (not :memory:) so
    that several threads can open their own connections to it.
    """
    engine = create_engine(
        f"sqlite:///{tmp_path / 'library_test.db'}",
        connect_args={"check_same_thread": False, "timeout": 15},
    )
    Base.metadata.create_all(bind=engine)
    yield build_session_factory(engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield DatabaseService(session)
    session.close()


@pytest.fixture
def client(session_factory):
    """A TestClient whose requests all hit the per-test database."""
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(name: str = None):
        counter["n"] += 1
        name = name or f"Reader {counter['n']}"
        return user_service.create_user(UserCreate(name=name, email=f"reader{counter['n']}@example.com"), db=db)

    return _make


@pytest.fixture
def make_book(db):
    def _make(title="X", author="Y", isbn="123", quantity=1):
        return book_service.create_book(BookCreate(title=title, author=author, ISBN=isbn, quantity=quantity), db=db)

    return _make


@pytest.fixture
def auth_headers():
    def _headers(user_id: str):
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return _headers
