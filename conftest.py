import os

# Must be set before config/database are imported by the app
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CREATE_TABLES", "false")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

import models
from database import Base, get_db
from db_service import DbService
from main import app
from services.book_service import BookService

TEST_DATABASE_URL = "sqlite://"


@pytest.fixture(scope="function")
def engine():
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    yield session

    session.close()


@pytest.fixture(scope="function")
def book_db(db_session):
    return DbService(db_session, models.Book)


@pytest.fixture(scope="function")
def book_service(book_db):
    return BookService(book_db)


@pytest.fixture(scope="function")
def client(db_session):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_book(db_session):
    counter = {"n": 0}

    def _make_book(**overrides):
        counter["n"] += 1
        values = {
            "title": f"Book {counter['n']}",
            "author": "Test Author",
            "isbn": f"9780000000{counter['n']:04d}",
            "publication_year": 2020,
            "amount_available": 5,
        }
        values.update(overrides)
        book = models.Book(**values)
        db_session.add(book)
        db_session.commit()
        db_session.refresh(book)
        return book

    return _make_book
