"""Pytest configuration and fixtures."""

import os

# Settings are read once at import time, so configure them before importing the app.
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SESSION_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient

from useraccounts.database import Base, SessionLocal, engine, get_db
from useraccounts.main import app
from useraccounts.services.accounts import AccountController
from useraccounts.services.passwords import hash_password
from useraccounts.services.users import UserStore

TEST_EMAIL = "ann@example.com"
TEST_NAME = "Ann"
TEST_PASSWORD = "testpass123"


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = SessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def store(db):
    """User store on the test session."""
    return UserStore(db)


@pytest.fixture
def controller(store):
    """Account controller on the test store."""
    return AccountController(store)


@pytest.fixture
def user(store):
    """A registered user with known credentials."""
    return store.create(TEST_EMAIL, TEST_NAME, hash_password(TEST_PASSWORD))


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def logged_in_client(client, user):
    """Test client whose session is bound to ``user``."""
    response = client.post(
        "/", data={"email": TEST_EMAIL, "password": TEST_PASSWORD}, follow_redirects=False
    )
    assert response.status_code == 303
    return client
