"""Pytest configuration and fixtures"""
import os

# Configure the app for tests before anything imports admin_panel.config
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["JWT_SECRET"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DISPLAY_LANGUAGE"] = "en"

from typing import Callable, Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from admin_panel.bootstrap import create_admin  # noqa: E402
from admin_panel.database import Base, Database, get_database  # noqa: E402
from admin_panel.main import app  # noqa: E402
from admin_panel.models.admin import Admin  # noqa: E402
from admin_panel.models.user import User  # noqa: E402
from admin_panel.utils.permissions import Role  # noqa: E402

TEST_DATABASE_URL = "sqlite:///./test.db"
DEFAULT_PASSWORD = "admin123456"

database = Database(TEST_DATABASE_URL)


@pytest.fixture(scope="function")
def test_database() -> Generator[Database, None, None]:
    """Create a fresh schema for each test"""
    database.create_all()
    try:
        yield database
    finally:
        Base.metadata.drop_all(bind=database.engine)


@pytest.fixture(scope="function")
def db(test_database: Database) -> Generator[Session, None, None]:
    """Session for arranging and inspecting test data.

    The app writes through its own sessions; call ``db.expire_all()`` before
    reading back rows a request has changed.
    """
    session = test_database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(test_database: Database) -> Generator[TestClient, None, None]:
    """Create test client bound to the test database"""
    app.dependency_overrides[get_database] = lambda: test_database
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_admin(db: Session) -> Callable[..., Admin]:
    """Factory for committed admin accounts"""

    def _make_admin(
        username: str = "admin",
        role: Role = Role.SUPERADMIN,
        password: str = DEFAULT_PASSWORD,
        email: str = None,
        **fields,
    ) -> Admin:
        admin = create_admin(db, username, email or f"{username}@example.com", password, role)
        for name, value in fields.items():
            setattr(admin, name, value)
        db.commit()
        db.refresh(admin)
        return admin

    return _make_admin


@pytest.fixture
def superadmin(make_admin) -> Admin:
    return make_admin("admin", Role.SUPERADMIN)


@pytest.fixture
def moderator(make_admin) -> Admin:
    return make_admin("moderator", Role.MODERATOR)


@pytest.fixture
def viewer(make_admin) -> Admin:
    return make_admin("viewer", Role.VIEWER)


@pytest.fixture
def login(client: TestClient) -> Callable:
    """Log in through the API; the client keeps the session cookie"""

    def _login(username: str, password: str = DEFAULT_PASSWORD, **extra):
        client.cookies.clear()
        return client.post("/auth/login", json={"username": username, "password": password, **extra})

    return _login


@pytest.fixture
def as_superadmin(client: TestClient, superadmin: Admin, login) -> TestClient:
    assert login(superadmin.username).status_code == 200
    return client


@pytest.fixture
def as_moderator(client: TestClient, moderator: Admin, login) -> TestClient:
    assert login(moderator.username).status_code == 200
    return client


@pytest.fixture
def as_viewer(client: TestClient, viewer: Admin, login) -> TestClient:
    assert login(viewer.username).status_code == 200
    return client


@pytest.fixture
def make_user(db: Session) -> Callable[..., User]:
    """Factory for committed chat users"""
    counter = {"n": 0}

    def _make_user(username: str = None, **fields) -> User:
        counter["n"] += 1
        n = counter["n"]
        user = User(
            name=fields.pop("name", f"User{n}"),
            username=username or f"user{n}",
            phone=fields.pop("phone", f"+96650000{n:04d}"),
            password_hash="x",
            **fields,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user
