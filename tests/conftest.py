"""
Shared pytest fixtures.

- A fresh in-memory SQLite database per test (StaticPool, so the app threads
  and the test share one connection).
- `get_db` overridden to hand out the test session.
- Users for each privilege tier and logged-in TestClients for them.
"""
import os

# must be set before prodirectory is imported
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from prodirectory.core.security import hash_password
from prodirectory.db.base import Base, get_db
from prodirectory.db.models import Category, Professional, User
from prodirectory.main import app

PASSWORD = "s3cret-pass"


# =============================================================================
# DATABASE
# =============================================================================

@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine) -> Generator[Session, None, None]:
    TestingSession = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# MODEL FIXTURES
# =============================================================================

def make_user(db: Session, username: str, is_admin=False, is_super_admin=False) -> User:
    user = User(
        username=username,
        password_hash=hash_password(PASSWORD),
        is_admin=is_admin,
        is_super_admin=is_super_admin,
    )
    db.add(user)
    db.commit()
    return user


def make_professional(db: Session, name: str, occupation: str = "Plumber", **fields) -> Professional:
    values = dict(
        name=name,
        occupation=occupation,
        description=f"{name} short description",
        detailed_description=f"{name} long description",
        photo_url="https://example.com/photo.jpg",
        whatsapp="+5491100000000",
        location="Buenos Aires",
    )
    values.update(fields)
    professional = Professional(**values)
    db.add(professional)
    db.commit()
    return professional


@pytest.fixture
def password() -> str:
    return PASSWORD


@pytest.fixture
def plain_user(db_session) -> User:
    return make_user(db_session, "alice")


@pytest.fixture
def admin_user(db_session) -> User:
    return make_user(db_session, "admin", is_admin=True)


@pytest.fixture
def super_admin(db_session) -> User:
    return make_user(db_session, "root", is_admin=True, is_super_admin=True)


@pytest.fixture
def professional(db_session) -> Professional:
    return make_professional(db_session, "Juan Perez")


@pytest.fixture
def professional_factory(db_session):
    def factory(name: str, occupation: str = "Plumber", **fields) -> Professional:
        return make_professional(db_session, name, occupation, **fields)
    return factory


@pytest.fixture
def user_factory(db_session):
    def factory(username: str, **flags) -> User:
        return make_user(db_session, username, **flags)
    return factory


@pytest.fixture
def category(db_session) -> Category:
    category = Category(name="Home Repairs", slug="home-repairs")
    db_session.add(category)
    db_session.commit()
    return category


# =============================================================================
# CLIENTS
# =============================================================================

@pytest.fixture
def client(db_session) -> Generator[TestClient, None, None]:
    def override_get_db():
        try:
            yield db_session
        except SQLAlchemyError:
            # shared with the test body
            db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _logged_in_client(user: User) -> TestClient:
    test_client = TestClient(app)
    response = test_client.post("/api/login", json={"username": user.username, "password": PASSWORD})
    assert response.status_code == 200, response.text
    return test_client


@pytest.fixture
def user_client(client, db_session, plain_user) -> TestClient:
    return _logged_in_client(plain_user)


@pytest.fixture
def admin_client(client, db_session, admin_user) -> TestClient:
    return _logged_in_client(admin_user)


@pytest.fixture
def super_admin_client(client, db_session, super_admin) -> TestClient:
    return _logged_in_client(super_admin)
