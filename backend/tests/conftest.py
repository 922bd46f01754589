"""
Shared fixtures: in-memory SQLite database, API client and an organization
with one user per role.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ALLOWED_HOSTS"] = '["testserver", "localhost"]'
os.environ["SECRET_KEY"] = "test-secret-key"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401
from app.database import Base, get_db
from app.main import app
from app.models.client import Client
from app.models.organization import Organization
from app.models.user import User, UserRole
from app.services.auth_service import create_user_tokens
from app.utils.security import hash_password

PASSWORD = "password123"
PASSWORD_HASH = hash_password(PASSWORD)

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        try:
            yield db
        except Exception:
            db.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def organization(db):
    org = Organization(name="Hibachi Express")
    db.add(org)
    db.commit()
    return org


@pytest.fixture
def customer(db, organization):
    record = Client(organization_id=organization.id, name="Johnson Wedding", email="johnson@catering.io")
    db.add(record)
    db.commit()
    return record


def _make_user(db, organization, email, role, client_id=None):
    user = User(
        email=email,
        password_hash=PASSWORD_HASH,
        full_name=email.split("@")[0].title(),
        role=role,
        organization_id=organization.id,
        client_id=client_id,
    )
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def admin_user(db, organization):
    return _make_user(db, organization, "admin@catering.io", UserRole.ADMIN)


@pytest.fixture
def employee_user(db, organization):
    return _make_user(db, organization, "chef@catering.io", UserRole.EMPLOYEE)


@pytest.fixture
def client_user(db, organization, customer):
    return _make_user(db, organization, "johnson@catering.io", UserRole.CLIENT, client_id=customer.id)


def _headers(user):
    access_token, _ = create_user_tokens(user)
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
def admin_headers(admin_user):
    return _headers(admin_user)


@pytest.fixture
def employee_headers(employee_user):
    return _headers(employee_user)


@pytest.fixture
def client_headers(client_user):
    return _headers(client_user)


@pytest.fixture
def rival_customer(db):
    """A client belonging to a different organization"""
    rival = Organization(name="Rival Caterers")
    db.add(rival)
    db.commit()
    record = Client(organization_id=rival.id, name="Rival Client")
    db.add(record)
    db.commit()
    return record
