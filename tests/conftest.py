# tests/conftest.py
import os
import tempfile
from datetime import date, timedelta

# Settings are read once, so the environment must be in place before any app import
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTH_PROVIDER"] = "local"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["DEBUG"] = "true"
os.environ["STRIPE_SECRET_KEY"] = "sk_test_smartrent"
os.environ["STRIPE_WEBHOOK_SECRET"] = "whsec_smartrent"
os.environ["STRIPE_CURRENCY"] = "usd"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="smartrent-uploads-")
os.environ.pop("AZURE_STORAGE_ACCOUNT", None)
os.environ.pop("AZURE_STORAGE_KEY", None)

import pytest
from fastapi.testclient import TestClient

from database import SessionLocal, engine
from main import app
from models import Base, Lease, Property, User
from services.auth_service import AuthService


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


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
    counter = {"n": 0}

    def _make(role="tenant", password="secret123", **fields):
        counter["n"] += 1
        user = User(
            email=fields.pop("email", f"{role}{counter['n']}@example.com"),
            password=AuthService.hash_password(password),
            first_name=fields.pop("first_name", role.title()),
            last_name=fields.pop("last_name", str(counter["n"])),
            role=role,
            **fields,
        )
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture
def landlord(make_user):
    return make_user("landlord", first_name="Lana", last_name="Lord")


@pytest.fixture
def tenant(make_user):
    return make_user("tenant", first_name="Tom", last_name="Tenant")


@pytest.fixture
def admin(make_user):
    return make_user("admin", first_name="Ada", last_name="Admin", admin_id="ADM-001")


def auth_headers(user):
    return {"Authorization": f"Bearer {AuthService.create_access_token(user)}"}


@pytest.fixture
def headers():
    return auth_headers


@pytest.fixture
def make_property(db):
    def _make(landlord, **fields):
        prop = Property(
            landlord_id=landlord.id,
            title=fields.pop("title", "Sunny flat"),
            address=fields.pop("address", "1 Main St"),
            city=fields.pop("city", "Austin"),
            state=fields.pop("state", "TX"),
            monthly_rent=fields.pop("monthly_rent", 1200),
            **fields,
        )
        db.add(prop)
        db.commit()
        return prop

    return _make


@pytest.fixture
def make_lease(db):
    def _make(prop, tenant, **fields):
        lease = Lease(
            property_id=prop.id,
            tenant_id=tenant.id,
            landlord_id=prop.landlord_id,
            start_date=fields.pop("start_date", date.today() - timedelta(days=30)),
            end_date=fields.pop("end_date", date.today() + timedelta(days=335)),
            monthly_rent=fields.pop("monthly_rent", prop.monthly_rent),
            status=fields.pop("status", "active"),
            **fields,
        )
        db.add(lease)
        prop.status = "rented"
        db.commit()
        return lease

    return _make
