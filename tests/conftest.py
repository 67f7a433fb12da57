import os

# Keep the application's own engine in memory; tests use the engine below
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from slotbook.database import Base, get_db
from slotbook.main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register_user(client):
    def _register(**overrides):
        payload = {
            "name": "Alice Member",
            "email": "alice@example.com",
            "password": "s3cret-pass",
            "userType": "member",
        }
        payload.update(overrides)
        response = client.post("/register", json=payload)
        assert response.status_code == 200, response.text
        return response.json()["user"]

    return _register


@pytest.fixture
def specialist(register_user):
    return register_user(
        name="Dana Tutor",
        email="dana@example.com",
        userType="specialist",
        category="education",
        specialization="Math Tutor",
    )


@pytest.fixture
def member(register_user):
    return register_user()


@pytest.fixture
def create_slot(client, specialist):
    def _create(**overrides):
        payload = {
            "specialistId": specialist["id"],
            "specialistName": specialist["name"],
            "specialization": specialist["specialization"],
            "category": specialist["category"],
            "date": "2025-10-06",
            "time": "09:00",
        }
        payload.update(overrides)
        response = client.post("/appointments", json=payload)
        assert response.status_code == 200, response.text
        return response.json()["appointment"]

    return _create
