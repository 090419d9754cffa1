"""Pytest configuration and shared fixtures."""

import pytest
from fastapi.testclient import TestClient

from concerthub.config import Settings
from concerthub.server import create_app

TEST_SECRET = "test-secret-that-is-long-enough-for-hs256"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'concerthub.db'}",
        jwt_secret=TEST_SECRET,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # entering the client runs the lifespan: tables, seed admin, seed concerts
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers(client) -> dict:
    r = client.post(
        "/api/auth/login", json={"username": "admin", "password": "admin123"}
    )
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['token']}"}


@pytest.fixture
def order_payload() -> dict:
    return {
        "concert_id": 1,
        "concert_title": "X",
        "ticket_type": "GA",
        "quantity": 2,
        "price_per_ticket": 100,
        "total_price": 200,
        "customer_email": "a@b.com",
        "customer_name": "A",
        "customer_phone": "1",
    }


@pytest.fixture
def concert_payload() -> dict:
    return {
        "title": "Nina Simone Tribute",
        "genre": "Jazz",
        "date": "2026-01-10",
        "time": "21:00",
        "venue": "Blue Note",
        "price": 3500,
        "image": "https://example.com/nina.jpg",
        "description": "An evening of standards.",
    }
