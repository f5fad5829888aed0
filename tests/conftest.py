import asyncio

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from jobboard import database
from jobboard.main import app


@pytest.fixture
def db():
    """In-memory stand-in for the Motor database, with the real indexes."""
    mock_db = AsyncMongoMockClient()["jobboard_test"]
    asyncio.run(database.ensure_indexes(mock_db))
    database.db = mock_db
    yield mock_db
    database.db = None


@pytest.fixture
def client(db):
    # Not used as a context manager: startup would try to reach a real MongoDB
    return TestClient(app)


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    """Register a user and return the JSON body (includes ``token``)."""
    counter = {"n": 0}

    def _register(role="employee", **overrides):
        counter["n"] += 1
        payload = {
            "name": f"User {counter['n']}",
            "email": f"user{counter['n']}@example.com",
            "password": "secret1",
            "role": role,
        }
        if role == "employer":
            payload["company"] = "Acme"
        payload.update(overrides)
        response = client.post("/users/register", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def employer(register):
    return register("employer", name="Acme HR", email="hr@acme.com", company="Acme")


@pytest.fixture
def employee(register):
    return register("employee", name="Jane Doe", email="jane@example.com", location="Berlin")


JOB_PAYLOAD = {
    "title": "Engineer",
    "company": "Acme",
    "type": "Full-time",
    "location": "Remote",
    "description": "Build stuff",
}


@pytest.fixture
def create_job(client):
    def _create_job(owner, **overrides):
        payload = dict(JOB_PAYLOAD, **overrides)
        response = client.post("/jobs", json=payload, headers=auth_header(owner["token"]))
        assert response.status_code == 201, response.text
        return response.json()

    return _create_job


@pytest.fixture
def job(employer, create_job):
    return create_job(employer)


class SkipLookups:
    """Collection wrapper whose ``find_one`` sees nothing.

    Lets a write get past an existence pre-check so the unique index is what
    rejects it, as when two requests race.
    """

    def __init__(self, collection):
        self._collection = collection

    async def find_one(self, *args, **kwargs):
        return None

    def __getattr__(self, name):
        return getattr(self._collection, name)
