# tests/conftest.py

import uuid
from datetime import datetime

import httpx
import pytest
from mongomock_motor import AsyncMongoMockClient
from pymongo.errors import ServerSelectionTimeoutError

from database import get_db
from main import app
from models.student import Student
from services.students import StudentGateway
from ui.api import StudentRecordsApi


class UnavailableCursor:
    def sort(self, *args, **kwargs):
        return self

    async def to_list(self, length=None):
        raise ServerSelectionTimeoutError("No servers available")


class UnavailableCollection:
    """Collection whose every call fails as if MongoDB were unreachable."""

    def find(self, *args, **kwargs):
        return UnavailableCursor()

    async def _fail(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("No servers available")

    find_one = insert_one = find_one_and_update = delete_one = _fail


@pytest.fixture
def db():
    return AsyncMongoMockClient()[f"test_{uuid.uuid4().hex}"]


@pytest.fixture
def unavailable_db():
    return {"students": UnavailableCollection(), "users": UnavailableCollection()}


@pytest.fixture
def gateway(db):
    return StudentGateway(db)


@pytest.fixture
def ana():
    return {
        "firstName": "Ana",
        "lastName": "Cruz",
        "dateOfBirth": "2000-05-01",
        "gender": "Female",
        "course": "CS",
        "yearLevel": 2,
    }


@pytest.fixture
def use_db():
    def override(database):
        app.dependency_overrides[get_db] = lambda: database

    yield override
    app.dependency_overrides.clear()


@pytest.fixture
async def http(db, use_db):
    use_db(db)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def api(http):
    return StudentRecordsApi(http)


def make_student(**overrides):
    data = {
        "id": str(uuid.uuid4()),
        "firstName": "Ana",
        "lastName": "Cruz",
        "middleName": None,
        "dateOfBirth": datetime(2000, 5, 1),
        "gender": "Female",
        "course": "CS",
        "yearLevel": 2,
        "createdAt": datetime(2024, 1, 1, 8, 0),
        "updatedAt": datetime(2024, 1, 1, 8, 0),
    }
    data.update(overrides)
    return Student(**data)
