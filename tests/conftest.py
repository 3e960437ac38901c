import os

import pytest
from fastapi.testclient import TestClient

# Configure before importing the app
os.environ["DATABASE_URL"] = "sqlite:///./test_data/test.db"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"  # keep hashing fast in tests

ADMIN_EMAIL = "admin@soliton.com"
ADMIN_PASSWORD = "admin123"


@pytest.fixture
def db(tmp_path):
    from app.db import Database

    database = Database(tmp_path / "test.db")
    database.init()
    return database


@pytest.fixture
def admin(db):
    from app.admin.service import AdminService

    return AdminService(db).create_admin("Admin", ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def client(db):
    from app.main import create_app

    with TestClient(create_app(db)) as c:
        yield c


@pytest.fixture
def auth_client(client, admin):
    from app.auth.utils import create_token

    token, _ = create_token(admin)
    client.headers["Authorization"] = f"Bearer {token}"
    return client


def question_payload(**overrides) -> dict:
    payload = {
        "title": "Sum of Two Numbers",
        "description": "Read two integers and print their sum.",
        "difficulty": "EASY",
        "language": "C",
        "boilerplateCode": "int main() { return 0; }",
        "testCases": [
            {"input": "3 5\n", "output": "8\n", "isPublic": True, "order": 0},
            {"input": "0 0\n", "output": "0\n", "isPublic": False, "order": 1},
        ],
    }
    payload.update(overrides)
    return payload
