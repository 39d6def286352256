from datetime import date, timedelta
from mongomock import MongoClient as MockClient
from pymongo import MongoClient
import pytest
from fastapi.testclient import TestClient

from src.config import MONGO_DATABASE_NAME, settings
from src.database.mongo.core import get_mongo
from src.database.mongo.service import init_collections
from src.main import app

# Fixtures for tests
@pytest.fixture(scope="session")
def client():
    """Shared FastAPI test client, the lifespan is not entered so no real store is opened"""
    return TestClient(app)

@pytest.fixture(scope="function")
def mock_mongo_db():
    """Injection for MongoDB dependency intended for fast, in-memory unit testing"""
    mock_client = MockClient()
    db = mock_client[MONGO_DATABASE_NAME]

    # Apply indexes (json schema validators cannot be enforced in mongomock)
    init_collections(db, with_validators=False)

    # Override FastAPI's database dependency
    app.dependency_overrides[get_mongo] = lambda: db

    yield db # Provide the mock DB instance

    app.dependency_overrides.pop(get_mongo) # Clean up override(s) after test
    mock_client.close()

@pytest.fixture(scope="function")
def real_mongo_db():
    """Injection for MongoDB dependency intended for wide scope, accurate integration testing"""
    if not settings.student_mongo_url:
        pytest.skip("STUDENT_MONGO_URL is not set")

    client = MongoClient(settings.student_mongo_url)
    test_db_name = "test_" + MONGO_DATABASE_NAME
    db = client[test_db_name]
    init_collections(db, with_validators=True)

    app.dependency_overrides[get_mongo] = lambda: db

    yield db

    app.dependency_overrides.pop(get_mongo)
    client.drop_database(db)
    client.close()

def _years_ago(years: int, extra_days: int = 0) -> str:
    return (date.today() - timedelta(days=365 * years + extra_days)).isoformat()

@pytest.fixture(scope="session")
def years_ago():
    """Builds the ISO date `years` 365-day years before today, shifted by `extra_days`"""
    return _years_ago

@pytest.fixture(scope="function")
def valid_student():
    """A registration that passes every validation rule"""
    return {
        "firstName": "Asha",
        "lastName": "Patil",
        "email": "asha.patil@example.com",
        "phone": "9876543210",
        "dateOfBirth": _years_ago(20),
        "gender": "Female",
        "course": "Computer Science",
        "year": 2,
        "address": {
            "street": "12 Marine Drive",
            "city": "Mumbai",
            "state": "Maharashtra",
            "zipCode": "400001",
        },
        "guardianName": "Ravi Patil",
        "guardianPhone": "9123456780",
    }
