from unittest.mock import MagicMock
import bson
from mongomock.database import Database as MockMongoDatabase
import pytest
import requests

from src.client.api import ApiError, StudentApiClient

@pytest.fixture(scope="function")
def api(client):
    """API client routed through the FastAPI test client instead of the network"""
    return StudentApiClient(base_url="http://testserver/api", session=client)

class TestStudentApiClient:
    def test_create_list_get_delete(self, mock_mongo_db: MockMongoDatabase, api, valid_student):
        created = api.create_student(valid_student)

        assert created["phone"] == "9876543210"
        assert [s["_id"] for s in api.list_students()] == [created["_id"]]
        assert api.get_student(created["_id"])["email"] == valid_student["email"]

        api.delete_student(created["_id"])
        assert api.list_students() == []

    def test_validation_errors_are_exposed(self, mock_mongo_db: MockMongoDatabase, api, valid_student):
        valid_student["phone"] = "12345"

        with pytest.raises(ApiError) as exc_info:
            api.create_student(valid_student)

        assert exc_info.value.status_code == 400
        assert exc_info.value.errors == {"phone": "Please enter a valid 10-digit phone number"}

    def test_missing_student(self, mock_mongo_db: MockMongoDatabase, api):
        with pytest.raises(ApiError) as exc_info:
            api.delete_student(str(bson.ObjectId()))

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Student not found"
        assert exc_info.value.errors == {}

    def test_unreachable_server(self):
        session = MagicMock()
        session.request.side_effect = requests.ConnectionError("refused")
        api = StudentApiClient(base_url="http://localhost:1/api", session=session)

        with pytest.raises(ApiError) as exc_info:
            api.list_students()

        assert exc_info.value.status_code is None
        session.request.assert_called_once_with("GET", "http://localhost:1/api/students", json=None, timeout=10.0)

    def test_non_json_error_body(self):
        session = MagicMock()
        session.request.return_value.status_code = 502
        session.request.return_value.json.side_effect = ValueError("no json")
        api = StudentApiClient(base_url="http://localhost/api/", session=session)

        with pytest.raises(ApiError, match="status 502"):
            api.get_student("abc")
