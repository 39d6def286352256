from unittest.mock import MagicMock
from bson import ObjectId
from mongomock.database import Database as MockMongoDatabase
import pytest
from pymongo.errors import ServerSelectionTimeoutError

from src.config import STUDENTS_COLLECTION
from src.students.service import create, delete_by_id, get_by_id, list_all
from src.utils.exceptions import DuplicateStudentError, StoreError, StudentNotFoundError, StudentValidationError

class TestStudentService:
    def test_create_then_get_round_trip(self, mock_mongo_db: MockMongoDatabase, valid_student):
        created = create(student=valid_student, db=mock_mongo_db)
        found = get_by_id(student_id=created.id, db=mock_mongo_db)

        assert ObjectId.is_valid(created.id)
        assert created.createdAt is not None and created.updatedAt is not None
        ignored = {"id", "createdAt", "updatedAt"}
        assert found.model_dump(exclude=ignored) == created.model_dump(exclude=ignored)
        assert found.email == valid_student["email"]
        assert found.phone == valid_student["phone"]
        assert found.address.model_dump() == valid_student["address"]
        assert found.dateOfBirth.date().isoformat() == valid_student["dateOfBirth"]

    def test_create_rejects_invalid_record(self, mock_mongo_db: MockMongoDatabase, valid_student):
        valid_student["phone"] = "12345"

        with pytest.raises(StudentValidationError) as exc_info:
            create(student=valid_student, db=mock_mongo_db)

        assert "phone" in exc_info.value.errors
        assert mock_mongo_db.get_collection(STUDENTS_COLLECTION).count_documents({}) == 0

    def test_same_email_only_registers_once(self, mock_mongo_db: MockMongoDatabase, valid_student):
        create(student=valid_student, db=mock_mongo_db)

        # emails are stored lowercase, so a differently cased copy still collides
        valid_student["email"] = valid_student["email"].upper()
        with pytest.raises(DuplicateStudentError):
            create(student=valid_student, db=mock_mongo_db)

        assert mock_mongo_db.get_collection(STUDENTS_COLLECTION).count_documents({}) == 1

    def test_list_all_returns_newest_first(self, mock_mongo_db: MockMongoDatabase, valid_student):
        first = create(student=valid_student, db=mock_mongo_db)
        second = create(student={**valid_student, "email": "second@example.com"}, db=mock_mongo_db)

        students = list_all(db=mock_mongo_db)

        assert [s.id for s in students] == [second.id, first.id]

    def test_list_all_empty(self, mock_mongo_db: MockMongoDatabase):
        assert list_all(db=mock_mongo_db) == []

    @pytest.mark.parametrize("student_id", [str(ObjectId()), "not-an-object-id"])
    def test_get_missing_student(self, mock_mongo_db: MockMongoDatabase, student_id):
        with pytest.raises(StudentNotFoundError):
            get_by_id(student_id=student_id, db=mock_mongo_db)

    def test_delete_is_not_repeatable(self, mock_mongo_db: MockMongoDatabase, valid_student):
        created = create(student=valid_student, db=mock_mongo_db)

        assert delete_by_id(student_id=created.id, db=mock_mongo_db) is True
        assert delete_by_id(student_id=created.id, db=mock_mongo_db) is False
        assert delete_by_id(student_id="not-an-object-id", db=mock_mongo_db) is False

    def test_store_failures_are_wrapped(self):
        db = MagicMock()
        db.get_collection.return_value.find.side_effect = ServerSelectionTimeoutError("no servers")

        with pytest.raises(StoreError, match="no servers"):
            list_all(db=db)
