import logging
from datetime import datetime, timezone
from typing import Any, List, Mapping
from bson import ObjectId
from pymongo import DESCENDING
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from src.config import STUDENTS_COLLECTION
from src.students.models import StudentModel
from src.students.validation import clean_student, validate_student
from src.utils.exceptions import DuplicateStudentError, StoreError, StudentNotFoundError, StudentValidationError

logger = logging.getLogger(__name__)

def _object_id(student_id: str) -> ObjectId:
    # ids that could never have been issued by the store are treated as absent
    if not ObjectId.is_valid(student_id):
        raise StudentNotFoundError(student_id)
    return ObjectId(student_id)

def create(*, student: Mapping[str, Any], db: Database) -> StudentModel:
    """
    Validate and insert a new student record.

    Raises `StudentValidationError` with the field to message mapping when the record is invalid,
    and `DuplicateStudentError` when the email is already registered.
    """
    errors = validate_student(student)
    if errors:
        raise StudentValidationError(errors)

    document = clean_student(student)
    now = datetime.now(timezone.utc)
    document["createdAt"] = now
    document["updatedAt"] = now

    students_collection = db.get_collection(STUDENTS_COLLECTION)
    try:
        result = students_collection.insert_one(document)
        created = students_collection.find_one({"_id": result.inserted_id})
    except DuplicateKeyError:
        raise DuplicateStudentError(document["email"])
    except PyMongoError as e:
        raise StoreError(str(e)) from e

    logger.info("Registered student %s", result.inserted_id)
    return StudentModel.model_validate(created)

def list_all(*, db: Database) -> List[StudentModel]:
    """Every registered student, most recent registration first."""
    try:
        # _id breaks ties between registrations stamped within the same millisecond
        documents = db.get_collection(STUDENTS_COLLECTION).find().sort([("createdAt", DESCENDING), ("_id", DESCENDING)])
        return [StudentModel.model_validate(doc) for doc in documents]
    except PyMongoError as e:
        raise StoreError(str(e)) from e

def get_by_id(*, student_id: str, db: Database) -> StudentModel:
    oid = _object_id(student_id)
    try:
        found = db.get_collection(STUDENTS_COLLECTION).find_one({"_id": oid})
    except PyMongoError as e:
        raise StoreError(str(e)) from e

    if found is None:
        raise StudentNotFoundError(student_id)
    return StudentModel.model_validate(found)

def delete_by_id(*, student_id: str, db: Database) -> bool:
    """Remove a student, returning whether a record was actually deleted."""
    if not ObjectId.is_valid(student_id):
        return False
    try:
        result = db.get_collection(STUDENTS_COLLECTION).delete_one({"_id": ObjectId(student_id)})
    except PyMongoError as e:
        raise StoreError(str(e)) from e

    if result.deleted_count:
        logger.info("Deleted student %s", student_id)
    return result.deleted_count > 0
