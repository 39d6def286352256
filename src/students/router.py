from typing import Any
from fastapi import APIRouter, Body, Depends, status
from pymongo.database import Database

from src.database.mongo.core import get_mongo
from src.students.schemas import ErrorResponse, StudentDeleteResponse, StudentListResponse, StudentResponse
from src.students.service import create, delete_by_id, get_by_id, list_all
from src.utils.exceptions import StudentNotFoundError, StudentValidationError

router = APIRouter()

@router.post("/", status_code=status.HTTP_201_CREATED, response_model=StudentResponse, include_in_schema=False)
@router.post(
    "",
    description="Registers a new student after validating every field of the submitted record.",
    response_description="Registered a new student",
    status_code=status.HTTP_201_CREATED,
    response_model=StudentResponse,
    responses={
        400: {
            "model": ErrorResponse,
            "description": "Validation failure or an email that is already registered",
        },
    },
)
def register_student(
    payload: Any = Body(...),
    db: Database = Depends(get_mongo),
):
    if not isinstance(payload, dict):
        raise StudentValidationError({}, message="Invalid request body")
    student = create(student=payload, db=db)
    return StudentResponse(message="Student registered successfully", data=student)

@router.get("/", response_model=StudentListResponse, include_in_schema=False)
@router.get(
    "",
    description="Lists every registered student, most recent first.",
    response_model=StudentListResponse,
)
def list_students(db: Database = Depends(get_mongo)):
    students = list_all(db=db)
    return StudentListResponse(count=len(students), data=students)

@router.get(
    "/{student_id}",
    description="Fetches a single student by id.",
    response_model=StudentResponse,
    responses={404: {"model": ErrorResponse, "description": "Student not found"}},
)
def get_student(student_id: str, db: Database = Depends(get_mongo)):
    return StudentResponse(data=get_by_id(student_id=student_id, db=db))

@router.delete(
    "/{student_id}",
    description="Deletes a student by id.",
    response_model=StudentDeleteResponse,
    responses={404: {"model": ErrorResponse, "description": "Student not found"}},
)
def delete_student(student_id: str, db: Database = Depends(get_mongo)):
    if not delete_by_id(student_id=student_id, db=db):
        raise StudentNotFoundError(student_id)
    return StudentDeleteResponse()
