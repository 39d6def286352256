import logging
from typing import Dict
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

class StudentValidationError(Exception):
    """One or more fields of a submitted record broke a validation rule."""

    def __init__(self, errors: Dict[str, str], message: str = "Validation failed"):
        super().__init__(message)
        self.errors = errors
        self.message = message

class DuplicateStudentError(Exception):
    def __init__(self, email: str):
        super().__init__(f"Email already registered: {email}")
        self.email = email

class StudentNotFoundError(Exception):
    def __init__(self, student_id: str):
        super().__init__(f"Student not found: {student_id}")
        self.student_id = student_id

class StoreError(Exception):
    """The document store could not be reached or refused the operation."""


def register_exception_handlers(app: FastAPI) -> None:
    """
    Translate domain errors into the `{success: false, ...}` envelopes returned by the API.
    """

    @app.exception_handler(StudentValidationError)
    async def validation_error_handler(request: Request, exc: StudentValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "message": exc.message, "errors": exc.errors},
        )

    @app.exception_handler(DuplicateStudentError)
    async def duplicate_error_handler(request: Request, exc: DuplicateStudentError):
        logger.info("Rejected duplicate registration")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "success": False,
                "message": "Email already registered",
                "errors": {"email": "Email already registered"},
            },
        )

    @app.exception_handler(StudentNotFoundError)
    async def not_found_handler(request: Request, exc: StudentNotFoundError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"success": False, "message": "Student not found"},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "message": "Invalid request body", "errors": {}},
        )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error("Store error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "message": "Database error", "error": str(exc)},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "message": "Something went wrong!", "error": str(exc)},
        )
