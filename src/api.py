from fastapi import APIRouter

from src.students.router import router as students_router


api_router = APIRouter()

# /api/students/...
api_router.include_router(
    students_router,
    prefix="/students",
    tags=["Students"]
)
