from typing import Dict, List, Optional
from pydantic import BaseModel

from src.students.models import StudentModel

class StudentResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: StudentModel

class StudentListResponse(BaseModel):
    success: bool = True
    count: int
    data: List[StudentModel]

class StudentDeleteResponse(BaseModel):
    success: bool = True
    message: str = "Student deleted successfully"

class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    errors: Optional[Dict[str, str]] = None
