from datetime import datetime
from typing import Annotated, Literal, Optional
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, computed_field

from src.students.constants import COURSES, GENDERS, MAX_YEAR, MIN_YEAR

# https://www.mongodb.com/developer/languages/python/python-quickstart-fastapi/#database-models
# required to properly encode bson ObjectId to str on Mongo documents
PyObjectId = Annotated[str, BeforeValidator(str)]

# mongo models...
class Address(BaseModel):
    street: str = Field(description="Street address")
    city: str
    state: str
    zipCode: str = Field(description="6-digit postal code")

class StudentBase(BaseModel):
    firstName: str
    lastName: str
    email: str = Field(description="An email address unique to each student, stored lowercase")
    phone: str = Field(description="10-digit phone number")
    dateOfBirth: datetime = Field(description="Date of birth as a UTC datetime at midnight")
    gender: Literal[GENDERS]
    course: Literal[COURSES]
    year: int = Field(ge=MIN_YEAR, le=MAX_YEAR, description="Year of study")
    address: Address
    guardianName: str
    guardianPhone: str = Field(description="10-digit phone number of the guardian")

    model_config = ConfigDict(extra="ignore")

class StudentModel(StudentBase):
    id: Optional[PyObjectId] = Field(alias="_id", default=None)
    createdAt: datetime
    updatedAt: datetime

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @computed_field
    @property
    def fullName(self) -> str:
        return f"{self.firstName} {self.lastName}"
