from typing import Any, Dict, Sequence
from pymongo import IndexModel
from pymongo.database import Database

from src.config import STUDENTS_COLLECTION
from src.students.constants import (
    COURSES,
    EMAIL_PATTERN,
    GENDERS,
    MAX_YEAR,
    MIN_YEAR,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    PHONE_PATTERN,
    ZIP_CODE_PATTERN,
)

class CollectionProps:
    def __init__(self, schema: Dict[str, Any], indexes: Sequence[IndexModel]):
        # schema as it will be stored and validated internally on MongoDB
        self.schema = schema
        # indexes for the collection
        self.indexes = indexes

collections: dict[str, CollectionProps] = {
    STUDENTS_COLLECTION: CollectionProps(
        schema={
            "bsonType": "object",
            "title": "Student Registration Object Validation",
            "required": ["firstName", "lastName", "email", "phone", "dateOfBirth", "gender", "course", "year", "address", "guardianName", "guardianPhone", "createdAt", "updatedAt"],
            "properties": {
                "firstName": {
                    "bsonType": "string",
                    "minLength": NAME_MIN_LENGTH,
                    "maxLength": NAME_MAX_LENGTH,
                    "description": f"Must provide a first name between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
                },
                "lastName": {
                    "bsonType": "string",
                    "minLength": NAME_MIN_LENGTH,
                    "maxLength": NAME_MAX_LENGTH,
                    "description": f"Must provide a last name between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
                },
                "email": {
                    "bsonType": "string",
                    "pattern": EMAIL_PATTERN,
                    "description": "Must provide a valid lowercase email address"
                },
                "phone": {
                    "bsonType": "string",
                    "pattern": PHONE_PATTERN,
                    "description": "Must provide a 10-digit phone number"
                },
                "dateOfBirth": {
                    "bsonType": "date",
                    "description": "Must provide the date of birth as UTC datetime"
                },
                "gender": {
                    "enum": list(GENDERS),
                    "description": "Must be one of the supported genders"
                },
                "course": {
                    "enum": list(COURSES),
                    "description": "Must be one of the offered courses"
                },
                "year": {
                    "bsonType": "int",
                    "minimum": MIN_YEAR,
                    "maximum": MAX_YEAR,
                    "description": f"Must provide the year of study as an integer between {MIN_YEAR} and {MAX_YEAR}"
                },
                "address": {
                    "bsonType": "object",
                    "required": ["street", "city", "state", "zipCode"],
                    "properties": {
                        "street": {
                            "bsonType": "string",
                            "minLength": 1,
                            "description": "Must provide a street address"
                        },
                        "city": {
                            "bsonType": "string",
                            "minLength": 1,
                            "description": "Must provide a city"
                        },
                        "state": {
                            "bsonType": "string",
                            "minLength": 1,
                            "description": "Must provide a state"
                        },
                        "zipCode": {
                            "bsonType": "string",
                            "pattern": ZIP_CODE_PATTERN,
                            "description": "Must provide a 6-digit zip code"
                        }
                    }
                },
                "guardianName": {
                    "bsonType": "string",
                    "minLength": 1,
                    "description": "Must provide the name of a guardian"
                },
                "guardianPhone": {
                    "bsonType": "string",
                    "pattern": PHONE_PATTERN,
                    "description": "Must provide a 10-digit guardian phone number"
                },
                "createdAt": {
                    "bsonType": "date",
                    "description": "Set on insert as UTC datetime"
                },
                "updatedAt": {
                    "bsonType": "date",
                    "description": "Set on insert and update as UTC datetime"
                }
            },
            "additionalProperties": True
        },
        indexes=[
            IndexModel("email", unique=True)
        ]
    ),
}

def init_collections(mongo: Database, with_validators=True):
    """Initializes collections and their indexes"""
    existing_collections = set(mongo.list_collection_names())

    # if the collection exists, update with db.command; else create the collection
    for collection_name, collection_props in collections.items():
        if collection_name not in existing_collections:
            # create the schema with the above defined JSON schema given with_validators option
            if with_validators:
                mongo.create_collection(
                    collection_name,
                    validator={"$jsonSchema": collection_props.schema},
                    validationLevel="moderate" # validates on writes
                )
            else:
                mongo.create_collection(collection_name)

            # if the collection requires indexes, include them upon creation
            if len(collection_props.indexes) > 0:
                mongo.get_collection(collection_name).create_indexes(collection_props.indexes)
        elif with_validators:
            mongo.command({
                "collMod": collection_name,
                "validator": {"$jsonSchema": collection_props.schema},
                "validationLevel": "moderate"
            })
