"""
Field-level rules for a student registration record.

This module is the single source of truth for what a valid record looks like. The
registration form runs it before submitting and the persistence service runs it again
before inserting, so both sides always reach the same verdict for the same input.
"""
import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Dict, Mapping, Optional

from src.students.constants import (
    COURSES,
    EMAIL_PATTERN,
    GENDERS,
    MAX_AGE,
    MAX_YEAR,
    MIN_AGE,
    MIN_YEAR,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    PHONE_PATTERN,
    ZIP_CODE_PATTERN,
)

EMAIL_REGEX = re.compile(EMAIL_PATTERN)
PHONE_REGEX = re.compile(PHONE_PATTERN)
ZIP_CODE_REGEX = re.compile(ZIP_CODE_PATTERN)

# Age is measured in fixed 365 day years, leap days are not accounted for
YEAR_LENGTH = timedelta(days=365)

ADDRESS_FIELDS = ("street", "city", "state", "zipCode")


def _text(value: Any) -> str:
    # text fields only accept strings, anything else reads as missing
    if not isinstance(value, str):
        return ""
    return value


def parse_date_of_birth(value: Any) -> Optional[datetime]:
    """
    Convert a date of birth given as a date, datetime or ISO 8601 string into a UTC datetime.

    Returns None when the value cannot be interpreted as a date.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        try:
            return value.astimezone(timezone.utc)
        except OverflowError:
            # offsets pushing the moment past datetime.min or datetime.max
            return None
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return datetime.combine(date.fromisoformat(text), time.min, tzinfo=timezone.utc)
        except ValueError:
            pass
        try:
            return parse_date_of_birth(datetime.fromisoformat(text))
        except (ValueError, OverflowError):
            return None
    return None


def calculate_age(date_of_birth: Any, now: Optional[datetime] = None) -> Optional[float]:
    """Age in years between `date_of_birth` and `now`, or None if the date is unreadable."""
    dob = parse_date_of_birth(date_of_birth)
    if dob is None:
        return None
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return (now - dob) / YEAR_LENGTH


def parse_year(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _validate_name(value: Any, label: str) -> Optional[str]:
    name = _text(value).strip()
    if not name:
        return f"{label} is required"
    if len(name) < NAME_MIN_LENGTH:
        return f"{label} must be at least {NAME_MIN_LENGTH} characters"
    if len(name) > NAME_MAX_LENGTH:
        return f"{label} cannot exceed {NAME_MAX_LENGTH} characters"
    return None


def _validate_phone(value: Any, required_message: str) -> Optional[str]:
    phone = _text(value)
    if not phone.strip():
        return required_message
    if not PHONE_REGEX.fullmatch(phone):
        return "Please enter a valid 10-digit phone number"
    return None


def _validate_email(value: Any) -> Optional[str]:
    email = _text(value).strip().lower()
    if not email:
        return "Email is required"
    if not EMAIL_REGEX.fullmatch(email):
        return "Please enter a valid email address"
    return None


def _validate_date_of_birth(value: Any, now: Optional[datetime]) -> Optional[str]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return "Date of birth is required"
    age = calculate_age(value, now)
    if age is None:
        return "Please enter a valid date of birth"
    if age < MIN_AGE or age > MAX_AGE:
        return f"Age must be between {MIN_AGE} and {MAX_AGE} years"
    return None


def _validate_choice(value: Any, label: str, choices) -> Optional[str]:
    if not _text(value).strip():
        return f"{label} is required"
    if value not in choices:
        return f"{label} must be one of: {', '.join(choices)}"
    return None


def _validate_year(value: Any) -> Optional[str]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return "Year is required"
    year = parse_year(value)
    if year is None or year < MIN_YEAR or year > MAX_YEAR:
        return f"Year must be between {MIN_YEAR} and {MAX_YEAR}"
    return None


def validate_address(address: Any) -> Dict[str, str]:
    """Errors for the nested address, keyed by the unqualified field name."""
    if not isinstance(address, Mapping):
        address = {}

    errors: Dict[str, str] = {}
    if not _text(address.get("street")).strip():
        errors["street"] = "Street address is required"
    if not _text(address.get("city")).strip():
        errors["city"] = "City is required"
    if not _text(address.get("state")).strip():
        errors["state"] = "State is required"

    zip_code = _text(address.get("zipCode"))
    if not zip_code.strip():
        errors["zipCode"] = "Zip code is required"
    elif not ZIP_CODE_REGEX.fullmatch(zip_code):
        errors["zipCode"] = "Please enter a valid 6-digit zip code"
    return errors


def validate_student(candidate: Mapping[str, Any], now: Optional[datetime] = None) -> Dict[str, str]:
    """
    Check every field of a candidate record and collect the failures.

    Each field is checked independently, so a single call reports all problems at once.
    Nested address fields are reported with dot paths such as `address.zipCode`.
    An empty result means the record can be stored.
    """
    checks = {
        "firstName": _validate_name(candidate.get("firstName"), "First name"),
        "lastName": _validate_name(candidate.get("lastName"), "Last name"),
        "email": _validate_email(candidate.get("email")),
        "phone": _validate_phone(candidate.get("phone"), "Phone number is required"),
        "dateOfBirth": _validate_date_of_birth(candidate.get("dateOfBirth"), now),
        "gender": _validate_choice(candidate.get("gender"), "Gender", GENDERS),
        "course": _validate_choice(candidate.get("course"), "Course", COURSES),
        "year": _validate_year(candidate.get("year")),
        "guardianName": None if _text(candidate.get("guardianName")).strip() else "Guardian name is required",
        "guardianPhone": _validate_phone(candidate.get("guardianPhone"), "Guardian phone is required"),
    }
    errors = {field: message for field, message in checks.items() if message}

    for field, message in validate_address(candidate.get("address")).items():
        errors[f"address.{field}"] = message
    return errors


def clean_student(candidate: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Normalize a record that already passed `validate_student` into its stored form.

    Strings are trimmed, the email lowercased, the year made an integer and the
    date of birth converted to a UTC datetime.
    """
    address = candidate["address"]
    return {
        "firstName": _text(candidate["firstName"]).strip(),
        "lastName": _text(candidate["lastName"]).strip(),
        "email": _text(candidate["email"]).strip().lower(),
        "phone": _text(candidate["phone"]),
        "dateOfBirth": parse_date_of_birth(candidate["dateOfBirth"]),
        "gender": candidate["gender"],
        "course": candidate["course"],
        "year": parse_year(candidate["year"]),
        "address": {field: _text(address[field]).strip() for field in ADDRESS_FIELDS},
        "guardianName": _text(candidate["guardianName"]).strip(),
        "guardianPhone": _text(candidate["guardianPhone"]),
    }
