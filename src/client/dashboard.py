import logging
import math
from collections import Counter
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional

from src.client.api import ApiError, StudentApiClient
from src.students.constants import COURSES
from src.students.validation import calculate_age

logger = logging.getLogger(__name__)

DELETE_CONFIRMATION = "Are you sure you want to delete this student?"

def matches_search(student: Dict[str, Any], search_term: str) -> bool:
    term = search_term.lower()
    return (
        term in str(student.get("firstName", "")).lower()
        or term in str(student.get("lastName", "")).lower()
        or term in str(student.get("email", "")).lower()
        or search_term in str(student.get("phone", ""))
    )

def filter_students(
    students: Iterable[Dict[str, Any]],
    search_term: str = "",
    filter_course: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Records matching the free-text search and, when one is chosen, the course filter."""
    return [
        student
        for student in students
        if matches_search(student, search_term)
        and (not filter_course or student.get("course") == filter_course)
    ]

class AdminDashboard:
    """
    State behind the admin view: the fetched list, search and course filter, the
    selected record and the delete flow.

    `confirm` is asked before anything is deleted and must return True to proceed.
    """

    def __init__(
        self,
        api: StudentApiClient,
        confirm: Callable[[str], bool],
        clock: Optional[Callable[[], datetime]] = None,
        autoload: bool = True,
    ):
        self.api = api
        self.confirm = confirm
        self.clock = clock
        self.students: List[Dict[str, Any]] = []
        self.loading = False
        self.error = ""
        self.search_term = ""
        self.filter_course = ""
        self.selected: Optional[Dict[str, Any]] = None
        if autoload:
            self.refresh()

    def refresh(self) -> None:
        self.loading = True
        try:
            self.students = self.api.list_students()
            self.error = ""
        except ApiError as e:
            logger.error("Error fetching students: %s", e.message)
            self.error = "Failed to fetch students"
        finally:
            self.loading = False

    @property
    def visible_students(self) -> List[Dict[str, Any]]:
        return filter_students(self.students, self.search_term, self.filter_course)

    @property
    def total(self) -> int:
        return len(self.students)

    @property
    def course_counts(self) -> Dict[str, int]:
        counts = Counter(student.get("course") for student in self.students)
        return {course: counts.get(course, 0) for course in COURSES}

    def select(self, student_id: str) -> Optional[Dict[str, Any]]:
        self.selected = next((s for s in self.students if s.get("_id") == student_id), None)
        return self.selected

    def clear_selection(self) -> None:
        self.selected = None

    @property
    def selected_detail(self) -> Optional[Dict[str, Any]]:
        if self.selected is None:
            return None
        now = self.clock() if self.clock else None
        age = calculate_age(self.selected.get("dateOfBirth"), now)
        return {
            **self.selected,
            "age": math.floor(age) if age is not None else None,
            "registeredAt": self.selected.get("createdAt"),
        }

    def delete(self, student_id: str) -> bool:
        if not self.confirm(DELETE_CONFIRMATION):
            return False
        try:
            self.api.delete_student(student_id)
        except ApiError as e:
            logger.error("Error deleting student %s: %s", student_id, e.message)
            self.error = "Failed to delete student"
            return False

        if self.selected is not None and self.selected.get("_id") == student_id:
            self.clear_selection()
        self.refresh()
        return True
