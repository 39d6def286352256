import logging
from typing import Any, Dict, List, Optional
import requests

from src.config import settings

logger = logging.getLogger(__name__)

class ApiError(Exception):
    """
    A request to the registration API failed.

    `status_code` is None when the server could not be reached at all. `payload` holds the
    decoded JSON error body when the server sent one.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload or {}

    @property
    def errors(self) -> Dict[str, str]:
        return self.payload.get("errors") or {}

class StudentApiClient:
    """Thin wrapper over the `/students` endpoints used by the form and the dashboard."""

    def __init__(self, base_url: Optional[str] = None, session=None, timeout: float = 10.0):
        self.base_url = (base_url or settings.student_api_url).rstrip("/")
        # anything with a requests-style `request(method, url, json=, timeout=)` works here
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}/students{path}"
        try:
            response = self.session.request(method, url, json=json, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise ApiError(f"Could not reach the registration API: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code >= 400:
            message = body.get("message") if isinstance(body, dict) else None
            raise ApiError(
                message or f"Request failed with status {response.status_code}",
                status_code=response.status_code,
                payload=body if isinstance(body, dict) else None,
            )
        return body

    def create_student(self, student: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "", json=student)["data"]

    def list_students(self) -> List[Dict[str, Any]]:
        return self._request("GET", "")["data"]

    def get_student(self, student_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/{student_id}")["data"]

    def delete_student(self, student_id: str) -> None:
        self._request("DELETE", f"/{student_id}")
