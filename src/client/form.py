import copy
import enum
import logging
import time
from typing import Any, Callable, Dict, Optional

from src.client.api import ApiError, StudentApiClient
from src.students.validation import validate_student

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Student registered successfully!"
GENERIC_SUBMIT_ERROR = "Failed to register student. Please try again."

EMPTY_FORM: Dict[str, Any] = {
    "firstName": "",
    "lastName": "",
    "email": "",
    "phone": "",
    "dateOfBirth": "",
    "gender": "",
    "course": "",
    "year": "",
    "address": {
        "street": "",
        "city": "",
        "state": "",
        "zipCode": "",
    },
    "guardianName": "",
    "guardianPhone": "",
}

class FormState(enum.Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILURE = "failure"

class RegistrationForm:
    """
    Collects a registration, checks it with the shared validator and submits it.

    Field errors are keyed exactly like the server reports them (`address.zipCode` for
    nested fields) so server messages can be shown next to the right input unchanged.
    """

    def __init__(
        self,
        api: StudentApiClient,
        clock: Callable[[], float] = time.monotonic,
        message_ttl: float = 5.0,
    ):
        self.api = api
        self.clock = clock
        self.message_ttl = message_ttl
        self.values: Dict[str, Any] = copy.deepcopy(EMPTY_FORM)
        self.errors: Dict[str, str] = {}
        self.state = FormState.IDLE
        self._success_message = ""
        self._success_at: Optional[float] = None

    @property
    def is_submitting(self) -> bool:
        return self.state is FormState.SUBMITTING

    @property
    def success_message(self) -> str:
        # expires on its own once the display window has passed
        if self._success_at is not None and self.clock() - self._success_at >= self.message_ttl:
            self._success_message = ""
            self._success_at = None
        return self._success_message

    def get_field(self, name: str) -> Any:
        if "." in name:
            parent, child = name.split(".", 1)
            return self.values[parent][child]
        return self.values[name]

    def set_field(self, name: str, value: Any) -> None:
        if "." in name:
            parent, child = name.split(".", 1)
            self.values[parent][child] = value
        else:
            self.values[name] = value

        self.errors.pop(name, None)
        if self.state in (FormState.SUCCESS, FormState.FAILURE):
            self.state = FormState.IDLE

    def reset(self) -> None:
        self.values = copy.deepcopy(EMPTY_FORM)
        self.errors = {}

    def submit(self) -> bool:
        """
        Validate and send the registration.

        Returns True when the student was registered. Invalid input is reported through
        `errors` without contacting the server.
        """
        self._success_message = ""
        self._success_at = None

        self.state = FormState.VALIDATING
        errors = validate_student(self.values)
        if errors:
            self.errors = errors
            self.state = FormState.IDLE
            return False

        self.state = FormState.SUBMITTING
        try:
            self.api.create_student(copy.deepcopy(self.values))
        except ApiError as e:
            logger.info("Registration rejected: %s", e.message)
            if e.errors:
                self.errors = dict(e.errors)
            else:
                self.errors = {"submit": e.message if e.status_code else GENERIC_SUBMIT_ERROR}
            self.state = FormState.FAILURE
            return False

        self.reset()
        self._success_message = SUCCESS_MESSAGE
        self._success_at = self.clock()
        self.state = FormState.SUCCESS
        return True
