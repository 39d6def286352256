GENDERS = ("Male", "Female", "Other")

COURSES = (
    "Computer Science",
    "Electronics",
    "Mechanical",
    "Civil",
    "Information Technology",
    "Electrical",
)

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50

MIN_YEAR = 1
MAX_YEAR = 4

MIN_AGE = 15
MAX_AGE = 100

# Same patterns are used for the collection $jsonSchema, so keep them PCRE compatible
EMAIL_PATTERN = r"^[A-Za-z0-9_.-]+@([A-Za-z0-9_-]+\.)+[A-Za-z0-9_-]{2,4}$"
PHONE_PATTERN = r"^[0-9]{10}$"
ZIP_CODE_PATTERN = r"^[0-9]{6}$"
