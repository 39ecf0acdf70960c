from enum import Enum


class ErrorCode(str, Enum):
    # configuration / connection
    DATABASE_URL_MISSING = "DATABASE_URL_MISSING"
    DATABASE_UNAVAILABLE = "DATABASE_UNAVAILABLE"

    # field validation
    FIELD_REQUIRED = "FIELD_REQUIRED"
    LIST_REQUIRED = "LIST_REQUIRED"
    INVALID_DATE = "INVALID_DATE"
    INVALID_TIME = "INVALID_TIME"
    INVALID_SLUG = "INVALID_SLUG"
    INVALID_EMAIL = "INVALID_EMAIL"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"

    # references / lookups
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    EVENT_REFERENCE_MISSING = "EVENT_REFERENCE_MISSING"

    # uniqueness
    SLUG_ALREADY_EXISTS = "SLUG_ALREADY_EXISTS"
