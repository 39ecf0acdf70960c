from fastapi import HTTPException

from devevent.services.exceptions import (
    ConflictError,
    DatabaseConnectionError,
    NotFoundError,
    ServiceError,
    ValidationError,
)


def http_error_from_service(err: ServiceError) -> HTTPException:
    if isinstance(err, NotFoundError):
        status = 404
    elif isinstance(err, ConflictError):
        status = 409
    elif isinstance(err, ValidationError):
        status = 422
    elif isinstance(err, DatabaseConnectionError):
        status = 503
    else:
        status = 500

    detail = {"code": err.code, "message": err.message}
    if isinstance(err, ValidationError) and err.field:
        detail["field"] = err.field

    return HTTPException(status_code=status, detail=detail)
