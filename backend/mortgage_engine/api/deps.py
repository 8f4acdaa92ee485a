from fastapi import HTTPException

from mortgage_engine.services.validation import InputValidationError


def validation_http_error(exc: InputValidationError) -> HTTPException:
    """422 response listing each offending field and its message."""
    return HTTPException(
        status_code=422,
        detail=[{"field": e.field, "message": e.message} for e in exc.errors],
    )
