import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

logger = logging.getLogger(__name__)

AUTHENTICATION_FAILED_MESSAGE = "Authentication failed"
UNHANDLED_FAILURE_MESSAGE = "Something went wrong!"
REDACTED_FIELDS = {"password"}
JSON_SCALARS = (str, int, float, bool, type(None))


class ValidationFailed(Exception):
    """Raised when submitted fields break one or more input rules."""

    def __init__(self, errors: list[dict]):
        super().__init__(f"{len(errors)} validation error(s)")
        self.errors = errors


class AuthenticationFailed(Exception):
    """Raised for bad credentials and for missing or unusable tokens.

    ``reason`` is only logged; clients always get the same generic 401.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class NotFound(Exception):
    def __init__(self, message: str = "Student not found"):
        super().__init__(message)
        self.message = message


class StoreFailure(Exception):
    """A write against the record store failed; ``message`` is safe to show."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def pydantic_errors_to_list(errors) -> list[dict]:
    formatted = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")]
        field = ".".join(location)
        # A missing field reports the whole payload as its input.
        value = error.get("input")
        echo_value = (
            error.get("type") != "missing" and field not in REDACTED_FIELDS and isinstance(value, JSON_SCALARS)
        )
        formatted.append(
            {
                "field": field,
                "msg": error.get("msg", "Invalid value"),
                "value": value if echo_value else None,
            }
        )
    return formatted


async def validation_failed_handler(request: Request, exc: ValidationFailed):
    return JSONResponse(status_code=400, content={"errors": exc.errors})


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"errors": pydantic_errors_to_list(exc.errors())})


async def authentication_failed_handler(request: Request, exc: AuthenticationFailed):
    logger.info("Authentication rejected for %s %s: %s", request.method, request.url.path, exc.reason)
    return JSONResponse(status_code=401, content={"message": AUTHENTICATION_FAILED_MESSAGE})


async def not_found_handler(request: Request, exc: NotFound):
    return JSONResponse(status_code=404, content={"message": exc.message})


async def store_failure_handler(request: Request, exc: StoreFailure):
    logger.error(
        "Record store failure on %s %s",
        request.method,
        request.url.path,
        exc_info=exc.__cause__ or exc,
    )
    return PlainTextResponse(exc.message, status_code=500)


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    return PlainTextResponse(UNHANDLED_FAILURE_MESSAGE, status_code=500)


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationFailed, validation_failed_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(AuthenticationFailed, authentication_failed_handler)
    app.add_exception_handler(NotFound, not_found_handler)
    app.add_exception_handler(StoreFailure, store_failure_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
