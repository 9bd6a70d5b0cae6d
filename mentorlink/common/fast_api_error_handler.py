from http import HTTPStatus
from mentorlink.common.exceptions import MentorshipError
from mentorlink.common.fast_api_response_wrapper import api_response
from mentorlink.common.logger import get_logger
from fastapi import Request, FastAPI
from fastapi.exceptions import RequestValidationError

logger = get_logger()


async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler used to convert Python exceptions into a unified API response.
    Business-rule failures keep their own status code and message; anything unexpected is
    logged with its stack trace and surfaced as a generic server error.
    """

    # Determine the HTTP status code based on the type of exception.
    match exc:
        case MentorshipError():
            status = exc.status_code
        case ValueError() | RequestValidationError():
            status = HTTPStatus.BAD_REQUEST
        case RuntimeError():
            status = HTTPStatus.SERVICE_UNAVAILABLE
        case _:
            status = HTTPStatus.INTERNAL_SERVER_ERROR

    # Extract the resource name from the request path, e.g. /api/mentorship/... -> mentorship.
    parts = request.url.path.strip("/").split("/")
    resource = parts[1] if len(parts) > 1 else "unknown"
    is_server_error = status >= 500

    log_msg = str(exc)

    if is_server_error:
        user_message = "Internal Server Error. Please contact support."
    elif isinstance(exc, RequestValidationError):
        first_error = exc.errors()[0]
        user_message = (
            f"Validation Error: {first_error.get('loc', [])[-1]} - "
            f"{first_error.get('msg')}"
        )
    else:
        user_message = str(exc)

    # Full stack traces are logged only for server-side errors.
    log_method = logger.error if is_server_error else logger.warning
    log_method(
        "[%s] %s on resource [%s]: %s",
        "Server Error" if is_server_error else "Client Error",
        type(exc).__name__,
        resource,
        log_msg,
        exc_info=is_server_error,
    )

    return api_response(
        success=False,
        message=user_message,
        status_code=status,
    )


def register_exception_handlers(app: FastAPI):
    """
    Registers the global exception handlers on the provided FastAPI application.
    This ensures unexpected exceptions are consistently processed and returned
    in the standard API response format.
    """
    # Expected errors are registered by class so they are answered in place;
    # the Exception entry only catches what slips through.
    for exc_cls in (MentorshipError, ValueError, RequestValidationError, Exception):
        app.add_exception_handler(exc_cls, global_exception_handler)
