from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from http import HTTPStatus


def api_response(
    message: str,
    success: bool = True,
    data: dict | list | None = None,
    status_code: HTTPStatus = HTTPStatus.OK,
) -> JSONResponse:
    """
    Build the standard `{success, message, data}` JSON envelope.

    Pydantic DTOs, enums and datetimes inside `data` are serialized with
    `jsonable_encoder`, so DTOs keep their camelCase aliases on the wire.

    Args:
        message (str): Human readable description of the outcome.
        success (bool): Whether the call succeeded.
        data (dict | list | None): Optional payload.
        status_code (HTTPStatus): HTTP status for the response. Defaults to 200.

    Returns:
        JSONResponse: The serialized response.

    Example:
        return api_response(
            message="Mentorship request sent successfully.",
            data={"mentorship": mentorship_dto},
            status_code=HTTPStatus.CREATED,
        )
    """
    response_body = {
        "success": success,
        "message": message,
        "data": data,
    }

    return JSONResponse(
        status_code=status_code.value,
        content=jsonable_encoder(response_body, by_alias=True),
    )
