import logging

from fastapi import HTTPException, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from hackathon_api.errors import RegistrationError

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Server Error"


def create_response(data=None, status_code: int = status.HTTP_200_OK, **extra) -> JSONResponse:
    """Return a consistent API response payload and status code."""
    content = {"success": status_code < 400}
    content.update(jsonable_encoder(extra))
    content["data"] = jsonable_encoder(data)
    return JSONResponse(status_code=status_code, content=content)


def error_response(error, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error})


def handle_exception(error: Exception, fallback_message: str = SERVER_ERROR_MESSAGE) -> JSONResponse:
    """Coerce raised errors into the shared response structure."""
    if isinstance(error, RegistrationError):
        return error_response(error.payload, error.status_code)

    if isinstance(error, HTTPException):
        detail = error.detail if isinstance(error.detail, str) else str(error.detail)
        return error_response(detail, error.status_code)

    logger.error("Unhandled error: %s", error, exc_info=error)
    return error_response(fallback_message, status.HTTP_500_INTERNAL_SERVER_ERROR)
