"""Exception handlers mapping auth, validation and service errors to JSON responses.

Response shapes:
    auth failures        {"msg": "...", "code": "no_token" | "invalid_token" | "expired_token" | "forbidden"}
    validation failures  {"errors": [{"msg", "param", "location", "value"?}]}  (400)
    missing records      {"msg": "..."}  (404)
    anything unexpected  {"status": "error", "message": "Something went wrong!"}  (500)
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import (
    AuthError,
    NotFoundError,
    PermissionDeniedError,
    ServiceError,
)

logger = logging.getLogger(__name__)

# Never echo these back in validation errors.
SENSITIVE_FIELDS = frozenset({"password"})


def validation_error_item(
    msg: str, param: str | None = None, location: str = "body", value: Any = None
) -> dict[str, Any]:
    item: dict[str, Any] = {"msg": msg, "location": location}
    if param is not None:
        item["param"] = param
        if value is not None and param not in SENSITIVE_FIELDS:
            item["value"] = value
    return item


def _format_validation_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    items = []
    for err in exc.errors():
        loc = list(err.get("loc", ()))
        location = str(loc[0]) if loc else "body"
        param = ".".join(str(p) for p in loc[1:]) or None
        msg = str(err.get("msg", "Invalid value"))
        # pydantic prefixes messages raised from field validators
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, ") :]
        # for missing fields the input is the whole enclosing object
        value = err.get("input") if param and err.get("type") != "missing" else None
        items.append(
            validation_error_item(msg, param, location, jsonable_encoder(value))
        )
    return items


async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    logger.info(
        "Auth rejected",
        extra={"path": request.url.path, "reason": exc.code},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"msg": exc.message, "code": exc.code},
        headers=headers,
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": _format_validation_errors(exc)},
    )


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if isinstance(exc, NotFoundError):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"msg": exc.message})
    if isinstance(exc, PermissionDeniedError):
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"msg": exc.message, "code": "forbidden"},
        )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": [validation_error_item(exc.message, exc.field)]},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"status": "error", "message": "Something went wrong!"},
    )


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AuthError, auth_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
