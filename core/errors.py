"""Translate exceptions into the API's uniform JSON error bodies.

422: ``{"message": ..., "errors": {field: [messages]}}``
401/404 and other HTTP errors: ``{"message": ...}``
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.exceptions import AuthenticationError, NotFoundOrForbidden, ValidationError

INVALID_DATA = "The given data was invalid."
_LOCATIONS = ("body", "query", "path", "header", "cookie")


def _field_name(loc) -> str:
    parts = list(loc)
    if parts and parts[0] in _LOCATIONS:
        parts = parts[1:]
    if not parts:
        return "body"
    # List indices and dict keys, e.g. "options.0" or "attributes.department"
    return ".".join(str(p) for p in parts)


def _message(error: dict) -> str:
    msg = error.get("msg", "")
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    return msg


def errors_from_pydantic(errors) -> dict[str, list[str]]:
    out: dict[str, list[str]] = {}
    for error in errors:
        messages = out.setdefault(_field_name(error.get("loc", ())), [])
        msg = _message(error)
        if msg not in messages:
            messages.append(msg)
    return out


def _unprocessable(errors: dict[str, list[str]], message: str = INVALID_DATA) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"message": message, "errors": errors},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return _unprocessable(errors_from_pydantic(exc.errors()))


async def validation_error_handler(request: Request, exc: ValidationError):
    return _unprocessable(exc.errors, exc.message)


async def not_found_handler(request: Request, exc: NotFoundOrForbidden):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"message": exc.message})


async def authentication_error_handler(request: Request, exc: AuthenticationError):
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"message": exc.message},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(NotFoundOrForbidden, not_found_handler)
    app.add_exception_handler(AuthenticationError, authentication_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
