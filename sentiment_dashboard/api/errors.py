"""Shared error handling utilities for API routers."""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, Coroutine, TypeVar

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sentiment_dashboard.core.errors import (
    ConfigStoreError,
    DataSourceError,
    ValidationError,
)
from sentiment_dashboard.schemas import ApiResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")


def service_error_handler(
    *,
    value_error_status: int = 400,
    not_found_status: int = 404,
    data_source_status: int = 500,
    data_source_error: str = "Failed to query sentiment data",
) -> Callable[
    [Callable[..., Coroutine[Any, Any, T]]],
    Callable[..., Coroutine[Any, Any, T]],
]:
    """Decorator that maps common service exceptions to HTTPException."""

    def decorator(
        fn: Callable[..., Coroutine[Any, Any, T]],
    ) -> Callable[..., Coroutine[Any, Any, T]]:
        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await fn(*args, **kwargs)
            except FileNotFoundError as exc:
                raise HTTPException(
                    status_code=not_found_status, detail=str(exc)
                ) from exc
            except (ValueError, ValidationError, ConfigStoreError) as exc:
                raise HTTPException(
                    status_code=value_error_status, detail=str(exc)
                ) from exc
            except DataSourceError as exc:
                logger.warning("%s: %s", data_source_error, exc)
                raise HTTPException(
                    status_code=data_source_status,
                    detail={"error": data_source_error, "details": str(exc)},
                ) from exc

        return wrapper

    return decorator


def envelope(status_code: int, error: str, details: Any = None) -> ORJSONResponse:
    payload = ApiResponse(
        data=None,
        error=error,
        details=None if details is None else str(details),
    )
    return ORJSONResponse(status_code=status_code, content=payload.model_dump())


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> ORJSONResponse:
    detail = exc.detail
    if isinstance(detail, dict):
        response = envelope(
            exc.status_code,
            str(detail.get("error") or "Request failed"),
            detail.get("details"),
        )
    else:
        response = envelope(exc.status_code, str(detail))
    for key, value in (getattr(exc, "headers", None) or {}).items():
        response.headers[key] = value
    return response


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> ORJSONResponse:
    messages = [
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    ]
    return envelope(400, "Invalid request parameters", "; ".join(messages))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
