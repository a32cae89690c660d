"""
app/api/errors.py

Request-validation error handling.

FastAPI echoes the offending input back in a 422 body.  JSON request
bodies may carry ``Infinity`` or ``NaN`` literals, which the strict JSON
response encoder refuses, so non-finite inputs are echoed as strings.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

logger = logging.getLogger(__name__)


def _json_safe(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {key: _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    return value


async def handle_validation_error(request: Request, exc: RequestValidationError) -> Response:
    errors = _json_safe(jsonable_encoder(exc.errors()))
    logger.info("Request rejected path=%s errors=%d", request.url.path, len(errors))
    return JSONResponse(
        status_code=422,
        content={"detail": errors},
    )


def register_error_handlers(application: FastAPI) -> None:
    application.add_exception_handler(RequestValidationError, handle_validation_error)
