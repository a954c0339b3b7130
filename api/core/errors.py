"""
Exception handlers shared by every router.
"""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


def _field_errors(exc: RequestValidationError) -> list[dict]:
    errors: list[dict] = []
    for error in exc.errors():
        # Drop the echoed input; uploads and long bodies make it noisy.
        errors.append(
            {
                "loc": list(error.get("loc", ())),
                "msg": error.get("msg", ""),
                "type": error.get("type", ""),
            }
        )
    return errors


async def validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed input is a plain client error here, not 422.
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(_field_errors(exc))},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
