# hexmux/services/api/errors.py
from __future__ import annotations

from http import HTTPStatus

from fastapi import HTTPException

from hexmux.domain.errors import EngineError, HexmuxError, ValidationError


def to_http_error(exc: HexmuxError) -> HTTPException:
    """Validation problems are the caller's (422); engine failures are upstream (502)."""
    if isinstance(exc, ValidationError):
        return HTTPException(
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            detail={"code": exc.code, "message": exc.message, "value": str(exc.value)},
        )
    if isinstance(exc, EngineError):
        return HTTPException(
            status_code=HTTPStatus.BAD_GATEWAY,
            detail={"code": "engine_error", "message": str(exc), "output": exc.output or ""},
        )
    return HTTPException(status_code=HTTPStatus.INTERNAL_SERVER_ERROR, detail=str(exc))
