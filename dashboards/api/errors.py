# dashboards/api/errors.py
from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dashboards.services.fetch import FetchFailure


def _error_response(
    *,
    code: str,
    message: str,
    status_code: int = 400,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    payload: dict[str, Any] = {"error": {"code": code, "message": message}}
    if details:
        payload["error"]["details"] = details
    return JSONResponse(status_code=status_code, content=payload)


async def fetch_failure_handler(request: Request, exc: FetchFailure) -> JSONResponse:
    return _error_response(
        code="upstream_fetch_failed",
        message=str(exc),
        status_code=502,
        details=exc.to_dict(),
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FetchFailure, fetch_failure_handler)
