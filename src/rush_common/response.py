"""Envelope returned by every /api/v1 route.

    {"code": 0, "message": "success", "data": {...}, "timestamp": "...", "request_id": "req_..."}

code is 0 on success and the AppError code otherwise; data is null on error.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from src.rush_common.errors import AppError


def new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


class ApiResponse(BaseModel):
    code: int = 0
    message: str = "success"
    data: Any = None
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    request_id: str = Field(default_factory=new_request_id)


def _request_id(request: Request | None) -> str:
    if request is None:
        return new_request_id()
    return getattr(request.state, "request_id", None) or new_request_id()


def success_response(data: Any = None, request: Request | None = None) -> ApiResponse:
    """Reuses the id RequestLogMiddleware put on request.state when given a request."""
    return ApiResponse(data=data, request_id=_request_id(request))


def error_response(code: int, message: str, request: Request | None = None) -> ApiResponse:
    return ApiResponse(code=code, message=message, data=None, request_id=_request_id(request))


def app_error_json(
    exc: AppError, request: Request | None = None, headers: dict[str, str] | None = None
) -> JSONResponse:
    body = error_response(exc.code, exc.message, request)
    return JSONResponse(status_code=exc.http_status, content=body.model_dump(), headers=headers)
