"""JSON envelope shared by every endpoint.

    {"code": 0, "message": "success", "data": {...}, "timestamp": "...", "request_id": "..."}

`code` is 0 on success and the AppError code otherwise; `data` is null on error.
"""

import uuid
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


def _new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


class ApiResponse(BaseModel):
    code: int = 0
    message: str = "success"
    data: Any = None
    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    request_id: str = Field(default_factory=_new_request_id)


def success_response(
    data: Any = None,
    message: str = "success",
    request_id: str | None = None,
) -> ApiResponse:
    resp = ApiResponse(code=0, message=message, data=data)
    if request_id:
        resp.request_id = request_id
    return resp


def error_response(code: int, message: str, request_id: str | None = None) -> ApiResponse:
    resp = ApiResponse(code=code, message=message, data=None)
    if request_id:
        resp.request_id = request_id
    return resp
