"""Response envelope shared by every API route."""

from __future__ import annotations

import math
from typing import Any

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, ConfigDict, Field


class Envelope(BaseModel):
    """Documented shape of every response body."""

    success: bool = True
    data: Any = None
    error: str | None = None
    details: Any = None
    count: int | None = None
    message: str | None = None
    pagination: dict[str, int] | None = None


class Pagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int
    page: int
    limit: int
    total_pages: int = Field(alias="totalPages")

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "Pagination":
        return cls(total=total, page=page, limit=limit, total_pages=math.ceil(total / limit) if limit else 0)


def ok(data: Any = None, **extra: Any) -> dict[str, Any]:
    """Success envelope; optional top-level keys left as ``None`` are omitted."""
    body: dict[str, Any] = {"success": True, "data": jsonable_encoder(data, by_alias=True)}
    for key, value in extra.items():
        if value is not None:
            body[key] = jsonable_encoder(value, by_alias=True)
    return body


def fail(error: str, details: Any = None) -> dict[str, Any]:
    body: dict[str, Any] = {"success": False, "error": error}
    if details is not None:
        body["details"] = jsonable_encoder(details)
    return body
