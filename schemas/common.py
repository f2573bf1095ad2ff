"""
schemas/common.py

- Schemas shared across the project (Pydantic v2)
- Contents:
  1) error envelope: ErrorDetail, ErrorResponse
  2) pagination: Pagination, MetaInfo, make_meta()
"""

from __future__ import annotations

from datetime import datetime, timezone
from math import ceil

from pydantic import BaseModel, Field, ConfigDict


# =========================================================
# 1) Error envelope
# =========================================================

class ErrorDetail(BaseModel):
    code: str = Field(..., description="error code (e.g. NOT_FOUND, INVALID_GRADE_RANGE)")
    message: str = Field(..., description="human readable message")

class ErrorResponse(BaseModel):
    """
    Body returned by the global error handlers (middlewares/error_handler.py).
    """
    success: bool = False
    error: ErrorDetail
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="response time (UTC)"
    )

    model_config = ConfigDict(extra="ignore")


# =========================================================
# 2) Pagination
# =========================================================

class Pagination(BaseModel):
    """
    List query parameters
    - page: starts at 1
    - size: 1..200
    """
    page: int = Field(1, ge=1, description="current page (1-based)")
    size: int = Field(20, ge=1, le=200, description="items per page")

    model_config = ConfigDict(extra="ignore")


class MetaInfo(BaseModel):
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    size: int = Field(..., ge=1)
    pages: int = Field(..., ge=1)

    model_config = ConfigDict(extra="ignore")


def make_meta(total: int, page: int, size: int) -> MetaInfo:
    """
    Build pagination metadata
    - pages is at least 1 even when total is 0
    """
    pages = max(1, ceil(total / max(1, size)))
    return MetaInfo(total=total, page=page, size=size, pages=pages)
