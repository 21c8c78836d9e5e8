"""Pydantic schemas for API requests and responses."""

import datetime as dt
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class UploadResponse(BaseModel):
    """Summary of an accepted upload."""

    filename: str
    record_count: int
    first_period: dt.date
    last_period: dt.date


class UploadErrorResponse(BaseModel):
    """A rejected upload; ``detail`` is safe to show to the user."""

    detail: str
    error: str = Field(description="Error class name, e.g. RowError")
    row_number: Optional[int] = None
    field: Optional[str] = None


class InsightsResponse(BaseModel):
    insights: str


class HealthResponse(BaseModel):
    status: str
    version: str
    checks: Dict[str, Any] = {}
