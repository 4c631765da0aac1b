from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ScrapeRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    url: str = Field(..., min_length=1)


class ErrorPayload(BaseModel):
    error: str
    message: str
    url: str | None = None
    timestamp: datetime | None = None


class HealthPayload(BaseModel):
    status: str = "ok"
    uptime: float
    timestamp: datetime
    environment: str
