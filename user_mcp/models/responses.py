"""Response models for the HTTP health endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness check response."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Server version")
    timestamp: datetime = Field(..., description="Current server time")


class ReadyResponse(BaseModel):
    """Readiness check response."""

    ready: bool = Field(..., description="True when the store answers queries")
    store: str = Field(..., description="Store backend name")
    users: int | None = Field(default=None, description="Row count when ready")
    error: str | None = Field(default=None, description="Failure reason when not ready")
