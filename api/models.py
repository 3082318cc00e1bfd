"""
API models and schemas for the FastAPI application.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error response model."""
    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Additional error details")
    status_code: int = Field(..., description="HTTP status code")


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(..., description="Current timestamp")
    version: str = Field(..., description="API version")
    store_status: str = Field(..., description="Checkpoint store status")


class StatusResponse(BaseModel):
    """Checkpoint and platform status."""
    changelog_url: str = Field(..., description="Monitored changelog URL")
    last_seen_version: Optional[str] = Field(None, description="Current checkpoint, if any")
    platforms: List[str] = Field(default_factory=list, description="Platforms with credentials configured")
    timestamp: datetime = Field(..., description="Current timestamp")
