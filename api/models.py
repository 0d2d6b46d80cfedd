"""
API models and schemas for the FastAPI application.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from summaries.models import Summary


class SummaryResponse(BaseModel):
    """Summary response model for API."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Unique summary identifier")
    owner: str = Field(..., description="Identity of the summary's owner")
    title: str = Field(..., description="Book title")
    author: str = Field(..., description="Book author")
    body: str = Field(..., description="Summary text")
    tags: List[str] = Field(default_factory=list, description="Ordered tag list")
    created_at: datetime = Field(..., alias="createdAt", description="Creation timestamp")
    updated_at: datetime = Field(..., alias="updatedAt", description="Last update timestamp")

    @classmethod
    def from_summary(cls, summary: Summary) -> "SummaryResponse":
        return cls(**summary.model_dump())


class DeleteResponse(BaseModel):
    """Delete acknowledgment."""
    message: str = Field("Summary deleted successfully", description="Confirmation message")


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
    database_status: str = Field(..., description="Database connection status")
