"""
Pydantic models for book summary records.
Implements the Summary schema and the validated input used to write it.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class SummaryDraft(BaseModel):
    """
    Validated, normalized input for creating or replacing a summary.
    Produced by summaries.validation, never built from raw client data.
    """
    title: str = Field(..., min_length=1, description="Book title")
    author: str = Field(..., min_length=1, description="Book author")
    body: str = Field(..., min_length=1, description="Summary text")
    tags: List[str] = Field(default_factory=list, description="Ordered tag list")

    def to_document(self) -> Dict[str, Any]:
        """Fields written to the store on create and update."""
        return {
            "title": self.title,
            "author": self.author,
            "body": self.body,
            "tags": list(self.tags),
        }


class Summary(BaseModel):
    """
    Stored book summary record.
    """
    id: str = Field(..., description="Store-generated identifier")
    owner: str = Field(..., description="Identity of the creating caller")
    title: str = Field(..., description="Book title")
    author: str = Field(..., description="Book author")
    body: str = Field(..., description="Summary text")
    tags: List[str] = Field(default_factory=list, description="Ordered tag list")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "Summary":
        """
        Build a Summary from a MongoDB document.

        Args:
            document: Raw document as returned by the driver

        Returns:
            Summary instance
        """
        doc = dict(document)
        doc["id"] = str(doc.pop("_id"))
        doc["owner"] = str(doc["owner"])
        doc.setdefault("tags", [])
        return cls(**doc)

    class Config:
        """Pydantic configuration."""
        json_schema_extra = {
            "example": {
                "id": "665f1c2ab3e4d5f6a7b8c9d0",
                "owner": "665f1c2ab3e4d5f6a7b8c9aa",
                "title": "Dune",
                "author": "Frank Herbert",
                "body": "A desert planet, a spice, and a prophecy...",
                "tags": ["scifi", "classic"],
                "created_at": "2024-01-15T10:30:00Z",
                "updated_at": "2024-01-15T10:30:00Z"
            }
        }


class ValidationResult(BaseModel):
    """
    Outcome of validating create/update input: either a draft or violations.
    """
    draft: Optional[SummaryDraft] = Field(None, description="Normalized input when valid")
    violations: List[str] = Field(default_factory=list, description="Validation failures")

    @property
    def ok(self) -> bool:
        return not self.violations and self.draft is not None
