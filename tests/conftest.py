"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional
from unittest.mock import AsyncMock

import pytest
from bson import ObjectId

from summaries.database import SummaryStore
from summaries.identifiers import SummaryId
from summaries.models import Summary, SummaryDraft
from summaries.service import SummaryService


class InMemorySummaryStore:
    """Store double keeping documents in a dict, with a ticking clock."""

    def __init__(self):
        self.documents: Dict[ObjectId, dict] = {}
        self._clock = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def _now(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    async def list_summaries(self, limit: Optional[int] = None) -> List[Summary]:
        if limit == 0:
            return []
        docs = sorted(self.documents.values(), key=lambda d: d["created_at"], reverse=True)
        if limit is not None:
            docs = docs[:limit]
        return [Summary.from_document(doc) for doc in docs]

    async def get_summary(self, summary_id: SummaryId) -> Optional[Summary]:
        doc = self.documents.get(summary_id.object_id)
        return Summary.from_document(doc) if doc else None

    async def insert_summary(self, owner: str, draft: SummaryDraft) -> Summary:
        now = self._now()
        doc = {"_id": ObjectId(), "owner": owner, **draft.to_document(),
               "created_at": now, "updated_at": now}
        self.documents[doc["_id"]] = doc
        return Summary.from_document(doc)

    async def update_summary(self, summary_id: SummaryId, draft: SummaryDraft) -> Optional[Summary]:
        doc = self.documents.get(summary_id.object_id)
        if doc is None:
            return None
        doc.update(draft.to_document())
        doc["updated_at"] = self._now()
        return Summary.from_document(doc)

    async def delete_summary(self, summary_id: SummaryId) -> bool:
        return self.documents.pop(summary_id.object_id, None) is not None

    async def health_check(self) -> dict:
        return {"status": "healthy", "summaries_count": len(self.documents)}


@pytest.fixture
def memory_store():
    """Create an empty in-memory store."""
    return InMemorySummaryStore()


@pytest.fixture
def summary_service(memory_store):
    """Create a summary service over the in-memory store."""
    return SummaryService(memory_store)


@pytest.fixture
def mock_store():
    """Create a mock summary store for testing."""
    return AsyncMock(spec=SummaryStore)


@pytest.fixture
def owner_id():
    return "665f1c2ab3e4d5f6a7b8c9aa"


@pytest.fixture
def other_user_id():
    return "665f1c2ab3e4d5f6a7b8c9bb"


@pytest.fixture
def sample_payload():
    """Create a sample create/update payload."""
    return {
        "title": "Dune",
        "author": "Frank Herbert",
        "body": "A desert planet, a spice, and a prophecy.",
        "tags": "scifi, classic",
    }


@pytest.fixture
def sample_summary(owner_id):
    """Create a sample stored summary."""
    created = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    return Summary(
        id="665f1c2ab3e4d5f6a7b8c9d0",
        owner=owner_id,
        title="Dune",
        author="Frank Herbert",
        body="A desert planet, a spice, and a prophecy.",
        tags=["scifi", "classic"],
        created_at=created,
        updated_at=created,
    )
