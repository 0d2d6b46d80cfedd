"""
MongoDB record store for book summaries.
Handles connection lifecycle, indexing, and CRUD operations.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import structlog
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import ConnectionFailure

from .identifiers import SummaryId
from .models import Summary, SummaryDraft

logger = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    """Current UTC time truncated to the millisecond precision BSON dates keep."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class SummaryStore:
    """
    Async MongoDB store for summary documents.
    Constructed once at process start and shared across requests.
    """

    def __init__(self, connection_url: str, database_name: str, collection_name: str = "summaries"):
        """
        Initialize the store.

        Args:
            connection_url: MongoDB connection URL
            database_name: Name of the database
            collection_name: Name of the summaries collection
        """
        self.connection_url = connection_url
        self.database_name = database_name
        self.collection_name = collection_name
        self.client: Optional[AsyncIOMotorClient] = None
        self.database: Optional[AsyncIOMotorDatabase] = None
        self.collection: Optional[AsyncIOMotorCollection] = None

    async def connect(self) -> None:
        """Establish connection to MongoDB."""
        try:
            self.client = AsyncIOMotorClient(self.connection_url, tz_aware=True)
            self.database = self.client[self.database_name]
            self.collection = self.database[self.collection_name]

            await self.client.admin.command("ping")
            logger.info("Successfully connected to MongoDB",
                        database=self.database_name,
                        collection=self.collection_name)

            await self._create_indexes()

        except ConnectionFailure as e:
            logger.error("Failed to connect to MongoDB", error=str(e))
            raise

    async def disconnect(self) -> None:
        """Close MongoDB connection."""
        if self.client:
            self.client.close()
            self.client = None
            logger.info("Disconnected from MongoDB")

    async def _create_indexes(self) -> None:
        """Create indexes for the listing order and owner lookups."""
        try:
            await self.collection.create_index([("created_at", DESCENDING)])
            await self.collection.create_index("owner")
            logger.info("Successfully created MongoDB indexes")
        except Exception as e:
            logger.error("Failed to create indexes", error=str(e))
            raise

    async def list_summaries(self, limit: Optional[int] = None) -> List[Summary]:
        """
        List summaries, most recently created first.

        Args:
            limit: Maximum number of summaries to return (None for all)

        Returns:
            List of Summary instances
        """
        if limit == 0:
            return []

        try:
            cursor = self.collection.find({}).sort("created_at", DESCENDING)
            if limit is not None:
                cursor = cursor.limit(limit)

            summaries = [Summary.from_document(doc) async for doc in cursor]
            logger.debug("Listed summaries", limit=limit, count=len(summaries))
            return summaries

        except Exception as e:
            logger.error("Failed to list summaries", limit=limit, error=str(e))
            raise

    async def get_summary(self, summary_id: SummaryId) -> Optional[Summary]:
        """
        Get a summary by identifier.

        Args:
            summary_id: Parsed identifier

        Returns:
            Summary if found, None otherwise
        """
        try:
            document = await self.collection.find_one({"_id": summary_id.object_id})
            return Summary.from_document(document) if document else None

        except Exception as e:
            logger.error("Failed to get summary", summary_id=str(summary_id), error=str(e))
            raise

    async def insert_summary(self, owner: str, draft: SummaryDraft) -> Summary:
        """
        Insert a new summary owned by the given caller.

        Args:
            owner: Caller identity bound to the record
            draft: Validated summary fields

        Returns:
            The stored Summary
        """
        now = _utcnow()
        document: Dict[str, Any] = {
            "owner": owner,
            **draft.to_document(),
            "created_at": now,
            "updated_at": now,
        }

        try:
            result = await self.collection.insert_one(document)
            document["_id"] = result.inserted_id
            logger.debug("Successfully inserted summary", summary_id=str(result.inserted_id), owner=owner)
            return Summary.from_document(document)

        except Exception as e:
            logger.error("Failed to insert summary", owner=owner, error=str(e))
            raise

    async def update_summary(self, summary_id: SummaryId, draft: SummaryDraft) -> Optional[Summary]:
        """
        Overwrite the editable fields of a summary.

        Args:
            summary_id: Parsed identifier
            draft: Validated summary fields

        Returns:
            Updated Summary, or None if it no longer exists
        """
        update_data = draft.to_document()
        update_data["updated_at"] = _utcnow()

        try:
            document = await self.collection.find_one_and_update(
                {"_id": summary_id.object_id},
                {"$set": update_data},
                return_document=ReturnDocument.AFTER,
            )

            if document is None:
                logger.warning("Summary not found for update", summary_id=str(summary_id))
                return None

            logger.debug("Successfully updated summary", summary_id=str(summary_id))
            return Summary.from_document(document)

        except Exception as e:
            logger.error("Failed to update summary", summary_id=str(summary_id), error=str(e))
            raise

    async def delete_summary(self, summary_id: SummaryId) -> bool:
        """
        Permanently delete a summary.

        Args:
            summary_id: Parsed identifier

        Returns:
            bool: True if deleted, False if not found
        """
        try:
            result = await self.collection.delete_one({"_id": summary_id.object_id})

            if result.deleted_count > 0:
                logger.debug("Successfully deleted summary", summary_id=str(summary_id))
                return True

            logger.warning("Summary not found for deletion", summary_id=str(summary_id))
            return False

        except Exception as e:
            logger.error("Failed to delete summary", summary_id=str(summary_id), error=str(e))
            raise

    async def health_check(self) -> Dict[str, Any]:
        """
        Perform database health check.

        Returns:
            Dictionary with health status
        """
        try:
            await self.database.command("ping")
            summaries_count = await self.collection.count_documents({})

            return {
                "status": "healthy",
                "summaries_collection": "accessible",
                "summaries_count": summaries_count
            }
        except Exception as e:
            logger.error("Database health check failed", error=str(e))
            return {
                "status": "unhealthy",
                "error": str(e)
            }
