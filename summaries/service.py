"""
Summary service: validation, ownership enforcement and persistence calls.
"""

from typing import Any, List

import structlog

from .database import SummaryStore
from .errors import Forbidden, InvalidInput, NotFound
from .identifiers import SummaryId
from .models import Summary, SummaryDraft
from .validation import parse_limit, validate_summary_input

logger = structlog.get_logger(__name__)


class SummaryService:
    """
    Operations on book summaries.

    Reads are public. Writes take a caller identity that has already been
    verified; only the owner of a record may update or delete it.
    """

    def __init__(self, store: SummaryStore):
        self.store = store

    async def list_summaries(self, raw_limit: Any = None) -> List[Summary]:
        """
        List summaries newest first, optionally capped.

        Args:
            raw_limit: Result-count cap as submitted; unparseable means no cap

        Returns:
            List of summaries
        """
        limit = parse_limit(raw_limit)
        return await self.store.list_summaries(limit)

    async def get_summary(self, raw_id: Any) -> Summary:
        """
        Fetch a single summary.

        Raises:
            NotFound: If the identifier is malformed or matches no record
        """
        summary_id = self._parse_id(raw_id)
        summary = await self.store.get_summary(summary_id)
        if summary is None:
            raise NotFound()
        return summary

    async def create_summary(self, caller_id: str, payload: Any) -> Summary:
        """
        Create a summary owned by the caller.

        Any owner supplied in the payload is ignored.

        Raises:
            InvalidInput: If title, author or body is missing or blank
        """
        draft = self._validate(payload)
        summary = await self.store.insert_summary(caller_id, draft)
        logger.info("Summary created", summary_id=summary.id, caller_id=caller_id)
        return summary

    async def update_summary(self, caller_id: str, raw_id: Any, payload: Any) -> Summary:
        """
        Replace title, author, body and tags of a summary owned by the caller.

        Raises:
            NotFound: If the identifier is malformed or matches no record
            Forbidden: If the caller does not own the record
            InvalidInput: If title, author or body is missing or blank
        """
        summary_id, _ = await self._load_owned(caller_id, raw_id, "update")
        draft = self._validate(payload)

        updated = await self.store.update_summary(summary_id, draft)
        if updated is None:
            raise NotFound()

        logger.info("Summary updated", summary_id=updated.id, caller_id=caller_id)
        return updated

    async def delete_summary(self, caller_id: str, raw_id: Any) -> None:
        """
        Permanently delete a summary owned by the caller.

        Raises:
            NotFound: If the identifier is malformed or matches no record
            Forbidden: If the caller does not own the record
        """
        summary_id, _ = await self._load_owned(caller_id, raw_id, "delete")

        if not await self.store.delete_summary(summary_id):
            raise NotFound()

        logger.info("Summary deleted", summary_id=str(summary_id), caller_id=caller_id)

    async def _load_owned(self, caller_id: str, raw_id: Any, action: str):
        summary_id = self._parse_id(raw_id)
        summary = await self.store.get_summary(summary_id)
        if summary is None:
            raise NotFound()

        if summary.owner != str(caller_id):
            logger.warning("Rejected write by non-owner", action=action,
                           summary_id=str(summary_id), caller_id=caller_id)
            raise Forbidden(action)

        return summary_id, summary

    @staticmethod
    def _parse_id(raw_id: Any) -> SummaryId:
        summary_id = SummaryId.parse(raw_id)
        if summary_id is None:
            raise NotFound()
        return summary_id

    @staticmethod
    def _validate(payload: Any) -> SummaryDraft:
        result = validate_summary_input(payload)
        if not result.ok:
            raise InvalidInput(result.violations[0], result.violations)
        return result.draft
