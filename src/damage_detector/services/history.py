"""Owner-scoped assessment history."""

import logging
from dataclasses import dataclass
from typing import Protocol

from damage_detector.domain.damage import AssessmentRecord, AssessmentResult
from damage_detector.domain.errors import NotFoundError

logger = logging.getLogger(__name__)


class HistoryRepository(Protocol):
    """Persistence interface for assessment records."""

    def append(
        self, owner_id: int, result: AssessmentResult, source_file_ref: str
    ) -> AssessmentRecord:
        """Persist a record with a fresh store-wide id and the current time."""

    def list_by_owner(self, owner_id: int) -> list[AssessmentRecord]:
        """Return the owner's records, newest first."""

    def delete_by_owner(self, owner_id: int, record_id: int) -> bool:
        """Delete the owner's record and return whether one was removed."""


@dataclass
class HistoryService:
    """Application service for a user's assessment history."""

    repository: HistoryRepository

    def record(
        self, owner_id: int, result: AssessmentResult, source_file_ref: str
    ) -> AssessmentRecord:
        """Store an assessment for its owner."""
        record = self.repository.append(owner_id, result, source_file_ref)
        logger.info(
            "Stored assessment %s: %s (%s) %s",
            record.id,
            record.damaged_part,
            record.severity,
            record.estimated_cost,
        )
        return record

    def list_for_owner(self, owner_id: int) -> list[AssessmentRecord]:
        """Return a snapshot of the owner's history."""
        return self.repository.list_by_owner(owner_id)

    def delete_for_owner(self, owner_id: int, record_id: int) -> None:
        """Delete one of the owner's records.

        Records owned by other users are reported exactly like missing ones.
        """
        if not self.repository.delete_by_owner(owner_id, record_id):
            raise NotFoundError
        logger.info("Deleted assessment %s", record_id)
