"""In-process assessment history repository."""

import threading
from dataclasses import dataclass, field
from datetime import UTC, datetime

from damage_detector.domain.damage import AssessmentRecord, AssessmentResult
from damage_detector.services.history import HistoryRepository


@dataclass
class InMemoryHistoryRepository(HistoryRepository):
    """Lock-guarded record collection with a store-wide id counter."""

    records: dict[int, AssessmentRecord] = field(default_factory=dict)
    _next_id: int = field(default=1, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False)

    def append(
        self, owner_id: int, result: AssessmentResult, source_file_ref: str
    ) -> AssessmentRecord:
        with self._lock:
            record = AssessmentRecord(
                id=self._next_id,
                owner_id=owner_id,
                damaged_part=result.category.name,
                severity=result.severity.label,
                estimated_cost=result.estimated_cost,
                damage_description=result.category.description,
                damage_location=result.category.location,
                source_file_ref=source_file_ref,
                timestamp=datetime.now(tz=UTC),
            )
            self.records[record.id] = record
            self._next_id += 1
            return record

    def list_by_owner(self, owner_id: int) -> list[AssessmentRecord]:
        with self._lock:
            owned = [r for r in self.records.values() if r.owner_id == owner_id]
        return sorted(owned, key=lambda r: (r.timestamp, r.id), reverse=True)

    def delete_by_owner(self, owner_id: int, record_id: int) -> bool:
        with self._lock:
            record = self.records.get(record_id)
            if record is None or record.owner_id != owner_id:
                return False
            del self.records[record_id]
            return True
