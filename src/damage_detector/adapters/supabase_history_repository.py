"""Supabase-backed assessment history repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from damage_detector.domain.damage import AssessmentRecord, AssessmentResult
from damage_detector.domain.errors import InternalFailureError
from damage_detector.services.history import HistoryRepository

_RECORD_COLUMNS = (
    "id, owner_id, damaged_part, severity, estimated_cost, "
    "damage_description, damage_location, source_file_ref, created_at"
)


@dataclass
class SupabaseHistoryRepository(HistoryRepository):
    """Supabase implementation for assessment records.

    Ids come from the table's identity column, so they are store-wide.
    """

    client: Client

    def append(
        self, owner_id: int, result: AssessmentResult, source_file_ref: str
    ) -> AssessmentRecord:
        """Insert an assessment row and return it."""
        response = (
            self.client.table("assessments")
            .insert(
                {
                    "owner_id": owner_id,
                    "damaged_part": result.category.name,
                    "severity": result.severity.label,
                    "estimated_cost": result.estimated_cost,
                    "damage_description": result.category.description,
                    "damage_location": result.category.location,
                    "source_file_ref": source_file_ref,
                    "created_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise InternalFailureError("Failed to store assessment")
        return _row_to_record(response.data[0])

    def list_by_owner(self, owner_id: int) -> list[AssessmentRecord]:
        """Return the owner's assessments, newest first."""
        response = (
            self.client.table("assessments")
            .select(_RECORD_COLUMNS)
            .eq("owner_id", owner_id)
            .order("created_at", desc=True)
            .order("id", desc=True)
            .execute()
        )
        return [_row_to_record(row) for row in response.data or []]

    def delete_by_owner(self, owner_id: int, record_id: int) -> bool:
        """Delete an assessment only if it belongs to the owner."""
        response = (
            self.client.table("assessments")
            .delete()
            .eq("id", record_id)
            .eq("owner_id", owner_id)
            .execute()
        )
        return bool(response.data)


def _row_to_record(row: dict[str, object]) -> AssessmentRecord:
    return AssessmentRecord(
        id=int(row["id"]),
        owner_id=int(row["owner_id"]),
        damaged_part=str(row["damaged_part"]),
        severity=str(row["severity"]),
        estimated_cost=str(row["estimated_cost"]),
        damage_description=str(row["damage_description"]),
        damage_location=str(row["damage_location"]),
        source_file_ref=str(row["source_file_ref"]),
        timestamp=datetime.fromisoformat(str(row["created_at"])),
    )
