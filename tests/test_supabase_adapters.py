"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from damage_detector.adapters.supabase_history_repository import (
    SupabaseHistoryRepository,
)
from damage_detector.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from damage_detector.adapters.supabase_user_repository import SupabaseUserRepository
from damage_detector.domain.damage import DAMAGE_CATALOG, Severity
from damage_detector.domain.errors import DuplicateIdentityError, InternalFailureError
from damage_detector.domain.sessions import SessionRecord
from damage_detector.services.assessment import generate
from tests.conftest import ScriptedRandom

_NOW = "2024-05-01T10:00:00+00:00"


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "delete": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    orders: list[tuple[str, bool]] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.orders.append((column, desc))
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _user_row(user_id: int = 1) -> dict[str, object]:
    return {
        "id": user_id,
        "username": "alice",
        "email": "alice@example.com",
        "password_hash": "$2b$04$hash",
        "created_at": _NOW,
    }


def test_supabase_user_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    users_table = client.table("users")
    users_table.queue("select", [])
    users_table.queue("select", [])
    users_table.queue("insert", [_user_row()])
    users_table.queue("select", [_user_row()])

    repository = SupabaseUserRepository(client)
    created = repository.create_user("alice", "alice@example.com", "$2b$04$hash")
    fetched = repository.get_by_email("alice@example.com")

    assert created.id == 1
    assert created.created_at == datetime(2024, 5, 1, 10, tzinfo=UTC)
    assert fetched is not None
    assert fetched.username == "alice"
    assert users_table.last_payload == {
        "username": "alice",
        "email": "alice@example.com",
        "password_hash": "$2b$04$hash",
    }


def test_supabase_user_repository_rejects_duplicate_email() -> None:
    client = FakeSupabaseClient()
    users_table = client.table("users")
    users_table.queue("select", [])
    users_table.queue("select", [{"id": 5}])

    repository = SupabaseUserRepository(client)

    with pytest.raises(DuplicateIdentityError):
        repository.create_user("bob", "alice@example.com", "hash")
    assert users_table.last_payload is None


def test_supabase_user_repository_missing_insert_data() -> None:
    client = FakeSupabaseClient()

    repository = SupabaseUserRepository(client)

    with pytest.raises(InternalFailureError):
        repository.create_user("alice", "alice@example.com", "hash")


def test_supabase_user_repository_get_by_id_missing() -> None:
    repository = SupabaseUserRepository(FakeSupabaseClient())

    assert repository.get_by_id(42) is None


def test_supabase_session_repository() -> None:
    client = FakeSupabaseClient()
    sessions_table = client.table("sessions")
    created_at = datetime(2024, 5, 1, 10, tzinfo=UTC)
    session = SessionRecord(
        token="tok",
        user_id=3,
        created_at=created_at,
        expires_at=created_at + timedelta(hours=24),
    )
    sessions_table.queue("insert", [{"token": "tok"}])
    sessions_table.queue(
        "select",
        [
            {
                "token": "tok",
                "user_id": 3,
                "created_at": created_at.isoformat(),
                "expires_at": session.expires_at.isoformat(),
            }
        ],
    )

    repository = SupabaseSessionRepository(client)
    repository.save_session(session)
    fetched = repository.get_session("tok")
    repository.delete_session("tok")

    assert fetched == session
    assert sessions_table.last_filters[-1] == ("token", "tok")


def test_supabase_history_repository_append_and_list() -> None:
    client = FakeSupabaseClient()
    table = client.table("assessments")
    row = {
        "id": 11,
        "owner_id": 2,
        "damaged_part": "Hood",
        "severity": "Severe",
        "estimated_cost": "₹30,000",
        "damage_description": "Engine compartment cover",
        "damage_location": "Top front of vehicle",
        "source_file_ref": "carImage-1.png",
        "created_at": _NOW,
    }
    table.queue("insert", [row])
    table.queue("select", [row])
    result = generate(DAMAGE_CATALOG, ScriptedRandom("Hood", Severity.SEVERE, 20000))

    repository = SupabaseHistoryRepository(client)
    record = repository.append(2, result, "carImage-1.png")
    listed = repository.list_by_owner(2)

    assert record.id == 11
    assert isinstance(table.last_payload, dict)
    assert table.last_payload["estimated_cost"] == "₹30,000"
    assert listed == [record]
    assert ("owner_id", 2) in table.last_filters
    assert table.orders[0] == ("created_at", True)


def test_supabase_history_repository_delete_is_owner_filtered() -> None:
    client = FakeSupabaseClient()
    table = client.table("assessments")
    table.queue("delete", [{"id": 11}])

    repository = SupabaseHistoryRepository(client)

    assert repository.delete_by_owner(2, 11) is True
    assert table.last_filters[-2:] == [("id", 11), ("owner_id", 2)]
    assert repository.delete_by_owner(3, 11) is False
