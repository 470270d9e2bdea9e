"""In-process session repository."""

import threading
from dataclasses import dataclass, field

from damage_detector.domain.sessions import SessionRecord
from damage_detector.services.sessions import SessionRepository


@dataclass
class InMemorySessionRepository(SessionRepository):
    """Lock-guarded token to session mapping."""

    sessions: dict[str, SessionRecord] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False)

    def save_session(self, session: SessionRecord) -> None:
        with self._lock:
            self.sessions[session.token] = session

    def get_session(self, token: str) -> SessionRecord | None:
        with self._lock:
            return self.sessions.get(token)

    def delete_session(self, token: str) -> None:
        with self._lock:
            self.sessions.pop(token, None)
