"""Per-session UI state for the assistant page."""

from __future__ import annotations

import secrets
from collections import OrderedDict
from typing import Literal

from pydantic import BaseModel, Field

from tsa.schemas.analysis import CodeAnalysis

SAMPLE_CODE = """\
interface User {
  id: string;
  name: string;
  email: string;
  createdAt: Date;
}

async function fetchUser(id: string) {
  const response = await fetch(`/api/users/${id}`);
  return response.json();
}

const users: User[] = [];
users.push({ id: "1", name: "John", email: "john@example.com" });"""


class Notification(BaseModel):
    """A toast shown once on the next page render."""

    level: Literal["success", "error", "info"]
    message: str


class AssistantState(BaseModel):
    """Everything the page needs to render one browser session."""

    code: str = SAMPLE_CODE
    analysis: CodeAnalysis | None = None
    is_analyzing: bool = False
    api_key: str = ""
    use_openai: bool = False


class Session(BaseModel):
    state: AssistantState = Field(default_factory=AssistantState)
    flashes: list[Notification] = Field(default_factory=list)

    def flash(self, notifications: list[Notification]) -> None:
        self.flashes.extend(notifications)

    def pop_flashes(self) -> list[Notification]:
        flashes, self.flashes = self.flashes, []
        return flashes


class SessionStore:
    """In-memory sessions keyed by cookie id, least recently used evicted."""

    def __init__(self, max_sessions: int = 256) -> None:
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[str, Session] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def get_or_create(self, session_id: str | None) -> tuple[str, Session]:
        """Return ``(session_id, session)``, minting a new id if unknown."""
        if session_id and session_id in self._sessions:
            self._sessions.move_to_end(session_id)
            return session_id, self._sessions[session_id]

        session_id = secrets.token_urlsafe(16)
        session = Session()
        self._sessions[session_id] = session
        while len(self._sessions) > self._max_sessions:
            self._sessions.popitem(last=False)
        return session_id, session
