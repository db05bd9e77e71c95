"""Data models for session-history search results."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, field_validator


class SearchHit(BaseModel):
    """One matched message within a conversation."""

    model_config = ConfigDict(frozen=True)

    message_id: str
    conversation_id: str
    message_idx: int
    """Zero-based position of the message within its conversation."""
    role: str
    content: str
    snippet: str
    created_at: datetime | None = None
    conv_created_at: datetime
    """Always present; the timestamp of last resort."""
    conv_updated_at: datetime | None = None
    score: float
    source_id: str
    source_adapter: str
    source_path: str | None = None
    host: str | None = None
    external_id: str | None = None
    """Alternate session id, distinct from ``conversation_id``."""
    title: str | None = None
    workspace: str | None = None

    @field_validator("created_at", "conv_created_at", "conv_updated_at")
    @classmethod
    def _assume_utc(cls, v: datetime | None) -> datetime | None:
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    @property
    def session_id(self) -> str:
        """The id shown for the hit's session: ``external_id`` if set."""
        return self.external_id or self.conversation_id

    @property
    def effective_timestamp(self) -> datetime:
        """First present of ``created_at``, ``conv_updated_at``, ``conv_created_at``."""
        return self.created_at or self.conv_updated_at or self.conv_created_at


class SearchResponse(BaseModel):
    """Envelope returned by the history-search tool."""

    ok: bool
    result: list[SearchHit] | None = None
    error: str | None = None
