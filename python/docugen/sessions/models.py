"""Report session models."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from docugen.documents.budget import BudgetCheck
from docugen.documents.models import Document, DocumentSet, ReportFormat


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReportSession(BaseModel):
    """One parsed document set plus its selection, keyed by session id."""

    session_id: str
    filename: str | None = None
    format: ReportFormat
    document_set: DocumentSet
    budget_check: BudgetCheck | None = None

    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    def touch(self) -> None:
        self.updated_at = _utcnow()


class SessionResponse(BaseModel):
    """Session response for API."""

    session_id: str
    filename: str | None
    format: str
    documents: list[Document]
    selected_index: int
    selected_title: str | None
    budget_check: BudgetCheck | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_session(cls, session: ReportSession) -> "SessionResponse":
        """Create response from ReportSession model."""
        return cls(
            session_id=session.session_id,
            filename=session.filename,
            format=session.format.value,
            documents=session.document_set.documents,
            selected_index=session.document_set.selected_index,
            selected_title=(
                session.document_set.selected.title
                if session.document_set.selected
                else None
            ),
            budget_check=session.budget_check,
            created_at=session.created_at,
            updated_at=session.updated_at,
        )
