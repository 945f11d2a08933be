"""Report session store implementations."""

import uuid
from abc import ABC, abstractmethod

from docugen.documents.budget import BudgetCheck
from docugen.documents.models import Document, DocumentSet, ReportFormat
from docugen.errors import NotFoundError
from docugen.logging import get_logger
from docugen.sessions.models import ReportSession

logger = get_logger(__name__)


class SessionStore(ABC):
    """
    Abstract session store interface.

    A session only changes through two events: an edit of one document's
    HTML and a change of the selected document. A new parse replaces the
    whole document set.
    """

    @abstractmethod
    async def create(
        self,
        documents: list[Document],
        report_format: ReportFormat,
        filename: str | None = None,
        budget_check: BudgetCheck | None = None,
    ) -> ReportSession:
        """Create a session for a freshly parsed document set."""

    @abstractmethod
    async def get(self, session_id: str) -> ReportSession | None:
        """Get a session by ID."""

    @abstractmethod
    async def save(self, session: ReportSession) -> ReportSession:
        """Persist a modified session."""

    @abstractmethod
    async def delete(self, session_id: str) -> bool:
        """Delete a session."""

    async def require(self, session_id: str) -> ReportSession:
        """Get a session or raise NotFoundError."""
        session = await self.get(session_id)
        if session is None:
            raise NotFoundError(f"Report session {session_id} not found")
        return session

    async def get_document(self, session_id: str, index: int) -> Document:
        """Get one document of a session."""
        session = await self.require(session_id)
        documents = session.document_set.documents
        if not 0 <= index < len(documents):
            raise NotFoundError(f"Document {index} not found in session {session_id}")
        return documents[index]

    async def update_content(
        self,
        session_id: str,
        index: int,
        html: str,
    ) -> ReportSession:
        """Store edited HTML for one document verbatim."""
        session = await self.require(session_id)
        try:
            session.document_set.update_content(index, html)
        except IndexError as e:
            raise NotFoundError(str(e)) from e

        session.touch()
        logger.info(
            "Document content updated",
            session_id=session_id,
            index=index,
            content_length=len(html),
        )
        return await self.save(session)

    async def select(self, session_id: str, index: int) -> ReportSession:
        """Change the selected document."""
        session = await self.require(session_id)
        try:
            session.document_set.select(index)
        except IndexError as e:
            raise NotFoundError(str(e)) from e

        session.touch()
        return await self.save(session)

    async def replace_documents(
        self,
        session_id: str,
        documents: list[Document],
        report_format: ReportFormat,
        budget_check: BudgetCheck | None = None,
    ) -> ReportSession:
        """Swap in a new parse result; selection resets to the first document."""
        session = await self.require(session_id)
        session.document_set = DocumentSet(documents=documents)
        session.format = report_format
        session.budget_check = budget_check
        session.touch()
        logger.info(
            "Session documents replaced",
            session_id=session_id,
            titles=session.document_set.titles(),
        )
        return await self.save(session)


class MemorySessionStore(SessionStore):
    """
    In-memory session store.

    Note: Sessions are lost on restart.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, ReportSession] = {}
        logger.info("MemorySessionStore initialized")

    async def create(
        self,
        documents: list[Document],
        report_format: ReportFormat,
        filename: str | None = None,
        budget_check: BudgetCheck | None = None,
    ) -> ReportSession:
        """Create a session for a freshly parsed document set."""
        session = ReportSession(
            session_id=str(uuid.uuid4()),
            filename=filename,
            format=report_format,
            document_set=DocumentSet(documents=documents),
            budget_check=budget_check,
        )
        self._sessions[session.session_id] = session

        logger.info(
            "Session created",
            session_id=session.session_id,
            filename=filename,
            titles=session.document_set.titles(),
        )
        return session

    async def get(self, session_id: str) -> ReportSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    async def save(self, session: ReportSession) -> ReportSession:
        """Persist a modified session."""
        self._sessions[session.session_id] = session
        return session

    async def delete(self, session_id: str) -> bool:
        """Delete a session."""
        if session_id in self._sessions:
            del self._sessions[session_id]
            logger.info("Session deleted", session_id=session_id)
            return True
        return False
