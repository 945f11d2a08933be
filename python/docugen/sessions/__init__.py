"""Report sessions: the document set a user is editing."""

from docugen.sessions.models import ReportSession
from docugen.sessions.store import MemorySessionStore, SessionStore

__all__ = ["MemorySessionStore", "ReportSession", "SessionStore"]
