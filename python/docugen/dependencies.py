"""Shared FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends

from docugen.cache.redis import RedisCache, get_redis_cache
from docugen.config import Settings, get_settings
from docugen.gemini.client import GeminiClient
from docugen.graphs.report import ReportPipeline, create_report_graph
from docugen.sessions.store import MemorySessionStore, SessionStore

# Singletons for clients (lazy initialized)
_gemini_client: GeminiClient | None = None
_session_store: SessionStore | None = None


def get_gemini_client(settings: Settings = Depends(get_settings)) -> GeminiClient:
    """Get the Gemini client singleton."""
    global _gemini_client
    if _gemini_client is None:
        _gemini_client = GeminiClient(settings)
    return _gemini_client


def get_session_store() -> SessionStore:
    """Get the session store singleton."""
    global _session_store
    if _session_store is None:
        _session_store = MemorySessionStore()
    return _session_store


def get_cache() -> RedisCache | None:
    """Get the Redis cache, or None when caching is disabled."""
    return get_redis_cache()


def get_report_pipeline(
    gemini: GeminiClient = Depends(get_gemini_client),
    cache: RedisCache | None = Depends(get_cache),
) -> ReportPipeline:
    """Create a report pipeline bound to the shared clients."""
    return create_report_graph(gemini, cache)


# Type aliases for cleaner dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]
GeminiClientDep = Annotated[GeminiClient, Depends(get_gemini_client)]
SessionStoreDep = Annotated[SessionStore, Depends(get_session_store)]
ReportPipelineDep = Annotated[ReportPipeline, Depends(get_report_pipeline)]
