"""API routes for the report service."""

from docugen.routes import exports, health, reports

__all__ = [
    "exports",
    "health",
    "reports",
]
