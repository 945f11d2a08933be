"""Pytest configuration and fixtures."""

import os

# Settings are read at import time by docugen.main
os.environ.setdefault("INTERNAL_API_TOKEN", "test-token")
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")
os.environ.setdefault("LOG_FORMAT", "console")
os.environ.setdefault("REDIS_URL", "")

import pytest  # noqa: E402

from docugen.sessions.store import MemorySessionStore  # noqa: E402

AUTH_HEADERS = {"X-Internal-Token": "test-token"}


@pytest.fixture
def session_store():
    return MemorySessionStore()


@pytest.fixture
def full_report() -> dict:
    """A JSON-mode reply with all four sections filled in."""
    return {
        "scopeOfWork": {
            "clientName": "Jane Smith",
            "projectAddress": "12 Lake Rd, Warsaw, IN",
            "claimNumber": "CLM-001",
            "overallSummary": "Water damage restoration in kitchen and hallway.",
            "breakdown": [
                {
                    "area": "Kitchen",
                    "demolitionTasks": ["Remove wet drywall"],
                    "restorationTasks": ["Install new drywall", "Paint walls"],
                },
                {
                    "area": "Hallway",
                    "demolitionTasks": [],
                    "restorationTasks": ["Replace baseboard"],
                },
            ],
        },
        "projectBudget": {
            "budgetSourceInfo": "Total taken from the PDF filename.",
            "lineItems": [
                {
                    "category": "Drywall",
                    "description": "Remove and replace drywall",
                    "materialBudget": 300,
                    "laborBudget": 500,
                    "totalBudget": 800,
                },
                {
                    "category": "Painting",
                    "description": "Prime and paint",
                    "materialBudget": 1234.5,
                    "laborBudget": 765.5,
                    "totalBudget": 2000,
                },
            ],
            "subtotal": 2800,
            "salesTax": 50,
            "overheadAndProfit": 650,
            "totalProjectBudget": 3500,
        },
        "workOrders": [
            {
                "trade": "Painting",
                "budget": 2000,
                "keyMaterials": "2 gal primer, 3 gal paint",
                "instructions": ["Prep walls", "Prime", "Paint two coats"],
            },
            {
                "trade": "Drywall",
                "budget": 800,
                "keyMaterials": "6 sheets 1/2in drywall",
                "instructions": ["Hang sheets", "Tape and mud"],
            },
        ],
        "selectionSchedule": {
            "introductoryNote": "Please choose finishes within these allowances.",
            "items": [
                {
                    "item": "Paint color",
                    "locations": "Kitchen, Hallway",
                    "quantity": "3 gal",
                    "allowancePerUnit": 45,
                    "totalMaterialBudget": 135,
                }
            ],
        },
    }
