"""Tests for the report HTTP API."""

import base64
import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from docugen.dependencies import get_gemini_client, get_report_pipeline, get_session_store
from docugen.gemini.schemas import GeminiResponse
from docugen.graphs.report import create_report_graph
from docugen.main import app
from docugen.schemas.estimate import PdfRenderOutput
from docugen.sessions.store import MemorySessionStore

from .conftest import AUTH_HEADERS

PDF_BYTES = b"%PDF-1.4 rendered"
PDF_UPLOAD = ("Estimate-$1000.00.pdf", b"%PDF-1.4 estimate", "application/pdf")


@pytest.fixture
def gemini(full_report):
    client = MagicMock()
    response = GeminiResponse(text=json.dumps(full_report), model="gemini-test")
    client.generate_json = AsyncMock(return_value=response)
    client.generate = AsyncMock(
        return_value=GeminiResponse(text="### Work Order: Painting\n- Prime", model="gemini-test")
    )
    client.generate_structured = AsyncMock(
        return_value=PdfRenderOutput(pdfContent=base64.b64encode(PDF_BYTES).decode())
    )
    return client


@pytest.fixture
def client(gemini):
    store = MemorySessionStore()
    app.dependency_overrides[get_gemini_client] = lambda: gemini
    app.dependency_overrides[get_session_store] = lambda: store
    app.dependency_overrides[get_report_pipeline] = lambda: create_report_graph(gemini)
    yield TestClient(app)
    app.dependency_overrides.clear()


def create_session(client, payload: str, report_format: str = "json") -> dict:
    response = client.post(
        "/v1/reports/parse",
        json={"payload": payload, "format": report_format},
        headers=AUTH_HEADERS,
    )
    assert response.status_code == 200
    return response.json()


class TestAuth:
    """Tests for the shared-secret check."""

    def test_missing_token(self, client):
        response = client.post("/v1/reports/parse", json={"payload": "{}"})

        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHORIZED"

    def test_wrong_token(self, client):
        response = client.post(
            "/v1/reports/parse",
            json={"payload": "{}"},
            headers={"X-Internal-Token": "nope"},
        )
        assert response.status_code == 401

    def test_bearer_token(self, client):
        response = client.post(
            "/v1/reports/parse",
            json={"payload": "{}"},
            headers={"Authorization": "Bearer test-token"},
        )
        assert response.status_code == 200


class TestCreateReport:
    """Tests for POST /v1/reports."""

    def test_json_upload(self, client, gemini):
        response = client.post(
            "/v1/reports",
            files={"file": PDF_UPLOAD},
            data={"format": "json"},
            headers=AUTH_HEADERS,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["format"] == "json"
        assert data["filename"] == "Estimate-$1000.00.pdf"
        assert data["selected_index"] == 0
        assert data["selected_title"] == "Section 1: Project Scope of Work"
        assert [doc["title"] for doc in data["documents"]][:2] == [
            "Section 1: Project Scope of Work",
            "Section 2: Project Budget",
        ]
        assert data["budget_check"]["consistent"] is True
        gemini.generate_json.assert_awaited_once()

    def test_markdown_upload(self, client, gemini):
        response = client.post(
            "/v1/reports",
            files={"file": PDF_UPLOAD},
            data={"format": "markdown"},
            headers=AUTH_HEADERS,
        )

        assert response.status_code == 200
        assert response.json()["documents"] == [
            {"title": "Work Order: Painting", "content": "<ul><li>Prime</li></ul>"}
        ]

    def test_non_pdf_rejected(self, client):
        response = client.post(
            "/v1/reports",
            files={"file": ("notes.txt", b"hello", "text/plain")},
            headers=AUTH_HEADERS,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "BAD_REQUEST"

    def test_malformed_reply(self, client, gemini):
        gemini.generate_json = AsyncMock(
            return_value=GeminiResponse(text="{not valid", model="gemini-test")
        )

        response = client.post(
            "/v1/reports",
            files={"file": PDF_UPLOAD},
            data={"format": "json"},
            headers=AUTH_HEADERS,
        )

        assert response.status_code == 502
        assert response.json()["code"] == "MALFORMED_RESPONSE"


class TestParseAndEdit:
    """Tests for parsing, editing and selecting documents."""

    def test_parse_json(self, client):
        data = create_session(client, "{}")

        assert [doc["title"] for doc in data["documents"]] == ["Generated Document"]

    def test_parse_malformed(self, client):
        response = client.post(
            "/v1/reports/parse",
            json={"payload": "{not valid", "format": "json"},
            headers=AUTH_HEADERS,
        )

        assert response.status_code == 502
        data = response.json()
        assert data["code"] == "MALFORMED_RESPONSE"
        assert data["details"]["line"] == 1

    def test_parse_blank_markdown(self, client):
        response = client.post(
            "/v1/reports/parse",
            json={"payload": "  ", "format": "markdown"},
            headers=AUTH_HEADERS,
        )

        assert response.status_code == 500
        assert response.json()["code"] == "EMPTY_RESULT"

    def test_edit_and_get(self, client):
        session = create_session(client, "### Section 1: Scope\ntext", "markdown")
        session_id = session["session_id"]

        response = client.put(
            f"/v1/reports/{session_id}/documents/0",
            json={"content": "<p>edited <b>by hand"},
            headers=AUTH_HEADERS,
        )
        assert response.status_code == 200
        assert response.json() == {"title": "Section 1: Scope", "content": "<p>edited <b>by hand"}

        fetched = client.get(f"/v1/reports/{session_id}", headers=AUTH_HEADERS).json()
        assert fetched["documents"][0]["content"] == "<p>edited <b>by hand"

    def test_select(self, client):
        session = create_session(
            client, "### Section 1: A\none\n### Section 2: B\ntwo", "markdown"
        )
        session_id = session["session_id"]

        response = client.post(
            f"/v1/reports/{session_id}/select",
            json={"index": 1},
            headers=AUTH_HEADERS,
        )
        assert response.status_code == 200
        assert response.json()["selected_index"] == 1
        assert response.json()["selected_title"] == "Section 2: B"

        response = client.post(
            f"/v1/reports/{session_id}/select",
            json={"index": 2},
            headers=AUTH_HEADERS,
        )
        assert response.status_code == 404

    def test_replace_payload(self, client):
        session = create_session(client, "### Section 1: A\none", "markdown")
        session_id = session["session_id"]

        response = client.put(
            f"/v1/reports/{session_id}/payload",
            json={"payload": '{"workOrders": [{"trade": "Roofing"}]}', "format": "json"},
            headers=AUTH_HEADERS,
        )

        assert response.status_code == 200
        assert [doc["title"] for doc in response.json()["documents"]] == [
            "Work Order: Roofing"
        ]

    def test_unknown_session(self, client):
        response = client.get("/v1/reports/missing", headers=AUTH_HEADERS)

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    def test_delete(self, client):
        session_id = create_session(client, "{}")["session_id"]

        response = client.delete(f"/v1/reports/{session_id}", headers=AUTH_HEADERS)

        assert response.json() == {"session_id": session_id, "deleted": True}
        assert client.get(f"/v1/reports/{session_id}", headers=AUTH_HEADERS).status_code == 404


class TestExports:
    """Tests for HTML and PDF export."""

    def test_export_html(self, client):
        session_id = create_session(client, "### Work Order: Painting\n- Prime", "markdown")[
            "session_id"
        ]

        response = client.get(
            f"/v1/reports/{session_id}/documents/0/export.html",
            headers=AUTH_HEADERS,
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert 'filename="Work_Order:_Painting.html"' in response.headers["content-disposition"]
        assert "<ul><li>Prime</li></ul>" in response.text

    def test_export_pdf(self, client, gemini):
        session_id = create_session(client, "### Work Order: Painting\n- Prime", "markdown")[
            "session_id"
        ]

        response = client.post(
            f"/v1/reports/{session_id}/documents/0/export.pdf",
            headers=AUTH_HEADERS,
        )

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert 'filename="Work_Order:_Painting.pdf"' in response.headers["content-disposition"]
        assert response.content == PDF_BYTES

        prompt = gemini.generate_structured.await_args.args[0]
        assert "<ul><li>Prime</li></ul>" in prompt
        assert "Lake City Restoration" in prompt

    def test_export_missing_document(self, client):
        session_id = create_session(client, "{}")["session_id"]

        response = client.get(
            f"/v1/reports/{session_id}/documents/3/export.html",
            headers=AUTH_HEADERS,
        )
        assert response.status_code == 404
