"""Tests for the in-memory session store."""

import pytest

from docugen.documents.models import Document, ReportFormat
from docugen.errors import NotFoundError


def make_documents() -> list[Document]:
    return [
        Document(title="Section 1: Project Scope of Work", content="<p>scope</p>"),
        Document(title="Work Order: Painting", content="<p>paint</p>"),
    ]


class TestMemorySessionStore:
    """Tests for MemorySessionStore."""

    @pytest.mark.asyncio
    async def test_create_and_get(self, session_store):
        session = await session_store.create(
            make_documents(), ReportFormat.JSON, filename="estimate.pdf"
        )

        fetched = await session_store.get(session.session_id)
        assert fetched is not None
        assert fetched.document_set.titles() == [
            "Section 1: Project Scope of Work",
            "Work Order: Painting",
        ]
        assert fetched.document_set.selected_index == 0
        assert fetched.filename == "estimate.pdf"

    @pytest.mark.asyncio
    async def test_update_content_is_verbatim(self, session_store):
        session = await session_store.create(make_documents(), ReportFormat.JSON)

        await session_store.update_content(session.session_id, 1, "<p>unclosed <b>tag")

        document = await session_store.get_document(session.session_id, 1)
        assert document.content == "<p>unclosed <b>tag"
        assert document.title == "Work Order: Painting"

    @pytest.mark.asyncio
    async def test_select(self, session_store):
        session = await session_store.create(make_documents(), ReportFormat.JSON)

        updated = await session_store.select(session.session_id, 1)

        assert updated.document_set.selected_index == 1
        assert updated.document_set.selected.title == "Work Order: Painting"

    @pytest.mark.asyncio
    async def test_index_out_of_range(self, session_store):
        session = await session_store.create(make_documents(), ReportFormat.JSON)

        with pytest.raises(NotFoundError):
            await session_store.select(session.session_id, 2)
        with pytest.raises(NotFoundError):
            await session_store.update_content(session.session_id, -1, "<p></p>")
        with pytest.raises(NotFoundError):
            await session_store.get_document(session.session_id, 5)

    @pytest.mark.asyncio
    async def test_replace_documents_resets_selection(self, session_store):
        session = await session_store.create(make_documents(), ReportFormat.JSON)
        await session_store.select(session.session_id, 1)

        replaced = await session_store.replace_documents(
            session.session_id,
            [Document(title="Generated Document", content="<p>x</p>")],
            ReportFormat.MARKDOWN,
        )

        assert replaced.document_set.selected_index == 0
        assert replaced.document_set.titles() == ["Generated Document"]
        assert replaced.format == ReportFormat.MARKDOWN

    @pytest.mark.asyncio
    async def test_unknown_session(self, session_store):
        assert await session_store.get("missing") is None
        with pytest.raises(NotFoundError):
            await session_store.require("missing")

    @pytest.mark.asyncio
    async def test_delete(self, session_store):
        session = await session_store.create(make_documents(), ReportFormat.JSON)

        assert await session_store.delete(session.session_id) is True
        assert await session_store.delete(session.session_id) is False
        assert await session_store.get(session.session_id) is None
