"""Splitting marker-delimited model replies into titled sections."""

import re

from docugen.documents.markdown import markdown_to_html
from docugen.documents.models import FALLBACK_TITLE, Document
from docugen.logging import get_logger

logger = get_logger(__name__)

# Zero-width: the marker line starts the next section instead of being consumed
SECTION_MARKER = re.compile(
    r"(?=^### (?:Section \d+:|Work Order:))",
    re.MULTILINE,
)


def split_segments(text: str) -> list[str]:
    """
    Partition text at section markers, dropping blank segments.

    Anything before the first marker (model chatter such as "Here is the
    report:") is not a section and is discarded.
    """
    parts = SECTION_MARKER.split(text)[1:]
    return [part for part in parts if part.strip()]


def segment_to_document(segment: str) -> Document:
    """First line is the title (minus ``### ``); the rest is the body."""
    title_line, _, body = segment.strip().partition("\n")
    title = title_line.removeprefix("### ").strip()
    return Document(title=title, content=markdown_to_html(body.strip()))


def split_sections(text: str) -> list[Document]:
    """
    Turn a marker-delimited reply into documents, in source order.

    Text with no markers becomes a single fallback document holding the
    whole reply. Blank text yields no documents.
    """
    segments = split_segments(text)

    if not segments:
        if not text.strip():
            return []
        logger.warning("No section markers found, using fallback document")
        return [Document(title=FALLBACK_TITLE, content=markdown_to_html(text))]

    documents = [segment_to_document(segment) for segment in segments]
    logger.debug("Sections split", count=len(documents))
    return documents
