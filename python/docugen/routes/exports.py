"""Document export endpoints: standalone HTML and branded PDF."""

from urllib.parse import quote

from fastapi import APIRouter
from fastapi.responses import HTMLResponse, Response

from docugen.dependencies import GeminiClientDep, SessionStoreDep, SettingsDep
from docugen.documents.export import (
    decode_pdf_content,
    export_filename,
    render_standalone_html,
)
from docugen.gemini.schemas import GenerationConfig
from docugen.logging import bind_session, get_logger
from docugen.prompts.branded_pdf import PDF_RENDER_SCHEMA, build_branded_pdf_prompt
from docugen.schemas.estimate import PdfRenderOutput
from docugen.security import InternalAuth

logger = get_logger(__name__)

router = APIRouter()


def content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback and an RFC 5987 UTF-8 name."""
    fallback = filename.encode("ascii", "replace").decode().replace('"', "'")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


@router.get("/{session_id}/documents/{index}/export.html", response_class=HTMLResponse)
async def export_html(
    session_id: str,
    index: int,
    _auth: InternalAuth,
    store: SessionStoreDep,
) -> HTMLResponse:
    """
    Download one document as a standalone HTML page.

    Uses the current (possibly edited) content.
    """
    document = await store.get_document(session_id, index)
    filename = export_filename(document.title, "html")

    logger.info("HTML export", session_id=session_id, index=index, filename=filename)

    return HTMLResponse(
        content=render_standalone_html(document),
        headers={"Content-Disposition": content_disposition(filename)},
    )


@router.post("/{session_id}/documents/{index}/export.pdf")
async def export_pdf(
    session_id: str,
    index: int,
    _auth: InternalAuth,
    settings: SettingsDep,
    store: SessionStoreDep,
    gemini: GeminiClientDep,
) -> Response:
    """
    Render one document as a branded PDF via Gemini and download it.

    The model receives the edited HTML plus the configured company branding
    and returns the PDF base64 encoded.
    """
    bind_session(session_id)
    document = await store.get_document(session_id, index)
    filename = export_filename(document.title, "pdf")

    logger.info("PDF export", session_id=session_id, index=index, filename=filename)

    prompt = build_branded_pdf_prompt(document.title, document.content, settings)
    output = await gemini.generate_structured(
        prompt,
        PdfRenderOutput,
        PDF_RENDER_SCHEMA,
        config=GenerationConfig(temperature=0.1, max_output_tokens=65536),
    )
    pdf_bytes = decode_pdf_content(output.pdf_content)

    logger.info("PDF export ready", filename=filename, size=len(pdf_bytes))

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": content_disposition(filename)},
    )
