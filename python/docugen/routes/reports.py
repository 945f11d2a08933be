"""Report generation and editing endpoints."""

from fastapi import APIRouter, File, Form, UploadFile
from pydantic import BaseModel, Field

from docugen.dependencies import ReportPipelineDep, SessionStoreDep, SettingsDep
from docugen.documents.budget import BudgetCheck
from docugen.documents.models import Document, ReportFormat
from docugen.documents.parser import parse_payload
from docugen.errors import BadRequestError
from docugen.graphs.report import raise_for_failure
from docugen.logging import bind_session, get_logger
from docugen.security import InternalAuth
from docugen.sessions.models import SessionResponse

logger = get_logger(__name__)

router = APIRouter()


# =============================================================================
# Request/Response Models
# =============================================================================


class ParsePayloadRequest(BaseModel):
    """A model reply obtained elsewhere, to be parsed without calling Gemini."""

    payload: str = Field(description="Raw model reply (JSON or marker-delimited text)")
    format: ReportFormat = Field(
        default=ReportFormat.JSON,
        description="Request mode that produced the payload",
    )
    filename: str | None = Field(default=None, description="Source PDF filename")


class UpdateContentRequest(BaseModel):
    """Edited HTML for one document."""

    content: str


class SelectDocumentRequest(BaseModel):
    """Index of the document to make active."""

    index: int = Field(ge=0)


class DeleteSessionResponse(BaseModel):
    session_id: str
    deleted: bool


# =============================================================================
# Endpoints
# =============================================================================


@router.post("", response_model=SessionResponse)
async def create_report(
    _auth: InternalAuth,
    settings: SettingsDep,
    pipeline: ReportPipelineDep,
    store: SessionStoreDep,
    file: UploadFile = File(...),
    format: ReportFormat | None = Form(default=None),
) -> SessionResponse:
    """
    Upload an insurance estimate PDF and generate its project documents.

    The PDF is sent to Gemini with the prompt for the requested response
    format (``json`` or ``markdown``, default from settings). The reply is
    parsed into an ordered document set held in a new session.

    Form parameters:
    - file: Estimate PDF. Its filename may carry the authoritative budget.
    - format: Response contract to request from the model

    Requires authentication (X-Internal-Token header).
    """
    if not file.filename:
        raise BadRequestError("Filename is required")

    if not file.filename.lower().endswith(".pdf"):
        raise BadRequestError("Only PDF files are supported")

    pdf_bytes = await file.read()
    if len(pdf_bytes) > settings.max_upload_size_bytes:
        raise BadRequestError(
            f"File too large. Maximum size is {settings.max_upload_size_mb}MB"
        )

    report_format = format or ReportFormat(settings.default_report_format)

    logger.info(
        "Report request",
        filename=file.filename,
        size=len(pdf_bytes),
        report_format=report_format.value,
    )

    result = await pipeline.run(pdf_bytes, file.filename, report_format)
    raise_for_failure(result)

    documents = [Document.model_validate(doc) for doc in result["documents"]]
    budget_check = (
        BudgetCheck.model_validate(result["budget_check"])
        if result.get("budget_check")
        else None
    )

    session = await store.create(
        documents,
        report_format,
        filename=file.filename,
        budget_check=budget_check,
    )
    bind_session(session.session_id)
    return SessionResponse.from_session(session)


@router.post("/parse", response_model=SessionResponse)
async def parse_report(
    request: ParsePayloadRequest,
    _auth: InternalAuth,
    store: SessionStoreDep,
) -> SessionResponse:
    """
    Parse an already generated model reply into a new session.

    Requires authentication (X-Internal-Token header).
    """
    parsed = parse_payload(request.payload, request.format)
    session = await store.create(
        parsed.documents,
        parsed.format,
        filename=request.filename,
        budget_check=parsed.budget_check,
    )
    return SessionResponse.from_session(session)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_report(
    session_id: str,
    _auth: InternalAuth,
    store: SessionStoreDep,
) -> SessionResponse:
    """Get a report session with all of its documents."""
    session = await store.require(session_id)
    return SessionResponse.from_session(session)


@router.put("/{session_id}/payload", response_model=SessionResponse)
async def replace_report(
    session_id: str,
    request: ParsePayloadRequest,
    _auth: InternalAuth,
    store: SessionStoreDep,
) -> SessionResponse:
    """
    Replace a session's documents with a fresh parse of a new reply.

    The old set is kept if parsing fails.
    """
    bind_session(session_id)
    parsed = parse_payload(request.payload, request.format)
    session = await store.replace_documents(
        session_id,
        parsed.documents,
        parsed.format,
        budget_check=parsed.budget_check,
    )
    return SessionResponse.from_session(session)


@router.put("/{session_id}/documents/{index}", response_model=Document)
async def update_document(
    session_id: str,
    index: int,
    request: UpdateContentRequest,
    _auth: InternalAuth,
    store: SessionStoreDep,
) -> Document:
    """Store edited HTML for one document as-is (no validation, no re-parse)."""
    bind_session(session_id)
    session = await store.update_content(session_id, index, request.content)
    return session.document_set.documents[index]


@router.post("/{session_id}/select", response_model=SessionResponse)
async def select_document(
    session_id: str,
    request: SelectDocumentRequest,
    _auth: InternalAuth,
    store: SessionStoreDep,
) -> SessionResponse:
    """Make one document the active tab."""
    session = await store.select(session_id, request.index)
    return SessionResponse.from_session(session)


@router.delete("/{session_id}", response_model=DeleteSessionResponse)
async def delete_report(
    session_id: str,
    _auth: InternalAuth,
    store: SessionStoreDep,
) -> DeleteSessionResponse:
    """Discard a session (e.g. when the user goes back to upload)."""
    deleted = await store.delete(session_id)
    return DeleteSessionResponse(session_id=session_id, deleted=deleted)
