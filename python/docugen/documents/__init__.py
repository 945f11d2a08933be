"""Turning model replies into ordered, titled HTML documents."""

from docugen.documents.assembler import assemble_documents, build_json_documents
from docugen.documents.budget import BudgetCheck, check_budget
from docugen.documents.export import (
    decode_pdf_content,
    export_filename,
    render_standalone_html,
)
from docugen.documents.formatting import to_currency
from docugen.documents.markdown import markdown_to_html
from docugen.documents.models import (
    FALLBACK_TITLE,
    Document,
    DocumentSet,
    ReportFormat,
)
from docugen.documents.parser import (
    JsonResponse,
    MarkedTextResponse,
    ParsedReport,
    ResponseFormat,
    parse_payload,
    parse_response,
    wrap_payload,
)
from docugen.documents.sections import split_sections

__all__ = [
    "FALLBACK_TITLE",
    "BudgetCheck",
    "Document",
    "DocumentSet",
    "JsonResponse",
    "MarkedTextResponse",
    "ParsedReport",
    "ReportFormat",
    "ResponseFormat",
    "assemble_documents",
    "build_json_documents",
    "check_budget",
    "decode_pdf_content",
    "export_filename",
    "markdown_to_html",
    "parse_payload",
    "parse_response",
    "render_standalone_html",
    "split_sections",
    "to_currency",
    "wrap_payload",
]
