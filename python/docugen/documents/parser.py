"""Top-level dispatch from a model reply to its document pipeline."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from docugen.documents.assembler import build_json_documents
from docugen.documents.budget import BudgetCheck, check_budget
from docugen.documents.models import Document, ReportFormat
from docugen.documents.sections import split_sections
from docugen.errors import EmptyResultError
from docugen.logging import get_logger

logger = get_logger(__name__)


class JsonResponse(BaseModel):
    """Reply produced in JSON-schema mode."""

    kind: Literal[ReportFormat.JSON] = ReportFormat.JSON
    payload: str


class MarkedTextResponse(BaseModel):
    """Reply produced in free-text mode with ``###`` section markers."""

    kind: Literal[ReportFormat.MARKDOWN] = ReportFormat.MARKDOWN
    payload: str


ResponseFormat = Annotated[
    JsonResponse | MarkedTextResponse,
    Field(discriminator="kind"),
]


class ParsedReport(BaseModel):
    """Documents parsed from one reply, plus the budget check in JSON mode."""

    format: ReportFormat
    documents: list[Document]
    budget_check: BudgetCheck | None = None


def wrap_payload(payload: str, report_format: ReportFormat | str) -> ResponseFormat:
    """Tag a raw reply with the request mode that produced it."""
    if ReportFormat(report_format) == ReportFormat.JSON:
        return JsonResponse(payload=payload)
    return MarkedTextResponse(payload=payload)


def parse_response(response: ResponseFormat) -> ParsedReport:
    """
    Parse a tagged reply into an ordered, non-empty document list.

    Raises:
        MalformedResponseError: If a JSON-mode reply cannot be decoded
        EmptyResultError: If no documents were produced
    """
    budget_check = None

    if isinstance(response, JsonResponse):
        documents, report = build_json_documents(response.payload)
        if report is not None and report.project_budget is not None:
            budget_check = check_budget(report.project_budget)
            if not budget_check.consistent:
                logger.warning(
                    "Project budget does not add up",
                    issues=budget_check.issues,
                    difference=budget_check.difference,
                )
    else:
        documents = split_sections(response.payload)

    if not documents:
        logger.error("Reply produced no documents", format=response.kind)
        raise EmptyResultError()

    logger.info(
        "Reply parsed",
        format=response.kind,
        documents=len(documents),
        titles=[doc.title for doc in documents],
    )

    return ParsedReport(
        format=response.kind,
        documents=documents,
        budget_check=budget_check,
    )


def parse_payload(payload: str, report_format: ReportFormat | str) -> ParsedReport:
    """Convenience wrapper: tag then parse."""
    return parse_response(wrap_payload(payload, report_format))
