"""Rendering the structured JSON estimate report into HTML documents."""

import json
import re
from typing import Any

from jinja2 import DictLoader, Environment
from pydantic import ValidationError

from docugen.documents.formatting import to_currency
from docugen.documents.models import FALLBACK_TITLE, Document
from docugen.errors import MalformedResponseError
from docugen.logging import get_logger
from docugen.schemas.estimate import (
    EstimateReport,
    ProjectBudget,
    ScopeOfWork,
    SelectionSchedule,
    WorkOrder,
)

logger = get_logger(__name__)

SCOPE_TITLE = "Section 1: Project Scope of Work"
BUDGET_TITLE = "Section 2: Project Budget"
WORK_ORDER_PREFIX = "Work Order: "
SELECTION_TITLE = "Section 4: Customer Selection Schedule"

_CODE_FENCE = re.compile(r"^\s*```(?:[a-zA-Z]+(?=\s))?\s*(.*?)\s*```\s*$", re.DOTALL)

# =============================================================================
# Templates
# =============================================================================

_CELL = 'style="padding: 8px; border: 1px solid #ddd;"'
_HEADER_CELL = (
    'style="padding: 8px; border: 1px solid #ddd; text-align: left; '
    'background-color: #f2f2f2;"'
)
_LABEL_CELL = 'colspan="4" style="padding: 8px; border: 1px solid #ddd; text-align:right;"'

SCOPE_OF_WORK_TEMPLATE = """\
<p><strong>Client:</strong> {{ scope.client_name or "N/A" }}</p>
<p><strong>Address:</strong> {{ scope.project_address or "N/A" }}</p>
<p><strong>Claim #:</strong> {{ scope.claim_number or "N/A" }}</p>
<h2>Overall Project Summary</h2>
<p>{{ scope.overall_summary or "" }}</p>
{% for area in scope.breakdown or [] %}
<h3>{{ area.area or "" }}</h3>
{% if area.demolition_tasks %}
<h4>Demolition</h4><ul>{% for task in area.demolition_tasks %}<li>{{ task }}</li>{% endfor %}</ul>
{% endif %}
{% if area.restoration_tasks %}
<h4>Restoration</h4><ul>{% for task in area.restoration_tasks %}<li>{{ task }}</li>{% endfor %}</ul>
{% endif %}
{% endfor %}
"""

PROJECT_BUDGET_TEMPLATE = (
    """\
<p>{{ budget.budget_source_info or "" }}</p>
<table border="1" style="width:100%; border-collapse: collapse;">
<thead>
<tr>
<th HDR>Category/Task</th>
<th HDR>Description</th>
<th HDR>Material Budget (RCV)</th>
<th HDR>Labor Budget (RCV)</th>
<th HDR>Total Budget (RCV)</th>
</tr>
</thead>
<tbody>
{% for item in budget.line_items or [] %}
<tr>
<td CELL>{{ item.category or "" }}</td>
<td CELL>{{ item.description or "" }}</td>
<td CELL>{{ item.material_budget | currency }}</td>
<td CELL>{{ item.labor_budget | currency }}</td>
<td CELL>{{ item.total_budget | currency }}</td>
</tr>
{% endfor %}
<tr><td LABEL><strong>Subtotal (Line Items)</strong></td><td CELL><strong>{{ budget.subtotal | currency }}</strong></td></tr>
<tr><td LABEL><strong>Material Sales Tax</strong></td><td CELL><strong>{{ budget.sales_tax | currency }}</strong></td></tr>
<tr><td LABEL><strong>Overhead & Profit</strong></td><td CELL><strong>{{ budget.overhead_and_profit | currency }}</strong></td></tr>
<tr><td LABEL><strong>TOTAL PROJECT BUDGET</strong></td><td CELL><strong>{{ budget.total_project_budget | currency }}</strong></td></tr>
</tbody>
</table>
"""
    .replace("HDR", _HEADER_CELL)
    .replace("LABEL", _LABEL_CELL)
    .replace("CELL", _CELL)
)

WORK_ORDER_TEMPLATE = """\
<p><strong>BUDGET (RCV):</strong> {{ order.budget | currency }}</p>
<p><strong>KEY MATERIALS & QUANTITIES:</strong> {{ order.key_materials or "N/A" }}</p>
<h3>INSTRUCTIONS:</h3>
<ol>{% for step in order.instructions or [] %}<li>{{ step }}</li>{% endfor %}</ol>
"""

SELECTION_SCHEDULE_TEMPLATE = (
    """\
<p>{{ schedule.introductory_note or "" }}</p>
<table border="1" style="width:100%; border-collapse: collapse;">
<thead>
<tr>
<th HDR>Selection Item</th>
<th HDR>Location(s)</th>
<th HDR>Total Quantity</th>
<th HDR>Material Allowance (per Unit)</th>
<th HDR>Total Material Budget (RCV)</th>
</tr>
</thead>
<tbody>
{% for row in schedule.items or [] %}
<tr>
<td CELL>{{ row.item or "" }}</td>
<td CELL>{{ row.locations or "" }}</td>
<td CELL>{{ row.quantity or "" }}</td>
<td CELL>{{ row.allowance_per_unit | currency }}</td>
<td CELL>{{ row.total_material_budget | currency }}</td>
</tr>
{% endfor %}
</tbody>
</table>
"""
    .replace("HDR", _HEADER_CELL)
    .replace("CELL", _CELL)
)

FALLBACK_TEMPLATE = """\
<p>The AI returned an unexpected response. Please see the raw data below:</p>
<pre>{{ raw }}</pre>
"""

_env = Environment(
    loader=DictLoader(
        {
            "scope_of_work.html": SCOPE_OF_WORK_TEMPLATE,
            "project_budget.html": PROJECT_BUDGET_TEMPLATE,
            "work_order.html": WORK_ORDER_TEMPLATE,
            "selection_schedule.html": SELECTION_SCHEDULE_TEMPLATE,
            "fallback.html": FALLBACK_TEMPLATE,
        }
    ),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
)
_env.filters["currency"] = to_currency


def _render(template_name: str, **context: Any) -> str:
    return _env.get_template(template_name).render(**context).strip()


# =============================================================================
# Section renderers
# =============================================================================


def render_scope_of_work(scope: ScopeOfWork) -> Document:
    return Document(title=SCOPE_TITLE, content=_render("scope_of_work.html", scope=scope))


def render_project_budget(budget: ProjectBudget) -> Document:
    return Document(
        title=BUDGET_TITLE,
        content=_render("project_budget.html", budget=budget),
    )


def render_work_order(order: WorkOrder) -> Document:
    # trade is required by the response schema; a missing one is not patched up
    return Document(
        title=f"{WORK_ORDER_PREFIX}{order.trade or ''}",
        content=_render("work_order.html", order=order),
    )


def render_selection_schedule(schedule: SelectionSchedule) -> Document:
    return Document(
        title=SELECTION_TITLE,
        content=_render("selection_schedule.html", schedule=schedule),
    )


def render_fallback(data: Any) -> Document:
    """Pretty-printed dump of a reply that matched none of the sections."""
    raw = json.dumps(data, indent=2, ensure_ascii=False)
    return Document(title=FALLBACK_TITLE, content=_render("fallback.html", raw=raw))


# =============================================================================
# Parsing
# =============================================================================


def strip_code_fence(payload: str) -> str:
    """Remove a ```json ... ``` wrapper some models add around JSON."""
    match = _CODE_FENCE.match(payload)
    return match.group(1) if match else payload


def load_json_payload(payload: str) -> Any:
    """
    Decode the model reply.

    Raises:
        MalformedResponseError: If the payload is not valid JSON
    """
    try:
        return json.loads(strip_code_fence(payload))
    except json.JSONDecodeError as e:
        logger.warning(
            "Model reply is not valid JSON",
            error=str(e),
            response_preview=payload[:200],
        )
        raise MalformedResponseError(
            f"The AI response was not valid JSON: {e.msg}",
            details={"line": e.lineno, "column": e.colno},
        ) from e


def validate_report(data: dict[str, Any]) -> EstimateReport:
    """
    Validate decoded JSON against the report schema.

    Raises:
        MalformedResponseError: If a present section has the wrong shape
    """
    try:
        return EstimateReport.model_validate(data)
    except ValidationError as e:
        logger.warning("Model reply does not match report schema", errors=e.error_count())
        raise MalformedResponseError(
            "The AI response did not match the report schema",
            details={"errors": e.errors(include_url=False, include_input=False, include_context=False)},
        ) from e


def assemble_documents(report: EstimateReport) -> list[Document]:
    """Render present sections in fixed order: scope, budget, work orders, selections."""
    documents: list[Document] = []

    if report.scope_of_work is not None:
        documents.append(render_scope_of_work(report.scope_of_work))

    if report.project_budget is not None:
        documents.append(render_project_budget(report.project_budget))

    for order in report.work_orders or []:
        documents.append(render_work_order(order))

    if report.selection_schedule is not None:
        documents.append(render_selection_schedule(report.selection_schedule))

    return documents


def build_json_documents(payload: str) -> tuple[list[Document], EstimateReport | None]:
    """
    Parse a JSON-mode reply into documents.

    Always yields at least one document: a reply with none of the known
    sections (or one that is not an object at all) becomes a fallback dump.

    Returns:
        Tuple of (documents, validated report or None when not an object)

    Raises:
        MalformedResponseError: If the reply is not JSON or fails validation
    """
    data = load_json_payload(payload)

    report: EstimateReport | None = None
    documents: list[Document] = []
    if isinstance(data, dict):
        report = validate_report(data)
        documents = assemble_documents(report)

    if not documents:
        logger.warning(
            "No report sections found, using fallback document",
            payload_type=type(data).__name__,
            has_sections=bool(report and report.has_sections()),
        )
        documents = [render_fallback(data)]

    return documents, report
