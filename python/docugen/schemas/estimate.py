"""Pydantic schemas for the estimate report JSON contract.

Validates the JSON-mode reply from the model. Every field is optional so
that a partially filled reply still renders. Wire names are camelCase
(``scopeOfWork``, ``lineItems``...).
"""

import math
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


def parse_amount(value: Any) -> Any:
    """
    Lenient amount parsing: ``"$1,234.50"`` -> 1234.5.

    Blank or unreadable strings ("TBD") and non-finite numbers (``NaN``,
    ``Infinity``) mean no value, so the cell renders as ``$0.00``.
    """
    if isinstance(value, str):
        cleaned = value.strip().replace("$", "").replace(",", "")
        try:
            value = float(cleaned)
        except ValueError:
            return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def drop_nulls(value: Any) -> Any:
    """``null`` entries in a task or instruction list are skipped."""
    if isinstance(value, list):
        return [item for item in value if item is not None]
    return value


Amount = Annotated[float | None, BeforeValidator(parse_amount)]
TextList = Annotated[list[str] | None, BeforeValidator(drop_nulls)]


class EstimateModel(BaseModel):
    """Base model: camelCase aliases, lax coercion, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )


# ============================================================================
# Scope of work
# ============================================================================


class ScopeArea(EstimateModel):
    """Scope broken down for a single area of the property."""

    area: str | None = Field(default=None, description="Room or area name")
    demolition_tasks: TextList = None
    restoration_tasks: TextList = None


class ScopeOfWork(EstimateModel):
    """Narrative project scope, broken down by location."""

    client_name: str | None = None
    project_address: str | None = None
    claim_number: str | None = None
    overall_summary: str | None = None
    breakdown: list[ScopeArea] | None = Field(
        default=None,
        description="Scope broken down by area",
    )


# ============================================================================
# Project budget
# ============================================================================


class BudgetLineItem(EstimateModel):
    """One category/task row of the consolidated RCV budget."""

    category: str | None = None
    description: str | None = None
    material_budget: Amount = None
    labor_budget: Amount = None
    total_budget: Amount = None


class ProjectBudget(EstimateModel):
    """Consolidated RCV budget summary."""

    budget_source_info: str | None = Field(
        default=None,
        description="Which figure was used as the definitive total budget and why",
    )
    line_items: list[BudgetLineItem] | None = None
    subtotal: Amount = None
    sales_tax: Amount = None
    overhead_and_profit: Amount = None
    total_project_budget: Amount = None


# ============================================================================
# Work orders and selections
# ============================================================================


class WorkOrder(EstimateModel):
    """Trade-scoped task list with its budget."""

    trade: str | None = Field(default=None, description="Trade name (e.g., Painting)")
    budget: Amount = None
    key_materials: str | None = None
    instructions: TextList = None


class SelectionItem(EstimateModel):
    """A client-choosable finish material with its allowance."""

    item: str | None = None
    locations: str | None = None
    quantity: str | None = None
    allowance_per_unit: Amount = None
    total_material_budget: Amount = None


class SelectionSchedule(EstimateModel):
    """Customer selection and material allowance schedule."""

    introductory_note: str | None = None
    items: list[SelectionItem] | None = None


class EstimateReport(EstimateModel):
    """Top-level JSON reply: four independently optional sections."""

    scope_of_work: ScopeOfWork | None = None
    project_budget: ProjectBudget | None = None
    work_orders: list[WorkOrder] | None = None
    selection_schedule: SelectionSchedule | None = None

    def has_sections(self) -> bool:
        """True if at least one top-level section is present."""
        return any(
            section is not None
            for section in (
                self.scope_of_work,
                self.project_budget,
                self.work_orders,
                self.selection_schedule,
            )
        )


class PdfRenderOutput(BaseModel):
    """JSON reply for branded PDF rendering."""

    pdf_content: str = Field(
        alias="pdfContent",
        description="The base64 encoded string of the generated PDF file",
    )

    model_config = ConfigDict(populate_by_name=True)
