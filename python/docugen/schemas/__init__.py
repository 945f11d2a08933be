"""Pydantic schemas for model replies."""

from .estimate import (
    BudgetLineItem,
    EstimateReport,
    PdfRenderOutput,
    ProjectBudget,
    ScopeArea,
    ScopeOfWork,
    SelectionItem,
    SelectionSchedule,
    WorkOrder,
)

__all__ = [
    # Scope of work
    "ScopeArea",
    "ScopeOfWork",
    # Budget
    "BudgetLineItem",
    "ProjectBudget",
    # Work orders and selections
    "WorkOrder",
    "SelectionItem",
    "SelectionSchedule",
    # Top level
    "EstimateReport",
    "PdfRenderOutput",
]
