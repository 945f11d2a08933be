"""Arithmetic consistency check for the model's project budget.

The prompt tells the model how the budget must add up, but nothing in the
reply guarantees it. This pass recomputes the totals and reports any gap.
It never changes the rendered documents.
"""

from pydantic import BaseModel, Field

from docugen.schemas.estimate import ProjectBudget

# One cent
TOLERANCE = 0.01


class BudgetCheck(BaseModel):
    """Result of recomputing a project budget."""

    consistent: bool
    line_item_sum: float
    expected_total: float
    reported_total: float | None = None
    difference: float | None = None
    issues: list[str] = Field(default_factory=list)


def _amount(value: float | None) -> float:
    return value if value is not None else 0.0


def check_budget(budget: ProjectBudget) -> BudgetCheck:
    """
    Verify that line items + sales tax + overhead & profit equal the total.

    Also compares the line-item sum with the reported subtotal. Missing
    amounts count as zero; a missing total is reported as an issue.
    """
    issues: list[str] = []
    line_items = budget.line_items or []

    line_item_sum = round(sum(_amount(item.total_budget) for item in line_items), 2)

    for index, item in enumerate(line_items, start=1):
        if item.total_budget is None:
            continue
        parts = _amount(item.material_budget) + _amount(item.labor_budget)
        if (item.material_budget is not None or item.labor_budget is not None) and abs(
            parts - item.total_budget
        ) > TOLERANCE:
            issues.append(
                f"Line item {index} ({item.category or 'uncategorized'}): "
                f"material + labor = {parts:.2f}, total = {item.total_budget:.2f}"
            )

    if budget.subtotal is not None and abs(line_item_sum - budget.subtotal) > TOLERANCE:
        issues.append(
            f"Subtotal {budget.subtotal:.2f} does not match line items {line_item_sum:.2f}"
        )

    expected_total = round(
        line_item_sum + _amount(budget.sales_tax) + _amount(budget.overhead_and_profit),
        2,
    )

    difference = None
    if budget.total_project_budget is None:
        issues.append("Total project budget is missing")
    else:
        difference = round(budget.total_project_budget - expected_total, 2)
        if abs(difference) > TOLERANCE:
            issues.append(
                f"Total {budget.total_project_budget:.2f} differs from computed "
                f"{expected_total:.2f} by {difference:.2f}"
            )

    return BudgetCheck(
        consistent=not issues,
        line_item_sum=line_item_sum,
        expected_total=expected_total,
        reported_total=budget.total_project_budget,
        difference=difference,
        issues=issues,
    )
