"""Prompt templates for turning an insurance estimate PDF into project documents."""

VALIDATION_RULES = """**Validation Rules:**
1. **Total Project Budget:** The definitive budget is the dollar amount in the PDF filename (e.g., "Estimate-$12345.67.pdf"). If not present, use the final "Replacement Cost Value" (RCV) from the PDF's summary. You must state which source you used.
2. **Budget Calculation:** For budget line items, use 80% of the original RCV as the direct cost for materials and labor. The remaining 20% should be accounted for in the overhead and profit calculation so that the final total matches the definitive budget.
3. **Plain Language:** Translate insurance jargon (e.g., "R&R," "DET") into clear, actionable tasks (e.g., "Remove and replace," "Detach and reset")."""

JSON_REPORT_SYSTEM_PROMPT = f"""You are an AI assistant specialized in construction project management. Analyze the provided property insurance claim estimate PDF and transform it into a structured JSON object.

{VALIDATION_RULES}
   State the budget source in the 'budgetSourceInfo' field.

**Task:**
Analyze the entire document and generate a single, valid JSON object that adheres to the provided schema. The data must be internally consistent. For example, the total of the work order budgets should align with the main project budget.
"""

MARKED_REPORT_SYSTEM_PROMPT = f"""You are an AI assistant specialized in construction project management. Analyze the provided property insurance claim estimate PDF and produce a set of project documents.

{VALIDATION_RULES}

**Output format:**
Write Markdown. Start every document on its own line with one of these exact headers and nothing else on that line:
- `### Section 1: Project Scope of Work`
- `### Section 2: Project Budget`
- `### Work Order: <Trade>` (one per trade, e.g. `### Work Order: Painting`)
- `### Section 4: Customer Selection Schedule`

Inside each document:
- Use `**bold**` labels, `-` bullet lists and `1.` numbered lists.
- Write every table directly as an HTML `<table>` element (no Markdown tables).
- In the budget, show the Subtotal, Material Sales Tax, Overhead & Profit and TOTAL PROJECT BUDGET rows.
- Each work order starts with `**BUDGET (RCV):** $<amount>`, then `**KEY MATERIALS & QUANTITIES:**`, then `**INSTRUCTIONS:**` followed by a numbered list.

Do not write anything before the first header.
"""

USER_PROMPT = """PDF Filename for budget validation: "{filename}". Please analyze the attached PDF and generate the required {output} based on your instructions."""

_STRING = {"type": "STRING"}
_NUMBER = {"type": "NUMBER"}
_STRING_LIST = {"type": "ARRAY", "items": _STRING}

# Gemini response schema (OpenAPI subset) for JSON mode
ESTIMATE_REPORT_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "scopeOfWork": {
            "type": "OBJECT",
            "description": "Narrative project scope, broken down by location.",
            "properties": {
                "clientName": _STRING,
                "projectAddress": _STRING,
                "claimNumber": _STRING,
                "overallSummary": _STRING,
                "breakdown": {
                    "type": "ARRAY",
                    "description": "Scope broken down by area.",
                    "items": {
                        "type": "OBJECT",
                        "properties": {
                            "area": _STRING,
                            "demolitionTasks": _STRING_LIST,
                            "restorationTasks": _STRING_LIST,
                        },
                        "required": ["area"],
                    },
                },
            },
        },
        "projectBudget": {
            "type": "OBJECT",
            "description": "Consolidated RCV budget summary.",
            "properties": {
                "budgetSourceInfo": _STRING,
                "lineItems": {
                    "type": "ARRAY",
                    "items": {
                        "type": "OBJECT",
                        "properties": {
                            "category": _STRING,
                            "description": _STRING,
                            "materialBudget": _NUMBER,
                            "laborBudget": _NUMBER,
                            "totalBudget": _NUMBER,
                        },
                    },
                },
                "subtotal": _NUMBER,
                "salesTax": _NUMBER,
                "totalProjectBudget": _NUMBER,
                "overheadAndProfit": _NUMBER,
            },
        },
        "workOrders": {
            "type": "ARRAY",
            "description": "Work orders for each trade.",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "trade": _STRING,
                    "budget": _NUMBER,
                    "keyMaterials": _STRING,
                    "instructions": _STRING_LIST,
                },
                "required": ["trade"],
            },
        },
        "selectionSchedule": {
            "type": "OBJECT",
            "description": "Customer selection and material allowance schedule.",
            "properties": {
                "introductoryNote": _STRING,
                "items": {
                    "type": "ARRAY",
                    "items": {
                        "type": "OBJECT",
                        "properties": {
                            "item": _STRING,
                            "locations": _STRING,
                            "quantity": _STRING,
                            "allowancePerUnit": _NUMBER,
                            "totalMaterialBudget": _NUMBER,
                        },
                    },
                },
            },
        },
    },
}


def build_estimate_report_prompt(filename: str, json_mode: bool = True) -> tuple[str, str]:
    """
    Build the system instruction and user prompt for an estimate PDF.

    The filename is passed through because it may carry the authoritative
    budget (e.g. "Estimate-$12345.67.pdf").

    Args:
        filename: Original PDF filename
        json_mode: JSON-schema output if True, marker-delimited Markdown otherwise

    Returns:
        Tuple of (system_instruction, user_prompt)
    """
    if json_mode:
        return JSON_REPORT_SYSTEM_PROMPT, USER_PROMPT.format(
            filename=filename,
            output="JSON output",
        )
    return MARKED_REPORT_SYSTEM_PROMPT, USER_PROMPT.format(
        filename=filename,
        output="documents",
    )
