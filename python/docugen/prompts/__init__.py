"""Prompt templates for Gemini LLM interactions."""

from docugen.prompts.branded_pdf import (
    BRANDED_PDF_PROMPT,
    PDF_RENDER_SCHEMA,
    build_branded_pdf_prompt,
)
from docugen.prompts.estimate_report import (
    ESTIMATE_REPORT_SCHEMA,
    JSON_REPORT_SYSTEM_PROMPT,
    MARKED_REPORT_SYSTEM_PROMPT,
    build_estimate_report_prompt,
)

__all__ = [
    # Estimate report
    "JSON_REPORT_SYSTEM_PROMPT",
    "MARKED_REPORT_SYSTEM_PROMPT",
    "ESTIMATE_REPORT_SCHEMA",
    "build_estimate_report_prompt",
    # Branded PDF
    "BRANDED_PDF_PROMPT",
    "PDF_RENDER_SCHEMA",
    "build_branded_pdf_prompt",
]
