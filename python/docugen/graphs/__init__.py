"""LangGraph pipelines for report generation."""

from docugen.graphs.report import ReportPipeline, create_report_graph, raise_for_failure

__all__ = [
    "ReportPipeline",
    "create_report_graph",
    "raise_for_failure",
]
