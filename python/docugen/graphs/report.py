"""LangGraph pipeline: estimate PDF -> Gemini reply -> parsed documents."""

from typing import Any, TypedDict

from langgraph.graph import END, StateGraph

from docugen.cache.redis import RedisCache
from docugen.documents.models import ReportFormat
from docugen.documents.parser import parse_payload
from docugen.errors import (
    APIError,
    BadRequestError,
    EmptyResultError,
    LLMError,
    MalformedResponseError,
)
from docugen.gemini.client import GeminiClient
from docugen.gemini.schemas import DocumentInput, GenerationConfig
from docugen.logging import get_logger
from docugen.prompts.estimate_report import (
    ESTIMATE_REPORT_SCHEMA,
    build_estimate_report_prompt,
)

logger = get_logger(__name__)

# Error codes carried through the graph state, mapped back to exceptions
ERROR_TYPES: dict[str, type[APIError]] = {
    "BAD_REQUEST": BadRequestError,
    "MALFORMED_RESPONSE": MalformedResponseError,
    "EMPTY_RESULT": EmptyResultError,
    "LLM_ERROR": LLMError,
}


class ReportState(TypedDict):
    """State for report pipeline."""

    # Input
    pdf_bytes: bytes
    filename: str
    report_format: str  # json, markdown

    # Intermediate
    raw_response: str | None
    from_cache: bool

    # Output
    documents: list[dict] | None
    budget_check: dict | None
    status: str
    error: str | None
    error_code: str | None


def raise_for_failure(result: dict[str, Any]) -> None:
    """Re-raise a failed pipeline run as the matching API error."""
    if result.get("status") != "failed":
        return
    error_type = ERROR_TYPES.get(result.get("error_code") or "", LLMError)
    raise error_type(result.get("error") or "Report generation failed")


class ReportPipeline:
    """
    Report generation pipeline using LangGraph.

    Two mutually exclusive generation modes feed one parse step:
    - json: Gemini JSON mode with a fixed response schema
    - markdown: free text delimited by ``### Section N:`` markers
    """

    def __init__(
        self,
        gemini_client: GeminiClient,
        cache: RedisCache | None = None,
    ) -> None:
        self.gemini = gemini_client
        self.cache = cache
        self.graph = self._build_graph()

    def _build_graph(self) -> StateGraph:
        """Build the report graph."""
        graph = StateGraph(ReportState)

        graph.add_node("route_request", self._route_request)
        graph.add_node("generate_json_report", self._generate_json_report)
        graph.add_node("generate_marked_report", self._generate_marked_report)
        graph.add_node("assemble_documents", self._assemble_documents)
        graph.add_node("handle_error", self._handle_error)

        graph.set_entry_point("route_request")

        graph.add_conditional_edges(
            "route_request",
            self._get_report_format,
            {
                ReportFormat.JSON.value: "generate_json_report",
                ReportFormat.MARKDOWN.value: "generate_marked_report",
                "error": "handle_error",
            },
        )

        for node in ("generate_json_report", "generate_marked_report"):
            graph.add_conditional_edges(
                node,
                self._check_generation,
                {
                    "assemble": "assemble_documents",
                    "error": "handle_error",
                },
            )

        graph.add_edge("assemble_documents", END)
        graph.add_edge("handle_error", END)

        return graph.compile()

    async def _route_request(self, state: ReportState) -> dict[str, Any]:
        """Validate input and prepare for routing."""
        logger.info(
            "Routing report request",
            filename=state["filename"],
            report_format=state["report_format"],
            size=len(state["pdf_bytes"]),
        )

        if not state["pdf_bytes"]:
            return {
                "status": "failed",
                "error": "The uploaded PDF is empty",
                "error_code": "BAD_REQUEST",
            }

        if state["report_format"] not in {f.value for f in ReportFormat}:
            return {
                "status": "failed",
                "error": f"Unsupported report format: {state['report_format']}",
                "error_code": "BAD_REQUEST",
            }

        return {"status": "processing"}

    def _get_report_format(self, state: ReportState) -> str:
        """Determine which generation mode to run."""
        if state.get("status") == "failed":
            return "error"
        return state["report_format"]

    def _check_generation(self, state: ReportState) -> str:
        if state.get("status") == "failed":
            return "error"
        return "assemble"

    def _cache_key(self, state: ReportState) -> str | None:
        if not self.cache:
            return None
        digest = RedisCache.hash_bytes(
            state["pdf_bytes"],
            state["filename"].encode(),
            state["report_format"].encode(),
        )
        return self.cache.report_key(digest)

    async def _generate(
        self,
        state: ReportState,
        json_mode: bool,
    ) -> dict[str, Any]:
        """Call Gemini (or the cache) for the raw reply."""
        cache_key = self._cache_key(state)
        if self.cache and cache_key:
            cached = await self.cache.get(cache_key)
            if isinstance(cached, str):
                logger.info("Using cached report reply", filename=state["filename"])
                return {"raw_response": cached, "from_cache": True}

        system_instruction, prompt = build_estimate_report_prompt(
            state["filename"],
            json_mode=json_mode,
        )
        document = DocumentInput(
            data=state["pdf_bytes"],
            mime_type="application/pdf",
            filename=state["filename"],
        )
        config = GenerationConfig(
            temperature=0.2,  # Budget figures must be reproducible
            system_instruction=system_instruction,
        )

        try:
            if json_mode:
                response = await self.gemini.generate_json(
                    prompt,
                    ESTIMATE_REPORT_SCHEMA,
                    document=document,
                    config=config,
                )
            else:
                response = await self.gemini.generate(
                    prompt,
                    document=document,
                    config=config,
                )
        except APIError as e:
            logger.error("Report generation failed", error=e.message, code=e.code)
            return {"status": "failed", "error": e.message, "error_code": e.code}

        if self.cache and cache_key:
            await self.cache.set(cache_key, response.text)

        return {"raw_response": response.text, "from_cache": False}

    async def _generate_json_report(self, state: ReportState) -> dict[str, Any]:
        """Generate the report as schema-constrained JSON."""
        logger.info("Generating JSON report", filename=state["filename"])
        return await self._generate(state, json_mode=True)

    async def _generate_marked_report(self, state: ReportState) -> dict[str, Any]:
        """Generate the report as marker-delimited Markdown."""
        logger.info("Generating marked-text report", filename=state["filename"])
        return await self._generate(state, json_mode=False)

    async def _assemble_documents(self, state: ReportState) -> dict[str, Any]:
        """Parse the reply into documents; parse errors abort the whole batch."""
        try:
            parsed = parse_payload(state["raw_response"] or "", state["report_format"])
        except APIError as e:
            if state.get("from_cache") and self.cache:
                key = self._cache_key(state)
                if key:
                    await self.cache.delete(key)
            return {"status": "failed", "error": e.message, "error_code": e.code}

        logger.info(
            "Report documents assembled",
            filename=state["filename"],
            documents=len(parsed.documents),
            from_cache=state.get("from_cache", False),
        )

        return {
            "documents": [doc.model_dump() for doc in parsed.documents],
            "budget_check": (
                parsed.budget_check.model_dump() if parsed.budget_check else None
            ),
            "status": "completed",
        }

    async def _handle_error(self, state: ReportState) -> dict[str, Any]:
        """Handle pipeline errors."""
        logger.error(
            "Report pipeline error",
            filename=state["filename"],
            error=state.get("error"),
            error_code=state.get("error_code"),
        )
        return {"status": "failed"}

    async def run(
        self,
        pdf_bytes: bytes,
        filename: str,
        report_format: ReportFormat | str = ReportFormat.JSON,
    ) -> dict[str, Any]:
        """Generate and parse a report for one estimate PDF."""
        state: ReportState = {
            "pdf_bytes": pdf_bytes,
            "filename": filename,
            "report_format": (
                report_format.value
                if isinstance(report_format, ReportFormat)
                else report_format
            ),
            "raw_response": None,
            "from_cache": False,
            "documents": None,
            "budget_check": None,
            "status": "pending",
            "error": None,
            "error_code": None,
        }
        return await self.graph.ainvoke(state)


def create_report_graph(
    gemini_client: GeminiClient,
    cache: RedisCache | None = None,
) -> ReportPipeline:
    """Factory function to create a report pipeline."""
    return ReportPipeline(gemini_client, cache)
