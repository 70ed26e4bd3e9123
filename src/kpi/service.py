"""
KPI generation service -- orchestrates prompt -> LLM -> extract -> validate.

One model call per request, no retries: the result is either a fully
validated KPIResponse or an exception.
"""
from __future__ import annotations

from src.kpi.schema import GenerationRequest, KPIResponse
from src.kpi.prompt import build_prompt
from src.kpi.parser import parse_kpi_response
from src.kpi.llm_client import call_llm
from src.core.utils import timer
from src.core.logging import get_logger

logger = get_logger(__name__)


def generate_kpis(req: GenerationRequest, provider: str | None = None) -> KPIResponse:
    """End-to-end: request -> validated KPIs.

    Raises whatever the provider raises, or ``KPIParseError`` when the
    model output cannot be validated.
    """
    prompt = build_prompt(req.domain, req.columns, req.tier)

    with timer() as t:
        raw = call_llm(prompt, provider=provider)
    logger.info("Model output (%d ms):\n%s", t["elapsed_ms"], raw)

    result = parse_kpi_response(raw)
    logger.info("Validated %d KPIs for tier=%s", len(result.kpis), req.tier)
    return result
