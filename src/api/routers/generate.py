"""POST /api/generate-kpis -- the KPI generation endpoint."""
from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from src.kpi.schema import GenerationRequest, KPIResponse
from src.kpi.service import generate_kpis
from src.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter()

GENERATION_FAILED = "Failed to generate KPIs"


@router.post(
    "/generate-kpis",
    response_model=KPIResponse,
    responses={500: {"description": "Generation failed", "content": {"application/json": {"example": {"error": GENERATION_FAILED}}}}},
)
def generate_kpis_endpoint(req: GenerationRequest):
    """Prompt the model for KPIs and return them once they pass schema validation."""
    try:
        return generate_kpis(req)
    except Exception:
        logger.exception("Error generating KPIs")
        return JSONResponse(status_code=500, content={"error": GENERATION_FAILED})
