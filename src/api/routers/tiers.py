"""
GET /api/tiers -- tier catalog used by the UI selector.
"""
from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from src.kpi.tiers import load_tier_catalog

router = APIRouter()


class TierItem(BaseModel):
    value: str
    label: str
    summary: str
    definition: str
    audience: str | None = None


class TierCatalogResponse(BaseModel):
    default: str
    tiers: list[TierItem]


@router.get("/tiers", response_model=TierCatalogResponse)
def list_tiers() -> TierCatalogResponse:
    """Return the ``all`` option followed by the four tiers, in display order."""
    catalog = load_tier_catalog()
    return TierCatalogResponse(
        default=catalog.all.value,
        tiers=[
            TierItem(
                value=t.value,
                label=t.label,
                summary=t.summary,
                definition=t.definition,
                audience=t.audience,
            )
            for t in catalog.choices()
        ],
    )
