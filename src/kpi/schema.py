"""
KPI records and the generation request -- the contract between the API,
the model output parser and the UI.
"""
from __future__ import annotations

import json
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from src.kpi.tiers import load_tier_catalog

Tier = Literal["Strategic", "Tactical", "Operational", "Analytical"]


class KPIResult(BaseModel):
    """One suggested KPI with three equivalent implementations."""

    name: str = Field(..., description="Name of the KPI")
    description: str = Field(..., description="Brief description of what this KPI measures")
    tier: Tier = Field(..., description="KPI tier level")
    sql: str = Field(..., description="SQL query to calculate this KPI")
    pandas: str = Field(..., description="Pandas code to calculate this KPI")
    dax: str = Field(..., description="DAX query for Power BI to calculate this KPI")


class KPIResponse(BaseModel):
    kpis: list[KPIResult]


class GenerationRequest(BaseModel):
    domain: str = Field(..., description="Business context of the dataset")
    columns: str = Field(..., description="Comma-separated column names")
    tier: str = Field("all", description="all | Strategic | Tactical | Operational | Analytical")

    @field_validator("tier")
    @classmethod
    def _canonical_tier(cls, value: str) -> str:
        resolved = load_tier_catalog().resolve(value)
        if resolved is None:
            allowed = ", ".join(t.value for t in load_tier_catalog().choices())
            raise ValueError(f"Unknown tier '{value}'. Choose from: {allowed}")
        return resolved


def response_schema_json() -> str:
    """JSON schema of ``KPIResponse``, pretty-printed for the prompt."""
    return json.dumps(KPIResponse.model_json_schema(), indent=2)
