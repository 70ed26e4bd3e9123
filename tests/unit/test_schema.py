"""
Unit tests -- KPI record / request models.
"""
import json

import pytest
from pydantic import ValidationError

from src.kpi.schema import GenerationRequest, KPIResponse, KPIResult, response_schema_json


def test_kpi_result_accepts_valid_record(kpi_factory):
    kpi = KPIResult(**kpi_factory(1))
    assert kpi.name == "KPI 1"
    assert kpi.tier == "Strategic"


def test_kpi_result_rejects_unknown_tier(kpi_factory):
    with pytest.raises(ValidationError):
        KPIResult(**kpi_factory(1, tier="Executive"))


def test_kpi_result_tier_is_case_sensitive(kpi_factory):
    with pytest.raises(ValidationError):
        KPIResult(**kpi_factory(1, tier="strategic"))


def test_kpi_result_requires_every_snippet(kpi_factory):
    data = kpi_factory(1)
    del data["dax"]
    with pytest.raises(ValidationError):
        KPIResult(**data)


def test_response_preserves_order(kpi_factory):
    resp = KPIResponse(kpis=[kpi_factory(i) for i in range(3)])
    assert [k.name for k in resp.kpis] == ["KPI 0", "KPI 1", "KPI 2"]


def test_request_defaults_to_all():
    req = GenerationRequest(domain="retail", columns="a, b")
    assert req.tier == "all"


def test_request_normalises_tier():
    req = GenerationRequest(domain="retail", columns="a, b", tier="operational")
    assert req.tier == "Operational"


def test_request_rejects_unknown_tier():
    with pytest.raises(ValidationError, match="Unknown tier"):
        GenerationRequest(domain="retail", columns="a", tier="executive")


def test_schema_json_describes_all_fields():
    schema = json.loads(response_schema_json())
    props = schema["$defs"]["KPIResult"]["properties"]
    assert set(props) == {"name", "description", "tier", "sql", "pandas", "dax"}
    assert props["tier"]["enum"] == ["Strategic", "Tactical", "Operational", "Analytical"]
    assert "kpis" in schema["required"]
