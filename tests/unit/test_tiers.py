"""
Unit tests -- tier catalog loading and resolution.
"""
import typing

import pytest

from src.kpi.schema import Tier
from src.kpi.tiers import load_tier_catalog, parse_catalog, TierCatalog, TierDefinition


def test_loads_without_error():
    catalog = load_tier_catalog()
    assert isinstance(catalog, TierCatalog)
    assert catalog.version == 1


def test_four_tiers_in_order():
    assert load_tier_catalog().values() == ["Strategic", "Tactical", "Operational", "Analytical"]


def test_catalog_matches_kpi_tier_literal():
    assert set(load_tier_catalog().values()) == set(typing.get_args(Tier))


def test_choices_start_with_all():
    choices = load_tier_catalog().choices()
    assert [c.value for c in choices] == ["all", "Strategic", "Tactical", "Operational", "Analytical"]
    assert choices[0].label == "All Tiers"


@pytest.mark.parametrize("raw,expected", [
    ("all", "all"),
    ("ALL", "all"),
    ("strategic", "Strategic"),
    (" Tactical ", "Tactical"),
    ("operational", "Operational"),
    ("Analytical", "Analytical"),
])
def test_resolve_is_case_insensitive(raw, expected):
    assert load_tier_catalog().resolve(raw) == expected


def test_resolve_unknown_returns_none():
    assert load_tier_catalog().resolve("executive") is None


def test_prompt_line_with_audience():
    t = TierDefinition(value="Strategic", label="Strategic", summary="", definition="Long-term goals", audience="CEO")
    assert t.prompt_line() == "- Strategic: Long-term goals (CEO)"


def test_prompt_line_without_audience():
    t = TierDefinition(value="Analytical", label="Analytical", summary="", definition="Trends")
    assert t.prompt_line() == "- Analytical: Trends"


def test_parse_catalog_rejects_empty():
    with pytest.raises(ValueError, match="no tiers"):
        parse_catalog({"version": 1, "tiers": []})
