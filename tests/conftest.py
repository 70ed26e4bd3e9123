"""
Shared fixtures -- canned model output and a provider stub.
"""
import json

import pytest

import src.kpi.service as service


def make_kpi(n: int, tier: str = "Strategic") -> dict:
    return {
        "name": f"KPI {n}",
        "description": f"Description of KPI {n}",
        "tier": tier,
        "sql": f"SELECT {n} FROM orders;",
        "pandas": f"df['price'].sum() * {n}",
        "dax": f"KPI {n} = SUM('orders'[price]) * {n}",
    }


@pytest.fixture
def four_kpis() -> list[dict]:
    tiers = ["Strategic", "Tactical", "Operational", "Analytical"]
    return [make_kpi(i + 1, tiers[i]) for i in range(4)]


@pytest.fixture
def stub_llm(monkeypatch):
    """Replace the provider call with one returning *text*; records prompts."""
    prompts: list[str] = []

    def _install(text: str | None = None, exc: Exception | None = None):
        def fake_call_llm(prompt, provider=None):
            prompts.append(prompt)
            if exc is not None:
                raise exc
            return text

        monkeypatch.setattr(service, "call_llm", fake_call_llm)
        return prompts

    return _install


@pytest.fixture
def payload_text(four_kpis) -> str:
    return "Sure! Here you go:\n" + json.dumps({"kpis": four_kpis}) + "\nHope this helps."


@pytest.fixture
def kpi_factory():
    return make_kpi
