"""
Unit tests -- prompt builder.
"""
from src.kpi.prompt import build_prompt, tier_filter_text


def test_tier_filter_all():
    assert tier_filter_text("all") == "all tiers (Strategic, Tactical, Operational, and Analytical)"


def test_tier_filter_single():
    assert tier_filter_text("Tactical") == "Tactical tier"


def test_prompt_embeds_inputs_verbatim():
    prompt = build_prompt("SaaS {subscriptions}", "user_id, plan, mrr", "all")
    assert "Dataset Domain: SaaS {subscriptions}" in prompt
    assert "Available Columns: user_id, plan, mrr" in prompt


def test_prompt_repeats_tier_filter():
    prompt = build_prompt("retail", "a, b", "Operational")
    assert "suggest the most relevant KPIs for Operational tier." in prompt
    assert "2. Focus on Operational tier" in prompt


def test_prompt_defines_all_four_tiers():
    prompt = build_prompt("retail", "a", "all")
    assert "- Strategic: Long-term company goals and vision (CEO/C-suite level)" in prompt
    assert "- Tactical: Department-level performance metrics (Manager level)" in prompt
    assert "- Operational: Day-to-day tasks and individual contributions (Team/Individual level)" in prompt
    assert "- Analytical: Deep data analysis" in prompt


def test_prompt_lists_six_requirements():
    prompt = build_prompt("retail", "a", "all")
    for n in range(1, 7):
        assert f"\n{n}. " in prompt
    assert "\n7. " not in prompt


def test_prompt_ends_with_schema():
    prompt = build_prompt("retail", "a", "all")
    head, _, schema = prompt.partition("strictly adheres to the following JSON schema:\n")
    assert head
    assert '"KPIResult"' in schema
    assert '"dax"' in schema
