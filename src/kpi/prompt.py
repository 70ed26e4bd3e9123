"""
Prompt builder -- turns a GenerationRequest into the instruction text sent
to the text-generation service.
"""
from __future__ import annotations

from src.kpi.schema import response_schema_json
from src.kpi.tiers import ALL_TIERS, TierCatalog, load_tier_catalog


_PROMPT_TEMPLATE = """\
You are a KPI expert analyst. Based on the provided dataset information, suggest the most relevant KPIs for {tier_filter}.

Dataset Domain: {domain}
Available Columns: {columns}

KPI Tier Definitions:
{tier_definitions}

Requirements:
1. Generate 4-8 highly relevant KPIs based on the domain and available columns
2. Focus on {tier_filter}
3. Ensure each KPI can be calculated using the provided columns
4. Provide practical SQL, Pandas, and DAX implementations
5. Make sure the queries are realistic and use actual column names provided
6. Consider the business context and industry best practices

For each KPI, provide:
- Clear name and description
- Appropriate tier classification
- SQL query using the actual column names
- Pandas code using DataFrame operations
- DAX query for Power BI

Make the queries practical and executable with the given column structure.

You must return a single JSON object that strictly adheres to the following JSON schema:
{schema}
"""


def tier_filter_text(tier: str, catalog: TierCatalog | None = None) -> str:
    """Natural-language rendering of the tier selection."""
    catalog = catalog or load_tier_catalog()
    if tier == ALL_TIERS:
        values = catalog.values()
        listed = ", ".join(values[:-1]) + f", and {values[-1]}"
        return f"all tiers ({listed})"
    return f"{tier} tier"


def build_prompt(domain: str, columns: str, tier: str) -> str:
    """Assemble the full prompt; *domain* and *columns* are embedded verbatim."""
    catalog = load_tier_catalog()
    return _PROMPT_TEMPLATE.format(
        tier_filter=tier_filter_text(tier, catalog),
        domain=domain,
        columns=columns,
        tier_definitions="\n".join(t.prompt_line() for t in catalog.tiers),
        schema=response_schema_json(),
    )
