"""
Client-side renderings of a KPI result list: the plain-text download and
the overview table.
"""
from __future__ import annotations

from typing import Any, Mapping, Sequence

import pandas as pd

EXPORT_FILENAME = "kpi-suggestions.txt"
EXPORT_MIME = "text/plain"

SNIPPET_FIELDS: dict[str, str] = {
    "sql": "SQL",
    "pandas": "Pandas",
    "dax": "DAX",
}

_DELIMITER = "---"


def _as_dict(kpi: Any) -> Mapping[str, Any]:
    return kpi.model_dump() if hasattr(kpi, "model_dump") else kpi


def render_kpi_text(kpi: Any) -> str:
    k = _as_dict(kpi)
    blocks = "".join(
        f"{label}:\n{k[field]}\n\n" for field, label in SNIPPET_FIELDS.items()
    )
    return f"{k['name']} ({k['tier']})\n{k['description']}\n\n{blocks}{_DELIMITER}\n\n"


def render_text_export(kpis: Sequence[Any]) -> str:
    """Concatenate every KPI, in order, into the downloadable text layout."""
    return "".join(render_kpi_text(k) for k in kpis)


def kpis_to_frame(kpis: Sequence[Any]) -> pd.DataFrame:
    """Name / tier / description overview, one row per KPI."""
    rows = [
        {"name": k["name"], "tier": k["tier"], "description": k["description"]}
        for k in map(_as_dict, kpis)
    ]
    return pd.DataFrame(rows, columns=["name", "tier", "description"])
