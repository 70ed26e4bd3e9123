"""
Loads and caches the KPI tier catalog (``kpi_catalog/tiers.yml``).

The catalog is the single source of truth for:
  - the tier values a KPI may carry
  - the tier definitions quoted in the generation prompt
  - the labels and summaries shown by the tier selector
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from functools import lru_cache
from typing import Any

import yaml

_CATALOG_PATH = Path(__file__).resolve().parents[2] / "kpi_catalog" / "tiers.yml"

ALL_TIERS = "all"


@dataclass(frozen=True)
class TierDefinition:
    value: str
    label: str
    summary: str
    definition: str = ""
    audience: str | None = None

    def prompt_line(self) -> str:
        """One bullet of the prompt's tier definitions block."""
        text = f"- {self.value}: {self.definition}"
        if self.audience:
            text += f" ({self.audience})"
        return text


@dataclass
class TierCatalog:
    version: int
    all: TierDefinition
    tiers: list[TierDefinition]

    def values(self) -> list[str]:
        """The four KPI tier values, in catalog order."""
        return [t.value for t in self.tiers]

    def choices(self) -> list[TierDefinition]:
        """Selector options: the ``all`` pseudo-tier followed by each tier."""
        return [self.all, *self.tiers]

    def resolve(self, value: str) -> str | None:
        """Map *value* (any casing, surrounding blanks ignored) to its canonical form."""
        wanted = value.strip().lower()
        for option in self.choices():
            if option.value.lower() == wanted:
                return option.value
        return None


def _parse_tier(raw: dict[str, Any]) -> TierDefinition:
    return TierDefinition(
        value=raw["value"],
        label=raw.get("label", raw["value"]),
        summary=raw.get("summary", ""),
        definition=raw.get("definition", ""),
        audience=raw.get("audience"),
    )


def parse_catalog(raw: dict[str, Any]) -> TierCatalog:
    tiers = [_parse_tier(t) for t in raw.get("tiers", [])]
    if not tiers:
        raise ValueError("Tier catalog defines no tiers")
    return TierCatalog(
        version=int(raw.get("version", 1)),
        all=_parse_tier(raw.get("all", {"value": ALL_TIERS, "label": "All Tiers"})),
        tiers=tiers,
    )


@lru_cache(maxsize=1)
def load_tier_catalog(path: str | None = None) -> TierCatalog:
    """Read the YAML catalog once per process."""
    catalog_path = Path(path) if path else _CATALOG_PATH
    with open(catalog_path, encoding="utf-8") as fh:
        raw = yaml.safe_load(fh)
    return parse_catalog(raw)
