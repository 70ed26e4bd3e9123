"""
UI-side state and HTTP client for the KPI generator.

Kept free of Streamlit calls so the generate action, its input guard and
the clipboard payload can be exercised without a browser.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, NamedTuple

import httpx

from src.core.config import get_settings
from src.core.logging import get_logger
from src.kpi.tiers import ALL_TIERS, load_tier_catalog

logger = get_logger(__name__)

GENERATE_PATH = "/api/generate-kpis"
TIERS_PATH = "/api/tiers"


class KPIClientError(RuntimeError):
    """The generation call failed; the cause is not shown to the user."""


class Notice(NamedTuple):
    kind: str  # success | error
    title: str
    message: str


MISSING_INFO = Notice(
    "error",
    "Missing Information",
    "Please provide both domain description and column headings.",
)
GENERATION_FAILED = Notice(
    "error",
    "Generation Failed",
    "Failed to generate KPIs. Please try again.",
)


@dataclass
class ViewState:
    domain: str = ""
    columns: str = ""
    selected_tier: str = ALL_TIERS
    results: list[dict[str, Any]] = field(default_factory=list)
    loading: bool = False

    def can_submit(self) -> bool:
        return bool(self.domain.strip()) and bool(self.columns.strip())

    @property
    def is_empty(self) -> bool:
        return not self.results and not self.loading


class KPIClient:
    """Thin httpx wrapper around the generation API.

    Use as a context manager so the underlying connection pool is closed
    once the action that needed it is done.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        settings = get_settings()
        self._http = httpx.Client(
            base_url=base_url or settings.api_base_url,
            timeout=timeout if timeout is not None else settings.api_timeout,
            transport=transport,
        )

    def __enter__(self) -> "KPIClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def is_closed(self) -> bool:
        return self._http.is_closed

    def generate(self, domain: str, columns: str, tier: str) -> list[dict[str, Any]]:
        try:
            resp = self._http.post(
                GENERATE_PATH,
                json={"domain": domain, "columns": columns, "tier": tier},
            )
            resp.raise_for_status()
            return resp.json()["kpis"]
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
            logger.warning("KPI generation request failed: %s", exc)
            raise KPIClientError("Failed to generate KPIs") from exc

    def tiers(self) -> list[dict[str, Any]]:
        """Selector options from ``GET /api/tiers``."""
        try:
            resp = self._http.get(TIERS_PATH)
            resp.raise_for_status()
            return resp.json()["tiers"]
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
            logger.warning("Tier catalog request failed: %s", exc)
            raise KPIClientError("Failed to load tiers") from exc

    def close(self) -> None:
        self._http.close()


def tier_options(client: KPIClient) -> list[dict[str, Any]]:
    """Tier selector options from the API, or the local catalog when it is unreachable."""
    try:
        return client.tiers()
    except KPIClientError:
        return [
            {"value": t.value, "label": t.label, "summary": t.summary}
            for t in load_tier_catalog().choices()
        ]


def run_generation(state: ViewState, client: KPIClient) -> Notice:
    """The Generate action: guard, call, replace results.

    Blank inputs short-circuit before any request is made.  On failure the
    previous results are left untouched.  ``loading`` is always cleared on
    return.
    """
    if not state.can_submit():
        state.loading = False
        return MISSING_INFO

    state.loading = True
    try:
        kpis = client.generate(state.domain, state.columns, state.selected_tier)
    except KPIClientError:
        return GENERATION_FAILED
    finally:
        state.loading = False

    state.results = kpis
    return Notice(
        "success",
        "KPIs Generated Successfully",
        f"Generated {len(kpis)} relevant KPIs for your dataset.",
    )


def clipboard_script(text: str) -> str:
    """HTML snippet that writes *text* verbatim to the browser clipboard."""
    literal = json.dumps(text).replace("</", "<\\/")
    return f"<script>navigator.clipboard.writeText({literal});</script>"
