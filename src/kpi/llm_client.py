"""
LLM client abstraction -- provider-agnostic wrapper.

Supported providers:
  mock      -- deterministic, schema-valid KPI payload (tests / offline dev)
  gemini    -- Google GenAI generate_content (gemini-2.0-flash default)
  openai    -- OpenAI ChatCompletion (gpt-4o-mini default)
  anthropic -- Anthropic Messages (claude-3-haiku default)

SDK clients are built once per process and reused across requests.
Configuration is read from Settings (env / .env).
"""
from __future__ import annotations

import json
import re
from functools import lru_cache
from typing import Any

from src.core.config import get_settings
from src.core.logging import get_logger

logger = get_logger(__name__)


_SYSTEM_PROMPT = "You are a KPI expert analyst. Reply with JSON only."


# ── Mock ─────────────────────────────────────────────────

_COLUMNS_RE = re.compile(r"^Available Columns:\s*(.*)$", re.MULTILINE)
_FOCUS_RE = re.compile(r"^2\. Focus on (Strategic|Tactical|Operational|Analytical) tier$", re.MULTILINE)

_MOCK_TIER_CYCLE = ["Strategic", "Tactical", "Operational", "Analytical"]


def _mock_kpi(index: int, column: str, tier: str) -> dict[str, str]:
    label = column.replace("_", " ").title()
    if index == 0:
        return {
            "name": "Total Records",
            "description": "Number of rows in the dataset.",
            "tier": tier,
            "sql": "SELECT COUNT(*) AS total_records FROM dataset;",
            "pandas": "total_records = len(df)",
            "dax": "Total Records = COUNTROWS('dataset')",
        }
    return {
        "name": f"Distinct {label}",
        "description": f"Number of distinct values of {column}.",
        "tier": tier,
        "sql": f"SELECT COUNT(DISTINCT {column}) AS distinct_{column} FROM dataset;",
        "pandas": f"distinct_{column} = df['{column}'].nunique()",
        "dax": f"Distinct {label} = DISTINCTCOUNT('dataset'[{column}])",
    }


def _call_mock(prompt: str) -> str:
    logger.info("LLM mock mode -- returning canned KPIs")
    m = _COLUMNS_RE.search(prompt)
    columns = [c.strip() for c in (m.group(1) if m else "").split(",") if c.strip()]
    columns = (columns or ["id"])[:7]
    focus = _FOCUS_RE.search(prompt)

    kpis = []
    for i, column in enumerate(["*", *columns][:8]):
        tier = focus.group(1) if focus else _MOCK_TIER_CYCLE[i % len(_MOCK_TIER_CYCLE)]
        kpis.append(_mock_kpi(i, column, tier))
    while len(kpis) < 4:
        kpis.append(_mock_kpi(len(kpis), columns[0], kpis[-1]["tier"]))

    payload = json.dumps({"kpis": kpis}, indent=2)
    return f"Here are the suggested KPIs:\n```json\n{payload}\n```"


# ── Google GenAI ─────────────────────────────────────────

@lru_cache(maxsize=None)
def _gemini_client(api_key: str) -> Any:
    try:
        from google import genai  # type: ignore[import-untyped]
    except ImportError as exc:
        raise RuntimeError(
            "The 'google-genai' package is not installed.  "
            "Run: pip install google-genai"
        ) from exc
    return genai.Client(api_key=api_key)


def _call_gemini(prompt: str) -> str:
    """Call Google GenAI generate_content."""
    settings = get_settings()
    if not settings.gemini_api_key:
        raise RuntimeError(
            "gemini_api_key is not set.  "
            "Set GEMINI_API_KEY in your .env file or environment."
        )

    client = _gemini_client(settings.gemini_api_key)
    config = {"response_mime_type": "application/json"} if settings.llm_json_mode else None
    response = client.models.generate_content(
        model=settings.gemini_model,
        contents=prompt,
        config=config,
    )
    text = response.text or ""
    logger.info("Gemini response (%d chars)", len(text))
    return text


# ── OpenAI ───────────────────────────────────────────────

@lru_cache(maxsize=None)
def _openai_client(api_key: str) -> Any:
    try:
        import openai  # type: ignore[import-untyped]
    except ImportError as exc:
        raise RuntimeError(
            "The 'openai' package is not installed.  "
            "Run: pip install openai"
        ) from exc
    return openai.OpenAI(api_key=api_key)


def _call_openai(prompt: str) -> str:
    """Call OpenAI ChatCompletion API."""
    settings = get_settings()
    if not settings.openai_api_key:
        raise RuntimeError(
            "openai_api_key is not set.  "
            "Set OPENAI_API_KEY in your .env file or environment."
        )

    client = _openai_client(settings.openai_api_key)
    kwargs: dict[str, Any] = {}
    if settings.llm_json_mode:
        kwargs["response_format"] = {"type": "json_object"}
    response = client.chat.completions.create(
        model=settings.openai_model,
        messages=[
            {"role": "system", "content": _SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ],
        temperature=0.2,
        max_tokens=settings.llm_max_tokens,
        **kwargs,
    )
    text = response.choices[0].message.content or ""
    logger.info("OpenAI response (%d chars)", len(text))
    return text


# ── Anthropic ────────────────────────────────────────────

@lru_cache(maxsize=None)
def _anthropic_client(api_key: str) -> Any:
    try:
        import anthropic  # type: ignore[import-untyped]
    except ImportError as exc:
        raise RuntimeError(
            "The 'anthropic' package is not installed.  "
            "Run: pip install anthropic"
        ) from exc
    return anthropic.Anthropic(api_key=api_key)


def _call_anthropic(prompt: str) -> str:
    """Call Anthropic Messages API."""
    settings = get_settings()
    if not settings.anthropic_api_key:
        raise RuntimeError(
            "anthropic_api_key is not set.  "
            "Set ANTHROPIC_API_KEY in your .env file or environment."
        )

    client = _anthropic_client(settings.anthropic_api_key)
    response = client.messages.create(
        model=settings.anthropic_model,
        max_tokens=settings.llm_max_tokens,
        system=_SYSTEM_PROMPT,
        messages=[{"role": "user", "content": prompt}],
    )
    text = response.content[0].text if response.content else ""
    logger.info("Anthropic response (%d chars)", len(text))
    return text


_PROVIDERS: dict[str, Any] = {
    "mock": _call_mock,
    "gemini": _call_gemini,
    "openai": _call_openai,
    "anthropic": _call_anthropic,
}


def call_llm(prompt: str, provider: str | None = None) -> str:
    """Send *prompt* to the configured (or overridden) LLM provider.

    Parameters
    ----------
    prompt : str
        The full prompt text.
    provider : str, optional
        Override the provider from settings.  One of: mock, gemini, openai, anthropic.
    """
    if provider is None:
        provider = get_settings().llm_provider.lower()

    fn = _PROVIDERS.get(provider)
    if fn is None:
        raise NotImplementedError(
            f"LLM provider '{provider}' is not supported.  "
            f"Choose from: {', '.join(_PROVIDERS)}"
        )

    logger.info("Calling LLM provider=%s  prompt_len=%d", provider, len(prompt))
    return fn(prompt)
