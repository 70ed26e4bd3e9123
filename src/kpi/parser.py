"""
Turns free-form model output into a validated KPIResponse.

The model is asked for a single JSON object but may wrap it in prose or
markdown fences, so the payload is taken as the span between the first
``{`` and the last ``}`` before being parsed and validated.
"""
from __future__ import annotations

import json

from pydantic import ValidationError

from src.core.utils import extract_json_object
from src.kpi.schema import KPIResponse


class KPIParseError(ValueError):
    """Model output could not be turned into a valid KPIResponse."""


def parse_kpi_response(text: str) -> KPIResponse:
    try:
        payload = extract_json_object(text)
    except ValueError as exc:
        raise KPIParseError(str(exc)) from exc

    try:
        data = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise KPIParseError(f"Model returned invalid JSON: {exc}") from exc

    try:
        return KPIResponse.model_validate(data)
    except ValidationError as exc:
        raise KPIParseError(
            f"Model output does not match the KPI schema ({exc.error_count()} errors)"
        ) from exc
