from __future__ import annotations

import json
import logging
import os
import re
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from openai import OpenAI

from car_efficiency.core.types import Insight, InsightsResponse, SpecificationRecord
from car_efficiency.enrichment.prompts import build_insights_prompt
from car_efficiency.utils.numeric_parser import parse_positive

logger = logging.getLogger(__name__)

# Load env vars (OPENAI_API_KEY, OPENAI_MODEL)
load_dotenv()

DEFAULT_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")


# -------------------------------------------------------------------
# Fallback payloads
# -------------------------------------------------------------------


def _fallback_response(missing: str, title: str, detail: str) -> InsightsResponse:
    return InsightsResponse(
        missing=[missing],
        insights=[Insight(title=title, detail=detail)],
    )


def _not_configured_response() -> InsightsResponse:
    return _fallback_response(
        "API key not configured",
        "API Configuration Required",
        "An OpenAI API key needs to be configured (OPENAI_API_KEY) for AI insights.",
    )


def _failed_response(error: str) -> InsightsResponse:
    return _fallback_response(
        "AI analysis failed",
        "AI Analysis Unavailable",
        f"Unable to fetch AI insights: {error}. Using local analysis only.",
    )


# -------------------------------------------------------------------
# JSON parsing helpers
# -------------------------------------------------------------------


def _strip_markdown_fences(s: str) -> str:
    """
    Remove ```json ... ``` or ``` ... ``` Markdown fences if present.
    """
    s = s.strip()

    if s.startswith("```"):
        s = s[3:].lstrip()

        # Drop optional "json" or "JSON"
        if s.lower().startswith("json"):
            s = s[4:].lstrip()

        fence_pos = s.rfind("```")
        if fence_pos != -1:
            s = s[:fence_pos]

    return s.strip()


def _to_insights(raw: Any) -> List[Insight]:
    if not isinstance(raw, list):
        return []
    out = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        out.append(Insight(title=item.get("title") or "", detail=item.get("detail") or ""))
    return out


def parse_insights_response(text: Optional[str]) -> Optional[InsightsResponse]:
    """
    Parse the model's reply into an InsightsResponse.
    Returns None if no JSON object with `normalized` and `insights` is found.
    """
    if not text:
        return None

    cleaned = _strip_markdown_fences(text)
    match = re.search(r"\{[\s\S]*\}", cleaned)
    if not match:
        logger.warning("LLM insights: no JSON object in response")
        return None

    try:
        obj = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        logger.warning("LLM insights: JSON parse failed: %s", e)
        return None

    if not isinstance(obj, dict) or "normalized" not in obj or "insights" not in obj:
        logger.warning("LLM insights: unexpected response structure")
        return None

    normalized = obj.get("normalized")
    if not isinstance(normalized, dict):
        normalized = {}
    real_world: Dict[str, Any] = normalized.get("realWorld")
    if not isinstance(real_world, dict):
        real_world = {}
    missing = normalized.get("missing") or []

    fuel_type = normalized.get("fuelType")

    return InsightsResponse(
        fuel_type=str(fuel_type).strip().lower() if fuel_type else None,
        kmpl=parse_positive(real_world.get("kmpl")),
        kmkg=parse_positive(real_world.get("kmkg")),
        km_per_kwh=parse_positive(real_world.get("kmPerKWh")),
        kw_per_tonne=parse_positive(normalized.get("kwPerTonne")),
        segment=normalized.get("segment") or None,
        missing=[str(m) for m in missing] if isinstance(missing, list) else [],
        insights=_to_insights(obj.get("insights")),
    )


# -------------------------------------------------------------------
# Main entry point
# -------------------------------------------------------------------


def fetch_insights(
    spec: SpecificationRecord,
    raw_text: Optional[str],
    *,
    model: Optional[str] = None,
) -> InsightsResponse:
    """
    Ask the LLM for a normalized overlay and a few insights.

    Never raises: without OPENAI_API_KEY, or on any API / parse failure,
    a fallback response carrying a single explanatory insight is returned.
    """
    if not os.environ.get("OPENAI_API_KEY"):
        logger.warning("LLM insights disabled (no OPENAI_API_KEY set).")
        return _not_configured_response()

    model = model or DEFAULT_MODEL
    prompt = build_insights_prompt(spec.to_dict(), raw_text or "")

    logger.info("LLM insights: querying model=%s (prompt length=%d)", model, len(prompt))

    try:
        client = OpenAI()
        completion = client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            temperature=0,
            max_tokens=1000,
        )
        content = completion.choices[0].message.content or ""
    except Exception as e:
        logger.error("LLM insights: API error: %s", e)
        return _failed_response(str(e))

    parsed = parse_insights_response(content)
    if parsed is None:
        return _failed_response("invalid response format")

    logger.info("LLM insights: received %d insights", len(parsed.insights))
    return parsed
