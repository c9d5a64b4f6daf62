import json
from typing import Any, Dict

from car_efficiency.utils.text_utils import truncate_text

MAX_PROMPT_TEXT_CHARS = 8000


def build_insights_prompt(spec: Dict[str, Any], raw_text: str) -> str:
    """
    Build a strict-JSON prompt asking the LLM to fill gaps in an extracted
    car specification and to add a few practical insights.

    The model receives:
    - the locally extracted spec (camelCase keys, nulls included)
    - the page text, truncated to keep cost bounded
    """
    truncated = truncate_text(raw_text or "", MAX_PROMPT_TEXT_CHARS)
    spec_block = json.dumps(spec, indent=2, default=str)

    prompt = f"""
You are assisting a car specification analyzer for India.

Return STRICT JSON only, no other text:
{{
  "normalized": {{
    "fuelType": string|null,
    "realWorld": {{
      "kmpl": number|null,
      "kmkg": number|null,
      "kmPerKWh": number|null
    }},
    "kwPerTonne": number|null,
    "segment": string|null,
    "missing": [string]
  }},
  "insights": [
    {{
      "title": string,
      "detail": string
    }}
  ]
}}

Guidelines:
- Don't hallucinate values. Leave fields null if uncertain.
- For insights, provide 2-5 practical points about efficiency/safety/value tradeoffs.
- Keep insights concise and India-specific.
- Missing array should list important specs that couldn't be found.

Current extracted spec:
{spec_block}

Raw page text (truncated):
{truncated}
"""

    return prompt.strip()
