# src/car_efficiency/cli/run.py

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from car_efficiency.config import load_settings
from car_efficiency.pipeline.pipeline import AnalysisResult, SpecAnalysisPipeline
from car_efficiency.utils.text_utils import format_currency, format_percentage

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Score an extracted car specification for efficiency and value."
    )
    parser.add_argument(
        "input",
        help="Path to a JSON file holding the extracted specification record.",
    )
    parser.add_argument(
        "--settings",
        "-s",
        help="YAML file with weight / fuel price overrides.",
    )
    parser.add_argument(
        "--text",
        "-t",
        help="Raw page text file (fuel type guess and AI enrichment).",
    )
    parser.add_argument(
        "--llm",
        action="store_true",
        help="Enrich the record with AI insights (needs OPENAI_API_KEY).",
    )
    parser.add_argument(
        "--output",
        "-o",
        help="Where to save the result as JSON (default: stdout).",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print a short human-readable summary instead of JSON.",
    )
    return parser.parse_args(argv)


def format_summary(result: AnalysisResult) -> str:
    score = result.score
    lines = [
        f"{result.spec.name or 'Unnamed car'}: {score.composite}/100",
        f"  Efficiency: {format_percentage(score.breakdown.efficiency)}",
        f"  Safety:     {format_percentage(score.breakdown.safety)}",
        f"  Value:      {format_percentage(score.breakdown.value_for_money)}",
        f"  Perf/Eff:   {format_percentage(score.breakdown.performance_per_efficiency)}",
        f"  Cost/km:    {format_currency(score.metrics.cost_per_km)}",
    ]
    if score.metrics.power_to_weight is not None:
        lines.append(f"  Power/Weight: {score.metrics.power_to_weight} kW/t")
    for insight in result.insights:
        lines.append(f"  * {insight.title}: {insight.detail}")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    spec_path = Path(args.input)
    if not spec_path.exists():
        logger.error("Input spec not found: %s", spec_path)
        return 1

    try:
        raw_spec = json.loads(spec_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        logger.error("Input spec is not valid JSON (%s): %s", spec_path, e)
        return 1

    raw_text = None
    if args.text:
        text_path = Path(args.text)
        if not text_path.exists():
            logger.error("Page text file not found: %s", text_path)
            return 1
        raw_text = text_path.read_text(encoding="utf-8")

    settings = load_settings(args.settings)
    pipeline = SpecAnalysisPipeline(settings=settings, use_llm=args.llm)

    logger.info("Scoring spec from '%s'", spec_path)
    result = pipeline.analyze(raw_spec, raw_text)

    if args.summary:
        print(format_summary(result))
        return 0

    data = result.to_dict()

    if args.output:
        out_path = Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)

        with open(out_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False, default=str)

        logger.info("Saved score to %s", out_path)
    else:
        print(json.dumps(data, indent=2, ensure_ascii=False, default=str))

    return 0


if __name__ == "__main__":
    sys.exit(main())
