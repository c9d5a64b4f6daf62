# src/car_efficiency/pipeline/pipeline.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, List, Mapping, Optional

from car_efficiency.config import ScoringSettings, load_settings

from car_efficiency.core.types import Insight, ScoreResult, SpecificationRecord
from car_efficiency.normalization.spec_normalizer import normalize_spec
from car_efficiency.scoring.composite import calculate_composite_score
from car_efficiency.utils.text_utils import guess_fuel_type

# Optional AI collaborator
from car_efficiency.enrichment.llm_insights import fetch_insights
from car_efficiency.enrichment.overlay import enhance_spec_with_insights, format_insights

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    spec: SpecificationRecord
    score: ScoreResult
    insights: List[Insight] = field(default_factory=list)
    enriched: bool = False

    def to_dict(self) -> dict:
        return {
            "spec": self.spec.to_dict(),
            "score": self.score.to_dict(),
            "insights": [{"title": i.title, "detail": i.detail} for i in self.insights],
            "enriched": self.enriched,
        }


# ----------------------------------------------------------
# Main Pipeline
# ----------------------------------------------------------
class SpecAnalysisPipeline:
    """
    One analysis session:
        - normalize the extracted record
        - infer fuel type from page text if the extractor found none
        - score locally (always available)
        - optional AI overlay, re-scoring only if it changed the record
    """

    def __init__(
        self,
        settings: Optional[ScoringSettings] = None,
        use_llm: bool = False,
    ) -> None:
        self.settings = settings or load_settings()
        self.use_llm = use_llm

    def score(self, spec: SpecificationRecord) -> ScoreResult:
        return calculate_composite_score(
            spec,
            self.settings.weights,
            self.settings.fuel_prices,
        )

    def analyze(
        self,
        raw_spec: Mapping[str, Any],
        raw_text: Optional[str] = None,
    ) -> AnalysisResult:
        spec = normalize_spec(raw_spec)

        if not spec.fuel_type and raw_text:
            spec = replace(spec, fuel_type=guess_fuel_type(raw_text))
            logger.info("pipeline: fuel type guessed from page text: %s", spec.fuel_type)

        # --------------------------------------------------
        # 1) Local score
        # --------------------------------------------------
        score = self.score(spec)
        logger.info("pipeline: local composite score %d", score.composite)

        result = AnalysisResult(spec=spec, score=score)

        if not self.use_llm:
            return result

        # --------------------------------------------------
        # 2) AI overlay (fills gaps only, never overwrites)
        # --------------------------------------------------
        try:
            insights = fetch_insights(spec, raw_text or spec.extras.get("_rawText"))
            enhanced = enhance_spec_with_insights(spec, insights)
        except Exception as exc:
            logger.warning("pipeline: AI enrichment failed: %s", exc)
            return result

        result.insights = format_insights(insights.insights)
        result.spec = enhanced

        # Metadata-only changes (segment, missing fields) don't affect the score
        if replace(enhanced, extras={}) != replace(spec, extras={}):
            result.score = self.score(enhanced)
            result.enriched = True
            logger.info(
                "pipeline: re-scored after AI overlay: %d -> %d",
                score.composite,
                result.score.composite,
            )

        return result


# Convenience API
def analyze_spec(
    raw_spec: Mapping[str, Any],
    raw_text: Optional[str] = None,
    *,
    settings: Optional[ScoringSettings] = None,
    use_llm: bool = False,
) -> AnalysisResult:
    return SpecAnalysisPipeline(settings=settings, use_llm=use_llm).analyze(raw_spec, raw_text)
