"""Candidate ranking contracts: multi-candidate scoring against one job."""

import logging
from datetime import datetime
from typing import Any

from pydantic import ValidationError, ValidationInfo, field_validator

from skillmatch.models.base import CamelModel, FrozenCamelModel
from skillmatch.models.responses import MatchResult

logger = logging.getLogger(__name__)


class CandidateProfile(CamelModel):
    """A candidate as supplied by the caller.

    ``attributes`` is left raw (strings or records); the normalizer handles it.
    ``experience``, ``education`` and ``availability`` are free text scanned
    for keywords. Unusable values fall back to the field default.
    """
    candidate_id: str
    name: str = ""
    attributes: list = []
    experience: str = ""
    education: str = ""
    availability: str = ""
    applied_at: datetime | None = None

    @field_validator("name", "attributes", "experience", "education", "availability", "applied_at", mode="wrap")
    @classmethod
    def _default_when_invalid(cls, value: Any, handler, info: ValidationInfo) -> Any:
        default = cls.model_fields[info.field_name].get_default(call_default_factory=True)
        if value is None:
            return default
        try:
            return handler(value)
        except ValidationError:
            logger.warning("Invalid %s %r, using default", info.field_name, value)
            return default


class PriorityWeights(FrozenCamelModel):
    """Share of each factor in the priority score (0-100 factors, so weights summing to 1 keep it 0-100)."""
    skill_match: float = 0.4
    experience: float = 0.3
    education: float = 0.1
    availability: float = 0.1
    application_timing: float = 0.1


class FactorScore(CamelModel):
    score: float = 0.0  # 0-100
    weight: float = 0.0
    contribution: int = 0


class PriorityAnalysis(CamelModel):
    """Per-factor scores of one candidate and their weighted total."""
    skill_match: FactorScore = FactorScore()
    experience: FactorScore = FactorScore()
    education: FactorScore = FactorScore()
    availability: FactorScore = FactorScore()
    application_timing: FactorScore = FactorScore()
    total_score: int = 0


class RankedCandidate(CamelModel):
    candidate_id: str
    name: str = ""
    rank: int = 0
    priority_score: int = 0
    percentage: float = 0.0  # engine skill match
    score: float = 0.0
    experience_score: int = 0
    applied_at: datetime | None = None
    passes_minimum: bool = False
    exact_matches: int = 0
    partial_matches: int = 0
    missing_matches: int = 0
    analysis: MatchResult | None = None
    ranking_analysis: PriorityAnalysis | None = None


class SkillGap(CamelModel):
    skill: str
    coverage: int  # percent of candidates holding the skill
    candidates_with_skill: int
    total_candidates: int


class InsightMessage(CamelModel):
    type: str  # "warning" | "info"
    message: str


class ScoreDistribution(CamelModel):
    excellent: int = 0  # >= 90
    good: int = 0  # 80-90
    average: int = 0  # 60-80
    below: int = 0  # < 60


class RankingInsights(CamelModel):
    total_candidates: int = 0
    average_score: int = 0
    top_candidates: list[RankedCandidate] = []
    skill_gaps: list[SkillGap] = []
    recommendations: list[InsightMessage] = []
    score_distribution: ScoreDistribution = ScoreDistribution()
