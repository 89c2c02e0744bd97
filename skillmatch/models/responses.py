from skillmatch.models.base import CamelModel
from skillmatch.models.schemas.match_record import CategoryBreakdown, MatchRecord
from skillmatch.models.schemas.recommendation import Recommendation


class MatchesByType(CamelModel):
    exact: list[MatchRecord] = []
    partial: list[MatchRecord] = []
    missing: list[MatchRecord] = []


class MatchResult(CamelModel):
    """Engine output.

    ``score`` may exceed ``max_score`` (and ``percentage`` may exceed 100)
    when level and verification bonuses push an exact match above its base
    weight. The ratio is not clamped.
    """
    score: float = 0.0
    max_score: float = 0.0
    percentage: float = 0.0
    matches: MatchesByType = MatchesByType()
    category_breakdown: dict[str, CategoryBreakdown] = {}
    recommendations: list[Recommendation] = []
    passes_minimum: bool = False
