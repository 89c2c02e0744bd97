"""Per-requirement match outcome and per-category rollup."""

from typing import Literal

from skillmatch.models.base import CamelModel

MatchType = Literal["exact", "partial", "missing"]


class MatchRecord(CamelModel):
    """Outcome of matching one requirement against the candidate attributes.

    ``weight`` is the requirement's base weight (the most it could contribute).
    Missing records carry ``score=None``, ``candidate=None`` and an ``impact``.
    """
    requirement: str
    match_type: MatchType
    category: str
    subcategory: str
    priority: str
    weight: float
    score: float | None = None
    candidate: str | None = None
    level: str | None = None
    verified: bool | None = None
    impact: Literal["critical", "moderate"] | None = None


class CategoryBreakdown(CamelModel):
    matched: int = 0
    total: int = 0
    percentage: int = 0  # 0-100
    score: float = 0.0
    max_score: float = 0.0
