"""Result of the unweighted name-only skill match."""

from typing import Literal

from pydantic import BaseModel


class QuickMatchPair(BaseModel):
    required: str
    candidate: str
    type: Literal["exact", "partial"]


class QuickMatchResult(BaseModel):
    score: float = 0.0
    percentage: float = 0.0  # 0-100
    exact_matches: list[QuickMatchPair] = []
    partial_matches: list[QuickMatchPair] = []
    missing_skills: list[str] = []
    total_required: int = 0
    matched_count: int = 0
