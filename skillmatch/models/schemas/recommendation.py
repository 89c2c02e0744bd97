"""Actionable, priority-ordered suggestion derived from a match result."""

from typing import Literal

from skillmatch.models.base import CamelModel

RecommendationType = Literal["critical", "improvement", "enhancement", "complementary"]


class EnhancementItem(CamelModel):
    """A partial match that could be upgraded to an exact one."""
    current: str
    target: str
    category: str


class Recommendation(CamelModel):
    """``priority`` orders recommendations; 1 is the most urgent."""
    type: RecommendationType
    title: str
    description: str
    items: list[EnhancementItem | str] = []
    priority: int
