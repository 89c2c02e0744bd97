"""Weighted skill matching and ranking engine.

Usage:
    from skillmatch import enhanced_skill_match

    result = enhanced_skill_match(
        ["Python", {"name": "AWS", "level": "advanced", "verified": True}],
        [{"name": "Python", "priority": "critical", "required": True}, "Kubernetes"],
    )
    print(f"Match: {result.percentage}%")
"""

from skillmatch.models.requests import MatchOptions
from skillmatch.models.responses import MatchResult
from skillmatch.services.complementary import suggest_complementary_skills
from skillmatch.services.matching_engine import MatchingEngine, enhanced_skill_match
from skillmatch.services.quick_match import quick_skill_match
from skillmatch.services.ranking import rank_candidates, ranking_insights, update_candidate_scores
from skillmatch.services.skill_tags import create_skill_tags
from skillmatch.services.taxonomy import categorize_skill

__all__ = [
    "MatchOptions",
    "MatchResult",
    "MatchingEngine",
    "enhanced_skill_match",
    "suggest_complementary_skills",
    "quick_skill_match",
    "rank_candidates",
    "ranking_insights",
    "update_candidate_scores",
    "create_skill_tags",
    "categorize_skill",
]
__version__ = "1.0.0"
