"""Entity contracts shared by the engine components."""

from skillmatch.models.schemas.attribute import LEVELS, Attribute
from skillmatch.models.schemas.match_record import CategoryBreakdown, MatchRecord
from skillmatch.models.schemas.quick_match import QuickMatchPair, QuickMatchResult
from skillmatch.models.schemas.recommendation import EnhancementItem, Recommendation
from skillmatch.models.schemas.requirement import PRIORITIES, Requirement
from skillmatch.models.schemas.skill_tag import SkillTag, SkillTagDisplay, SkillTagMetadata

__all__ = [
    "LEVELS",
    "PRIORITIES",
    "Attribute",
    "Requirement",
    "MatchRecord",
    "CategoryBreakdown",
    "EnhancementItem",
    "QuickMatchPair",
    "QuickMatchResult",
    "Recommendation",
    "SkillTag",
    "SkillTagDisplay",
    "SkillTagMetadata",
]
