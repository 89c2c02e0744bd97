"""Turn match gaps into priority-ordered, human-actionable recommendations.

Buckets (1 = shown first):
    1. critical gap       - missing requirements that are critical or required
    2. high-priority gap  - missing requirements with priority "high"
    3. enhancement        - partial matches that could become exact
    4. complementary      - rule-based companions of skills already held
"""

import logging
from collections.abc import Sequence

from skillmatch.models.responses import MatchesByType
from skillmatch.models.schemas.attribute import Attribute
from skillmatch.models.schemas.recommendation import EnhancementItem, Recommendation
from skillmatch.services.complementary import DEFAULT_SUGGESTER, ComplementarySkillSuggester

logger = logging.getLogger(__name__)


def generate_recommendations(
    matches: MatchesByType,
    attributes: Sequence[Attribute],
    suggester: ComplementarySkillSuggester = DEFAULT_SUGGESTER,
) -> list[Recommendation]:
    recommendations: list[Recommendation] = []

    critical_missing = [
        m for m in matches.missing if m.priority == "critical" or m.impact == "critical"
    ]
    if critical_missing:
        recommendations.append(Recommendation(
            type="critical",
            title="Critical Skills Gap",
            description=(
                f"Missing {len(critical_missing)} critical skills that are essential for this role"
            ),
            items=[m.requirement for m in critical_missing],
            priority=1,
        ))

    high_missing = [m for m in matches.missing if m.priority == "high"]
    if high_missing:
        recommendations.append(Recommendation(
            type="improvement",
            title="High Priority Skills",
            description="Consider developing these high-priority skills to strengthen candidacy",
            items=[m.requirement for m in high_missing],
            priority=2,
        ))

    if matches.partial:
        recommendations.append(Recommendation(
            type="enhancement",
            title="Skill Enhancement Opportunities",
            description="These skills show potential but could be strengthened",
            items=[
                EnhancementItem(current=m.candidate or "", target=m.requirement, category=m.category)
                for m in matches.partial
            ],
            priority=3,
        ))

    complementary = suggester.suggest(attributes)
    if complementary:
        recommendations.append(Recommendation(
            type="complementary",
            title="Complementary Skills",
            description="Skills that complement your existing expertise",
            items=complementary,
            priority=4,
        ))

    logger.debug("Generated %d recommendations", len(recommendations))
    # sorted() is stable: insertion order survives within a priority
    return sorted(recommendations, key=lambda r: r.priority)
