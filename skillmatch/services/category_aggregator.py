"""Roll per-requirement match records up into per-category statistics."""

import math
from collections.abc import Iterable

from skillmatch.models.schemas.match_record import CategoryBreakdown, MatchRecord
from skillmatch.services.taxonomy import TAXONOMY, SkillTaxonomy


def round_half_up(value: float) -> int:
    """Integer rounding with .5 going up, the way percentages are displayed."""
    return int(math.floor(value + 0.5))


def round_percentage(value: float) -> float:
    """Round to two decimals with halves going up, unlike ``round()``."""
    return math.floor(value * 100 + 0.5) / 100


def build_category_breakdown(
    matched: Iterable[MatchRecord],
    missing: Iterable[MatchRecord],
    taxonomy: SkillTaxonomy = TAXONOMY,
) -> dict[str, CategoryBreakdown]:
    """Group exact+partial and missing records by taxonomy category.

    Only categories defined in the taxonomy are reported, in taxonomy order;
    categories with no records are skipped.
    """
    buckets: dict[str, CategoryBreakdown] = {}

    for record in matched:
        bucket = buckets.setdefault(record.category, CategoryBreakdown())
        bucket.matched += 1
        bucket.total += 1
        bucket.score += record.score or 0.0
        bucket.max_score += record.weight

    for record in missing:
        bucket = buckets.setdefault(record.category, CategoryBreakdown())
        bucket.total += 1
        bucket.max_score += record.weight

    breakdown: dict[str, CategoryBreakdown] = {}
    for category in taxonomy.category_keys():
        bucket = buckets.get(category)
        if bucket is None or bucket.total == 0:
            continue
        bucket.percentage = round_half_up(bucket.matched / bucket.total * 100)
        breakdown[category] = bucket
    return breakdown
