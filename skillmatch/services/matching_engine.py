"""Weighted multi-factor matching of candidate attributes against job requirements.

For every requirement (in input order):

    base_weight = weight * category_weight * subcategory_weight * priority_multiplier

    exact    name equal (case-insensitive)          base * level_mult * verification_bonus
    partial  name substring either way, or same     base * 0.6
             (category, subcategory)
    missing  nothing found                          no score; impact from ``required``

    percentage = total / max_possible * 100   (0 when max_possible is 0)

The first qualifying attribute in input order wins. Level and verification
bonuses can push ``score`` past ``max_score``; the ratio is not clamped.
The engine is a pure function of its inputs: no I/O, no clock, no shared
mutable state.
"""

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from skillmatch.models.requests import MatchOptions
from skillmatch.models.responses import MatchesByType, MatchResult
from skillmatch.models.schemas.attribute import Attribute
from skillmatch.models.schemas.match_record import MatchRecord
from skillmatch.models.schemas.requirement import Requirement
from skillmatch.services.category_aggregator import build_category_breakdown, round_percentage
from skillmatch.services.complementary import DEFAULT_SUGGESTER, ComplementarySkillSuggester
from skillmatch.services.normalizer import normalize_attributes, normalize_requirements
from skillmatch.services.recommendations import generate_recommendations
from skillmatch.services.taxonomy import TAXONOMY, SkillTaxonomy

logger = logging.getLogger(__name__)

PRIORITY_MULTIPLIERS: Mapping[str, float] = MappingProxyType({
    "critical": 1.5,
    "high": 1.2,
    "medium": 1.0,
    "low": 0.8,
    "nice-to-have": 0.6,
})
DEFAULT_PRIORITY_MULTIPLIER = 1.0

LEVEL_MULTIPLIERS: Mapping[str, float] = MappingProxyType({
    "expert": 1.0,
    "advanced": 0.9,
    "intermediate": 0.8,
    "beginner": 0.6,
    "basic": 0.5,
})
DEFAULT_LEVEL_MULTIPLIER = 0.8

VERIFICATION_BONUS = 1.1
PARTIAL_MATCH_RATIO = 0.6


def priority_multiplier(priority: str) -> float:
    multiplier = PRIORITY_MULTIPLIERS.get(priority)
    if multiplier is None:
        logger.warning("Unknown priority %r, using multiplier %.1f", priority, DEFAULT_PRIORITY_MULTIPLIER)
        return DEFAULT_PRIORITY_MULTIPLIER
    return multiplier


def level_multiplier(level: str) -> float:
    multiplier = LEVEL_MULTIPLIERS.get(level)
    if multiplier is None:
        logger.warning("Unknown level %r, using multiplier %.1f", level, DEFAULT_LEVEL_MULTIPLIER)
        return DEFAULT_LEVEL_MULTIPLIER
    return multiplier


def _is_partial_match(attr: Attribute, requirement: Requirement, req_name: str) -> bool:
    attr_name = attr.name.lower()
    return (
        attr_name in req_name
        or req_name in attr_name
        or (attr.category == requirement.category and attr.subcategory == requirement.subcategory)
    )


class MatchingEngine:
    """Scores candidate attributes against weighted requirements.

    The taxonomy and complementary-skill suggester are injected read-only
    collaborators; one engine instance can serve concurrent callers.
    """

    def __init__(
        self,
        taxonomy: SkillTaxonomy = TAXONOMY,
        suggester: ComplementarySkillSuggester = DEFAULT_SUGGESTER,
    ) -> None:
        self.taxonomy = taxonomy
        self.suggester = suggester

    def base_weight(self, requirement: Requirement, options: MatchOptions) -> float:
        if options.use_taxonomy:
            category_weight = self.taxonomy.category_weight(
                requirement.category, options.category_weight_overrides,
            )
            subcategory_weight = self.taxonomy.subcategory_weight(
                requirement.category, requirement.subcategory,
            )
        else:
            category_weight = subcategory_weight = 1.0
        return (
            requirement.weight
            * category_weight
            * subcategory_weight
            * priority_multiplier(requirement.priority)
        )

    def match(
        self,
        attributes: Iterable[Any] | None,
        requirements: Iterable[Any] | None,
        options: MatchOptions | Mapping[str, Any] | None = None,
    ) -> MatchResult:
        options = _coerce_options(options)
        candidate_attrs = normalize_attributes(attributes, options.auto_categorize, self.taxonomy)
        job_reqs = normalize_requirements(requirements, options.auto_categorize, self.taxonomy)

        # First occurrence wins for duplicate names
        exact_index: dict[str, Attribute] = {}
        for attr in candidate_attrs:
            exact_index.setdefault(attr.name.lower(), attr)

        matches = MatchesByType()
        total_score = 0.0
        max_possible = 0.0

        for requirement in job_reqs:
            weight = self.base_weight(requirement, options)
            max_possible += weight
            req_name = requirement.name.lower()

            exact = exact_index.get(req_name)
            if exact is not None:
                score = weight * level_multiplier(exact.level) * (VERIFICATION_BONUS if exact.verified else 1.0)
                matches.exact.append(_record(requirement, "exact", weight, exact, score))
                total_score += score
                logger.debug("exact  %-24s <- %-24s %.4f/%.4f", requirement.name, exact.name, score, weight)
                continue

            partial = None
            if options.include_partial_matches:
                partial = next(
                    (a for a in candidate_attrs if _is_partial_match(a, requirement, req_name)),
                    None,
                )
            if partial is not None:
                score = weight * PARTIAL_MATCH_RATIO
                matches.partial.append(_record(requirement, "partial", weight, partial, score))
                total_score += score
                logger.debug("partial %-23s <- %-24s %.4f/%.4f", requirement.name, partial.name, score, weight)
                continue

            matches.missing.append(MatchRecord(
                requirement=requirement.name,
                match_type="missing",
                category=requirement.category,
                subcategory=requirement.subcategory,
                priority=requirement.priority,
                weight=weight,
                impact="critical" if requirement.required else "moderate",
            ))
            logger.debug("missing %-23s (required=%s)", requirement.name, requirement.required)

        final_score = (total_score / max_possible) * 100 if max_possible > 0 else 0.0

        result = MatchResult(
            score=total_score,
            max_score=max_possible,
            percentage=round_percentage(final_score),
            matches=matches,
            category_breakdown=build_category_breakdown(
                matches.exact + matches.partial, matches.missing, self.taxonomy,
            ),
            recommendations=generate_recommendations(matches, candidate_attrs, self.suggester),
            passes_minimum=final_score >= options.minimum_score,
        )
        logger.info(
            "Matched %d requirements against %d attributes: %d exact, %d partial, %d missing (%.2f%%)",
            len(job_reqs), len(candidate_attrs),
            len(matches.exact), len(matches.partial), len(matches.missing),
            result.percentage,
        )
        return result


def _record(
    requirement: Requirement,
    match_type: str,
    weight: float,
    attr: Attribute,
    score: float,
) -> MatchRecord:
    return MatchRecord(
        requirement=requirement.name,
        match_type=match_type,
        category=requirement.category,
        subcategory=requirement.subcategory,
        priority=requirement.priority,
        weight=weight,
        score=score,
        candidate=attr.name,
        level=attr.level,
        verified=attr.verified,
    )


def _coerce_options(options: MatchOptions | Mapping[str, Any] | None) -> MatchOptions:
    if options is None:
        return MatchOptions()
    if isinstance(options, MatchOptions):
        return options
    return MatchOptions.model_validate(dict(options))


DEFAULT_ENGINE = MatchingEngine()


def enhanced_skill_match(
    attributes: Iterable[Any] | None,
    requirements: Iterable[Any] | None,
    options: MatchOptions | Mapping[str, Any] | None = None,
) -> MatchResult:
    """Score ``attributes`` against ``requirements`` with the default taxonomy.

    Args:
        attributes: candidate skills as bare names or records.
        requirements: job requirements as bare names or records.
        options: ``MatchOptions`` or a mapping of its fields (camelCase accepted).

    Returns:
        MatchResult with score, max_score, percentage, categorized matches,
        category breakdown, recommendations and the minimum-score verdict.
    """
    return DEFAULT_ENGINE.match(attributes, requirements, options)
