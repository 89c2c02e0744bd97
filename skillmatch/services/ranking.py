"""Rank many candidates against one job and summarize the pool.

Each candidate is scored independently: the matching engine supplies the
skill match, ``services.priority`` folds it together with experience,
education, availability and application recency into a 0-100 priority
score. The calls share nothing but the read-only taxonomy.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime, timezone
from typing import Any

from skillmatch.config import settings
from skillmatch.models.requests import MatchOptions
from skillmatch.models.schemas.ranking import (
    CandidateProfile,
    InsightMessage,
    PriorityWeights,
    RankedCandidate,
    RankingInsights,
    ScoreDistribution,
    SkillGap,
)
from skillmatch.services.category_aggregator import round_half_up
from skillmatch.services.matching_engine import DEFAULT_ENGINE, MatchingEngine
from skillmatch.services.normalizer import normalize_attributes, normalize_requirements
from skillmatch.services.priority import as_utc, calculate_priority_score

logger = logging.getLogger(__name__)

_NEVER_APPLIED = datetime.min.replace(tzinfo=timezone.utc)

SORT_KEYS = {
    "priority_score": lambda c: c.priority_score,
    "skill_match": lambda c: c.percentage,
    "experience": lambda c: c.experience_score,
    "application_date": lambda c: as_utc(c.applied_at) if c.applied_at else _NEVER_APPLIED,
    "percentage": lambda c: c.percentage,
    "score": lambda c: c.score,
    "exact_matches": lambda c: c.exact_matches,
}

AVERAGE_SCORE_WARNING = 60


def _as_profile(candidate: CandidateProfile | Mapping[str, Any]) -> CandidateProfile:
    if isinstance(candidate, CandidateProfile):
        return candidate
    return CandidateProfile.model_validate(dict(candidate))


def rank_candidates(
    candidates: Iterable[CandidateProfile | Mapping[str, Any]],
    requirements: Iterable[Any],
    options: MatchOptions | Mapping[str, Any] | None = None,
    sort_by: str = "priority_score",
    include_analysis: bool = True,
    engine: MatchingEngine = DEFAULT_ENGINE,
    job_category: str = "",
    weights: PriorityWeights | Mapping[str, Any] | None = None,
    now: datetime | None = None,
) -> list[RankedCandidate]:
    """Score every candidate and return them best-first with 1-based ranks.

    Args:
        candidates: ``CandidateProfile`` records or mappings of their fields.
        requirements: the job's requirements, as accepted by the engine.
        options: engine options for the skill match.
        sort_by: one of ``SORT_KEYS``; ties keep input order.
        include_analysis: attach the engine result and the factor breakdown.
        job_category: job category mentioned in experience earns a bonus.
        weights: factor weights of the priority score.
        now: reference time for application recency (default: current UTC time).

    Raises:
        ValueError: for an unknown ``sort_by``.
    """
    if sort_by not in SORT_KEYS:
        raise ValueError(f"Unknown sort key: {sort_by!r} (expected one of {sorted(SORT_KEYS)})")

    requirements = list(requirements)
    tags = [r.name for r in normalize_requirements(requirements)]
    now = now or datetime.now(timezone.utc)

    ranked: list[RankedCandidate] = []
    for candidate in candidates:
        profile = _as_profile(candidate)
        result = engine.match(profile.attributes, requirements, options)
        priority = calculate_priority_score(profile, result.percentage, tags, job_category, weights, now)
        ranked.append(RankedCandidate(
            candidate_id=profile.candidate_id,
            name=profile.name,
            priority_score=priority.total_score,
            percentage=result.percentage,
            score=result.score,
            experience_score=round_half_up(priority.experience.score),
            applied_at=profile.applied_at,
            passes_minimum=result.passes_minimum,
            exact_matches=len(result.matches.exact),
            partial_matches=len(result.matches.partial),
            missing_matches=len(result.matches.missing),
            analysis=result if include_analysis else None,
            ranking_analysis=priority if include_analysis else None,
        ))

    ranked.sort(key=SORT_KEYS[sort_by], reverse=True)
    for position, candidate in enumerate(ranked, start=1):
        candidate.rank = position

    logger.info("Ranked %d candidates by %s", len(ranked), sort_by)
    return ranked


def update_candidate_scores(
    candidates: Iterable[CandidateProfile | Mapping[str, Any]],
    requirements: Iterable[Any],
    **kwargs: Any,
) -> list[RankedCandidate]:
    """Bulk rescoring: ``rank_candidates`` without the per-candidate analysis."""
    return rank_candidates(candidates, requirements, include_analysis=False, **kwargs)


def _skill_gaps(
    profiles: Sequence[CandidateProfile],
    requirement_names: Sequence[str],
) -> list[SkillGap]:
    held = [
        [attr.name.lower() for attr in normalize_attributes(p.attributes)]
        for p in profiles
    ]
    gaps: list[SkillGap] = []
    for required in requirement_names:
        needle = required.lower()
        with_skill = sum(
            1 for names in held
            if any(needle in name or name in needle for name in names)
        )
        coverage = with_skill / len(profiles) * 100
        if coverage < settings.skill_gap_coverage_threshold:
            gaps.append(SkillGap(
                skill=required,
                coverage=round_half_up(coverage),
                candidates_with_skill=with_skill,
                total_candidates=len(profiles),
            ))
    return sorted(gaps, key=lambda g: g.coverage)


def ranking_insights(
    candidates: Iterable[CandidateProfile | Mapping[str, Any]],
    requirements: Iterable[Any],
    options: MatchOptions | Mapping[str, Any] | None = None,
    engine: MatchingEngine = DEFAULT_ENGINE,
    job_category: str = "",
    weights: PriorityWeights | Mapping[str, Any] | None = None,
    now: datetime | None = None,
) -> RankingInsights:
    """Pool-level summary over priority scores: averages, top candidates, low-coverage skills, advice."""
    profiles = [_as_profile(c) for c in candidates]
    if not profiles:
        return RankingInsights()

    requirements = list(requirements)
    ranked = rank_candidates(
        profiles, requirements, options, engine=engine,
        job_category=job_category, weights=weights, now=now,
    )
    scores = [c.priority_score for c in ranked]
    average = sum(scores) / len(scores)

    top = [c for c in ranked if c.priority_score >= settings.top_candidate_threshold]
    requirement_names = [r.name for r in normalize_requirements(requirements)]
    gaps = _skill_gaps(profiles, requirement_names)

    messages: list[InsightMessage] = []
    if not top:
        messages.append(InsightMessage(
            type="warning",
            message=(
                f"No candidates scored above {settings.top_candidate_threshold:g}%. "
                "Consider reviewing job requirements or expanding search criteria."
            ),
        ))
    if gaps:
        messages.append(InsightMessage(
            type="info",
            message=(
                f"{len(gaps)} required skills have low candidate coverage. "
                "Consider skills training or alternative requirements."
            ),
        ))
    if average < AVERAGE_SCORE_WARNING:
        messages.append(InsightMessage(
            type="warning",
            message=(
                f"Average candidate score is below {AVERAGE_SCORE_WARNING}%. "
                "Consider adjusting job requirements or improving job posting visibility."
            ),
        ))

    return RankingInsights(
        total_candidates=len(ranked),
        average_score=round_half_up(average),
        top_candidates=top[:5],
        skill_gaps=gaps,
        recommendations=messages,
        score_distribution=ScoreDistribution(
            excellent=sum(1 for s in scores if s >= 90),
            good=sum(1 for s in scores if 80 <= s < 90),
            average=sum(1 for s in scores if 60 <= s < 80),
            below=sum(1 for s in scores if s < 60),
        ),
    )
