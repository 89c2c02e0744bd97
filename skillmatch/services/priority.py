"""Multi-factor priority score used to rank candidates for one job.

    priority = skill_match * 0.4 + experience * 0.3 + education * 0.1
             + availability * 0.1 + application_timing * 0.1

Every factor is on a 0-100 scale; the weights are injectable via
``PriorityWeights``. Education and availability are keyword tables scanned in
order (first hit wins); application timing rewards recent applications.
"""

import re
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from skillmatch.models.schemas.ranking import CandidateProfile, FactorScore, PriorityAnalysis, PriorityWeights
from skillmatch.services.category_aggregator import round_half_up

_YEARS = re.compile(r"(\d+)\s*(?:years?|yrs?)", re.IGNORECASE)

# (minimum years, points); fewer than one year earns the last entry
EXPERIENCE_YEAR_POINTS: tuple[tuple[int, int], ...] = ((5, 40), (3, 30), (1, 20), (0, 10))
EXPERIENCE_CATEGORY_BONUS = 30
EXPERIENCE_TAG_POINTS = 10
EXPERIENCE_TAG_CAP = 30

# Substring -> score, checked in order
EDUCATION_LEVELS: tuple[tuple[str, int], ...] = (
    ("phd", 100),
    ("doctorate", 100),
    ("master", 90),
    ("masters", 90),
    ("bachelor", 80),
    ("bachelors", 80),
    ("degree", 80),
    ("+2", 60),
    ("intermediate", 60),
    ("slc", 40),
    ("school", 40),
    ("high school", 40),
)
DEFAULT_EDUCATION_SCORE = 30

AVAILABILITY_LEVELS: tuple[tuple[str, int], ...] = (
    ("immediate", 100),
    ("within 1 week", 90),
    ("within 2 weeks", 80),
    ("within 1 month", 70),
    ("within 2 months", 60),
    ("within 3 months", 50),
)
DEFAULT_AVAILABILITY_SCORE = 40

# (maximum days since applying, score); older applications earn the fallback
APPLICATION_TIMING_LEVELS: tuple[tuple[int, int], ...] = ((1, 100), (3, 90), (7, 80), (14, 70), (30, 60))
STALE_APPLICATION_SCORE = 50


def as_utc(moment: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def experience_relevance(experience: str, tags: Iterable[str] = (), job_category: str = "") -> int:
    """Score free-text experience 0-100: years stated, job category and job tags mentioned."""
    if not experience:
        return 0
    text = experience.lower()

    match = _YEARS.search(text)
    years = int(match.group(1)) if match else 0
    score = next(points for minimum, points in EXPERIENCE_YEAR_POINTS if years >= minimum)

    if job_category and job_category.lower() in text:
        score += EXPERIENCE_CATEGORY_BONUS

    tag_hits = sum(1 for tag in tags if tag.lower() in text)
    score += min(EXPERIENCE_TAG_CAP, tag_hits * EXPERIENCE_TAG_POINTS)
    return min(100, score)


def _table_score(text: str, table: tuple[tuple[str, int], ...], default: int) -> int:
    text = text.lower()
    return next((score for keyword, score in table if keyword in text), default)


def education_score(education: str) -> int:
    return _table_score(education, EDUCATION_LEVELS, DEFAULT_EDUCATION_SCORE)


def availability_score(availability: str) -> int:
    return _table_score(availability, AVAILABILITY_LEVELS, DEFAULT_AVAILABILITY_SCORE)


def application_timing_score(applied_at: datetime | None, now: datetime | None = None) -> int:
    """Recency of the application in whole days; 0 when the date is unknown."""
    if applied_at is None:
        return 0
    now = as_utc(now or datetime.now(timezone.utc))
    days = (now - as_utc(applied_at)).days
    return next((score for max_days, score in APPLICATION_TIMING_LEVELS if days <= max_days), STALE_APPLICATION_SCORE)


def _coerce_weights(weights: PriorityWeights | Mapping[str, Any] | None) -> PriorityWeights:
    if weights is None:
        return PriorityWeights()
    if isinstance(weights, PriorityWeights):
        return weights
    return PriorityWeights.model_validate(dict(weights))


def _factor(score: float, weight: float) -> FactorScore:
    return FactorScore(score=score, weight=weight, contribution=round_half_up(score * weight))


def calculate_priority_score(
    profile: CandidateProfile,
    skill_match: float,
    tags: Iterable[str] = (),
    job_category: str = "",
    weights: PriorityWeights | Mapping[str, Any] | None = None,
    now: datetime | None = None,
) -> PriorityAnalysis:
    """Combine the candidate's skill match percentage with the profile factors.

    ``skill_match`` is capped at 100 so verification bonuses cannot outweigh
    the other factors.
    """
    weights = _coerce_weights(weights)
    tags = list(tags)
    analysis = PriorityAnalysis(
        skill_match=_factor(min(100.0, max(0.0, skill_match)), weights.skill_match),
        experience=_factor(experience_relevance(profile.experience, tags, job_category), weights.experience),
        education=_factor(education_score(profile.education), weights.education),
        availability=_factor(availability_score(profile.availability), weights.availability),
        application_timing=_factor(application_timing_score(profile.applied_at, now), weights.application_timing),
    )
    analysis.total_score = round_half_up(sum(
        factor.score * factor.weight
        for factor in (
            analysis.skill_match, analysis.experience, analysis.education,
            analysis.availability, analysis.application_timing,
        )
    ))
    return analysis
