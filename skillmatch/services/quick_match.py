"""Unweighted name-only skill match for quick list filtering.

Every job tag counts the same: exact hits earn ``exact_weight``, substring
hits earn ``partial_weight``. No taxonomy, priority or level is involved.
"""

from collections.abc import Sequence

from skillmatch.models.schemas.quick_match import QuickMatchPair, QuickMatchResult
from skillmatch.services.category_aggregator import round_percentage


def quick_skill_match(
    candidate_skills: Sequence[str],
    job_tags: Sequence[str],
    exact_weight: float = 1.0,
    partial_weight: float = 0.6,
    case_insensitive: bool = True,
) -> QuickMatchResult:
    """Classify each job tag as exact, partial or missing against the candidate's skills.

    Names are compared trimmed (and lower-cased unless ``case_insensitive`` is
    off). A candidate skill that is empty after trimming never counts as a
    partial match; otherwise it would be a substring of every tag.
    """
    if not job_tags or not candidate_skills:
        return QuickMatchResult(missing_skills=list(job_tags), total_required=len(job_tags))

    def normalize(skill: str) -> str:
        return skill.strip().lower() if case_insensitive else skill.strip()

    candidates = [normalize(s) for s in candidate_skills]
    result = QuickMatchResult(total_required=len(job_tags))

    for tag in job_tags:
        needle = normalize(tag)
        if needle in candidates:
            idx = candidates.index(needle)
            result.exact_matches.append(QuickMatchPair(required=tag, candidate=candidate_skills[idx], type="exact"))
            continue

        idx = next((i for i, s in enumerate(candidates) if s and (s in needle or needle in s)), None)
        if idx is not None:
            result.partial_matches.append(QuickMatchPair(required=tag, candidate=candidate_skills[idx], type="partial"))
            continue

        result.missing_skills.append(tag)

    result.score = len(result.exact_matches) * exact_weight + len(result.partial_matches) * partial_weight
    max_score = len(job_tags) * exact_weight
    result.percentage = round_percentage(result.score / max_score * 100) if max_score > 0 else 0.0
    result.matched_count = len(result.exact_matches) + len(result.partial_matches)
    return result
