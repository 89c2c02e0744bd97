"""Tests for the weighted matching engine."""

import pytest

from skillmatch import enhanced_skill_match, rank_candidates
from skillmatch.models.requests import MatchOptions
from skillmatch.models.responses import MatchResult
from skillmatch.models.schemas.attribute import LEVELS
from skillmatch.models.schemas.requirement import PRIORITIES
from skillmatch.services.matching_engine import (
    LEVEL_MULTIPLIERS,
    PARTIAL_MATCH_RATIO,
    PRIORITY_MULTIPLIERS,
    MatchingEngine,
    level_multiplier,
    priority_multiplier,
)


# ---------------------------------------------------------------------------
# Worked scenarios
# ---------------------------------------------------------------------------

@pytest.mark.scenario
class TestScenarios:
    def test_verified_expert_exact_match_exceeds_base_weight(self):
        result = enhanced_skill_match(
            [{"name": "python", "level": "expert", "verified": True}],
            [{"name": "Python", "priority": "critical", "weight": 1}],
        )
        assert len(result.matches.exact) == 1
        record = result.matches.exact[0]
        assert record.weight == pytest.approx(1.5)  # 1 * 1.0 * 1.0 * 1.5
        assert record.score == pytest.approx(1.65)  # 1.5 * 1.0 * 1.1
        assert result.max_score == pytest.approx(1.5)
        # The ratio is not clamped: a verified expert earns more than the base weight.
        assert result.score > result.max_score
        assert result.percentage == pytest.approx(110.0)
        assert result.passes_minimum is True

    def test_missing_high_priority_requirement(self):
        result = enhanced_skill_match([], [{"name": "Kubernetes", "priority": "high"}])
        assert len(result.matches.missing) == 1
        assert result.matches.missing[0].impact == "moderate"
        assert result.matches.missing[0].score is None
        assert [r.priority for r in result.recommendations] == [2]
        assert result.recommendations[0].items == ["Kubernetes"]
        assert result.percentage == 0.0

    def test_missing_required_high_priority_is_also_critical(self):
        result = enhanced_skill_match([], [{"name": "Kubernetes", "priority": "high", "required": True}])
        assert result.matches.missing[0].impact == "critical"
        assert [r.type for r in result.recommendations] == ["critical", "improvement"]

    def test_substring_is_a_partial_match(self):
        result = enhanced_skill_match([{"name": "Docker Compose"}], [{"name": "Docker"}])
        assert result.matches.exact == []
        assert len(result.matches.partial) == 1
        record = result.matches.partial[0]
        assert record.candidate == "Docker Compose"
        assert record.score == pytest.approx(PARTIAL_MATCH_RATIO * record.weight)
        assert result.percentage == pytest.approx(60.0)

    def test_complementary_suggestions_for_aws(self):
        result = enhanced_skill_match(["aws"], [])
        complementary = [r for r in result.recommendations if r.type == "complementary"]
        assert complementary[0].items == ["Docker", "Kubernetes", "Terraform"]


# ---------------------------------------------------------------------------
# Scoring rules
# ---------------------------------------------------------------------------

class TestScoring:
    def test_case_insensitive_exact_match(self):
        result = enhanced_skill_match([{"name": "Python"}], [{"name": "python"}])
        assert len(result.matches.exact) == 1
        assert result.matches.exact[0].candidate == "Python"
        assert result.matches.exact[0].requirement == "python"

    def test_level_multiplier_applies(self):
        result = enhanced_skill_match([{"name": "Go", "level": "beginner"}], ["Go"])
        assert result.score == pytest.approx(0.6)

    def test_bare_attribute_is_intermediate(self):
        result = enhanced_skill_match(["Go"], ["Go"])
        assert result.score == pytest.approx(0.8)
        assert result.percentage == pytest.approx(80.0)

    def test_taxonomy_weights_multiply(self):
        requirement = {"name": "Teamwork", "category": "soft", "subcategory": "teamwork", "priority": "high"}
        result = enhanced_skill_match([], [requirement])
        assert result.max_score == pytest.approx(1.0 * 0.8 * 0.9 * 1.2)

    def test_taxonomy_disabled_collapses_weights(self):
        requirement = {"name": "Teamwork", "category": "soft", "subcategory": "teamwork", "priority": "high"}
        result = enhanced_skill_match([], [requirement], {"useTaxonomy": False, "categoryWeights": {"soft": 3.0}})
        assert result.max_score == pytest.approx(1.2)

    def test_category_weight_override(self):
        requirement = {"name": "Teamwork", "category": "soft", "subcategory": "teamwork", "priority": "high"}
        options = MatchOptions(category_weight_overrides={"soft": 2.0})
        result = enhanced_skill_match([], [requirement], options)
        assert result.max_score == pytest.approx(2.0 * 0.9 * 1.2)

    def test_unknown_category_weighs_one(self):
        result = enhanced_skill_match([], [{"name": "Sailing", "category": "hobbies", "priority": "low"}])
        assert result.max_score == pytest.approx(0.8)

    def test_requirement_weight_scales(self):
        result = enhanced_skill_match(["Go"], [{"name": "Go", "weight": 2.5}])
        assert result.max_score == pytest.approx(2.5)
        assert result.score == pytest.approx(2.0)

    def test_unknown_priority_and_level_fall_back(self, caplog):
        result = enhanced_skill_match(
            [{"name": "Go", "level": "guru"}],
            [{"name": "Go", "priority": "urgent"}],
        )
        assert result.max_score == pytest.approx(1.0)
        assert result.score == pytest.approx(0.8)
        assert "Unknown priority" in caplog.text
        assert "Unknown level" in caplog.text

    def test_partial_match_by_category_and_subcategory(self):
        result = enhanced_skill_match(
            [{"name": "Public Speaking", "category": "soft", "subcategory": "communication"}],
            [{"name": "Communication", "category": "soft", "subcategory": "communication"}],
        )
        assert len(result.matches.partial) == 1
        assert result.matches.partial[0].candidate == "Public Speaking"

    def test_bare_names_do_not_partially_match_by_category(self):
        # attributes default to "programming", requirements to "general"
        result = enhanced_skill_match(["Rust"], ["Haskell"])
        assert len(result.matches.missing) == 1

    def test_partial_matches_can_be_disabled(self):
        result = enhanced_skill_match(
            ["Docker Compose"], ["Docker"], MatchOptions(include_partial_matches=False),
        )
        assert result.matches.partial == []
        assert len(result.matches.missing) == 1

    def test_exact_beats_earlier_partial_candidate(self):
        result = enhanced_skill_match(["Docker Compose", "Docker"], ["Docker"])
        assert result.matches.exact[0].candidate == "Docker"
        assert result.matches.partial == []

    def test_required_flag_does_not_change_score(self):
        optional = enhanced_skill_match(["Go"], [{"name": "Go", "required": False}])
        required = enhanced_skill_match(["Go"], [{"name": "Go", "required": True}])
        assert optional.score == required.score
        assert optional.max_score == required.max_score

    def test_percentage_rounded_to_two_decimals(self):
        result = enhanced_skill_match(["Go"], ["Go", "Rust", "Java"])
        assert result.percentage == pytest.approx(26.67)

    def test_minimum_score_threshold(self):
        result = enhanced_skill_match(["Go"], ["Go", "Rust"], {"minimumScore": 50})
        assert result.percentage == pytest.approx(40.0)
        assert result.passes_minimum is False
        result = enhanced_skill_match(["Go"], ["Go", "Rust"], {"minimum_score": 40})
        assert result.passes_minimum is True


class TestEdgeCases:
    def test_empty_requirements(self):
        result = enhanced_skill_match(["Go"], [])
        assert result.score == 0.0
        assert result.max_score == 0.0
        assert result.percentage == 0.0
        assert result.matches.exact == result.matches.partial == result.matches.missing == []
        assert result.category_breakdown == {}

    def test_everything_empty(self):
        result = enhanced_skill_match(None, None)
        assert isinstance(result, MatchResult)
        assert result.recommendations == []
        assert result.passes_minimum is True  # 0 >= default minimum of 0

    def test_zero_weight_requirements(self):
        result = enhanced_skill_match(["Go"], [{"name": "Go", "weight": 0}])
        assert result.max_score == 0.0
        assert result.percentage == 0.0

    def test_malformed_records_do_not_raise(self):
        result = enhanced_skill_match(
            [None, 3.5, {"level": "expert"}, {"name": "Go", "verified": "nope", "weight": "x"}],
            [{"name": "Go", "priority": 7, "required": "yes"}, {}, object()],
        )
        assert len(result.matches.exact) == 1
        assert result.max_score == pytest.approx(1.0)

    def test_inputs_are_not_mutated(self):
        attributes = [{"name": "Python", "level": "Expert"}]
        requirements = [{"name": "python", "priority": "High"}]
        enhanced_skill_match(attributes, requirements)
        assert attributes == [{"name": "Python", "level": "Expert"}]
        assert requirements == [{"name": "python", "priority": "High"}]


class TestDeterminism:
    def test_first_duplicate_candidate_wins_exact(self):
        result = enhanced_skill_match(
            [{"name": "Python", "level": "basic"}, {"name": "python", "level": "expert"}],
            ["PYTHON"],
        )
        record = result.matches.exact[0]
        assert record.candidate == "Python"
        assert record.level == "basic"

    def test_first_candidate_wins_partial(self):
        result = enhanced_skill_match(["Docker Swarm", "Docker Compose"], ["Docker"])
        assert result.matches.partial[0].candidate == "Docker Swarm"

    def test_requirement_order_is_preserved(self):
        result = enhanced_skill_match([], ["c", "a", "b"])
        assert [m.requirement for m in result.matches.missing] == ["c", "a", "b"]

    def test_repeated_calls_are_identical(self):
        attributes = ["Python", {"name": "AWS", "level": "advanced", "verified": True}, "Docker Compose"]
        requirements = [
            {"name": "python", "priority": "critical", "required": True},
            {"name": "Docker", "priority": "high"},
            {"name": "Kubernetes", "priority": "high"},
            {"name": "Leadership", "category": "soft", "subcategory": "leadership"},
        ]
        first = enhanced_skill_match(attributes, requirements).model_dump_json(by_alias=True)
        second = enhanced_skill_match(list(attributes), list(requirements)).model_dump_json(by_alias=True)
        assert first == second

    def test_engines_share_no_state(self, engine):
        other = MatchingEngine()
        assert engine.match(["Go"], ["Go"]) == other.match(["Go"], ["Go"])


class TestProperties:
    def test_priority_multipliers_are_monotonic(self):
        values = [PRIORITY_MULTIPLIERS[p] for p in PRIORITIES]
        assert values == sorted(values)
        assert len(set(values)) == len(values)
        assert priority_multiplier("critical") == 1.5
        assert priority_multiplier("nice-to-have") == 0.6

    def test_level_multipliers_are_monotonic(self):
        values = [LEVEL_MULTIPLIERS[level] for level in LEVELS]
        assert values == sorted(values)
        assert level_multiplier("expert") == 1.0

    @pytest.mark.parametrize("level", ["beginner", "intermediate", "advanced", "expert"])
    @pytest.mark.parametrize("verified", [False, True])
    def test_exact_never_below_partial_from_beginner_up(self, level, verified):
        exact = enhanced_skill_match([{"name": "Docker", "level": level, "verified": verified}], ["Docker"])
        partial = enhanced_skill_match(["Docker Compose"], ["Docker"])
        assert exact.score >= partial.score

    def test_basic_level_exact_scores_below_partial(self):
        # basic (0.5) sits under the fixed 0.6 partial ratio, verified or not
        partial = enhanced_skill_match(["Docker Compose"], ["Docker"])
        basic = enhanced_skill_match([{"name": "Docker", "level": "basic"}], ["Docker"])
        basic_verified = enhanced_skill_match([{"name": "Docker", "level": "basic", "verified": True}], ["Docker"])
        assert basic.score == pytest.approx(0.5)
        assert basic_verified.score == pytest.approx(0.55)
        assert partial.score == pytest.approx(0.6)
        assert basic.score < partial.score
        assert basic_verified.score < partial.score

    def test_percentage_within_bounds_without_bonuses(self):
        attributes = [
            {"name": "Python", "level": "expert"},
            {"name": "Docker Compose", "level": "advanced"},
            {"name": "Mentoring", "category": "soft", "subcategory": "leadership"},
        ]
        requirements = [
            {"name": "Python", "priority": "critical"},
            {"name": "Docker", "priority": "low"},
            {"name": "Leadership", "category": "soft", "subcategory": "leadership", "priority": "high"},
            {"name": "Terraform", "priority": "nice-to-have"},
        ]
        result = enhanced_skill_match(attributes, requirements)
        assert 0 <= result.percentage <= 100
        assert result.score <= result.max_score
        for record in result.matches.exact + result.matches.partial:
            assert record.score <= record.weight


class TestMalformedOptions:
    def test_null_minimum_score_uses_default(self):
        result = enhanced_skill_match(["Go"], ["Go"], {"minimumScore": None})
        assert result.percentage == pytest.approx(80.0)
        assert result.passes_minimum is True

    def test_non_numeric_minimum_score_uses_default(self, caplog):
        options = MatchOptions.model_validate({"minimumScore": "high"})
        assert options.minimum_score == 0.0
        assert "Invalid minimum_score" in caplog.text

    def test_non_bool_flag_uses_default(self):
        options = MatchOptions.model_validate({"useTaxonomy": "maybe", "includePartialMatches": None})
        assert options.use_taxonomy is True
        assert options.include_partial_matches is True

    def test_invalid_override_entries_are_dropped(self, caplog):
        result = enhanced_skill_match(
            ["Go"], ["Go"], {"categoryWeights": {"technical": None, "soft": "heavy", "domain": "2"}},
        )
        assert result.percentage == pytest.approx(80.0)
        options = MatchOptions.model_validate({"categoryWeights": {"technical": None, "soft": "heavy", "domain": "2"}})
        assert options.category_weight_overrides == {"domain": 2.0}
        assert "Dropping category weight override" in caplog.text

    def test_non_mapping_overrides_are_ignored(self):
        options = MatchOptions.model_validate({"categoryWeights": ["technical", 2]})
        assert options.category_weight_overrides == {}

    def test_ranking_survives_bad_options(self):
        [ranked] = rank_candidates([{"candidateId": "a", "attributes": ["Go"]}], ["Go"], {"minimumScore": None})
        assert ranked.percentage == pytest.approx(80.0)
