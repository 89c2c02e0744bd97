"""Rule-table suggestions of skills that commonly accompany ones already held.

Each rule is explainable on its own: "has X, lacks Y -> suggest Y". The
table is data, evaluated in definition order, so the output order is stable.
"""

import logging
from collections.abc import Iterable

from skillmatch.config import settings
from skillmatch.models.schemas.attribute import Attribute

logger = logging.getLogger(__name__)

# lower-cased held skill -> companions to suggest, in suggestion order
COMPLEMENTARY_SKILLS: tuple[tuple[str, tuple[str, ...]], ...] = (
    # Programming languages
    ("javascript", ("TypeScript", "Node.js", "React")),
    ("python", ("Django", "Flask", "Pandas")),
    # Cloud platforms
    ("aws", ("Docker", "Kubernetes", "Terraform")),
)


def _held_names(attributes: Iterable[Attribute | str]) -> set[str]:
    names: set[str] = set()
    for attr in attributes:
        name = attr if isinstance(attr, str) else attr.name
        names.add(name.lower())
    return names


class ComplementarySkillSuggester:
    """Suggests companions for held skills, skipping anything already held."""

    def __init__(
        self,
        rules: tuple[tuple[str, tuple[str, ...]], ...] = COMPLEMENTARY_SKILLS,
        limit: int | None = None,
    ) -> None:
        self._rules = rules
        self._limit = limit

    @property
    def limit(self) -> int:
        return self._limit if self._limit is not None else settings.max_complementary_suggestions

    def suggest(self, attributes: Iterable[Attribute | str]) -> list[str]:
        held = _held_names(attributes)
        suggestions: list[str] = []
        seen: set[str] = set()

        for trigger, companions in self._rules:
            if trigger not in held:
                continue
            for companion in companions:
                key = companion.lower()
                if key in held or key in seen:
                    continue
                seen.add(key)
                suggestions.append(companion)

        logger.debug("Complementary suggestions: %s", suggestions)
        return suggestions[:self.limit]


DEFAULT_SUGGESTER = ComplementarySkillSuggester()


def suggest_complementary_skills(
    attributes: Iterable[Attribute | str],
    limit: int | None = None,
) -> list[str]:
    """Suggest up to ``limit`` (default from settings) complementary skills."""
    if limit is None:
        return DEFAULT_SUGGESTER.suggest(attributes)
    return ComplementarySkillSuggester(limit=limit).suggest(attributes)
