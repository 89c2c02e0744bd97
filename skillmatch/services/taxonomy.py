"""Skill taxonomy registry: categories, subcategory weights, auto-categorization.

All tables here are read-only process-wide data. Category and subcategory
specs are frozen dataclasses held in ``MappingProxyType`` views, so the
registry can be shared across concurrent matching calls without locking.
"""

import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "technical"


@dataclass(frozen=True)
class SubcategorySpec:
    label: str
    weight: float = 1.0


@dataclass(frozen=True)
class CategorySpec:
    """A taxonomy category with its base weight and weighted subcategories."""
    key: str
    label: str
    weight: float = 1.0
    subcategories: Mapping[str, SubcategorySpec] = field(default_factory=lambda: MappingProxyType({}))

    def subcategory_weight(self, subcategory: str) -> float:
        spec = self.subcategories.get(subcategory)
        return spec.weight if spec is not None else 1.0


def _category(key: str, label: str, weight: float, subcategories: dict[str, tuple[str, float]]) -> CategorySpec:
    return CategorySpec(
        key=key,
        label=label,
        weight=weight,
        subcategories=MappingProxyType({
            sub: SubcategorySpec(label=sub_label, weight=sub_weight)
            for sub, (sub_label, sub_weight) in subcategories.items()
        }),
    )


# ---------------------------------------------------------------------------
# Category catalog (definition order is the breakdown order)
# ---------------------------------------------------------------------------
SKILL_TAXONOMY: Mapping[str, CategorySpec] = MappingProxyType({
    "technical": _category("technical", "Technical Skills", 1.0, {
        "programming": ("Programming Languages", 1.0),
        "frameworks": ("Frameworks & Libraries", 0.9),
        "databases": ("Database Technologies", 0.8),
        "tools": ("Development Tools", 0.7),
        "cloud": ("Cloud Platforms", 0.9),
        "devops": ("DevOps & CI/CD", 0.8),
    }),
    "soft": _category("soft", "Soft Skills", 0.8, {
        "communication": ("Communication", 1.0),
        "leadership": ("Leadership", 0.9),
        "teamwork": ("Teamwork", 0.9),
        "problem_solving": ("Problem Solving", 0.8),
        "adaptability": ("Adaptability", 0.7),
    }),
    "domain": _category("domain", "Domain Knowledge", 0.9, {
        "industry": ("Industry Experience", 1.0),
        "business": ("Business Knowledge", 0.8),
        "compliance": ("Compliance & Regulations", 0.7),
        "processes": ("Process Knowledge", 0.6),
    }),
    "certifications": _category("certifications", "Certifications", 0.7, {
        "professional": ("Professional Certifications", 1.0),
        "technical": ("Technical Certifications", 0.9),
        "language": ("Language Certifications", 0.6),
    }),
})

# ---------------------------------------------------------------------------
# Suggested skill names per (category, subcategory)
# ---------------------------------------------------------------------------
SKILL_SUGGESTIONS: Mapping[str, Mapping[str, tuple[str, ...]]] = MappingProxyType({
    "technical": MappingProxyType({
        "programming": (
            "JavaScript", "Python", "Java", "C#", "PHP", "Ruby", "Go", "Rust",
            "TypeScript", "Swift", "Kotlin", "C++", "C", "Scala", "R",
        ),
        "frameworks": (
            "React", "Angular", "Vue.js", "Node.js", "Express", "Django", "Flask",
            "Spring Boot", "Laravel", "Ruby on Rails", "ASP.NET", "Next.js",
        ),
        "databases": (
            "PostgreSQL", "MySQL", "MongoDB", "Redis", "Elasticsearch", "Oracle",
            "SQL Server", "SQLite", "Cassandra", "DynamoDB",
        ),
        "cloud": (
            "AWS", "Azure", "Google Cloud", "Docker", "Kubernetes", "Terraform",
            "CloudFormation", "Serverless", "Lambda", "EC2", "S3",
        ),
    }),
    "soft": MappingProxyType({
        "communication": (
            "Public Speaking", "Written Communication", "Presentation Skills",
            "Active Listening", "Cross-cultural Communication", "Negotiation",
        ),
        "leadership": (
            "Team Management", "Project Leadership", "Mentoring", "Strategic Planning",
            "Decision Making", "Conflict Resolution",
        ),
    }),
    "domain": MappingProxyType({
        "industry": (
            "Healthcare", "Finance", "E-commerce", "Education", "Manufacturing",
            "Retail", "Government", "Non-profit", "Hospitality", "Construction",
        ),
    }),
})

# ---------------------------------------------------------------------------
# Auto-categorization rules: evaluated in order, first match wins.
# Word boundaries keep short keys ("go", "hr") from firing inside other words.
# ---------------------------------------------------------------------------
def _any_word(*words: str) -> re.Pattern:
    return re.compile(r"(?<![a-z0-9])(?:" + "|".join(re.escape(w) for w in words) + r")(?![a-z0-9])")


CATEGORIZATION_RULES: tuple[tuple[re.Pattern, str], ...] = (
    # technical
    (_any_word("javascript", "python", "java", "php", "ruby", "go", "rust", "typescript", "swift", "kotlin"), "technical"),
    (_any_word("react", "angular", "vue", "node", "express", "django", "flask", "spring", "laravel"), "technical"),
    (_any_word("mysql", "postgresql", "mongodb", "redis", "elasticsearch", "oracle"), "technical"),
    (_any_word("aws", "azure", "google cloud", "docker", "kubernetes", "terraform"), "technical"),
    (_any_word("git", "jenkins", "ci/cd", "devops", "linux", "unix"), "technical"),
    # soft
    (_any_word("communication", "leadership", "teamwork", "management", "presentation"), "soft"),
    (_any_word("problem solving", "critical thinking", "creativity", "adaptability"), "soft"),
    (_any_word("negotiation", "conflict resolution", "mentoring", "coaching"), "soft"),
    # domain
    (_any_word("healthcare", "finance", "banking", "insurance", "retail", "e-commerce"), "domain"),
    (_any_word("education", "government", "non-profit", "manufacturing", "construction"), "domain"),
    (_any_word("marketing", "sales", "accounting", "legal", "hr", "human resources"), "domain"),
    # certifications
    (re.compile(r"certification|certified"), "certifications"),
)

CATEGORY_COLORS: Mapping[str, str] = MappingProxyType({
    "technical": "bg-blue-100 text-blue-800 border-blue-200",
    "soft": "bg-green-100 text-green-800 border-green-200",
    "domain": "bg-purple-100 text-purple-800 border-purple-200",
    "certifications": "bg-yellow-100 text-yellow-800 border-yellow-200",
})

CATEGORY_ICONS: Mapping[str, str] = MappingProxyType({
    "technical": "Code",
    "soft": "Users",
    "domain": "Building",
    "certifications": "Award",
})


class SkillTaxonomy:
    """Read-only view over a category catalog and its categorization rules.

    The engine receives an instance by injection; ``TAXONOMY`` is the default
    built from the module tables.
    """

    def __init__(
        self,
        categories: Mapping[str, CategorySpec] = SKILL_TAXONOMY,
        rules: tuple[tuple[re.Pattern, str], ...] = CATEGORIZATION_RULES,
        default_category: str = DEFAULT_CATEGORY,
    ) -> None:
        self._categories = categories
        self._rules = rules
        self._default_category = default_category

    def __contains__(self, key: str) -> bool:
        return key in self._categories

    def category_keys(self) -> list[str]:
        return list(self._categories)

    def get(self, key: str) -> CategorySpec | None:
        return self._categories.get(key)

    def category_weight(self, key: str, overrides: Mapping[str, float] | None = None) -> float:
        """Base weight for a category; an override wins over the catalog value."""
        if overrides and key in overrides:
            return float(overrides[key])
        spec = self._categories.get(key)
        if spec is None:
            logger.warning("Unknown category %r, using weight 1.0", key)
            return 1.0
        return spec.weight

    def subcategory_weight(self, key: str, subcategory: str) -> float:
        spec = self._categories.get(key)
        if spec is None:
            return 1.0
        return spec.subcategory_weight(subcategory)

    def categorize(self, skill_name: str) -> str:
        """Infer a category from a skill name; falls back to the default category."""
        skill = skill_name.lower()
        for pattern, category in self._rules:
            if pattern.search(skill):
                return category
        return self._default_category


TAXONOMY = SkillTaxonomy()


def category_keys() -> list[str]:
    return TAXONOMY.category_keys()


def category_label(key: str) -> str:
    spec = TAXONOMY.get(key)
    return spec.label if spec is not None else key


def categorize_skill(skill_name: str) -> str:
    return TAXONOMY.categorize(skill_name)


def category_color(key: str) -> str:
    return CATEGORY_COLORS.get(key, CATEGORY_COLORS[DEFAULT_CATEGORY])


def category_icon(key: str) -> str:
    return CATEGORY_ICONS.get(key, CATEGORY_ICONS[DEFAULT_CATEGORY])


def suggest_skill_names(category: str, subcategory: str | None = None) -> list[str]:
    """Suggested skill names for a subcategory, or the whole category in definition order."""
    groups = SKILL_SUGGESTIONS.get(category)
    if groups is None:
        return []
    if subcategory is not None:
        return list(groups.get(subcategory, ()))
    return [name for names in groups.values() for name in names]
