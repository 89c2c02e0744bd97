"""Build display-ready skill tags (id, category, metadata, display hints)."""

import re
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from skillmatch.models.schemas.skill_tag import SkillTag, SkillTagDisplay, SkillTagMetadata
from skillmatch.services.normalizer import DEFAULT_PRIORITY, as_items, normalize_attribute
from skillmatch.services.taxonomy import DEFAULT_CATEGORY, TAXONOMY, category_color, category_icon

_WHITESPACE = re.compile(r"\s+")


def skill_tag_id(name: str) -> str:
    return "skill_" + _WHITESPACE.sub("_", name.lower())


def _raw_value(raw: Any, *keys: str) -> Any:
    if isinstance(raw, Mapping):
        for key in keys:
            if raw.get(key) is not None:
                return raw[key]
        return None
    for key in keys:
        value = getattr(raw, key, None)
        if value is not None:
            return value
    return None


def create_skill_tags(
    skills: Iterable[Any] | None,
    auto_categorize: bool = True,
    include_level: bool = True,
    include_priority: bool = True,
    now: datetime | None = None,
) -> list[SkillTag]:
    """Turn raw skills (names or records) into ``SkillTag`` records.

    ``now`` stamps entries that carry no ``added_at``; it defaults to the
    current UTC time. Entries without a usable name are skipped.
    """
    stamp = (now or datetime.now(timezone.utc)).isoformat()
    tags: list[SkillTag] = []

    for raw in as_items(skills):
        attr = normalize_attribute(raw)
        if attr is None:
            continue

        explicit_category = _raw_value(raw, "category")
        if isinstance(explicit_category, str) and explicit_category.strip():
            category = attr.category
        elif auto_categorize:
            category = TAXONOMY.categorize(attr.name)
        else:
            category = DEFAULT_CATEGORY

        explicit_subcategory = _raw_value(raw, "subcategory")
        subcategory = attr.subcategory if explicit_subcategory else "general"

        level = attr.level if include_level else None
        priority = None
        if include_priority:
            raw_priority = _raw_value(raw, "priority")
            priority = raw_priority if isinstance(raw_priority, str) and raw_priority else DEFAULT_PRIORITY

        metadata = SkillTagMetadata(
            level=level,
            priority=priority,
            verified=attr.verified,
            source=attr.source or "manual",
            added_at=attr.added_at or stamp,
            weight=attr.weight or 1.0,
        )
        tags.append(SkillTag(
            id=skill_tag_id(attr.name),
            name=attr.name,
            category=category,
            subcategory=subcategory,
            metadata=metadata,
            display=SkillTagDisplay(
                color=category_color(category),
                icon=category_icon(category),
                tooltip=f"{category} skill - {level} level" if level else f"{category} skill",
            ),
        ))
    return tags
