"""Canonicalize raw attribute / requirement input into engine records.

Upstream forms send bare names, dicts with camelCase or snake_case keys, or
already-built records. Everything is resolved here once into ``Attribute`` /
``Requirement``; nothing downstream looks at the raw shape again. The
normalizer never raises: unknown values fall back to defaults and entries
without a usable name are dropped.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from skillmatch.config import settings
from skillmatch.models.schemas.attribute import Attribute
from skillmatch.models.schemas.requirement import Requirement
from skillmatch.services.taxonomy import DEFAULT_CATEGORY, TAXONOMY, SkillTaxonomy

logger = logging.getLogger(__name__)

DEFAULT_LEVEL = "intermediate"
DEFAULT_PRIORITY = "medium"
DEFAULT_WEIGHT = 1.0

_TRUE_STRINGS = frozenset({"true", "yes", "y", "1", "on"})
_FALSE_STRINGS = frozenset({"false", "no", "n", "0", "off", ""})

# Field lookups accept either naming convention
_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "added_at": ("added_at", "addedAt"),
}


def _get_field(raw: Any, name: str) -> Any:
    keys = _FIELD_ALIASES.get(name, (name,))
    if isinstance(raw, Mapping):
        for key in keys:
            if key in raw:
                return raw[key]
        return None
    for key in keys:
        value = getattr(raw, key, None)
        if value is not None:
            return value
    return None


def _clean_name(value: Any) -> str | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str):
        return None
    name = " ".join(value.split())
    return name or None


def _clean_key(value: Any, default: str) -> str:
    """Lower-cased, trimmed lookup key; anything non-string becomes the default."""
    if not isinstance(value, str):
        return default
    key = value.strip().lower()
    return key or default


def _clean_priority(value: Any) -> str:
    key = _clean_key(value, DEFAULT_PRIORITY)
    # "nice to have" / "nice_to_have" -> "nice-to-have"
    return "-".join(key.replace("_", " ").split())


def _clean_subcategory(value: Any, default: str) -> str:
    key = _clean_key(value, default)
    return "_".join(key.split())


def _clean_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    return False


def _clean_weight(value: Any) -> float:
    if isinstance(value, bool) or value is None:
        return DEFAULT_WEIGHT
    try:
        weight = float(value)
    except (TypeError, ValueError):
        return DEFAULT_WEIGHT
    if not math.isfinite(weight):
        return DEFAULT_WEIGHT
    return weight


def _clean_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def _resolve_category(raw_category: Any, name: str, auto_categorize: bool, taxonomy: SkillTaxonomy) -> str:
    if isinstance(raw_category, str) and raw_category.strip():
        return raw_category.strip().lower()
    if auto_categorize:
        return taxonomy.categorize(name)
    return DEFAULT_CATEGORY


def _resolve_name(raw: Any) -> str | None:
    if isinstance(raw, (str, int, float)) and not isinstance(raw, bool):
        return _clean_name(raw)
    return _clean_name(_get_field(raw, "name"))


def as_items(raw_items: Any) -> list[Any]:
    """One string or mapping is a single entry; None or a non-collection is empty."""
    if raw_items is None:
        return []
    if isinstance(raw_items, (str, Mapping)):
        return [raw_items]
    if isinstance(raw_items, Iterable) and not isinstance(raw_items, (bytes, bytearray)):
        return list(raw_items)
    logger.warning("Expected a collection of entries, got %s; treating as empty", type(raw_items).__name__)
    return []


def normalize_attribute(
    raw: Any,
    auto_categorize: bool = False,
    taxonomy: SkillTaxonomy = TAXONOMY,
) -> Attribute | None:
    """Build an ``Attribute`` from a bare name or a record; ``None`` if it has no name."""
    name = _resolve_name(raw)
    if name is None:
        logger.warning("Dropping attribute without a usable name: %r", raw)
        return None
    if isinstance(raw, (str, int, float)):
        return Attribute(
            name=name,
            category=taxonomy.categorize(name) if auto_categorize else DEFAULT_CATEGORY,
            subcategory=settings.attribute_default_subcategory,
        )

    return Attribute(
        name=name,
        category=_resolve_category(_get_field(raw, "category"), name, auto_categorize, taxonomy),
        subcategory=_clean_subcategory(_get_field(raw, "subcategory"), settings.attribute_default_subcategory),
        level=_clean_key(_get_field(raw, "level"), DEFAULT_LEVEL),
        verified=_clean_bool(_get_field(raw, "verified")),
        weight=_clean_weight(_get_field(raw, "weight")),
        source=_clean_text(_get_field(raw, "source")),
        added_at=_clean_text(_get_field(raw, "added_at")),
    )


def normalize_requirement(
    raw: Any,
    auto_categorize: bool = False,
    taxonomy: SkillTaxonomy = TAXONOMY,
) -> Requirement | None:
    """Build a ``Requirement`` from a bare name or a record; ``None`` if it has no name."""
    name = _resolve_name(raw)
    if name is None:
        logger.warning("Dropping requirement without a usable name: %r", raw)
        return None
    if isinstance(raw, (str, int, float)):
        return Requirement(
            name=name,
            category=taxonomy.categorize(name) if auto_categorize else DEFAULT_CATEGORY,
            subcategory=settings.requirement_default_subcategory,
        )

    return Requirement(
        name=name,
        category=_resolve_category(_get_field(raw, "category"), name, auto_categorize, taxonomy),
        subcategory=_clean_subcategory(_get_field(raw, "subcategory"), settings.requirement_default_subcategory),
        priority=_clean_priority(_get_field(raw, "priority")),
        required=_clean_bool(_get_field(raw, "required")),
        weight=_clean_weight(_get_field(raw, "weight")),
    )


def normalize_attributes(
    raw_items: Iterable[Any] | None,
    auto_categorize: bool = False,
    taxonomy: SkillTaxonomy = TAXONOMY,
) -> list[Attribute]:
    """Normalize a collection, preserving input order."""
    normalized = (normalize_attribute(item, auto_categorize, taxonomy) for item in as_items(raw_items))
    return [attr for attr in normalized if attr is not None]


def normalize_requirements(
    raw_items: Iterable[Any] | None,
    auto_categorize: bool = False,
    taxonomy: SkillTaxonomy = TAXONOMY,
) -> list[Requirement]:
    """Normalize a collection, preserving input order."""
    normalized = (normalize_requirement(item, auto_categorize, taxonomy) for item in as_items(raw_items))
    return [req for req in normalized if req is not None]
