"""Candidate-side capability (skill, certification, experience tag)."""

from skillmatch.models.base import FrozenCamelModel

# Ordered weakest -> strongest
LEVELS: tuple[str, ...] = ("basic", "beginner", "intermediate", "advanced", "expert")


class Attribute(FrozenCamelModel):
    """A normalized candidate attribute.

    ``name`` is the identity used for matching (compared case-insensitively).
    ``source`` and ``added_at`` are provenance only and never affect scoring.
    """
    name: str
    category: str = "technical"
    subcategory: str = "programming"
    level: str = "intermediate"
    verified: bool = False
    weight: float = 1.0
    source: str | None = None
    added_at: str | None = None
