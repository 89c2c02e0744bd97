"""Job-side expectation with priority and category semantics."""

from skillmatch.models.base import FrozenCamelModel

# Ordered least -> most urgent
PRIORITIES: tuple[str, ...] = ("nice-to-have", "low", "medium", "high", "critical")


class Requirement(FrozenCamelModel):
    """A normalized job requirement.

    ``required`` only changes the impact of a missing match, never the score.
    """
    name: str
    category: str = "technical"
    subcategory: str = "general"
    priority: str = "medium"
    required: bool = False
    weight: float = 1.0
