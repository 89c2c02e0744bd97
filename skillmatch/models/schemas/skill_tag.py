"""Display-ready skill tag built from a raw skill entry."""

from skillmatch.models.base import CamelModel


class SkillTagMetadata(CamelModel):
    level: str | None = None
    priority: str | None = None
    verified: bool = False
    source: str = "manual"
    added_at: str = ""
    weight: float = 1.0


class SkillTagDisplay(CamelModel):
    color: str
    icon: str
    tooltip: str


class SkillTag(CamelModel):
    id: str
    name: str
    type: str = "skill"
    category: str
    subcategory: str = "general"
    metadata: SkillTagMetadata
    display: SkillTagDisplay
