"""Gap analysis contracts: category matches, skill buckets, per-category results."""

from pydantic import BaseModel

from models.schemas.taxonomy import TaxonomyCategory


class CategoryMatch(BaseModel):
    """A category label surfaced by nearest-neighbour search for a goal."""
    category: str
    confidence: float = 0.0  # max neighbour score for this category


class ResolvedSkill(BaseModel):
    """A user-reported skill matched to a taxonomy skill."""
    name: str
    level: str


class TaxonomyAlignment(BaseModel):
    """Best taxonomy category for a detected label."""
    category: TaxonomyCategory | None = None
    similarity: float = 0.0


class SkillGap(BaseModel):
    name: str
    description: str = ""
    priority: str = "high"


class AssessedSkill(BaseModel):
    name: str
    user_level: str
    description: str = ""
    recommendation: str = ""


class SkillBuckets(BaseModel):
    """Partition of a category's skills: every skill lands in exactly one list."""
    gaps: list[SkillGap] = []
    present: list[AssessedSkill] = []
    needs_improvement: list[AssessedSkill] = []


class GapAnalysisResult(BaseModel):
    """Gap report for one aligned taxonomy category."""
    detected_category: str
    matched_taxonomy_category: str
    confidence: float = 0.0
    similarity: float = 0.0
    skills: SkillBuckets = SkillBuckets()
