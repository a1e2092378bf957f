"""Pydantic contracts shared by the taxonomy, matcher and gap engine."""

from models.schemas.taxonomy import SkillEmbeddingRecord, TaxonomyCategory, TaxonomySkill
from models.schemas.gap_analysis import (
    AssessedSkill,
    CategoryMatch,
    GapAnalysisResult,
    ResolvedSkill,
    SkillBuckets,
    SkillGap,
    TaxonomyAlignment,
)
from models.schemas.skill_search import CategorySkillResult, SearchHit, SkillSearchResult

__all__ = [
    "AssessedSkill",
    "CategoryMatch",
    "CategorySkillResult",
    "GapAnalysisResult",
    "ResolvedSkill",
    "SearchHit",
    "SkillBuckets",
    "SkillEmbeddingRecord",
    "SkillGap",
    "SkillSearchResult",
    "TaxonomyAlignment",
    "TaxonomyCategory",
    "TaxonomySkill",
]
