"""Semantic skill search results."""

from pydantic import BaseModel


class SearchHit(BaseModel):
    """A raw nearest-neighbour hit from the vector index."""
    score: float
    payload: dict = {}


class SkillSearchResult(BaseModel):
    rank: int
    skill: str
    category: str
    description: str = ""
    similarity_score: float = 0.0
    content: str = ""


class CategorySkillResult(BaseModel):
    skill: str
    description: str = ""
    similarity_score: float = 0.0
