"""Static skill taxonomy and its vector-index records."""

from pydantic import BaseModel, ConfigDict


class TaxonomySkill(BaseModel):
    """A skill expected within a taxonomy category."""
    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""


class TaxonomyCategory(BaseModel):
    """A named category and its ordered skill list."""
    model_config = ConfigDict(frozen=True)

    name: str
    skills: tuple[TaxonomySkill, ...] = ()


class SkillEmbeddingRecord(BaseModel):
    """One (category, skill) embedding stored in the skill collection.

    ids are assigned 1..N in taxonomy order at seed time, so re-seeding
    overwrites the same points.
    """
    id: int
    vector: list[float]
    category: str
    skill: str
    description: str = ""
    content: str = ""

    def payload(self) -> dict:
        return {
            "category": self.category,
            "skill": self.skill,
            "description": self.description,
            "content": self.content,
        }
