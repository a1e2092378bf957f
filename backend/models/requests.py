from pydantic import BaseModel, Field

from config import MatchProfile


class SkillGapRequest(BaseModel):
    user_goal: str = Field(..., min_length=1, description="Free-text learning goal")
    skills: dict[str, str] = Field(
        default_factory=dict,
        description="User-reported skill label -> proficiency level (beginner/intermediate/expert)",
    )
    user_name: str | None = Field(None, max_length=200)
    include_summary: bool = True
    profile: MatchProfile = MatchProfile.service
