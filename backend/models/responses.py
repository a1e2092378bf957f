from pydantic import BaseModel

from models.schemas.gap_analysis import GapAnalysisResult


class SkillGapReport(BaseModel):
    success: bool = True
    user: str | None = None
    user_goal: str = ""
    analysis: list[GapAnalysisResult] = []
    summary: str | None = None
    categories_analyzed: int = 0
    message: str = ""


class HealthResponse(BaseModel):
    status: str = "ok"
    gemini_configured: bool = False
    taxonomy_categories: int = 0
