"""Skill gap report: structured analysis plus an optional LLM summary.

Pipeline:
1. Gap analysis engine (category matching, alignment, skill resolution)
2. Gemini narrative summary of the structured result (optional)
3. Combine into SkillGapReport
"""

import logging
from collections.abc import Awaitable, Callable, Mapping

from models.responses import SkillGapReport
from models.schemas.gap_analysis import GapAnalysisResult
from services import gemini_client, prompt_builder
from services.gap_analysis import GapAnalysisEngine

logger = logging.getLogger(__name__)

SUMMARY_FALLBACK = (
    "Unable to generate summary at this time. "
    "Please review the detailed analysis above."
)
NO_CATEGORIES_MESSAGE = "No relevant categories found for this goal"

TextGenerator = Callable[[str, str | None], Awaitable[str | None]]


async def generate_summary(
    user_goal: str,
    analysis: list[GapAnalysisResult],
    user_name: str | None = None,
    generate: TextGenerator | None = None,
) -> str:
    """Narrative summary of a gap analysis. Never raises; falls back to a fixed notice."""
    generate = generate or gemini_client.generate_text
    digest = prompt_builder.build_skill_gap_digest(user_goal, analysis, user_name)

    text = await generate(digest, prompt_builder.SKILL_GAP_SYSTEM_PROMPT)
    if not text:
        logger.warning("Skill gap summary unavailable, using fallback text")
        return SUMMARY_FALLBACK
    return text


async def build_skill_gap_report(
    engine: GapAnalysisEngine,
    user_goal: str,
    user_skills: Mapping[str, str],
    user_name: str | None = None,
    include_summary: bool = True,
    generate: TextGenerator | None = None,
) -> SkillGapReport:
    """Run gap analysis for one user. Embedding/search failures propagate."""
    logger.info("Analyzing skill gaps for goal: %s", user_goal)

    matches, analysis = await engine.analyze_with_matches(user_goal, user_skills)

    summary = None
    if include_summary and analysis:
        summary = await generate_summary(user_goal, analysis, user_name, generate)

    return SkillGapReport(
        success=True,
        user=user_name,
        user_goal=user_goal,
        analysis=analysis,
        summary=summary,
        categories_analyzed=len(matches),
        message="" if analysis else NO_CATEGORIES_MESSAGE,
    )
