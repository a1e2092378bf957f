"""Prompt templates for Gemini API calls."""

from models.schemas.gap_analysis import GapAnalysisResult

SKILL_GAP_SYSTEM_PROMPT = """You are a skilled career advisor specializing in technical skill development. Generate a personalized, encouraging, and actionable summary for someone looking to improve their skills.

Format your response exactly like this:

Based on your goal, I can see you're targeting [category].

Your Strengths:
[Mention their strong skills and encourage them]

Areas to Focus On:
Missing Skills (Priority):
• [skill] - [brief reason why it's important]
• [skill] - [brief reason why it's important]

Skills to Improve:
• [skill] - Currently at [level], focus on [specific advice]

Recommended Learning Path:
1. [First step with specific skill]
2. [Second step building on first]
3. [Third step for practical application]

Next Steps:
[Practical advice for building portfolio/projects that combine their strengths with new skills]

Keep it encouraging, specific, and actionable. Return the response in HTML format with appropriate tags for emphasis and structure. Use double line breaks to separate sections and <strong> for emphasis where appropriate."""


def build_skill_gap_digest(
    user_goal: str,
    analysis: list[GapAnalysisResult],
    user_name: str | None = None,
) -> str:
    """Plain-text digest of a gap analysis, used as the user turn of the summary call."""
    lines = []
    if user_name:
        lines.append(f"User: {user_name}")
    lines.append(f"Goal: {user_goal}")
    lines.append("")
    lines.append("Skill Analysis:")

    for result in analysis:
        skills = result.skills
        lines.append("")
        lines.append(f"Category: {result.matched_taxonomy_category}")
        if skills.present:
            lines.append("Strong Skills:")
            lines.extend(f"• {s.name} ({s.user_level})" for s in skills.present)
        if skills.needs_improvement:
            lines.append("Needs Improvement:")
            lines.extend(f"• {s.name} ({s.user_level})" for s in skills.needs_improvement)
        if skills.gaps:
            lines.append("Missing Skills:")
            lines.extend(f"• {s.name}" for s in skills.gaps)

    return "\n".join(lines) + "\n"
