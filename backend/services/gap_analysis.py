"""Gap analysis engine: goal -> categories -> taxonomy skills -> gap report.

Flow:
    user_goal
      ├─ CategoryMatcher.match(goal)          → [CategoryMatch]
      ├─ TaxonomyAligner.align(category)      → TaxonomyAlignment (skip if < threshold)
      └─ SkillResolver.resolve(skill, skills) → ResolvedSkill | None, per taxonomy skill
                       ↓
         [GapAnalysisResult] in category-match order
"""

import logging
from collections.abc import Mapping, Sequence

from models.schemas.gap_analysis import (
    AssessedSkill,
    CategoryMatch,
    GapAnalysisResult,
    SkillBuckets,
    SkillGap,
)
from models.schemas.taxonomy import TaxonomyCategory
from services.category_matcher import CategoryMatcher
from services.skill_resolver import SkillResolver
from services.taxonomy import TaxonomyAligner

logger = logging.getLogger(__name__)

ALIGNMENT_THRESHOLD = 0.7
GAP_PRIORITY = "high"

BEGINNER = "beginner"
INTERMEDIATE = "intermediate"

RECOMMEND_BEGINNER = "Focus on intermediate concepts and practice"
RECOMMEND_INTERMEDIATE = "Consider advancing to expert level"
RECOMMEND_EXPERT = "Strong skill - can mentor others"


class GapAnalysisEngine:
    """Stateless orchestrator; safe to share across concurrent requests."""

    def __init__(
        self,
        matcher: CategoryMatcher,
        aligner: TaxonomyAligner,
        resolver: SkillResolver,
        alignment_threshold: float = ALIGNMENT_THRESHOLD,
    ) -> None:
        self.matcher = matcher
        self.aligner = aligner
        self.resolver = resolver
        self.alignment_threshold = alignment_threshold

    async def analyze(
        self,
        user_goal: str,
        user_skills: Mapping[str, str],
    ) -> list[GapAnalysisResult]:
        """Classify every skill of every aligned category as gap/needs-improvement/present.

        EmbeddingError and SearchError from the matcher propagate unchanged.
        """
        _, results = await self.analyze_with_matches(user_goal, user_skills)
        return results

    async def analyze_with_matches(
        self,
        user_goal: str,
        user_skills: Mapping[str, str],
    ) -> tuple[list[CategoryMatch], list[GapAnalysisResult]]:
        """Like analyze, also returning the category matches before alignment."""
        matches = await self.matcher.match(user_goal)
        return matches, self.reconcile(matches, user_skills)

    def reconcile(
        self,
        matches: Sequence[CategoryMatch],
        user_skills: Mapping[str, str],
    ) -> list[GapAnalysisResult]:
        """Align and resolve already-matched categories (no network I/O)."""
        results: list[GapAnalysisResult] = []

        for match in matches:
            alignment = self.aligner.align(match.category)
            if alignment.category is None or alignment.similarity < self.alignment_threshold:
                logger.info(
                    "Low similarity (%.2f) for category: %s",
                    alignment.similarity, match.category,
                )
                continue

            taxonomy_category = alignment.category
            logger.info(
                "Matched with taxonomy category: %s (similarity: %.2f)",
                taxonomy_category.name, alignment.similarity,
            )

            results.append(GapAnalysisResult(
                detected_category=match.category,
                matched_taxonomy_category=taxonomy_category.name,
                confidence=match.confidence,
                similarity=alignment.similarity,
                skills=self._classify_skills(taxonomy_category, user_skills),
            ))

        return results

    def _classify_skills(
        self,
        category: TaxonomyCategory,
        user_skills: Mapping[str, str],
    ) -> SkillBuckets:
        buckets = SkillBuckets()

        for skill in category.skills:
            found = self.resolver.resolve(skill.name, user_skills)

            if found is None:
                logger.debug("Skill not found: %s", skill.name)
                buckets.gaps.append(SkillGap(
                    name=skill.name,
                    description=skill.description,
                    priority=GAP_PRIORITY,
                ))
                continue

            logger.debug("Found skill: %s (level: %s)", found.name, found.level)
            level = found.level
            # Any level other than beginner/intermediate counts as expert
            if level == BEGINNER:
                bucket, recommendation = buckets.needs_improvement, RECOMMEND_BEGINNER
            elif level == INTERMEDIATE:
                bucket, recommendation = buckets.present, RECOMMEND_INTERMEDIATE
            else:
                bucket, recommendation = buckets.present, RECOMMEND_EXPERT

            bucket.append(AssessedSkill(
                name=skill.name,
                user_level=level,
                description=skill.description,
                recommendation=recommendation,
            ))

        return buckets


async def analyze_skill_gaps(
    engine: GapAnalysisEngine,
    user_goal: str,
    user_skill_map: Mapping[str, str],
) -> list[GapAnalysisResult]:
    """Entry point for the service layer. An empty list means no relevant categories."""
    return await engine.analyze(user_goal, user_skill_map)
